"""Text helpers shared by the codec, the store and the CLI."""

import re

TAG_PATTERN = re.compile(r"(?:^|(?<=\s))#([A-Za-z0-9/_-]+)")
DUE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def normalize_newlines(text: str) -> str:
    """Convert CRLF line endings to LF."""
    return text.replace("\r\n", "\n")


def single_line(text: str) -> str:
    """Collapse line breaks into spaces and trim."""
    return " ".join(part.strip() for part in text.splitlines() if part.strip())


def extract_tags(text: str) -> list[str]:
    """Find "#tag" tokens at the start of the text or after whitespace.

    Returns lowercased, deduplicated tags in sorted order, each with its
    leading "#".
    """
    return sorted({f"#{body.lower()}" for body in TAG_PATTERN.findall(text)})


def normalize_due_date(value: str | None) -> str | None:
    """Return the trimmed date if it looks like YYYY-MM-DD, else None.

    Only the shape is checked; "2026-02-30" is accepted as written.
    """
    if not value or not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed if DUE_PATTERN.fullmatch(trimmed) else None


def normalize_tag_filter(tag: str) -> str:
    """Lowercase a tag filter and make sure it starts with "#"."""
    normalized = tag.strip().lower()
    if not normalized:
        return ""
    return normalized if normalized.startswith("#") else f"#{normalized}"


def build_search_text(title: str, description: str, tags: list[str], due_date: str | None) -> str:
    """Lowercased haystack used by the board filter."""
    return "\n".join([title, description, " ".join(tags), due_date or ""]).lower()
