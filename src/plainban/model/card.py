"""Card construction and editing helpers for plainban boards."""

from plainban.ids import generate_id
from plainban.models import Card
from plainban.text import (
    build_search_text,
    extract_tags,
    normalize_due_date,
    normalize_newlines,
    single_line,
)

UNTITLED = "Untitled"


def normalize_card(
    id: str,
    title: str,
    description: str = "",
    checked: bool = False,
    due_date: str | None = None,
) -> Card:
    """Build a Card with validated due date and freshly derived fields.

    Every card in a document is produced here, so tags and search text
    always reflect the current title, description and due date.
    """
    title = single_line(title or "") or UNTITLED
    description = normalize_newlines(description or "").rstrip()
    due_date = normalize_due_date(due_date)
    tags = extract_tags(f"{title}\n{description}")
    return Card(
        id=id,
        title=title,
        description=description,
        checked=bool(checked),
        due_date=due_date,
        tags=tags,
        search_text=build_search_text(title, description, tags, due_date),
    )


def renormalize(card: Card, **changes) -> Card:
    """Re-run normalization over a card, optionally changing fields."""
    fields = {
        "id": card.id,
        "title": card.title,
        "description": card.description,
        "checked": card.checked,
        "due_date": card.due_date,
    }
    fields.update(changes)
    return normalize_card(**fields)


def new_card(
    title: str,
    description: str = "",
    checked: bool = False,
    due_date: str | None = None,
) -> Card:
    """Create a normalized card with a fresh id."""
    return normalize_card(generate_id("card"), title, description, checked, due_date)


def clone_card(card: Card) -> Card:
    """Independent, re-normalized copy of a card."""
    return renormalize(card)


def to_editable_card_text(card: Card) -> str:
    """Title on the first line, description below it."""
    title = card.title.strip()
    description = card.description.rstrip()
    if not description:
        return title
    return f"{title}\n{description}"


def from_editable_card_text(text: str) -> tuple[str, str]:
    """Split edited text into (title, description).

    The first non-blank line is the title; everything after it is the
    description, right-trimmed.
    """
    lines = normalize_newlines(text).split("\n")
    for i, line in enumerate(lines):
        if line.strip():
            return line.strip(), "\n".join(lines[i + 1 :]).rstrip()
    return UNTITLED, ""


def clamp_editable_card_text(text: str, max_length: int) -> str:
    """Truncate edited text to max_length characters."""
    return text if len(text) <= max_length else text[:max_length]
