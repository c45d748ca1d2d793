"""Turn pasted list-like text into draft card titles."""

import re
from typing import NamedTuple

from plainban.text import normalize_newlines

_CHECKLIST = re.compile(r"^[-*+]\s+\[([ xX])\]\s+(.+)$")
_BULLET = re.compile(r"^[-*+]\s+(.+)$")
_ORDERED = re.compile(r"^\d+[.)]\s+(.+)$")


class ClipboardEntry(NamedTuple):
    title: str
    checked: bool = False


def _parse_line(line: str) -> ClipboardEntry | None:
    checklist = _CHECKLIST.match(line)
    if checklist:
        title = checklist.group(2).strip()
        return ClipboardEntry(title, checklist.group(1).lower() == "x") if title else None

    for pattern in (_BULLET, _ORDERED):
        match = pattern.match(line)
        if match:
            title = match.group(1).strip()
            return ClipboardEntry(title) if title else None

    return ClipboardEntry(line)


def parse_clipboard_list(text: str) -> list[ClipboardEntry]:
    """Parse checklist, bullet, numbered and plain lines into entries.

    Blank lines are skipped. Anything that is not list syntax becomes an
    unchecked entry titled with the trimmed line.
    """
    entries = []
    for raw in normalize_newlines(text).split("\n"):
        line = raw.strip()
        if not line:
            continue
        entry = _parse_line(line)
        if entry is not None:
            entries.append(entry)
    return entries
