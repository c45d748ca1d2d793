"""Serialize a BoardDocument to canonical markdown and save it to disk."""

import logging
import os
import tempfile
from pathlib import Path

from plainban.model.card import UNTITLED, renormalize
from plainban.model.column import normalize_wip_limit
from plainban.models import BoardDocument, Card, Density
from plainban.parser import ARCHIVE_END, ARCHIVE_START, INDENT, dump_front_matter, is_due_line
from plainban.text import single_line

logger = logging.getLogger(__name__)

BOARD_VERSION = 1


def _front_matter(board: BoardDocument) -> dict:
    """Header mapping in canonical key order."""
    meta: dict = {
        "kanban": True,
        "kanbanVersion": BOARD_VERSION,
        "boardTitle": board.title,
    }
    if board.description:
        meta["boardDescription"] = board.description
    meta["density"] = Density.parse(board.density).value
    meta["columns"] = [
        {"id": col.id, "title": _column_title(col.title), "wipLimit": normalize_wip_limit(col.wip_limit)}
        for col in board.columns
    ]
    return meta


def card_lines(card: Card) -> list[str]:
    """Render one card block, ending with its blank separator line.

    The due line normally follows the description. If the description
    itself has a due-like line, the real one goes first so it is still the
    first due line read back.
    """
    card = renormalize(card)
    lines = [
        f"- [{'x' if card.checked else ' '}] [{card.id}] {card.title}",
        f"{INDENT}^{card.id}",
    ]

    body = card.description.split("\n") if card.description.strip() else []
    if card.due_date:
        due = f"due:: {card.due_date}"
        if any(is_due_line(line) for line in body):
            body.insert(0, due)
        else:
            body.append(due)

    lines.extend(f"{INDENT}{line}" if line else "" for line in body)
    lines.append("")
    return lines


def _column_title(title: str) -> str:
    return single_line(title) or UNTITLED


def _blank(lines: list[str]) -> None:
    """Append a separator unless the previous line already is one."""
    if lines and lines[-1] != "":
        lines.append("")


def serialize_board(board: BoardDocument) -> str:
    """Render a board as canonical markdown text."""
    lines = [dump_front_matter(_front_matter(board)), ""]

    for col in board.columns:
        lines.append(f"## [{col.id}] {_column_title(col.title)}")
        lines.append("")
        for card in col.cards:
            lines.extend(card_lines(card))
        _blank(lines)

    if board.archive:
        _blank(lines)
        lines.extend([ARCHIVE_START, ""])
        for card in board.archive:
            lines.extend(card_lines(card))
        lines.append(ARCHIVE_END)

    while lines and lines[-1] == "":
        lines.pop()
    return "\n".join(lines) + "\n"


def save_board(path: str | Path, board: BoardDocument) -> str:
    """Write a board's canonical text to path atomically. Returns the text."""
    path = Path(path)
    text = serialize_board(board)
    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise
    logger.debug("saved %s (%d bytes)", path, len(text))
    return text
