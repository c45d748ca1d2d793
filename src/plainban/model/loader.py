"""Load a plainban board from markdown text into a BoardDocument."""

import logging
from dataclasses import replace
from pathlib import Path

from plainban.ids import generate_id, is_valid_column_id
from plainban.model.card import UNTITLED, normalize_card
from plainban.model.column import normalize_wip_limit
from plainban.models import DEFAULT_BOARD_TITLE, BoardDocument, Card, Column, Density, default_board
from plainban.parser import (
    CONTINUATION_KINDS,
    LineKind,
    NotABoardError,
    ScannedLine,
    extract_archive,
    scan_lines,
    split_front_matter,
)
from plainban.text import single_line

logger = logging.getLogger(__name__)


def _as_text(value) -> str:
    """Scalar YAML value as stripped text; anything else is empty."""
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    return ""


def _parse_column_definitions(value) -> list[Column]:
    """Read header column entries, dropping malformed ones."""
    if not isinstance(value, list):
        return []

    columns: list[Column] = []
    seen: set[str] = set()
    for entry in value:
        if not isinstance(entry, dict):
            logger.debug("dropping column entry %r: not a mapping", entry)
            continue
        col_id = _as_text(entry.get("id"))
        title = single_line(_as_text(entry.get("title")))
        if not col_id or not title or not is_valid_column_id(col_id):
            logger.debug("dropping column entry %r: missing id or title", entry)
            continue
        if col_id in seen:
            logger.debug("dropping duplicate column entry %r", col_id)
            continue
        seen.add(col_id)
        columns.append(Column(id=col_id, title=title, wip_limit=normalize_wip_limit(entry.get("wipLimit"))))
    return columns


def _build_card(head: ScannedLine, block: list[ScannedLine]) -> Card:
    """Assemble a card from its line and the continuation lines below it."""
    while block and block[-1].kind is LineKind.BLANK:
        block.pop()

    due_date = None
    body: list[str] = []
    for line in block:
        if line.kind is LineKind.ANCHOR:
            continue
        if line.kind is LineKind.DUE and due_date is None:
            due_date = line.due_date
            continue
        body.append(line.text)

    return normalize_card(
        id=head.id or generate_id("card"),
        title=head.title,
        description="\n".join(body),
        checked=head.checked,
        due_date=due_date,
    )


def parse_cards(lines: list[ScannedLine]) -> list[Card]:
    """Collect cards from a run of scanned lines.

    A card's description is every following blank or indented line, up to
    the next card, heading, or unindented line.
    """
    cards: list[Card] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1
        if line.kind is not LineKind.CARD:
            continue
        block: list[ScannedLine] = []
        while i < len(lines) and lines[i].kind in CONTINUATION_KINDS:
            block.append(lines[i])
            i += 1
        cards.append(_build_card(line, block))
    return cards


def parse_sections(body: str) -> list[Column]:
    """Split the body into "## [id] title" sections with their cards."""
    lines = scan_lines(body)
    columns: list[Column] = []
    current: ScannedLine | None = None
    section: list[ScannedLine] = []

    def close() -> None:
        if current is None:
            return
        columns.append(
            Column(
                id=current.id or generate_id("column"),
                title=current.title or UNTITLED,
                cards=parse_cards(section),
            )
        )

    for line in lines:
        if line.kind is LineKind.HEADING:
            close()
            current = line
            section = []
        elif current is not None:
            section.append(line)
    close()
    return columns


def merge_columns(declared: list[Column], sections: list[Column]) -> list[Column]:
    """Header order first, cards from the matching body section.

    Body sections the header does not mention are appended in body order,
    without a WIP limit. A repeated body id only matches once; later
    repeats are kept as separate columns with fresh ids.
    """
    declared_ids = {col.id for col in declared}
    matched: dict[str, Column] = {}
    extras: list[Column] = []
    seen: set[str] = set()
    for col in sections:
        if col.id in seen:
            fresh = generate_id("column")
            logger.debug("duplicate column id %s in body, renamed to %s", col.id, fresh)
            col = replace(col, id=fresh)
        seen.add(col.id)
        if col.id in declared_ids:
            matched[col.id] = col
        else:
            extras.append(Column(id=col.id, title=col.title, cards=col.cards))

    merged = [
        Column(
            id=col.id,
            title=col.title,
            wip_limit=col.wip_limit,
            cards=matched[col.id].cards if col.id in matched else [],
        )
        for col in declared
    ]
    return merged + extras


def _dedupe_card_ids(columns: list[Column], archive: list[Card]) -> None:
    """Give repeated card ids a fresh id, in document order."""
    seen: set[str] = set()

    def fix(cards: list[Card]) -> None:
        for i, card in enumerate(cards):
            if card.id in seen:
                fresh = generate_id("card")
                logger.debug("duplicate card id %s, renamed to %s", card.id, fresh)
                cards[i] = replace(card, id=fresh)
            seen.add(cards[i].id)

    for col in columns:
        fix(col.cards)
    fix(archive)


def parse_board(text: str) -> BoardDocument:
    """Parse board markdown into a normalized BoardDocument.

    Raises BoardParseError for a missing or undecodable header, and
    NotABoardError when the header lacks ``kanban: true``.
    """
    meta, body = split_front_matter(text)

    if meta.get("kanban") is not True:
        raise NotABoardError("File front-matter is missing `kanban: true`.")

    title = meta.get("boardTitle")
    title = title.strip() if isinstance(title, str) and title.strip() else DEFAULT_BOARD_TITLE
    description = meta.get("boardDescription")
    description = description.strip() if isinstance(description, str) else ""
    density = Density.parse(meta.get("density"))
    declared = _parse_column_definitions(meta.get("columns"))

    archive_text, body = extract_archive(body)
    archive = parse_cards(scan_lines(archive_text)) if archive_text is not None else []

    columns = merge_columns(declared, parse_sections(body))
    _dedupe_card_ids(columns, archive)

    if not columns:
        board = default_board(title)
        board.description = description
        board.density = density
        board.archive = archive
        return board

    return BoardDocument(
        title=title,
        description=description,
        density=density,
        columns=columns,
        archive=archive,
    )


def load_board(path: str | Path) -> BoardDocument:
    """Read and parse a board file."""
    text = Path(path).read_text(encoding="utf-8")
    board = parse_board(text)
    logger.debug("loaded %s: %d columns, %d archived", path, len(board.columns), len(board.archive))
    return board
