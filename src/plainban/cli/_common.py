"""Shared helpers for CLI command handlers."""

import json
import logging
import sys
from pathlib import Path

from plainban.model.loader import load_board
from plainban.model.store import BoardStore
from plainban.model.writer import save_board
from plainban.models import BoardDocument, Card, Column
from plainban.parser import BoardParseError, NotABoardError

logger = logging.getLogger(__name__)


def load_store_or_die(path: str, json_mode: bool) -> BoardStore:
    """Load a board file into a store. Exit 1 with message if unreadable."""
    board_path = Path(path)
    try:
        board = load_board(board_path)
    except FileNotFoundError:
        error(f"Board file '{path}' not found. Run 'plainban init' first.", json_mode)
    except NotABoardError:
        error(f"'{path}' is not a board (front-matter lacks `kanban: true`).", json_mode)
    except BoardParseError as e:
        error(f"Could not read board '{path}': {e}", json_mode)
    except (OSError, UnicodeDecodeError) as e:
        error(f"Could not read board file '{path}': {e}", json_mode)
    return BoardStore(board)


def save(store: BoardStore, path: str) -> None:
    """Write the store's document back to its file."""
    save_board(path, store.get_board())


def resolve_column(board: BoardDocument, ref: str) -> Column | None:
    """Find a column by id, then by title, then by 1-based position."""
    for col in board.columns:
        if col.id == ref:
            return col
    for col in board.columns:
        if col.title.lower() == ref.strip().lower():
            return col
    if ref.isdigit() and 1 <= int(ref) <= len(board.columns):
        return board.columns[int(ref) - 1]
    return None


def find_column(store: BoardStore, ref: str, json_mode: bool) -> Column:
    """Lookup column. Exit 1 listing available columns if not found."""
    board = store.get_board()
    col = resolve_column(board, ref)
    if col is not None:
        return col
    available = [f"  {c.id}  {c.title}" for c in board.columns]
    msg = f"Column '{ref}' not found. Available:\n" + "\n".join(available)
    error(msg, json_mode)


def find_card(store: BoardStore, card_id: str, json_mode: bool) -> tuple[str, Card]:
    """Lookup a card on the board. Returns (column_id, card). Exit 1 if not found."""
    column_id = store.find_card_column(card_id)
    if column_id is not None:
        return column_id, store.get_card(column_id, card_id)
    if store.get_archived_card(card_id) is not None:
        error(f"Card '{card_id}' is archived. Restore it first.", json_mode)
    error(f"Card '{card_id}' not found.", json_mode)


def card_dict(card: Card, column: Column | None = None) -> dict:
    """JSON shape of a card."""
    data = {
        "id": card.id,
        "title": card.title,
        "description": card.description,
        "checked": card.checked,
        "due": card.due_date,
        "tags": list(card.tags),
    }
    if column is not None:
        data["column"] = {"id": column.id, "name": column.title}
    return data


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    logger.debug("exiting: %s", message)
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)


def build_column_summaries(board: BoardDocument) -> list[dict]:
    """Build column summary dicts from board."""
    return [
        {
            "id": col.id,
            "name": col.title,
            "cards": len(col.cards),
            "wip_limit": col.wip_limit,
            "over_limit": col.over_limit,
        }
        for col in board.columns
    ]


def format_column_line(c: dict, indent: str = "") -> str:
    """Format a column summary dict as a text line."""
    cards = "card" if c["cards"] == 1 else "cards"
    limit = f"  (limit {c['wip_limit']})" if c["wip_limit"] is not None else ""
    over = "  OVER LIMIT" if c["over_limit"] else ""
    return f"{indent}{c['id']}  {c['name']:<16} {c['cards']} {cards}{limit}{over}"
