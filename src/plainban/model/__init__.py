"""Board model: codec and document store."""

from plainban.model.card import new_card, normalize_card
from plainban.model.column import new_column, normalize_wip_limit
from plainban.model.loader import load_board, parse_board
from plainban.model.writer import save_board, serialize_board
from plainban.model.store import BoardStore, clone_board

__all__ = [
    "BoardStore",
    "clone_board",
    "load_board",
    "new_card",
    "new_column",
    "normalize_card",
    "normalize_wip_limit",
    "parse_board",
    "save_board",
    "serialize_board",
]
