"""Markdown-backed kanban boards."""

from plainban.clipboard import ClipboardEntry, parse_clipboard_list
from plainban.model import BoardStore, normalize_card, parse_board, serialize_board
from plainban.models import BoardDocument, BoardFilter, BoardSnapshot, Card, Column, Density
from plainban.parser import BoardParseError, NotABoardError

__all__ = [
    "BoardDocument",
    "BoardFilter",
    "BoardParseError",
    "BoardSnapshot",
    "BoardStore",
    "Card",
    "ClipboardEntry",
    "Column",
    "Density",
    "NotABoardError",
    "normalize_card",
    "parse_board",
    "parse_clipboard_list",
    "serialize_board",
]
