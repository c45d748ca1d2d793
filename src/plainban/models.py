"""Data models for plainban boards."""

from dataclasses import dataclass, field
from enum import Enum


class Density(str, Enum):
    """Card spacing preset stored in the board header."""

    NORMAL = "normal"
    COMPACT = "compact"

    @classmethod
    def parse(cls, value) -> "Density":
        """Anything other than "compact" is normal."""
        return cls.COMPACT if value == cls.COMPACT.value else cls.NORMAL


@dataclass
class Card:
    """A task on the board.

    ``tags`` and ``search_text`` are derived from the other fields; build
    cards with ``plainban.model.card.normalize_card`` so they stay in sync.
    """

    id: str
    title: str
    description: str = ""
    checked: bool = False
    due_date: str | None = None
    tags: list[str] = field(default_factory=list)
    search_text: str = ""


@dataclass
class Column:
    """An ordered lane of cards."""

    id: str
    title: str
    wip_limit: int | None = None
    cards: list[Card] = field(default_factory=list)

    @property
    def over_limit(self) -> bool:
        """WIP limits are advisory: exceeding one is only flagged."""
        return self.wip_limit is not None and len(self.cards) > self.wip_limit


@dataclass
class BoardDocument:
    """The full board: metadata, columns in lane order, and the archive."""

    title: str
    description: str = ""
    density: Density = Density.NORMAL
    columns: list[Column] = field(default_factory=list)
    archive: list[Card] = field(default_factory=list)

    def column(self, column_id: str) -> Column | None:
        """Find a column by id."""
        for col in self.columns:
            if col.id == column_id:
                return col
        return None


@dataclass
class BoardFilter:
    """Free-text query plus a single normalized "#tag"."""

    query: str = ""
    tag: str = ""

    @property
    def active(self) -> bool:
        return bool(self.query.strip() or self.tag)


@dataclass
class BoardSnapshot:
    """What subscribers see after each store change."""

    board: BoardDocument
    filter: BoardFilter
    visible_columns: list[Column]
    all_tags: list[str]


DEFAULT_BOARD_TITLE = "Untitled Kanban"


def default_board(title: str = DEFAULT_BOARD_TITLE) -> BoardDocument:
    """An empty board: no columns, nothing archived."""
    return BoardDocument(title=title)
