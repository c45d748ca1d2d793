"""In-memory board store with copy-on-write edits and snapshot listeners.

The store owns one BoardDocument and one BoardFilter. Every mutation
builds new lists for the slice it touches, swaps them into the document,
then pushes a fresh snapshot to each listener before returning.

Listeners run synchronously. A listener may call back into the store;
that nested mutation notifies every listener (again) before the outer
call returns, so listeners should expect re-entrant calls.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import Literal

from plainban.clipboard import ClipboardEntry, parse_clipboard_list
from plainban.ids import generate_id
from plainban.model.card import clone_card, new_card, renormalize
from plainban.model.column import clone_column, new_column, normalize_wip_limit
from plainban.model.writer import serialize_board
from plainban.models import BoardDocument, BoardFilter, BoardSnapshot, Card, Column, Density, default_board
from plainban.text import normalize_tag_filter, single_line

logger = logging.getLogger(__name__)

Listener = Callable[[BoardSnapshot], None]
Position = Literal["before", "after"]

EDITABLE_CARD_FIELDS = frozenset({"title", "description", "checked", "due_date"})


def clone_board(board: BoardDocument) -> BoardDocument:
    """Independent copy of a board with every card re-normalized."""
    return BoardDocument(
        title=board.title,
        description=board.description,
        density=Density.parse(board.density),
        columns=[clone_column(col) for col in board.columns],
        archive=[clone_card(card) for card in board.archive],
    )


def _clamp(index: int, upper: int) -> int:
    return max(0, min(index, upper))


class BoardStore:
    """Single source of truth for an open board."""

    def __init__(self, board: BoardDocument | None = None) -> None:
        self._board = clone_board(board) if board is not None else default_board()
        self._filter = BoardFilter()
        self._listeners: list[Listener] = []

    # --- Subscriptions ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener now and after every change. Returns an unsubscribe callable."""
        self._listeners.append(listener)
        listener(self.get_snapshot())

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self) -> None:
        snapshot = self.get_snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # --- Reads ---

    def get_board(self) -> BoardDocument:
        """A copy of the canonical document."""
        return clone_board(self._board)

    def to_text(self) -> str:
        """Canonical markdown for the current document."""
        return serialize_board(self._board)

    def get_card(self, column_id: str, card_id: str) -> Card | None:
        col = self._board.column(column_id)
        if col is None:
            return None
        for card in col.cards:
            if card.id == card_id:
                return clone_card(card)
        return None

    def find_card_column(self, card_id: str) -> str | None:
        """Id of the column holding a card, or None (missing or archived)."""
        for col in self._board.columns:
            if any(card.id == card_id for card in col.cards):
                return col.id
        return None

    def get_archived_card(self, card_id: str) -> Card | None:
        for card in self._board.archive:
            if card.id == card_id:
                return clone_card(card)
        return None

    def get_snapshot(self) -> BoardSnapshot:
        """Board copy, filter, filtered columns, and every tag in use."""
        board = self.get_board()
        query = self._filter.query.strip().lower()
        tag = normalize_tag_filter(self._filter.tag)
        all_tags = sorted({t for col in board.columns for card in col.cards for t in card.tags})

        if not self._filter.active:
            visible = board.columns
        else:
            visible = [
                replace(
                    col,
                    cards=[
                        card
                        for card in col.cards
                        if (not query or query in card.search_text) and (not tag or tag in card.tags)
                    ],
                )
                for col in board.columns
            ]

        return BoardSnapshot(
            board=board,
            filter=replace(self._filter),
            visible_columns=visible,
            all_tags=all_tags,
        )

    # --- Internals ---

    def _column_index(self, column_id: str) -> int:
        for i, col in enumerate(self._board.columns):
            if col.id == column_id:
                return i
        logger.debug("no column %s", column_id)
        return -1

    def _card_index(self, column: Column, card_id: str) -> int:
        for i, card in enumerate(column.cards):
            if card.id == card_id:
                return i
        logger.debug("no card %s in column %s", card_id, column.id)
        return -1

    def _set_columns(self, columns: list[Column], **changes) -> None:
        self._board = replace(self._board, columns=columns, **changes)

    def _with_column(self, index: int, **changes) -> list[Column]:
        columns = list(self._board.columns)
        columns[index] = replace(columns[index], **changes)
        return columns

    def _card_ids(self) -> set[str]:
        ids = {card.id for col in self._board.columns for card in col.cards}
        ids.update(card.id for card in self._board.archive)
        return ids

    def _adopt(self, cards: Iterable[Card]) -> list[Card]:
        """Normalize incoming cards, re-keying any id already on the board."""
        taken = self._card_ids()
        adopted = []
        for card in cards:
            card = clone_card(card)
            if card.id in taken:
                card = replace(card, id=generate_id("card"))
            taken.add(card.id)
            adopted.append(card)
        return adopted

    # --- Board ---

    def set_board(self, board: BoardDocument) -> None:
        """Replace the whole document (initial load or external reload)."""
        self._board = clone_board(board)
        self._emit()

    def set_board_metadata(self, title: str, description: str, density: Density | str) -> None:
        """Blank titles keep the current one."""
        self._board = replace(
            self._board,
            title=title.strip() or self._board.title,
            description=description.strip(),
            density=Density.parse(density),
        )
        self._emit()

    # --- Filter ---

    def set_filter_query(self, query: str) -> None:
        self._filter = replace(self._filter, query=query)
        self._emit()

    def set_filter_tag(self, tag: str) -> None:
        self._filter = replace(self._filter, tag=normalize_tag_filter(tag))
        self._emit()

    def clear_filter(self) -> None:
        self._filter = BoardFilter()
        self._emit()

    # --- Columns ---

    def add_column(self, title: str, wip_limit: int | None = None) -> Column:
        column = new_column(title, wip_limit)
        self._set_columns([*self._board.columns, column])
        self._emit()
        return clone_column(column)

    def rename_column(self, column_id: str, title: str) -> bool:
        """Blank titles are ignored."""
        index = self._column_index(column_id)
        title = single_line(title)
        if index < 0 or not title:
            return False
        self._set_columns(self._with_column(index, title=title))
        self._emit()
        return True

    def set_column_wip_limit(self, column_id: str, limit: int | None) -> bool:
        index = self._column_index(column_id)
        if index < 0:
            return False
        self._set_columns(self._with_column(index, wip_limit=normalize_wip_limit(limit)))
        self._emit()
        return True

    def delete_column(self, column_id: str) -> bool:
        """Drop a column and its cards."""
        index = self._column_index(column_id)
        if index < 0:
            return False
        columns = list(self._board.columns)
        del columns[index]
        self._set_columns(columns)
        self._emit()
        return True

    def move_column(self, column_id: str, target_index: int) -> bool:
        """Move a column to target_index, clamped to the remaining range."""
        index = self._column_index(column_id)
        if index < 0:
            return False
        columns = list(self._board.columns)
        moved = columns.pop(index)
        columns.insert(_clamp(target_index, len(columns)), moved)
        self._set_columns(columns)
        self._emit()
        return True

    def clear_column_cards(self, column_id: str) -> int:
        """Delete every card in a column. Returns how many were removed."""
        index = self._column_index(column_id)
        if index < 0 or not self._board.columns[index].cards:
            return 0
        count = len(self._board.columns[index].cards)
        self._set_columns(self._with_column(index, cards=[]))
        self._emit()
        return count

    def archive_column_cards(self, column_id: str) -> int:
        """Move a column's cards, in order, to the end of the archive."""
        index = self._column_index(column_id)
        if index < 0 or not self._board.columns[index].cards:
            return 0
        cards = self._board.columns[index].cards
        self._set_columns(self._with_column(index, cards=[]), archive=[*self._board.archive, *cards])
        self._emit()
        return len(cards)

    # --- Cards ---

    def add_card(
        self,
        column_id: str,
        title: str,
        description: str = "",
        checked: bool = False,
        due_date: str | None = None,
        placement: Literal["top", "bottom"] = "bottom",
    ) -> Card | None:
        index = self._column_index(column_id)
        if index < 0:
            return None
        card = new_card(title, description, checked, due_date)
        cards = self._board.columns[index].cards
        cards = [card, *cards] if placement == "top" else [*cards, card]
        self._set_columns(self._with_column(index, cards=cards))
        self._emit()
        return clone_card(card)

    def update_card(self, column_id: str, card_id: str, **changes) -> bool:
        """Change title, description, checked or due_date, then re-derive."""
        unknown = set(changes) - EDITABLE_CARD_FIELDS
        if unknown:
            raise TypeError(f"update_card() got unexpected fields: {', '.join(sorted(unknown))}")
        index = self._column_index(column_id)
        if index < 0:
            return False
        column = self._board.columns[index]
        card_index = self._card_index(column, card_id)
        if card_index < 0:
            return False
        cards = list(column.cards)
        cards[card_index] = renormalize(cards[card_index], **changes)
        self._set_columns(self._with_column(index, cards=cards))
        self._emit()
        return True

    def delete_card(self, column_id: str, card_id: str) -> bool:
        index = self._column_index(column_id)
        if index < 0:
            return False
        column = self._board.columns[index]
        card_index = self._card_index(column, card_id)
        if card_index < 0:
            return False
        cards = list(column.cards)
        del cards[card_index]
        self._set_columns(self._with_column(index, cards=cards))
        self._emit()
        return True

    def archive_card(self, column_id: str, card_id: str) -> bool:
        """Move one card from its column to the end of the archive."""
        index = self._column_index(column_id)
        if index < 0:
            return False
        column = self._board.columns[index]
        card_index = self._card_index(column, card_id)
        if card_index < 0:
            return False
        cards = list(column.cards)
        card = cards.pop(card_index)
        self._set_columns(self._with_column(index, cards=cards), archive=[*self._board.archive, card])
        self._emit()
        return True

    def restore_card(self, card_id: str, column_id: str, index: int | None = None) -> bool:
        """Move an archived card back into a column (appended by default)."""
        col_index = self._column_index(column_id)
        archive = list(self._board.archive)
        pos = next((i for i, card in enumerate(archive) if card.id == card_id), -1)
        if col_index < 0 or pos < 0:
            return False
        card = archive.pop(pos)
        cards = list(self._board.columns[col_index].cards)
        cards.insert(len(cards) if index is None else _clamp(index, len(cards)), card)
        self._set_columns(self._with_column(col_index, cards=cards), archive=archive)
        self._emit()
        return True

    def move_card(self, source_column_id: str, card_id: str, target_column_id: str, target_index: int) -> bool:
        """Move a card to target_index in the target column.

        target_index is a drop position in the target column as it was
        before the move. Within one column the card's own slot disappears
        first, so positions after it shift left by one.
        """
        source = self._column_index(source_column_id)
        target = self._column_index(target_column_id)
        if source < 0 or target < 0:
            return False
        card_index = self._card_index(self._board.columns[source], card_id)
        if card_index < 0:
            return False

        columns = [replace(col, cards=list(col.cards)) for col in self._board.columns]
        target_cards = columns[target].cards
        insert_at = _clamp(target_index, len(target_cards))
        card = columns[source].cards.pop(card_index)
        if source == target and card_index < insert_at:
            insert_at -= 1
        target_cards.insert(insert_at, card)

        self._set_columns(columns)
        self._emit()
        return True

    def insert_cards_at(self, column_id: str, index: int, cards: Iterable[Card]) -> int:
        """Insert a batch of cards at index. Returns how many were inserted."""
        col_index = self._column_index(column_id)
        cards = self._adopt(cards)
        if col_index < 0 or not cards:
            return 0
        existing = list(self._board.columns[col_index].cards)
        at = _clamp(index, len(existing))
        existing[at:at] = cards
        self._set_columns(self._with_column(col_index, cards=existing))
        self._emit()
        return len(cards)

    def insert_cards_from_parsed_lines(
        self,
        column_id: str,
        entries: Iterable[ClipboardEntry],
        position: Position = "after",
    ) -> int:
        """Create cards from pasted list entries at the head ("before") or tail ("after")."""
        col_index = self._column_index(column_id)
        if col_index < 0:
            return 0
        cards = [new_card(entry.title, checked=entry.checked) for entry in entries]
        index = 0 if position == "before" else len(self._board.columns[col_index].cards)
        return self.insert_cards_at(column_id, index, cards)

    def paste_cards(self, column_id: str, text: str, position: Position = "after") -> int:
        """Parse clipboard text and insert the resulting cards."""
        return self.insert_cards_from_parsed_lines(column_id, parse_clipboard_list(text), position)
