"""Column construction helpers for plainban boards."""

import math

from plainban.ids import generate_id
from plainban.model.card import UNTITLED, clone_card
from plainban.models import Column
from plainban.text import single_line


def normalize_wip_limit(value) -> int | None:
    """Floor a numeric limit; anything invalid or negative means no limit."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    limit = math.floor(value)
    return limit if limit >= 0 else None


def new_column(title: str, wip_limit: int | None = None) -> Column:
    """Create an empty column with a fresh id."""
    return Column(
        id=generate_id("column"),
        title=single_line(title or "") or UNTITLED,
        wip_limit=normalize_wip_limit(wip_limit),
    )


def clone_column(column: Column) -> Column:
    """Independent copy of a column and its cards."""
    return Column(
        id=column.id,
        title=column.title,
        wip_limit=normalize_wip_limit(column.wip_limit),
        cards=[clone_card(card) for card in column.cards],
    )
