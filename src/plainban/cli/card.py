"""Handlers for 'plainban card' commands."""

import sys

from plainban.cli._common import (
    card_dict,
    error,
    find_card,
    find_column,
    load_store_or_die,
    output_json,
    output_result,
    save,
)
from plainban.config import read_config
from plainban.model.card import clamp_editable_card_text, from_editable_card_text, to_editable_card_text
from plainban.text import normalize_due_date


def card_list(args) -> int:
    """List cards grouped by column, optionally filtered."""
    store = load_store_or_die(args.file, args.json)
    if getattr(args, "query", None):
        store.set_filter_query(args.query)
    if getattr(args, "tag", None):
        store.set_filter_tag(args.tag)
    snapshot = store.get_snapshot()

    if getattr(args, "archived", False):
        cards = snapshot.board.archive
        if args.json:
            output_json([card_dict(card) for card in cards])
        else:
            for card in cards:
                print(f"{card.id}  {card.title}")
        return 0

    columns = snapshot.visible_columns
    if args.column:
        wanted = find_column(store, args.column, args.json)
        columns = [col for col in columns if col.id == wanted.id]

    if args.json:
        output_json([card_dict(card, col) for col in columns for card in col.cards])
    else:
        for col in columns:
            print(f"{col.id}  {col.title}")
            for card in col.cards:
                mark = "x" if card.checked else " "
                due = f"  (due {card.due_date})" if card.due_date else ""
                print(f"  [{mark}] {card.id}  {card.title}{due}")

    return 0


def card_get(args) -> int:
    """Show a card as editable text (title line, then description)."""
    store = load_store_or_die(args.file, args.json)
    column_id, card = find_card(store, args.id, args.json)

    if args.json:
        output_json(card_dict(card, store.get_board().column(column_id)))
    else:
        print(to_editable_card_text(card))
        if card.due_date:
            print(f"due:: {card.due_date}")

    return 0


def card_add(args) -> int:
    """Create a new card."""
    store = load_store_or_die(args.file, args.json)
    board = store.get_board()

    if args.column:
        column = find_column(store, args.column, args.json)
    elif board.columns:
        column = board.columns[0]
    else:
        error("Board has no columns. Add one with 'plainban column add'.", args.json)

    due = None
    if args.due:
        due = normalize_due_date(args.due)
        if due is None:
            error(f"Due date must look like YYYY-MM-DD, not '{args.due}'.", args.json)

    title = args.title or read_config()["new_card_title"]
    card = store.add_card(
        column.id,
        title,
        description=args.body,
        due_date=due,
        placement="top" if args.top else "bottom",
    )
    save(store, args.file)

    output_result(card_dict(card, column), f"Created card {card.id} in {column.title}", args.json)
    return 0


def card_set(args) -> int:
    """Replace a card's title and description with text from stdin."""
    store = load_store_or_die(args.file, args.json)
    column_id, card = find_card(store, args.id, args.json)

    limit = read_config()["editable_max_length"]
    title, description = from_editable_card_text(clamp_editable_card_text(sys.stdin.read(), limit))
    store.update_card(column_id, card.id, title=title, description=description)
    save(store, args.file)

    output_result({"id": card.id, "title": title}, f"Updated card {card.id}", args.json)
    return 0


def card_due(args) -> int:
    """Set or clear ("none") a card's due date."""
    store = load_store_or_die(args.file, args.json)
    column_id, card = find_card(store, args.id, args.json)

    if args.date.lower() in ("none", "off", ""):
        due = None
    else:
        due = normalize_due_date(args.date)
        if due is None:
            error(f"Due date must look like YYYY-MM-DD, not '{args.date}'.", args.json)
    store.update_card(column_id, card.id, due_date=due)
    save(store, args.file)

    output_result(
        {"id": card.id, "due": due},
        f"Card {card.id} due {due}" if due else f"Cleared due date of card {card.id}",
        args.json,
    )
    return 0


def card_move(args) -> int:
    """Move a card to a column, optionally at a 1-indexed position."""
    store = load_store_or_die(args.file, args.json)
    column_id, card = find_card(store, args.id, args.json)
    target = find_column(store, args.column, args.json)

    position = args.position - 1 if args.position is not None else len(target.cards)
    if target.id == column_id:
        # --position is the card's final slot; move_card counts slots before removal.
        current = [c.id for c in target.cards].index(card.id)
        if current < position:
            position += 1
    store.move_card(column_id, card.id, target.id, position)
    save(store, args.file)

    output_result(
        {"id": card.id, "column": {"id": target.id, "name": target.title}},
        f"Moved card {card.id} to {target.title}",
        args.json,
    )
    return 0


def card_check(args) -> int:
    """Mark a card done (or not done with --undo)."""
    store = load_store_or_die(args.file, args.json)
    column_id, card = find_card(store, args.id, args.json)

    checked = not args.undo
    store.update_card(column_id, card.id, checked=checked)
    save(store, args.file)

    state = "done" if checked else "not done"
    output_result({"id": card.id, "checked": checked}, f"Marked card {card.id} {state}", args.json)
    return 0


def card_archive(args) -> int:
    """Archive a card."""
    store = load_store_or_die(args.file, args.json)
    column_id, card = find_card(store, args.id, args.json)

    store.archive_card(column_id, card.id)
    save(store, args.file)

    output_result({"id": card.id}, f"Archived card {card.id}", args.json)
    return 0


def card_restore(args) -> int:
    """Move an archived card back into a column."""
    store = load_store_or_die(args.file, args.json)
    if store.get_archived_card(args.id) is None:
        error(f"Card '{args.id}' is not in the archive.", args.json)
    target = find_column(store, args.column, args.json)

    index = args.position - 1 if args.position is not None else None
    store.restore_card(args.id, target.id, index)
    save(store, args.file)

    output_result(
        {"id": args.id, "column": {"id": target.id, "name": target.title}},
        f"Restored card {args.id} to {target.title}",
        args.json,
    )
    return 0


def card_delete(args) -> int:
    """Delete a card for good."""
    store = load_store_or_die(args.file, args.json)
    column_id, card = find_card(store, args.id, args.json)

    store.delete_card(column_id, card.id)
    save(store, args.file)

    output_result({"id": card.id}, f"Deleted card {card.id}", args.json)
    return 0


def card_paste(args) -> int:
    """Create cards from a pasted list read on stdin."""
    store = load_store_or_die(args.file, args.json)
    target = find_column(store, args.column, args.json)

    count = store.paste_cards(target.id, sys.stdin.read(), "before" if args.before else "after")
    if count:
        save(store, args.file)

    output_result(
        {"column": {"id": target.id, "name": target.title}, "inserted": count},
        f"Inserted {count} cards into {target.title}" if count else "No list items found on stdin",
        args.json,
    )
    return 0
