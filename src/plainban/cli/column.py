"""Handlers for 'plainban column' commands."""

from plainban.cli._common import (
    build_column_summaries,
    error,
    find_column,
    format_column_line,
    load_store_or_die,
    output_json,
    output_result,
    save,
)


def column_list(args) -> int:
    """List columns with card counts."""
    store = load_store_or_die(args.file, args.json)
    columns = build_column_summaries(store.get_board())

    if args.json:
        output_json(columns)
    else:
        for c in columns:
            print(format_column_line(c))

    return 0


def column_add(args) -> int:
    """Append a new column."""
    store = load_store_or_die(args.file, args.json)
    col = store.add_column(args.name, wip_limit=args.wip)
    save(store, args.file)

    output_result(
        {"id": col.id, "name": col.title, "wip_limit": col.wip_limit},
        f"Created column {col.id} ({col.title})",
        args.json,
    )
    return 0


def column_rename(args) -> int:
    """Rename a column."""
    store = load_store_or_die(args.file, args.json)
    col = find_column(store, args.id, args.json)
    if not store.rename_column(col.id, args.new_name):
        error("Column name cannot be empty.", args.json)
    save(store, args.file)

    output_result(
        {"id": col.id, "name": args.new_name.strip()},
        f"Renamed column {col.id} to {args.new_name.strip()}",
        args.json,
    )
    return 0


def column_move(args) -> int:
    """Move a column to a 1-indexed position."""
    store = load_store_or_die(args.file, args.json)
    col = find_column(store, args.id, args.json)
    store.move_column(col.id, args.position - 1)
    save(store, args.file)

    order = [c.id for c in store.get_board().columns]
    output_result(
        {"id": col.id, "position": order.index(col.id) + 1, "order": order},
        f"Moved column {col.title} to position {order.index(col.id) + 1}",
        args.json,
    )
    return 0


def column_wip(args) -> int:
    """Set or clear a column's WIP limit ("none" clears it)."""
    store = load_store_or_die(args.file, args.json)
    col = find_column(store, args.id, args.json)

    if args.limit.lower() in ("none", "off", ""):
        limit = None
    else:
        try:
            limit = int(args.limit)
        except ValueError:
            error(f"WIP limit must be a number or 'none', not '{args.limit}'.", args.json)
    store.set_column_wip_limit(col.id, limit)
    save(store, args.file)

    limit = store.get_board().column(col.id).wip_limit
    if limit is None:
        text = f"WIP limit for {col.title} cleared"
    else:
        text = f"WIP limit for {col.title}: {limit}"
    output_result({"id": col.id, "wip_limit": limit}, text, args.json)
    return 0


def column_delete(args) -> int:
    """Delete a column along with its cards."""
    store = load_store_or_die(args.file, args.json)
    col = find_column(store, args.id, args.json)
    store.delete_column(col.id)
    save(store, args.file)

    output_result(
        {"id": col.id, "deleted_cards": len(col.cards)},
        f"Deleted column {col.title} ({len(col.cards)} cards)",
        args.json,
    )
    return 0


def column_clear(args) -> int:
    """Delete every card in a column."""
    store = load_store_or_die(args.file, args.json)
    col = find_column(store, args.id, args.json)
    count = store.clear_column_cards(col.id)
    if count:
        save(store, args.file)

    output_result({"id": col.id, "deleted_cards": count}, f"Cleared {count} cards from {col.title}", args.json)
    return 0


def column_archive(args) -> int:
    """Archive every card in a column."""
    store = load_store_or_die(args.file, args.json)
    col = find_column(store, args.id, args.json)
    count = store.archive_column_cards(col.id)
    if count:
        save(store, args.file)

    output_result({"id": col.id, "archived": count}, f"Archived {count} cards from {col.title}", args.json)
    return 0
