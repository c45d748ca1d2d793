"""Handlers for 'plainban board' commands."""

import sys
from pathlib import Path

from plainban.cli._common import (
    build_column_summaries,
    error,
    format_column_line,
    load_store_or_die,
    output_json,
    output_result,
    save,
)
from plainban.model.loader import parse_board
from plainban.model.writer import save_board
from plainban.parser import BoardParseError


def board_summary(args) -> int:
    """Show board summary: title, columns, card counts."""
    store = load_store_or_die(args.file, args.json)
    board = store.get_board()
    columns = build_column_summaries(board)

    if args.json:
        output_json(
            {
                "title": board.title,
                "description": board.description,
                "density": board.density.value,
                "columns": columns,
                "archived": len(board.archive),
            }
        )
    else:
        print(board.title)
        if board.description:
            print(board.description)
        for c in columns:
            print(format_column_line(c, indent="  "))
        if board.archive:
            print(f"  archive: {len(board.archive)}")

    return 0


def board_get(args) -> int:
    """Dump the board's canonical markdown."""
    store = load_store_or_die(args.file, args.json)
    text = store.to_text()

    if args.json:
        output_json({"title": store.get_board().title, "markdown": text})
    else:
        sys.stdout.write(text)

    return 0


def board_set(args) -> int:
    """Replace the board file with markdown read from stdin."""
    text = sys.stdin.read()
    try:
        board = parse_board(text)
    except BoardParseError as e:
        error(f"Could not read board from stdin: {e}", args.json)

    save_board(args.file, board)
    output_result({"file": args.file}, f"Updated board {args.file}", args.json)
    return 0


def board_fmt(args) -> int:
    """Rewrite the board file in canonical form."""
    store = load_store_or_die(args.file, args.json)
    before = Path(args.file).read_text(encoding="utf-8")
    after = store.to_text()
    changed = before != after
    if changed:
        save(store, args.file)

    output_result(
        {"file": args.file, "changed": changed},
        f"Formatted {args.file}" if changed else f"{args.file} already canonical",
        args.json,
    )
    return 0


def board_meta(args) -> int:
    """Update board title, description, or density."""
    store = load_store_or_die(args.file, args.json)
    board = store.get_board()

    store.set_board_metadata(
        title=args.title if args.title is not None else board.title,
        description=args.description if args.description is not None else board.description,
        density=args.density if args.density is not None else board.density,
    )
    save(store, args.file)

    board = store.get_board()
    output_result(
        {"title": board.title, "description": board.description, "density": board.density.value},
        f"Updated board {board.title}",
        args.json,
    )
    return 0
