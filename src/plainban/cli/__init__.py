"""CLI argument parser and dispatch for plainban."""

import argparse

from plainban.cli.board import board_fmt, board_get, board_meta, board_set, board_summary
from plainban.cli.card import (
    card_add,
    card_archive,
    card_check,
    card_delete,
    card_due,
    card_get,
    card_list,
    card_move,
    card_paste,
    card_restore,
    card_set,
)
from plainban.cli.column import (
    column_add,
    column_archive,
    column_clear,
    column_delete,
    column_list,
    column_move,
    column_rename,
    column_wip,
)
from plainban.cli.init import init_board


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--file", "-f", default="board.md", help="Path to board file (default: board.md)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("--verbose", "-v", action="store_true", help="Debug logging on stderr")

    parser = argparse.ArgumentParser(
        prog="plainban",
        description="Kanban boards in plain markdown",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- init ---
    init_p = nouns.add_parser("init", help="Create a board file", parents=[common])
    init_p.add_argument("--title", help="Board title (default: file name)")
    init_p.set_defaults(func=init_board)

    # --- board ---
    board_p = nouns.add_parser("board", help="Board operations", parents=[common])
    board_verbs = board_p.add_subparsers(dest="verb")

    board_summary_p = board_verbs.add_parser("summary", help="Show board summary", parents=[common])
    board_summary_p.set_defaults(func=board_summary)

    board_get_p = board_verbs.add_parser("get", help="Dump canonical board markdown", parents=[common])
    board_get_p.set_defaults(func=board_get)

    board_set_p = board_verbs.add_parser("set", help="Write board markdown from stdin", parents=[common])
    board_set_p.set_defaults(func=board_set)

    board_fmt_p = board_verbs.add_parser("fmt", help="Rewrite board file in canonical form", parents=[common])
    board_fmt_p.set_defaults(func=board_fmt)

    board_meta_p = board_verbs.add_parser("meta", help="Set title, description or density", parents=[common])
    board_meta_p.add_argument("--title", help="Board title")
    board_meta_p.add_argument("--description", help="Board description")
    board_meta_p.add_argument("--density", choices=["normal", "compact"], help="Card density")
    board_meta_p.set_defaults(func=board_meta)

    # board with no verb = summary
    board_p.set_defaults(func=board_summary)

    # --- card ---
    card_p = nouns.add_parser("card", help="Card operations", parents=[common])
    card_verbs = card_p.add_subparsers(dest="verb")

    card_list_p = card_verbs.add_parser("list", help="List cards", parents=[common])
    card_list_p.add_argument("--column", dest="column", help="Only this column (id, title or position)")
    card_list_p.add_argument("--query", "-q", help="Case-insensitive text filter")
    card_list_p.add_argument("--tag", "-t", help="Only cards with this #tag")
    card_list_p.add_argument("--archived", action="store_true", help="List archived cards instead")
    card_list_p.set_defaults(func=card_list)

    card_get_p = card_verbs.add_parser("get", help="Show a card", parents=[common])
    card_get_p.add_argument("id", help="Card ID")
    card_get_p.set_defaults(func=card_get)

    card_set_p = card_verbs.add_parser("set", help="Write card title/description from stdin", parents=[common])
    card_set_p.add_argument("id", help="Card ID")
    card_set_p.set_defaults(func=card_set)

    card_add_p = card_verbs.add_parser("add", help="Create a card", parents=[common])
    card_add_p.add_argument("title", nargs="?", default="", help="Card title")
    card_add_p.add_argument("--body", default="", help="Card description")
    card_add_p.add_argument("--column", dest="column", help="Target column (default: first)")
    card_add_p.add_argument("--due", help="Due date, YYYY-MM-DD")
    card_add_p.add_argument("--top", action="store_true", help="Add at the top of the column")
    card_add_p.set_defaults(func=card_add)

    card_due_p = card_verbs.add_parser("due", help="Set or clear a due date", parents=[common])
    card_due_p.add_argument("id", help="Card ID")
    card_due_p.add_argument("date", help="YYYY-MM-DD, or 'none' to clear")
    card_due_p.set_defaults(func=card_due)

    card_move_p = card_verbs.add_parser("move", help="Move a card", parents=[common])
    card_move_p.add_argument("id", help="Card ID")
    card_move_p.add_argument("--column", dest="column", required=True, help="Target column")
    card_move_p.add_argument("--position", type=int, help="Position in column (1-indexed)")
    card_move_p.set_defaults(func=card_move)

    card_check_p = card_verbs.add_parser("check", help="Mark a card done", parents=[common])
    card_check_p.add_argument("id", help="Card ID")
    card_check_p.add_argument("--undo", action="store_true", help="Mark as not done")
    card_check_p.set_defaults(func=card_check)

    card_archive_p = card_verbs.add_parser("archive", help="Archive a card", parents=[common])
    card_archive_p.add_argument("id", help="Card ID")
    card_archive_p.set_defaults(func=card_archive)

    card_restore_p = card_verbs.add_parser("restore", help="Restore an archived card", parents=[common])
    card_restore_p.add_argument("id", help="Card ID")
    card_restore_p.add_argument("--column", dest="column", required=True, help="Target column")
    card_restore_p.add_argument("--position", type=int, help="Position in column (1-indexed)")
    card_restore_p.set_defaults(func=card_restore)

    card_delete_p = card_verbs.add_parser("delete", help="Delete a card", parents=[common])
    card_delete_p.add_argument("id", help="Card ID")
    card_delete_p.set_defaults(func=card_delete)

    card_paste_p = card_verbs.add_parser("paste", help="Add cards from a list on stdin", parents=[common])
    card_paste_p.add_argument("--column", dest="column", required=True, help="Target column")
    card_paste_p.add_argument("--before", action="store_true", help="Insert at the top instead of the bottom")
    card_paste_p.set_defaults(func=card_paste)

    # card with no verb = list
    card_p.set_defaults(func=card_list, column=None, query=None, tag=None, archived=False)

    # --- column ---
    col_p = nouns.add_parser("column", help="Column operations", parents=[common])
    col_verbs = col_p.add_subparsers(dest="verb")

    col_list_p = col_verbs.add_parser("list", help="List columns", parents=[common])
    col_list_p.set_defaults(func=column_list)

    col_add_p = col_verbs.add_parser("add", help="Create a column", parents=[common])
    col_add_p.add_argument("name", help="Column name")
    col_add_p.add_argument("--wip", type=int, help="WIP limit")
    col_add_p.set_defaults(func=column_add)

    col_rename_p = col_verbs.add_parser("rename", help="Rename a column", parents=[common])
    col_rename_p.add_argument("id", help="Column ID")
    col_rename_p.add_argument("new_name", help="New column name")
    col_rename_p.set_defaults(func=column_rename)

    col_move_p = col_verbs.add_parser("move", help="Move a column", parents=[common])
    col_move_p.add_argument("id", help="Column ID")
    col_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    col_move_p.set_defaults(func=column_move)

    col_wip_p = col_verbs.add_parser("wip", help="Set a column's WIP limit", parents=[common])
    col_wip_p.add_argument("id", help="Column ID")
    col_wip_p.add_argument("limit", help="Card limit, or 'none' to clear")
    col_wip_p.set_defaults(func=column_wip)

    col_delete_p = col_verbs.add_parser("delete", help="Delete a column and its cards", parents=[common])
    col_delete_p.add_argument("id", help="Column ID")
    col_delete_p.set_defaults(func=column_delete)

    col_clear_p = col_verbs.add_parser("clear", help="Delete every card in a column", parents=[common])
    col_clear_p.add_argument("id", help="Column ID")
    col_clear_p.set_defaults(func=column_clear)

    col_archive_p = col_verbs.add_parser("archive", help="Archive every card in a column", parents=[common])
    col_archive_p.add_argument("id", help="Column ID")
    col_archive_p.set_defaults(func=column_archive)

    # column with no verb = list
    col_p.set_defaults(func=column_list)

    return parser
