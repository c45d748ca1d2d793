"""Handler for 'plainban init'."""

from pathlib import Path

from plainban.cli._common import load_store_or_die, output_json
from plainban.config import read_config
from plainban.model.column import new_column
from plainban.model.writer import save_board
from plainban.models import Density, default_board


def init_board(args) -> int:
    """Create a board file with the configured default columns."""
    path = Path(args.file)

    if path.exists():
        store = load_store_or_die(args.file, args.json)
        columns = [c.title for c in store.get_board().columns]
        if args.json:
            output_json({"file": str(path), "columns": columns, "created": False})
        else:
            print(f"Board already initialized at {path}")
        return 0

    config = read_config()
    board = default_board(args.title or path.stem)
    board.density = Density.parse(config["default_density"])
    board.columns = [new_column(title) for title in config["default_columns"]]
    path.parent.mkdir(parents=True, exist_ok=True)
    save_board(path, board)

    columns = [c.title for c in board.columns]
    if args.json:
        output_json({"file": str(path), "columns": columns, "created": True})
    else:
        print(f"Initialized board at {path}")
        print(f"Columns: {', '.join(columns)}")

    return 0
