"""Entry point for plainban CLI."""

import logging
import sys

from plainban.cli import build_parser
from plainban.config import read_config


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    level = logging.getLevelName(str(read_config()["log_level"]).upper())
    if args.verbose:
        level = logging.DEBUG
    elif not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=level,
    )

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
