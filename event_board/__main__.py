"""Entry point for `python -m event_board`.

Run with:
    uv run python -m event_board --help
    uv run python -m event_board --html
"""

from __future__ import annotations

import sys

from dotenv import load_dotenv

from event_board.cli import parse_args
from event_board.orchestrator import run


def main() -> None:
    load_dotenv()
    args = parse_args()
    sys.exit(run(args))


if __name__ == "__main__":
    main()
