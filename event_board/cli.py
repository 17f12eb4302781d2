"""CLI argument parsing and validation for event_board.

Usage examples:
    uv run python -m event_board
    uv run python -m event_board --filter equal-love
    uv run python -m event_board --html --output-dir site
    uv run python -m event_board --interactive --verbose
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from event_board.config import ALL_SELECTOR, DEFAULT_OUTPUT_DIR
from event_board.services.filter_engine import selectors


@dataclass
class CLIArgs:
    # View
    selector: str
    interactive: bool

    # Output
    html: bool
    output_dir: str
    verbose: bool

    # Source
    strict: bool  # Surface fetch failures instead of showing "no events"
    page_size: int | None
    api_url: str | None


def parse_args(argv: list[str] | None = None) -> CLIArgs:
    parser = argparse.ArgumentParser(
        prog="event-board",
        description="Fetch, filter and display the event catalogue",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s                                  # all events, newest first
  %(prog)s --filter not-equal-me            # one group only
  %(prog)s --html --output-dir site         # static pages, one per filter
  %(prog)s --interactive                    # switch filters from the prompt
  %(prog)s --strict                         # exit 1 when the fetch fails
        """,
    )

    # View
    parser.add_argument(
        "--filter", "-f", dest="selector", choices=selectors(), default=ALL_SELECTOR,
        metavar="SELECTOR",
        help=f"Initial filter. Choices: {', '.join(selectors())} (default: {ALL_SELECTOR})",
    )
    parser.add_argument(
        "--interactive", action="store_true",
        help="Prompt for filter changes until 'q' is entered",
    )

    # Output
    parser.add_argument(
        "--html", action="store_true",
        help="Write static HTML pages (index.html + one per group) to --output-dir",
    )
    parser.add_argument(
        "--output-dir", default=DEFAULT_OUTPUT_DIR, dest="output_dir", metavar="DIR",
        help=f"Directory for --html output (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Print per-page fetch progress",
    )

    # Source
    parser.add_argument(
        "--strict", action="store_true",
        help="Treat a failed fetch as an error instead of an empty event list",
    )
    parser.add_argument(
        "--page-size", type=int, dest="page_size", metavar="N",
        help="Documents per page requested from the source (default: server default)",
    )
    parser.add_argument(
        "--api-url", dest="api_url", metavar="URL",
        help="Override the listing endpoint (default: EVENT_BOARD_API_URL or built-in)",
    )

    ns = parser.parse_args(argv)

    args = CLIArgs(
        selector=ns.selector,
        interactive=ns.interactive,
        html=ns.html,
        output_dir=ns.output_dir,
        verbose=ns.verbose,
        strict=ns.strict,
        page_size=ns.page_size,
        api_url=ns.api_url,
    )

    _validate_args(args)
    return args


def _validate_args(args: CLIArgs) -> None:
    if args.page_size is not None and args.page_size <= 0:
        print("Error: --page-size must be a positive integer.", file=sys.stderr)
        sys.exit(1)

    if args.api_url is not None and not args.api_url.startswith(("http://", "https://")):
        print(f"Error: --api-url must be an http(s) URL, got '{args.api_url}'", file=sys.stderr)
        sys.exit(1)
