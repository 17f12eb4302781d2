"""Top-level coordinator for event_board.

Owns the BoardState for the session: fetches once, sorts and counts once,
then drives the filter-selection state machine. Every selection runs the
filter engine and then the renderer, in that order.

run() never raises. Fetch failures are logged to metrics.errors; with the
fail-soft policy they render as "no events" (exit 0), otherwise as an error
state (exit 1).
"""

from __future__ import annotations

import datetime
from pathlib import Path

from rich.prompt import Prompt

from event_board.cli import CLIArgs
from event_board.config import ALL_SELECTOR, AppConfig, load_config
from event_board.models import BoardState, EventRecord, RunMetrics
from event_board.output import html_report, terminal
from event_board.output.html_report import HtmlBoard
from event_board.services import aggregator, event_fetcher, filter_engine
from event_board.services.event_fetcher import PageLister, ProgressCallback

_QUIT = "q"


def load_board(
    config: AppConfig,
    progress: ProgressCallback | None = None,
    list_page: PageLister | None = None,
    metrics: RunMetrics | None = None,
) -> BoardState:
    """Fetch the full collection, sort it and count it. Runs once per session.

    A failed fetch always yields an empty board; the error is reported via
    progress and kept on the state so a strict caller can surface it.
    """
    result = event_fetcher.fetch_result(
        list_page,
        page_size=config.page_size,
        api_url=config.api_url,
        progress=progress,
    )
    if metrics is not None:
        metrics.pages_fetched = result.pages_fetched
    if not result.ok:
        if progress:
            progress(f"Fetch error: {result.error}")
        if metrics is not None:
            metrics.errors.append(f"Fetch failed: {result.error}")

    records = aggregator.sort_records(result.records)
    if metrics is not None:
        metrics.records_fetched = len(records)
    return BoardState(
        records=tuple(records),
        counts=aggregator.count_by_category(records),
        fetch_error=result.error,
    )


def select(
    state: BoardState,
    selector: str,
    board: HtmlBoard | None = None,
) -> list[EventRecord]:
    """Selection transition: set selector, filter, then render onto board.

    Raises ValueError for a selector that is neither "all" nor a configured
    category; the state is left unchanged.
    """
    if not filter_engine.is_valid_selector(selector):
        raise ValueError(f"Unknown selector: {selector!r}")
    state.selector = selector
    visible = filter_engine.filter_records(state.records, selector)
    if board is not None:
        html_report.mount_events(board, visible, selector)
    return visible


def run(args: CLIArgs, list_page: PageLister | None = None) -> int:
    """Main application entry point. Returns 0 on success, 1 on error."""
    metrics = RunMetrics(started_at=datetime.datetime.now())
    config = _config_from_args(args)

    progress = terminal.print_progress if config.verbose else None
    state = load_board(config, progress=progress, list_page=list_page, metrics=metrics)
    terminal.console.print(f"[dim]Loaded {len(state.records)} events[/dim]")

    failed_hard = state.fetch_error is not None and not config.fail_soft
    if state.fetch_error is not None and not config.verbose:
        terminal.print_fetch_error(state.fetch_error)

    exit_code = 1 if failed_hard else 0
    try:
        if args.html:
            pages = {s: select(state, s) for s in filter_engine.selectors()}
            written = html_report.write_board(
                state, config.output_dir, pages, strict=not config.fail_soft
            )
            metrics.pages_written = len(written)
            terminal.console.print(
                f"[green]HTML saved → {_index_path(written)}[/green]"
            )

        if not failed_hard:
            terminal.print_counts(state.counts)
            if args.interactive:
                _interactive_loop(state, args.selector)
            else:
                _show(state, args.selector)
    except OSError as exc:
        terminal.console.print(f"[red]Failed to write output: {exc}[/red]")
        metrics.errors.append(str(exc))
        exit_code = 1

    metrics.finished_at = datetime.datetime.now()
    terminal.print_run_summary(metrics)
    return exit_code


def _index_path(paths: list[Path]) -> str:
    """Path of the "all" page among written pages (first page as fallback)."""
    index_name = html_report.page_filename(ALL_SELECTOR)
    for p in paths:
        if p.name == index_name:
            return str(p)
    return str(paths[0]) if paths else ""


def _show(state: BoardState, selector: str) -> None:
    visible = select(state, selector)
    terminal.print_events(visible, title=f"Events · {selector}")


def _interactive_loop(state: BoardState, initial: str) -> None:
    """Filter-selection state machine in the terminal. 'q' leaves the loop."""
    choices = [*filter_engine.selectors(), _QUIT]
    _show(state, initial)
    while True:
        try:
            selector = Prompt.ask(
                "Filter", choices=choices, default=state.selector, console=terminal.console
            )
        except (EOFError, KeyboardInterrupt):
            return
        if selector == _QUIT:
            return
        _show(state, selector)


def _config_from_args(args: CLIArgs) -> AppConfig:
    config = load_config()
    if args.api_url:
        config.api_url = args.api_url
    if args.page_size:
        config.page_size = args.page_size
    if args.strict:
        config.fail_soft = False
    config.output_dir = args.output_dir
    config.verbose = args.verbose
    return config
