"""Rich terminal output for event_board.

Renders the event table, category counts, fetch errors and run summaries
using the `rich` library. Event names come from the remote source, so they
are always passed as Text (never as markup strings).
"""

from __future__ import annotations

import datetime
from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from event_board.config import ALL_LABEL, CATEGORY_CONFIG, EMPTY_STATE_MESSAGE
from event_board.models import CategoryCounts, EventRecord, RunMetrics
from event_board.output.html_report import format_date, shop_link
from event_board.services.classifier import display_name_of

console = Console()

_CATEGORY_STYLES: dict[str, str] = {
    "equal-love": "magenta",
    "not-equal-me": "blue",
    "nearly-equal-joy": "yellow",
}


def print_events(
    records: Sequence[EventRecord],
    title: str = "Events",
    tz: datetime.tzinfo | None = None,
) -> None:
    """Print one row per record in the given order, or the empty state."""
    if not records:
        console.print(f"[yellow]{EMPTY_STATE_MESSAGE}[/yellow]")
        return

    tbl = Table(box=box.SIMPLE_HEAVY, show_header=True, header_style="bold magenta", title=title)
    tbl.add_column("#", justify="right", width=4)
    tbl.add_column("Date", width=10, no_wrap=True)
    tbl.add_column("Group", width=8, no_wrap=True)
    tbl.add_column("Event")
    tbl.add_column("Shop", style="dim", no_wrap=True)

    for i, r in enumerate(records, 1):
        tbl.add_row(
            str(i),
            format_date(r.created_at, tz),
            Text(display_name_of(r.category), style=_CATEGORY_STYLES.get(r.category, "")),
            Text(r.name),
            Text(shop_link(r)),
        )

    console.print(tbl)


def print_counts(counts: CategoryCounts) -> None:
    """One-line summary of the total and per-category counts."""
    parts = [f"{ALL_LABEL}: {counts.total}"]
    for category, info in CATEGORY_CONFIG.items():
        parts.append(f"{info.display_name}: {counts.count_of(category)}")
    console.print(Text(" | ".join(parts), style="bold"))


def print_progress(message: str) -> None:
    console.print(Text(message, style="dim"))


def print_fetch_error(message: str) -> None:
    console.print(Text(f"Fetch error: {message}", style="red"))


def print_run_summary(metrics: RunMetrics) -> None:
    """Print a compact one-line run summary with elapsed time and error count."""
    console.print(f"\n[dim]{'─' * 62}[/dim]")
    parts = [
        f"Pages: {metrics.pages_fetched}",
        f"Events: {metrics.records_fetched}",
    ]
    if metrics.pages_written:
        parts.append(f"HTML pages: {metrics.pages_written}")
    if metrics.elapsed_seconds is not None:
        parts.append(f"Time: {metrics.elapsed_seconds:.1f}s")
    console.print(f"[dim]{' | '.join(parts)}[/dim]")
    for err in metrics.errors:
        console.print(Text(f"⚠ {err}", style="red"))
