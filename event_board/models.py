"""Data model dataclasses for event_board.

Timestamps are epoch milliseconds (integers) unless noted.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CategoryInfo:
    """Static configuration for one event category."""

    reference_url: str  # official site URL; empty for the fallback category
    display_name: str


@dataclass(frozen=True)
class EventRecord:
    """Normalized representation of one event document."""

    id: str          # last segment of the document path
    name: str        # empty when the source has no name field
    category: str    # always a key of CATEGORY_CONFIG
    created_at: int  # document creation time, epoch millis


@dataclass(frozen=True)
class CategoryCounts:
    """Per-category record counts plus the size of the whole collection."""

    by_category: dict[str, int]
    total: int

    def count_of(self, category: str) -> int:
        return self.by_category.get(category, 0)


@dataclass
class FetchResult:
    """Outcome of one full paginated fetch.

    All-or-nothing: when error is set, records is always empty.
    """

    records: list[EventRecord] = field(default_factory=list)
    error: str | None = None
    pages_fetched: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BoardState:
    """Session state owned by the controller.

    records is the full, sorted collection and is never mutated after load;
    selector is the only value that changes over the session.
    """

    records: tuple[EventRecord, ...]
    counts: CategoryCounts
    selector: str = "all"
    fetch_error: str | None = None


@dataclass
class FilterControl:
    """One selectable filter control, tagged with the selector it applies."""

    selector: str
    label: str
    count: int
    active: bool = False


@dataclass
class RunMetrics:
    """Performance and metadata for one CLI invocation."""

    started_at: datetime.datetime
    finished_at: datetime.datetime | None = None
    pages_fetched: int = 0
    records_fetched: int = 0
    pages_written: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def elapsed_seconds(self) -> float | None:
        if self.finished_at:
            return (self.finished_at - self.started_at).total_seconds()
        return None
