"""Ordering and per-category counts over the full record collection."""

from __future__ import annotations

from typing import Iterable

from event_board.config import CATEGORY_CONFIG
from event_board.models import CategoryCounts, EventRecord


def sort_records(records: Iterable[EventRecord]) -> list[EventRecord]:
    """Most recent first; records with equal created_at keep fetch order.

    sorted() is stable with reverse=True as well, so ties are not reversed.
    """
    return sorted(records, key=lambda r: r.created_at, reverse=True)


def count_by_category(records: Iterable[EventRecord]) -> CategoryCounts:
    """Count records per configured category.

    total is the size of the whole collection; records whose category is not
    configured contribute to total only.
    """
    counts = {category: 0 for category in CATEGORY_CONFIG}
    total = 0
    for r in records:
        total += 1
        if r.category in counts:
            counts[r.category] += 1
    return CategoryCounts(by_category=counts, total=total)
