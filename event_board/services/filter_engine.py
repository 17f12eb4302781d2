"""Selector-driven views over the record collection.

Filtering never mutates its input and always returns a new list, so the
same selector applied twice gives equal results.
"""

from __future__ import annotations

from typing import Sequence

from event_board.config import ALL_SELECTOR, CATEGORY_CONFIG
from event_board.models import EventRecord


def selectors() -> list[str]:
    """All valid selectors: the "all" wildcard first, then categories in config order."""
    return [ALL_SELECTOR, *CATEGORY_CONFIG]


def is_valid_selector(selector: str) -> bool:
    return selector == ALL_SELECTOR or selector in CATEGORY_CONFIG


def filter_records(records: Sequence[EventRecord], selector: str) -> list[EventRecord]:
    """Records matching selector, in their given order.

    "all" returns every record. A selector naming no configured category
    simply matches nothing.
    """
    if selector == ALL_SELECTOR:
        return list(records)
    return [r for r in records if r.category == selector]
