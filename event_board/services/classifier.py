"""Official-site URL → category classification.

Matching is exact string equality against CATEGORY_CONFIG reference URLs:
case-sensitive, no trailing-slash or scheme normalization. The first entry in
configuration order wins; anything unmatched is the fallback category.
"""

from __future__ import annotations

from event_board.config import CATEGORY_CONFIG, FALLBACK_CATEGORY, FALLBACK_DISPLAY_NAME


def _build_reverse_lookup() -> dict[str, str]:
    lookup: dict[str, str] = {}
    for category, info in CATEGORY_CONFIG.items():
        # setdefault keeps the first category when two share a URL
        lookup.setdefault(info.reference_url, category)
    return lookup


_URL_TO_CATEGORY = _build_reverse_lookup()


def classify(url: str) -> str:
    """Return the category whose reference URL equals url, else the fallback."""
    return _URL_TO_CATEGORY.get(url, FALLBACK_CATEGORY)


def display_name_of(category: str) -> str:
    """Configured display name, or the fallback name for an unknown category."""
    info = CATEGORY_CONFIG.get(category)
    return info.display_name if info is not None else FALLBACK_DISPLAY_NAME
