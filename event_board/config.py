"""Application-level constants and configuration for event_board."""

from __future__ import annotations

import os
from dataclasses import dataclass

from event_board.models import CategoryInfo

# --- Categories ---
# Ordered: classification returns the first entry whose reference_url matches.
# The fallback entry has no reference URL, so only the empty string maps to it
# directly; every other unmatched URL falls through to it as well.
CATEGORY_CONFIG: dict[str, CategoryInfo] = {
    "equal-love": CategoryInfo(
        reference_url="https://equal-love.jp/",
        display_name="=LOVE",
    ),
    "not-equal-me": CategoryInfo(
        reference_url="https://not-equal-me.jp/",
        display_name="≠ME",
    ),
    "nearly-equal-joy": CategoryInfo(
        reference_url="https://nearly-equal-joy.jp/",
        display_name="≒JOY",
    ),
    "unknown": CategoryInfo(
        reference_url="",
        display_name="その他",
    ),
}

FALLBACK_CATEGORY = "unknown"
FALLBACK_DISPLAY_NAME = CATEGORY_CONFIG[FALLBACK_CATEGORY].display_name
ALL_SELECTOR = "all"

# --- Source document fields ---
DOCUMENT_NAME_FIELD = "event_name"
DOCUMENT_URL_FIELD = "official_site_url"

# --- Presentation ---
SHOP_BASE_URL = "https://monosys.net"
EMPTY_STATE_MESSAGE = "イベントが見つかりませんでした"
SHOP_LINK_LABEL = "ショップを開く"
ALL_LABEL = "すべて"
DEFAULT_OUTPUT_DIR = "site"


@dataclass
class AppConfig:
    api_url: str | None = None      # None → docstore default / EVENT_BOARD_API_URL
    page_size: int | None = None    # None → server default page size
    fail_soft: bool = True          # failed fetch renders as "no events"
    output_dir: str = DEFAULT_OUTPUT_DIR
    verbose: bool = False


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def load_config() -> AppConfig:
    """Build AppConfig from environment variables and defaults."""
    return AppConfig(
        api_url=os.getenv("EVENT_BOARD_API_URL") or None,
        page_size=_env_int("EVENT_BOARD_PAGE_SIZE"),
        fail_soft=_env_flag("EVENT_BOARD_FAIL_SOFT", True),
    )
