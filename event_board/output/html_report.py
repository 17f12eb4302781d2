"""Static HTML event board for event_board.

Builds a self-contained, browser-viewable page: stat cards, filter controls,
the event card grid (or an empty state), and a scroll-to-top anchor.

Mount points are keyed slots on an HtmlBoard:
    event-list           card grid or empty-state markup
    count-all            total record count
    count-<category>     per-category count shown on each filter control
    stat-<category>      per-category count shown on each stat card

Output: <output_dir>/index.html plus one <category>.html per category.
"""

from __future__ import annotations

import datetime
import html as _html_escape
from pathlib import Path
from typing import Sequence

from event_board.config import (
    ALL_LABEL,
    ALL_SELECTOR,
    CATEGORY_CONFIG,
    EMPTY_STATE_MESSAGE,
    FALLBACK_CATEGORY,
    SHOP_BASE_URL,
    SHOP_LINK_LABEL,
)
from event_board.models import BoardState, CategoryCounts, EventRecord, FilterControl
from event_board.services.classifier import display_name_of

EVENT_LIST_KEY = "event-list"
COUNT_ALL_KEY = "count-all"


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _e(s: object) -> str:
    """HTML-escape a value (quotes included, safe inside attributes)."""
    return _html_escape.escape(str(s))


def shop_link(record: EventRecord) -> str:
    """Shop URL: base, category and id joined by '/'."""
    return f"{SHOP_BASE_URL}/{record.category}/{record.id}"


def format_date(created_at: int, tz: datetime.tzinfo | None = None) -> str:
    """Format epoch millis as 'YYYY/MM/DD' (local calendar when tz is None)."""
    dt = datetime.datetime.fromtimestamp(created_at / 1000, tz=tz)
    return f"{dt.year:04d}/{dt.month:02d}/{dt.day:02d}"


def page_filename(selector: str) -> str:
    return "index.html" if selector == ALL_SELECTOR else f"{selector}.html"


# ---------------------------------------------------------------------------
# Event list
# ---------------------------------------------------------------------------


def render_empty_state() -> str:
    return f"""<div class="empty-state">
  <p>{_e(EMPTY_STATE_MESSAGE)}</p>
</div>"""


def render_event_card(record: EventRecord, tz: datetime.tzinfo | None = None) -> str:
    category = _e(record.category)
    return f"""<article class="event-card {category}">
  <a href="{_e(shop_link(record))}" target="_blank" rel="noopener noreferrer">
    <div class="event-header">
      <span class="group-badge {category}">{_e(display_name_of(record.category))}</span>
      <span class="event-date">{format_date(record.created_at, tz)}</span>
    </div>
    <h3 class="event-name">{_e(record.name)}</h3>
    <div class="event-footer"><span class="shop-link">{_e(SHOP_LINK_LABEL)} ↗</span></div>
  </a>
</article>"""


def render_events(records: Sequence[EventRecord], tz: datetime.tzinfo | None = None) -> str:
    """Card markup for records in the given order, or the empty state."""
    if not records:
        return render_empty_state()
    return "\n".join(render_event_card(r, tz) for r in records)


# ---------------------------------------------------------------------------
# Presentation surface
# ---------------------------------------------------------------------------


class HtmlBoard:
    """Presentation surface with keyed write targets and filter controls."""

    def __init__(self, counts: CategoryCounts, error: str | None = None) -> None:
        self._slots: dict[str, str] = {EVENT_LIST_KEY: ""}
        self._controls = [
            FilterControl(ALL_SELECTOR, ALL_LABEL, counts.total),
            *(
                FilterControl(c, info.display_name, counts.count_of(c))
                for c, info in CATEGORY_CONFIG.items()
            ),
        ]
        self.error = error
        self.slot(COUNT_ALL_KEY).write(str(counts.total))
        for category in CATEGORY_CONFIG:
            n = str(counts.count_of(category))
            self.slot(f"count-{category}").write(n)
            self.slot(f"stat-{category}").write(n)

    def slot(self, key: str) -> "_SlotWriter":
        """Write target for the mount point named key."""
        return _SlotWriter(self._slots, key)

    def read(self, key: str) -> str:
        return self._slots.get(key, "")

    def controls(self, selector: str | None = None) -> list[FilterControl]:
        """Filter controls, optionally only those tagged with selector."""
        if selector is None:
            return list(self._controls)
        return [c for c in self._controls if c.selector == selector]

    def set_active(self, selector: str) -> None:
        for control in self._controls:
            control.active = control.selector == selector

    def to_html(self, generated_at: datetime.datetime | None = None) -> str:
        generated_at = generated_at or datetime.datetime.now()
        return _build_html(self, generated_at)


class _SlotWriter:
    def __init__(self, slots: dict[str, str], key: str) -> None:
        self._slots = slots
        self._key = key

    def write(self, markup: str) -> None:
        """Replace the slot's content."""
        self._slots[self._key] = markup


def mount_events(board: HtmlBoard, records: Sequence[EventRecord], selector: str) -> None:
    """Render records into the event list and mark selector's control active."""
    board.slot(EVENT_LIST_KEY).write(render_events(records))
    board.set_active(selector)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def write_board(
    state: BoardState,
    output_dir: str,
    pages: dict[str, Sequence[EventRecord]],
    strict: bool = False,
) -> list[Path]:
    """Write one page per selector in pages. Returns the written paths.

    pages maps selector → visible records for that selector. When strict is
    set and the load failed, every page shows an error banner.
    """
    path = Path(output_dir)
    path.mkdir(parents=True, exist_ok=True)
    error = state.fetch_error if strict else None
    generated_at = datetime.datetime.now()
    written: list[Path] = []
    for selector, visible in pages.items():
        board = HtmlBoard(state.counts, error=error)
        mount_events(board, visible, selector)
        out = path / page_filename(selector)
        out.write_text(board.to_html(generated_at), encoding="utf-8")
        written.append(out)
    return written


# ---------------------------------------------------------------------------
# HTML builder
# ---------------------------------------------------------------------------


def _build_html(board: HtmlBoard, generated_at: datetime.datetime) -> str:
    date_str = generated_at.strftime("%Y/%m/%d %H:%M")
    error_banner = (
        f'<div class="error-banner">イベントの取得に失敗しました: {_e(board.error)}</div>'
        if board.error else ""
    )
    return f"""<!DOCTYPE html>
<html lang="ja">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width,initial-scale=1">
  <title>Event Board · {_e(date_str)}</title>
  <style>{_css()}</style>
</head>
<body id="top">

<header>
  <h1>Event Board</h1>
  <p class="header-sub">{_e(date_str)}</p>
  {_section_stats(board)}
</header>

<div class="container">
{error_banner}
{_section_filters(board)}
<section id="{EVENT_LIST_KEY}" class="event-list">
{board.read(EVENT_LIST_KEY)}
</section>
</div>

<a id="scroll-top" href="#top" aria-label="scroll to top">↑</a>

</body>
</html>"""


def _section_stats(board: HtmlBoard) -> str:
    cards = "\n".join(
        f'    <div class="stat-card {_e(c)}"><span class="stat-num" id="stat-{_e(c)}">'
        f'{_e(board.read(f"stat-{c}"))}</span>'
        f'<span class="stat-label">{_e(info.display_name)}</span></div>'
        for c, info in CATEGORY_CONFIG.items()
        if c != FALLBACK_CATEGORY
    )
    return f"""<div class="stats">
{cards}
  </div>"""


def _section_filters(board: HtmlBoard) -> str:
    buttons = "\n".join(
        f'  <a class="filter-btn{" active" if c.active else ""}" data-group="{_e(c.selector)}" '
        f'href="{_e(page_filename(c.selector))}">{_e(c.label)} '
        f'<span class="count" id="count-{_e(c.selector)}">{_e(board.read(f"count-{c.selector}"))}</span></a>'
        for c in board.controls()
    )
    return f"""<nav class="filters">
{buttons}
</nav>"""


# ---------------------------------------------------------------------------
# CSS
# ---------------------------------------------------------------------------


def _css() -> str:
    return """
:root {
  --pink: #e91e63;
  --blue: #1565c0;
  --amber: #f9a825;
  --gray: #546e7a;
  --border: #e0e0e0;
  --text: #212121;
  --font: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Hiragino Sans', sans-serif;
}

* { box-sizing: border-box; margin: 0; padding: 0; }

body { font-family: var(--font); color: var(--text); background: #f5f5f7; line-height: 1.5; }

header { background: #fff; padding: 16px 24px; border-bottom: 1px solid var(--border); }
h1 { font-size: 20px; }
.header-sub { font-size: 12px; color: var(--gray); }

.stats { display: grid; grid-template-columns: repeat(3, 1fr); gap: 10px; margin-top: 12px; }
.stat-card { background: #fafafa; border-radius: 8px; padding: 8px; text-align: center; }
.stat-num { display: block; font-size: 20px; font-weight: 700; }
.stat-label { display: block; font-size: 11px; color: var(--gray); }

.container { max-width: 1100px; margin: 0 auto; padding: 16px; }
.error-banner { background: #ffebee; color: #b71c1c; padding: 10px 14px; border-radius: 6px; margin-bottom: 12px; }

.filters { display: flex; flex-wrap: wrap; gap: 6px; margin-bottom: 16px; }
.filter-btn { padding: 6px 12px; border: 1px solid var(--border); border-radius: 16px; text-decoration: none; color: inherit; background: #fff; }
.filter-btn.active { background: var(--text); color: #fff; }
.filter-btn .count { font-size: 11px; opacity: .7; }

.event-list { display: grid; grid-template-columns: repeat(auto-fill, minmax(260px, 1fr)); gap: 12px; }
.event-card { background: #fff; border-radius: 10px; border-top: 4px solid var(--gray); }
.event-card.equal-love { border-top-color: var(--pink); }
.event-card.not-equal-me { border-top-color: var(--blue); }
.event-card.nearly-equal-joy { border-top-color: var(--amber); }
.event-card a { display: block; padding: 12px; text-decoration: none; color: inherit; }
.event-header { display: flex; justify-content: space-between; font-size: 12px; }
.group-badge { font-weight: 700; }
.event-date { color: var(--gray); }
.event-name { font-size: 15px; margin: 8px 0; }
.shop-link { font-size: 12px; color: var(--blue); }

.empty-state { grid-column: 1 / -1; text-align: center; padding: 48px 0; color: var(--gray); }

#scroll-top { position: fixed; right: 20px; bottom: 20px; width: 40px; height: 40px; border-radius: 50%;
  background: var(--text); color: #fff; text-align: center; line-height: 40px; text-decoration: none; }
"""
