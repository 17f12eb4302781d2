import datetime

import pytest

from event_board.config import EMPTY_STATE_MESSAGE, SHOP_BASE_URL
from event_board.models import BoardState, EventRecord
from event_board.output import html_report
from event_board.output.html_report import (
    HtmlBoard,
    format_date,
    mount_events,
    render_events,
    shop_link,
    write_board,
)
from event_board.services.aggregator import count_by_category

UTC = datetime.timezone.utc


def _ms(*args) -> int:
    return int(datetime.datetime(*args, tzinfo=UTC).timestamp()) * 1000


def test_shop_link_joins_base_category_and_id():
    record = EventRecord(id="abc", name="x", category="equal-love", created_at=0)

    assert shop_link(record) == f"{SHOP_BASE_URL}/equal-love/abc"


@pytest.mark.parametrize(
    "created_at, expected",
    [
        (_ms(2024, 1, 5, 12), "2024/01/05"),
        (_ms(2023, 12, 31, 23, 59), "2023/12/31"),
        (0, "1970/01/01"),
    ],
)
def test_format_date_zero_pads(created_at, expected):
    assert format_date(created_at, tz=UTC) == expected


def test_format_date_uses_given_calendar():
    jst = datetime.timezone(datetime.timedelta(hours=9))
    late_utc = _ms(2024, 3, 31, 20)

    assert format_date(late_utc, tz=UTC) == "2024/03/31"
    assert format_date(late_utc, tz=jst) == "2024/04/01"


def test_format_date_defaults_to_local_time():
    ms = _ms(2024, 6, 15, 12)
    local = datetime.datetime.fromtimestamp(ms / 1000)

    assert format_date(ms) == local.strftime("%Y/%m/%d")


def test_empty_records_render_empty_state_only():
    out = render_events([])

    assert "empty-state" in out
    assert EMPTY_STATE_MESSAGE in out
    assert "event-card" not in out


def test_cards_follow_given_order():
    records = [
        EventRecord("b", "Second", "not-equal-me", _ms(2024, 2, 1)),
        EventRecord("a", "First", "equal-love", _ms(2024, 1, 1)),
    ]

    out = render_events(records, tz=UTC)

    assert out.count("<article") == 2
    assert out.index("Second") < out.index("First")
    assert f'href="{SHOP_BASE_URL}/not-equal-me/b"' in out
    assert "≠ME" in out and "=LOVE" in out
    assert "2024/02/01" in out
    assert "empty-state" not in out


def test_names_are_escaped():
    record = EventRecord("x", '<script>alert("x")</script>', "unknown", 0)

    out = render_events([record])

    assert "<script>" not in out
    assert "&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt;" in out


def test_ids_are_escaped_inside_links():
    record = EventRecord('x"><img src=y>', "n", "equal-love", 0)

    out = render_events([record])

    assert "<img" not in out
    assert "&quot;&gt;&lt;img" in out


def _board(records):
    return HtmlBoard(count_by_category(records))


def test_board_slots_hold_counts():
    records = [
        EventRecord("1", "a", "equal-love", 1),
        EventRecord("2", "b", "equal-love", 2),
        EventRecord("3", "c", "unknown", 3),
    ]
    board = _board(records)

    assert board.read("count-all") == "3"
    assert board.read("count-equal-love") == "2"
    assert board.read("stat-equal-love") == "2"
    assert board.read("stat-not-equal-me") == "0"


def test_board_controls_enumerate_by_tag_and_track_active():
    board = _board([EventRecord("1", "a", "equal-love", 1)])

    mount_events(board, [], "equal-love")

    assert [c.selector for c in board.controls()][0] == "all"
    tagged = board.controls("equal-love")
    assert len(tagged) == 1 and tagged[0].active and tagged[0].count == 1
    assert not board.controls("all")[0].active
    assert board.controls("nope") == []


def test_mount_events_replaces_list_slot():
    record = EventRecord("1", "Only", "equal-love", 1)
    board = _board([record])

    mount_events(board, [record], "all")
    mount_events(board, [], "not-equal-me")

    assert "Only" not in board.read("event-list")
    assert EMPTY_STATE_MESSAGE in board.read("event-list")


def test_full_page_has_mount_points():
    record = EventRecord("1", "<b>n</b>", "equal-love", 1)
    board = _board([record])
    mount_events(board, [record], "all")

    page = board.to_html(datetime.datetime(2024, 1, 1))

    assert page.startswith("<!DOCTYPE html>")
    assert 'id="event-list"' in page
    assert 'id="count-all"' in page
    assert 'id="stat-equal-love"' in page
    assert 'id="stat-unknown"' not in page
    assert 'data-group="equal-love"' in page
    assert 'id="scroll-top"' in page
    assert 'class="filter-btn active" data-group="all"' in page
    assert "<b>n</b>" not in page
    assert '<div class="error-banner">' not in page


def test_error_banner_is_escaped():
    board = HtmlBoard(count_by_category([]), error="<oops>")

    page = board.to_html()

    assert '<div class="error-banner">' in page
    assert "&lt;oops&gt;" in page


def test_write_board_writes_one_page_per_selector(tmp_path):
    record = EventRecord("1", "Love event", "equal-love", 1)
    state = BoardState(records=(record,), counts=count_by_category([record]))
    pages = {"all": [record], "equal-love": [record], "not-equal-me": []}

    written = write_board(state, str(tmp_path / "site"), pages)

    assert [p.name for p in written] == ["index.html", "equal-love.html", "not-equal-me.html"]
    assert "Love event" in written[0].read_text(encoding="utf-8")
    assert html_report.EMPTY_STATE_MESSAGE in written[2].read_text(encoding="utf-8")


def test_write_board_shows_error_only_when_strict(tmp_path):
    state = BoardState(records=(), counts=count_by_category([]), fetch_error="HTTPError: 500")

    soft = write_board(state, str(tmp_path / "soft"), {"all": []})
    strict = write_board(state, str(tmp_path / "strict"), {"all": []}, strict=True)

    assert "イベントの取得に失敗しました" not in soft[0].read_text(encoding="utf-8")
    assert "HTTPError: 500" in strict[0].read_text(encoding="utf-8")
