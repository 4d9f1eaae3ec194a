import random
from datetime import datetime, timedelta

import pytz

from calendar_layout import CalendarEvent, WeekViewEvent
from calendar_layout.date_utils import MONDAY
from calendar_layout.week_view import (
    day_offset, day_span, get_week_view, get_week_view_header, greedy_row_packer
)


WEEK_START = datetime(2026, 4, 5)  # Sunday


def _positions(row):
    """Absolute (start, end) day ranges of the events in a row."""
    cursor = 0
    ranges = []
    for item in row.row:
        start = cursor + item.offset
        cursor = start + item.span
        ranges.append((start, cursor))
    return ranges


def test_day_offset_counts_from_week_start(make_event):
    assert day_offset(make_event(datetime(2026, 4, 5, 9)), WEEK_START) == 0
    assert day_offset(make_event(datetime(2026, 4, 8, 23, 30)), WEEK_START) == 3
    assert day_offset(make_event(datetime(2026, 4, 1, 9)), WEEK_START) == 0


def test_day_span_is_inclusive_day_count(make_event):
    event = make_event(datetime(2026, 4, 6, 22), datetime(2026, 4, 7, 1))
    assert day_span(event, 1, WEEK_START) == 2


def test_day_span_without_end_is_one(make_event):
    assert day_span(make_event(datetime(2026, 4, 11, 9)), 6, WEEK_START) == 1


def test_day_span_counts_from_week_start_when_event_starts_earlier(make_event):
    event = make_event(datetime(2026, 4, 2, 9), datetime(2026, 4, 7, 12))
    assert day_span(event, 0, WEEK_START) == 3


def test_day_span_truncated_at_week_end(make_event):
    event = make_event(datetime(2026, 4, 10, 9), datetime(2026, 4, 14, 9))
    assert day_span(event, 5, WEEK_START) == 2


def test_single_event_week_view(make_event, week_date):
    event = make_event(datetime(2026, 4, 6, 10), datetime(2026, 4, 6, 11))
    rows = get_week_view([event], week_date)

    assert len(rows) == 1
    assert len(rows[0].row) == 1
    item = rows[0].row[0]
    assert item.event is event
    assert (item.offset, item.span) == (1, 1)
    assert not item.extends_left
    assert not item.extends_right


def test_eight_day_event_capped_at_seven(make_event, week_date):
    event = make_event(datetime(2026, 4, 5, 9), datetime(2026, 4, 12, 9))
    item = get_week_view([event], week_date)[0].row[0]

    assert item.offset == 0
    assert item.span == 7
    assert not item.extends_left
    assert item.extends_right


def test_event_from_previous_week_extends_left(make_event, week_date):
    event = make_event(datetime(2026, 4, 2, 9), datetime(2026, 4, 7, 12))
    item = get_week_view([event], week_date)[0].row[0]

    assert (item.offset, item.span) == (0, 3)
    assert item.extends_left
    assert not item.extends_right


def test_monday_week_start(make_event, week_date):
    event = make_event(datetime(2026, 4, 6, 10), datetime(2026, 4, 6, 11))
    item = get_week_view([event], week_date, week_start=MONDAY)[0].row[0]
    assert item.offset == 0


def test_events_outside_week_are_ignored(make_event, week_date):
    events = [
        make_event(datetime(2026, 3, 30, 9), datetime(2026, 3, 30, 10)),
        make_event(datetime(2026, 4, 13, 9)),
    ]
    assert get_week_view(events, week_date) == []


def test_rows_are_packed_left_to_right(make_event, week_date):
    a = make_event(datetime(2026, 4, 5, 9), datetime(2026, 4, 6, 10), "a")
    b = make_event(datetime(2026, 4, 7, 9), datetime(2026, 4, 7, 10), "b")
    c = make_event(datetime(2026, 4, 6, 12), datetime(2026, 4, 6, 13), "c")
    d = make_event(datetime(2026, 4, 9, 9), datetime(2026, 4, 11, 10), "d")

    rows = get_week_view([d, c, b, a], week_date)

    assert [[(i.event.title, i.offset, i.span) for i in r.row] for r in rows] == [
        [("a", 0, 2), ("b", 0, 1), ("d", 1, 3)],
        [("c", 1, 1)],
    ]
    assert _positions(rows[0]) == [(0, 2), (2, 3), (4, 7)]


def test_equal_starts_put_longer_event_first(make_event, week_date):
    short = make_event(datetime(2026, 4, 6, 9), datetime(2026, 4, 6, 10), "short")
    long = make_event(datetime(2026, 4, 6, 9), datetime(2026, 4, 8, 10), "long")

    rows = get_week_view([short, long], week_date)

    assert [r.row[0].event.title for r in rows] == ["long", "short"]


def test_packer_does_not_modify_its_input():
    event = CalendarEvent(start=datetime(2026, 4, 8, 9))
    first = WeekViewEvent(event, 0, 2, False, False)
    second = WeekViewEvent(event, 3, 1, False, False)

    rows = greedy_row_packer([first, second])

    assert second.offset == 3
    assert rows[0].row[1].offset == 1
    assert rows[0].row[1] is not second


def test_custom_packer_is_used(make_event, week_date):
    events = [
        make_event(datetime(2026, 4, 6, 9), datetime(2026, 4, 6, 10)),
        make_event(datetime(2026, 4, 8, 9), datetime(2026, 4, 8, 10)),
    ]

    def one_per_row(week_events):
        from calendar_layout import WeekViewEventRow
        return [WeekViewEventRow(row=[item]) for item in week_events]

    rows = get_week_view(events, week_date, packer=one_per_row)
    assert [r.row[0].offset for r in rows] == [1, 3]


def test_random_weeks_keep_row_invariants(week_date):
    rng = random.Random(42)
    base = datetime(2026, 3, 28)
    events = []
    for _ in range(80):
        start = base + timedelta(minutes=rng.randrange(0, 21 * 24 * 60))
        end = None
        if rng.random() < 0.8:
            end = start + timedelta(minutes=rng.randrange(0, 10 * 24 * 60))
        events.append(CalendarEvent(start=start, end=end))

    rows = get_week_view(events, week_date)

    assert sum(len(r.row) for r in rows) > 0
    for row in rows:
        previous_end = 0
        for item, (start, end) in zip(row.row, _positions(row)):
            assert item.offset >= 0
            assert item.span >= 1
            assert start >= previous_end
            assert end <= 7
            previous_end = end


def test_week_view_is_idempotent(make_event, week_date):
    def build():
        return [
            make_event(datetime(2026, 4, 5, 9), datetime(2026, 4, 6, 10)),
            make_event(datetime(2026, 4, 7, 9)),
            make_event(datetime(2026, 4, 6, 12), datetime(2026, 4, 9, 13)),
        ]

    assert get_week_view(build(), week_date) == get_week_view(build(), week_date)


def test_week_view_header(week_date):
    now = datetime(2026, 4, 8, 15, 30)
    days = get_week_view_header(week_date, now=now)

    assert [d.date for d in days] == [datetime(2026, 4, 5 + i) for i in range(7)]
    assert [d.is_past for d in days] == [True, True, True, False, False, False, False]
    assert [d.is_today for d in days] == [False, False, False, True, False, False, False]
    assert [d.is_future for d in days] == [False, False, False, False, True, True, True]
    assert [d.is_weekend for d in days] == [True, False, False, False, False, False, True]


def test_week_view_header_monday_start(week_date):
    days = get_week_view_header(week_date, week_start=MONDAY, now=week_date)
    assert days[0].date == datetime(2026, 4, 6)
    assert days[-1].date == datetime(2026, 4, 12)
    assert days[-1].is_weekend


def test_event_in_other_timezone_uses_view_day_boundaries():
    new_york = pytz.timezone("America/New_York")
    view_date = new_york.localize(datetime(2026, 4, 8, 12, 0))
    # Sunday 22:00 in New York
    sunday_night = CalendarEvent(
        start=pytz.UTC.localize(datetime(2026, 4, 6, 2, 0)),
        end=pytz.UTC.localize(datetime(2026, 4, 6, 3, 0))
    )

    item = get_week_view([sunday_night], view_date)[0].row[0]

    assert (item.offset, item.span) == (0, 1)


def test_day_span_converts_end_to_week_timezone():
    new_york = pytz.timezone("America/New_York")
    week_start = new_york.localize(datetime(2026, 4, 5))
    # Monday 20:00 to Tuesday 23:00 in New York; Wednesday already in UTC
    event = CalendarEvent(
        start=new_york.localize(datetime(2026, 4, 6, 20, 0)),
        end=pytz.UTC.localize(datetime(2026, 4, 8, 3, 0))
    )

    assert day_span(event, 1, week_start) == 2
