"""
Week view layout: day offsets and spans, row packing and the week header.
"""

from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence

from . import date_utils
from .date_utils import DAYS_IN_WEEK, SUNDAY
from .debug import debug_print
from .events import CalendarEvent, WeekDay, WeekViewEvent, WeekViewEventRow
from .period import filter_in_period


RowPacker = Callable[[Sequence[WeekViewEvent]], list[WeekViewEventRow]]


def day_offset(event: CalendarEvent, week_start: datetime) -> int:
    """Get the 0-based day column where the event starts within the week."""
    event_day = date_utils.start_of_day(date_utils.same_zone(event.start, week_start))
    if event_day > week_start:
        return date_utils.diff_days(event_day, week_start)
    return 0


def day_span(event: CalendarEvent, offset: int, week_start: datetime) -> int:
    """
    Get the number of day columns the event covers within the week.

    Days are counted inclusively, so an event ending at any time on the
    day after it started spans two columns. The result never reaches past
    the last column of the week.
    """
    span = 1
    if event.end is not None:
        start = date_utils.same_zone(event.start, week_start)
        end = date_utils.same_zone(event.end, week_start)
        begin = week_start if start < week_start else start
        last_minute = date_utils.add_minutes(date_utils.end_of_day(end), 1)
        span = date_utils.diff_days(last_minute, date_utils.start_of_day(begin))
        if span > DAYS_IN_WEEK:
            span = DAYS_IN_WEEK

    total_length = offset + span
    if total_length > DAYS_IN_WEEK:
        span -= total_length - DAYS_IN_WEEK
    return span


def build_week_day(date: datetime, now: datetime) -> WeekDay:
    """Describe a day relative to ``now``."""
    today = date_utils.start_of_day(now)
    return WeekDay(
        date=date,
        is_past=date < today,
        is_today=date == today,
        is_future=date > today,
        is_weekend=date_utils.is_weekend(date)
    )


def get_week_view_header(
    view_date: datetime,
    week_start: int = SUNDAY,
    now: Optional[datetime] = None
) -> list[WeekDay]:
    """Get the seven days of the week containing ``view_date``."""
    if now is None:
        now = date_utils.current_time(view_date)
    start = date_utils.start_of_week(view_date, week_start)
    return [
        build_week_day(date_utils.add_days(start, i), now)
        for i in range(DAYS_IN_WEEK)
    ]


def _sort_for_packing(week_events: list[WeekViewEvent]) -> list[WeekViewEvent]:
    # Earliest start first; on equal starts the later-ending event first.
    by_end = sorted(week_events, key=lambda item: item.event.effective_end, reverse=True)
    return sorted(by_end, key=lambda item: item.event.start)


def greedy_row_packer(week_events: Sequence[WeekViewEvent]) -> list[WeekViewEventRow]:
    """
    Pack sorted week events into rows in a single left-to-right pass.

    Each unplaced event seeds a new row. The remaining unplaced events are
    then scanned in order and appended when they start at or after the
    current end of the row and still fit in the week. Appended events are
    rebased so their offset counts from the end of the row content before
    them. This favors few rows over balanced rows; it is not an optimal
    bin packing.
    """
    rows: list[WeekViewEventRow] = []
    placed: set[int] = set()

    for index, seed in enumerate(week_events):
        if index in placed:
            continue
        placed.add(index)
        row = [seed]
        row_span = seed.offset + seed.span

        for next_index in range(index + 1, len(week_events)):
            candidate = week_events[next_index]
            if next_index in placed:
                continue
            if candidate.offset >= row_span and row_span + candidate.span <= DAYS_IN_WEEK:
                rebased = replace(candidate, offset=candidate.offset - row_span)
                row_span += rebased.offset + rebased.span
                placed.add(next_index)
                row.append(rebased)

        rows.append(WeekViewEventRow(row=row))

    return rows


def get_week_view(
    events: Sequence[CalendarEvent],
    view_date: datetime,
    week_start: int = SUNDAY,
    packer: RowPacker = greedy_row_packer
) -> list[WeekViewEventRow]:
    """
    Lay out the events of the week containing ``view_date`` in rows.

    Args:
        events: Events to lay out; events outside the week are ignored.
        view_date: Any instant within the target week.
        week_start: Weekday number the week starts on (0=Monday, 6=Sunday).
        packer: Strategy assigning the sorted week events to rows.

    Returns:
        Rows of WeekViewEvent, ordered by the sorted position of the event
        that opened each row.
    """
    start_of_week = date_utils.start_of_week(view_date, week_start)
    end_of_week = date_utils.end_of_week(view_date, week_start)

    week_events = []
    for event in filter_in_period(events, start_of_week, end_of_week):
        offset = day_offset(event, start_of_week)
        week_events.append(WeekViewEvent(
            event=event,
            offset=offset,
            span=day_span(event, offset, start_of_week),
            extends_left=event.start < start_of_week,
            extends_right=event.effective_end > end_of_week
        ))

    rows = packer(_sort_for_packing(week_events))
    debug_print("WEEK", f"{start_of_week.date()}..{end_of_week.date()}: "
                        f"{len(week_events)} events in {len(rows)} rows")
    return rows
