"""
Month view layout: a grid of whole weeks covering the month.
"""

from datetime import datetime
from typing import Optional, Sequence

from . import date_utils
from .date_utils import DAYS_IN_WEEK, SUNDAY
from .debug import debug_print
from .events import CalendarEvent, MonthView, MonthViewDay
from .period import filter_in_period
from .week_view import build_week_day


def get_month_view(
    events: Sequence[CalendarEvent],
    view_date: datetime,
    week_start: int = SUNDAY,
    now: Optional[datetime] = None
) -> MonthView:
    """
    Build the day grid of the month containing ``view_date``.

    The grid starts on the first week day on or before the 1st and ends on
    the last week day on or after the last day of the month. Days outside
    the month only complete the grid and never carry events.
    """
    if now is None:
        now = date_utils.current_time(view_date)

    month_start = date_utils.start_of_month(view_date)
    month_end = date_utils.end_of_month(view_date)
    grid_start = date_utils.start_of_week(month_start, week_start)
    grid_end = date_utils.end_of_week(month_end, week_start)

    # Narrow down once, then test each day against the smaller list
    events_in_month = filter_in_period(events, month_start, month_end)

    days: list[MonthViewDay] = []
    for i in range(date_utils.diff_days(grid_end, grid_start) + 1):
        date = date_utils.add_days(grid_start, i)
        week_day = build_week_day(date, now)
        in_month = date_utils.start_of_month(date) == month_start
        if in_month:
            day_events = filter_in_period(
                events_in_month,
                date_utils.start_of_day(date),
                date_utils.end_of_day(date)
            )
        else:
            day_events = []
        days.append(MonthViewDay(
            date=week_day.date,
            is_past=week_day.is_past,
            is_today=week_day.is_today,
            is_future=week_day.is_future,
            is_weekend=week_day.is_weekend,
            in_month=in_month,
            events=day_events
        ))

    rows = len(days) // DAYS_IN_WEEK
    row_offsets = [i * DAYS_IN_WEEK for i in range(rows)]

    debug_print("MONTH", f"{grid_start.date()}..{grid_end.date()}: {rows} rows, "
                         f"{len(events_in_month)} events in month")
    return MonthView(row_offsets=row_offsets, days=days)
