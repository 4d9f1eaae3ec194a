"""
Kubux Calendar Layout Module

This module turns a list of timed events into week, month and day view
layouts described by positions only:
- Layout types (events.py)
- Period overlap testing (period.py)
- Week view rows and header (week_view.py)
- Month view grid (month_view.py)
- Day view columns (day_view.py)
- Date helpers and local timezone (date_utils.py)
- Configuration parsing (config.py)
- ICS event sources (ics_source.py)
- JSON export (export.py)
"""

from .events import (
    CalendarEvent, EventColor, EventAction,
    WeekViewEvent, WeekViewEventRow, WeekDay,
    MonthViewDay, MonthView, DayViewEvent, DayView
)
from .period import overlaps, filter_in_period
from .week_view import (
    day_offset, day_span, greedy_row_packer,
    get_week_view, get_week_view_header
)
from .month_view import get_month_view
from .day_view import DayTime, count_overlapping_columns, get_day_view
from .config import Config
from .ics_source import ICSSource, events_from_ical
from .export import to_dict

__all__ = [
    'CalendarEvent',
    'EventColor',
    'EventAction',
    'WeekViewEvent',
    'WeekViewEventRow',
    'WeekDay',
    'MonthViewDay',
    'MonthView',
    'DayViewEvent',
    'DayView',
    'overlaps',
    'filter_in_period',
    'day_offset',
    'day_span',
    'greedy_row_packer',
    'get_week_view',
    'get_week_view_header',
    'get_month_view',
    'DayTime',
    'count_overlapping_columns',
    'get_day_view',
    'Config',
    'ICSSource',
    'events_from_ical',
    'to_dict',
]
