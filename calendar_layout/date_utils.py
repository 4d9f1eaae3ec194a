"""
Date and time helpers for the layout engine.

Provides the day/week/month boundaries and the day/minute differences the
view builders work with, plus the local timezone used when events are
loaded and when "now" is not supplied by the caller.

Arithmetic follows wall-clock semantics: adding a day to 09:00 gives 09:00
on the next day even across a DST change, and pytz-aware values are
re-localized so their UTC offset stays correct.
"""

import calendar
from datetime import datetime, timedelta
from typing import Optional

import pytz


MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

DAYS_IN_WEEK = 7
WEEKEND_DAYS = (SATURDAY, SUNDAY)

WEEKDAY_NAMES = {
    "monday": MONDAY,
    "tuesday": TUESDAY,
    "wednesday": WEDNESDAY,
    "thursday": THURSDAY,
    "friday": FRIDAY,
    "saturday": SATURDAY,
    "sunday": SUNDAY,
}


# Default timezone - can be overridden by config
_local_timezone_name: str = "UTC"


def set_timezone(timezone_name: str):
    """Set the local timezone used for loaded events."""
    global _local_timezone_name
    pytz.timezone(timezone_name)  # raises UnknownTimeZoneError early
    _local_timezone_name = timezone_name


def get_local_timezone():
    """Get the configured local timezone as a pytz timezone object."""
    return pytz.timezone(_local_timezone_name)


def to_local_datetime(dt: datetime) -> datetime:
    """
    Convert an aware datetime to the local timezone.

    Naive datetimes are treated as floating local time and localized.
    """
    local_tz = get_local_timezone()
    if dt.tzinfo is None:
        return local_tz.localize(dt)
    return dt.astimezone(local_tz)


def current_time(reference: Optional[datetime] = None) -> datetime:
    """
    Get the current time in the same flavor as ``reference``.

    Returns a naive local datetime when the reference is naive (or missing)
    and an aware datetime in the reference's timezone otherwise.
    """
    if reference is None or reference.tzinfo is None:
        return datetime.now()
    return datetime.now(pytz.UTC).astimezone(reference.tzinfo)


def parse_week_start(name: str) -> int:
    """Map a day name ("sunday", "Mon", ...) to its weekday number."""
    key = name.strip().lower()
    for day_name, number in WEEKDAY_NAMES.items():
        if len(key) >= 3 and day_name.startswith(key):
            return number
    raise ValueError(f"Unknown week day: {name!r}")


def _rebuild(reference: datetime, naive: datetime) -> datetime:
    """Attach the timezone of ``reference`` to a naive wall-clock value."""
    tz = reference.tzinfo
    if tz is None:
        return naive
    if hasattr(tz, 'localize'):
        # pytz zones must be localized, replace() would pick LMT offsets
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def _wall(dt: datetime) -> datetime:
    return dt.replace(tzinfo=None)


def same_zone(dt: datetime, reference: datetime) -> datetime:
    """
    Express ``dt`` in the timezone of ``reference``.

    Day boundaries of two instants can only be compared once both read
    the same wall clock. Naive values are returned unchanged.
    """
    if dt.tzinfo is None or reference.tzinfo is None:
        return dt
    return dt.astimezone(reference.tzinfo)


def add_days(dt: datetime, days: int) -> datetime:
    return _rebuild(dt, _wall(dt) + timedelta(days=days))


def add_minutes(dt: datetime, minutes: int) -> datetime:
    return _rebuild(dt, _wall(dt) + timedelta(minutes=minutes))


def at_time(dt: datetime, hour: int, minute: int) -> datetime:
    """Get the given wall-clock time on the day of ``dt``."""
    naive = _wall(dt).replace(hour=hour, minute=minute, second=0, microsecond=0)
    return _rebuild(dt, naive)


def start_of_day(dt: datetime) -> datetime:
    return at_time(dt, 0, 0)


def end_of_day(dt: datetime) -> datetime:
    naive = _wall(dt).replace(hour=23, minute=59, second=59, microsecond=999999)
    return _rebuild(dt, naive)


def start_of_week(dt: datetime, week_start: int = SUNDAY) -> datetime:
    """Get the start of the week containing ``dt``."""
    back = (dt.weekday() - week_start) % DAYS_IN_WEEK
    return add_days(start_of_day(dt), -back)


def end_of_week(dt: datetime, week_start: int = SUNDAY) -> datetime:
    """Get the last instant of the week containing ``dt``."""
    return end_of_day(add_days(start_of_week(dt, week_start), DAYS_IN_WEEK - 1))


def start_of_month(dt: datetime) -> datetime:
    return start_of_day(_rebuild(dt, _wall(dt).replace(day=1)))


def end_of_month(dt: datetime) -> datetime:
    last_day = calendar.monthrange(dt.year, dt.month)[1]
    return end_of_day(_rebuild(dt, _wall(dt).replace(day=last_day)))


def diff_days(later: datetime, earlier: datetime) -> int:
    """
    Whole days between two instants, truncated toward zero.

    Measured on the wall clock so a 23 or 25 hour DST day still counts
    as one day.
    """
    delta = _wall(later) - _wall(earlier)
    return int(delta.total_seconds() / 86400)


def diff_minutes(later: datetime, earlier: datetime) -> int:
    """Whole minutes between two instants, truncated toward zero."""
    delta = later - earlier
    return int(delta.total_seconds() / 60)


def is_weekend(dt: datetime) -> bool:
    return dt.weekday() in WEEKEND_DAYS
