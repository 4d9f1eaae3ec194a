"""
Period overlap testing shared by all view builders.
"""

from datetime import datetime
from typing import Iterable

from .events import CalendarEvent


def overlaps(event: CalendarEvent, period_start: datetime, period_end: datetime) -> bool:
    """
    Check whether an event intersects the period [period_start, period_end].

    An event touching either bound with its start or its end counts as
    overlapping, so does an event enclosing the whole period.
    """
    event_start = event.start
    event_end = event.effective_end

    if period_start < event_start < period_end:
        return True

    if period_start < event_end < period_end:
        return True

    if event_start < period_start and event_end > period_end:
        return True

    if event_start == period_start or event_start == period_end:
        return True

    if event_end == period_start or event_end == period_end:
        return True

    return False


def filter_in_period(
    events: Iterable[CalendarEvent],
    period_start: datetime,
    period_end: datetime
) -> list[CalendarEvent]:
    """Get the events overlapping the period, in input order."""
    return [event for event in events if overlaps(event, period_start, period_end)]
