"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime

import pytest

from calendar_layout import CalendarEvent
from calendar_layout.date_utils import set_timezone
from calendar_layout.debug import set_debug


@pytest.fixture(autouse=True)
def reset_globals():
    """Restore the module-level timezone and debug switches after each test."""
    yield
    set_timezone("UTC")
    set_debug(False)


@pytest.fixture
def make_event():
    """Factory for events given as (start, end) datetimes."""
    def _make(start: datetime, end: datetime = None, title: str = "Event") -> CalendarEvent:
        return CalendarEvent(start=start, end=end, title=title)
    return _make


@pytest.fixture
def week_date():
    """A Wednesday; with Sunday weeks its week runs 2026-04-05 .. 2026-04-11."""
    return datetime(2026, 4, 8, 12, 0)
