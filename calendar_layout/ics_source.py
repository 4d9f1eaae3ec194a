"""
ICS sources feeding events into the layout engine.

Fetches raw VCALENDAR text from a URL or a local file and turns its
VEVENTs into CalendarEvent instances. Recurrence rules are not expanded:
a recurring VEVENT contributes its first instance only.
"""

import hashlib
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

import pytz
import requests
from icalendar import Calendar as ICalCalendar, Event as ICalEvent

from .date_utils import add_days, end_of_day, get_local_timezone, to_local_datetime
from .debug import debug_print
from .events import CalendarEvent, EventColor


DEFAULT_COLOR = EventColor("#34a853", "#e6f4ea")


def _is_date(value) -> bool:
    return isinstance(value, date) and not isinstance(value, datetime)


def _to_local(value) -> datetime:
    """Convert an iCalendar date or datetime value to a local datetime."""
    if _is_date(value):
        # All-day values start at local midnight
        value = datetime.combine(value, datetime.min.time())
    return to_local_datetime(value)


def event_from_ical(component: ICalEvent, color: EventColor = DEFAULT_COLOR) -> Optional[CalendarEvent]:
    """
    Create a CalendarEvent from an icalendar VEVENT.

    Returns None if the VEVENT has no DTSTART.
    """
    dtstart = component.get('DTSTART')
    if dtstart is None:
        return None
    start = _to_local(dtstart.dt)

    end = None
    dtend = component.get('DTEND')
    duration = component.get('DURATION')
    if dtend is not None:
        end = _to_local(dtend.dt)
        if _is_date(dtend.dt):
            # All-day DTEND is exclusive: the event ends with the day before
            end = max(end_of_day(add_days(end, -1)), end_of_day(start))
    elif duration is not None and isinstance(duration.dt, timedelta):
        end = get_local_timezone().normalize(start + duration.dt)

    summary = component.get('SUMMARY')
    return CalendarEvent(
        start=start,
        end=end,
        title=str(summary) if summary else 'Untitled',
        color=color
    )


def events_from_ical(ical_text: str, color: EventColor = DEFAULT_COLOR) -> list[CalendarEvent]:
    """
    Parse VCALENDAR text into CalendarEvent instances.

    Args:
        ical_text: Raw iCalendar text (VCALENDAR)
        color: Display colors given to every event

    Returns:
        Events in document order; VEVENTs without a start are skipped.
    """
    calendar = ICalCalendar.from_ical(ical_text)
    events = []
    for component in calendar.walk('VEVENT'):
        uid = component.get('UID', '')
        event = event_from_ical(component, color)
        if event is None:
            debug_print("ICS", f"Skipping VEVENT without DTSTART: {uid}")
            continue
        if component.get('RRULE') is not None:
            debug_print("ICS", f"Recurrence not expanded, using first instance: {uid}")
        events.append(event)
    return events


class ICSSource:
    """
    A read-only source of events: an ICS URL or a local .ics file.

    Network and file errors are recorded in ``error`` instead of being
    raised, so one broken source does not prevent laying out the others.
    """

    def __init__(self, name: str, url: str, color: EventColor = DEFAULT_COLOR):
        """
        Initialize an ICS source.

        Args:
            name: Display name for the source
            url: http(s) URL or path of the ICS file
            color: Colors given to the events of this source
        """
        self.name = name
        self.url = url
        self.color = color
        self.id = self._generate_id(url)

        self._raw_data: Optional[str] = None
        self._last_fetch: Optional[datetime] = None
        self._error: Optional[str] = None

    @staticmethod
    def _generate_id(url: str) -> str:
        """Generate a unique ID from the URL."""
        return hashlib.md5(url.encode()).hexdigest()[:12]

    @property
    def is_remote(self) -> bool:
        return self.url.startswith(('http://', 'https://'))

    def fetch(self, timeout: int = 30) -> bool:
        """
        Fetch the ICS text from the URL or file.

        Returns:
            True if successful, False otherwise.
        """
        if not self.is_remote:
            return self.load_file(Path(self.url))

        try:
            response = requests.get(
                self.url,
                timeout=timeout,
                headers={
                    'User-Agent': 'Kubux-Calendar-Layout/1.0',
                    'Accept': 'text/calendar'
                }
            )
            response.raise_for_status()

            # Ensure proper UTF-8 decoding
            response.encoding = 'utf-8'
            self._raw_data = response.text
            self._last_fetch = datetime.now(pytz.UTC)
            self._error = None
            return True

        except requests.RequestException as e:
            self._error = f"Network error: {e}"
            debug_print("ICS", f"{self.name}: {self._error}")
            return False

    def load_file(self, path: Path) -> bool:
        """Read the ICS text from a local file."""
        try:
            self._raw_data = path.read_text(encoding='utf-8')
        except OSError as e:
            self._error = f"File error: {e}"
            debug_print("ICS", f"{self.name}: {self._error}")
            return False
        self._last_fetch = datetime.now(pytz.UTC)
        self._error = None
        return True

    def get_ical_text(self, force_fetch: bool = False, cache_seconds: int = 300) -> Optional[str]:
        """
        Get the raw VCALENDAR text, fetching it when the cache is stale.

        Returns:
            Raw VCALENDAR text, or None if nothing could be fetched.
        """
        should_fetch = (
            force_fetch or
            self._raw_data is None or
            self._last_fetch is None or
            (datetime.now(pytz.UTC) - self._last_fetch).total_seconds() > cache_seconds
        )

        if should_fetch:
            self.fetch()

        return self._raw_data

    def get_events(self, force_fetch: bool = False) -> list[CalendarEvent]:
        """Get the events of this source (empty if it cannot be read)."""
        text = self.get_ical_text(force_fetch=force_fetch)
        if text is None:
            return []
        try:
            events = events_from_ical(text, self.color)
        except ValueError as e:
            self._error = f"Parse error: {e}"
            debug_print("ICS", f"{self.name}: {self._error}")
            return []
        debug_print("ICS", f"{self.name}: {len(events)} events")
        return events

    @property
    def last_fetch(self) -> Optional[datetime]:
        return self._last_fetch

    @property
    def error(self) -> Optional[str]:
        """Get the last error message."""
        return self._error
