"""
Day view layout: vertical timeline positions with side-by-side stacking
of concurrent events.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Sequence

from . import date_utils
from .debug import debug_print
from .events import CalendarEvent, DayView, DayViewEvent
from .period import filter_in_period


@dataclass(frozen=True)
class DayTime:
    """A wall-clock time of day bounding the visible day window."""
    hour: int
    minute: int = 0

    @classmethod
    def parse(cls, text: str) -> 'DayTime':
        """Parse "HH:MM" (or "HH")."""
        parts = text.strip().split(':')
        if len(parts) > 2 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid time of day: {text!r}")
        hour = int(parts[0])
        minute = int(parts[1]) if len(parts) == 2 else 0
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise ValueError(f"Invalid time of day: {text!r}")
        return cls(hour, minute)

    def __str__(self):
        return f"{self.hour:02d}:{self.minute:02d}"


ColumnCounter = Callable[[float, float, Sequence[DayViewEvent]], int]


def count_overlapping_columns(top: float, bottom: float, previous: Sequence[DayViewEvent]) -> int:
    """
    Count the already positioned events that collide with [top, bottom].

    A previous event collides when its top or its bottom lies strictly
    inside the range, or when it covers the whole range. The count is used
    directly as the column index, so two events that each overlap a third
    one can end up in the same column.
    """
    count = 0
    for other in previous:
        if top < other.top < bottom:
            count += 1
        elif top < other.bottom < bottom:
            count += 1
        elif other.top <= top and bottom <= other.bottom:
            count += 1
    return count


def get_day_view(
    events: Sequence[CalendarEvent],
    view_date: datetime,
    hour_segments: int,
    day_start: DayTime,
    day_end: DayTime,
    event_width: float,
    segment_height: float,
    column_counter: ColumnCounter = count_overlapping_columns
) -> DayView:
    """
    Position the events of one day on a vertical timeline.

    Args:
        events: Events to lay out; events outside the day window are ignored.
        view_date: Any instant on the target day.
        hour_segments: Number of segments each hour is divided into.
        day_start: First visible time of the day.
        day_end: Last visible time of the day.
        event_width: Width of one stacked column.
        segment_height: Height of one segment, in the unit of the result.
        column_counter: Strategy deciding the column of each event.

    Returns:
        A DayView whose events are in start order. Events without an end
        get the height of one segment.
    """
    start_of_view = date_utils.at_time(view_date, day_start.hour, day_start.minute)
    end_of_view = date_utils.at_time(view_date, day_end.hour, day_end.minute)
    pixels_per_minute = (hour_segments * segment_height) / 60

    visible = sorted(
        filter_in_period(events, start_of_view, end_of_view),
        key=lambda event: event.start
    )

    day_events: list[DayViewEvent] = []
    for event in visible:
        event_end = event.effective_end
        extends_top = event.start < start_of_view
        extends_bottom = event_end > end_of_view

        top = 0
        if event.start > start_of_view:
            top = date_utils.diff_minutes(event.start, start_of_view)
        top *= pixels_per_minute

        if event.end is None:
            height = segment_height
        else:
            shown_start = start_of_view if extends_top else event.start
            shown_end = end_of_view if extends_bottom else event_end
            height = date_utils.diff_minutes(shown_end, shown_start) * pixels_per_minute

        columns = column_counter(top, top + height, day_events)
        day_events.append(DayViewEvent(
            event=event,
            height=height,
            width=event_width,
            top=top,
            left=columns * event_width,
            extends_top=extends_top,
            extends_bottom=extends_bottom
        ))

    max_width = max((e.left + e.width for e in day_events), default=0)

    debug_print("DAY", f"{start_of_view}..{end_of_view}: {len(day_events)} events, "
                       f"max width {max_width}")
    return DayView(events=day_events, max_width=max_width)
