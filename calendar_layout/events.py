"""
Layout input and output types.

CalendarEvent is the caller-owned input; everything else is produced by
the view builders and describes positions only. The builders never modify
a CalendarEvent, and the week packer produces new WeekViewEvent records
instead of rewriting existing ones.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class EventColor:
    """Display colors of an event (opaque to the layout engine)."""
    primary: str
    secondary: str


@dataclass(frozen=True)
class EventAction:
    """A named callback attached to an event, passed through unexamined."""
    label: str
    click: Callable[['CalendarEvent'], Any]


@dataclass(frozen=True)
class CalendarEvent:
    """
    A single materialized event instance.

    An event without ``end`` is a point-in-time marker: it overlaps periods
    as if it ended when it starts.
    """
    start: datetime
    end: Optional[datetime] = None
    title: str = ""
    color: EventColor = field(default_factory=lambda: EventColor("#4285f4", "#e3f2fd"))
    actions: tuple[EventAction, ...] = ()

    @property
    def effective_end(self) -> datetime:
        """The end used for overlap tests."""
        return self.end if self.end is not None else self.start

    def __repr__(self):
        return f"CalendarEvent(title={self.title!r}, start={self.start}, end={self.end})"


@dataclass(frozen=True)
class WeekViewEvent:
    """
    An event placed in a week view.

    ``offset`` is the day column of the event. For the first event of a
    row it counts from the start of the week; for every later event of the
    row it counts from the end of the previous event in that row.
    """
    event: CalendarEvent
    offset: int
    span: int
    extends_left: bool
    extends_right: bool


@dataclass
class WeekViewEventRow:
    row: list[WeekViewEvent] = field(default_factory=list)


@dataclass
class WeekDay:
    date: datetime
    is_past: bool
    is_today: bool
    is_future: bool
    is_weekend: bool


@dataclass
class MonthViewDay(WeekDay):
    in_month: bool = False
    events: list[CalendarEvent] = field(default_factory=list)
    # Presentation hints, never set by the engine
    background_color: Optional[str] = None
    css_class: Optional[str] = None


@dataclass
class MonthView:
    row_offsets: list[int]
    days: list[MonthViewDay]


@dataclass
class DayViewEvent:
    event: CalendarEvent
    height: float
    width: float
    top: float
    left: float
    extends_top: bool
    extends_bottom: bool

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass
class DayView:
    events: list[DayViewEvent]
    max_width: float
