"""
Conversion of layout results to JSON-ready dictionaries.
"""

from dataclasses import fields, is_dataclass
from datetime import datetime
from typing import Any

from .events import CalendarEvent, EventAction


def _event_to_dict(event: CalendarEvent) -> dict:
    return {
        'title': event.title,
        'start': event.start.isoformat(),
        'end': event.end.isoformat() if event.end is not None else None,
        'color': {'primary': event.color.primary, 'secondary': event.color.secondary},
        'actions': [action.label for action in event.actions],
    }


def to_dict(value: Any) -> Any:
    """
    Convert a layout value to plain dicts, lists and scalars.

    Datetimes become ISO 8601 strings, actions are exported by label only
    since their callbacks cannot be serialized.
    """
    if isinstance(value, CalendarEvent):
        return _event_to_dict(value)
    if isinstance(value, EventAction):
        return value.label
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_dict(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_dict(item) for item in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value
