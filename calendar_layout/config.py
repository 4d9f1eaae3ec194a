"""
Configuration parser for the Kubux calendar layout tool.

Handles TOML file parsing into dataclasses with defaults for every value.
"""

import tomllib
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from .date_utils import SUNDAY, parse_week_start
from .day_view import DayTime


@dataclass
class DayViewConfig:
    """Configuration for the day view geometry."""
    hour_segments: int = 2  # Segments per hour
    day_start: DayTime = field(default_factory=lambda: DayTime(0, 0))
    day_end: DayTime = field(default_factory=lambda: DayTime(23, 59))
    event_width: int = 150  # Width of one stacked column
    segment_height: int = 30  # Height of one segment


@dataclass
class SubscriptionConfig:
    """Configuration for an ICS source (URL or local file)."""
    name: str
    url: str
    color: str = "#34a853"  # Default Google Green
    secondary_color: str = "#e6f4ea"


@dataclass
class Config:
    """Main configuration container."""

    timezone: str = "UTC"
    week_start: int = SUNDAY
    debug: bool = False
    day_view: DayViewConfig = field(default_factory=DayViewConfig)
    subscriptions: list[SubscriptionConfig] = field(default_factory=list)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'kubux-calendar' / 'layout.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a configuration from parsed TOML data."""
        # Parse General section
        general = data.get('General', {})
        week_start_name = str(general.get('week_start', 'sunday'))
        try:
            week_start = parse_week_start(week_start_name)
        except ValueError as e:
            raise ValueError(f"General.week_start: {e}") from e

        # Parse DayView section
        day_data = data.get('DayView', {})
        defaults = DayViewConfig()
        hour_segments = day_data.get('hour_segments', defaults.hour_segments)
        if not isinstance(hour_segments, int) or hour_segments <= 0:
            raise ValueError(f"DayView.hour_segments must be a positive integer, got {hour_segments!r}")
        day_view = DayViewConfig(
            hour_segments=hour_segments,
            day_start=_parse_day_time(day_data, 'day_start', defaults.day_start),
            day_end=_parse_day_time(day_data, 'day_end', defaults.day_end),
            event_width=_parse_size(day_data, 'event_width', defaults.event_width),
            segment_height=_parse_size(day_data, 'segment_height', defaults.segment_height)
        )

        # Parse subscriptions
        # Supports both [Subscription.Name] and [Subscription] with nested sub-tables
        subscriptions = []
        for key, value in data.items():
            if key.startswith('Subscription.') and isinstance(value, dict):
                subscriptions.append(_parse_subscription(key.split('.', 1)[1], value))
            elif key == 'Subscription' and isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    if isinstance(sub_value, dict):
                        subscriptions.append(_parse_subscription(sub_key, sub_value))

        return cls(
            timezone=general.get('timezone', 'UTC'),
            week_start=week_start,
            debug=bool(general.get('debug', False)),
            day_view=day_view,
            subscriptions=subscriptions
        )


def _parse_day_time(section: dict, key: str, default: DayTime) -> DayTime:
    value = section.get(key)
    if value is None:
        return default
    try:
        return DayTime.parse(str(value))
    except ValueError as e:
        raise ValueError(f"DayView.{key}: {e}") from e


def _parse_subscription(sub_id: str, value: dict) -> SubscriptionConfig:
    return SubscriptionConfig(
        name=value.get('name', sub_id),
        url=value.get('url', ''),
        color=value.get('color', SubscriptionConfig.color),
        secondary_color=value.get('secondary_color', SubscriptionConfig.secondary_color)
    )


def _parse_size(section: dict, key: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ValueError(f"DayView.{key} must be a positive number, got {value!r}")
    return value
