#!/usr/bin/env python3
"""
Kubux Calendar Layout - computes week, month and day view layouts.

This is the command line entry point. It reads events from ICS sources and
prints the requested layout as JSON.
"""

import sys
import json
import argparse
from datetime import datetime
from pathlib import Path

from calendar_layout import (
    Config, ICSSource, EventColor, to_dict,
    get_week_view, get_week_view_header, get_month_view, get_day_view
)
from calendar_layout.date_utils import set_timezone, get_local_timezone
from calendar_layout.debug import set_debug, debug_print


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Kubux Calendar Layout - week, month and day view layouts as JSON"
    )
    parser.add_argument(
        "view",
        choices=["week", "month", "day", "header"],
        help="Layout to compute"
    )
    parser.add_argument(
        "--date",
        type=lambda s: datetime.strptime(s, "%Y-%m-%d"),
        help="Date to show, YYYY-MM-DD (default: today)"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--ics",
        action="append",
        default=[],
        metavar="PATH_OR_URL",
        help="Additional ICS file or URL (may be repeated)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def load_config(path) -> Config:
    """Load the given config, or the default one if it exists."""
    if path is not None:
        return Config.load(path)
    default_path = Config.get_default_config_path()
    if default_path.exists():
        return Config.load(default_path)
    return Config()


def collect_sources(config: Config, extra: list[str]) -> list[ICSSource]:
    sources = [
        ICSSource(sub.name, sub.url, EventColor(sub.color, sub.secondary_color))
        for sub in config.subscriptions
    ]
    sources.extend(ICSSource(Path(url).name or url, url) for url in extra)
    return sources


def build_layout(view: str, config: Config, events, view_date: datetime):
    if view == "week":
        return get_week_view(events, view_date, week_start=config.week_start)
    if view == "header":
        return get_week_view_header(view_date, week_start=config.week_start)
    if view == "month":
        return get_month_view(events, view_date, week_start=config.week_start)
    day = config.day_view
    return get_day_view(
        events,
        view_date,
        hour_segments=day.hour_segments,
        day_start=day.day_start,
        day_end=day.day_end,
        event_width=day.event_width,
        segment_height=day.segment_height
    )


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config)
        set_timezone(config.timezone)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"Default location: {Config.get_default_config_path()}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    set_debug(args.debug or config.debug)
    debug_print("MAIN", f"Loaded configuration from: {args.config or Config.get_default_config_path()}")
    debug_print("MAIN", f"  ICS sources: {len(config.subscriptions) + len(args.ics)}")

    events = []
    for source in collect_sources(config, args.ics):
        events.extend(source.get_events())
        if source.error:
            print(f"Warning: {source.name}: {source.error}", file=sys.stderr)

    local_tz = get_local_timezone()
    if args.date is not None:
        view_date = local_tz.localize(args.date)
    else:
        view_date = datetime.now(local_tz)

    layout = build_layout(args.view, config, events, view_date)
    print(json.dumps(to_dict(layout), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
