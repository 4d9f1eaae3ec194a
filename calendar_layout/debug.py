"""
Debug output for the layout engine.

Lines go to stderr as ``[HH:MM:SS] TAG: message`` and are only written
once debug output has been switched on (``--debug`` or ``debug = true``
in the config).
"""

import sys
from datetime import datetime


_debug_enabled: bool = False


def set_debug(enabled: bool):
    """Enable or disable debug output."""
    global _debug_enabled
    _debug_enabled = enabled


def is_debug_enabled() -> bool:
    return _debug_enabled


def debug_print(tag: str, msg: str) -> None:
    if not _debug_enabled:
        return
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {tag}: {msg}", file=sys.stderr)
