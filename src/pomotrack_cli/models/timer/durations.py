"""MM:SS duration parsing and validation for the timer front end.

The engines accept any non-negative integer; range and zero checks belong to
whoever collects the input, which is this module.
"""

from __future__ import annotations

import re

MAX_SECONDS = 59 * 60 + 59

MAX_TIME_MESSAGE = "Maximum time is 59:59"
ZERO_TIME_MESSAGE = "Set a time greater than 00:00 to start the timer."

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_MINUTES_RE = re.compile(r"^\d{1,2}$")


class DurationError(ValueError):
    """Raised when a duration string is malformed or out of range."""


def parse_duration(text: str, allow_zero: bool = False) -> int:
    """Parse ``MM:SS`` (or a bare minute count) into seconds.

    >>> parse_duration("25:00")
    1500
    >>> parse_duration("5")
    300
    """
    value = (text or "").strip()

    match = _CLOCK_RE.match(value)
    if match:
        minutes, seconds = int(match.group(1)), int(match.group(2))
    elif _MINUTES_RE.match(value):
        minutes, seconds = int(value), 0
    else:
        raise DurationError(f"Invalid duration '{text}'. Use MM:SS, e.g. 25:00")

    if minutes > 59 or seconds > 59:
        raise DurationError(MAX_TIME_MESSAGE)

    return validate_seconds(minutes * 60 + seconds, allow_zero=allow_zero)


def validate_seconds(seconds: int, allow_zero: bool = False) -> int:
    """Check an already-numeric duration against the same rules."""
    if seconds < 0:
        raise DurationError(f"Duration cannot be negative: {seconds}")
    if seconds > MAX_SECONDS:
        raise DurationError(MAX_TIME_MESSAGE)
    if seconds == 0 and not allow_zero:
        raise DurationError(ZERO_TIME_MESSAGE)
    return seconds


def format_duration(seconds: int) -> str:
    """Render seconds as zero-padded ``MM:SS``."""
    seconds = max(0, int(seconds))
    mins, secs = divmod(seconds, 60)
    return f"{mins:02d}:{secs:02d}"
