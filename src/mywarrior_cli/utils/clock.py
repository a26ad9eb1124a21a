"""Duration formatting and timestamp helpers.

Timestamps in the session log are local wall-clock times without an offset,
written as ``YYYY-MM-DDTHH:MM:SS``. Every helper here works with naive
``datetime`` objects for that reason.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{1,2}:\d{2}$")
_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}")


def format_seconds(total_seconds: int | float) -> str:
    """Format a number of seconds as ``MM:SS`` or ``HH:MM:SS``.

    Hours are only shown once the duration reaches an hour. Negative input is
    treated as zero.
    """
    total = max(0, int(total_seconds))
    hours, rest = divmod(total, 3600)
    mins, secs = divmod(rest, 60)
    if hours:
        return f"{hours:02d}:{mins:02d}:{secs:02d}"
    return f"{mins:02d}:{secs:02d}"


def format_status(elapsed: float, planned_seconds: int) -> str:
    """Describe the countdown state for the display line."""
    elapsed_whole = int(elapsed)
    if elapsed_whole >= planned_seconds:
        return f"Time over since {format_seconds(elapsed_whole - planned_seconds)}"
    return f"Time remaining: {format_seconds(planned_seconds - elapsed_whole)}"


def to_timestamp(moment: datetime) -> str:
    """Render an instant in the canonical log form (second precision)."""
    return moment.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """Parse a canonical log timestamp. Raises ValueError on malformed input.

    Every field must be zero-padded to its full width.
    """
    if not _TIMESTAMP_RE.fullmatch(text):
        raise ValueError(f"'{text}' is not in YYYY-MM-DDTHH:MM:SS format")
    return datetime.strptime(text, TIMESTAMP_FORMAT)


def now() -> datetime:
    """Current local time truncated to whole seconds."""
    return datetime.now().replace(microsecond=0)


def parse_date(text: str) -> date:
    """Parse a calendar-correct ``YYYY-MM-DD`` date.

    Surrounding whitespace is ignored; anything else after the date is not.

    Raises:
        ValueError: if the text is not exactly a valid date
    """
    candidate = text.strip()
    if not _DATE_RE.match(candidate):
        raise ValueError(f"'{text.strip()}' is not in YYYY-MM-DD format")
    try:
        return datetime.strptime(candidate, DATE_FORMAT).date()
    except ValueError as e:
        raise ValueError(f"'{candidate}' is not a valid calendar date") from e


def parse_time(text: str) -> time:
    """Parse an ``HH:MM`` wall-clock time (24h)."""
    candidate = text.strip()
    if not _TIME_RE.match(candidate):
        raise ValueError(f"'{text.strip()}' is not in HH:MM format")
    try:
        return datetime.strptime(candidate, TIME_FORMAT).time()
    except ValueError as e:
        raise ValueError(f"'{candidate}' is not a valid time of day") from e


def is_valid_date(text: str) -> bool:
    """Check whether text is a calendar-correct ``YYYY-MM-DD`` date."""
    try:
        parse_date(text)
    except ValueError:
        return False
    return True


def is_valid_time(text: str) -> bool:
    """Check whether text is a valid ``HH:MM`` time."""
    try:
        parse_time(text)
    except ValueError:
        return False
    return True


def combine(day: date, clock_time: time) -> datetime:
    """Join a date and an ``HH:MM`` time into a naive local datetime."""
    return datetime.combine(day, clock_time)
