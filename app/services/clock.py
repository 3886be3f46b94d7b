"""Conversion between ``"HH:MM"`` strings and minutes since midnight."""

from __future__ import annotations

import re

from app.domain.errors import InvalidInputError
from app.domain.models import MINUTES_PER_DAY, Interval

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def time_to_minutes(value: str) -> int:
    """Parse a 24-hour ``"HH:MM"`` string into minutes since 00:00.

    ``"24:00"`` is accepted as the end of the day (1440) so an interval or
    window can close at midnight. Anything else outside ``00:00``..``23:59``
    raises InvalidInputError.
    """
    match = _HHMM.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise InvalidInputError(f"Invalid time {value!r}, expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if (hours, minutes) == (24, 0):
        return MINUTES_PER_DAY
    if hours > 23 or minutes > 59:
        raise InvalidInputError(f"Invalid time {value!r}, expected HH:MM")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes since 00:00 as a zero-padded ``"HH:MM"`` string."""
    if not 0 <= minutes <= MINUTES_PER_DAY:
        raise InvalidInputError(f"Minutes out of range: {minutes}")
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def parse_interval(title: str, start: str, end: str) -> Interval:
    """Build an Interval from ``"HH:MM"`` bounds, rejecting ``end <= start``."""
    start_minutes = time_to_minutes(start)
    end_minutes = time_to_minutes(end)
    if end_minutes <= start_minutes:
        raise InvalidInputError("End time must be after start time", field="end")
    return Interval(title=title, start=start_minutes, end=end_minutes)
