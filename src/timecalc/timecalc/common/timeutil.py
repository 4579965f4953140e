from __future__ import annotations

from datetime import datetime, time

from ..core.constants import MAX_TIME_OF_DAY, MINUTES_PER_DAY


def is_valid_time_of_day(minutes: int) -> bool:
    """True when ``minutes`` is a minute-of-day in 0..1439."""
    return isinstance(minutes, int) and not isinstance(minutes, bool) and 0 <= minutes <= MAX_TIME_OF_DAY


def normalize_cross_midnight(start: int, end: int) -> int:
    """Return ``end`` shifted to the next day when it lies before ``start``."""
    if end < start:
        return end + MINUTES_PER_DAY
    return end


def duration(start: int, end: int) -> int:
    return normalize_cross_midnight(start, end) - start


def overlap(start1: int, end1: int, start2: int, end2: int) -> int:
    """Minutes shared by the half-open intervals [start1, end1) and [start2, end2)."""
    lo = max(start1, start2)
    hi = min(end1, end2)
    return max(hi - lo, 0)


def to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def format_hhmm(minutes: int) -> str:
    """Format a signed minute amount as ``HH:MM`` (``-01:30`` for negatives)."""
    sign = "-" if minutes < 0 else ""
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def parse_hhmm(value: str) -> int:
    """Parse ``HH:MM`` into minutes from midnight."""
    return to_minutes(datetime.strptime(value.strip(), "%H:%M").time())
