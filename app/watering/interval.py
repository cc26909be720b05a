"""
Watering interval parsing

Turns the human-readable ``wateringInterval`` stored on crop definitions
("2 days", "1 week", "3 HOURS") into a duration in milliseconds.
"""
import re
from datetime import datetime, timedelta
from typing import Optional


HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS
# Months are a fixed 30-day approximation, not calendar months.
MONTH_MS = 30 * DAY_MS

_INTERVAL_RE = re.compile(r"(\d+)\s*(days?|weeks?|hours?|months?)", re.IGNORECASE | re.ASCII)

# Keyed on the first letter of the unit word.
_UNIT_MS = {
    "d": DAY_MS,
    "w": WEEK_MS,
    "h": HOUR_MS,
    "m": MONTH_MS,
}


def parse_interval(interval: Optional[str]) -> Optional[int]:
    """Return the interval in milliseconds, or None when it does not parse.

    Never raises: anything that is not ``<count><optional spaces><unit>``
    (including non-strings) yields None.
    """
    if not isinstance(interval, str):
        return None
    match = _INTERVAL_RE.fullmatch(interval)
    if not match:
        return None
    unit_ms = _UNIT_MS.get(match.group(2).lower()[0])
    if unit_ms is None:
        return None
    return int(match.group(1)) * unit_ms


def interval_delta(interval: Optional[str]) -> Optional[timedelta]:
    """Same as parse_interval, as a timedelta. Zero-length intervals count as unusable."""
    ms = parse_interval(interval)
    if not ms:
        return None
    try:
        return timedelta(milliseconds=ms)
    except OverflowError:
        return None


def next_due(start: datetime, interval: Optional[str]) -> Optional[datetime]:
    """``start`` plus the interval, or None if the interval is unusable or runs past year 9999."""
    delta = interval_delta(interval)
    if delta is None:
        return None
    try:
        return start + delta
    except OverflowError:
        return None
