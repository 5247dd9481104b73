"""
Centralized datetime and timezone utilities.

Stored timestamps are ISO-8601 strings in UTC with millisecond precision
and a trailing "Z" (the format the mobile client writes). All parsing and
comparison goes through these helpers so aware and naive values never mix.
"""

from datetime import date, datetime
from typing import Callable, Optional
import pytz

from config import settings

Clock = Callable[[], datetime]


def get_local_tz() -> pytz.BaseTzInfo:
    """Get the configured local timezone."""
    return pytz.timezone(settings.timezone)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(pytz.UTC)


def to_iso(dt: datetime) -> str:
    """
    Format a datetime the way the client stores timestamps.

    Naive datetimes are assumed to be UTC.
    """
    if dt.tzinfo is None:
        dt = pytz.UTC.localize(dt)
    dt = dt.astimezone(pytz.UTC)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def now_iso(clock: Optional[Clock] = None) -> str:
    """Current timestamp string from the given clock (default: wall clock)."""
    return to_iso((clock or utc_now)())


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a stored date or timestamp into an aware UTC datetime.

    Handles:
    - "2026-01-18T19:00:00.000Z" and explicit offsets
    - "2026-01-18T19:00:00" (local time)
    - "2026-01-18" (midnight UTC, as the client parses date-only strings)

    Returns None when the value is empty or unparseable.
    """
    if not value:
        return None

    value = value.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"

    try:
        if len(value) == 10:
            d = datetime.strptime(value, "%Y-%m-%d")
            return pytz.UTC.localize(d)

        dt = datetime.fromisoformat(value)
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = get_local_tz().localize(dt)
    return dt.astimezone(pytz.UTC)


def local_date(dt: datetime) -> date:
    """Calendar day of an aware datetime in the configured timezone."""
    return dt.astimezone(get_local_tz()).date()


def is_overdue(deadline: Optional[str], now: Optional[datetime] = None) -> bool:
    """
    Check whether a stored deadline is strictly before now.

    Missing or unparseable deadlines are never overdue.
    """
    parsed = parse_timestamp(deadline)
    if parsed is None:
        return False
    return parsed < (now or utc_now())
