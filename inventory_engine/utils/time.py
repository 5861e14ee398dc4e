"""Date and clock utilities."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Optional
from zoneinfo import ZoneInfo

from inventory_engine.config import settings

Clock = Callable[[], date]


def local_tz() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def today_local() -> date:
    """Current calendar date in the property timezone."""
    return datetime.now(local_tz()).date()


def parse_iso_date(value: Any) -> Optional[date]:
    """
    Parse an ISO calendar date, returning None when it cannot be parsed.

    Accepts date objects, datetimes, ``YYYY-MM-DD`` strings and full ISO
    datetime strings (the time component is dropped).
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is earlier)."""
    return (end - start).days


def fixed_clock(day: date) -> Clock:
    """Clock that always returns ``day``."""
    return lambda: day
