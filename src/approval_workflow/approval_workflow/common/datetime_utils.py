from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def inclusive_day_count(start: Optional[date], end: Optional[date]) -> int:
    """Number of calendar days covered by [start, end], 0 if either is missing."""
    if not start or not end:
        return 0
    return abs((end - start).days) + 1


def format_display_date(value: Optional[date]) -> str:
    """DD/MM/YYYY (plus HH:MM for datetimes), '-' when empty."""
    if value is None:
        return "-"
    if isinstance(value, datetime):
        return value.strftime("%d/%m/%Y %H:%M")
    return value.strftime("%d/%m/%Y")


def parse_datetime(value: Any) -> Optional[datetime]:
    """Normalize DATETIME values across drivers.

    mysql-connector returns datetime.datetime, but rows written by other
    clients may hold ISO-8601 strings (with a trailing 'Z').
    """

    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, str):
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))

    raise TypeError(f"Unsupported DATETIME value type: {type(value)!r}")
