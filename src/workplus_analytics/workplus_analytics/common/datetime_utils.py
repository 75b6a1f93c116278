from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from ..core.constants import AVERAGE_DAYS_PER_MONTH


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def _to_local_naive(value: datetime) -> datetime:
    return value.astimezone().replace(tzinfo=None) if value.tzinfo else value


def coerce_datetime(value: Any) -> Optional[datetime]:
    """Best-effort conversion of API values to ``datetime``.

    Accepts ``datetime``/``date`` objects and ISO-8601 strings (with or
    without a time part, a trailing ``Z`` or an offset). Offset-aware values
    are converted to local time, the zone ``now_local`` reports in, and
    returned naive. Anything else, including malformed strings, yields
    ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return _to_local_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _to_local_naive(parsed)


def coerce_date(value: Any) -> Optional[date]:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = coerce_datetime(value)
    return parsed.date() if parsed else None


def coerce_time(value: Any) -> Optional[time]:
    """Parse ``HH:MM`` / ``HH:MM:SS`` clock strings."""
    if isinstance(value, time):
        return value
    if isinstance(value, datetime):
        return value.time()
    if not isinstance(value, str):
        return None
    text = value.strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    return None


def add_months(day: date, months: int) -> date:
    """Shift ``day`` by whole months, pinned to the first of the month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def last_n_days(today: date, n: int) -> list[date]:
    """Return ``n`` consecutive days ending with ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(n - 1, -1, -1)]


def last_n_months(today: date, n: int) -> list[date]:
    """Return the first day of the ``n`` months ending with ``today``'s month."""
    return [add_months(today, -offset) for offset in range(n - 1, -1, -1)]


def months_between(start: date, end: date) -> float:
    """Fractional number of months from ``start`` to ``end``."""
    return (end - start).days / AVERAGE_DAYS_PER_MONTH


def subtract_months(day: date, months: int) -> date:
    """Same calendar day ``months`` earlier, clamped to the end of shorter months."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = index // 12, index % 12 + 1
    return date(year, month, min(day.day, calendar.monthrange(year, month)[1]))


def start_of_day(day: Optional[date]) -> Optional[datetime]:
    return datetime.combine(day, time.min) if day else None
