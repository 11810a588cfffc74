from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.constants import TIMESTAMP_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def try_parse_iso_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        return None


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: Optional[str], *, on: Optional[date] = None) -> Optional[datetime]:
    """Parse a stored clock value.

    Accepts the full ``YYYY-MM-DD HH:MM[:SS]`` form and a bare ``HH:MM[:SS]``
    time, which is anchored to ``on``.
    """
    if not value or not value.strip():
        return None
    v = value.strip()
    for fmt in (TIMESTAMP_FORMAT, "%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M"):
        try:
            return datetime.strptime(v, fmt)
        except ValueError:
            continue
    if on is not None:
        for fmt in ("%H:%M:%S", "%H:%M"):
            try:
                return datetime.combine(on, datetime.strptime(v, fmt).time())
            except ValueError:
                continue
    return None


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month."""
    return date(year, month, 1), date(year, month, days_in_month(year, month))


def previous_month(today: date) -> tuple[int, int]:
    first = today.replace(day=1)
    last_of_previous = first - timedelta(days=1)
    return last_of_previous.year, last_of_previous.month


def months_between(start: date, end: date) -> int:
    """Whole months elapsed from ``start`` to ``end`` (0 when end < start)."""
    if end < start:
        return 0
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return max(months, 0)
