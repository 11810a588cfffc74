from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional

from ..common.keyed_lock import KeyedLock
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from .model import CalendarSnapshot, HolidayEntry
from .repository import HolidayRepository
from .source import HolidaySource

logger = logging.getLogger(__name__)

_REFRESH_KEY = ("holidays", "refresh")
_STALE_CHECK_KEY = ("holidays", "stale-check")

DISASTER_COMMAND = "DisasterLeave"
DISASTER_USAGE = "Usage: DisasterLeave <YYYY-MM-DD> <note>"


def is_disaster_command(text: str) -> bool:
    parts = (text or "").split()
    return bool(parts) and parts[0] == DISASTER_COMMAND


def parse_disaster_command(text: str) -> tuple[date, str]:
    parts = (text or "").split()
    if len(parts) < 3 or parts[0] != DISASTER_COMMAND:
        raise ValidationError(DISASTER_USAGE)
    day = _normalize_date(parts[1])
    if day is None:
        raise ValidationError(DISASTER_USAGE)
    return day, " ".join(parts[2:])


def _normalize_date(value: Any) -> Optional[date]:
    v = str(value or "").strip()
    for fmt in ("%Y-%m-%d", "%Y%m%d", "%Y/%m/%d"):
        try:
            return datetime.strptime(v, fmt).date()
        except ValueError:
            continue
    return None


def _is_holiday(entry: dict) -> bool:
    flag = entry.get("isHoliday")
    if isinstance(flag, str):
        return flag.strip().lower() in {"true", "1", "yes", "是"}
    return bool(flag)


class CalendarService:
    """Answers "is this a non-working day" and keeps the holiday table in sync."""

    def __init__(
        self,
        holidays: HolidayRepository,
        source: HolidaySource,
        locks: KeyedLock,
        *,
        refresh_interval: timedelta = timedelta(hours=24),
    ):
        self._holidays = holidays
        self._source = source
        self._locks = locks
        self._refresh_interval = refresh_interval
        self._last_refresh: Optional[datetime] = None

    def snapshot(self) -> CalendarSnapshot:
        return CalendarSnapshot(
            holidays=self._holidays.holiday_dates(),
            disaster_days=self._holidays.disaster_dates(),
        )

    def is_non_working_day(self, day: date) -> bool:
        return self.snapshot().is_non_working_day(day)

    def _fetch(self, year: int) -> list[dict]:
        try:
            return list(self._source.fetch_year(year))
        except Exception as exc:
            logger.warning("Holiday source unavailable for %s: %s", year, exc)
            return []

    def _holiday_entries(self, raw: Iterable[dict]) -> list[HolidayEntry]:
        entries: list[HolidayEntry] = []
        for item in raw:
            if not _is_holiday(item):
                continue
            day = _normalize_date(item.get("date"))
            if day is None:
                logger.warning("Skipping holiday entry with bad date: %r", item.get("date"))
                continue
            name = str(item.get("description") or item.get("name") or "")
            entries.append(HolidayEntry(day=day, name=name))
        return entries

    def refresh_holidays(self, year: int) -> int:
        """Append holidays of ``year`` and ``year + 1`` that are not stored yet.

        Returns the number of rows appended. A failing source counts as empty.
        """
        return self._store_missing(year, self._fetch_entries(year))

    def _fetch_entries(self, year: int) -> list[HolidayEntry]:
        return self._holiday_entries([*self._fetch(year), *self._fetch(year + 1)])

    def _store_missing(self, year: int, fetched: list[HolidayEntry]) -> int:
        with self._locks.hold(_REFRESH_KEY):
            seen = set(self._holidays.holiday_dates())
            missing: list[HolidayEntry] = []
            for entry in fetched:
                if entry.day in seen:
                    continue
                seen.add(entry.day)
                missing.append(entry)
            added = self._holidays.add_holidays(missing)

        if added:
            logger.info("Added %d holiday(s) for %d-%d", added, year, year + 1)
        return added

    def refresh_if_stale(self, now: datetime) -> int:
        """Opportunistic refresh at the start of request handling.

        The interval only starts after a fetch that returned holidays, so an
        unavailable source is retried on the next request.
        """
        with self._locks.hold(_STALE_CHECK_KEY):
            last = self._last_refresh
            if last is not None and now - last < self._refresh_interval:
                return 0
            fetched = self._fetch_entries(now.year)
            if fetched:
                self._last_refresh = now
            return self._store_missing(now.year, fetched)

    def add_disaster_day(self, day: date, note: str) -> bool:
        """Declare a disaster-leave day; returns False when it was already declared."""
        note = require_non_empty(note, "Note")
        with self._locks.hold(("disaster", day)):
            if day in self._holidays.disaster_dates():
                return False
            self._holidays.add_disaster_day(day, note)
        return True
