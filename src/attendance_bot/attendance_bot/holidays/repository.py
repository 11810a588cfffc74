from __future__ import annotations

from datetime import date
from typing import FrozenSet, Iterable

from ..common.datetime_utils import try_parse_iso_date
from ..store import schema
from ..store.tabular import TabularStore
from .model import HolidayEntry


class HolidayRepository:
    """Typed access to the holiday and disaster-leave tables (append-only)."""

    def __init__(self, store: TabularStore):
        self._store = store

    def _dates(self, table: str, column: str) -> FrozenSet[date]:
        snapshot = self._store.get_all(table)
        parsed = (try_parse_iso_date(r.get(column)) for r in snapshot.rows)
        return frozenset(d for d in parsed if d is not None)

    def holiday_dates(self) -> FrozenSet[date]:
        return self._dates(schema.HOLIDAYS, "holiday_date")

    def disaster_dates(self) -> FrozenSet[date]:
        return self._dates(schema.DISASTER_DAYS, "disaster_date")

    def add_holidays(self, entries: Iterable[HolidayEntry]) -> int:
        count = 0
        for entry in entries:
            self._store.append(schema.HOLIDAYS, {"holiday_date": entry.day.isoformat(), "name": entry.name})
            count += 1
        return count

    def add_disaster_day(self, day: date, note: str) -> int:
        return self._store.append(schema.DISASTER_DAYS, {"disaster_date": day.isoformat(), "note": note})
