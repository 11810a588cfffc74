from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import FrozenSet


@dataclass(frozen=True)
class HolidayEntry:
    day: date
    name: str = ""


@dataclass(frozen=True)
class CalendarSnapshot:
    """Non-working days as read at one point in time.

    Weekends are computed, holidays and disaster-leave days are stored.
    """

    holidays: FrozenSet[date] = frozenset()
    disaster_days: FrozenSet[date] = frozenset()

    def is_weekend(self, day: date) -> bool:
        return day.weekday() >= 5

    def is_non_working_day(self, day: date) -> bool:
        return self.is_weekend(day) or day in self.holidays or day in self.disaster_days
