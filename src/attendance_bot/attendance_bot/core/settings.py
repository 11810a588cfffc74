from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from decimal import Decimal
from typing import Any, Sequence
from zoneinfo import ZoneInfo

from . import constants


def _parse_clock(value: Any) -> time:
    if isinstance(value, time):
        return value
    return datetime.strptime(str(value).strip(), "%H:%M").time()


@dataclass(frozen=True)
class WorkRules:
    """Organization-wide payroll and calendar rules.

    Everything here comes from the settings module so the shift length, break
    window and entitlement table can differ per deployment.
    """

    timezone: str = constants.DEFAULT_TIMEZONE
    standard_shift_hours: int = constants.DEFAULT_STANDARD_SHIFT_HOURS
    break_start: time = time(12, 0)
    break_end: time = time(13, 0)
    overtime_min_minutes: int = constants.DEFAULT_OVERTIME_MIN_MINUTES
    default_overtime_multiplier: Decimal = Decimal(constants.DEFAULT_OVERTIME_MULTIPLIER)
    hourly_break_threshold_minutes: int = constants.DEFAULT_HOURLY_BREAK_THRESHOLD_MINUTES
    hourly_break_minutes: int = constants.DEFAULT_HOURLY_BREAK_MINUTES
    special_leave_label: str = constants.DEFAULT_SPECIAL_LEAVE_LABEL
    special_leave_table: Sequence[tuple[int, int]] = constants.DEFAULT_SPECIAL_LEAVE_TABLE
    report_preview_limit: int = constants.DEFAULT_REPORT_PREVIEW_LIMIT
    max_leave_range_days: int = constants.DEFAULT_MAX_LEAVE_RANGE_DAYS
    holiday_refresh_hours: int = constants.DEFAULT_HOLIDAY_REFRESH_HOURS

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def now(self) -> datetime:
        """Current organization-local time (naive, local civil clock)."""
        return datetime.now(self.tz).replace(tzinfo=None)

    @classmethod
    def from_settings(cls, settings: Any) -> "WorkRules":
        def get(name: str, default: Any) -> Any:
            return getattr(settings, name, default)

        table = get("SPECIAL_LEAVE_TABLE", constants.DEFAULT_SPECIAL_LEAVE_TABLE)
        return cls(
            timezone=str(get("TIMEZONE", constants.DEFAULT_TIMEZONE)),
            standard_shift_hours=int(get("STANDARD_SHIFT_HOURS", constants.DEFAULT_STANDARD_SHIFT_HOURS)),
            break_start=_parse_clock(get("BREAK_START", constants.DEFAULT_BREAK_START)),
            break_end=_parse_clock(get("BREAK_END", constants.DEFAULT_BREAK_END)),
            overtime_min_minutes=int(get("OVERTIME_MIN_MINUTES", constants.DEFAULT_OVERTIME_MIN_MINUTES)),
            default_overtime_multiplier=Decimal(
                str(get("DEFAULT_OVERTIME_MULTIPLIER", constants.DEFAULT_OVERTIME_MULTIPLIER))
            ),
            hourly_break_threshold_minutes=int(
                get("HOURLY_BREAK_THRESHOLD_MINUTES", constants.DEFAULT_HOURLY_BREAK_THRESHOLD_MINUTES)
            ),
            hourly_break_minutes=int(get("HOURLY_BREAK_MINUTES", constants.DEFAULT_HOURLY_BREAK_MINUTES)),
            special_leave_label=str(get("SPECIAL_LEAVE_LABEL", constants.DEFAULT_SPECIAL_LEAVE_LABEL)),
            special_leave_table=tuple((int(months), int(days)) for months, days in table),
            report_preview_limit=int(get("REPORT_PREVIEW_LIMIT", constants.DEFAULT_REPORT_PREVIEW_LIMIT)),
            max_leave_range_days=int(get("MAX_LEAVE_RANGE_DAYS", constants.DEFAULT_MAX_LEAVE_RANGE_DAYS)),
            holiday_refresh_hours=int(get("HOLIDAY_REFRESH_HOURS", constants.DEFAULT_HOLIDAY_REFRESH_HOURS)),
        )
