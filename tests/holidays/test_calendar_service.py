from __future__ import annotations

from datetime import date, datetime

import pytest

from src.attendance_bot.attendance_bot.core.exceptions import ValidationError
from src.attendance_bot.attendance_bot.holidays.model import CalendarSnapshot
from src.attendance_bot.attendance_bot.holidays.service import parse_disaster_command
from src.attendance_bot.attendance_bot.store import schema


def test_snapshot_weekend_holiday_and_disaster_day_are_non_working():
    snap = CalendarSnapshot(holidays=frozenset({date(2025, 10, 10)}), disaster_days=frozenset({date(2025, 7, 8)}))

    assert snap.is_non_working_day(date(2025, 7, 5))  # Saturday
    assert snap.is_non_working_day(date(2025, 7, 6))  # Sunday
    assert snap.is_non_working_day(date(2025, 10, 10))
    assert snap.is_non_working_day(date(2025, 7, 8))
    assert not snap.is_non_working_day(date(2025, 7, 1))


def test_refresh_appends_only_holidays_and_normalises_dates(container, holiday_source, store):
    holiday_source.years[2025] = [
        {"date": "20251010", "isHoliday": True, "description": "National Day"},
        {"date": "2025-10-09", "isHoliday": False, "description": ""},
        {"date": "2025/12/25", "isHoliday": "true", "description": "Christmas"},
    ]
    holiday_source.years[2026] = [{"date": "20260101", "isHoliday": True, "description": "New Year"}]

    added = container.calendar_service.refresh_holidays(2025)

    assert added == 3
    assert holiday_source.calls == [2025, 2026]
    stored = sorted(r["holiday_date"] for r in store.rows(schema.HOLIDAYS))
    assert stored == ["2025-10-10", "2025-12-25", "2026-01-01"]


def test_refresh_is_idempotent(container, holiday_source, store):
    holiday_source.years[2025] = [
        {"date": "20251010", "isHoliday": True, "description": "National Day"},
        {"date": "2025-10-10", "isHoliday": True, "description": "National Day (dup)"},
    ]

    assert container.calendar_service.refresh_holidays(2025) == 1
    assert container.calendar_service.refresh_holidays(2025) == 0
    assert len(store.rows(schema.HOLIDAYS)) == 1


def test_failing_source_counts_as_empty(container, holiday_source, store):
    holiday_source.fail = True

    assert container.calendar_service.refresh_holidays(2025) == 0
    assert store.rows(schema.HOLIDAYS) == []


def test_refresh_if_stale_runs_once_per_interval(container, holiday_source):
    svc = container.calendar_service
    holiday_source.years[2025] = [{"date": "20251010", "isHoliday": True, "description": "National Day"}]

    svc.refresh_if_stale(datetime(2025, 7, 1, 9, 0))
    svc.refresh_if_stale(datetime(2025, 7, 1, 18, 0))
    assert holiday_source.calls == [2025, 2026]

    svc.refresh_if_stale(datetime(2025, 7, 2, 9, 30))
    assert holiday_source.calls == [2025, 2026, 2025, 2026]


def test_failed_stale_refresh_is_retried_on_next_request(container, holiday_source, store):
    svc = container.calendar_service
    holiday_source.fail = True

    assert svc.refresh_if_stale(datetime(2025, 7, 1, 9, 0)) == 0

    holiday_source.fail = False
    holiday_source.years[2025] = [{"date": "20251010", "isHoliday": True, "description": "National Day"}]
    assert svc.refresh_if_stale(datetime(2025, 7, 1, 9, 5)) == 1
    assert holiday_source.calls == [2025, 2026, 2025, 2026]
    assert [r["holiday_date"] for r in store.rows(schema.HOLIDAYS)] == ["2025-10-10"]

    svc.refresh_if_stale(datetime(2025, 7, 1, 9, 10))
    assert len(holiday_source.calls) == 4


def test_disaster_day_is_declared_once(container):
    svc = container.calendar_service

    assert svc.add_disaster_day(date(2025, 7, 8), "typhoon") is True
    assert svc.add_disaster_day(date(2025, 7, 8), "typhoon again") is False
    assert svc.is_non_working_day(date(2025, 7, 8))


def test_parse_disaster_command():
    assert parse_disaster_command("DisasterLeave 2025-07-08 typhoon Danas") == (date(2025, 7, 8), "typhoon Danas")
    with pytest.raises(ValidationError):
        parse_disaster_command("DisasterLeave 2025-07-08")
    with pytest.raises(ValidationError):
        parse_disaster_command("DisasterLeave tomorrow typhoon")
