from __future__ import annotations

from datetime import date, datetime

import pytest

from src.attendance_bot.attendance_bot.core.enums import LeaveStatus
from src.attendance_bot.attendance_bot.core.exceptions import ConflictError, ValidationError
from src.attendance_bot.attendance_bot.store import schema


@pytest.fixture
def alice(container, add_staff):
    add_staff("ADM", "Boss", is_admin=True)
    add_staff("U1", "Alice")
    return container.staff_repo.get_by_user_id("U1")


def test_request_writes_pending_rows_and_notifies_admins(container, alice, store):
    result = container.leave_service.request_leave(
        alice,
        text="personal leave 2025-07-01~2025-07-04",
        leave_type="personal",
        reason="family matters",
    )

    # 2025-07-05 would be Saturday; all four requested days are working days.
    assert result.registered == [date(2025, 7, 1), date(2025, 7, 2), date(2025, 7, 3), date(2025, 7, 4)]
    rows = store.rows(schema.ATTENDANCE)
    assert len(rows) == 4
    assert {r["leave_status"] for r in rows} == {LeaveStatus.PENDING.value}
    assert {r["leave_type"] for r in rows} == {"personal"}
    assert [p.user_id for p in result.notifications] == ["ADM"]
    assert "Approve Alice 2025-07-01" in result.notifications[0].text
    assert "NeedsDiscussion Alice 2025-07-01" in result.notifications[0].text


def test_non_working_dates_are_never_written(container, alice, store):
    result = container.leave_service.request_leave(alice, text="leave 2025-07-04~2025-07-07")

    assert result.registered == [date(2025, 7, 4), date(2025, 7, 7)]
    assert result.skipped == [date(2025, 7, 5), date(2025, 7, 6)]
    assert sorted(r["work_date"] for r in store.rows(schema.ATTENDANCE)) == ["2025-07-04", "2025-07-07"]


def test_saturday_and_holiday_only_writes_nothing(container, alice, store, holiday_source):
    holiday_source.years[2025] = [{"date": "20250707", "isHoliday": True, "description": "Bridge day"}]
    container.calendar_service.refresh_holidays(2025)

    with pytest.raises(ConflictError, match="non-working"):
        container.leave_service.request_leave(alice, text="leave 2025-07-05 and 2025-07-07")

    assert store.rows(schema.ATTENDANCE) == []


def test_missing_dates_is_a_validation_error(container, alice, store):
    with pytest.raises(ValidationError):
        container.leave_service.request_leave(alice, text="I need a day off soon")
    assert store.rows(schema.ATTENDANCE) == []


def test_classifier_dates_win_over_text(container, alice):
    result = container.leave_service.request_leave(alice, text="leave 2025-07-01", dates=["2025-07-02"])
    assert result.registered == [date(2025, 7, 2)]


def test_leave_over_existing_clock_row_marks_it(container, alice, store):
    container.attendance_service.clock(alice, now=datetime(2025, 7, 1, 9, 0))

    container.leave_service.request_leave(alice, text="sick 2025-07-01(afternoon)", leave_type="sick")

    rows = store.rows(schema.ATTENDANCE)
    assert len(rows) == 1
    assert rows[0]["on_leave"] == "1"
    assert rows[0]["leave_type"] == "sick (afternoon)"


def test_list_leave_is_sorted(container, alice):
    container.leave_service.request_leave(alice, text="2025-07-03")
    container.leave_service.request_leave(alice, text="2025-07-01")

    entries = container.leave_service.list_leave("U1")
    assert [e.work_date for e in entries] == [date(2025, 7, 1), date(2025, 7, 3)]
    assert all(e.status == LeaveStatus.PENDING for e in entries)
