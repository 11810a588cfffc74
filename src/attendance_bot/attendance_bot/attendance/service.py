from __future__ import annotations

from datetime import datetime

from ..common.keyed_lock import KeyedLock
from ..core.enums import ClockAction
from ..core.exceptions import ConflictError
from ..holidays.service import CalendarService
from ..staff.model import StaffRecord
from .model import ClockResult
from .repository import AttendanceRepository

DEFAULT_OFF_SITE_NOTE = "off-site"


class AttendanceService:
    """Per-user, per-day clock state machine.

    NoRecord -> ClockedIn -> ClockedOut, with leave short-circuiting both.
    ``now`` must already be organization-local time.
    """

    def __init__(self, attendance: AttendanceRepository, calendar: CalendarService, locks: KeyedLock):
        self._attendance = attendance
        self._calendar = calendar
        self._locks = locks

    def clock(self, staff: StaffRecord, *, now: datetime) -> ClockResult:
        today = now.date()
        if self._calendar.is_non_working_day(today):
            raise ConflictError("Today is a weekend, holiday or disaster-leave day; no clock-in is required.")

        with self._locks.hold((staff.user_id, today)):
            record = self._attendance.get_for_user_and_date(staff.user_id, today)

            if record is None:
                self._attendance.create(
                    user_id=staff.user_id,
                    display_name=staff.display_name,
                    work_date=today,
                    clock_in=now,
                )
                return ClockResult(action=ClockAction.CLOCK_IN, at=now)

            if record.on_leave:
                raise ConflictError("You are on leave today; no clock-in is needed.")
            if record.clock_in is None:
                # Row created by an off-site note only.
                self._attendance.set_clock_in(row_key=record.row_key, at=now)
                return ClockResult(action=ClockAction.CLOCK_IN, at=now)
            if record.clock_out is not None:
                raise ConflictError("You have already completed today's clock-in and clock-out.")

            self._attendance.set_clock_out(row_key=record.row_key, at=now)
            return ClockResult(action=ClockAction.CLOCK_OUT, at=now)

    def off_site_visit(self, staff: StaffRecord, *, note: str, now: datetime) -> str:
        """Record (overwrite) today's off-site note regardless of clock state."""
        today = now.date()
        note = (note or "").strip() or DEFAULT_OFF_SITE_NOTE

        with self._locks.hold((staff.user_id, today)):
            record = self._attendance.get_for_user_and_date(staff.user_id, today)
            if record is None:
                self._attendance.create(
                    user_id=staff.user_id,
                    display_name=staff.display_name,
                    work_date=today,
                    off_site_note=note,
                )
            else:
                self._attendance.set_off_site_note(row_key=record.row_key, note=note)
        return note
