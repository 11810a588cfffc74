from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.keyed_lock import KeyedLock
from ..common.notifications import Push
from ..core.constants import DEFAULT_MAX_LEAVE_RANGE_DAYS
from ..core.exceptions import ConflictError, ValidationError
from ..holidays.service import CalendarService
from ..staff.model import StaffRecord
from ..staff.repository import StaffRepository
from .date_expansion import expand_date_list, expand_dates
from .model import LeaveDay, LeaveEntry, LeaveSubmission

DEFAULT_LEAVE_TYPE = "leave"


class LeaveService:
    """Use case: register leave days (pending) and list a user's leave history."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        staff: StaffRepository,
        calendar: CalendarService,
        locks: KeyedLock,
        *,
        max_range_days: int = DEFAULT_MAX_LEAVE_RANGE_DAYS,
    ):
        self._attendance = attendance
        self._staff = staff
        self._calendar = calendar
        self._locks = locks
        self._max_range_days = int(max_range_days)

    def _requested_days(self, dates: Optional[Sequence[str]], text: str) -> list[LeaveDay]:
        if dates:
            days = expand_date_list(dates, max_days=self._max_range_days)
            if days:
                return days
        return expand_dates(text, max_days=self._max_range_days)

    def request_leave(
        self,
        staff: StaffRecord,
        *,
        text: str,
        dates: Optional[Sequence[str]] = None,
        leave_type: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> LeaveSubmission:
        requested = self._requested_days(dates, text)
        if not requested:
            raise ValidationError("Please give the leave dates as YYYY-MM-DD or YYYY-MM-DD~YYYY-MM-DD.")

        snapshot = self._calendar.snapshot()
        valid = [d for d in requested if not snapshot.is_non_working_day(d.day)]
        skipped = [d.day for d in requested if snapshot.is_non_working_day(d.day)]
        if not valid:
            raise ConflictError("All dates are non-working days (weekend, holiday or disaster leave); no leave is needed.")

        label = (leave_type or "").strip() or DEFAULT_LEAVE_TYPE
        description = (reason or "").strip()

        for leave_day in valid:
            type_note = f"{label} {leave_day.annotation}" if leave_day.annotation else label
            with self._locks.hold((staff.user_id, leave_day.day)):
                existing = self._attendance.get_for_user_and_date(staff.user_id, leave_day.day)
                if existing is None:
                    self._attendance.create_leave(
                        user_id=staff.user_id,
                        display_name=staff.display_name,
                        work_date=leave_day.day,
                        leave_type=type_note,
                        description=description,
                    )
                else:
                    self._attendance.mark_leave(
                        row_key=existing.row_key,
                        leave_type=type_note,
                        description=description,
                    )

        registered = [d.day for d in valid]
        date_list = ", ".join(d.isoformat() for d in registered)
        first = registered[0].isoformat()
        notice = (
            f"[Leave approval] {staff.display_name} requested {label}\n"
            f"Dates: {date_list}\n"
            f"Reason: {description or '-'}\n"
            f"Reply \"Approve {staff.display_name} {first}\" or "
            f"\"NeedsDiscussion {staff.display_name} {first}\" (one command per date)."
        )
        notifications = [Push(user_id=admin.user_id, text=notice) for admin in self._staff.list_admins()]

        return LeaveSubmission(
            registered=registered,
            skipped=skipped,
            leave_type=label,
            notifications=notifications,
        )

    def list_leave(self, user_id: str) -> list[LeaveEntry]:
        rows = [r for r in self._attendance.list_for_user(user_id) if r.on_leave]
        rows.sort(key=lambda r: r.work_date)
        return [LeaveEntry(work_date=r.work_date, leave_type=r.leave_type, status=r.leave_status) for r in rows]
