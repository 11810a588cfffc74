from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import try_parse_iso_date
from ..common.keyed_lock import KeyedLock
from ..common.notifications import Push
from ..core.enums import ApprovalAction, LeaveStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..staff.model import StaffRecord
from ..staff.repository import StaffRepository

USAGE = "Usage: Approve <name> <YYYY-MM-DD> or NeedsDiscussion <name> <YYYY-MM-DD>"


@dataclass(frozen=True)
class ApprovalCommand:
    action: ApprovalAction
    display_name: str
    day: date


@dataclass(frozen=True)
class ApprovalOutcome:
    display_name: str
    day: date
    status: LeaveStatus
    notification: Push


def match_action(text: str) -> Optional[ApprovalAction]:
    """Return the action when ``text`` starts with an approval token."""
    parts = (text or "").split()
    if not parts:
        return None
    for action in ApprovalAction:
        if parts[0] == action.value:
            return action
    return None


def parse_approval_command(text: str) -> ApprovalCommand:
    action = match_action(text)
    if action is None:
        raise ValidationError(USAGE)
    parts = text.split()
    if len(parts) < 3:
        raise ValidationError(USAGE)
    day = try_parse_iso_date(parts[2])
    if day is None:
        raise ValidationError(USAGE)
    return ApprovalCommand(action=action, display_name=parts[1], day=day)


class ApprovalService:
    """Admin decision on a single pending leave day."""

    def __init__(self, attendance: AttendanceRepository, staff: StaffRepository, locks: KeyedLock):
        self._attendance = attendance
        self._staff = staff
        self._locks = locks

    def decide(self, acting: StaffRecord, command: ApprovalCommand) -> ApprovalOutcome:
        if not acting.is_admin:
            raise AuthorizationError("Only admins can decide leave requests")

        matches = self._staff.find_by_display_name(command.display_name)
        if len(matches) != 1:
            raise NotFoundError("No matching pending leave request.")
        target = matches[0]

        status = command.action.resulting_status
        with self._locks.hold((target.user_id, command.day)):
            record = self._attendance.get_for_user_and_date(target.user_id, command.day)
            if record is None or not record.on_leave or record.leave_status != LeaveStatus.PENDING:
                raise NotFoundError("No matching pending leave request.")
            self._attendance.set_leave_status(row_key=record.row_key, status=status)

        outcome_label = "approved" if status == LeaveStatus.APPROVED else "needs discussion"
        return ApprovalOutcome(
            display_name=target.display_name,
            day=command.day,
            status=status,
            notification=Push(
                user_id=target.user_id,
                text=f"Your leave on {command.day.isoformat()}: {outcome_label}.",
            ),
        )
