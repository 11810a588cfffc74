from __future__ import annotations

from enum import Enum


class EmployeeType(str, Enum):
    """Payroll formula selector stored on the staff row."""

    SALARIED = "salaried"
    SALARIED_WITH_BONUS = "salaried_with_bonus"
    HOURLY = "hourly"


class LeaveStatus(str, Enum):
    """Lifecycle of a single leave day."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    NEEDS_DISCUSSION = "NEEDS_DISCUSSION"


class ApprovalAction(str, Enum):
    """Action tokens accepted in admin approval commands (case-sensitive)."""

    APPROVE = "Approve"
    NEEDS_DISCUSSION = "NeedsDiscussion"

    @property
    def resulting_status(self) -> LeaveStatus:
        if self is ApprovalAction.APPROVE:
            return LeaveStatus.APPROVED
        return LeaveStatus.NEEDS_DISCUSSION


class ClockAction(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
