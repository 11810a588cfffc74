from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ClockAction, LeaveStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's row for one day.

    A day carries clock times, a leave marker, or an off-site note; leave takes
    precedence over clocking for that day.
    """

    row_key: int
    user_id: str
    display_name: str
    work_date: date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    on_leave: bool = False
    leave_type: str = ""
    leave_status: Optional[LeaveStatus] = None
    leave_description: str = ""
    off_site_note: str = ""

    @property
    def has_full_shift(self) -> bool:
        return self.clock_in is not None and self.clock_out is not None and not self.on_leave


@dataclass(frozen=True)
class ClockResult:
    action: ClockAction
    at: datetime
