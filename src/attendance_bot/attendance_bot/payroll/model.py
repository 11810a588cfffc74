from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..bonus.model import BonusRecord
from ..common.datetime_utils import month_bounds
from ..core.enums import EmployeeType
from ..core.settings import WorkRules
from ..staff.model import StaffRecord


@dataclass(frozen=True)
class PayrollContext:
    """Everything a calculator needs, already read from the store."""

    staff: StaffRecord
    year: int
    month: int
    month_records: Sequence[AttendanceRecord]
    year_records: Sequence[AttendanceRecord]
    bonus: Optional[BonusRecord]
    rules: WorkRules

    @property
    def month_end(self) -> date:
        return month_bounds(self.year, self.month)[1]


@dataclass(frozen=True)
class Payslip:
    """Monthly salary breakdown; amounts keep full precision until formatting."""

    display_name: str
    title: str
    year: int
    month: int
    employee_type: EmployeeType
    total: Decimal
    base_salary: Decimal = Decimal("0")
    days_in_month: int = 0
    leave_days: int = 0
    leave_deduction: Decimal = Decimal("0")
    worked_hours: Decimal = Decimal("0")
    overtime_hours: Decimal = Decimal("0")
    overtime_pay: Decimal = Decimal("0")
    bonus: int = 0
    bonus_note: str = ""
    special_leave_entitled: int = 0
    special_leave_used: int = 0
    insurance_note: str = ""
    hourly_wage: Decimal = Decimal("0")

    @property
    def special_leave_remaining(self) -> int:
        return self.special_leave_entitled - self.special_leave_used
