from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

from ..attendance.repository import AttendanceRepository
from ..bonus.repository import BonusRepository
from ..common.datetime_utils import month_bounds
from ..core.enums import EmployeeType
from ..core.exceptions import NotFoundError
from ..core.settings import WorkRules
from ..staff.model import StaffRecord
from .calculator.base import PayrollCalculator
from .calculator.hourly_calculator import HourlyPayrollCalculator
from .calculator.salaried_calculator import SalariedPayrollCalculator, SalariedWithBonusPayrollCalculator
from .model import PayrollContext, Payslip
from .month import resolve_target_month


def present_amount(value: Decimal) -> int:
    """Round to a whole currency unit (only for display)."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _fmt_hours(value: Decimal, places: str = "0.1") -> str:
    return str(value.quantize(Decimal(places), rounding=ROUND_HALF_UP))


class PayrollService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        bonuses: BonusRepository,
        rules: WorkRules,
        *,
        calculators: Optional[Mapping[EmployeeType, PayrollCalculator]] = None,
    ):
        self._attendance = attendance
        self._bonuses = bonuses
        self._rules = rules
        self._calculators = dict(
            calculators
            or {
                EmployeeType.SALARIED: SalariedPayrollCalculator(),
                EmployeeType.SALARIED_WITH_BONUS: SalariedWithBonusPayrollCalculator(),
                EmployeeType.HOURLY: HourlyPayrollCalculator(),
            }
        )

    def calculate(self, staff: StaffRecord, *, year: int, month: int) -> Payslip:
        calculator = self._calculators.get(staff.employee_type) if staff.employee_type else None
        if calculator is None:
            raise NotFoundError(f"No payroll configuration exists for {staff.display_name}.")

        start, end = month_bounds(year, month)
        records = self._attendance.list_for_user(staff.user_id)
        ctx = PayrollContext(
            staff=staff,
            year=year,
            month=month,
            month_records=[r for r in records if start <= r.work_date <= end],
            year_records=[r for r in records if r.work_date.year == year],
            bonus=self._bonuses.get_for_user_and_month(staff.user_id, f"{year:04d}-{month:02d}"),
            rules=self._rules,
        )
        return calculator.calculate(ctx)

    def payslip_for_text(self, staff: StaffRecord, *, text: str, today: date) -> Payslip:
        year, month = resolve_target_month(text, today)
        return self.calculate(staff, year=year, month=month)


def format_payslip(p: Payslip) -> str:
    header = f"{p.display_name} {p.title}".strip()
    lines = [f"{header} payslip for {p.year}-{p.month:02d}"]

    if p.employee_type == EmployeeType.HOURLY:
        wage = present_amount(p.hourly_wage)
        hours = _fmt_hours(p.worked_hours, "0.01")
        lines.append(f"Hourly wage: {wage}")
        lines.append(f"Hours worked: {hours}")
        lines.append(f"Leave days: {p.leave_days}")
        lines.append(f"Pay: {wage} x {hours} = {present_amount(p.total)}")
        return "\n".join(lines)

    base = present_amount(p.base_salary)
    deduction = present_amount(p.leave_deduction)
    lines.append(f"Base salary: {base}")
    if p.employee_type == EmployeeType.SALARIED:
        lines.append(f"Overtime: {_fmt_hours(p.overtime_hours)} h, pay {present_amount(p.overtime_pay)}")
    lines.append(f"Insurance: {p.insurance_note or '-'} (paid by the company)")
    lines.append(
        f"Special leave this year: {p.special_leave_entitled} days, "
        f"used {p.special_leave_used}, remaining {p.special_leave_remaining}"
    )
    lines.append(f"Sick/personal leave: {p.leave_days} days, deduction {deduction}")
    if p.employee_type == EmployeeType.SALARIED_WITH_BONUS:
        lines.append(f"Bonus: {p.bonus}" + (f" ({p.bonus_note})" if p.bonus_note else ""))
        middle = f"{p.bonus}"
    else:
        middle = f"{present_amount(p.overtime_pay)}"
    lines.append("-------------------------")
    lines.append(f"Total: {base} + {middle} - {deduction} = {present_amount(p.total)}")
    return "\n".join(lines)
