from __future__ import annotations

from decimal import Decimal

from ...core.enums import EmployeeType
from ..model import PayrollContext, Payslip
from .base import PayrollCalculator, shift_span


class HourlyPayrollCalculator(PayrollCalculator):
    """Presence-based pay: wage x hours; long shifts lose an unpaid meal break."""

    def calculate(self, ctx: PayrollContext) -> Payslip:
        rules = ctx.rules
        total_minutes = Decimal("0")
        for r in ctx.month_records:
            if not r.has_full_shift:
                continue
            minutes = Decimal(int(shift_span(r).total_seconds())) / Decimal(60)
            if minutes >= rules.hourly_break_threshold_minutes:
                minutes -= rules.hourly_break_minutes
            if minutes > 0:
                total_minutes += minutes

        hours = total_minutes / Decimal(60)
        wage = ctx.staff.base_salary
        leave_days = sum(1 for r in ctx.month_records if r.on_leave)

        return Payslip(
            display_name=ctx.staff.display_name,
            title=ctx.staff.title,
            year=ctx.year,
            month=ctx.month,
            employee_type=EmployeeType.HOURLY,
            total=wage * hours,
            leave_days=leave_days,
            worked_hours=hours,
            hourly_wage=wage,
            insurance_note=ctx.staff.insurance_note,
        )
