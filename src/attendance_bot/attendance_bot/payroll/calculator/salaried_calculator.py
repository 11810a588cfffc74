from __future__ import annotations

from decimal import Decimal

from ...common.datetime_utils import days_in_month
from ...core.enums import EmployeeType
from ..model import PayrollContext, Payslip
from ..special_leave import entitled_days
from .base import PayrollCalculator, is_special_leave, overtime_hours, worked_hours


class SalariedPayrollCalculator(PayrollCalculator):
    """Monthly salary: base + overtime - unpaid leave days.

    A leave day costs base / days-in-month; special (accrued) leave is free.
    Overtime is paid at (daily salary / standard shift hours) per hour times
    the multiplier.
    """

    employee_type = EmployeeType.SALARIED
    pays_overtime = True

    def _bonus(self, ctx: PayrollContext) -> tuple[int, str]:
        return 0, ""

    def calculate(self, ctx: PayrollContext) -> Payslip:
        rules = ctx.rules
        staff = ctx.staff
        base = staff.base_salary
        month_days = days_in_month(ctx.year, ctx.month)
        daily_salary = base / Decimal(month_days)

        leave_days = sum(1 for r in ctx.month_records if r.on_leave and not is_special_leave(r, rules))
        leave_deduction = daily_salary * leave_days

        worked = sum((worked_hours(r, rules) for r in ctx.month_records), Decimal("0"))
        ot_hours = Decimal("0")
        ot_pay = Decimal("0")
        if self.pays_overtime:
            ot_hours = sum((overtime_hours(r, rules) for r in ctx.month_records), Decimal("0"))
            multiplier = staff.overtime_multiplier or rules.default_overtime_multiplier
            ot_pay = daily_salary / Decimal(rules.standard_shift_hours) * ot_hours * multiplier

        special_used = sum(
            1 for r in ctx.year_records if r.work_date.year == ctx.year and is_special_leave(r, rules)
        )
        special_entitled = entitled_days(staff.employment_start_date, ctx.month_end, rules.special_leave_table)

        bonus, bonus_note = self._bonus(ctx)
        total = base + Decimal(bonus) + ot_pay - leave_deduction

        return Payslip(
            display_name=staff.display_name,
            title=staff.title,
            year=ctx.year,
            month=ctx.month,
            employee_type=self.employee_type,
            total=total,
            base_salary=base,
            days_in_month=month_days,
            leave_days=leave_days,
            leave_deduction=leave_deduction,
            worked_hours=worked,
            overtime_hours=ot_hours,
            overtime_pay=ot_pay,
            bonus=bonus,
            bonus_note=bonus_note,
            special_leave_entitled=special_entitled,
            special_leave_used=special_used,
            insurance_note=staff.insurance_note,
        )


class SalariedWithBonusPayrollCalculator(SalariedPayrollCalculator):
    """Monthly salary plus the month's bonus row (zero when absent); no overtime."""

    employee_type = EmployeeType.SALARIED_WITH_BONUS
    pays_overtime = False

    def _bonus(self, ctx: PayrollContext) -> tuple[int, str]:
        if ctx.bonus is None:
            return 0, ""
        return ctx.bonus.amount, ctx.bonus.note
