from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from decimal import Decimal

from ...attendance.model import AttendanceRecord
from ...core.settings import WorkRules
from ..model import PayrollContext, Payslip


def shift_span(record: AttendanceRecord) -> timedelta:
    if record.clock_in is None or record.clock_out is None:
        return timedelta(0)
    return record.clock_out - record.clock_in


def overlaps_break(record: AttendanceRecord, rules: WorkRules) -> bool:
    day = record.work_date
    break_start = datetime.combine(day, rules.break_start)
    break_end = datetime.combine(day, rules.break_end)
    return record.clock_in < break_end and record.clock_out > break_start


def worked_hours(record: AttendanceRecord, rules: WorkRules) -> Decimal:
    """Shift length in hours minus the midday break when the shift spans it."""
    if not record.has_full_shift:
        return Decimal("0")
    hours = Decimal(int(shift_span(record).total_seconds())) / Decimal(3600)
    if overlaps_break(record, rules):
        break_seconds = (
            datetime.combine(record.work_date, rules.break_end) - datetime.combine(record.work_date, rules.break_start)
        ).total_seconds()
        hours -= Decimal(int(break_seconds)) / Decimal(3600)
    return max(hours, Decimal("0"))


def overtime_hours(record: AttendanceRecord, rules: WorkRules) -> Decimal:
    """Half-hour units worked past start + standard shift, once the overage reaches the threshold."""
    if not record.has_full_shift:
        return Decimal("0")
    standard_end = record.clock_in + timedelta(hours=rules.standard_shift_hours)
    over_seconds = (record.clock_out - standard_end).total_seconds()
    if over_seconds < rules.overtime_min_minutes * 60:
        return Decimal("0")
    half_hours = int(over_seconds // 1800)
    return Decimal(half_hours) / Decimal(2)


def is_special_leave(record: AttendanceRecord, rules: WorkRules) -> bool:
    return record.on_leave and rules.special_leave_label.lower() in (record.leave_type or "").lower()


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern per employee type)."""

    @abstractmethod
    def calculate(self, ctx: PayrollContext) -> Payslip:
        raise NotImplementedError
