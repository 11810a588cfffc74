from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import EmployeeType


@dataclass(frozen=True)
class StaffRecord:
    """Domain entity: a registered staff member.

    ``user_id`` is the messaging platform's stable identity. Payroll fields are
    filled in by an admin outside the bot; until then ``employee_type`` is None.
    """

    row_key: int
    user_id: str
    display_name: str
    title: str = ""
    employee_type: Optional[EmployeeType] = None
    base_salary: Decimal = Decimal("0")
    overtime_multiplier: Optional[Decimal] = None
    insurance_note: str = ""
    employment_start_date: Optional[date] = None
    is_admin: bool = False
