from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from ..common.datetime_utils import try_parse_iso_date
from ..core.enums import EmployeeType
from ..store import schema
from ..store.tabular import TableRow, TabularStore
from .model import StaffRecord


def parse_decimal(value: Optional[str]) -> Optional[Decimal]:
    v = (value or "").replace(",", "").strip()
    if not v:
        return None
    try:
        return Decimal(v)
    except InvalidOperation:
        return None


def parse_employee_type(value: Optional[str]) -> Optional[EmployeeType]:
    v = (value or "").strip().lower()
    if not v:
        return None
    try:
        return EmployeeType(v)
    except ValueError:
        return None


class StaffRepository:
    """Typed access to the staff table."""

    def __init__(self, store: TabularStore):
        self._store = store

    @staticmethod
    def _to_record(row: TableRow) -> StaffRecord:
        return StaffRecord(
            row_key=row.key,
            user_id=(row.get("user_id") or "").strip(),
            display_name=(row.get("display_name") or "").strip(),
            title=row.get("title") or "",
            employee_type=parse_employee_type(row.get("employee_type")),
            base_salary=parse_decimal(row.get("base_salary")) or Decimal("0"),
            overtime_multiplier=parse_decimal(row.get("overtime_multiplier")),
            insurance_note=row.get("insurance_note") or "",
            employment_start_date=try_parse_iso_date(row.get("employment_start_date")),
            is_admin=schema.decode_bool(row.get("is_admin")),
        )

    def list_all(self) -> Sequence[StaffRecord]:
        snapshot = self._store.get_all(schema.STAFF)
        return [self._to_record(r) for r in snapshot.rows if (r.get("user_id") or "").strip()]

    def get_by_user_id(self, user_id: str) -> Optional[StaffRecord]:
        for staff in self.list_all():
            if staff.user_id == user_id:
                return staff
        return None

    def find_by_display_name(self, display_name: str) -> Sequence[StaffRecord]:
        """Exact, case-sensitive match; no fuzzy resolution."""
        return [s for s in self.list_all() if s.display_name == display_name]

    def list_admins(self) -> Sequence[StaffRecord]:
        return [s for s in self.list_all() if s.is_admin]

    def create(self, *, user_id: str, display_name: str, is_admin: bool = False) -> StaffRecord:
        row_key = self._store.append(
            schema.STAFF,
            {
                "user_id": user_id,
                "display_name": display_name,
                "is_admin": schema.encode_bool(is_admin),
            },
        )
        return StaffRecord(row_key=row_key, user_id=user_id, display_name=display_name, is_admin=is_admin)
