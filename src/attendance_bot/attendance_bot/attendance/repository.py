from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import format_timestamp, parse_timestamp, try_parse_iso_date
from ..core.enums import LeaveStatus
from ..store import schema
from ..store.tabular import TableRow, TabularStore
from .model import AttendanceRecord


def parse_leave_status(value: Optional[str]) -> Optional[LeaveStatus]:
    v = (value or "").strip().upper()
    if not v:
        return None
    try:
        return LeaveStatus(v)
    except ValueError:
        return None


class AttendanceRepository:
    """Typed access to the attendance table, one row per (user, day)."""

    def __init__(self, store: TabularStore):
        self._store = store

    @staticmethod
    def _to_record(row: TableRow) -> Optional[AttendanceRecord]:
        work_date = try_parse_iso_date(row.get("work_date"))
        if work_date is None:
            return None
        return AttendanceRecord(
            row_key=row.key,
            user_id=(row.get("user_id") or "").strip(),
            display_name=row.get("display_name") or "",
            work_date=work_date,
            clock_in=parse_timestamp(row.get("clock_in"), on=work_date),
            clock_out=parse_timestamp(row.get("clock_out"), on=work_date),
            on_leave=schema.decode_bool(row.get("on_leave")),
            leave_type=row.get("leave_type") or "",
            leave_status=parse_leave_status(row.get("leave_status")),
            leave_description=row.get("leave_description") or "",
            off_site_note=row.get("off_site_note") or "",
        )

    def list_all(self) -> Sequence[AttendanceRecord]:
        snapshot = self._store.get_all(schema.ATTENDANCE)
        records = (self._to_record(r) for r in snapshot.rows)
        return [r for r in records if r is not None]

    def list_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        return [r for r in self.list_all() if r.user_id == user_id]

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        for r in self.list_for_user(user_id):
            if r.work_date == work_date:
                return r
        return None

    def create(
        self,
        *,
        user_id: str,
        display_name: str,
        work_date: date,
        clock_in: Optional[datetime] = None,
        off_site_note: Optional[str] = None,
    ) -> int:
        values = {
            "user_id": user_id,
            "display_name": display_name,
            "work_date": work_date.isoformat(),
            "on_leave": schema.encode_bool(False),
        }
        if clock_in is not None:
            values["clock_in"] = format_timestamp(clock_in)
        if off_site_note is not None:
            values["off_site_note"] = off_site_note
        return self._store.append(schema.ATTENDANCE, values)

    def create_leave(
        self,
        *,
        user_id: str,
        display_name: str,
        work_date: date,
        leave_type: str,
        description: str,
    ) -> int:
        return self._store.append(
            schema.ATTENDANCE,
            {
                "user_id": user_id,
                "display_name": display_name,
                "work_date": work_date.isoformat(),
                "on_leave": schema.encode_bool(True),
                "leave_type": leave_type,
                "leave_status": LeaveStatus.PENDING.value,
                "leave_description": description,
            },
        )

    def mark_leave(self, *, row_key: int, leave_type: str, description: str) -> bool:
        cells = {
            "on_leave": schema.encode_bool(True),
            "leave_type": leave_type,
            "leave_status": LeaveStatus.PENDING.value,
            "leave_description": description,
        }
        return all([self._store.update_cell(schema.ATTENDANCE, row_key, c, v) for c, v in cells.items()])

    def set_clock_in(self, *, row_key: int, at: datetime) -> bool:
        return self._store.update_cell(schema.ATTENDANCE, row_key, "clock_in", format_timestamp(at))

    def set_clock_out(self, *, row_key: int, at: datetime) -> bool:
        return self._store.update_cell(schema.ATTENDANCE, row_key, "clock_out", format_timestamp(at))

    def set_off_site_note(self, *, row_key: int, note: str) -> bool:
        return self._store.update_cell(schema.ATTENDANCE, row_key, "off_site_note", note)

    def set_leave_status(self, *, row_key: int, status: LeaveStatus) -> bool:
        return self._store.update_cell(schema.ATTENDANCE, row_key, "leave_status", status.value)
