"""Logical tables and their columns.

Repositories read and write cells only through these names; the physical
store maps them onto whatever layout it uses.
"""

from __future__ import annotations

STAFF = "staff"
ATTENDANCE = "attendance"
BONUS = "bonus"
HOLIDAYS = "holidays"
DISASTER_DAYS = "disaster_days"

TABLES: dict[str, tuple[str, ...]] = {
    STAFF: (
        "user_id",
        "display_name",
        "title",
        "employee_type",
        "base_salary",
        "overtime_multiplier",
        "insurance_note",
        "employment_start_date",
        "is_admin",
    ),
    ATTENDANCE: (
        "user_id",
        "display_name",
        "work_date",
        "clock_in",
        "clock_out",
        "on_leave",
        "leave_type",
        "leave_status",
        "leave_description",
        "off_site_note",
    ),
    BONUS: (
        "user_id",
        "display_name",
        "title",
        "year_month",
        "amount",
        "note",
    ),
    HOLIDAYS: (
        "holiday_date",
        "name",
    ),
    DISASTER_DAYS: (
        "disaster_date",
        "note",
    ),
}

TRUE_VALUES = {"1", "true", "yes", "y", "v"}


def columns_for(table: str) -> tuple[str, ...]:
    try:
        return TABLES[table]
    except KeyError:
        raise KeyError(f"Unknown table: {table!r}") from None


def encode_bool(value: bool) -> str:
    return "1" if value else "0"


def decode_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in TRUE_VALUES
