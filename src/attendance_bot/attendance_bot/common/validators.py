from __future__ import annotations

import re

from ..core.exceptions import ValidationError

_YEAR_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_year_month(value: str, field_name: str = "Month") -> str:
    v = (value or "").strip()
    if not _YEAR_MONTH_RE.match(v):
        raise ValidationError(f"{field_name} must look like YYYY-MM")
    return v


def require_int(value: str, field_name: str) -> int:
    try:
        return int((value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a whole number")
