from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BonusRecord:
    """Domain entity: at most one bonus per (user, YYYY-MM)."""

    row_key: int
    user_id: str
    display_name: str
    year_month: str
    amount: int
    note: str = ""


@dataclass(frozen=True)
class BonusCommand:
    display_name: str
    year_month: str
    amount: int
    note: str
