from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.notifications import Push
from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveDay:
    """One requested day; ``annotation`` is e.g. "(AM)" written after a single date."""

    day: date
    annotation: str = ""


@dataclass(frozen=True)
class LeaveSubmission:
    registered: list[date]
    skipped: list[date]
    leave_type: str
    notifications: list[Push] = field(default_factory=list)


@dataclass(frozen=True)
class LeaveEntry:
    """Read-model for a user's leave history."""

    work_date: date
    leave_type: str
    status: Optional[LeaveStatus]
