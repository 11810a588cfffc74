"""Closed set of intents the router understands.

Every classifier result is turned into exactly one of these; anything the
router cannot act on becomes ``OtherIntent``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass(frozen=True)
class LeaveRequestIntent:
    leave_type: Optional[str] = None
    dates: tuple[str, ...] = field(default_factory=tuple)
    description: Optional[str] = None


@dataclass(frozen=True)
class ClockIntent:
    pass


@dataclass(frozen=True)
class OffSiteIntent:
    description: Optional[str] = None


@dataclass(frozen=True)
class SalaryQueryIntent:
    pass


@dataclass(frozen=True)
class AddBonusIntent:
    pass


@dataclass(frozen=True)
class ClarificationIntent:
    question: str


@dataclass(frozen=True)
class OtherIntent:
    raw_text: str = ""


Intent = Union[
    LeaveRequestIntent,
    ClockIntent,
    OffSiteIntent,
    SalaryQueryIntent,
    AddBonusIntent,
    ClarificationIntent,
    OtherIntent,
]
