"""Turn date expressions from a leave request into concrete days.

Accepted shapes, anywhere in the text:

- ``2025-07-01`` - a single day, optionally followed by ``(annotation)``
- ``2025-07-01~2025-07-03`` - every calendar day from start to end inclusive

Malformed or missing dates expand to nothing; the caller decides what an
empty result means.
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import try_parse_iso_date
from ..core.constants import DEFAULT_MAX_LEAVE_RANGE_DAYS
from ..core.exceptions import ValidationError
from .model import LeaveDay

_DATE_EXPR = re.compile(
    r"(?P<start>\d{4}-\d{2}-\d{2})"
    r"(?:\s*~\s*(?P<end>\d{4}-\d{2}-\d{2}))?"
    r"(?:\s*(?P<note>\([^()]*\)))?"
)


def _expand_match(match: re.Match, max_days: int) -> list[LeaveDay]:
    start = try_parse_iso_date(match.group("start"))
    if start is None:
        return []

    end_raw = match.group("end")
    if end_raw is None:
        return [LeaveDay(day=start, annotation=match.group("note") or "")]

    end = try_parse_iso_date(end_raw)
    if end is None or end < start:
        return []

    length = (end - start).days + 1
    if length > max_days:
        raise ValidationError(f"A leave range may cover at most {max_days} days")
    return [LeaveDay(day=start + timedelta(days=i)) for i in range(length)]


def _dedupe(days: Iterable[LeaveDay]) -> list[LeaveDay]:
    seen = set()
    out: list[LeaveDay] = []
    for d in days:
        if d.day in seen:
            continue
        seen.add(d.day)
        out.append(d)
    return out


def expand_dates(expression: Optional[str], *, max_days: int = DEFAULT_MAX_LEAVE_RANGE_DAYS) -> list[LeaveDay]:
    """Expand every date or range found in ``expression``, in order, without repeats."""
    if not expression:
        return []
    days: list[LeaveDay] = []
    for match in _DATE_EXPR.finditer(expression):
        days.extend(_expand_match(match, max_days))
    return _dedupe(days)


def expand_date_list(items: Iterable[str], *, max_days: int = DEFAULT_MAX_LEAVE_RANGE_DAYS) -> list[LeaveDay]:
    """Expand a classifier-provided list where each item is a date or a range."""
    days: list[LeaveDay] = []
    for item in items:
        days.extend(expand_dates(str(item), max_days=max_days))
    return _dedupe(days)
