from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import months_between


def entitled_days(start: Optional[date], as_of: date, table: Sequence[tuple[int, int]]) -> int:
    """Special-leave days granted for the service length reached at ``as_of``.

    ``table`` rows are (months of service, days); the highest threshold
    reached applies, none reached means zero.
    """
    if start is None:
        return 0
    served = months_between(start, as_of)
    days = 0
    for months, granted in sorted(table):
        if served >= months:
            days = granted
    return days
