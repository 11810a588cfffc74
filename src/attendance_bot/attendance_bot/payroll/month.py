from __future__ import annotations

import re
from datetime import date

from ..common.datetime_utils import previous_month

_YEAR_MONTH = re.compile(r"(?<!\d)(\d{4})\s*[年/-]\s*(\d{1,2})(?!\d)")
_MONTH_ONLY = re.compile(r"(?<!\d)(\d{1,2})\s*月")
_MONTH_NAMES = {
    name: i
    for i, names in enumerate(
        [
            ("january", "jan"),
            ("february", "feb"),
            ("march", "mar"),
            ("april", "apr"),
            ("may",),
            ("june", "jun"),
            ("july", "jul"),
            ("august", "aug"),
            ("september", "sep", "sept"),
            ("october", "oct"),
            ("november", "nov"),
            ("december", "dec"),
        ],
        start=1,
    )
    for name in names
}
_WORD = re.compile(r"[a-z]+")


def resolve_target_month(text: str, today: date) -> tuple[int, int]:
    """Month a salary question is about.

    Explicit ``YYYY-MM`` / ``YYYY/MM`` / ``YYYY年M月`` wins, then a bare month
    (``7月`` or an English month name, current year). Without a month token the
    previous month is used because the current one is not final yet.
    """
    text = text or ""

    m = _YEAR_MONTH.search(text)
    if m and 1 <= int(m.group(2)) <= 12:
        return int(m.group(1)), int(m.group(2))

    m = _MONTH_ONLY.search(text)
    if m and 1 <= int(m.group(1)) <= 12:
        return today.year, int(m.group(1))

    for word in _WORD.findall(text.lower()):
        month = _MONTH_NAMES.get(word)
        if month:
            return today.year, month

    return previous_month(today)
