from __future__ import annotations

from datetime import date

import pytest

from src.attendance_bot.attendance_bot.core.exceptions import ValidationError
from src.attendance_bot.attendance_bot.leave.date_expansion import expand_date_list, expand_dates


def test_range_expands_inclusive():
    days = expand_dates("personal leave 2025-07-01~2025-07-03")
    assert [d.day for d in days] == [date(2025, 7, 1), date(2025, 7, 2), date(2025, 7, 3)]


def test_range_length_is_end_minus_start_plus_one():
    days = expand_dates("2025-06-25~2025-07-04")
    assert len(days) == 10


def test_single_dates_keep_annotation_and_dedupe():
    days = expand_dates("2025-07-01(morning) and 2025-07-02, again 2025-07-01")
    assert [d.day for d in days] == [date(2025, 7, 1), date(2025, 7, 2)]
    assert days[0].annotation == "(morning)"


@pytest.mark.parametrize("text", ["", "next Monday", "2025-13-01", "2025-07-05~2025-07-01"])
def test_malformed_or_reversed_yields_nothing(text):
    assert expand_dates(text) == []


def test_range_over_cap_is_rejected():
    with pytest.raises(ValidationError):
        expand_dates("2025-01-01~2025-12-31", max_days=62)


def test_classifier_list_mixes_dates_and_ranges():
    days = expand_date_list(["2025-07-01", "2025-07-03~2025-07-04", "2025-07-01"])
    assert [d.day for d in days] == [date(2025, 7, 1), date(2025, 7, 3), date(2025, 7, 4)]
