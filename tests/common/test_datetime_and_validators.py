from __future__ import annotations

from datetime import date, time

import pytest

from hygienist_visits.common.datetime_utils import minutes_between, month_bounds, parse_hhmm
from hygienist_visits.common.validators import require_positive_int, require_year_month
from hygienist_visits.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "value, expected",
    [("09:30", time(9, 30)), ("9:30", None), ("09:30:59", time(9, 30)), ("25:00", None), ("", None), (None, None)],
)
def test_parse_hhmm(value, expected):
    assert parse_hhmm(value) == expected


def test_minutes_between_requires_end_after_start():
    assert minutes_between("09:00", "10:15") == 75
    assert minutes_between("10:00", "10:00") is None
    assert minutes_between("10:00", None) is None


def test_month_bounds_handles_leap_years():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))


def test_require_year_month_codes():
    assert require_year_month("2024", "1") == (2024, 1)
    with pytest.raises(ValidationError) as ei:
        require_year_month(2101, 1)
    assert ei.value.code == "INVALID_YEAR"


def test_require_positive_int():
    assert require_positive_int("3", "Patient ID") == 3
    with pytest.raises(ValidationError):
        require_positive_int(0, "Patient ID")
