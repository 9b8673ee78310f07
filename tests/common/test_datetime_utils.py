from datetime import date, datetime

import pytest

from src.church_attendance.church_attendance.common.datetime_utils import (
    coerce_date,
    current_sunday,
    last_sundays,
    short_label,
)
from src.church_attendance.church_attendance.core.exceptions import ValidationError


def test_current_sunday_on_sunday_and_weekday():
    assert current_sunday(date(2026, 3, 15)) == date(2026, 3, 15)
    assert current_sunday(date(2026, 3, 16)) == date(2026, 3, 15)
    assert current_sunday(date(2026, 3, 21)) == date(2026, 3, 15)


def test_last_sundays_are_seven_days_apart():
    sundays = last_sundays(date(2026, 1, 2), 4)

    assert sundays == [date(2025, 12, 7), date(2025, 12, 14), date(2025, 12, 21), date(2025, 12, 28)]


def test_coerce_date():
    assert coerce_date("2026-03-01") == date(2026, 3, 1)
    assert coerce_date(datetime(2026, 3, 1, 10, 30)) == date(2026, 3, 1)
    with pytest.raises(ValidationError):
        coerce_date("2026/03/01")


def test_short_label_has_no_padding():
    assert short_label(date(2026, 3, 1)) == "3/1"
