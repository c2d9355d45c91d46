"""Tests for poforecast/domain/calendar.py."""

from datetime import date, datetime

from poforecast.domain.calendar import add_months, month_start, months_between


def test_month_start_drops_day():
    assert month_start(date(2024, 2, 29)) == date(2024, 2, 1)


def test_month_start_accepts_datetime():
    assert month_start(datetime(2023, 11, 30, 23, 59)) == date(2023, 11, 1)


def test_add_months_within_year():
    assert add_months(date(2024, 1, 1), 3) == date(2024, 4, 1)


def test_add_months_rolls_over_year():
    assert add_months(date(2023, 11, 1), 3) == date(2024, 2, 1)


def test_add_months_negative():
    assert add_months(date(2024, 1, 1), -1) == date(2023, 12, 1)


def test_add_months_zero_normalises_day():
    assert add_months(date(2024, 5, 17), 0) == date(2024, 5, 1)


def test_months_between_forward():
    assert months_between(date(2023, 12, 1), date(2024, 3, 1)) == 3


def test_months_between_backward_is_negative():
    assert months_between(date(2024, 3, 1), date(2023, 12, 1)) == -3


def test_months_between_same_month():
    assert months_between(date(2024, 3, 1), date(2024, 3, 28)) == 0
