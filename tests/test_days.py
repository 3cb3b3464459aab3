"""
Test cases for calendar and working day counters.
"""

from datetime import date

import pytest

from period_planner.dates import next_day
from period_planner.days import (
    calendar_days_in_range,
    is_working_day,
    range_day_index,
    working_days_in_month,
    working_days_in_range,
)


class TestCalendarDays:

    def test_single_day(self):
        assert calendar_days_in_range("2024-01-15", "2024-01-15") == 1

    def test_across_leap_day(self):
        assert calendar_days_in_range("28.02.2024", "01.03.2024") == 3

    def test_reversed_order(self):
        assert calendar_days_in_range("10.01.2024", "01.01.2024") == 10

    def test_invalid_input_counts_zero(self):
        assert calendar_days_in_range("32.01.2024", "01.02.2024") == 0
        assert calendar_days_in_range(None, "01.02.2024") == 0


class TestWorkingDays:

    def test_first_week_of_2024(self):
        """1.01 is a Monday holiday and 6-7.01 is a weekend."""
        assert working_days_in_range("01.01.2024", "07.01.2024") == 4

    def test_weekend_and_holiday_are_not_working_days(self):
        assert not is_working_day(date(2024, 1, 6))   # Saturday and Trzech Króli
        assert not is_working_day(date(2024, 1, 1))
        assert not is_working_day(date(2024, 4, 1))   # Easter Monday
        assert is_working_day(date(2024, 1, 2))

    def test_reversed_order(self):
        assert working_days_in_range("07.01.2024", "01.01.2024") == 4

    def test_invalid_input_counts_zero(self):
        assert working_days_in_range("bad", "07.01.2024") == 0

    def test_predicate_filters_days(self):
        only_even = lambda d: d.day % 2 == 0  # noqa: E731
        # 2, 4 January
        assert working_days_in_range("01.01.2024", "07.01.2024", only_even) == 2

    @pytest.mark.parametrize(
        "start, middle, end",
        [
            (date(2024, 1, 1), date(2024, 1, 5), date(2024, 1, 31)),
            (date(2024, 3, 25), date(2024, 3, 31), date(2024, 4, 10)),
            (date(2024, 12, 20), date(2024, 12, 31), date(2025, 1, 10)),
        ],
    )
    def test_additivity(self, start, middle, end):
        assert working_days_in_range(start, end) == (
            working_days_in_range(start, middle)
            + working_days_in_range(next_day(middle), end)
        )

    def test_working_days_in_month(self):
        assert working_days_in_month(2024, 1) == 22
        assert working_days_in_month(2024, 2) == 21


class TestRangeDayIndex:

    def test_counts_weekdays_only(self):
        assert range_day_index("2024-01-08", "2024-01-08") == 1
        assert range_day_index("2024-01-10", "2024-01-08") == 3
        assert range_day_index("2024-01-15", "2024-01-08") == 6

    def test_before_start(self):
        assert range_day_index("2024-01-05", "2024-01-08") is None
