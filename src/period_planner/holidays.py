"""
Polish public holiday calendar.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Optional

import pandas as pd
from pandas.tseries.holiday import AbstractHolidayCalendar, Holiday

from .dates import DateInput, parse_date


def easter_sunday(year: int) -> date:
    """Easter Sunday for a Gregorian year (anonymous Gregorian algorithm)."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return date(year, month, day)


def _days_after_easter(days: int) -> Callable[[pd.Timestamp], pd.Timestamp]:
    """Observance that moves a rule's reference date onto Easter + days of the same year."""

    def observance(dt: pd.Timestamp) -> pd.Timestamp:
        return pd.Timestamp(easter_sunday(dt.year) + timedelta(days=days))

    return observance


class PolishHolidays(AbstractHolidayCalendar):
    """Polish public holidays."""

    rules = [
        Holiday("Nowy Rok", month=1, day=1),
        Holiday("Trzech Króli", month=1, day=6),
        Holiday("Wielkanoc", month=1, day=1, observance=_days_after_easter(0)),
        Holiday("Poniedziałek Wielkanocny", month=1, day=1, observance=_days_after_easter(1)),
        Holiday("Święto Pracy", month=5, day=1),
        Holiday("Święto Konstytucji 3 Maja", month=5, day=3),
        Holiday("Zielone Świątki", month=1, day=1, observance=_days_after_easter(49)),
        Holiday("Boże Ciało", month=1, day=1, observance=_days_after_easter(60)),
        Holiday("Wniebowzięcie NMP", month=8, day=15),
        Holiday("Wszystkich Świętych", month=11, day=1),
        Holiday("Święto Niepodległości", month=11, day=11),
        Holiday("Boże Narodzenie", month=12, day=25),
        Holiday("Drugi dzień Bożego Narodzenia", month=12, day=26),
    ]


class HolidayChecker:
    """Checks if a date is a holiday. Holidays are computed once per year."""

    def __init__(self, calendar: Optional[AbstractHolidayCalendar] = None):
        self._calendar = calendar or PolishHolidays()
        self._by_year: dict[int, dict[date, str]] = {}

    def holidays_in_year(self, year: int) -> dict[date, str]:
        """Returns {date: name} for every holiday of the year."""
        if year not in self._by_year:
            named = self._calendar.holidays(
                start=pd.Timestamp(year, 1, 1),
                end=pd.Timestamp(year, 12, 31),
                return_name=True,
            )
            self._by_year[year] = {ts.date(): name for ts, name in named.items()}
        return self._by_year[year]

    def is_holiday(self, d: DateInput) -> bool:
        """Checks if date is a holiday."""
        parsed = parse_date(d)
        if parsed is None:
            return False
        return parsed in self.holidays_in_year(parsed.year)

    def get_holiday_name(self, d: DateInput) -> Optional[str]:
        """Returns holiday name or None."""
        parsed = parse_date(d)
        if parsed is None:
            return None
        return self.holidays_in_year(parsed.year).get(parsed)


_default_checker = HolidayChecker()


def is_holiday(d: DateInput) -> bool:
    return _default_checker.is_holiday(d)


def get_holiday_name(d: DateInput) -> Optional[str]:
    return _default_checker.get_holiday_name(d)
