"""
Calendar-day and working-day counters.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Callable, Optional

from .dates import DateInput, is_weekend, iter_days, normalize_date_range, parse_date
from .holidays import is_holiday

logger = logging.getLogger(__name__)

DayPredicate = Callable[[date], bool]


def is_working_day(d: date) -> bool:
    """Neither a weekend day nor a public holiday."""
    return not is_weekend(d) and not is_holiday(d)


def calendar_days_in_range(start: DateInput, end: DateInput) -> int:
    """Inclusive number of calendar days between two dates in any order."""
    bounds = normalize_date_range(start, end)
    if bounds is None:
        logger.warning("Invalid date input: start=%r end=%r", start, end)
        return 0
    first, last = bounds
    return (last - first).days + 1


def working_days_in_range(
    start: DateInput,
    end: DateInput,
    predicate: Optional[DayPredicate] = None,
) -> int:
    """Count working days between two dates (inclusive, any order).

    Args:
        start: First bound, any format accepted by ``parse_date``
        end: Second bound
        predicate: Optional extra filter, e.g. "is inside base period"

    Returns:
        int: Number of days that are not weekends, not holidays and satisfy
        the predicate. 0 if either bound is invalid.
    """
    bounds = normalize_date_range(start, end)
    if bounds is None:
        logger.warning("Invalid date input: start=%r end=%r", start, end)
        return 0

    first, last = bounds
    return sum(
        1
        for day in iter_days(first, last)
        if is_working_day(day) and (predicate is None or predicate(day))
    )


def working_days_in_month(year: int, month: int) -> int:
    """Working days of a single calendar month."""
    _, ndays = calendar.monthrange(year, month)
    return working_days_in_range(date(year, month, 1), date(year, month, ndays))


def range_day_index(d: DateInput, range_start: DateInput) -> Optional[int]:
    """1-based position of ``d`` among the weekdays counted from ``range_start``.

    Only weekends are skipped. Returns None when ``d`` lies before the start
    or either input is invalid.
    """
    day = parse_date(d)
    first = parse_date(range_start)
    if day is None or first is None or day < first:
        return None
    return sum(1 for current in iter_days(first, day) if not is_weekend(current))
