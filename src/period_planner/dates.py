"""
Date parsing and normalization helpers.
Every comparison in the planner runs on plain calendar dates.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

DateInput = Union[str, date, datetime, None]

_DMY_SEPARATORS = re.compile(r"[./]")


def parse_date(value: DateInput) -> Optional[date]:
    """Parse a date in one of the accepted formats.

    Accepted inputs are ``date``/``datetime`` objects (the time of day is
    dropped) and the strings ``YYYY-MM-DD``, ``DD/MM/YYYY`` and
    ``DD.MM.YYYY``. A string containing ``-`` is read as ISO, anything else
    as day-month-year.

    Returns:
        The calendar date, or None if the input is empty or not a real date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None

    if "-" in text:
        parts = text.split("-")
        if len(parts) != 3:
            return None
        year_s, month_s, day_s = parts
    else:
        parts = _DMY_SEPARATORS.split(text)
        if len(parts) != 3:
            return None
        day_s, month_s, year_s = parts

    if not (year_s.isdigit() and month_s.isdigit() and day_s.isdigit()):
        return None

    try:
        return date(int(year_s), int(month_s), int(day_s))
    except ValueError:
        return None


def normalize_date_range(
    start: DateInput, end: DateInput
) -> Optional[tuple[date, date]]:
    """Parse both bounds and return them earlier-first, or None if either is invalid."""
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date is None or end_date is None:
        return None
    if start_date <= end_date:
        return start_date, end_date
    return end_date, start_date


def format_date(d: date) -> str:
    """Display form used in reports: DD.MM.YYYY."""
    return d.strftime("%d.%m.%Y")


def format_range(start: date, end: date) -> str:
    """A single date for one-day ranges, otherwise ``start - end``."""
    if start == end:
        return format_date(start)
    return f"{format_date(start)} - {format_date(end)}"


def next_day(d: date) -> date:
    return d + timedelta(days=1)


def previous_day(d: date) -> date:
    return d - timedelta(days=1)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_weekend(d: date) -> bool:
    return d.weekday() >= 5
