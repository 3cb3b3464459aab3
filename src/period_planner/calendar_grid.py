"""
Month grid covering the base periods, Monday-first.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional, Sequence

from .dates import is_weekend
from .days import range_day_index, working_days_in_month
from .holidays import is_holiday
from .models import BasePeriod, ColoredRange

MONTH_NAMES = [
    "styczeń", "luty", "marzec", "kwiecień", "maj", "czerwiec",
    "lipiec", "sierpień", "wrzesień", "październik", "listopad", "grudzień",
]
WEEKDAY_HEADERS = ["PN", "WT", "ŚR", "CZ", "PT", "SB", "ND"]


@dataclass(slots=True)
class DayCell:
    """One cell of the grid; ``day`` is None for the leading blanks.

    ``range_type`` and ``range_index`` describe the regular range covering
    the day, the index being the weekday position inside that range.
    """

    day: Optional[date] = None
    periods: list[int] = field(default_factory=list)
    weekend: bool = False
    holiday: bool = False
    range_type: Optional[str] = None
    range_index: Optional[int] = None
    duties: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.day.isoformat() if self.day else None,
            "periods": list(self.periods),
            "weekend": self.weekend,
            "holiday": self.holiday,
            "range_type": self.range_type,
            "range_index": self.range_index,
            "duties": list(self.duties),
        }


@dataclass(slots=True)
class CalendarMonth:
    name: str
    year: int
    month: int
    working_days: int = 0
    cells: list[DayCell] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "year": self.year,
            "month": self.month,
            "working_days": self.working_days,
            "cells": [c.to_dict() for c in self.cells],
        }


@dataclass(slots=True)
class CalendarData:
    months: list[CalendarMonth] = field(default_factory=list)

    @property
    def has_data(self) -> bool:
        return bool(self.months)

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_data": self.has_data,
            "weekdays": list(WEEKDAY_HEADERS),
            "months": [m.to_dict() for m in self.months],
        }


def _month_starts(first: date, last: date):
    year, month = first.year, first.month
    while (year, month) <= (last.year, last.month):
        yield year, month
        month += 1
        if month > 12:
            year, month = year + 1, 1


def _day_cell(d: date, defined: list[tuple[int, BasePeriod]], ranges: Sequence[ColoredRange]) -> DayCell:
    cell = DayCell(
        day=d,
        periods=[i for i, p in defined if p.contains(d)],
        weekend=is_weekend(d),
        holiday=is_holiday(d),
    )
    for r in ranges:
        if not r.contains(d):
            continue
        if r.special:
            cell.duties.append(r.type)
        elif cell.range_type is None:
            cell.range_type = r.type
            if not cell.weekend:
                cell.range_index = range_day_index(d, r.start)
    return cell


def generate_calendar_data(
    periods: Sequence[BasePeriod], ranges: Sequence[ColoredRange] = ()
) -> CalendarData:
    """Build the grid of months from the earliest start to the latest end."""
    defined = [(i, p) for i, p in enumerate(periods) if p.is_defined]
    if not defined:
        return CalendarData()

    first = min(p.start for _, p in defined)
    last = max(p.end for _, p in defined)

    months = []
    for year, month in _month_starts(first, last):
        leading_blanks, ndays = calendar.monthrange(year, month)
        cells = [DayCell() for _ in range(leading_blanks)]
        cells.extend(
            _day_cell(date(year, month, day_no), defined, ranges)
            for day_no in range(1, ndays + 1)
        )
        months.append(
            CalendarMonth(
                name=MONTH_NAMES[month - 1],
                year=year,
                month=month,
                working_days=working_days_in_month(year, month),
                cells=cells,
            )
        )

    return CalendarData(months=months)
