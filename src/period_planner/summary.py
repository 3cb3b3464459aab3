"""
Aggregation of colored ranges into per-category, per-period statistics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Sequence

from .dates import DateInput, format_date, normalize_date_range
from .days import working_days_in_range
from .membership import find_period_index, ranges_overlap
from .models import BasePeriod, ColoredRange

logger = logging.getLogger(__name__)

OUTSIDE_PERIODS = "Poza zakresem"


def period_label(index: int) -> str:
    """Display name of a base period."""
    return f"Rok {index + 1}"


@dataclass(slots=True)
class GroupedRangeResult:
    """Statistics of one base period. Derived on demand, never stored."""

    grouped: dict[str, list[ColoredRange]] = field(default_factory=dict)
    total_working_days: int = 0
    colored_range_days: int = 0
    working_days_by_type: dict[str, int] = field(default_factory=dict)

    @property
    def basic_period_days(self) -> int:
        return self.total_working_days - self.colored_range_days

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for API responses."""
        return {
            "grouped": {
                category: [r.model_dump(mode="json", exclude_none=True) for r in ranges]
                for category, ranges in self.grouped.items()
            },
            "total_working_days": self.total_working_days,
            "colored_range_days": self.colored_range_days,
            "basic_period_days": self.basic_period_days,
            "working_days_by_type": dict(self.working_days_by_type),
        }


@dataclass(slots=True)
class DutyEntry:
    """A special (duty) marker together with the period it falls into."""

    day: date
    type: str
    period: str

    def to_dict(self) -> dict[str, str]:
        return {"date": self.day.isoformat(), "type": self.type, "period": self.period}


def _chronological(ranges: Sequence[ColoredRange]) -> list[ColoredRange]:
    return sorted(ranges, key=lambda r: r.start)


def working_days_by_type(ranges: Sequence[ColoredRange]) -> tuple[dict[str, int], int]:
    """Working days per category and their sum. Special ranges are not counted."""
    by_type: dict[str, int] = {}
    total = 0
    for r in ranges:
        if r.special:
            continue
        days = working_days_in_range(r.start, r.end)
        by_type[r.type] = by_type.get(r.type, 0) + days
        total += days
    return by_type, total


def total_working_days(periods: Sequence[BasePeriod]) -> int:
    """Working days across all fully defined periods."""
    return sum(working_days_in_range(p.start, p.end) for p in periods if p.is_defined)


def summarize_ranges(
    ranges: Sequence[ColoredRange],
    period_start: DateInput,
    period_end: DateInput,
) -> GroupedRangeResult:
    """Group ranges intersecting a period by category and count working days.

    Args:
        ranges: All colored ranges
        period_start: Start of the base period
        period_end: End of the base period

    Returns:
        GroupedRangeResult: Ranges grouped by type (first appearance order,
        chronological inside a group), total working days of the period,
        working days covered by non-special ranges and the per-type split.
    """
    bounds = normalize_date_range(period_start, period_end)
    if bounds is None:
        logger.warning("Cannot summarize invalid period %r..%r", period_start, period_end)
        return GroupedRangeResult()

    start, end = bounds
    inside = [r for r in ranges if ranges_overlap(r.start, r.end, start, end)]

    grouped: dict[str, list[ColoredRange]] = {}
    for r in inside:
        grouped.setdefault(r.type, []).append(r)
    grouped = {category: _chronological(items) for category, items in grouped.items()}

    by_type, colored = working_days_by_type(inside)

    return GroupedRangeResult(
        grouped=grouped,
        total_working_days=working_days_in_range(start, end),
        colored_range_days=colored,
        working_days_by_type=by_type,
    )


def format_summary_text(
    grouped: dict[str, list[ColoredRange]],
    total_working_days: int,
    colored_range_days: int,
) -> str:
    """Plain-text statistics ready for the clipboard.

    Example:
        Okres podstawowy ilość dni: 20 - 5 = 15
        Urlop: 03.01.2024 - 05.01.2024, 09.01.2024 = 4 dni roboczych
    """
    basic = total_working_days - colored_range_days
    lines = [
        f"Okres podstawowy ilość dni: {total_working_days} - {colored_range_days} = {basic}"
    ]

    for category, ranges in grouped.items():
        regular = _chronological([r for r in ranges if not r.special])
        if not regular:
            continue
        subtotal = sum(working_days_in_range(r.start, r.end) for r in regular)
        range_text = ", ".join(str(r) for r in regular)
        lines.append(f"{category}: {range_text} = {subtotal} dni roboczych")

    return "\n".join(lines)


def duty_overview(
    ranges: Sequence[ColoredRange], periods: Sequence[BasePeriod]
) -> list[DutyEntry]:
    """Special ranges in date order, each labelled with its base period."""
    entries = []
    for r in _chronological([r for r in ranges if r.special]):
        index = find_period_index(r.start, periods)
        label = OUTSIDE_PERIODS if index is None else period_label(index)
        entries.append(DutyEntry(day=r.start, type=r.type, period=label))
    return entries


def describe_duties(entries: Sequence[DutyEntry]) -> list[str]:
    return [f"{format_date(e.day)} {e.type} ({e.period})" for e in entries]
