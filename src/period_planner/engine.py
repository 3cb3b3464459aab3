"""
Range mutation engine.
Turns two-click day selections into colored ranges without overlapping existing ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from .dates import DateInput, iter_days, parse_date, previous_day
from .days import is_working_day
from .legend import find_category
from .membership import find_period_index
from .models import BasePeriod, ColoredRange, LegendCategory

logger = logging.getLogger(__name__)

CROSS_PERIOD_ALERT = (
    "Nie można zaznaczyć zakresu, który przekracza granicę okresów podstawowych."
)


@dataclass(slots=True)
class RangeSelection:
    """First click of a two-click gesture. Never persisted."""

    start: Optional[date] = None

    @property
    def is_pending(self) -> bool:
        return self.start is not None


@dataclass(slots=True)
class LabelRequest:
    """A commit waiting for the user to enter a free-text label.

    ``confirm`` and ``cancel`` return the range list the caller should adopt.
    """

    start: date
    end: date
    category: LegendCategory
    ranges: list[ColoredRange]

    def confirm(self, label: Optional[str] = None) -> list[ColoredRange]:
        return commit_selection(self.start, self.end, self.category, self.ranges, label)

    def cancel(self) -> list[ColoredRange]:
        return list(self.ranges)


@dataclass(slots=True)
class ClickResult:
    """State after a day click."""

    ranges: list[ColoredRange]
    selection: RangeSelection = field(default_factory=RangeSelection)
    active_category: Optional[str] = None
    label_request: Optional[LabelRequest] = None
    alert: Optional[str] = None


def split_free_segments(
    start: date, end: date, ranges: Sequence[ColoredRange]
) -> list[tuple[date, date]]:
    """Maximal runs of days in [start, end] not covered by a non-special range."""
    occupied = [(r.start, r.end) for r in ranges if not r.special]
    segments: list[tuple[date, date]] = []
    segment_start: Optional[date] = None

    for day in iter_days(start, end):
        taken = any(s <= day <= e for s, e in occupied)
        if not taken:
            if segment_start is None:
                segment_start = day
        elif segment_start is not None:
            segments.append((segment_start, previous_day(day)))
            segment_start = None

    if segment_start is not None:
        segments.append((segment_start, end))

    return segments


def commit_selection(
    start: date,
    end: date,
    category: LegendCategory,
    ranges: Sequence[ColoredRange],
    label: Optional[str] = None,
) -> list[ColoredRange]:
    """Append one range per free segment of the selection; existing ranges stay untouched."""
    if end < start:
        start, end = end, start

    label = label.strip() if label else None
    new_ranges = [
        ColoredRange(
            start=seg_start,
            end=seg_end,
            type=category.label,
            color=category.color,
            label=label or None,
        )
        for seg_start, seg_end in split_free_segments(start, end, ranges)
    ]

    if not new_ranges:
        logger.info("Selection %s..%s fully covered, nothing added", start, end)

    return [*ranges, *new_ranges]


def toggle_special_range(
    day: date, category: LegendCategory, ranges: Sequence[ColoredRange]
) -> list[ColoredRange]:
    """Remove the one-day special range of this category on ``day``, or add it."""
    for i, r in enumerate(ranges):
        if r.special and r.type == category.label and r.start == day and r.end == day:
            return [*ranges[:i], *ranges[i + 1:]]

    marker = ColoredRange(
        start=day, end=day, type=category.label, color=category.color, special=True
    )
    return [*ranges, marker]


def _find_removable(
    day: date, ranges: Sequence[ColoredRange], active_category: Optional[str]
) -> Optional[int]:
    for i, r in enumerate(ranges):
        if not r.contains(day):
            continue
        if not r.special or r.type == active_category:
            return i
    return None


def handle_day_click(
    day: DateInput,
    ranges: Sequence[ColoredRange],
    active_category: Optional[str],
    selection: RangeSelection,
    categories: Sequence[LegendCategory],
    periods: Sequence[BasePeriod],
) -> ClickResult:
    """Resolve a click on a calendar day.

    Args:
        day: Clicked day
        ranges: Current colored ranges
        active_category: Label of the selected legend category, if any
        selection: Pending first click of a range gesture
        categories: Legend configuration
        periods: Base periods; a range may not cross their boundaries

    Returns:
        ClickResult: New ranges, selection and active category. ``label_request``
        is set when the category wants a label before committing; ``alert``
        carries a message for the user when the gesture was rejected.
    """
    current = list(ranges)
    clicked = parse_date(day)
    if clicked is None:
        logger.warning("Ignoring click on invalid date: %r", day)
        return ClickResult(current, selection, active_category)

    category = find_category(active_category, categories)
    is_special = category is not None and category.special

    if not is_special and not is_working_day(clicked):
        return ClickResult(current, selection, active_category)

    if is_special:
        return ClickResult(
            toggle_special_range(clicked, category, current), selection, active_category
        )

    if not selection.is_pending:
        index = _find_removable(clicked, current, active_category)
        if index is not None:
            removed = current.pop(index)
            logger.info("Removed range %s (%s)", removed, removed.type)
            return ClickResult(current, RangeSelection(), active_category)

    if category is None:
        return ClickResult(current, selection, None)

    if not selection.is_pending:
        return ClickResult(current, RangeSelection(start=clicked), active_category)

    final_start, final_end = sorted((selection.start, clicked))

    if find_period_index(final_start, periods) != find_period_index(final_end, periods):
        logger.info("Rejected selection %s..%s crossing a base period boundary", final_start, final_end)
        return ClickResult(current, RangeSelection(), None, alert=CROSS_PERIOD_ALERT)

    if category.ask_for_label:
        request = LabelRequest(start=final_start, end=final_end, category=category, ranges=current)
        return ClickResult(current, RangeSelection(), None, label_request=request)

    return ClickResult(
        commit_selection(final_start, final_end, category, current), RangeSelection(), None
    )


def delete_base_period(
    index: int,
    periods: Sequence[BasePeriod],
    ranges: Sequence[ColoredRange],
) -> tuple[list[BasePeriod], list[ColoredRange]]:
    """Remove a base period and every range starting in the same calendar year.

    The last remaining period is never deleted; an out-of-range index is a
    no-op. Ranges are only cascaded when the deleted period is fully defined.
    """
    if len(periods) <= 1 or index < 0 or index >= len(periods):
        return list(periods), list(ranges)

    doomed = periods[index]
    remaining_ranges = list(ranges)
    if doomed.is_defined:
        year = doomed.start.year
        remaining_ranges = [r for r in ranges if r.start.year != year]
        logger.info(
            "Deleted period %d, dropped %d ranges from %d",
            index, len(ranges) - len(remaining_ranges), year,
        )

    return [p for i, p in enumerate(periods) if i != index], remaining_ranges
