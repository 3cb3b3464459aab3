"""
Range membership tests and base period validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Literal, Optional, Sequence

from .dates import DateInput, parse_date

logger = logging.getLogger(__name__)

PeriodField = Literal["start", "end"]


def _bound(obj: Any, name: str) -> Any:
    """Read ``start``/``end`` from a model or a mapping."""
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _is_unset(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Inclusive interval intersection."""
    return a_start <= b_end and a_end >= b_start


def is_date_in_range(d: DateInput, date_range: Any) -> bool:
    """Inclusive membership of a day in anything with start/end."""
    day = parse_date(d)
    start = parse_date(_bound(date_range, "start"))
    end = parse_date(_bound(date_range, "end"))
    if day is None or start is None or end is None:
        return False
    return start <= day <= end


def is_date_in_base_period(d: DateInput, periods: Sequence[Any], index: int) -> bool:
    """Whether a day lies inside the period at ``index``.

    False for an out-of-range index or a period with an unset bound.
    """
    if index < 0 or index >= len(periods):
        return False
    period = periods[index]
    if _is_unset(_bound(period, "start")) or _is_unset(_bound(period, "end")):
        return False
    return is_date_in_range(d, period)


def find_period_index(d: DateInput, periods: Sequence[Any]) -> Optional[int]:
    """Index of the first period containing the day, or None."""
    for index in range(len(periods)):
        if is_date_in_base_period(d, periods, index):
            return index
    return None


@dataclass(slots=True)
class ValidationResult:
    """Outcome of validating a list of base periods."""

    is_valid: bool = True
    error_message: str = ""
    error_index: Optional[int] = None
    error_field: Optional[PeriodField] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for API responses."""
        return {
            "is_valid": self.is_valid,
            "error_message": self.error_message,
            "error_index": self.error_index,
            "error_field": self.error_field,
        }


def validate_base_periods(periods: Sequence[Any]) -> ValidationResult:
    """Check base periods for bad dates, inverted bounds and overlaps.

    Periods are scanned in order and the first problem is reported. A period
    with an empty bound is treated as not yet defined and skipped.
    """
    parsed: list[Optional[tuple[date, date]]] = []

    for i, period in enumerate(periods):
        raw_start = _bound(period, "start")
        raw_end = _bound(period, "end")

        start = None if _is_unset(raw_start) else parse_date(raw_start)
        if not _is_unset(raw_start) and start is None:
            logger.warning("Invalid start date: %r", raw_start)
            return ValidationResult(
                is_valid=False,
                error_message=f"Błędna data początkowa (Rok {i + 1})",
                error_index=i,
                error_field="start",
            )

        end = None if _is_unset(raw_end) else parse_date(raw_end)
        if not _is_unset(raw_end) and end is None:
            logger.warning("Invalid end date: %r", raw_end)
            return ValidationResult(
                is_valid=False,
                error_message=f"Błędna data końcowa (Rok {i + 1})",
                error_index=i,
                error_field="end",
            )

        if start is None or end is None:
            parsed.append(None)
            continue

        if start >= end:
            return ValidationResult(
                is_valid=False,
                error_message=(
                    "Błąd: Data początkowa musi być wcześniejsza niż końcowa "
                    f"(Rok {i + 1})"
                ),
                error_index=i,
                error_field="end",
            )

        for j, earlier in enumerate(parsed):
            if earlier is None:
                continue
            if ranges_overlap(start, end, earlier[0], earlier[1]):
                return ValidationResult(
                    is_valid=False,
                    error_message=(
                        "Błąd: Okresy nie mogą się nakładać "
                        f"(Rok {i + 1} i Rok {j + 1})"
                    ),
                    error_index=i,
                )

        parsed.append((start, end))

    return ValidationResult()
