"""
Data model of the planner: legend categories, base periods and colored ranges.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .dates import format_range, parse_date


def _coerce_date(value: Any, *, allow_empty: bool) -> Any:
    """Accept the planner's date strings wherever a date field is expected."""
    if value is None or (isinstance(value, str) and not value.strip()):
        if allow_empty:
            return None
        raise ValueError("date is required")
    if isinstance(value, (str, date)):
        parsed = parse_date(value)
        if parsed is None:
            raise ValueError(f"Invalid date: {value!r}")
        return parsed
    return value


class LegendCategory(BaseModel):
    """A legend entry ranges can be painted with."""
    label: str
    color: str
    special: bool = False
    ask_for_label: bool = False

    @field_validator("label")
    @classmethod
    def validate_label_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("label must not be empty")
        return v


class BasePeriod(BaseModel):
    """A user-defined period; unset bounds mean "not yet defined"."""
    start: Optional[date] = None
    end: Optional[date] = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_bounds(cls, v: Any) -> Any:
        return _coerce_date(v, allow_empty=True)

    @model_validator(mode="after")
    def validate_order(self) -> "BasePeriod":
        if self.is_defined and self.end < self.start:
            raise ValueError(f"end ({self.end}) must not be before start ({self.start})")
        return self

    @property
    def is_defined(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, d: date) -> bool:
        if not self.is_defined:
            return False
        return self.start <= d <= self.end


class ColoredRange(BaseModel):
    """A painted interval tagged with a legend category."""
    start: date
    end: date
    type: str
    color: str = ""
    label: Optional[str] = None
    special: bool = False

    @field_validator("start", "end", mode="before")
    @classmethod
    def parse_bounds(cls, v: Any) -> Any:
        return _coerce_date(v, allow_empty=False)

    @model_validator(mode="after")
    def validate_order(self) -> "ColoredRange":
        if self.end < self.start:
            raise ValueError(f"end ({self.end}) must not be before start ({self.start})")
        return self

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    def __str__(self) -> str:
        text = format_range(self.start, self.end)
        if self.label:
            return f"({self.label}) {text}"
        return text


class PersonalInfo(BaseModel):
    """Who the plan belongs to. Only used for export headers and file names."""
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class PlannerState(BaseModel):
    """Root model for the persisted planner document."""
    periods: list[BasePeriod] = Field(default_factory=lambda: [BasePeriod()])
    ranges: list[ColoredRange] = Field(default_factory=list)
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    selected_category: Optional[str] = None

    @property
    def defined_periods(self) -> list[BasePeriod]:
        return [p for p in self.periods if p.is_defined]
