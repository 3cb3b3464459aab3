"""
Planner session management.
Keeps base periods and colored ranges in a YAML file and routes every
mutation through the range engine.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import yaml

from .calendar_grid import CalendarData, generate_calendar_data
from .dates import DateInput
from .engine import (
    ClickResult,
    LabelRequest,
    RangeSelection,
    delete_base_period,
    handle_day_click,
)
from .export import export_to_excel, export_to_pdf, generate_file_name
from .legend import DEFAULT_LEGEND, find_category
from .membership import ValidationResult, validate_base_periods
from .models import (
    BasePeriod,
    ColoredRange,
    LegendCategory,
    PersonalInfo,
    PlannerState,
)
from .summary import GroupedRangeResult, format_summary_text, summarize_ranges

logger = logging.getLogger(__name__)


class PlannerStore:
    """Loads and saves the planner YAML document."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> PlannerState:
        """Load planner state from YAML."""
        with open(self.path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return PlannerState.model_validate(data or {})

    def save(self, state: PlannerState) -> None:
        """Save planner state as YAML."""
        data = state.model_dump(mode="json")
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.dump(
                data, f, default_flow_style=False, allow_unicode=True, sort_keys=False
            )


class PlannerManager:
    """One planner session: persisted state plus the transient click gesture."""

    def __init__(
        self,
        file_path: Path | str = "planner.yaml",
        store: Optional[PlannerStore] = None,
        categories: Optional[Sequence[LegendCategory]] = None,
        export_dir: Path | str = ".",
        pdf_font: Optional[Path] = None,
    ):
        self.file_path = Path(file_path)
        self.store = store or PlannerStore(file_path)
        self.categories = list(categories or DEFAULT_LEGEND)
        self.export_dir = Path(export_dir)
        self.pdf_font = pdf_font
        self.selection = RangeSelection()
        self.pending_label: Optional[LabelRequest] = None
        if store is None:
            self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        """Ensures that the planner file exists."""
        if not self.file_path.exists():
            self.store.save(PlannerState())

    def _drop_pending(self) -> None:
        if self.pending_label is not None:
            logger.info("Discarding pending label request")
        self.pending_label = None

    def load_state(self) -> PlannerState:
        return self.store.load()

    # Range gestures

    def select_category(self, label: Optional[str]) -> PlannerState:
        """Make a legend category active, or clear the selection with None."""
        if label is not None and find_category(label, self.categories) is None:
            raise ValueError(f"Unknown legend category: {label}")
        self._drop_pending()
        self.selection = RangeSelection()
        state = self.store.load()
        state.selected_category = label
        self.store.save(state)
        return state

    def click_day(self, day: DateInput) -> ClickResult:
        """Apply a click on a calendar day and persist the outcome."""
        self._drop_pending()
        state = self.store.load()
        result = handle_day_click(
            day,
            state.ranges,
            state.selected_category,
            self.selection,
            self.categories,
            state.periods,
        )
        self.selection = result.selection
        self.pending_label = result.label_request

        state.ranges = result.ranges
        state.selected_category = result.active_category
        self.store.save(state)
        return result

    def confirm_label(self, label: Optional[str] = None) -> list[ColoredRange]:
        """Commit the selection waiting for a label."""
        if self.pending_label is None:
            raise ValueError("No selection is waiting for a label")
        request, self.pending_label = self.pending_label, None

        state = self.store.load()
        state.ranges = request.confirm(label)
        self.store.save(state)
        return state.ranges

    def cancel_label(self) -> list[ColoredRange]:
        """Abort the selection waiting for a label."""
        if self.pending_label is None:
            raise ValueError("No selection is waiting for a label")
        request, self.pending_label = self.pending_label, None
        return request.cancel()

    # Base periods

    def add_period(self) -> PlannerState:
        """Append an empty base period."""
        self._drop_pending()
        state = self.store.load()
        state.periods.append(BasePeriod())
        self.store.save(state)
        return state

    def set_period(
        self, index: int, start: Optional[str], end: Optional[str]
    ) -> ValidationResult:
        """Update the bounds of a base period.

        The change is only saved when the resulting list of periods is valid.

        Args:
            index: Position of the period
            start: New start date (any accepted format, empty to unset)
            end: New end date

        Returns:
            ValidationResult: Outcome of validating all periods with the change applied
        """
        self._drop_pending()
        state = self.store.load()
        if index < 0 or index >= len(state.periods):
            raise ValueError(f"No base period with index {index}")

        candidate = [
            {"start": p.start, "end": p.end} for p in state.periods
        ]
        candidate[index] = {"start": start, "end": end}

        result = validate_base_periods(candidate)
        if not result.is_valid:
            logger.info("Rejected period change: %s", result.error_message)
            return result

        state.periods[index] = BasePeriod(start=start, end=end)
        self.selection = RangeSelection()
        self.store.save(state)
        return result

    def delete_period(self, index: int) -> PlannerState:
        """Delete a base period together with the ranges of its start year."""
        self._drop_pending()
        self.selection = RangeSelection()
        state = self.store.load()
        state.periods, state.ranges = delete_base_period(index, state.periods, state.ranges)
        self.store.save(state)
        return state

    def reset(self) -> PlannerState:
        """Discard all data: one empty period, no ranges, blank personal info."""
        self._drop_pending()
        self.selection = RangeSelection()
        state = PlannerState()
        self.store.save(state)
        logger.info("Planner reset")
        return state

    def set_personal_info(self, first_name: str, last_name: str) -> PlannerState:
        state = self.store.load()
        state.personal_info = PersonalInfo(first_name=first_name, last_name=last_name)
        self.store.save(state)
        return state

    # Statistics

    def _defined_period(self, state: PlannerState, index: int) -> BasePeriod:
        if index < 0 or index >= len(state.periods):
            raise ValueError(f"No base period with index {index}")
        period = state.periods[index]
        if not period.is_defined:
            raise ValueError(f"Base period {index} has no start or end date")
        return period

    def get_period_stats(self, index: int) -> GroupedRangeResult:
        """Grouped statistics of one base period."""
        state = self.store.load()
        period = self._defined_period(state, index)
        return summarize_ranges(state.ranges, period.start, period.end)

    def get_summary_text(self, index: int) -> str:
        """Clipboard text for one base period."""
        result = self.get_period_stats(index)
        return format_summary_text(
            result.grouped, result.total_working_days, result.colored_range_days
        )

    def get_calendar(self) -> CalendarData:
        state = self.store.load()
        return generate_calendar_data(state.periods, state.ranges)

    # Export

    def export_excel(self, directory: Path | str | None = None) -> Optional[Path]:
        """Write the Excel report; returns its path, or None on failure."""
        state = self.store.load()
        target = Path(directory or self.export_dir) / generate_file_name(state.personal_info, "xlsx")
        try:
            return export_to_excel(state, target, self.categories)
        except Exception as e:
            logger.error("Failed to export to Excel: %s", e)
            target.unlink(missing_ok=True)
            return None

    def export_pdf(self, directory: Path | str | None = None) -> Optional[Path]:
        """Write the PDF report; returns its path, or None on failure."""
        state = self.store.load()
        target = Path(directory or self.export_dir) / generate_file_name(state.personal_info, "pdf")
        try:
            return export_to_pdf(state, target, self.pdf_font)
        except Exception as e:
            logger.error("PDF generation error: %s", e)
            target.unlink(missing_ok=True)
            return None
