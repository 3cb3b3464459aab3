"""
MCP tool implementations for the period planner.
This module contains the glue between the tools and the planner session.
"""

import logging
from typing import Annotated, Any, Dict, List, Optional

from pydantic import Field

from .config import load_settings
from .dates import parse_date
from .days import calendar_days_in_range, working_days_in_range
from .holidays import get_holiday_name
from .legend import load_legend
from .membership import validate_base_periods
from .planner import PlannerManager

logger = logging.getLogger(__name__)

settings = load_settings()

# Initialize Planner Manager
planner_manager = PlannerManager(
    settings.state_file,
    categories=load_legend(settings.legend_file),
    export_dir=settings.export_dir,
    pdf_font=settings.pdf_font,
)

DateArg = Annotated[
    str,
    Field(
        description="Calendar date in one of the formats YYYY-MM-DD, DD/MM/YYYY or DD.MM.YYYY."
    ),
]
PeriodIndex = Annotated[
    int,
    Field(description="Zero-based index of the base period (0 = 'Rok 1').", ge=0),
]


def _state_dict(state) -> Dict[str, Any]:
    return state.model_dump(mode="json", exclude_none=True)


def count_working_days(start: DateArg, end: DateArg) -> Dict[str, Any]:
    """Count calendar days and working days (Mon-Fri without Polish public holidays) between two dates, both inclusive. The order of the dates does not matter."""
    if parse_date(start) is None or parse_date(end) is None:
        return {"error": f"Invalid date range: {start} - {end}"}
    return {
        "calendar_days": calendar_days_in_range(start, end),
        "working_days": working_days_in_range(start, end),
    }


def check_holiday(day: DateArg) -> Dict[str, Any]:
    """Check whether a date is a Polish public holiday and return the holiday name."""
    parsed = parse_date(day)
    if parsed is None:
        return {"error": f"Invalid date: {day}"}
    name = get_holiday_name(parsed)
    return {"date": parsed.isoformat(), "is_holiday": name is not None, "name": name}


def validate_periods(
    periods: Annotated[
        List[Dict[str, str]],
        Field(
            description="List of base periods, each with 'start' and 'end' date strings. Empty strings mark a bound that is not defined yet."
        ),
    ],
) -> Dict[str, Any]:
    """Validate a list of base periods: dates must parse, start must be before end, and periods must not overlap. Returns the first problem found."""
    return validate_base_periods(periods).to_dict()


def select_category(
    category: Annotated[
        Optional[str],
        Field(
            description="Label of the legend category to paint with (e.g. Urlop, Staże, L4, Dyżur). Null clears the selection."
        ),
    ] = None,
) -> Dict[str, Any]:
    """Choose the active legend category used by subsequent day clicks."""
    try:
        state = planner_manager.select_category(category)
        return {"selected_category": state.selected_category}
    except ValueError as e:
        logger.error("Failed to select category: %s", e)
        return {"error": str(e)}


def click_day(day: DateArg) -> Dict[str, Any]:
    """Click a calendar day. The first click starts a range, the second click commits it with the active category (skipping days already covered). Clicking an existing range removes it; special categories toggle one-day markers. Weekends and holidays are ignored for regular categories."""
    try:
        result = planner_manager.click_day(day)
        response: Dict[str, Any] = {
            "ranges": [r.model_dump(mode="json", exclude_none=True) for r in result.ranges],
            "pending_start": result.selection.start.isoformat() if result.selection.start else None,
            "active_category": result.active_category,
        }
        if result.alert:
            response["alert"] = result.alert
        if result.label_request:
            request = result.label_request
            response["label_request"] = {
                "start": request.start.isoformat(),
                "end": request.end.isoformat(),
                "category": request.category.label,
            }
        return response
    except (ValueError, FileNotFoundError) as e:
        logger.error("Failed to handle day click: %s", e)
        return {"error": f"Failed to handle day click: {e}"}
    except Exception as e:
        logger.error("Unexpected error in click_day: %s", e)
        return {"error": f"Unexpected error: {e}"}


def confirm_label(
    label: Annotated[
        Optional[str],
        Field(description="Free-text label for the pending range, e.g. the name of a course."),
    ] = None,
) -> Dict[str, Any]:
    """Commit the range selection that is waiting for a label."""
    try:
        ranges = planner_manager.confirm_label(label)
        return {"ranges": [r.model_dump(mode="json", exclude_none=True) for r in ranges]}
    except ValueError as e:
        logger.error("Failed to confirm label: %s", e)
        return {"error": str(e)}


def cancel_label() -> Dict[str, Any]:
    """Discard the range selection that is waiting for a label."""
    try:
        ranges = planner_manager.cancel_label()
        return {"ranges": [r.model_dump(mode="json", exclude_none=True) for r in ranges]}
    except ValueError as e:
        logger.error("Failed to cancel label: %s", e)
        return {"error": str(e)}


def add_period() -> Dict[str, Any]:
    """Append a new, empty base period."""
    try:
        return _state_dict(planner_manager.add_period())
    except Exception as e:
        logger.error("Error adding period: %s", e)
        return {"error": f"Error adding period: {e}"}


def set_period(index: PeriodIndex, start: DateArg, end: DateArg) -> Dict[str, Any]:
    """Set the start and end date of a base period. The change is rejected if the dates are invalid, inverted or overlap another period."""
    try:
        return planner_manager.set_period(index, start, end).to_dict()
    except (ValueError, FileNotFoundError) as e:
        logger.error("Failed to set period: %s", e)
        return {"error": f"Failed to set period: {e}"}


def delete_period(index: PeriodIndex) -> Dict[str, Any]:
    """Delete a base period. Colored ranges starting in the same year as the period are deleted too. The last remaining period cannot be deleted."""
    try:
        return _state_dict(planner_manager.delete_period(index))
    except Exception as e:
        logger.error("Error deleting period: %s", e)
        return {"error": f"Error deleting period: {e}"}


def set_personal_info(
    first_name: Annotated[str, Field(description="First name shown in report headers.")],
    last_name: Annotated[str, Field(description="Last name shown in report headers.")],
) -> Dict[str, Any]:
    """Store the name used in exported reports and file names."""
    try:
        state = planner_manager.set_personal_info(first_name, last_name)
        return state.personal_info.model_dump()
    except Exception as e:
        logger.error("Error saving personal info: %s", e)
        return {"error": f"Error saving personal info: {e}"}


def reset_planner() -> Dict[str, Any]:
    """Delete all data: periods, ranges and personal info. Leaves one empty base period."""
    try:
        return _state_dict(planner_manager.reset())
    except Exception as e:
        logger.error("Error resetting planner: %s", e)
        return {"error": f"Error resetting planner: {e}"}


def get_period_stats(index: PeriodIndex) -> Dict[str, Any]:
    """Statistics of a base period: ranges grouped by category, total working days, working days in colored ranges and the remaining basic period days."""
    try:
        return planner_manager.get_period_stats(index).to_dict()
    except (ValueError, FileNotFoundError) as e:
        logger.error("Failed to get period stats: %s", e)
        return {"error": f"Failed to get period stats: {e}"}


def get_summary_text(index: PeriodIndex) -> Dict[str, str]:
    """Plain-text summary of a base period, ready to paste elsewhere."""
    try:
        return {"text": planner_manager.get_summary_text(index)}
    except (ValueError, FileNotFoundError) as e:
        logger.error("Failed to format summary: %s", e)
        return {"error": f"Failed to format summary: {e}"}


def get_calendar() -> Dict[str, Any]:
    """Month grid covering all base periods, Monday first, with weekend, holiday and period membership per day."""
    try:
        return planner_manager.get_calendar().to_dict()
    except Exception as e:
        logger.error("Error building calendar: %s", e)
        return {"error": f"Error building calendar: {e}"}


def export_excel() -> Dict[str, str]:
    """Export statistics to an Excel workbook: one sheet per base period and a summary sheet."""
    path = planner_manager.export_excel()
    if path is None:
        return {"error": "Wystąpił błąd podczas eksportu do Excela."}
    return {"path": str(path)}


def export_pdf() -> Dict[str, str]:
    """Export the list of ranges to a PDF document: a summary page and one page per base period."""
    path = planner_manager.export_pdf()
    if path is None:
        return {"error": "Wystąpił błąd podczas generowania PDF."}
    return {"path": str(path)}


__all__ = [
    "count_working_days",
    "check_holiday",
    "validate_periods",
    "select_category",
    "click_day",
    "confirm_label",
    "cancel_label",
    "add_period",
    "set_period",
    "delete_period",
    "set_personal_info",
    "reset_planner",
    "get_period_stats",
    "get_summary_text",
    "get_calendar",
    "export_excel",
    "export_pdf",
]
