"""
Period Planner MCP package initialization.
"""

from fastmcp import FastMCP

from .tools import (
    add_period,
    cancel_label,
    check_holiday,
    click_day,
    confirm_label,
    count_working_days,
    delete_period,
    export_excel,
    export_pdf,
    get_calendar,
    get_period_stats,
    get_summary_text,
    reset_planner,
    select_category,
    set_period,
    set_personal_info,
    validate_periods,
)

# Initialize FastMCP instance
mcp = FastMCP(
    name="Period Planner",
    instructions="A planner for base periods painted with leave, training and sick-leave ranges. Counts working days with Polish public holidays and exports the statistics.",
)

# Register tools
mcp.tool(count_working_days)
mcp.tool(check_holiday)
mcp.tool(validate_periods)
mcp.tool(select_category)
mcp.tool(click_day)
mcp.tool(confirm_label)
mcp.tool(cancel_label)
mcp.tool(add_period)
mcp.tool(set_period)
mcp.tool(delete_period)
mcp.tool(set_personal_info)
mcp.tool(reset_planner)
mcp.tool(get_period_stats)
mcp.tool(get_summary_text)
mcp.tool(get_calendar)
mcp.tool(export_excel)
mcp.tool(export_pdf)

__all__ = [
    "mcp",
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
