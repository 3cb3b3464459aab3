"""
Spreadsheet and PDF reports built from the aggregated statistics.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet
from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from .days import calendar_days_in_range, working_days_in_range
from .models import ColoredRange, LegendCategory, PersonalInfo, PlannerState
from .summary import (
    describe_duties,
    duty_overview,
    period_label,
    summarize_ranges,
    total_working_days,
    working_days_by_type,
)

logger = logging.getLogger(__name__)

SUMMARY_SHEET = "Suma"
BREAKDOWN_FILL = "DDEEFF"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9]")


def generate_file_name(personal_info: PersonalInfo, extension: str) -> str:
    """``<First>_<Last>_SMK_<UTC timestamp>.<extension>`` with unsafe characters replaced."""
    first = _UNSAFE_CHARS.sub("_", personal_info.first_name or "user")
    last = _UNSAFE_CHARS.sub("_", personal_info.last_name or "report")
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
    return f"{first}_{last}_SMK_{timestamp}.{extension}"


# Excel

def _setup_sheet_header(ws: Worksheet, personal_info: PersonalInfo) -> None:
    for column, width in zip("ABCD", (25, 20, 20, 20)):
        ws.column_dimensions[column].width = width

    ws.append([f"Statystyki dla: {personal_info.full_name}"])
    ws.append([])
    ws.merge_cells("A2:D2")

    ws["A1"].font = Font(bold=True, size=14)
    ws["A2"].alignment = Alignment(horizontal="center")
    ws["A2"].font = Font(bold=True, size=15)

    ws.append(["Typ", "Liczba dni (roboczych)"])
    ws["A3"].font = Font(bold=True)
    ws["B3"].font = Font(bold=True)


def _populate_main_stats(
    ws: Worksheet,
    total: int,
    by_type: dict[str, int],
    all_types: Sequence[str],
) -> None:
    """Total row, one row per legend type (zeros included), then the basic period formula."""
    bold = Font(bold=True)

    ws.append(["Liczba dni roboczych", total])
    base_row = ws.max_row
    ws.cell(row=base_row, column=1).font = bold
    ws.cell(row=base_row, column=2).font = bold

    types = sorted(set(all_types) | set(by_type))
    for category in types:
        ws.append([category, by_type.get(category, 0)])

    if types:
        formula = f"=B{base_row}-SUM(B{base_row + 1}:B{ws.max_row})"
    else:
        formula = f"=B{base_row}"
    ws.append(["Okres podstawowy", formula])
    ws.cell(row=ws.max_row, column=1).font = bold
    ws.cell(row=ws.max_row, column=2).font = bold


def _insert_range_breakdown(ws: Worksheet, ranges: Sequence[ColoredRange]) -> None:
    """Chronological list of ranges with calendar and working day counts."""
    ws.append([])
    ws.append(["Zakres", "Typ", "Dni kalendarzowe", "Dni robocze"])
    header_row = ws.max_row
    fill = PatternFill("solid", fgColor=BREAKDOWN_FILL)
    for column in range(1, 5):
        cell = ws.cell(row=header_row, column=column)
        cell.font = Font(bold=True)
        cell.fill = fill

    for r in sorted((r for r in ranges if not r.special), key=lambda r: r.start):
        ws.append([
            str(r),
            r.type,
            calendar_days_in_range(r.start, r.end),
            working_days_in_range(r.start, r.end),
        ])


def _insert_duty_overview(ws: Worksheet, state: PlannerState, ranges: Sequence[ColoredRange]) -> None:
    entries = duty_overview(ranges, state.periods)
    if not entries:
        return

    ws["F1"] = "Rok"
    ws["G1"] = "Dyżury"
    ws["F1"].font = ws["G1"].font = Font(bold=True)

    for row, entry in enumerate(entries, start=2):
        ws.cell(row=row, column=6, value=entry.period)
        ws.cell(row=row, column=7, value=entry.day.strftime("%d.%m.%Y"))

    ws.column_dimensions["F"].width = 15
    ws.column_dimensions["G"].width = 15


def build_workbook(state: PlannerState, categories: Sequence[LegendCategory]) -> Workbook:
    """One sheet per defined base period plus a summary sheet."""
    all_types = [c.label for c in categories if not c.special]

    wb = Workbook()
    wb.remove(wb.active)

    for index, period in enumerate(state.periods):
        if not period.is_defined:
            continue
        result = summarize_ranges(state.ranges, period.start, period.end)
        period_ranges = [r for items in result.grouped.values() for r in items]

        ws = wb.create_sheet(period_label(index))
        _setup_sheet_header(ws, state.personal_info)
        _populate_main_stats(ws, result.total_working_days, result.working_days_by_type, all_types)
        _insert_range_breakdown(ws, period_ranges)
        _insert_duty_overview(ws, state, period_ranges)

    by_type, _ = working_days_by_type(state.ranges)
    summary = wb.create_sheet(SUMMARY_SHEET)
    _setup_sheet_header(summary, state.personal_info)
    _populate_main_stats(summary, total_working_days(state.periods), by_type, all_types)
    _insert_range_breakdown(summary, state.ranges)
    _insert_duty_overview(summary, state, state.ranges)

    return wb


def export_to_excel(
    state: PlannerState, path: Path | str, categories: Sequence[LegendCategory]
) -> Path:
    """Write the statistics workbook to ``path``."""
    snapshot = state.model_copy(deep=True)
    target = Path(path)
    wb = build_workbook(snapshot, categories)
    wb.save(target)
    logger.info("Excel report written to %s", target)
    return target


# PDF

_PAGE_WIDTH, _PAGE_HEIGHT = A4
_MARGIN = 50
_LINE = 16


def _register_font(font_path: Optional[Path]) -> tuple[str, str]:
    """Regular and bold font names; a TTF font is needed for Polish diacritics."""
    if font_path is None:
        return "Helvetica", "Helvetica-Bold"
    name = font_path.stem
    if name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(name, str(font_path)))
    return name, name


class _PdfWriter:
    """Line-oriented writer over a reportlab canvas with automatic page breaks."""

    def __init__(self, path: Path, font_path: Optional[Path] = None):
        self.canvas = canvas.Canvas(str(path), pagesize=A4)
        self.regular, self.bold = _register_font(font_path)
        self.y = _PAGE_HEIGHT - _MARGIN

    def heading(self, text: str) -> None:
        self._ensure_room(2 * _LINE)
        self.canvas.setFont(self.bold, 14)
        self.canvas.drawString(_MARGIN, self.y, text)
        self.y -= 2 * _LINE

    def line(self, text: str) -> None:
        self._ensure_room(_LINE)
        self.canvas.setFont(self.regular, 10)
        self.canvas.drawString(_MARGIN, self.y, text)
        self.y -= _LINE

    def new_page(self) -> None:
        self.canvas.showPage()
        self.y = _PAGE_HEIGHT - _MARGIN

    def save(self) -> None:
        self.canvas.save()

    def _ensure_room(self, needed: int) -> None:
        if self.y - needed < _MARGIN:
            self.new_page()


def _range_line(r: ColoredRange) -> str:
    label = f" ({r.label})" if r.label else ""
    return f"{r.type}{label}: {r.start.strftime('%d.%m.%Y')} - {r.end.strftime('%d.%m.%Y')}"


def export_to_pdf(
    state: PlannerState, path: Path | str, font_path: Optional[Path] = None
) -> Path:
    """Write a summary page followed by one page per defined base period."""
    snapshot = state.model_copy(deep=True)
    target = Path(path)
    pdf = _PdfWriter(target, font_path)

    pdf.heading("Podsumowanie zakresów")
    if snapshot.personal_info.full_name:
        pdf.line(f"Statystyki dla: {snapshot.personal_info.full_name}")
    for r in sorted(snapshot.ranges, key=lambda r: r.start):
        pdf.line(_range_line(r))

    for index, period in enumerate(snapshot.periods):
        if not period.is_defined:
            continue
        result = summarize_ranges(snapshot.ranges, period.start, period.end)
        pdf.new_page()
        pdf.heading(f"Zakresy - {period_label(index)}")
        pdf.line(
            f"Okres podstawowy: {result.total_working_days} - "
            f"{result.colored_range_days} = {result.basic_period_days}"
        )
        period_ranges = sorted(
            (r for items in result.grouped.values() for r in items), key=lambda r: r.start
        )
        for r in period_ranges:
            if not r.special:
                pdf.line(_range_line(r))
        for text in describe_duties(duty_overview(period_ranges, snapshot.periods)):
            pdf.line(text)

    pdf.save()
    logger.info("PDF report written to %s", target)
    return target
