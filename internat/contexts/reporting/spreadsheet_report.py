"""
Spreadsheet report with a year-over-year layout.

The workbook is loaded when it already exists and updated in place, so year
columns accumulate across runs:

- "Statistiques par ville": one row per city (French collation order), one
  column per year. A year's column is found by header text, or appended.
  Cells read "<remaining>/<total>\\n(<pct>%)", "-" when the city had no
  placement that year.
- "Résumé global": one row per year, kept sorted by year.
"""

import math
from pathlib import Path
from typing import Any, Dict, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from internat.contexts.analysis.aggregator import CityYearStat, SummaryRow
from internat.contexts.reporting.logger import _log_debug, log_report_written
from internat.utils.collation import sort_french
from internat.utils.report_formatter import format_percentage

SPREADSHEET_FILENAME = "statistiques_internat.xlsx"

STATS_SHEET = "Statistiques par ville"
SUMMARY_SHEET = "Résumé global"

CITY_HEADER = "Ville"
SUMMARY_HEADERS = ["Année", "Total Places", "Places Restantes", "Pourcentage Restant"]
SUMMARY_WIDTHS = [10, 15, 15, 20]
MISSING_VALUE = "-"

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFD3D3D3")
HEADER_ALIGNMENT = Alignment(horizontal="center")
STAT_ALIGNMENT = Alignment(wrap_text=True, vertical="center", horizontal="center")


def format_stat_text(stat: Optional[CityYearStat]) -> str:
    """Cell text of one city/year, "-" when absent."""
    if stat is None:
        return MISSING_VALUE
    return f"{stat.remaining}/{stat.total}\n({format_percentage(stat.percentage, 1)})"


def _style_header(cell) -> None:
    cell.font = HEADER_FONT
    cell.fill = HEADER_FILL
    cell.alignment = HEADER_ALIGNMENT


def _init_stats_sheet(sheet: Worksheet) -> None:
    if sheet.cell(row=1, column=1).value is None:
        sheet.cell(row=1, column=1, value=CITY_HEADER)
        _style_header(sheet.cell(row=1, column=1))
    sheet.column_dimensions["A"].width = 20


def _init_summary_sheet(sheet: Worksheet) -> None:
    for column, (header, width) in enumerate(zip(SUMMARY_HEADERS, SUMMARY_WIDTHS), start=1):
        if sheet.cell(row=1, column=column).value is None:
            sheet.cell(row=1, column=column, value=header)
            _style_header(sheet.cell(row=1, column=column))
        sheet.column_dimensions[get_column_letter(column)].width = width


def open_workbook(path: Path) -> Workbook:
    """Load the existing workbook, or create one with both sheets."""
    if path.exists():
        workbook = load_workbook(path)
        _log_debug(f"Loaded existing workbook: {path}")
    else:
        workbook = Workbook()
        workbook.active.title = STATS_SHEET

    if STATS_SHEET not in workbook.sheetnames:
        workbook.create_sheet(STATS_SHEET, 0)
    if SUMMARY_SHEET not in workbook.sheetnames:
        workbook.create_sheet(SUMMARY_SHEET)

    _init_stats_sheet(workbook[STATS_SHEET])
    _init_summary_sheet(workbook[SUMMARY_SHEET])
    return workbook


def find_or_create_year_column(sheet: Worksheet, year: int) -> int:
    """
    Column index of a year in the stats sheet header.

    Headers are compared as text, so a year written as a number by another
    tool still matches. A new year is appended after the last header.
    """
    column = 2
    while sheet.cell(row=1, column=column).value is not None:
        if str(sheet.cell(row=1, column=column).value).strip() == str(year):
            return column
        column += 1

    sheet.cell(row=1, column=column, value=str(year))
    _style_header(sheet.cell(row=1, column=column))
    sheet.column_dimensions[get_column_letter(column)].width = 15
    return column


def update_stats_sheet(sheet: Worksheet, year: int, city_stats: Dict[str, CityYearStat]) -> None:
    """Write one year's column, re-sorting city rows to include new cities."""
    year_column = find_or_create_year_column(sheet, year)
    last_column = sheet.max_column

    existing: Dict[str, Dict[int, Any]] = {}
    for row in range(2, sheet.max_row + 1):
        city = sheet.cell(row=row, column=1).value
        if city is None:
            continue
        existing[str(city)] = {
            column: sheet.cell(row=row, column=column).value
            for column in range(2, last_column + 1)
        }

    if sheet.max_row >= 2:
        sheet.delete_rows(2, sheet.max_row - 1)

    cities = sort_french(set(existing) | set(city_stats))
    for row, city in enumerate(cities, start=2):
        sheet.cell(row=row, column=1, value=city)
        previous = existing.get(city, {})

        for column in range(2, last_column + 1):
            if column == year_column:
                value = format_stat_text(city_stats.get(city))
            else:
                value = previous.get(column)
                if value is None:
                    value = MISSING_VALUE
            cell = sheet.cell(row=row, column=column, value=value)
            cell.alignment = STAT_ALIGNMENT


def update_summary_sheet(sheet: Worksheet, summary_row: SummaryRow) -> None:
    """Upsert one year's row, then rewrite all rows sorted by year."""
    rows: Dict[int, list] = {}
    for row in range(2, sheet.max_row + 1):
        values = [sheet.cell(row=row, column=c).value for c in range(1, len(SUMMARY_HEADERS) + 1)]
        if values[0] is None:
            continue
        try:
            rows[int(values[0])] = values
        except (TypeError, ValueError):
            _log_debug(f"Ignoring summary sheet row with invalid year: {values[0]!r}")

    percentage = summary_row.percentage
    rows[summary_row.year] = [
        summary_row.year,
        summary_row.total,
        summary_row.remaining,
        format_percentage(math.nan if percentage is None else percentage, 1),
    ]

    if sheet.max_row >= 2:
        sheet.delete_rows(2, sheet.max_row - 1)

    for row, year in enumerate(sorted(rows), start=2):
        values = rows[year]
        values[0] = year
        for column, value in enumerate(values, start=1):
            sheet.cell(row=row, column=column, value=value)


def write_spreadsheet(
    year: int,
    city_stats: Dict[str, CityYearStat],
    summary_row: SummaryRow,
    output_dir: Path,
) -> Path:
    """
    Update statistiques_internat.xlsx with one year's results.

    Args:
        year: Processed year
        city_stats: Per-city statistics of that year
        summary_row: Global figures of that year
        output_dir: Directory holding the workbook

    Returns:
        Path to the workbook
    """
    path = output_dir / SPREADSHEET_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)

    workbook = open_workbook(path)
    update_stats_sheet(workbook[STATS_SHEET], year, city_stats)
    update_summary_sheet(workbook[SUMMARY_SHEET], summary_row)
    workbook.save(path)

    log_report_written("Spreadsheet", path)
    return path
