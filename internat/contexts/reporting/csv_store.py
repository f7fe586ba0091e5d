"""
CSV persistence of the historical snapshot.

Two files live in the output directory:

    statistiques_par_ville.csv
        Ville,<year1>,...,<yearN>,<six evolution columns>
        One row per city; "<remaining>/<total>" or "-" per year.

    resume_global.csv
        Année,Total Places,Places Restantes,Pourcentage Restant,Dernier Rang
        One row per year, ascending.

Files written by older runs may lack the evolution columns or the
"Dernier Rang" column. Each file has a list of versioned parsers, richest
schema first; a parser raises SnapshotFormatError when the header does not
match its schema and the next one is tried. Unparseable cells are treated as
absent rather than aborting the reload.

Usage:
    snapshot = load_snapshot(output_dir)
    snapshot = snapshot.merge_year(year, result.city_stats, result.summary_row(year))
    persist_snapshot(snapshot, output_dir)
"""

import csv
import math
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from dotenv import load_dotenv

from internat.contexts.analysis.aggregator import CityYearStat, SummaryRow
from internat.contexts.analysis.historical import EvolutionMetrics, HistoricalSnapshot
from internat.contexts.reporting.logger import (
    _log_debug,
    _log_warning,
    log_report_written,
    log_snapshot_loaded,
)
from internat.exceptions import SnapshotFormatError
from internat.utils.report_formatter import format_metric

load_dotenv()
OUTPUT_PATH = Path(os.getenv("OUTPUT_PATH", "output"))

STATS_FILENAME = "statistiques_par_ville.csv"
SUMMARY_FILENAME = "resume_global.csv"

CITY_COLUMN = "Ville"
MISSING_VALUE = "-"

EVOLUTION_COLUMNS = [
    "Evolution moyenne (%/an)",
    "Tendance sur 3 ans (%)",
    "Min places restantes",
    "Max places restantes",
    "Volatilité",
    "Score stabilité",
]

SUMMARY_COLUMNS = [
    "Année",
    "Total Places",
    "Places Restantes",
    "Pourcentage Restant",
    "Dernier Rang",
]

CityTable = Dict[str, Dict[int, CityYearStat]]
SummaryTable = Dict[int, SummaryRow]


# ============================================================================
# Cell parsing
# ============================================================================


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value.strip().rstrip("%"))
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_stat_cell(value: Optional[str]) -> Optional[CityYearStat]:
    """
    Parse a "<remaining>/<total>" cell.

    Returns:
        CityYearStat, or None for "-", empty, malformed or inconsistent values
    """
    if value is None:
        return None
    value = value.strip()
    if not value or value == MISSING_VALUE:
        return None

    parts = value.split("/")
    if len(parts) != 2:
        return None

    remaining, total = _parse_int(parts[0]), _parse_int(parts[1])
    if remaining is None or total is None or total <= 0:
        return None

    try:
        return CityYearStat(remaining=remaining, total=total)
    except ValueError:
        return None


def format_stat_cell(stat: Optional[CityYearStat]) -> str:
    """Format a stat as "<remaining>/<total>", "-" when absent."""
    if stat is None:
        return MISSING_VALUE
    return f"{stat.remaining}/{stat.total}"


def format_evolution_cells(metrics: Optional[EvolutionMetrics]) -> List[str]:
    """Six evolution cells for a city row, all "-" without metrics."""
    if metrics is None:
        return [MISSING_VALUE] * len(EVOLUTION_COLUMNS)
    return [
        format_metric(metrics.average_evolution, 1),
        format_metric(metrics.recent_trend, 1),
        format_metric(metrics.min_remaining, 0),
        format_metric(metrics.max_remaining, 0),
        format_metric(metrics.volatility, 2),
        format_metric(metrics.stability_score, 1),
    ]


# ============================================================================
# Raw file access
# ============================================================================


def _read_rows(path: Path) -> List[List[str]]:
    """Read non-blank CSV rows; a leading BOM is tolerated."""
    with open(path, "r", newline="", encoding="utf-8-sig") as f:
        return [row for row in csv.reader(f) if any(cell.strip() for cell in row)]


def _write_rows(path: Path, rows: Sequence[Sequence[str]]) -> None:
    """Rewrite a CSV file through a temp file so a failed write keeps the old file."""
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_fd, temp_path = tempfile.mkstemp(suffix=".csv", dir=path.parent, text=True)
    try:
        with os.fdopen(temp_fd, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, lineterminator="\n")
            writer.writerows(rows)

        shutil.move(temp_path, path)
    except Exception:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


# ============================================================================
# Per-city statistics file
# ============================================================================


def _year_columns(header: List[str], end: int) -> List[Tuple[int, int]]:
    """(column index, year) pairs for year headers in header[1:end]."""
    columns = []
    for index in range(1, end):
        year = _parse_int(header[index])
        if year is None:
            _log_debug(f"Ignoring non-year column header: {header[index]!r}")
            continue
        columns.append((index, year))
    return columns


def _parse_city_rows(rows: List[List[str]], end: int) -> CityTable:
    header = rows[0]
    year_columns = _year_columns(header, end)

    table: CityTable = {}
    for row in rows[1:]:
        city = row[0].strip()
        if not city:
            continue

        city_data = {}
        for index, year in year_columns:
            cell = row[index] if index < len(row) else None
            stat = parse_stat_cell(cell)
            if stat is None:
                if cell and cell.strip() != MISSING_VALUE:
                    _log_debug(f"Ignoring malformed value {cell!r} for {city} {year}")
                continue
            city_data[year] = stat

        if city_data:
            table[city] = city_data

    return table


def _check_city_header(header: List[str], path: Path) -> None:
    if not header or header[0].strip() != CITY_COLUMN:
        raise SnapshotFormatError(f"Expected '{CITY_COLUMN}' as first column", path)


def parse_stats_with_evolution(rows: List[List[str]], path: Path) -> CityTable:
    """Current schema: year columns followed by the evolution columns."""
    header = rows[0]
    _check_city_header(header, path)

    stripped = [h.strip() for h in header]
    evolution_indices = [i for i, h in enumerate(stripped) if h in EVOLUTION_COLUMNS]
    if not evolution_indices:
        raise SnapshotFormatError("No evolution columns", path)

    return _parse_city_rows(rows, end=evolution_indices[0])


def parse_stats_years_only(rows: List[List[str]], path: Path) -> CityTable:
    """Legacy schema: city column followed by year columns only."""
    header = rows[0]
    _check_city_header(header, path)
    return _parse_city_rows(rows, end=len(header))


STATS_PARSERS: List[Tuple[str, Callable[[List[List[str]], Path], CityTable]]] = [
    ("with-evolution", parse_stats_with_evolution),
    ("years-only", parse_stats_years_only),
]


def load_city_stats(path: Path) -> CityTable:
    """
    Load the per-city statistics file.

    Returns:
        city -> year -> CityYearStat, empty if the file does not exist

    Raises:
        SnapshotFormatError: If no known schema matches the header
    """
    if not path.exists():
        return {}

    rows = _read_rows(path)
    if not rows:
        return {}

    return _parse_with(STATS_PARSERS, rows, path, unit="cities")


def write_city_stats(snapshot: HistoricalSnapshot, path: Path) -> Path:
    """Rewrite the per-city statistics file from a snapshot."""
    years = snapshot.get_all_years()
    evolution = snapshot.compute_all_evolution()

    rows = [[CITY_COLUMN] + [str(year) for year in years] + EVOLUTION_COLUMNS]
    for city in snapshot.get_all_cities():
        city_data = snapshot.city_stats[city]
        row = [city]
        row.extend(format_stat_cell(city_data.get(year)) for year in years)
        row.extend(format_evolution_cells(evolution.get(city)))
        rows.append(row)

    _write_rows(path, rows)
    return path


# ============================================================================
# Summary file
# ============================================================================


def _check_summary_header(header: List[str], path: Path, width: int) -> None:
    stripped = [h.strip() for h in header]
    if stripped[:width] != SUMMARY_COLUMNS[:width]:
        raise SnapshotFormatError(f"Expected header {SUMMARY_COLUMNS[:width]}", path)


def _parse_summary_rows(rows: List[List[str]], with_last_rank: bool) -> SummaryTable:
    table: SummaryTable = {}
    for row in rows[1:]:
        cells = row + [None] * (len(SUMMARY_COLUMNS) - len(row))
        year, total, remaining = (_parse_int(c) for c in cells[:3])
        if year is None or total is None or remaining is None:
            _log_debug(f"Ignoring malformed summary row: {row}")
            continue

        table[year] = SummaryRow(
            year=year,
            total=total,
            remaining=remaining,
            percentage=_parse_float(cells[3]),
            last_rank_position=_parse_int(cells[4]) if with_last_rank else None,
        )
    return table


def parse_summary_with_last_rank(rows: List[List[str]], path: Path) -> SummaryTable:
    """Current schema: five columns ending with "Dernier Rang"."""
    _check_summary_header(rows[0], path, width=5)
    return _parse_summary_rows(rows, with_last_rank=True)


def parse_summary_without_last_rank(rows: List[List[str]], path: Path) -> SummaryTable:
    """Legacy schema: four columns, no last rank."""
    _check_summary_header(rows[0], path, width=4)
    return _parse_summary_rows(rows, with_last_rank=False)


SUMMARY_PARSERS: List[Tuple[str, Callable[[List[List[str]], Path], SummaryTable]]] = [
    ("with-last-rank", parse_summary_with_last_rank),
    ("without-last-rank", parse_summary_without_last_rank),
]


def load_summary(path: Path) -> SummaryTable:
    """
    Load the summary file.

    Returns:
        year -> SummaryRow, empty if the file does not exist

    Raises:
        SnapshotFormatError: If no known schema matches the header
    """
    if not path.exists():
        return {}

    rows = _read_rows(path)
    if not rows:
        return {}

    return _parse_with(SUMMARY_PARSERS, rows, path, unit="years")


def write_summary(snapshot: HistoricalSnapshot, path: Path) -> Path:
    """Rewrite the summary file from a snapshot, one row per year ascending."""
    rows = [list(SUMMARY_COLUMNS)]
    for year in snapshot.get_summary_years():
        row = snapshot.summary[year]
        rows.append(
            [
                str(year),
                str(row.total),
                str(row.remaining),
                format_metric(row.percentage, 1),
                format_metric(row.last_rank_position, 0),
            ]
        )

    _write_rows(path, rows)
    return path


# ============================================================================
# Snapshot load / persist
# ============================================================================


def _parse_with(parsers, rows: List[List[str]], path: Path, unit: str):
    """Try versioned parsers in order, richest schema first."""
    errors = []
    for schema, parser in parsers:
        try:
            table = parser(rows, path)
        except SnapshotFormatError as e:
            errors.append(f"{schema}: {e.message}")
            continue
        log_snapshot_loaded(path, schema, len(table), unit)
        if errors:
            _log_warning(f"{path.name} uses a legacy layout; it will be rewritten in the current one")
        return table

    raise SnapshotFormatError(f"Unrecognized file format ({'; '.join(errors)})", path)


def snapshot_paths(output_dir: Optional[Path] = None) -> Tuple[Path, Path]:
    """Paths of the per-city and summary files."""
    output_dir = output_dir or OUTPUT_PATH
    return output_dir / STATS_FILENAME, output_dir / SUMMARY_FILENAME


def load_snapshot(output_dir: Optional[Path] = None) -> HistoricalSnapshot:
    """
    Load the persisted history.

    Args:
        output_dir: Directory holding the CSV files (defaults to OUTPUT_PATH env variable)

    Returns:
        HistoricalSnapshot, empty when nothing was persisted yet
    """
    stats_path, summary_path = snapshot_paths(output_dir)
    return HistoricalSnapshot(
        city_stats=load_city_stats(stats_path),
        summary=load_summary(summary_path),
    )


def persist_snapshot(
    snapshot: HistoricalSnapshot, output_dir: Optional[Path] = None
) -> Tuple[Path, Path]:
    """
    Rewrite both CSV files from a snapshot.

    Returns:
        Tuple of (per-city file path, summary file path)
    """
    stats_path, summary_path = snapshot_paths(output_dir)

    write_city_stats(snapshot, stats_path)
    log_report_written("City statistics CSV", stats_path)

    write_summary(snapshot, summary_path)
    log_report_written("Summary CSV", summary_path)

    return stats_path, summary_path
