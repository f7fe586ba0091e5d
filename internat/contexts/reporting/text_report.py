"""
Plain-text report of one processed year.

Written fresh for every run as resultats_<year>.txt; never merged with
earlier years.
"""

from pathlib import Path

from internat.contexts.analysis.aggregator import AggregateResult
from internat.contexts.reporting.logger import log_report_written
from internat.utils.collation import sort_french
from internat.utils.report_formatter import TextReportBuilder, format_percentage


def text_report_path(year: int, output_dir: Path) -> Path:
    return output_dir / f"resultats_{year}.txt"


def render_text_report(year: int, specialty: str, result: AggregateResult) -> str:
    """
    Render the yearly report.

    Sections: every accepted placement ("<rank> - <city>"), global
    statistics, then statistics per city in collation order.

    Args:
        year: Processed year
        specialty: Specialty the records were filtered on
        result: Aggregated statistics of the year

    Returns:
        Report text
    """
    report = TextReportBuilder(total_width=42)

    report.add_title(f"Analyse des affectations en {specialty} - Année {year}")
    report.add_blank_line()

    report.add_heading("Liste des affectations :")
    for record in result.records:
        report.add_text(f"{record.rank} - {record.city}")
    report.add_blank_line()

    global_stat = result.global_stat
    report.add_heading("Statistiques globales :")
    report.add_text(f"Total des places: {global_stat.total}")
    report.add_text(f"Places restantes: {global_stat.remaining}")
    report.add_text(f"Pourcentage restant: {format_percentage(global_stat.percentage, 2)}")
    if result.last_rank_position is not None:
        report.add_text(f"Dernier rang: {result.last_rank_position}")
    report.add_blank_line()
    report.add_separator()
    report.add_blank_line()

    report.add_heading(f"Statistiques par ville à partir du rang {result.from_rank} :", char="-")
    for city in sort_french(result.city_stats):
        stats = result.city_stats[city]
        report.add_text(f"{city}:")
        report.add_text(f"  Total des places: {stats.total}")
        report.add_text(f"  Places restantes: {stats.remaining} / {stats.total}")
        report.add_text(f"  Pourcentage restant: {format_percentage(stats.percentage, 2)}")
        report.add_blank_line()

    return report.render()


def write_text_report(
    year: int, specialty: str, result: AggregateResult, output_dir: Path
) -> Path:
    """Write resultats_<year>.txt and return its path."""
    path = text_report_path(year, output_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_text_report(year, specialty, result), encoding="utf-8")
    log_report_written("Text report", path)
    return path
