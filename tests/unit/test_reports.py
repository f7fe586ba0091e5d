"""Unit tests for the text and spreadsheet reports."""

import pytest
from openpyxl import load_workbook

from internat.contexts.analysis.aggregator import CityYearStat, SummaryRow, aggregate
from internat.contexts.intake.record_classifier import PlacementRecord
from internat.contexts.reporting.spreadsheet_report import (
    SPREADSHEET_FILENAME,
    STATS_SHEET,
    SUMMARY_SHEET,
    format_stat_text,
    write_spreadsheet,
)
from internat.contexts.reporting.text_report import render_text_report, write_text_report

BIO = "biologie médicale"


@pytest.fixture
def result():
    records = [
        PlacementRecord(1, BIO, "Nice"),
        PlacementRecord(5, BIO, "Besançon"),
        PlacementRecord(10, BIO, "Nice"),
    ]
    return aggregate(records, from_rank=5)


def stat(remaining, total):
    return CityYearStat(remaining=remaining, total=total)


def sheet_rows(path, sheet_name):
    sheet = load_workbook(path)[sheet_name]
    return [list(row) for row in sheet.iter_rows(values_only=True)]


@pytest.mark.unit
class TestTextReport:
    """Tests for render_text_report()."""

    def test_title(self, result):
        text = render_text_report(2024, BIO, result)
        assert text.startswith("Analyse des affectations en biologie médicale - Année 2024\n")

    def test_lists_every_record_in_order(self, result):
        text = render_text_report(2024, BIO, result)
        assert "1 - Nice\n5 - Besançon\n10 - Nice\n" in text

    def test_global_block(self, result):
        text = render_text_report(2024, BIO, result)
        assert "Total des places: 3\n" in text
        assert "Places restantes: 2\n" in text
        assert "Pourcentage restant: 66.67%\n" in text

    def test_city_block_sorted(self, result):
        text = render_text_report(2024, BIO, result)
        city_section = text.split("Statistiques par ville à partir du rang 5 :")[1]

        assert city_section.index("Besançon:") < city_section.index("Nice:")
        assert "  Places restantes: 1 / 2\n" in city_section
        assert "  Pourcentage restant: 50.00%\n" in city_section

    def test_empty_year(self):
        text = render_text_report(2024, BIO, aggregate([], from_rank=5))
        assert "Total des places: 0\n" in text
        assert "Pourcentage restant: n/a\n" in text

    def test_written_per_year(self, result, tmp_path):
        path = write_text_report(2024, BIO, result, tmp_path)
        assert path.name == "resultats_2024.txt"
        assert path.read_text(encoding="utf-8") == render_text_report(2024, BIO, result)


@pytest.mark.unit
class TestSpreadsheet:
    """Tests for the xlsx report."""

    def test_cell_text(self):
        assert format_stat_text(stat(2, 3)) == "2/3\n(66.7%)"
        assert format_stat_text(None) == "-"

    def test_first_run_layout(self, tmp_path):
        path = write_spreadsheet(
            2023,
            {"Nice": stat(1, 2), "Besançon": stat(0, 1)},
            SummaryRow(2023, 3, 1, 100 / 3, 40),
            tmp_path,
        )

        assert path.name == SPREADSHEET_FILENAME
        assert sheet_rows(path, STATS_SHEET) == [
            ["Ville", "2023"],
            ["Besançon", "0/1\n(0.0%)"],
            ["Nice", "1/2\n(50.0%)"],
        ]
        assert sheet_rows(path, SUMMARY_SHEET) == [
            ["Année", "Total Places", "Places Restantes", "Pourcentage Restant"],
            [2023, 3, 1, "33.3%"],
        ]

    def test_years_accumulate_and_new_cities_are_sorted_in(self, tmp_path):
        write_spreadsheet(2023, {"Nice": stat(1, 2)}, SummaryRow(2023, 2, 1, 50.0, 40), tmp_path)
        path = write_spreadsheet(
            2024,
            {"Angers": stat(1, 1), "Nice": stat(2, 2)},
            SummaryRow(2024, 3, 3, 100.0, 44),
            tmp_path,
        )

        assert sheet_rows(path, STATS_SHEET) == [
            ["Ville", "2023", "2024"],
            ["Angers", "-", "1/1\n(100.0%)"],
            ["Nice", "1/2\n(50.0%)", "2/2\n(100.0%)"],
        ]

    def test_rerun_reuses_year_column(self, tmp_path):
        write_spreadsheet(2023, {"Nice": stat(1, 2)}, SummaryRow(2023, 2, 1, 50.0, 40), tmp_path)
        path = write_spreadsheet(2023, {"Nice": stat(0, 2)}, SummaryRow(2023, 2, 0, 0.0, 40), tmp_path)

        assert sheet_rows(path, STATS_SHEET) == [
            ["Ville", "2023"],
            ["Nice", "0/2\n(0.0%)"],
        ]
        assert sheet_rows(path, SUMMARY_SHEET)[1:] == [[2023, 2, 0, "0.0%"]]

    def test_city_missing_this_year(self, tmp_path):
        write_spreadsheet(2023, {"Nice": stat(1, 2)}, SummaryRow(2023, 2, 1, 50.0, 40), tmp_path)
        path = write_spreadsheet(2024, {"Lyon": stat(1, 1)}, SummaryRow(2024, 1, 1, 100.0, 41), tmp_path)

        rows = {row[0]: row for row in sheet_rows(path, STATS_SHEET)[1:]}
        assert rows["Nice"] == ["Nice", "1/2\n(50.0%)", "-"]

    def test_summary_sorted_by_year(self, tmp_path):
        write_spreadsheet(2024, {}, SummaryRow(2024, 5, 1, 20.0, 9), tmp_path)
        path = write_spreadsheet(2022, {}, SummaryRow(2022, 4, 2, 50.0, 8), tmp_path)

        years = [row[0] for row in sheet_rows(path, SUMMARY_SHEET)[1:]]
        assert years == [2022, 2024]

    def test_header_style(self, tmp_path):
        path = write_spreadsheet(2023, {"Nice": stat(1, 2)}, SummaryRow(2023, 2, 1, 50.0, 40), tmp_path)
        sheet = load_workbook(path)[STATS_SHEET]

        assert sheet.cell(row=1, column=1).font.bold
        assert sheet.cell(row=1, column=2).font.bold
