"""Integration tests for the internat command."""

import pytest
from loguru import logger
from typer.testing import CliRunner

from internat.cli import app
from internat.contexts.reporting.csv_store import STATS_FILENAME

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.remove()


def invoke(*args):
    return runner.invoke(app, [str(arg) for arg in args])


@pytest.mark.integration
def test_successful_run(input_dir, output_dir, tmp_path):
    result = invoke(
        2023, 3,
        "--input-dir", input_dir,
        "--output-dir", output_dir,
        "--logs-dir", tmp_path / "logs",
    )

    assert result.exit_code == 0, result.output
    assert "Analysis completed" in result.output
    assert "lines skipped (unknown city)" in result.output
    assert (output_dir / STATS_FILENAME).exists()
    assert (output_dir / "resultats_2023.txt").exists()
    assert list((tmp_path / "logs").glob("internat_2023_*/internat.log"))


@pytest.mark.integration
def test_extra_city_option(input_dir, output_dir, tmp_path):
    result = invoke(
        2023, 3,
        "--input-dir", input_dir,
        "--output-dir", output_dir,
        "--logs-dir", tmp_path / "logs",
        "--extra-city", "Nulle-Part",
        "--no-spreadsheet",
    )

    assert result.exit_code == 0, result.output
    assert "lines skipped" not in result.output
    assert not (output_dir / "statistiques_internat.xlsx").exists()


@pytest.mark.integration
def test_missing_pdf_exits_with_error(input_dir, output_dir, tmp_path):
    result = invoke(
        2019, 3,
        "--input-dir", input_dir,
        "--output-dir", output_dir,
        "--logs-dir", tmp_path / "logs",
    )

    assert result.exit_code == 1
    assert not output_dir.exists()


@pytest.mark.integration
@pytest.mark.parametrize("args", [["abc", "3"], ["2023", "x"], ["2023"], ["2023", "0"]])
def test_invalid_arguments(args, tmp_path):
    result = runner.invoke(app, args + ["--logs-dir", str(tmp_path / "logs")])
    assert result.exit_code == 2


@pytest.mark.integration
def test_unknown_specialty(tmp_path):
    result = invoke(2023, 3, "--specialty", "cardiologie", "--logs-dir", tmp_path / "logs")
    assert result.exit_code == 2
