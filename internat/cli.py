"""
Placement statistics CLI

Parses the yearly assignment PDF and updates the text, CSV and spreadsheet reports.

Examples:\n

    internat 2024 350                                  # Biologie médicale, remaining from rank 350

    internat 2024 350 --specialty "pharmacie hospitalière"

    internat 2024 350 --extra-city Pointe-à-Pitre      # Extend the known city list

    internat 2024 350 --input-dir pdfs --output-dir reports
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from internat.contexts.intake.defaults import DEFAULT_SPECIALTY
from internat.contexts.intake.patterns import SPECIALTIES
from internat.exceptions import PlacementPdfError
from internat.pipeline import INPUT_PATH, OUTPUT_PATH, build_resolver, run_year
from internat.utils.logger import setup_logger
from internat.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "output/logs"))

app = typer.Typer(
    help="Yearly placement statistics from the assignment PDF",
    add_completion=False,
)


def _validate_specialty(value: str) -> str:
    if value not in SPECIALTIES:
        raise typer.BadParameter(f"must be one of: {', '.join(SPECIALTIES)}")
    return value


@app.command()
def main(
    year: Annotated[
        int,
        typer.Argument(help="Year of the assignment PDF (input/affectations_<year>.pdf)", min=1),
    ],
    from_rank: Annotated[
        int,
        typer.Argument(help="Threshold rank: placements at or after it count as remaining", min=1),
    ],
    specialty: Annotated[
        str,
        typer.Option(
            "--specialty",
            "-s",
            help="Specialty to analyze",
            callback=_validate_specialty,
        ),
    ] = DEFAULT_SPECIALTY,
    input_dir: Annotated[
        Path,
        typer.Option("--input-dir", "-i", help="Directory holding the PDFs"),
    ] = INPUT_PATH,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for reports and history CSVs"),
    ] = OUTPUT_PATH,
    extra_city: Annotated[
        Optional[List[str]],
        typer.Option("--extra-city", "-c", help="Additional city name (repeatable)"),
    ] = None,
    cities_config: Annotated[
        Optional[Path],
        typer.Option("--cities-config", help="YAML file with extra cities under 'cities'"),
    ] = None,
    logs_dir: Annotated[
        Path,
        typer.Option("--logs-dir", help="Directory for run logs"),
    ] = LOGS_PATH,
    no_spreadsheet: Annotated[
        bool,
        typer.Option("--no-spreadsheet", help="Skip the xlsx report"),
    ] = False,
):
    """
    Analyze one year of placements and update all reports.
    """
    log_file = setup_logger(
        context_name="internat",
        log_dir=logs_dir / f"internat_{year}_{now()}",
        extra_provenance={"Year": year, "From rank": from_rank, "Specialty": specialty},
    )

    typer.secho(f"\nAnalyzing {year} ({specialty})", fg=typer.colors.BLUE, bold=True)

    try:
        resolver = build_resolver(extra_city or [], cities_config)
        result = run_year(
            year,
            from_rank,
            specialty=specialty,
            input_dir=input_dir,
            output_dir=output_dir,
            resolver=resolver,
            write_xlsx=not no_spreadsheet,
        )
    except (PlacementPdfError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    typer.secho("✓ Analysis completed", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Placements: {result.aggregate.global_stat.total}")
    typer.echo(f"  Remaining from rank {from_rank}: {result.aggregate.global_stat.remaining}")
    if result.unresolved_lines:
        typer.secho(
            f"  {len(result.unresolved_lines)} lines skipped (unknown city), see {log_file}",
            fg=typer.colors.YELLOW,
        )
    for path in result.output_paths:
        typer.echo(f"  Output: {path}")


if __name__ == "__main__":
    app()
