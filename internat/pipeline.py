"""
One-year batch run.

read PDF -> reconstruct lines -> classify -> aggregate -> load snapshot
-> merge year -> write text report, CSV files and spreadsheet.

The PDF is parsed before anything is written, so a missing or unreadable
input aborts the run with all previous outputs untouched.
"""

import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from dotenv import load_dotenv
from loguru import logger

from internat.contexts.analysis import AggregateResult, HistoricalSnapshot, aggregate
from internat.contexts.intake import CityResolver, KnownCities, parse_placements
from internat.contexts.intake.defaults import DEFAULT_CITIES, DEFAULT_SPECIALTY, load_extra_cities
from internat.contexts.reporting import (
    load_snapshot,
    persist_snapshot,
    write_spreadsheet,
    write_text_report,
)

load_dotenv()
INPUT_PATH = Path(os.getenv("INPUT_PATH", "input"))
OUTPUT_PATH = Path(os.getenv("OUTPUT_PATH", "output"))


@dataclass
class PipelineResult:
    """
    Outcome of one yearly run.

    Attributes:
        year: Processed year
        aggregate: Statistics of the year
        snapshot: History after merging the year
        output_paths: Files written, in write order
        unresolved_lines: Record lines dropped for unknown city
    """

    year: int
    aggregate: AggregateResult
    snapshot: HistoricalSnapshot
    output_paths: List[Path] = field(default_factory=list)
    unresolved_lines: List[str] = field(default_factory=list)


def build_resolver(
    extra_cities: Iterable[str] = (), cities_config: Optional[Path] = None
) -> CityResolver:
    """
    City resolver from the defaults, the YAML config, then explicit extras.

    Args:
        extra_cities: City names appended last
        cities_config: YAML file with a 'cities' list (defaults to EXTRA_CITIES_PATH env variable)
    """
    cities = KnownCities(DEFAULT_CITIES)
    for city in load_extra_cities(cities_config):
        cities.add(city)
    for city in extra_cities:
        cities.add(city)
    return CityResolver(cities)


def run_year(
    year: int,
    from_rank: int,
    specialty: str = DEFAULT_SPECIALTY,
    input_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    resolver: Optional[CityResolver] = None,
    write_xlsx: bool = True,
) -> PipelineResult:
    """
    Process one year's PDF and update every report.

    Args:
        year: Year to process
        from_rank: Threshold rank (inclusive) for "remaining" placements
        specialty: Specialty to keep
        input_dir: Directory holding affectations_<year>.pdf (defaults to INPUT_PATH)
        output_dir: Directory for reports (defaults to OUTPUT_PATH)
        resolver: City resolver (built from defaults and config if None)
        write_xlsx: Also update the spreadsheet

    Returns:
        PipelineResult

    Raises:
        PlacementPdfError: If the PDF is missing or unreadable (nothing is written)
        SnapshotFormatError: If a persisted CSV matches no known schema
    """
    input_dir = input_dir or INPUT_PATH
    output_dir = output_dir or OUTPUT_PATH
    resolver = resolver or build_resolver()

    start_time = time.time()

    parsed = parse_placements(year, resolver=resolver, input_dir=input_dir)
    result = aggregate(parsed.records, from_rank, specialty=specialty)
    logger.info(
        f"{len(result.records)} placements in {specialty}, "
        f"{result.global_stat.remaining} from rank {from_rank}"
    )

    snapshot = load_snapshot(output_dir)
    snapshot = snapshot.merge_year(year, result.city_stats, result.summary_row(year))

    output_paths = [write_text_report(year, specialty, result, output_dir)]
    output_paths.extend(persist_snapshot(snapshot, output_dir))
    if write_xlsx:
        output_paths.append(
            write_spreadsheet(year, result.city_stats, result.summary_row(year), output_dir)
        )

    logger.success(f"Analysis of {year} completed ({time.time() - start_time:.2f}s)")

    return PipelineResult(
        year=year,
        aggregate=result,
        snapshot=snapshot,
        output_paths=output_paths,
        unresolved_lines=parsed.unresolved_lines,
    )
