"""
Placement PDF parsing for the Intake context.

Turns the yearly assignment PDF into placement records:
extract text -> reconstruct logical lines -> classify each line.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from internat.contexts.intake.city_resolver import CityResolver
from internat.contexts.intake.line_reconstructor import reconstruct_lines
from internat.contexts.intake.logger import _log_error, log_parse_result, log_parse_start
from internat.contexts.intake.record_classifier import PlacementRecord, classify_line
from internat.exceptions import PlacementPdfError
from internat.utils.pdf_processing import extract_text, page_count

load_dotenv()
INPUT_PATH = Path(os.getenv("INPUT_PATH", "input"))


@dataclass
class ParseResult:
    """
    Result of parsing one year's document.

    Attributes:
        records: Placement records in document order
        line_count: Number of logical lines examined
        unresolved_lines: Record lines dropped because no known city matched
    """

    records: List[PlacementRecord] = field(default_factory=list)
    line_count: int = 0
    unresolved_lines: List[str] = field(default_factory=list)


def pdf_path_for_year(year: int, input_dir: Optional[Path] = None) -> Path:
    """Location of the assignment PDF for a year."""
    return (input_dir or INPUT_PATH) / f"affectations_{year}.pdf"


def parse_text(text: str, resolver: Optional[CityResolver] = None) -> ParseResult:
    """
    Parse already extracted document text into placement records.

    Args:
        text: Raw extracted text with line breaks
        resolver: City resolver (default city list if None)

    Returns:
        ParseResult with records and parsing statistics
    """
    resolver = resolver or CityResolver()
    lines = reconstruct_lines(text)

    result = ParseResult(line_count=len(lines))
    for line in lines:
        record = classify_line(line, resolver, unresolved=result.unresolved_lines)
        if record is not None:
            result.records.append(record)

    return result


def parse_placements(
    year: int,
    resolver: Optional[CityResolver] = None,
    input_dir: Optional[Path] = None,
) -> ParseResult:
    """
    Parse the assignment PDF of a given year.

    Args:
        year: Year of the document (selects affectations_<year>.pdf)
        resolver: City resolver (default city list if None)
        input_dir: Directory holding the PDFs (defaults to INPUT_PATH env variable)

    Returns:
        ParseResult with records and parsing statistics

    Raises:
        PlacementPdfError: If the PDF is missing or cannot be read
    """
    pdf_path = pdf_path_for_year(year, input_dir)
    if not pdf_path.exists():
        _log_error(f"Placement PDF not found: {pdf_path}")
        raise PlacementPdfError(
            f"Cannot read the placement PDF for year {year}", year=year, pdf_path=pdf_path
        )

    try:
        log_parse_start(year, pdf_path, page_count(pdf_path))
        text = extract_text(pdf_path)
    except Exception as e:
        _log_error(f"Text extraction failed for {pdf_path}: {e}")
        raise PlacementPdfError(
            f"Cannot read the placement PDF for year {year}",
            year=year,
            pdf_path=pdf_path,
            original_error=e,
        ) from e

    result = parse_text(text, resolver)
    log_parse_result(year, result.line_count, len(result.records), len(result.unresolved_lines))

    return result
