"""
Intake Context

Responsibilities:
- Extracts text from the yearly assignment PDF
- Rebuilds logical lines from line-wrapped text
- Classifies lines into placement records (rank, specialty, city)
- Owns the known-city list and its aliases

Owns: PDF text extraction, record recognition, city resolution
Never: Aggregates statistics or writes reports
"""

from internat.contexts.intake.city_resolver import CityResolver, KnownCities
from internat.contexts.intake.line_reconstructor import reconstruct_lines
from internat.contexts.intake.pdf_parser import (
    ParseResult,
    parse_placements,
    parse_text,
    pdf_path_for_year,
)
from internat.contexts.intake.record_classifier import PlacementRecord, classify_line

__all__ = [
    "CityResolver",
    "KnownCities",
    "reconstruct_lines",
    "classify_line",
    "PlacementRecord",
    "ParseResult",
    "parse_placements",
    "parse_text",
    "pdf_path_for_year",
]
