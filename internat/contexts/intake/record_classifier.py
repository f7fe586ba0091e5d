"""
Placement record classification.

Decides whether a logical line is a placement record and extracts its rank,
specialty and city. Lines that are not records are dropped silently; record
lines naming no known city are dropped with a warning so the city list can
be extended.
"""

from dataclasses import dataclass
from typing import List, Optional

from internat.contexts.intake.city_resolver import CityResolver
from internat.contexts.intake.logger import _log_warning
from internat.contexts.intake.patterns import (
    ORDINAL_PREFIX_RE,
    SPECIALTIES,
    OrdinalPatterns,
)


@dataclass(frozen=True)
class PlacementRecord:
    """
    One ranked candidate's assignment.

    Attributes:
        rank: Position in the national ranking (1-based)
        specialty: Specialty phrase found in the line
        city: Resolved city name
    """

    rank: int
    specialty: str
    city: str


def detect_specialty(line: str) -> Optional[str]:
    """Return the first specialty phrase contained in line, or None."""
    for specialty in SPECIALTIES:
        if specialty in line:
            return specialty
    return None


def classify_line(
    line: str,
    resolver: CityResolver,
    unresolved: Optional[List[str]] = None,
) -> Optional[PlacementRecord]:
    """
    Extract a placement record from a logical line.

    Args:
        line: Logical line from reconstruct_lines()
        resolver: City resolver holding the known cities
        unresolved: If given, record lines with no known city are appended to it

    Returns:
        PlacementRecord, or None if the line is not a complete record
    """
    match = ORDINAL_PREFIX_RE.match(line)
    if not match or not line.endswith(OrdinalPatterns.RECORD_TERMINATOR):
        return None

    rank = int(match.group(1))

    specialty = detect_specialty(line)
    if specialty is None:
        return None

    city = resolver.resolve(line)
    if city is None:
        _log_warning(f"City not found in line: {line}")
        if unresolved is not None:
            unresolved.append(line)
        return None

    return PlacementRecord(rank=rank, specialty=specialty, city=city)
