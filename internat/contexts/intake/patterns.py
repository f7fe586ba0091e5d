"""
Record Pattern Constants

Centralized pattern strings used to reconstruct and classify placement lines.
Organized into frozen dataclasses by category for immutability and clear grouping.
"""

import re
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class OrdinalPatterns:
    """
    Leading ordinal of a placement record ("12. ", "12 ").

    Used both to start a new logical line and to extract the rank.
    """
    ORDINAL_PREFIX: str = r'^(\d+)\.?\s+'
    RECORD_TERMINATOR: str = '.'


@dataclass(frozen=True)
class SpecialtyPatterns:
    """
    Specialty phrases, searched as substrings in priority order.
    """
    BIOLOGIE_MEDICALE: str = 'biologie médicale'
    PHARMACIE_HOSPITALIERE: str = 'pharmacie hospitalière'

    @property
    def ALL(self) -> Tuple[str, ...]:
        return (self.BIOLOGIE_MEDICALE, self.PHARMACIE_HOSPITALIERE)


@dataclass(frozen=True)
class CityAliasPatterns:
    """
    Facility names that imply a city without naming it verbatim.
    """
    APHP: str = 'Assistance publique-hôpitaux de Paris'
    APHP_CITY: str = 'Paris'


ORDINAL_PREFIX_RE = re.compile(OrdinalPatterns.ORDINAL_PREFIX)

SPECIALTIES = SpecialtyPatterns().ALL
