"""
French collation helpers.

City names are ordered the way a French reader expects: accented letters
sort with their base letter ("Besançon" next to "Besancon"), case is
ignored, and the original text only breaks ties.
"""

import unicodedata
from typing import Iterable, List, Tuple


def strip_accents(text: str) -> str:
    """Remove combining diacritics after NFD decomposition."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def french_sort_key(text: str) -> Tuple[str, str]:
    """
    Sort key approximating French locale collation.

    Primary key is the accent-stripped, casefolded text. Hyphens and
    apostrophes are ignored at the primary level so "Saint-Étienne" sorts
    as "saintetienne".
    """
    base = strip_accents(text).casefold()
    primary = "".join(c for c in base if c.isalnum() or c.isspace())
    return primary, text


def sort_french(items: Iterable[str]) -> List[str]:
    """Return items sorted in French collation order."""
    return sorted(items, key=french_sort_key)
