"""
Shared utilities for INTERNAT.

Common functionality used across contexts:
- Logger setup
- PDF text extraction
- Text report formatting
- French collation for city names
"""

from internat.utils.collation import french_sort_key, sort_french
from internat.utils.timestamp import now

__all__ = ["french_sort_key", "sort_french", "now"]
