"""Custom exceptions with references to the offending input."""

from pathlib import Path
from typing import Optional


class PlacementPdfError(Exception):
    """
    Exception raised when the yearly placement PDF cannot be read.

    Attributes:
        message: Error description
        year: Year whose PDF was requested
        pdf_path: Expected location of the PDF
        original_error: The underlying I/O or parsing error
    """

    def __init__(
        self,
        message: str,
        year: Optional[int] = None,
        pdf_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.year = year
        self.pdf_path = pdf_path
        self.original_error = original_error

        parts = [message]

        if pdf_path:
            parts.append(f"Expected file: {pdf_path}")

        if original_error:
            parts.append(f"Original error: {str(original_error)}")

        super().__init__("\n".join(parts))


class SnapshotFormatError(ValueError):
    """
    Exception raised when a persisted CSV does not match the schema a parser expects.

    Raised by one versioned parser so the next (older) schema can be tried.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path
        super().__init__(f"{message} ({path})" if path else message)
