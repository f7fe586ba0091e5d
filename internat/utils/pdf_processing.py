"""
PDF processing utilities for plain text extraction.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_text: Page-ordered text of the whole document.
"""

from pathlib import Path
from typing import Optional, Union

import pdfplumber
from PyPDF2 import PdfReader


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def extract_text(pdf_path: Union[str, Path], max_pages: Optional[int] = None) -> str:
    """
    Extract the text of a PDF in reading order.

    Each page's text keeps its own line breaks; pages are joined with a line
    break so a record never straddles two pages on a single physical line.
    Layout (columns, tables, fonts) is ignored.

    Args:
        pdf_path: Path to PDF file
        max_pages: Stop after this many pages (None = all pages)

    Returns:
        Extracted text, possibly empty for image-only documents

    Raises:
        FileNotFoundError: If the PDF does not exist
    """
    pdf_path = Path(pdf_path) if isinstance(pdf_path, str) else pdf_path
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    page_texts = []
    with pdfplumber.open(pdf_path) as pdf:
        pages = pdf.pages if max_pages is None else pdf.pages[:max_pages]
        for page in pages:
            page_texts.append(page.extract_text() or "")

    return "\n".join(page_texts)
