"""
Reporting Context

Responsibilities:
- Loads and persists the historical snapshot as CSV files (legacy schemas tolerated)
- Writes the yearly plain-text report
- Updates the year-over-year spreadsheet

Owns: Output file formats
Never: Parses PDFs or computes statistics
"""

from internat.contexts.reporting.csv_store import load_snapshot, persist_snapshot
from internat.contexts.reporting.spreadsheet_report import write_spreadsheet
from internat.contexts.reporting.text_report import render_text_report, write_text_report

__all__ = [
    "load_snapshot",
    "persist_snapshot",
    "render_text_report",
    "write_text_report",
    "write_spreadsheet",
]
