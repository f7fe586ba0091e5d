"""
INTERNAT - yearly placement-ranking statistics

Extracts ranked placement records from the yearly assignment PDF, aggregates
per-city statistics for one specialty, and maintains multi-year reports.

Architecture:
- Intake Context: PDF text extraction, logical line reconstruction, record classification
- Analysis Context: Per-year aggregation and multi-year historical snapshot
- Reporting Context: Text, CSV and spreadsheet outputs
"""

__version__ = "0.1.0"
