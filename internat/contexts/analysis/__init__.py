"""
Analysis Context

Responsibilities:
- Aggregates one year's placement records (global and per city)
- Merges the year into the multi-year historical snapshot
- Derives evolution metrics (trend, volatility, stability) per city

Owns: Statistics and their invariants
Never: Reads PDFs or knows persisted file formats
"""

from internat.contexts.analysis.aggregator import (
    AggregateResult,
    CityYearStat,
    SummaryRow,
    aggregate,
)
from internat.contexts.analysis.historical import (
    EvolutionMetrics,
    HistoricalSnapshot,
)

__all__ = [
    "aggregate",
    "AggregateResult",
    "CityYearStat",
    "SummaryRow",
    "EvolutionMetrics",
    "HistoricalSnapshot",
]
