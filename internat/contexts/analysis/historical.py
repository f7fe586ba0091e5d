"""
Multi-year historical snapshot and evolution metrics.

A HistoricalSnapshot is the whole persisted history held in memory:
per-city statistics for every processed year plus one summary row per year.
Runs follow a load -> merge -> persist cycle; this module owns the merge and
the derived metrics and knows nothing about file formats.

Evolution metrics use the years present for a city, in ascending order.
Missing years are not interpolated, so with data for 2019, 2020 and 2023 the
change 2020 -> 2023 counts as a single yearly change.
"""

import math
import statistics
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from internat.contexts.analysis.aggregator import CityYearStat, SummaryRow
from internat.utils.collation import sort_french

# Number of most recent years used for the trend metric
RECENT_WINDOW = 3


@dataclass(frozen=True)
class EvolutionMetrics:
    """
    Multi-year evolution of one city's remaining share.

    Attributes:
        average_evolution: Mean yearly change of the percentage (points/year)
        recent_trend: Last minus first percentage over the recent window
        min_remaining: Smallest remaining count across years
        max_remaining: Largest remaining count across years
        volatility: Population standard deviation of yearly changes
        stability_score: Unclamped heuristic, higher is more stable (NaN if max_remaining is 0)
    """

    average_evolution: float
    recent_trend: float
    min_remaining: int
    max_remaining: int
    volatility: float
    stability_score: float


def stability_score(
    volatility: float, average_evolution: float, min_remaining: int, max_remaining: int
) -> float:
    """
    Combine volatility, trend and range of remaining places into one score.

    Returns:
        100 minus the weighted penalties, NaN when max_remaining is 0
    """
    if max_remaining == 0:
        return math.nan
    return 100 - (
        volatility * 10
        + abs(average_evolution) * 2
        + abs(max_remaining - min_remaining) / max_remaining * 20
    )


def evolution_from_series(percentages: List[float], remaining: List[int]) -> Optional[EvolutionMetrics]:
    """
    Compute evolution metrics from year-ordered series.

    Args:
        percentages: Remaining share per year, oldest first
        remaining: Remaining count per year, aligned with percentages

    Returns:
        EvolutionMetrics, or None with fewer than two data points
    """
    if len(percentages) < 2:
        return None

    yearly_changes = [b - a for a, b in zip(percentages, percentages[1:])]
    average_evolution = statistics.fmean(yearly_changes)

    recent = percentages[-RECENT_WINDOW:]
    recent_trend = recent[-1] - recent[0] if len(recent) > 1 else 0.0

    min_remaining = min(remaining)
    max_remaining = max(remaining)
    volatility = statistics.pstdev(yearly_changes)

    return EvolutionMetrics(
        average_evolution=average_evolution,
        recent_trend=recent_trend,
        min_remaining=min_remaining,
        max_remaining=max_remaining,
        volatility=volatility,
        stability_score=stability_score(volatility, average_evolution, min_remaining, max_remaining),
    )


@dataclass
class HistoricalSnapshot:
    """
    All persisted statistics, held in memory.

    Attributes:
        city_stats: city -> year -> CityYearStat
        summary: year -> SummaryRow
    """

    city_stats: Dict[str, Dict[int, CityYearStat]] = field(default_factory=dict)
    summary: Dict[int, SummaryRow] = field(default_factory=dict)

    def copy(self) -> "HistoricalSnapshot":
        """Independent copy (stats and rows are immutable, only the mappings are copied)."""
        return HistoricalSnapshot(
            city_stats={city: dict(years) for city, years in self.city_stats.items()},
            summary=dict(self.summary),
        )

    def merge_year(
        self,
        year: int,
        per_city_stats: Dict[str, CityYearStat],
        summary_row: Optional[SummaryRow] = None,
    ) -> "HistoricalSnapshot":
        """
        Merge one year's results into a new snapshot.

        Entries of that year are overwritten per city and in the summary table.
        Nothing is ever removed, so merging the same year twice gives the same
        snapshot as merging it once.

        Args:
            year: Processed year
            per_city_stats: city -> CityYearStat for that year
            summary_row: Summary row for that year (None leaves the summary untouched)

        Returns:
            Updated snapshot; self is left unchanged
        """
        merged = self.copy()

        for city, stat in per_city_stats.items():
            merged.city_stats.setdefault(city, {})[year] = stat

        if summary_row is not None:
            if summary_row.year != year:
                raise ValueError(f"Summary row year {summary_row.year} does not match {year}")
            merged.summary[year] = summary_row

        return merged

    def get_all_years(self) -> List[int]:
        """Years present in the per-city table, ascending."""
        years = {year for city_data in self.city_stats.values() for year in city_data}
        return sorted(years)

    def get_all_cities(self) -> List[str]:
        """Cities in French collation order."""
        return sort_french(self.city_stats.keys())

    def get_summary_years(self) -> List[int]:
        """Years present in the summary table, ascending."""
        return sorted(self.summary)

    def compute_evolution(self, city: str) -> Optional[EvolutionMetrics]:
        """
        Evolution metrics of one city.

        Returns:
            EvolutionMetrics, or None if the city has fewer than two years of data
        """
        city_data = self.city_stats.get(city, {})
        years = sorted(city_data)

        percentages = [city_data[year].percentage for year in years]
        remaining = [city_data[year].remaining for year in years]

        return evolution_from_series(percentages, remaining)

    def compute_all_evolution(self) -> Dict[str, EvolutionMetrics]:
        """Evolution metrics of every city with enough data, in collation order."""
        evolution = {}
        for city in self.get_all_cities():
            metrics = self.compute_evolution(city)
            if metrics is not None:
                evolution[city] = metrics
        return evolution
