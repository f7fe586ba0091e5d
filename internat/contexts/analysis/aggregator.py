"""
Per-year aggregation of placement records.

A placement counts as "remaining" when its rank is at or after the threshold
rank: ranks before the threshold have already been chosen.
"""

import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from internat.contexts.intake.record_classifier import PlacementRecord


@dataclass(frozen=True)
class CityYearStat:
    """
    Remaining/total placements for one city (or globally) in one year.

    Attributes:
        remaining: Placements at or after the threshold rank
        total: All placements

    Raises:
        ValueError: If remaining is negative or exceeds total
    """

    remaining: int
    total: int

    def __post_init__(self):
        if self.total < 0 or self.remaining < 0:
            raise ValueError(f"Counts must be non-negative: {self.remaining}/{self.total}")
        if self.remaining > self.total:
            raise ValueError(f"Remaining exceeds total: {self.remaining}/{self.total}")

    @property
    def percentage(self) -> float:
        """Remaining share in percent, NaN when total is zero."""
        if self.total == 0:
            return math.nan
        return self.remaining / self.total * 100


@dataclass(frozen=True)
class SummaryRow:
    """
    Global figures of one processed year.

    Attributes:
        year: Processed year
        total: Number of placements for the specialty
        remaining: Placements at or after the threshold rank
        percentage: Remaining share in percent (None when undefined)
        last_rank_position: Rank of the last placement in document order
    """

    year: int
    total: int
    remaining: int
    percentage: Optional[float] = None
    last_rank_position: Optional[int] = None


@dataclass
class AggregateResult:
    """
    Statistics of one year's records.

    Attributes:
        records: Records kept for listing, in document order
        from_rank: Threshold rank (inclusive)
        global_stat: Totals over all records
        city_stats: Per-city totals, keyed by city name
        last_rank_position: Rank of the last record, None if no records
    """

    records: List[PlacementRecord]
    from_rank: int
    global_stat: CityYearStat
    city_stats: Dict[str, CityYearStat] = field(default_factory=dict)
    last_rank_position: Optional[int] = None

    def summary_row(self, year: int) -> SummaryRow:
        """Build the summary row persisted for this year."""
        percentage = self.global_stat.percentage
        return SummaryRow(
            year=year,
            total=self.global_stat.total,
            remaining=self.global_stat.remaining,
            percentage=None if math.isnan(percentage) else percentage,
            last_rank_position=self.last_rank_position,
        )


def is_remaining(record: PlacementRecord, from_rank: int) -> bool:
    """Check if a placement is still available at the threshold rank."""
    return record.rank >= from_rank


def aggregate(
    records: Iterable[PlacementRecord],
    from_rank: int,
    specialty: Optional[str] = None,
) -> AggregateResult:
    """
    Compute global and per-city statistics.

    Args:
        records: Placement records in document order
        from_rank: Threshold rank; records with rank >= from_rank are remaining
        specialty: Keep only records of this specialty (None = keep all)

    Returns:
        AggregateResult with the kept records and their statistics
    """
    kept = [r for r in records if specialty is None or r.specialty == specialty]

    totals: Dict[str, int] = defaultdict(int)
    remaining: Dict[str, int] = defaultdict(int)
    for record in kept:
        totals[record.city] += 1
        if is_remaining(record, from_rank):
            remaining[record.city] += 1

    city_stats = {
        city: CityYearStat(remaining=remaining[city], total=total)
        for city, total in totals.items()
    }

    global_stat = CityYearStat(
        remaining=sum(remaining.values()),
        total=len(kept),
    )

    return AggregateResult(
        records=kept,
        from_rank=from_rank,
        global_stat=global_stat,
        city_stats=city_stats,
        last_rank_position=kept[-1].rank if kept else None,
    )
