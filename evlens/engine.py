"""
Core engine (Aggregator)
========================

The Aggregator is a read-only view over one working set of VehicleRecords:

1) Load dataset -> list of VehicleRecord objects (immutable)
2) Wrap it in an Aggregator
3) Ask for distributions / rankings / time series / histograms
4) Narrow the view with `where(filters)` -> a *new* Aggregator

No query mutates the records or caches anything, so every call is a pure
function of the working set and two Aggregators over the same records can be
used side by side.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import logging

from .comparison import build_comparison, compare_manufacturer
from .config import AnalysisConfig, DEFAULT_CONFIG
from .grouping import count_by, extent, histogram, mean, percentage, round_half_up, top_n
from .models import DataFilters, VehicleRecord
from .profile import build_profile
from .results import ChartRow, ComparisonTables, ManufacturerComparison, ManufacturerProfile, SummaryStats, YearCount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Aggregator:
    """Query set over an immutable working set of records."""
    records: Tuple[VehicleRecord, ...] = field(repr=False)
    config: AnalysisConfig = field(default=DEFAULT_CONFIG, compare=False, repr=False)

    def __post_init__(self) -> None:
        # accept any iterable; the working set is always stored as a tuple
        object.__setattr__(self, "records", tuple(self.records))

    def __len__(self) -> int:
        return len(self.records)

    # ---------------- Distributions ----------------
    def type_distribution(self) -> List[ChartRow]:
        """One row per powertrain type, first-seen order, with share of the set."""
        return self._shares(count_by(self.records, lambda r: r.ev_type))

    def cafv_distribution(self) -> List[ChartRow]:
        return self._shares(count_by(self.records, lambda r: r.cafv_eligibility))

    def _shares(self, counts) -> List[ChartRow]:
        total = len(self.records)
        return [ChartRow(label=k, value=n, percentage=percentage(n, total)) for k, n in counts.items()]

    # ---------------- Rankings ----------------
    def top_manufacturers(self, limit: Optional[int] = None) -> List[ChartRow]:
        if limit is None:
            limit = self.config.top_manufacturers
        counts = count_by(self.records, lambda r: r.make)
        return [ChartRow(label=k, value=n) for k, n in top_n(counts, limit)]

    def county_distribution(self, limit: Optional[int] = None) -> List[ChartRow]:
        if limit is None:
            limit = self.config.top_counties
        counts = count_by(self.records, lambda r: r.county)
        return [ChartRow(label=k, value=n) for k, n in top_n(counts, limit)]

    # ---------------- Time / range ----------------
    def time_series(self) -> List[YearCount]:
        """Registrations per model year, ascending. Year 0 is kept if present."""
        counts = count_by(self.records, lambda r: r.model_year)
        return [YearCount(year=y, count=counts[y]) for y in sorted(counts)]

    def range_distribution(self, bins: Optional[int] = None) -> List[ChartRow]:
        """Equal-width histogram of the positive electric ranges.

        The domain is [min, max] of those ranges, so every positive range lands
        in a bin. Returns [] when no record has a range.
        """
        ranges = [r.electric_range for r in self.records if r.has_range()]
        domain = extent(ranges)
        if domain is None:
            return []
        if bins is None:
            bins = self.config.range_bins
        out = histogram(ranges, domain[0], domain[1], bins)
        return [ChartRow(label=b.label, value=b.count) for b in out]

    # ---------------- Summary ----------------
    def summary_stats(self) -> SummaryStats:
        avg = mean([r.electric_range for r in self.records if r.has_range()])
        # year-0 sentinels included
        years = extent([r.model_year for r in self.records])
        return SummaryStats(
            total_vehicles=len(self.records),
            avg_range=round_half_up(avg) if avg is not None else 0,
            unique_manufacturers=len({r.make for r in self.records}),
            unique_models=len({r.model for r in self.records}),
            year_range=(int(years[0]), int(years[1])) if years else (0, 0),
        )

    # ---------------- Filtering ----------------
    def filter(self, filters: DataFilters) -> List[VehicleRecord]:
        """Records matching every non-empty predicate, in original order."""
        if filters.is_empty():
            return list(self.records)
        return [r for r in self.records if filters.matches(r)]

    def where(self, filters: DataFilters) -> "Aggregator":
        out = Aggregator(self.filter(filters), config=self.config)
        logger.debug("where %s -> %d of %d records", filters, len(out), len(self))
        return out

    def available_manufacturers(self) -> List[str]:
        return sorted({r.make for r in self.records if r.make})

    def available_year_range(self) -> Tuple[int, int]:
        years = extent([r.model_year for r in self.records if r.has_year()])
        if years is None:
            return self.config.default_year_range
        return years

    # ---------------- Builders ----------------
    def manufacturer_comparison(self, manufacturer: str) -> ManufacturerComparison:
        return compare_manufacturer(self.records, manufacturer, config=self.config)

    def comparison(self, manufacturers: Sequence[str]) -> ComparisonTables:
        return build_comparison(self.records, manufacturers, config=self.config)

    def profile(self, manufacturer: str) -> ManufacturerProfile:
        return build_profile(self.records, manufacturer, config=self.config)
