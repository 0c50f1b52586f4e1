"""
Derived aggregate types
=======================

Every query returns fresh instances of these value types. Nothing here is
cached or shared between calls, so a caller may keep (or mutate) a result
without affecting later queries.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .grouping import Bin

# -----------------------------
# Aggregator outputs
# -----------------------------

@dataclass(frozen=True)
class ChartRow:
    """Label/count pair, optionally with a share of the working set."""
    label: str
    value: int
    percentage: Optional[float] = None


@dataclass(frozen=True)
class YearCount:
    year: int
    count: int


@dataclass(frozen=True)
class SummaryStats:
    total_vehicles: int
    avg_range: int
    unique_manufacturers: int
    unique_models: int
    year_range: Tuple[int, int]


# -----------------------------
# Comparison Builder outputs
# -----------------------------

@dataclass(frozen=True)
class CountyCount:
    county: str
    count: int


@dataclass(frozen=True)
class ManufacturerComparison:
    manufacturer: str
    total_vehicles: int = 0
    avg_range: int = 0
    bev_percentage: int = 0
    phev_percentage: int = 0
    cafv_eligible_percentage: int = 0
    unique_models: int = 0
    avg_model_year: int = 0
    top_counties: List[CountyCount] = field(default_factory=list)
    yearly_trends: List[YearCount] = field(default_factory=list)

    def is_empty(self) -> bool:
        return self.total_vehicles == 0


@dataclass(frozen=True)
class RangeRow:
    manufacturer: str
    avg_range: int


@dataclass(frozen=True)
class TypeMixRow:
    manufacturer: str
    bev: int
    phev: int


@dataclass(frozen=True)
class EligibilityRow:
    manufacturer: str
    eligible: int
    not_eligible: int


@dataclass(frozen=True)
class ModelCountRow:
    manufacturer: str
    unique_models: int


@dataclass(frozen=True)
class TrendRow:
    manufacturer: str
    data: List[YearCount]


@dataclass(frozen=True)
class TopCountyRow:
    manufacturer: str
    top_county: str
    count: int


@dataclass(frozen=True)
class ComparisonTables:
    """Six parallel tables, each in the order the manufacturers were given."""
    manufacturers: List[str]
    entries: List[ManufacturerComparison]
    range_comparison: List[RangeRow]
    type_comparison: List[TypeMixRow]
    eligibility_comparison: List[EligibilityRow]
    models_comparison: List[ModelCountRow]
    trends_comparison: List[TrendRow]
    geo_comparison: List[TopCountyRow]


# -----------------------------
# Profile Builder outputs
# -----------------------------

@dataclass(frozen=True)
class ModelSummary:
    model: str
    count: int
    percentage: float
    avg_range: int
    avg_year: int
    bev_count: int
    phev_count: int


@dataclass(frozen=True)
class ShareRow:
    """Count and share of one value (county, city, utility, district, ...)."""
    key: Union[str, int]
    count: int
    percentage: float


@dataclass(frozen=True)
class YearRegistrations:
    year: int
    count: int
    models: List[str]


@dataclass(frozen=True)
class RangeStats:
    avg_range: int = 0
    min_range: int = 0
    max_range: int = 0
    distribution: List[Bin] = field(default_factory=list)


@dataclass(frozen=True)
class TypeStats:
    count: int = 0
    percentage: float = 0
    avg_range: int = 0


@dataclass(frozen=True)
class EVTypeBreakdown:
    bev: TypeStats = field(default_factory=TypeStats)
    phev: TypeStats = field(default_factory=TypeStats)


@dataclass(frozen=True)
class ProfileSummary:
    most_popular_model: str = ""
    most_popular_county: str = ""
    most_popular_city: str = ""
    peak_registration_year: int = 0
    avg_model_year: int = 0
    newest_model_year: int = 0
    oldest_model_year: int = 0


@dataclass(frozen=True)
class PortfolioTotals:
    """Totals over the model breakdown; avg_range is weighted by model count."""
    total_vehicles: int = 0
    bev: int = 0
    phev: int = 0
    avg_range: int = 0


@dataclass(frozen=True)
class ManufacturerProfile:
    manufacturer: str
    total_vehicles: int = 0
    model_breakdown: List[ModelSummary] = field(default_factory=list)
    county_distribution: List[ShareRow] = field(default_factory=list)
    city_distribution: List[ShareRow] = field(default_factory=list)
    yearly_registrations: List[YearRegistrations] = field(default_factory=list)
    range_stats: RangeStats = field(default_factory=RangeStats)
    ev_type_breakdown: EVTypeBreakdown = field(default_factory=EVTypeBreakdown)
    cafv_breakdown: List[ShareRow] = field(default_factory=list)
    electric_utilities: List[ShareRow] = field(default_factory=list)
    legislative_districts: List[ShareRow] = field(default_factory=list)
    summary: ProfileSummary = field(default_factory=ProfileSummary)
    portfolio: PortfolioTotals = field(default_factory=PortfolioTotals)

    def is_empty(self) -> bool:
        return self.total_vehicles == 0
