"""
Dashboard view
==============

`build_dashboard` turns (full dataset, manufacturer selection, year range)
into one `DashboardView`. The view is rebuilt from scratch whenever the
selection changes; nothing from a previous view is reused.

Which panels are filled depends on the selection size:
- 0 or >= 2 manufacturers: the top-manufacturer ranking is included
- exactly 1: the manufacturer profile is included instead
- >= 2 with `show_comparison`: the comparison tables are included

Profile and comparison are computed over the full dataset, not the
year-filtered working set.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .engine import Aggregator
from .models import DataFilters
from .results import ChartRow, ComparisonTables, ManufacturerProfile, SummaryStats, YearCount


@dataclass(frozen=True)
class DashboardView:
    total_records: int
    filtered_records: int
    stats: SummaryStats
    ev_types: List[ChartRow]
    counties: List[ChartRow]
    time_series: List[YearCount]
    ranges: List[ChartRow]
    cafv: List[ChartRow]
    top_manufacturers: Optional[List[ChartRow]] = None
    comparison: Optional[ComparisonTables] = None
    profile: Optional[ManufacturerProfile] = None


def initial_year_range(dataset: Aggregator) -> Tuple[int, int]:
    return dataset.available_year_range()


def build_dashboard(
    dataset: Aggregator,
    selected_manufacturers: Sequence[str] = (),
    year_range: Optional[Tuple[int, int]] = None,
    show_comparison: bool = False,
) -> DashboardView:
    selected = list(selected_manufacturers)
    view = dataset.where(DataFilters(makes=selected, year_range=year_range))
    cfg = dataset.config

    return DashboardView(
        total_records=len(dataset),
        filtered_records=len(view),
        stats=view.summary_stats(),
        ev_types=view.type_distribution(),
        counties=view.county_distribution(cfg.top_counties),
        time_series=view.time_series(),
        ranges=view.range_distribution(),
        cafv=view.cafv_distribution(),
        top_manufacturers=view.top_manufacturers(cfg.top_manufacturers) if len(selected) != 1 else None,
        comparison=dataset.comparison(selected) if len(selected) >= 2 and show_comparison else None,
        profile=dataset.profile(selected[0]) if len(selected) == 1 else None,
    )
