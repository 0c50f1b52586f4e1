"""
Comparison Builder
==================

Side-by-side metrics for two or more manufacturers.

`compare_manufacturer` computes one `ManufacturerComparison`; a manufacturer
with no records gets an all-zero entry instead of an error.

`build_comparison` runs it for every requested name and projects the entries
into six parallel tables (range, type mix, eligibility, model count, yearly
trend, top county), all in input order.

The type-mix and eligibility tables derive counts back from the *rounded*
percentages: round(round(pct) / 100 * total). This can be off by one from the
true count.
"""

from __future__ import annotations
from typing import List, Sequence
import logging

from .config import AnalysisConfig, DEFAULT_CONFIG
from .grouping import count_by, mean, percentage, round_half_up, top_n
from .models import VehicleRecord
from .results import (
    ComparisonTables,
    CountyCount,
    EligibilityRow,
    ManufacturerComparison,
    ModelCountRow,
    RangeRow,
    TopCountyRow,
    TrendRow,
    TypeMixRow,
    YearCount,
)

logger = logging.getLogger(__name__)


def compare_manufacturer(
    records: Sequence[VehicleRecord],
    manufacturer: str,
    *,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> ManufacturerComparison:
    rows = [r for r in records if r.make == manufacturer]
    if not rows:
        logger.debug("no records for manufacturer %r; returning empty comparison", manufacturer)
        return ManufacturerComparison(manufacturer=manufacturer)

    total = len(rows)
    avg_range = mean([r.electric_range for r in rows if r.has_range()])
    bev = sum(1 for r in rows if r.ev_type == config.bev_label)
    phev = sum(1 for r in rows if r.ev_type == config.phev_label)
    eligible = sum(1 for r in rows if r.cafv_eligibility == config.cafv_eligible_label)
    # mean over every record, year-0 sentinels included
    avg_year = mean([r.model_year for r in rows])

    counties = top_n(count_by(rows, lambda r: r.county), config.comparison_top_counties)
    years = count_by(rows, lambda r: r.model_year)

    return ManufacturerComparison(
        manufacturer=manufacturer,
        total_vehicles=total,
        avg_range=round_half_up(avg_range) if avg_range is not None else 0,
        bev_percentage=round_half_up(percentage(bev, total)),
        phev_percentage=round_half_up(percentage(phev, total)),
        cafv_eligible_percentage=round_half_up(percentage(eligible, total)),
        unique_models=len({r.model for r in rows}),
        avg_model_year=round_half_up(avg_year) if avg_year is not None else 0,
        top_counties=[CountyCount(county=c, count=n) for c, n in counties],
        yearly_trends=[YearCount(year=y, count=years[y]) for y in sorted(years)],
    )


def _from_percentage(pct: int, total: int) -> int:
    return round_half_up(pct / 100 * total)


def build_comparison(
    records: Sequence[VehicleRecord],
    manufacturers: Sequence[str],
    *,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> ComparisonTables:
    """Build the comparison tables for `manufacturers` over `records`."""
    names = list(manufacturers)
    entries: List[ManufacturerComparison] = [
        compare_manufacturer(records, name, config=config) for name in names
    ]

    eligibility: List[EligibilityRow] = []
    for c in entries:
        eligible = _from_percentage(c.cafv_eligible_percentage, c.total_vehicles)
        eligibility.append(EligibilityRow(
            manufacturer=c.manufacturer,
            eligible=eligible,
            not_eligible=c.total_vehicles - eligible,
        ))

    geo: List[TopCountyRow] = []
    for c in entries:
        if c.top_counties:
            top = c.top_counties[0]
            geo.append(TopCountyRow(manufacturer=c.manufacturer, top_county=top.county, count=top.count))
        else:
            geo.append(TopCountyRow(manufacturer=c.manufacturer, top_county=config.missing_label, count=0))

    return ComparisonTables(
        manufacturers=names,
        entries=entries,
        range_comparison=[RangeRow(manufacturer=c.manufacturer, avg_range=c.avg_range) for c in entries],
        type_comparison=[
            TypeMixRow(
                manufacturer=c.manufacturer,
                bev=_from_percentage(c.bev_percentage, c.total_vehicles),
                phev=_from_percentage(c.phev_percentage, c.total_vehicles),
            )
            for c in entries
        ],
        eligibility_comparison=eligibility,
        models_comparison=[ModelCountRow(manufacturer=c.manufacturer, unique_models=c.unique_models) for c in entries],
        trends_comparison=[TrendRow(manufacturer=c.manufacturer, data=list(c.yearly_trends)) for c in entries],
        geo_comparison=geo,
    )
