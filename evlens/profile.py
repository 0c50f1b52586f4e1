"""
Profile Builder
===============

Deep analysis of a single manufacturer. Every section is computed
independently from the manufacturer's records `M`:

- model breakdown (per model: count, share, mean range, mean year, BEV/PHEV)
- county / city / utility / legislative-district shares, largest first
- yearly registrations with the distinct models of each year
- range statistics and a histogram over [0, max range]
- BEV / PHEV sub-group stats
- CAFV eligibility shares
- a summary of the headline values
- portfolio totals with a count-weighted mean range over the model breakdown

An unknown manufacturer gets the empty profile (zeros, empty lists, empty
strings) rather than an error.
"""

from __future__ import annotations
from typing import Callable, Hashable, List, Sequence
import logging

from .config import AnalysisConfig, DEFAULT_CONFIG
from .grouping import count_by, group_reduce, histogram, mean, percentage, round_half_up, top_n
from .models import VehicleRecord
from .results import (
    EVTypeBreakdown,
    ManufacturerProfile,
    ModelSummary,
    PortfolioTotals,
    ProfileSummary,
    RangeStats,
    ShareRow,
    TypeStats,
    YearRegistrations,
)

logger = logging.getLogger(__name__)


def _rounded_mean(values: Sequence[float]) -> int:
    m = mean(values)
    return round_half_up(m) if m is not None else 0


def _positive_ranges(rows: Sequence[VehicleRecord]) -> List[int]:
    return [r.electric_range for r in rows if r.has_range()]


def _shares(rows: Sequence[VehicleRecord], key: Callable[[VehicleRecord], Hashable], *, ordered: bool = True) -> List[ShareRow]:
    """Count and share per key; largest count first unless `ordered` is False."""
    counts = count_by(rows, key)
    pairs = top_n(counts) if ordered else list(counts.items())
    total = len(rows)
    return [ShareRow(key=k, count=n, percentage=percentage(n, total)) for k, n in pairs]


def _model_breakdown(rows: Sequence[VehicleRecord], config: AnalysisConfig) -> List[ModelSummary]:
    total = len(rows)

    def summarise(model_rows: List[VehicleRecord]) -> dict:
        return dict(
            count=len(model_rows),
            percentage=percentage(len(model_rows), total),
            avg_range=_rounded_mean(_positive_ranges(model_rows)),
            avg_year=_rounded_mean([r.model_year for r in model_rows]),
            bev_count=sum(1 for r in model_rows if r.ev_type == config.bev_label),
            phev_count=sum(1 for r in model_rows if r.ev_type == config.phev_label),
        )

    by_model = group_reduce(rows, lambda r: r.model, summarise)
    out = [ModelSummary(model=m, **fields) for m, fields in by_model.items()]
    out.sort(key=lambda s: s.count, reverse=True)
    return out


def _yearly_registrations(rows: Sequence[VehicleRecord]) -> List[YearRegistrations]:
    by_year = group_reduce(
        rows,
        lambda r: r.model_year,
        # dict.fromkeys keeps first-seen model order
        lambda year_rows: (len(year_rows), list(dict.fromkeys(r.model for r in year_rows))),
    )
    return [
        YearRegistrations(year=y, count=by_year[y][0], models=by_year[y][1])
        for y in sorted(by_year)
    ]


def _range_stats(rows: Sequence[VehicleRecord], bins: int) -> RangeStats:
    ranges = _positive_ranges(rows)
    if not ranges:
        # zero-width [0, 0] domain -> one empty bin
        return RangeStats(distribution=histogram([], 0, 0, bins))
    max_range = max(ranges)
    return RangeStats(
        avg_range=_rounded_mean(ranges),
        min_range=min(ranges),
        max_range=max_range,
        distribution=histogram(ranges, 0, max_range, bins),
    )


def _type_stats(rows: Sequence[VehicleRecord], label: str, total: int) -> TypeStats:
    sub = [r for r in rows if r.ev_type == label]
    return TypeStats(
        count=len(sub),
        percentage=percentage(len(sub), total),
        avg_range=_rounded_mean(_positive_ranges(sub)),
    )


def _portfolio_totals(models: Sequence[ModelSummary]) -> PortfolioTotals:
    total = sum(m.count for m in models)
    if not total:
        return PortfolioTotals()
    # per-model averages are already rounded; weight them by model count
    weighted = sum(m.avg_range * m.count for m in models)
    return PortfolioTotals(
        total_vehicles=total,
        bev=sum(m.bev_count for m in models),
        phev=sum(m.phev_count for m in models),
        avg_range=round_half_up(weighted / total),
    )


def _peak_year(registrations: Sequence[YearRegistrations]) -> int:
    if not registrations:
        return 0
    peak = registrations[0]
    for reg in registrations[1:]:
        # strict > keeps the earliest year on ties
        if reg.count > peak.count:
            peak = reg
    return peak.year


def build_profile(
    records: Sequence[VehicleRecord],
    manufacturer: str,
    *,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> ManufacturerProfile:
    """Build the single-manufacturer profile over `records`."""
    rows = [r for r in records if r.make == manufacturer]
    if not rows:
        logger.debug("no records for manufacturer %r; returning empty profile", manufacturer)
        return ManufacturerProfile(manufacturer=manufacturer)

    total = len(rows)
    models = _model_breakdown(rows, config)
    counties = _shares(rows, lambda r: r.county)
    cities = _shares(rows, lambda r: r.city)
    registrations = _yearly_registrations(rows)
    years = [r.model_year for r in rows if r.has_year()]

    summary = ProfileSummary(
        most_popular_model=models[0].model if models else "",
        most_popular_county=counties[0].key if counties else "",
        most_popular_city=cities[0].key if cities else "",
        peak_registration_year=_peak_year(registrations),
        avg_model_year=_rounded_mean(years),
        newest_model_year=max(years) if years else 0,
        oldest_model_year=min(years) if years else 0,
    )

    return ManufacturerProfile(
        manufacturer=manufacturer,
        total_vehicles=total,
        model_breakdown=models,
        county_distribution=counties,
        city_distribution=cities,
        yearly_registrations=registrations,
        range_stats=_range_stats(rows, config.profile_range_bins),
        ev_type_breakdown=EVTypeBreakdown(
            bev=_type_stats(rows, config.bev_label, total),
            phev=_type_stats(rows, config.phev_label, total),
        ),
        cafv_breakdown=_shares(rows, lambda r: r.cafv_eligibility, ordered=False),
        electric_utilities=_shares(rows, lambda r: r.electric_utility),
        legislative_districts=_shares(rows, lambda r: r.legislative_district),
        summary=summary,
        portfolio=_portfolio_totals(models),
    )
