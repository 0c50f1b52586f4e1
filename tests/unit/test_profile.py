import pytest

from evlens.config import BEV, CAFV_ELIGIBLE, PHEV
from evlens.grouping import Bin
from evlens.models import VehicleRecord
from evlens.profile import build_profile
from evlens.results import ManufacturerProfile, ModelSummary, PortfolioTotals, ProfileSummary, RangeStats, ShareRow, YearRegistrations


def test_model_breakdown(fleet):
    p = build_profile(fleet, "TESLA")
    assert p.total_vehicles == 3
    assert p.model_breakdown == [
        ModelSummary("MODEL 3", 2, pytest.approx(200 / 3), 250, 2021, 2, 0),
        ModelSummary("MODEL Y", 1, pytest.approx(100 / 3), 300, 2021, 1, 0),
    ]


def test_geographic_distributions(fleet):
    p = build_profile(fleet, "TESLA")
    assert [(s.key, s.count) for s in p.county_distribution] == [("King", 2), ("Snohomish", 1)]
    # equal counts keep first-seen order
    assert [s.key for s in p.city_distribution] == ["Seattle", "Bellevue", "Everett"]
    assert [(s.key, s.count) for s in p.electric_utilities] == [("PUGET SOUND ENERGY INC", 2), ("CITY OF SEATTLE", 1)]
    assert [s.key for s in p.legislative_districts] == [43, 48, 38]
    assert sum(s.percentage for s in p.county_distribution) == pytest.approx(100.0)


def test_yearly_registrations_list_distinct_models(fleet):
    p = build_profile(fleet, "TESLA")
    assert p.yearly_registrations == [
        YearRegistrations(2020, 1, ["MODEL 3"]),
        YearRegistrations(2021, 2, ["MODEL Y", "MODEL 3"]),
    ]


def test_range_stats_and_histogram(fleet):
    rs = build_profile(fleet, "TESLA").range_stats
    assert (rs.avg_range, rs.min_range, rs.max_range) == (275, 250, 300)
    assert len(rs.distribution) == 10
    assert rs.distribution[0].label == "0-30"
    assert [b.count for b in rs.distribution] == [0] * 8 + [1, 1]


def test_range_stats_without_ranges():
    records = [VehicleRecord(make="FORD", model="F-150", electric_range=0)]
    rs = build_profile(records, "FORD").range_stats
    assert rs == RangeStats(0, 0, 0, [Bin(0.0, 0.0, 0)])


def test_ev_type_breakdown(fleet):
    p = build_profile(fleet, "TOYOTA")
    assert p.ev_type_breakdown.bev.count == 0
    assert p.ev_type_breakdown.bev.avg_range == 0
    assert p.ev_type_breakdown.phev.count == 3
    assert p.ev_type_breakdown.phev.percentage == pytest.approx(100.0)
    assert p.ev_type_breakdown.phev.avg_range == 31


def test_ev_type_shares_sum_to_100():
    records = [
        VehicleRecord(make="BMW", model="I3", ev_type=BEV, electric_range=150),
        VehicleRecord(make="BMW", model="X5", ev_type=PHEV, electric_range=30),
        VehicleRecord(make="BMW", model="X5", ev_type=PHEV),
    ]
    b = build_profile(records, "BMW").ev_type_breakdown
    assert b.bev.percentage + b.phev.percentage == pytest.approx(100.0)
    assert (b.bev.avg_range, b.phev.avg_range) == (150, 30)


def test_cafv_breakdown_first_seen_order(fleet):
    p = build_profile(fleet, "TOYOTA")
    assert [(s.count, round(s.percentage, 2)) for s in p.cafv_breakdown] == [(2, 66.67), (1, 33.33)]
    assert p.cafv_breakdown[1].key == CAFV_ELIGIBLE


def test_summary(fleet):
    assert build_profile(fleet, "TESLA").summary == ProfileSummary(
        most_popular_model="MODEL 3",
        most_popular_county="King",
        most_popular_city="Seattle",
        peak_registration_year=2021,
        avg_model_year=2021,
        newest_model_year=2021,
        oldest_model_year=2020,
    )


def test_peak_year_ties_resolve_to_earliest_year():
    records = [VehicleRecord(make="KIA", model="NIRO", model_year=y) for y in (2020, 2019, 2021, 2021, 2019)]
    assert build_profile(records, "KIA").summary.peak_registration_year == 2019


def test_year_zero_is_excluded_from_summary_years_only():
    records = [
        VehicleRecord(make="KIA", model="NIRO", model_year=0),
        VehicleRecord(make="KIA", model="NIRO", model_year=2020),
    ]
    p = build_profile(records, "KIA")
    assert (p.summary.avg_model_year, p.summary.oldest_model_year, p.summary.newest_model_year) == (2020, 2020, 2020)
    assert p.model_breakdown[0].avg_year == 1010
    assert p.yearly_registrations[0].year == 0


def test_unknown_manufacturer_gets_empty_profile(fleet):
    p = build_profile(fleet, "RIVIAN")
    assert p == ManufacturerProfile(manufacturer="RIVIAN")
    assert p.is_empty()
    assert p.model_breakdown == [] and p.county_distribution == [] and p.city_distribution == []
    assert p.yearly_registrations == [] and p.cafv_breakdown == []
    assert p.electric_utilities == [] and p.legislative_districts == []
    assert p.range_stats.distribution == []
    assert (p.range_stats.avg_range, p.range_stats.min_range, p.range_stats.max_range) == (0, 0, 0)
    assert p.ev_type_breakdown.bev.count == 0 and p.ev_type_breakdown.phev.percentage == 0
    assert p.summary == ProfileSummary()
    assert p.portfolio == PortfolioTotals()
    assert p.summary.most_popular_model == ""


def test_profile_is_idempotent(fleet):
    assert build_profile(fleet, "TESLA") == build_profile(fleet, "TESLA")
    assert build_profile([], "TESLA") == ManufacturerProfile(manufacturer="TESLA")


def test_portfolio_totals(fleet):
    pt = build_profile(fleet, "TESLA").portfolio
    # MODEL 3 avg 250 over 2 vehicles, MODEL Y 300 over 1
    assert pt == PortfolioTotals(total_vehicles=3, bev=3, phev=0, avg_range=267)


def test_portfolio_range_is_weighted_by_model_count():
    rows = [
        VehicleRecord(make="FORD", model="A", model_year=2020, electric_range=300, ev_type=BEV),
        VehicleRecord(make="FORD", model="B", model_year=2020, electric_range=30, ev_type=PHEV),
        VehicleRecord(make="FORD", model="B", model_year=2021, electric_range=0, ev_type=PHEV),
        VehicleRecord(make="FORD", model="B", model_year=2022, electric_range=0, ev_type=PHEV),
    ]
    p = build_profile(rows, "FORD")
    assert [(m.model, m.count, m.avg_range) for m in p.model_breakdown] == [("B", 3, 30), ("A", 1, 300)]
    # (30*3 + 300*1) / 4 = 97.5 rounds half up; the plain range mean would be 165
    assert p.portfolio == PortfolioTotals(total_vehicles=4, bev=1, phev=3, avg_range=98)
    assert p.range_stats.avg_range == 165
