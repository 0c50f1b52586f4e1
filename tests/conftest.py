from __future__ import annotations

import pytest

from evlens.config import BEV, CAFV_ELIGIBLE, PHEV
from evlens.models import VehicleRecord

NOT_ELIGIBLE = "Not eligible due to low battery range"
UNKNOWN = "Eligibility unknown as battery range has not been researched"


def make_fleet():
    return [
        VehicleRecord(make="TESLA", model="MODEL 3", model_year=2020, electric_range=250, ev_type=BEV,
                      cafv_eligibility=CAFV_ELIGIBLE, county="King", city="Seattle",
                      electric_utility="CITY OF SEATTLE", legislative_district=43),
        VehicleRecord(make="TESLA", model="MODEL Y", model_year=2021, electric_range=300, ev_type=BEV,
                      cafv_eligibility=CAFV_ELIGIBLE, county="King", city="Bellevue",
                      electric_utility="PUGET SOUND ENERGY INC", legislative_district=48),
        VehicleRecord(make="TESLA", model="MODEL 3", model_year=2021, electric_range=0, ev_type=BEV,
                      cafv_eligibility=UNKNOWN, county="Snohomish", city="Everett",
                      electric_utility="PUGET SOUND ENERGY INC", legislative_district=38),
        VehicleRecord(make="NISSAN", model="LEAF", model_year=2019, electric_range=150, ev_type=BEV,
                      cafv_eligibility=CAFV_ELIGIBLE, county="King", city="Seattle",
                      electric_utility="CITY OF SEATTLE", legislative_district=43),
        VehicleRecord(make="TOYOTA", model="PRIUS PRIME", model_year=2022, electric_range=25, ev_type=PHEV,
                      cafv_eligibility=NOT_ELIGIBLE, county="Pierce", city="Tacoma",
                      electric_utility="TACOMA POWER", legislative_district=27),
        VehicleRecord(make="TOYOTA", model="RAV4 PRIME", model_year=2022, electric_range=42, ev_type=PHEV,
                      cafv_eligibility=CAFV_ELIGIBLE, county="Pierce", city="Tacoma",
                      electric_utility="TACOMA POWER", legislative_district=27),
        VehicleRecord(make="TOYOTA", model="PRIUS PRIME", model_year=2023, electric_range=25, ev_type=PHEV,
                      cafv_eligibility=NOT_ELIGIBLE, county="King", city="Seattle",
                      electric_utility="CITY OF SEATTLE", legislative_district=37),
    ]


@pytest.fixture
def fleet():
    return make_fleet()


@pytest.fixture
def small_fleet():
    return [
        VehicleRecord(make="Tesla", model="Model 3", model_year=2020, electric_range=250, ev_type="BEV"),
        VehicleRecord(make="Tesla", model="Model Y", model_year=2021, electric_range=300, ev_type="BEV"),
        VehicleRecord(make="Nissan", model="Leaf", model_year=2019, electric_range=150, ev_type="BEV"),
    ]
