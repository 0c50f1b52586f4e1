"""
Data model (VehicleRecord, DataFilters)
=======================================

Each row of the registration export is converted into a `VehicleRecord`.
Records are immutable (`frozen=True`): a filtered view is always a new
sequence of the same record objects, never an edited copy.

Sentinels: `model_year == 0` and `electric_range == 0` mean "unknown".
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

@dataclass(frozen=True)
class VehicleRecord:
    """One registered vehicle."""
    make: str
    model: str
    model_year: int = 0
    electric_range: int = 0
    ev_type: str = ""
    cafv_eligibility: str = ""
    county: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    vin: str = ""
    base_msrp: int = 0
    legislative_district: int = 0
    dol_vehicle_id: str = ""
    vehicle_location: str = ""
    electric_utility: str = ""
    census_tract: str = ""
    # (longitude, latitude), parsed from vehicle_location
    coordinates: Optional[Tuple[float, float]] = None

    def has_range(self) -> bool:
        return self.electric_range > 0

    def has_year(self) -> bool:
        return self.model_year > 0


@dataclass(frozen=True)
class DataFilters:
    """Predicate set for `Aggregator.filter`.

    Every field is optional; empty/None fields impose no constraint and the
    remaining ones are ANDed together. `year_range` bounds are inclusive; an
    inverted range (lower > upper) matches nothing.
    """
    make: Optional[str] = None
    makes: Tuple[str, ...] = field(default_factory=tuple)
    ev_type: Optional[str] = None
    county: Optional[str] = None
    year_range: Optional[Tuple[int, int]] = None

    def __post_init__(self) -> None:
        # accept any iterable of makes, store as a tuple so the filter stays hashable
        object.__setattr__(self, "makes", tuple(self.makes or ()))
        if self.year_range is not None:
            lo, hi = self.year_range
            object.__setattr__(self, "year_range", (int(lo), int(hi)))

    def is_empty(self) -> bool:
        return not (self.make or self.makes or self.ev_type or self.county or self.year_range)

    def matches(self, r: VehicleRecord) -> bool:
        if self.make and r.make != self.make:
            return False
        if self.makes and r.make not in self.makes:
            return False
        if self.ev_type and r.ev_type != self.ev_type:
            return False
        if self.county and r.county != self.county:
            return False
        if self.year_range is not None:
            lo, hi = self.year_range
            if r.model_year < lo or r.model_year > hi:
                return False
        return True
