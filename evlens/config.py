"""Analysis knobs shared by the engine, the builders and the CLI."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

BEV = "Battery Electric Vehicle (BEV)"
PHEV = "Plug-in Hybrid Electric Vehicle (PHEV)"
CAFV_ELIGIBLE = "Clean Alternative Fuel Vehicle Eligible"


@dataclass(frozen=True)
class AnalysisConfig:
    """High-level knobs for the aggregation queries."""
    # Labels matched literally against VehicleRecord fields
    bev_label: str = BEV
    phev_label: str = PHEV
    cafv_eligible_label: str = CAFV_ELIGIBLE

    # Dashboard list lengths
    top_manufacturers: int = 10
    top_counties: int = 15

    # Histogram resolution
    range_bins: int = 20
    profile_range_bins: int = 10

    comparison_top_counties: int = 3

    # Reported when no record carries a model year
    default_year_range: Tuple[int, int] = (2000, 2024)

    missing_label: str = "N/A"


DEFAULT_CONFIG = AnalysisConfig()
