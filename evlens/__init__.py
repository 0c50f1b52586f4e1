"""
evlens package
==============

Aggregation engine for electric-vehicle registration datasets.

- Dataset loading is in `evlens/loader.py`.
- The query set (distributions, rankings, time series, histograms) is in
  `evlens/engine.py`.
- Multi-manufacturer comparison and single-manufacturer profiles are in
  `evlens/comparison.py` and `evlens/profile.py`.
- The CLI entry point is in `evlens/cli.py`.
"""

from .config import AnalysisConfig, DEFAULT_CONFIG
from .engine import Aggregator
from .models import DataFilters, VehicleRecord

__version__ = '0.1.0'

__all__ = [
    "AnalysisConfig",
    "Aggregator",
    "DataFilters",
    "DEFAULT_CONFIG",
    "VehicleRecord",
]
