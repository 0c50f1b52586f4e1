"""
Dataset loader (CSV / Excel -> VehicleRecord list)
==================================================

This module reads an electric-vehicle registration export and converts each
row into a `VehicleRecord`.

Key ideas:
- Columns are found by their exact header first, then by a normalised name
  (case/punctuation-insensitive), since exports vary slightly.
- Conversion helpers (_to_int/_to_str) turn blanks and junk into the 0 / ""
  sentinels instead of raising.
- Rows without a make or a model are dropped.
- The loader returns a list of immutable records; the input file is never edited.
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
import logging
import re

import pandas as pd

from .errors import DatasetError
from .models import VehicleRecord

logger = logging.getLogger(__name__)

# record field -> external header
COLUMNS: Dict[str, str] = {
    "vin": "VIN (1-10)",
    "county": "County",
    "city": "City",
    "state": "State",
    "postal_code": "Postal Code",
    "model_year": "Model Year",
    "make": "Make",
    "model": "Model",
    "ev_type": "Electric Vehicle Type",
    "cafv_eligibility": "Clean Alternative Fuel Vehicle (CAFV) Eligibility",
    "electric_range": "Electric Range",
    "base_msrp": "Base MSRP",
    "legislative_district": "Legislative District",
    "dol_vehicle_id": "DOL Vehicle ID",
    "vehicle_location": "Vehicle Location",
    "electric_utility": "Electric Utility",
    "census_tract": "2020 Census Tract",
}
INT_FIELDS = ("model_year", "electric_range", "base_msrp", "legislative_district")
REQUIRED_FIELDS = ("make", "model")

_POINT_RE = re.compile(r"POINT \((-?\d+\.?\d*) (-?\d+\.?\d*)\)")

EXCEL_SUFFIXES = (".xlsx", ".xlsm")


def _to_int(x) -> int:
    """Convert a cell to int, returning 0 if missing/invalid."""
    if pd.isna(x): return 0
    try: return int(float(str(x).strip()))
    except (TypeError, ValueError, OverflowError): return 0

def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()

def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())

def _find_col(df: pd.DataFrame, name: str) -> Optional[str]:
    cols = list(df.columns)
    if name in cols:
        return name
    norm_map = {_norm(c): c for c in cols}
    return norm_map.get(_norm(name))

def parse_point(location: str) -> Optional[Tuple[float, float]]:
    """Extract (longitude, latitude) from a 'POINT (<lon> <lat>)' string."""
    m = _POINT_RE.search(location or "")
    if not m:
        return None
    return float(m.group(1)), float(m.group(2))


def records_from_frame(df: pd.DataFrame) -> List[VehicleRecord]:
    """Map a DataFrame with the export's headers to VehicleRecords."""
    df = df.rename(columns={c: str(c).strip() for c in df.columns})
    dupes = df.columns[df.columns.duplicated()]
    if len(dupes):
        raise DatasetError(f"Duplicate column header(s) after trimming: {sorted(set(dupes))}")

    cols: Dict[str, Optional[str]] = {f: _find_col(df, header) for f, header in COLUMNS.items()}
    missing_required = [COLUMNS[f] for f in REQUIRED_FIELDS if cols[f] is None]
    if missing_required:
        raise DatasetError(f"Missing required column(s) {missing_required}. Available={list(df.columns)}")
    for f, c in cols.items():
        if c is None:
            logger.warning("column %r not found; %s defaults to sentinel", COLUMNS[f], f)

    records: List[VehicleRecord] = []
    dropped = 0
    for row in df.itertuples(index=False, name=None):
        cells = dict(zip(df.columns, row))
        values = {}
        for f, c in cols.items():
            raw = cells[c] if c is not None else None
            values[f] = _to_int(raw) if f in INT_FIELDS else _to_str(raw)
        if not values["make"] or not values["model"]:
            dropped += 1
            continue
        records.append(VehicleRecord(coordinates=parse_point(values["vehicle_location"]), **values))

    logger.info("read %d rows: kept %d records, dropped %d without make/model", len(df), len(records), dropped)
    return records


def load_registrations(path: Union[str, Path]) -> List[VehicleRecord]:
    """Load a registration export (.csv or .xlsx) into VehicleRecords."""
    p = Path(path)
    if not p.exists():
        raise DatasetError(f"Dataset not found: {p}")
    try:
        if p.suffix.lower() in EXCEL_SUFFIXES:
            df = pd.read_excel(p, engine="openpyxl", dtype=str)
        elif p.suffix.lower() in (".csv", ".txt"):
            df = pd.read_csv(p, dtype=str, keep_default_na=False, skip_blank_lines=True)
        else:
            raise DatasetError(f"Unsupported dataset type {p.suffix!r}; expected .csv or .xlsx")
    except (OSError, ValueError, pd.errors.ParserError) as e:
        raise DatasetError(f"Could not read {p}: {e}") from e
    return records_from_frame(df)
