"""
Export helpers
==============

CSV keeps the export's original headers so a written file can be loaded
again with `load_registrations`. JSON keeps the Python field names and is
also used to dump any query result.
"""

from __future__ import annotations
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Iterable, Union
import csv
import json
import os

from .loader import COLUMNS
from .models import VehicleRecord

PathLike = Union[str, Path]


def _prepare(path: PathLike) -> None:
    os.makedirs(os.path.dirname(str(path)) or ".", exist_ok=True)


def export_records_csv(records: Iterable[VehicleRecord], path: PathLike) -> None:
    _prepare(path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(list(COLUMNS.values()))
        for r in records:
            w.writerow([getattr(r, name) for name in COLUMNS])


def export_records_json(records: Iterable[VehicleRecord], path: PathLike) -> None:
    payload = [asdict(r) for r in records]
    _dump(payload, path)


def export_result_json(result: Any, path: PathLike) -> None:
    """Write a result dataclass (or a list of them) as JSON."""
    _dump(to_jsonable(result), path)


def to_jsonable(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(o) for o in obj]
    return obj


def _dump(payload: Any, path: PathLike) -> None:
    _prepare(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)
