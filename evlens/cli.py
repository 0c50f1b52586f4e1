"""
evlens Command Line Interface (CLI)
===================================

This file provides the interactive terminal program you run like:

    evlens --data "path/to/Electric_Vehicle_Population_Data.csv"

It demonstrates:
- Argument parsing (argparse)
- A REPL loop (Read-Eval-Print Loop) for commands
- Mapping user commands to session/engine calls (filters, queries, export)

The CLI DOES NOT modify your dataset file. It loads it once and every query
runs against a working set rebuilt from the current filters.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Iterable, Optional, Sequence
import argparse
import shlex

from .config import AnalysisConfig
from .engine import Aggregator
from .errors import EvlensError, FilterError
from .export import export_records_csv, export_records_json
from .loader import load_registrations
from .log import configure_logging
from .models import VehicleRecord
from .results import ChartRow, ComparisonTables, ManufacturerProfile
from .session import Session

HELP = """
evlens commands (grouped)
-------------------------

1) View / Inspect
   help
   stats
   show [n]
   values make|county|type [prefix]  (example: values make TES)

2) Distributions (current selection)
   types | cafv | years | ranges
   makes [n]                         (example: makes 5)
   counties [n]

3) Filtering
   filter make "<Make>"              (example: filter make "TESLA")
   filter makes "<A>" "<B>" ...
   filter type "<Electric Vehicle Type>"
   filter county "<County>"
   filter year <y1> <y2>             (example: filter year 2018 2023)
   reset | undo | redo

4) Manufacturers (full dataset)
   compare "<A>" "<B>" [...]
   profile "<Make>"

5) Export (current selection)
   export csv "<out.csv>"
   export json "<out.json>"

6) Exit
   quit
"""

def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="evlens", description="EV registration analytics REPL")
    ap.add_argument("--data", required=True, help="Path to the registration export (.csv or .xlsx)")
    ap.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    ap.add_argument("--top-makes", type=int, default=None, help="Default length of the manufacturer ranking")
    ap.add_argument("--top-counties", type=int, default=None, help="Default length of the county ranking")
    return ap


def _config_from_args(args: argparse.Namespace) -> AnalysisConfig:
    cfg = AnalysisConfig()
    if args.top_makes is not None:
        cfg = replace(cfg, top_manufacturers=args.top_makes)
    if args.top_counties is not None:
        cfg = replace(cfg, top_counties=args.top_counties)
    return cfg


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for the evlens CLI.

    1) Load dataset
    2) Start an interactive REPL over a Session
    """
    args = _parser().parse_args(argv)
    configure_logging(args.log_level)

    print("Loading dataset...")
    records = load_registrations(args.data)
    session = Session(dataset=Aggregator(records, config=_config_from_args(args)))

    print(f"Loaded {len(records)} vehicles. Type 'help' for commands.")
    while True:
        try:
            line = input("evlens> ")
        except EOFError:
            break
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.lower() in ("quit", "exit"):
            break
        try:
            handle(session, stripped)
        except (EvlensError, ValueError, IndexError) as e:
            print(f"Error: {e}")


def handle(session: Session, line: str) -> None:
    """Handle one CLI command line."""
    parts = shlex.split(line)
    if not parts:
        return
    cmd = parts[0].lower()
    cfg = session.dataset.config

    if cmd == "help":
        print(HELP)
        return

    if cmd == "stats":
        view = session.current()
        s = view.summary_stats()
        print(f"Vehicles: {s.total_vehicles} of {len(session.dataset)} | Avg range: {s.avg_range} mi")
        print(f"Manufacturers: {s.unique_manufacturers} | Models: {s.unique_models} | Years: {s.year_range[0]}-{s.year_range[1]}")
        if not session.filters.is_empty():
            print(f"Filters: {session.filters}")
        return

    if cmd == "show":
        n = int(parts[1]) if len(parts) >= 2 else 10
        _print_records(session.current().records[:n])
        return

    if cmd == "values":
        field = parts[1].lower()
        prefix = parts[2] if len(parts) >= 3 else ""
        records = session.dataset.records
        if field == "make":
            vals = session.dataset.available_manufacturers()
        elif field == "county":
            vals = sorted({r.county for r in records if r.county})
        elif field == "type":
            vals = sorted({r.ev_type for r in records if r.ev_type})
        else:
            raise ValueError("values field must be: make | county | type")
        if prefix:
            p = prefix.lower()
            vals = [v for v in vals if v.lower().startswith(p)]
        for v in vals[:50]:
            print(v)
        if len(vals) > 50:
            print(f"... ({len(vals)} total, showing 50)")
        return

    if cmd == "types":
        _print_chart(session.current().type_distribution()); return
    if cmd == "cafv":
        _print_chart(session.current().cafv_distribution()); return
    if cmd == "makes":
        n = int(parts[1]) if len(parts) >= 2 else cfg.top_manufacturers
        _print_chart(session.current().top_manufacturers(n)); return
    if cmd == "counties":
        n = int(parts[1]) if len(parts) >= 2 else cfg.top_counties
        _print_chart(session.current().county_distribution(n)); return
    if cmd == "ranges":
        _print_chart(session.current().range_distribution()); return
    if cmd == "years":
        for yc in session.current().time_series():
            print(f"{yc.year}: {yc.count}")
        return

    if cmd == "filter":
        kind = parts[1].lower()
        if kind == "make":
            session.apply(make=parts[2])
        elif kind == "makes":
            session.apply(makes=tuple(parts[2:]))
        elif kind == "type":
            session.apply(ev_type=parts[2])
        elif kind == "county":
            session.apply(county=parts[2])
        elif kind == "year":
            y1, y2 = int(parts[2]), int(parts[3])
            if y1 > y2:
                raise FilterError(f"year range is inverted: {y1} > {y2}")
            session.apply(year_range=(y1, y2))
        else:
            raise ValueError("filter kind must be: make, makes, type, county, year")
        session.command_log.append(line)
        print(f"Filtered {kind}. Size={len(session.current())}")
        return

    if cmd == "reset":
        session.reset()
        session.command_log.append(line)
        print("Filters reset.")
        return
    if cmd == "undo":
        _history(session, line, session.undo(), "Undone.", "Nothing to undo.")
        return
    if cmd == "redo":
        _history(session, line, session.redo(), "Redone.", "Nothing to redo.")
        return

    if cmd == "compare":
        names = parts[1:]
        if len(names) < 2:
            raise ValueError('compare needs at least two manufacturers: compare "A" "B"')
        _print_comparison(session.dataset.comparison(names))
        return

    if cmd == "profile":
        _print_profile(session.dataset.profile(parts[1]))
        return

    if cmd == "export":
        if len(parts) < 3:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return
        fmt = parts[1].lower()
        out_path = parts[2]
        records = session.current().records
        if not records:
            print("Nothing to export: current selection is empty.")
            return
        if fmt == "csv":
            export_records_csv(records, out_path)
        elif fmt == "json":
            export_records_json(records, out_path)
        else:
            print("Unknown export format. Use: csv or json")
            return
        print(f"Exported {len(records)} records to {out_path}")
        return

    print("Unknown command. Type 'help'.")


def _history(session: Session, line: str, changed: bool, done: str, noop: str) -> None:
    if changed:
        session.command_log.append(line)
    print(done if changed else noop)


# ---------------- Printing ----------------
def _print_records(rows: Iterable[VehicleRecord]) -> None:
    for r in rows:
        print(f"{r.make} {r.model} ({r.model_year}) | {r.ev_type} | range={r.electric_range} | {r.city}, {r.county}")


def _print_chart(rows: Sequence[ChartRow]) -> None:
    if not rows:
        print("(no data)")
        return
    for row in rows:
        pct = f" ({row.percentage:.1f}%)" if row.percentage is not None else ""
        print(f"{row.label or '(blank)'}: {row.value}{pct}")


def _print_comparison(tables: ComparisonTables) -> None:
    for c in tables.entries:
        if c.is_empty():
            print(f"{c.manufacturer}: no data")
            continue
        counties = ", ".join(f"{cc.county} ({cc.count})" for cc in c.top_counties)
        print(
            f"{c.manufacturer}: {c.total_vehicles} vehicles | avg range {c.avg_range} | "
            f"BEV {c.bev_percentage}% PHEV {c.phev_percentage}% | CAFV eligible {c.cafv_eligible_percentage}% | "
            f"{c.unique_models} models | avg year {c.avg_model_year} | top counties: {counties}"
        )


def _print_profile(p: ManufacturerProfile) -> None:
    if p.is_empty():
        print(f"{p.manufacturer}: no data")
        return
    s = p.summary
    print(f"{p.manufacturer}: {p.total_vehicles} vehicles")
    print(f"Most popular: model {s.most_popular_model} | county {s.most_popular_county} | city {s.most_popular_city}")
    print(f"Years: {s.oldest_model_year}-{s.newest_model_year} (avg {s.avg_model_year}, peak {s.peak_registration_year})")
    rs = p.range_stats
    print(f"Range: avg {rs.avg_range} | min {rs.min_range} | max {rs.max_range}")
    bev, phev = p.ev_type_breakdown.bev, p.ev_type_breakdown.phev
    print(f"BEV {bev.count} ({bev.percentage:.1f}%) | PHEV {phev.count} ({phev.percentage:.1f}%)")
    pt = p.portfolio
    print(f"Portfolio: {pt.total_vehicles} vehicles | BEV {pt.bev} | PHEV {pt.phev} | weighted avg range {pt.avg_range}")
    for m in p.model_breakdown[:10]:
        print(f"  {m.model}: {m.count} ({m.percentage:.1f}%) avg range {m.avg_range}, avg year {m.avg_year}")


if __name__ == "__main__":
    main()
