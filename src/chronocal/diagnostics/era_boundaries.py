#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional

import chronocal
from chronocal.core.fields import ChronoField


def boundary_rows(calendar: str = "Japanese", days: int = 2) -> List[dict]:
    """One row per day in [start - days, start + days) around every era start but the first."""
    chrono = chronocal.chronology(calendar)
    iso = chronocal.chronology("ISO")
    rows = []
    for era in chrono.eras()[1:]:
        if era.since is None:
            continue
        start = iso.date(*era.since).epoch_day
        for e in range(start - days, start + days):
            d = chrono.date_epoch_day(e)
            rows.append({
                "iso": str(iso.date_epoch_day(e)),
                "era": d.era.name,
                "year_of_era": d.year_of_era,
                "month": d.month,
                "day": d.day,
                "day_of_year": d.get(ChronoField.DAY_OF_YEAR),
                "first_day": e == start,
            })
    return rows


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Dates around each era change.")
    p.add_argument("--calendar", default="Japanese")
    p.add_argument("--days", type=int, default=2, help="days shown on each side of the boundary")
    args = p.parse_args(argv)

    print(f"{'ISO':<12} {'era':<10} {'yoe':>4} {'mm-dd':>6} {'doy':>4}")
    for r in boundary_rows(args.calendar, args.days):
        mark = "  <- era start" if r["first_day"] else ""
        print(
            f"{r['iso']:<12} {r['era']:<10} {r['year_of_era']:>4} "
            f"{r['month']:02d}-{r['day']:02d} {r['day_of_year']:>4}{mark}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
