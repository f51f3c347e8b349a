#!/usr/bin/env python3
from __future__ import annotations

import argparse
from collections import Counter
from typing import Dict, List, Optional

import chronocal

MEAN_SYNODIC_MONTH = 29.530588853


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "chronocal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "chronocal[diagnostics]"') from e


def table_stats(calendar: str = "Hijrah") -> Dict[str, object]:
    """Month and year length histograms of a Hijrah variant's table."""
    chrono = chronocal.chronology(calendar)
    t = chrono.backend.table()
    months = [b - a for a, b in zip(t.epoch_months, t.epoch_months[1:])]
    years = [sum(months[i : i + 12]) for i in range(0, len(months), 12)]
    return {
        "id": chrono.id,
        "version": t.version,
        "first_year": t.first_year,
        "last_year": t.last_year,
        "months": len(months),
        "month_lengths": dict(sorted(Counter(months).items())),
        "year_lengths": dict(sorted(Counter(years).items())),
        "leap_years": sum(1 for y in years if y > 354),
        "mean_month": sum(months) / len(months),
    }


def drift_series(np, calendar: str = "Hijrah"):
    """Month index and (table start - mean lunation start) in days."""
    t = chronocal.chronology(calendar).backend.table()
    starts = np.asarray(t.epoch_months, dtype=float)
    k = np.arange(len(starts), dtype=float)
    return k, starts - (starts[0] + k * MEAN_SYNODIC_MONTH)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Month/year length statistics of a Hijrah table.")
    p.add_argument("--calendar", default="Hijrah")
    p.add_argument("--plot", action="store_true", help="plot drift against the mean synodic month")
    p.add_argument("--outbase", default="hijrah_drift", help="Output base name (writes .png)")
    args = p.parse_args(argv)

    s = table_stats(args.calendar)
    print(f"{s['id']} version {s['version']}: AH {s['first_year']}..{s['last_year']} ({s['months']} months)")
    print("month lengths: " + ", ".join(f"{k}d x{v}" for k, v in s["month_lengths"].items()))
    print("year lengths:  " + ", ".join(f"{k}d x{v}" for k, v in s["year_lengths"].items()))
    print(f"leap years:    {s['leap_years']}")
    print(f"mean month:    {s['mean_month']:.6f} d (synodic {MEAN_SYNODIC_MONTH})")

    if not args.plot:
        return 0

    np = _need_numpy()
    plt = _need_matplotlib()

    k, drift = drift_series(np, args.calendar)
    fig, ax = plt.subplots(figsize=(9.2, 4.0), constrained_layout=True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)
    ax.plot(k / 12.0 + s["first_year"], drift, color="tab:green", linewidth=1.0)
    ax.set_xlabel("Hijrah year")
    ax.set_ylabel("Month start - mean lunation (days)")
    ax.set_title(f"{s['id']} month starts against the mean synodic month")

    fig.savefig(args.outbase + ".png", dpi=200)
    print(f"Saved: {args.outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
