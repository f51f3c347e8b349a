#!/usr/bin/env python3
from __future__ import annotations

import argparse
import random
from typing import Dict, List, Optional

import chronocal
from chronocal.core.fields import ChronoField


def check_chronology(chrono, n: int, *, span: int = 200_000, seed: int = 42) -> List[str]:
    """
    Random epoch days inside the chronology's range (clipped to +-span
    around 1970) must survive epoch day -> (y, m, d) -> epoch day and
    (era, year-of-era, m, d) -> date.
    """
    rng = random.Random(seed)
    r = chrono.range(ChronoField.EPOCH_DAY)
    lo, hi = max(r.minimum, -span), min(r.maximum, span)
    failures = []
    for _ in range(n):
        e = rng.randint(lo, hi)
        d = chrono.date_epoch_day(e)
        back = chrono.date(d.proleptic_year, d.month, d.day)
        if back.epoch_day != e:
            failures.append(f"{chrono.id}: epoch {e} -> {d!r} -> {back.epoch_day}")
            continue
        via_era = chrono.date_era(d.era, d.year_of_era, d.month, d.day)
        if via_era != d:
            failures.append(f"{chrono.id}: {d} via era -> {via_era}")
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Randomized epoch-day round trip through every chronology.")
    p.add_argument("-n", type=int, default=2000, help="samples per chronology")
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--calendar", action="append", default=[])
    args = p.parse_args(argv)

    chronos = [chronocal.chronology(c) for c in args.calendar] or chronocal.get_registry().available()
    total: Dict[str, int] = {}
    failures: List[str] = []
    for c in chronos:
        f = check_chronology(c, args.n, seed=args.seed)
        total[c.id] = len(f)
        failures.extend(f)

    for cid, bad in total.items():
        print(f"{cid:<16} {args.n - bad:>6}/{args.n} ok")
    for line in failures[:20]:
        print("  " + line)
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
