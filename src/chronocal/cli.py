from __future__ import annotations

import argparse
import importlib
import inspect
import logging
import re
import sys

_DATE_RE = re.compile(r"^(-?\d+)-(\d{1,2})-(\d{1,2})$")


def _parse_ymd(s: str):
    m = _DATE_RE.match(s)
    if m is None:
        raise SystemExit(f"expected YEAR-MM-DD, got {s!r}")
    return tuple(int(g) for g in m.groups())


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _describe(d) -> str:
    return f"{d}  (proleptic {d.proleptic_year}-{d.month:02d}-{d.day:02d}, epoch day {d.epoch_day})"


def cmd_list(argv: list[str]) -> int:
    import chronocal

    p = argparse.ArgumentParser(prog="chronocal list", description="List registered chronologies")
    p.parse_args(argv)

    for name in chronocal.list_chronologies():
        info = chronocal.chronology_info(name)
        lo, hi = info["year_range"]
        alias = "" if info["id"] == name else f" -> {info['id']}"
        print(f"{name:<16} {info['calendar_type'] or '-':<16} {info['backend']:<14} years {lo}..{hi}{alias}")
    return 0


def cmd_date(argv: list[str]) -> int:
    import chronocal

    p = argparse.ArgumentParser(prog="chronocal date", description="ISO date -> every (or one) chronology")
    p.add_argument("date", nargs="?", help="ISO YEAR-MM-DD (default: today)")
    p.add_argument("--calendar", action="append", default=[], help="chronology id or type (repeatable)")
    args = p.parse_args(argv)

    iso = chronocal.date(*_parse_ymd(args.date)) if args.date else chronocal.today()
    names = args.calendar or [c.id for c in chronocal.get_registry().available()]
    for name in names:
        try:
            d = chronocal.convert(iso, to=name)
        except chronocal.DateOutOfRangeError as e:
            print(f"{name:<16} out of range ({e})")
            continue
        print(f"{name:<16} {_describe(d)}")
    return 0


def cmd_convert(argv: list[str]) -> int:
    import chronocal

    p = argparse.ArgumentParser(prog="chronocal convert", description="Convert a date between chronologies")
    p.add_argument("date", help="proleptic YEAR-MM-DD in the source chronology")
    p.add_argument("--from", dest="src", default="ISO")
    p.add_argument("--to", dest="dst", default="ISO")
    p.add_argument("--era", type=int, default=None, help="read YEAR as year-of-era of this era value")
    args = p.parse_args(argv)

    y, m, d = _parse_ymd(args.date)
    if args.era is not None:
        src = chronocal.date_era(args.era, y, m, d, calendar=args.src)
    else:
        src = chronocal.date(y, m, d, calendar=args.src)
    print(_describe(chronocal.convert(src, to=args.dst)))
    return 0


def cmd_resolve(argv: list[str]) -> int:
    import chronocal
    from chronocal import ChronoField, ResolverStyle

    p = argparse.ArgumentParser(prog="chronocal resolve", description="Resolve FIELD=VALUE pairs into a date")
    p.add_argument("fields", nargs="+", help="e.g. YEAR=2001 MONTH_OF_YEAR=2 DAY_OF_MONTH=29")
    p.add_argument("--calendar", default="ISO")
    p.add_argument("--style", choices=[s.name.lower() for s in ResolverStyle], default="smart")
    args = p.parse_args(argv)

    fields = {}
    for item in args.fields:
        key, sep, value = item.partition("=")
        if not sep:
            raise SystemExit(f"expected FIELD=VALUE, got {item!r}")
        try:
            fields[ChronoField[key.strip().upper()]] = int(value)
        except KeyError:
            raise SystemExit(f"unknown field {key!r}; one of {[f.name for f in ChronoField]}") from None

    chrono = chronocal.chronology(args.calendar)
    try:
        d = chrono.resolve_date(fields, ResolverStyle[args.style.upper()])
    except chronocal.CalendarError as e:
        print(f"error: {e}")
        return 1
    print(_describe(d) if d is not None else "insufficient fields")
    if fields:
        print("unresolved: " + ", ".join(f"{k.name}={v}" for k, v in fields.items()))
    return 0


def cmd_eras(argv: list[str]) -> int:
    import chronocal

    p = argparse.ArgumentParser(prog="chronocal eras", description="List the eras of a chronology")
    p.add_argument("--calendar", default="Japanese")
    args = p.parse_args(argv)

    for era in chronocal.eras(args.calendar):
        since = "" if era.since is None else "  since {:04d}-{:02d}-{:02d}".format(*era.since)
        print(f"{era.value:>3}  {era.name}{since}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="chronocal", description="Multi-chronology calendar toolkit CLI.")
    p.add_argument("-v", "--verbose", action="count", default=0, help="log to stderr (-vv for debug)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list", help="List registered chronologies", add_help=False)
    sub.add_parser("date", help="Show an ISO date in every chronology", add_help=False)
    sub.add_parser("convert", help="Convert a date between chronologies", add_help=False)
    sub.add_parser("resolve", help="Resolve calendar fields into a date", add_help=False)
    sub.add_parser("eras", help="List the eras of a chronology", add_help=False)

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["era-boundaries", "hijrah-table", "round-trip"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

    commands = {
        "list": cmd_list,
        "date": cmd_date,
        "convert": cmd_convert,
        "resolve": cmd_resolve,
        "eras": cmd_eras,
    }
    if args.cmd in commands:
        return commands[args.cmd](rest)

    if args.cmd == "diag":
        tool_map = {
            "era-boundaries": "chronocal.diagnostics.era_boundaries",
            "hijrah-table": "chronocal.diagnostics.hijrah_table",
            "round-trip": "chronocal.diagnostics.round_trip",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
