from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, List, Mapping, Optional, Union

from .core.date import CalendarDate
from .core.fields import ChronoField, ResolverStyle
from .core.registry import ChronologyRegistry
from .core.types import ChronologySpec, Era
from .engines.chronology import Chronology
from .engines.factory import make_chronology as _make_chronology

_registry: Optional[ChronologyRegistry] = None


def set_registry(reg: ChronologyRegistry) -> None:
    global _registry
    _registry = reg


def get_registry() -> ChronologyRegistry:
    return _reg()


def _reg() -> ChronologyRegistry:
    if _registry is None:
        raise RuntimeError("Chronology registry not initialized")
    return _registry


def _chrono(calendar: Union[str, Chronology]) -> Chronology:
    return calendar if isinstance(calendar, Chronology) else _reg().get(calendar)


def list_chronologies() -> List[str]:
    return _reg().list()


def chronology(name: str) -> Chronology:
    """Look up a chronology by id ("Japanese") or calendar type ("japanese")."""
    return _reg().get(name)


def chronology_info(name: str) -> Dict[str, Any]:
    return _reg().get(name).info()


def make_chronology(spec: ChronologySpec) -> Chronology:
    return _make_chronology(spec)


def register_chronology(chrono: Chronology, id: Optional[str] = None) -> Optional[Chronology]:
    return _reg().register(chrono, id)


def eras(calendar: Union[str, Chronology] = "ISO") -> List[Era]:
    return _chrono(calendar).eras()


# ============================================================
# Dates
# ============================================================

def date(year: int, month: int, day: int, *, calendar: Union[str, Chronology] = "ISO") -> CalendarDate:
    return _chrono(calendar).date(year, month, day)


def date_era(
    era: Union[int, Era],
    year_of_era: int,
    month: int,
    day: int,
    *,
    calendar: Union[str, Chronology] = "ISO",
) -> CalendarDate:
    c = _chrono(calendar)
    e = c.era_of(era) if isinstance(era, int) else era
    return c.date_era(e, year_of_era, month, day)


def date_epoch_day(epoch_day: int, *, calendar: Union[str, Chronology] = "ISO") -> CalendarDate:
    return _chrono(calendar).date_epoch_day(epoch_day)


def today(*, calendar: Union[str, Chronology] = "ISO", tz: Optional[_dt.tzinfo] = None) -> CalendarDate:
    return _chrono(calendar).date_now(tz)


def convert(value: Union[CalendarDate, _dt.date], *, to: Union[str, Chronology]) -> CalendarDate:
    """The same day in another chronology."""
    return _chrono(to).date_from(value)


def resolve(
    fields: Mapping[Union[ChronoField, str], int],
    *,
    calendar: Union[str, Chronology] = "ISO",
    style: Union[ResolverStyle, str] = ResolverStyle.SMART,
) -> Optional[CalendarDate]:
    """
    Resolve a field map (keys are ChronoField members or their names, e.g.
    "YEAR"). The caller's mapping is not modified; use
    Chronology.resolve_date to see which fields were left over.
    """
    work = {(k if isinstance(k, ChronoField) else ChronoField[k.upper()]): v for k, v in fields.items()}
    st = style if isinstance(style, ResolverStyle) else ResolverStyle[style.upper()]
    return _chrono(calendar).resolve_date(work, st)
