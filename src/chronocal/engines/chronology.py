"""
chronocal.engines.chronology
----------------------------
The Orchestrator. Binds a calendrical backend (epoch-day arithmetic), an era
system (era / year-of-era labels) and a field resolver into one calendar
system, and is the only factory for CalendarDate values.
"""

from __future__ import annotations

import datetime as _dt
from functools import total_ordering
from typing import Any, Callable, Dict, List, Optional, Union

from ..core import time as iso
from ..core.date import CalendarDate
from ..core.errors import DateOutOfRangeError, DateResolutionError, UnsupportedFieldError
from ..core.fields import ChronoField, ResolverStyle, ValueRange
from ..core.period import ChronoPeriod
from ..core.types import Era
from .interfaces import CalendarBackendProtocol, EraSystemProtocol
from .resolver import FieldMap, FieldResolver


@total_ordering
class Chronology:
    """
    One calendar system. Immutable after construction; one instance per
    variant, shared by every date it creates.
    """
    def __init__(
        self,
        id: str,
        calendar_type: Optional[str],
        backend: CalendarBackendProtocol,
        eras: EraSystemProtocol,
        resolver: Callable[["Chronology"], FieldResolver] = FieldResolver,
    ):
        self.id = id
        self.calendar_type = calendar_type
        self.backend = backend
        self.era_system = eras
        self.resolver = resolver(self)

    # ---------------------------------------------------------
    # Date factories
    # ---------------------------------------------------------

    def date(self, year: int, month: int, day: int) -> CalendarDate:
        """Date from the proleptic year, month and day-of-month."""
        e = self.backend.to_epoch_day(year, month, day)
        return CalendarDate(self, e, year, month, day)

    def date_era(self, era: Era, year_of_era: int, month: int, day: int) -> CalendarDate:
        """Date from era, year-of-era, month and day; the date must lie in `era`."""
        d = self.date(self.proleptic_year(era, year_of_era), month, day)
        if d.era != era:
            raise DateResolutionError(
                f"year, month, and day not valid for Era: {era} {year_of_era}-{month:02d}-{day:02d}",
                field=ChronoField.ERA, value=era.value,
            )
        return d

    def date_year_day(self, year: int, day_of_year: int) -> CalendarDate:
        """Date from the proleptic year and the proleptic day-of-year."""
        start = self.backend.to_epoch_day(year, 1, 1)
        n = self.backend.year_length(year)
        if not (1 <= day_of_year <= n):
            if day_of_year == n + 1 == 366:
                msg = f"Invalid date 'DayOfYear 366' as '{year}' is not a leap year"
            else:
                msg = f"Invalid value for DayOfYear (valid values 1 - {n}): {day_of_year}"
            raise DateOutOfRangeError(msg, field=ChronoField.DAY_OF_YEAR, value=day_of_year)
        return self.date_epoch_day(start + day_of_year - 1)

    def date_era_year_day(self, era: Era, year_of_era: int, day_of_year: int) -> CalendarDate:
        """
        Date from era, year-of-era and day-of-year, where the day-of-year counts
        from the start of the era-year (the era start in an era's first year).
        """
        y = self.proleptic_year(era, year_of_era)
        start = self.backend.to_epoch_day(y, 1, 1)
        lo, hi = self.era_system.era_year_span(era, y, start, start + self.backend.year_length(y))
        e = lo + day_of_year - 1
        if day_of_year < 1 or e >= hi:
            raise DateOutOfRangeError(
                f"Invalid day of year {day_of_year} for {era} {year_of_era} (valid values 1 - {hi - lo})",
                field=ChronoField.DAY_OF_YEAR, value=day_of_year,
            )
        return self.date_epoch_day(e)

    def date_epoch_day(self, epoch_day: int) -> CalendarDate:
        y, m, d = self.backend.from_epoch_day(epoch_day)
        return CalendarDate(self, epoch_day, y, m, d)

    def date_now(self, tz: Optional[_dt.tzinfo] = None) -> CalendarDate:
        """Today in the given zone (system local time when None)."""
        return self.date_epoch_day(iso.epoch_day_of(_dt.datetime.now(tz).date()))

    def date_from(self, value: Union[CalendarDate, _dt.date]) -> CalendarDate:
        """The same day on the timeline, in this chronology."""
        if isinstance(value, CalendarDate):
            if value.chronology is self:
                return value
            return self.date_epoch_day(value.epoch_day)
        if isinstance(value, _dt.datetime):
            value = value.date()
        if isinstance(value, _dt.date):
            return self.date_epoch_day(iso.epoch_day_of(value))
        raise TypeError(f"Cannot obtain a {self.id} date from {type(value).__name__}")

    # ---------------------------------------------------------
    # Eras and years
    # ---------------------------------------------------------

    def eras(self) -> List[Era]:
        return self.era_system.eras()

    def era_of(self, value: int) -> Era:
        return self.era_system.era_of(value)

    @property
    def current_era(self) -> Era:
        return self.era_system.current

    def proleptic_year(self, era: Era, year_of_era: int) -> int:
        return self.era_system.proleptic_year(era, year_of_era)

    def is_leap_year(self, year: int) -> bool:
        return self.backend.is_leap_year(year)

    # ---------------------------------------------------------
    # Field ranges
    # ---------------------------------------------------------

    def range(self, field: ChronoField) -> ValueRange:
        """
        Chronology-wide range of a field. Raises UnsupportedFieldError for
        fields this chronology does not define.
        """
        r = self.era_system.field_range(field)
        if r is None:
            r = self.backend.field_range(field)
        return r if r is not None else field.range

    def year_of_era_range(self, era: Era) -> ValueRange:
        return self.era_system.year_of_era_range(era, self.range(ChronoField.YEAR))

    def is_supported(self, field: ChronoField) -> bool:
        try:
            self.range(field)
        except UnsupportedFieldError:
            return False
        return True

    # ---------------------------------------------------------
    # Resolution and composition
    # ---------------------------------------------------------

    def resolve_date(self, fields: FieldMap, style: ResolverStyle = ResolverStyle.SMART) -> Optional[CalendarDate]:
        """
        Resolve a field map into a date, consuming the fields used.
        Returns None when the fields are insufficient.
        """
        return self.resolver.resolve(fields, style)

    def local_date_time(self, date: Union[CalendarDate, _dt.date], t: Union[_dt.time, int] = 0):
        from ..core.datetime import ChronoLocalDateTime
        return ChronoLocalDateTime.of(self.date_from(date), t)

    def period(self, years: int = 0, months: int = 0, days: int = 0) -> ChronoPeriod:
        return ChronoPeriod(self, years, months, days)

    def zoned_date_time(self, epoch_second: int, zone: _dt.tzinfo, nano: int = 0):
        """The instant `epoch_second` (+ `nano`) seen in `zone`."""
        from ..core.datetime import ChronoZonedDateTime
        return ChronoZonedDateTime.of_instant(self, epoch_second, zone, nano)

    # ---------------------------------------------------------
    # Info
    # ---------------------------------------------------------

    def info(self) -> Dict[str, Any]:
        years = self.range(ChronoField.YEAR)
        return {
            "id": self.id,
            "calendar_type": self.calendar_type,
            "backend": type(self.backend).__name__,
            "eras": [e.name for e in self.eras()],
            "year_range": (years.minimum, years.maximum),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chronology):
            return NotImplemented
        return self.id == other.id

    def __lt__(self, other: "Chronology") -> bool:
        if not isinstance(other, Chronology):
            return NotImplemented
        return self.id < other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"Chronology({self.id!r})"
