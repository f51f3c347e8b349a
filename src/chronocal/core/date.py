"""
chronocal.core.date
-------------------
CalendarDate: one immutable date value shared by every chronology.

A date is an epoch day viewed through its chronology; the proleptic
(year, month, day) triple is cached alongside. Era, year-of-era and every
other field are derived on demand from the chronology's era system.

Instances are only built by Chronology factories, which guarantees that
(year, month, day) and epoch_day agree under the chronology's backend.
"""

from __future__ import annotations

import datetime as _dt
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Optional, Tuple, Union

from . import time as iso
from .errors import DateResolutionError, UnsupportedFieldError
from .exact import LONG_MAX, LONG_MIN, add_exact, check_long, floor_div, floor_mod, multiply_exact
from .fields import ChronoField, Unit, ValueRange
from .types import Era

if TYPE_CHECKING:
    from ..engines.chronology import Chronology
    from .datetime import ChronoLocalDateTime
    from .period import ChronoPeriod


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@total_ordering
class CalendarDate:
    __slots__ = ("_chrono", "_epoch_day", "_year", "_month", "_day")

    def __init__(self, chronology: "Chronology", epoch_day: int, year: int, month: int, day: int):
        self._chrono = chronology
        self._epoch_day = epoch_day
        self._year = year
        self._month = month
        self._day = day

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, "_day"):
            raise AttributeError("CalendarDate is immutable")
        object.__setattr__(self, name, value)

    # ---------------------------------------------------------
    # Accessors
    # ---------------------------------------------------------

    @property
    def chronology(self) -> "Chronology":
        return self._chrono

    @property
    def epoch_day(self) -> int:
        return self._epoch_day

    @property
    def proleptic_year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    @property
    def era(self) -> Era:
        return self._chrono.era_system.era_of_date(self._year, self._month, self._day, self._epoch_day)

    @property
    def year_of_era(self) -> int:
        return self._chrono.era_system.year_of_era(self.era, self._year)

    @property
    def day_of_week(self) -> int:
        return iso.day_of_week(self._epoch_day)

    @property
    def day_of_year(self) -> int:
        """Day of the era-year (differs from the proleptic day-of-year only in era change years)."""
        return self._epoch_day - self._era_year_span()[0] + 1

    @property
    def length_of_month(self) -> int:
        return self._chrono.backend.month_length(self._year, self._month)

    @property
    def length_of_year(self) -> int:
        return self._chrono.backend.year_length(self._year)

    @property
    def is_leap_year(self) -> bool:
        return self._chrono.is_leap_year(self._year)

    def get(self, field: ChronoField) -> int:
        if field in _ALIGNED:
            self._chrono.range(field)  # raises for chronologies without aligned weeks
        if field is ChronoField.DAY_OF_WEEK:
            return self.day_of_week
        if field is ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH:
            return (self._day - 1) % 7 + 1
        if field is ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR:
            return (self.day_of_year - 1) % 7 + 1
        if field is ChronoField.DAY_OF_MONTH:
            return self._day
        if field is ChronoField.DAY_OF_YEAR:
            return self.day_of_year
        if field is ChronoField.EPOCH_DAY:
            return self._epoch_day
        if field is ChronoField.ALIGNED_WEEK_OF_MONTH:
            return (self._day - 1) // 7 + 1
        if field is ChronoField.ALIGNED_WEEK_OF_YEAR:
            return (self.day_of_year - 1) // 7 + 1
        if field is ChronoField.MONTH_OF_YEAR:
            return self._month
        if field is ChronoField.PROLEPTIC_MONTH:
            return self._year * 12 + self._month - 1
        if field is ChronoField.YEAR_OF_ERA:
            return self.year_of_era
        if field is ChronoField.YEAR:
            return self._year
        if field is ChronoField.ERA:
            return self.era.value
        raise UnsupportedFieldError(f"Unsupported field: {field}")

    def range(self, field: ChronoField) -> ValueRange:
        """Range of the field refined by this date (e.g. day-of-month 1..length of this month)."""
        if field is ChronoField.DAY_OF_MONTH:
            return ValueRange.of(1, self.length_of_month)
        if field is ChronoField.DAY_OF_YEAR:
            lo, hi = self._era_year_span()
            return ValueRange.of(1, hi - lo)
        if field is ChronoField.ALIGNED_WEEK_OF_MONTH:
            self._chrono.range(field)
            return ValueRange.of(1, 4 if self.length_of_month == 28 else 5)
        if field is ChronoField.YEAR_OF_ERA:
            return self._chrono.year_of_era_range(self.era)
        return self._chrono.range(field)

    # ---------------------------------------------------------
    # Adjustment
    # ---------------------------------------------------------

    def with_field(self, field: ChronoField, value: int) -> "CalendarDate":
        """Return a copy with one field changed; month/year changes clamp the day to the month."""
        self._chrono.range(field).check_valid_value(value, field)
        c = self._chrono
        if field is ChronoField.DAY_OF_WEEK:
            return self.plus_days(value - self.day_of_week)
        if field in (ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH, ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR):
            return self.plus_days(value - self.get(field))
        if field in (ChronoField.ALIGNED_WEEK_OF_MONTH, ChronoField.ALIGNED_WEEK_OF_YEAR):
            return self.plus_weeks(value - self.get(field))
        if field is ChronoField.DAY_OF_MONTH:
            return c.date(self._year, self._month, value)
        if field is ChronoField.DAY_OF_YEAR:
            return c.date_era_year_day(self.era, self.year_of_era, value)
        if field is ChronoField.EPOCH_DAY:
            return c.date_epoch_day(value)
        if field is ChronoField.PROLEPTIC_MONTH:
            return self.plus_months(value - self.get(field))
        if field is ChronoField.MONTH_OF_YEAR:
            return self._previous_valid(self._year, value, self._day)
        if field is ChronoField.YEAR:
            return self._previous_valid(value, self._month, self._day)
        if field is ChronoField.YEAR_OF_ERA:
            era = self.era
            return self._previous_valid(c.proleptic_year(era, value), self._month, self._day, era)
        if field is ChronoField.ERA:
            era = c.era_of(value)
            return self._previous_valid(c.proleptic_year(era, self.year_of_era), self._month, self._day, era)
        raise UnsupportedFieldError(f"Unsupported field: {field}")

    def _previous_valid(self, year: int, month: int, day: int, era: Optional[Era] = None) -> "CalendarDate":
        c = self._chrono
        c.range(ChronoField.YEAR).check_valid_value(year, ChronoField.YEAR)
        c.range(ChronoField.MONTH_OF_YEAR).check_valid_value(month, ChronoField.MONTH_OF_YEAR)
        out = c.date(year, month, min(day, c.backend.month_length(year, month)))
        if era is not None and out.era != era:
            raise DateResolutionError(f"Date {out} is not in era {era}", field=ChronoField.ERA, value=era.value)
        return out

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def plus(self, amount: int, unit: Unit) -> "CalendarDate":
        if unit is Unit.DAYS:
            return self.plus_days(amount)
        if unit is Unit.WEEKS:
            return self.plus_weeks(amount)
        if unit is Unit.MONTHS:
            return self.plus_months(amount)
        if unit is Unit.YEARS:
            return self.plus_years(amount)
        if unit is Unit.DECADES:
            return self.plus_years(multiply_exact(amount, 10))
        if unit is Unit.CENTURIES:
            return self.plus_years(multiply_exact(amount, 100))
        if unit is Unit.MILLENNIA:
            return self.plus_years(multiply_exact(amount, 1000))
        if unit is Unit.ERAS:
            return self.with_field(ChronoField.ERA, add_exact(self.era.value, amount))
        raise UnsupportedFieldError(f"Unsupported unit: {unit}")

    def minus(self, amount: int, unit: Unit) -> "CalendarDate":
        if amount == LONG_MIN:
            return self.plus(LONG_MAX, unit).plus(1, unit)
        return self.plus(-check_long(amount), unit)

    def plus_days(self, days: int) -> "CalendarDate":
        if days == 0:
            return self
        return self._chrono.date_epoch_day(add_exact(self._epoch_day, days))

    def plus_weeks(self, weeks: int) -> "CalendarDate":
        return self.plus_days(multiply_exact(weeks, 7))

    def plus_months(self, months: int) -> "CalendarDate":
        if months == 0:
            return self
        pm = add_exact(self._year * 12 + (self._month - 1), months)
        return self._previous_valid(floor_div(pm, 12), floor_mod(pm, 12) + 1, self._day)

    def plus_years(self, years: int) -> "CalendarDate":
        if years == 0:
            return self
        return self._previous_valid(add_exact(self._year, years), self._month, self._day)

    def until(self, end: "CalendarDate", unit: Unit) -> int:
        """
        Whole units from this date to `end` (exclusive), truncated toward zero.
        `end` is first converted into this date's chronology.
        """
        other = end if end.chronology is self._chrono else self._chrono.date_epoch_day(end.epoch_day)
        if unit is Unit.DAYS:
            return other._epoch_day - self._epoch_day
        if unit is Unit.WEEKS:
            return _trunc_div(other._epoch_day - self._epoch_day, 7)
        if unit is Unit.ERAS:
            return other.era.value - self.era.value
        divisor = {
            Unit.MONTHS: 1, Unit.YEARS: 12, Unit.DECADES: 120, Unit.CENTURIES: 1200, Unit.MILLENNIA: 12000,
        }.get(unit)
        if divisor is None:
            raise UnsupportedFieldError(f"Unsupported unit: {unit}")
        return _trunc_div(self._months_until(other), divisor)

    def until_period(self, end: "CalendarDate") -> "ChronoPeriod":
        """
        Years, months and days from this date to `end` (exclusive), all with
        the same sign. `end` is first converted into this date's chronology.
        """
        other = end if end.chronology is self._chrono else self._chrono.date_epoch_day(end.epoch_day)
        total = self._months_until(other)
        if total > 0:
            days = other._epoch_day - self.plus_months(total)._epoch_day
        elif total < 0:
            days = other._day - self._day
            if days > 0:
                days -= other.length_of_month
        else:
            days = other._epoch_day - self._epoch_day
        return self._chrono.period(0, total, days).normalized()

    def _months_until(self, end: "CalendarDate") -> int:
        packed1 = self.get(ChronoField.PROLEPTIC_MONTH) * 32 + self._day
        packed2 = end.get(ChronoField.PROLEPTIC_MONTH) * 32 + end._day
        return _trunc_div(packed2 - packed1, 32)

    # ---------------------------------------------------------
    # Composition & conversion
    # ---------------------------------------------------------

    def at_time(self, t: Union[_dt.time, int]) -> "ChronoLocalDateTime":
        """Combine with a datetime.time or a nano-of-day."""
        from .datetime import ChronoLocalDateTime
        return ChronoLocalDateTime.of(self, t)

    def to_date(self) -> _dt.date:
        """Standard library (ISO) date; years 1..9999 only."""
        return iso.date_of(self._epoch_day)

    def is_before(self, other: "CalendarDate") -> bool:
        """Timeline comparison, ignoring the chronology."""
        return self._epoch_day < other.epoch_day

    def is_after(self, other: "CalendarDate") -> bool:
        return self._epoch_day > other.epoch_day

    def is_equal(self, other: "CalendarDate") -> bool:
        return self._epoch_day == other.epoch_day

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------

    def _era_year_span(self) -> Tuple[int, int]:
        b = self._chrono.backend
        start = b.to_epoch_day(self._year, 1, 1)
        end = start + b.year_length(self._year)
        return self._chrono.era_system.era_year_span(self.era, self._year, start, end)

    # ---------------------------------------------------------
    # Value semantics
    # ---------------------------------------------------------

    def _key(self):
        return self._chrono.id, self._epoch_day

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "CalendarDate") -> bool:
        if not isinstance(other, CalendarDate):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        c = self._chrono
        if c.calendar_type == "iso8601":
            return _iso_format(self._year, self._month, self._day)
        return f"{c.id} {self.era} {self.year_of_era}-{self._month:02d}-{self._day:02d}"

    def __repr__(self) -> str:
        return f"CalendarDate({self._chrono.id!r}, {self._year}, {self._month}, {self._day})"


_ALIGNED = frozenset({
    ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH,
    ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR,
    ChronoField.ALIGNED_WEEK_OF_MONTH,
    ChronoField.ALIGNED_WEEK_OF_YEAR,
})


def _iso_format(y: int, m: int, d: int) -> str:
    if abs(y) < 1000:
        ys = f"-{abs(y):04d}" if y < 0 else f"{y:04d}"
    else:
        ys = f"+{y}" if y > 9999 else str(y)
    return f"{ys}-{m:02d}-{d:02d}"
