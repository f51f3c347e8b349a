"""
chronocal.core.fields
---------------------
Closed set of calendar field kinds, their value ranges, the resolver
strictness modes and the arithmetic units understood by dates and date-times.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import DateOutOfRangeError
from .exact import INT_MAX, INT_MIN
from .time import EPOCH_DAY_MAX, EPOCH_DAY_MIN, YEAR_MAX, YEAR_MIN


@dataclass(frozen=True)
class ValueRange:
    """
    Range of valid values for a field:
      minimum <= largest_minimum <= smallest_maximum <= maximum.

    Most fields have a fixed minimum; the maximum can vary with context
    (28..31 days in a month), hence the two maxima.
    """
    minimum: int
    largest_minimum: int
    smallest_maximum: int
    maximum: int

    def __post_init__(self) -> None:
        if self.minimum > self.largest_minimum:
            raise ValueError("Smallest minimum value must be less than largest minimum value")
        if self.smallest_maximum > self.maximum:
            raise ValueError("Smallest maximum value must be less than largest maximum value")
        if self.largest_minimum > self.maximum:
            raise ValueError("Minimum value must be less than maximum value")

    @staticmethod
    def of(minimum: int, *rest: int) -> "ValueRange":
        """of(min, max) | of(min, smallest_max, max) | of(min, largest_min, smallest_max, max)"""
        if len(rest) == 1:
            return ValueRange(minimum, minimum, rest[0], rest[0])
        if len(rest) == 2:
            return ValueRange(minimum, minimum, rest[0], rest[1])
        if len(rest) == 3:
            return ValueRange(minimum, rest[0], rest[1], rest[2])
        raise TypeError("ValueRange.of takes 2, 3 or 4 bounds")

    @property
    def is_fixed(self) -> bool:
        return self.minimum == self.largest_minimum and self.smallest_maximum == self.maximum

    @property
    def is_int_value(self) -> bool:
        return self.minimum >= INT_MIN and self.maximum <= INT_MAX

    def is_valid_value(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def check_valid_value(self, value: int, field: Any = None) -> int:
        if not self.is_valid_value(value):
            raise DateOutOfRangeError(_range_message(field, value, self), field=field, value=value)
        return value

    def check_valid_int_value(self, value: int, field: Any = None) -> int:
        if not (self.is_int_value and self.is_valid_value(value)):
            raise DateOutOfRangeError(_range_message(field, value, self), field=field, value=value)
        return value

    def __str__(self) -> str:
        lo = f"{self.minimum}" if self.minimum == self.largest_minimum else f"{self.minimum}/{self.largest_minimum}"
        hi = f"{self.maximum}" if self.smallest_maximum == self.maximum else f"{self.smallest_maximum}/{self.maximum}"
        return f"{lo} - {hi}"


def _range_message(field: Any, value: int, r: ValueRange) -> str:
    if field is not None:
        return f"Invalid value for {field} (valid values {r}): {value}"
    return f"Invalid value (valid values {r}): {value}"


class ResolverStyle(Enum):
    LENIENT = "lenient"
    SMART = "smart"
    STRICT = "strict"


class ChronoField(Enum):
    """The date fields understood by the resolution engine."""
    DAY_OF_WEEK = "DayOfWeek"
    ALIGNED_DAY_OF_WEEK_IN_MONTH = "AlignedDayOfWeekInMonth"
    ALIGNED_DAY_OF_WEEK_IN_YEAR = "AlignedDayOfWeekInYear"
    DAY_OF_MONTH = "DayOfMonth"
    DAY_OF_YEAR = "DayOfYear"
    EPOCH_DAY = "EpochDay"
    ALIGNED_WEEK_OF_MONTH = "AlignedWeekOfMonth"
    ALIGNED_WEEK_OF_YEAR = "AlignedWeekOfYear"
    MONTH_OF_YEAR = "MonthOfYear"
    PROLEPTIC_MONTH = "ProlepticMonth"
    YEAR_OF_ERA = "YearOfEra"
    YEAR = "Year"
    ERA = "Era"

    @property
    def range(self) -> ValueRange:
        """ISO range of the field; chronologies refine this."""
        return _ISO_RANGES[self]

    def check_valid_value(self, value: int) -> int:
        return self.range.check_valid_value(value, self)

    def check_valid_int_value(self, value: int) -> int:
        return self.range.check_valid_int_value(value, self)

    def __str__(self) -> str:
        return self.value


_ISO_RANGES = {
    ChronoField.DAY_OF_WEEK: ValueRange.of(1, 7),
    ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH: ValueRange.of(1, 7),
    ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR: ValueRange.of(1, 7),
    ChronoField.DAY_OF_MONTH: ValueRange.of(1, 28, 31),
    ChronoField.DAY_OF_YEAR: ValueRange.of(1, 365, 366),
    ChronoField.EPOCH_DAY: ValueRange.of(EPOCH_DAY_MIN, EPOCH_DAY_MAX),
    ChronoField.ALIGNED_WEEK_OF_MONTH: ValueRange.of(1, 4, 5),
    ChronoField.ALIGNED_WEEK_OF_YEAR: ValueRange.of(1, 53),
    ChronoField.MONTH_OF_YEAR: ValueRange.of(1, 12),
    ChronoField.PROLEPTIC_MONTH: ValueRange.of(YEAR_MIN * 12, YEAR_MAX * 12 + 11),
    ChronoField.YEAR_OF_ERA: ValueRange.of(1, YEAR_MAX, YEAR_MAX + 1),
    ChronoField.YEAR: ValueRange.of(YEAR_MIN, YEAR_MAX),
    ChronoField.ERA: ValueRange.of(0, 1),
}


NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = NANOS_PER_SECOND * 60
NANOS_PER_HOUR = NANOS_PER_MINUTE * 60
NANOS_PER_DAY = NANOS_PER_HOUR * 24
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
MINUTES_PER_DAY = 1440
HOURS_PER_DAY = 24
MICROS_PER_DAY = 86_400_000_000
MILLIS_PER_DAY = 86_400_000


class Unit(Enum):
    NANOS = "Nanos"
    MICROS = "Micros"
    MILLIS = "Millis"
    SECONDS = "Seconds"
    MINUTES = "Minutes"
    HOURS = "Hours"
    HALF_DAYS = "HalfDays"
    DAYS = "Days"
    WEEKS = "Weeks"
    MONTHS = "Months"
    YEARS = "Years"
    DECADES = "Decades"
    CENTURIES = "Centuries"
    MILLENNIA = "Millennia"
    ERAS = "Eras"

    @property
    def is_date_based(self) -> bool:
        return self in _DATE_UNITS

    @property
    def is_time_based(self) -> bool:
        return not self.is_date_based

    def __str__(self) -> str:
        return self.value


_DATE_UNITS = frozenset({
    Unit.DAYS, Unit.WEEKS, Unit.MONTHS, Unit.YEARS,
    Unit.DECADES, Unit.CENTURIES, Unit.MILLENNIA, Unit.ERAS,
})
