from __future__ import annotations
from datetime import date
from typing import Tuple

# Day 0 of the epoch-day count is 1970-01-01 (JDN 2440588).
JDN_UNIX_EPOCH = 2440588

YEAR_MIN = -999_999_999
YEAR_MAX = 999_999_999

DAYS_PER_WEEK = 7

_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap(year: int) -> bool:
    """Proleptic Gregorian leap-year rule."""
    return (year & 3) == 0 and (year % 100 != 0 or year % 400 == 0)


def month_length(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap(year) else 28
    return _MONTH_LENGTHS[month - 1]


def year_length(year: int) -> int:
    return 366 if is_leap(year) else 365


def to_jdn(year: int, month: int, day: int) -> int:
    """Proleptic Gregorian (year, month, day) to Julian Day Number. No validation."""
    a = (14 - month) // 12
    y2 = year + 4800 - a
    m2 = month + 12 * a - 3
    return day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def from_jdn(jdn: int) -> Tuple[int, int, int]:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def to_epoch_day(year: int, month: int, day: int) -> int:
    return to_jdn(year, month, day) - JDN_UNIX_EPOCH


def from_epoch_day(epoch_day: int) -> Tuple[int, int, int]:
    return from_jdn(epoch_day + JDN_UNIX_EPOCH)


def day_of_year(year: int, month: int, day: int) -> int:
    return to_epoch_day(year, month, day) - to_epoch_day(year, 1, 1) + 1


def day_of_week(epoch_day: int) -> int:
    """ISO day-of-week, 1=Monday..7=Sunday. 1970-01-01 was a Thursday."""
    return (epoch_day + 3) % DAYS_PER_WEEK + 1


EPOCH_DAY_MIN = to_epoch_day(YEAR_MIN, 1, 1)
EPOCH_DAY_MAX = to_epoch_day(YEAR_MAX, 12, 31)


def epoch_day_of(d: date) -> int:
    """Epoch day of a standard library date."""
    return d.toordinal() - date(1970, 1, 1).toordinal()


def date_of(epoch_day: int) -> date:
    """Standard library date for an epoch day (years 1..9999 only)."""
    return date.fromordinal(epoch_day + date(1970, 1, 1).toordinal())
