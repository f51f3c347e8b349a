"""
chronocal.engines.iso_backend
-----------------------------
Closed-form backend for the proleptic Gregorian calendar and its affine
derivatives (Minguo, Thai Buddhist, Japanese): the chronology year differs
from the ISO year by a fixed offset and months/days are ISO months/days.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core import time as iso
from ..core.errors import DateOutOfRangeError
from ..core.fields import ChronoField, ValueRange
from ..core.types import YMD


@dataclass(frozen=True)
class IsoLikeParams:
    """
    iso_year = year + year_offset.

    floor: earliest supported ISO date, or None for the full ISO range.
    """
    year_offset: int = 0
    prior_era: str = "BCE"
    current_era: str = "CE"
    floor: Optional[YMD] = None
    floor_message: str = "date before the supported range"


class IsoBackend:
    """
    O(1) leap-year arithmetic. Implements CalendarBackendProtocol.
    """
    def __init__(self, params: IsoLikeParams):
        self.p = params
        self.min_epoch_day = (
            iso.to_epoch_day(*params.floor) if params.floor is not None else iso.EPOCH_DAY_MIN
        )
        self.max_epoch_day = iso.EPOCH_DAY_MAX

        off = params.year_offset
        y_min = (params.floor[0] if params.floor is not None else iso.YEAR_MIN) - off
        y_max = iso.YEAR_MAX - off
        self._ranges = {
            ChronoField.YEAR: ValueRange.of(y_min, y_max),
            ChronoField.PROLEPTIC_MONTH: ValueRange.of(y_min * 12, y_max * 12 + 11),
            ChronoField.EPOCH_DAY: ValueRange.of(self.min_epoch_day, self.max_epoch_day),
        }
        if params.floor is None:
            # two-era year-of-era: current era counts up to y_max, the prior era to 1 - y_min
            lo, hi = sorted((y_max, 1 - y_min))
            self._ranges[ChronoField.YEAR_OF_ERA] = ValueRange.of(1, lo, hi)

    # ---------------------------------------------------------
    # Protocol Methods
    # ---------------------------------------------------------

    def to_epoch_day(self, year: int, month: int, day: int) -> int:
        y = self._iso_year(year)
        ChronoField.MONTH_OF_YEAR.check_valid_value(month)
        ChronoField.DAY_OF_MONTH.check_valid_value(day)
        if day > 28 and day > iso.month_length(y, month):
            if day == 29:
                raise DateOutOfRangeError(
                    f"Invalid date 'February 29' as '{year}' is not a leap year",
                    field=ChronoField.DAY_OF_MONTH, value=day,
                )
            raise DateOutOfRangeError(
                f"Invalid date '{_MONTH_NAMES[month - 1]} {day}'",
                field=ChronoField.DAY_OF_MONTH, value=day,
            )
        e = iso.to_epoch_day(y, month, day)
        self._check_floor(e)
        return e

    def from_epoch_day(self, epoch_day: int) -> YMD:
        if not (iso.EPOCH_DAY_MIN <= epoch_day <= iso.EPOCH_DAY_MAX):
            raise DateOutOfRangeError(
                f"Invalid value for EpochDay: {epoch_day}", field=ChronoField.EPOCH_DAY, value=epoch_day
            )
        self._check_floor(epoch_day)
        y, m, d = iso.from_epoch_day(epoch_day)
        return y - self.p.year_offset, m, d

    def month_length(self, year: int, month: int) -> int:
        return iso.month_length(year + self.p.year_offset, month)

    def year_length(self, year: int) -> int:
        return iso.year_length(year + self.p.year_offset)

    def is_leap_year(self, year: int) -> bool:
        return iso.is_leap(year + self.p.year_offset)

    def field_range(self, field: ChronoField) -> Optional[ValueRange]:
        return self._ranges.get(field)

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------

    def _iso_year(self, year: int) -> int:
        y = year + self.p.year_offset
        if not (iso.YEAR_MIN <= y <= iso.YEAR_MAX):
            raise DateOutOfRangeError(
                f"Invalid value for Year (valid values {self._ranges[ChronoField.YEAR]}): {year}",
                field=ChronoField.YEAR, value=year,
            )
        return y

    def _check_floor(self, epoch_day: int) -> None:
        if epoch_day < self.min_epoch_day:
            raise DateOutOfRangeError(self.p.floor_message, field=ChronoField.EPOCH_DAY, value=epoch_day)


_MONTH_NAMES = (
    "JANUARY", "FEBRUARY", "MARCH", "APRIL", "MAY", "JUNE",
    "JULY", "AUGUST", "SEPTEMBER", "OCTOBER", "NOVEMBER", "DECEMBER",
)
