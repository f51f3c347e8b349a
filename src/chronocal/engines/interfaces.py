"""
chronocal.engines.interfaces
----------------------------
Defines the architectural boundaries between the calendrical backend
(epoch-day arithmetic), the era system (era / year-of-era labels) and the
orchestrating Chronology.

Reference frame:
All absolute day counts are epoch days, day 0 = 1970-01-01 (ISO), shared
by every chronology. All years handed to a backend are the chronology's own
proleptic years.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Tuple

from ..core.fields import ChronoField, ValueRange
from ..core.types import Era, YMD


class CalendarBackendProtocol(Protocol):
    """
    Maps (proleptic-year, month, day) triples of one chronology to epoch days
    and back. Both directions validate and raise DateOutOfRangeError.
    """

    def to_epoch_day(self, year: int, month: int, day: int) -> int:
        ...

    def from_epoch_day(self, epoch_day: int) -> YMD:
        ...

    def month_length(self, year: int, month: int) -> int:
        ...

    def year_length(self, year: int) -> int:
        ...

    def is_leap_year(self, year: int) -> bool:
        ...

    def field_range(self, field: ChronoField) -> Optional[ValueRange]:
        """Chronology-wide range for the field, or None to defer to the ISO range."""
        ...


class EraSystemProtocol(Protocol):
    """
    Maps (era, year-of-era) to proleptic years and back.

    Year-bound systems derive the era from the proleptic year alone;
    date-bound systems (Japanese) need the full date.
    """

    @property
    def current(self) -> Era:
        """The latest era."""
        ...

    def eras(self) -> List[Era]:
        ...

    def era_of(self, value: int) -> Era:
        ...

    def proleptic_year(self, era: Era, year_of_era: int) -> int:
        ...

    def era_of_date(self, year: int, month: int, day: int, epoch_day: int) -> Era:
        ...

    def era_of_year(self, year: int) -> Era:
        """
        Era in force on Jan 1 of `year`. For an era that starts mid-year this
        is the previous era; use era_of_date for the era of a given day.
        """
        ...

    def year_of_era(self, era: Era, year: int) -> int:
        ...

    def era_year_span(self, era: Era, year: int, start: int, end: int) -> Tuple[int, int]:
        """
        Epoch-day span [first, end) of the era-year containing `year`.
        `start`/`end` are the span of the proleptic year itself.
        """
        ...

    def field_range(self, field: ChronoField) -> Optional[ValueRange]:
        ...

    def year_of_era_range(self, era: Era, years: ValueRange) -> ValueRange:
        """Year-of-era range within one era, given the chronology's YEAR range."""
        ...
