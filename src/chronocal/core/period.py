"""
chronocal.core.period
---------------------
A date-based amount of time (years, months, days) tied to one chronology.
Produced by `CalendarDate.until_period` and `Chronology.period`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict

from .errors import DateResolutionError, UnsupportedFieldError
from .exact import add_exact, multiply_exact, to_int_exact
from .fields import ChronoField, Unit

if TYPE_CHECKING:
    from ..engines.chronology import Chronology
    from .date import CalendarDate


def _trunc_divmod(a: int, b: int):
    q = abs(a) // b
    q = q if a >= 0 else -q
    return q, a - q * b


@dataclass(frozen=True)
class ChronoPeriod:
    chronology: "Chronology"
    years: int = 0
    months: int = 0
    days: int = 0

    def __post_init__(self) -> None:
        for v in (self.years, self.months, self.days):
            to_int_exact(v)

    @property
    def units(self):
        return (Unit.YEARS, Unit.MONTHS, Unit.DAYS)

    def get(self, unit: Unit) -> int:
        if unit is Unit.YEARS:
            return self.years
        if unit is Unit.MONTHS:
            return self.months
        if unit is Unit.DAYS:
            return self.days
        raise UnsupportedFieldError(f"Unsupported unit: {unit}")

    def as_dict(self) -> Dict[str, int]:
        return {"years": self.years, "months": self.months, "days": self.days}

    def is_zero(self) -> bool:
        return self.years == 0 and self.months == 0 and self.days == 0

    def is_negative(self) -> bool:
        return self.years < 0 or self.months < 0 or self.days < 0

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def plus(self, other: "ChronoPeriod") -> "ChronoPeriod":
        self._check_chronology(other.chronology)
        return ChronoPeriod(
            self.chronology,
            add_exact(self.years, other.years),
            add_exact(self.months, other.months),
            add_exact(self.days, other.days),
        )

    def minus(self, other: "ChronoPeriod") -> "ChronoPeriod":
        return self.plus(other.negated())

    def multiplied_by(self, scalar: int) -> "ChronoPeriod":
        if self.is_zero() or scalar == 1:
            return self
        return ChronoPeriod(
            self.chronology,
            multiply_exact(self.years, scalar),
            multiply_exact(self.months, scalar),
            multiply_exact(self.days, scalar),
        )

    def negated(self) -> "ChronoPeriod":
        return self.multiplied_by(-1)

    def normalized(self) -> "ChronoPeriod":
        """Carry whole years out of the months; days are left alone."""
        n = self._months_per_year()
        total = add_exact(multiply_exact(self.years, n), self.months)
        years, months = _trunc_divmod(total, n)
        if years == self.years and months == self.months:
            return self
        return ChronoPeriod(self.chronology, to_int_exact(years), months, self.days)

    def add_to(self, date: "CalendarDate") -> "CalendarDate":
        self._check_chronology(date.chronology)
        total = add_exact(multiply_exact(self.years, self._months_per_year()), self.months)
        return date.plus_months(total).plus_days(self.days)

    def subtract_from(self, date: "CalendarDate") -> "CalendarDate":
        return self.negated().add_to(date)

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------

    def _months_per_year(self) -> int:
        return self.chronology.range(ChronoField.MONTH_OF_YEAR).maximum

    def _check_chronology(self, other: "Chronology") -> None:
        if other != self.chronology:
            raise DateResolutionError(
                f"Chronology mismatch, expected: {self.chronology.id}, actual: {other.id}"
            )

    def __str__(self) -> str:
        if self.is_zero():
            return f"{self.chronology.id} P0D"
        parts = [f"{v}{u}" for v, u in ((self.years, "Y"), (self.months, "M"), (self.days, "D")) if v != 0]
        return f"{self.chronology.id} P{''.join(parts)}"
