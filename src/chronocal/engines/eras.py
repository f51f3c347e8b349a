"""
chronocal.engines.eras
----------------------
Era systems: the mapping between (era, year-of-era) and the chronology's
proleptic year.

  TwoEraSystem       ISO, Minguo, Thai Buddhist (current era y = yoe, prior era y = 1 - yoe)
  SingleEraSystem    Hijrah (y = yoe, only era 1)
  JapaneseEraSystem  date-bound imperial eras, y = era.start_year + yoe - 1
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..core import time as iso
from ..core.errors import DateResolutionError, UnsupportedFieldError
from ..core.fields import ChronoField, ValueRange
from ..core.types import Era, YMD

logger = logging.getLogger(__name__)


def _check_era(era: Era, eras: Sequence[Era]) -> Era:
    if era not in eras:
        raise DateResolutionError(f"Era does not belong to this chronology: {era!r}", field=ChronoField.ERA)
    return era


def _era_of(value: int, by_value: Dict[int, Era]) -> Era:
    try:
        return by_value[value]
    except KeyError:
        raise DateResolutionError(f"Invalid era: {value}", field=ChronoField.ERA, value=value) from None


# ============================================================
# YEAR-BOUND ERAS
# ============================================================

class TwoEraSystem:
    """Era 1 counts years from proleptic year 1 upwards, era 0 counts backwards from year 0."""

    def __init__(self, prior: str, current: str):
        self._eras = [Era(0, prior), Era(1, current)]
        self._by_value = {e.value: e for e in self._eras}

    @property
    def current(self) -> Era:
        return self._eras[1]

    def eras(self) -> List[Era]:
        return list(self._eras)

    def era_of(self, value: int) -> Era:
        return _era_of(value, self._by_value)

    def proleptic_year(self, era: Era, year_of_era: int) -> int:
        _check_era(era, self._eras)
        return year_of_era if era.value == 1 else 1 - year_of_era

    def era_of_date(self, year: int, month: int, day: int, epoch_day: int) -> Era:
        return self.era_of_year(year)

    def era_of_year(self, year: int) -> Era:
        return self._eras[1] if year >= 1 else self._eras[0]

    def year_of_era(self, era: Era, year: int) -> int:
        return year if era.value == 1 else 1 - year

    def era_year_span(self, era: Era, year: int, start: int, end: int) -> Tuple[int, int]:
        return start, end

    def field_range(self, field: ChronoField) -> Optional[ValueRange]:
        if field is ChronoField.ERA:
            return ValueRange.of(0, 1)
        return None

    def year_of_era_range(self, era: Era, years: ValueRange) -> ValueRange:
        return ValueRange.of(1, years.maximum if era.value == 1 else 1 - years.minimum)


class SingleEraSystem:
    """One era; year-of-era is the proleptic year."""

    def __init__(self, name: str, value: int = 1):
        self._era = Era(value, name)

    @property
    def current(self) -> Era:
        return self._era

    def eras(self) -> List[Era]:
        return [self._era]

    def era_of(self, value: int) -> Era:
        return _era_of(value, {self._era.value: self._era})

    def proleptic_year(self, era: Era, year_of_era: int) -> int:
        _check_era(era, [self._era])
        return year_of_era

    def era_of_date(self, year: int, month: int, day: int, epoch_day: int) -> Era:
        return self._era

    def era_of_year(self, year: int) -> Era:
        return self._era

    def year_of_era(self, era: Era, year: int) -> int:
        return year

    def era_year_span(self, era: Era, year: int, start: int, end: int) -> Tuple[int, int]:
        return start, end

    def field_range(self, field: ChronoField) -> Optional[ValueRange]:
        if field is ChronoField.ERA:
            return ValueRange.of(self._era.value, self._era.value)
        return None

    def year_of_era_range(self, era: Era, years: ValueRange) -> ValueRange:
        return ValueRange.of(years.minimum, years.maximum)


# ============================================================
# JAPANESE IMPERIAL ERAS
# ============================================================

JAPANESE_ERAS: Tuple[Era, ...] = (
    Era(-1, "Meiji", "M", (1868, 1, 1)),
    Era(0, "Taisho", "T", (1912, 7, 30)),
    Era(1, "Showa", "S", (1926, 12, 25)),
    Era(2, "Heisei", "H", (1989, 1, 8)),
    Era(3, "Reiwa", "R", (2019, 5, 1)),
)

# Earliest supported date: Meiji 6, when the Gregorian calendar was adopted.
MEIJI_6: YMD = (1873, 1, 1)


@dataclass(frozen=True)
class JapaneseParams:
    """supplemental_era: `name=...,abbr=...,since=yyyy-MM-dd`, appended after Reiwa."""
    supplemental_era: Optional[str] = None

_UNSUPPORTED = frozenset({
    ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH,
    ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR,
    ChronoField.ALIGNED_WEEK_OF_MONTH,
    ChronoField.ALIGNED_WEEK_OF_YEAR,
})

_SUPPLEMENTAL = re.compile(r"^\s*(\w+)\s*=\s*([^,]*?)\s*$")


def parse_supplemental_era(text: str, after: Era) -> Optional[Era]:
    """
    Parse `name=<name>,abbr=<abbr>,since=<yyyy-MM-dd>` into an era following
    `after`. Returns None (with a warning) when the value is unusable.
    """
    props: Dict[str, str] = {}
    for part in text.split(","):
        m = _SUPPLEMENTAL.match(part)
        if m is None:
            logger.warning("ignoring supplemental Japanese era %r: malformed item %r", text, part)
            return None
        props[m.group(1)] = m.group(2)

    name = props.get("name", "")
    since = props.get("since", "")
    if not name or not since:
        logger.warning("ignoring supplemental Japanese era %r: name and since are required", text)
        return None
    m = re.match(r"^(-?\d+)-(\d{2})-(\d{2})$", since)
    if m is None:
        logger.warning("ignoring supplemental Japanese era %r: since must be yyyy-MM-dd", text)
        return None
    y, mo, d = (int(g) for g in m.groups())
    if not (1 <= mo <= 12 and 1 <= d <= iso.month_length(y, mo)):
        logger.warning("ignoring supplemental Japanese era %r: invalid since date", text)
        return None
    if after.since is not None and (y, mo, d) <= after.since:
        logger.warning("ignoring supplemental Japanese era %r: must start after %s", text, after.name)
        return None
    return Era(after.value + 1, name, props.get("abbr", name[:1]), (y, mo, d))


class JapaneseEraSystem:
    """
    Date-bound eras. Year-of-era 1 runs from the era start to Dec 31 of that
    year; later years of the era are whole Gregorian years (the last one
    truncated by the next era).
    """

    def __init__(self, supplemental: Optional[str] = None):
        eras = list(JAPANESE_ERAS)
        if supplemental:
            extra = parse_supplemental_era(supplemental, eras[-1])
            if extra is not None:
                logger.debug("adding supplemental Japanese era %s since %s", extra.name, extra.since)
                eras.append(extra)
        self._eras = eras
        self._by_value = {e.value: e for e in eras}
        self._starts = [iso.to_epoch_day(*e.since) for e in eras]

    @property
    def current(self) -> Era:
        return self._eras[-1]

    def eras(self) -> List[Era]:
        return list(self._eras)

    def era_of(self, value: int) -> Era:
        return _era_of(value, self._by_value)

    def start_epoch_day(self, era: Era) -> int:
        return self._starts[self._eras.index(_check_era(era, self._eras))]

    def end_epoch_day(self, era: Era) -> Optional[int]:
        """Exclusive; None for the current era."""
        i = self._eras.index(_check_era(era, self._eras))
        return self._starts[i + 1] if i + 1 < len(self._starts) else None

    def proleptic_year(self, era: Era, year_of_era: int) -> int:
        _check_era(era, self._eras)
        y = era.since[0] + year_of_era - 1
        if year_of_era == 1:
            return y
        if iso.YEAR_MIN <= y <= iso.YEAR_MAX and self._era_at(iso.to_epoch_day(y, 1, 1)) == era:
            return y
        raise DateResolutionError(
            f"Invalid yearOfEra value: {year_of_era} for era {era}", field=ChronoField.YEAR_OF_ERA, value=year_of_era
        )

    def era_of_date(self, year: int, month: int, day: int, epoch_day: int) -> Era:
        era = self._era_at(epoch_day)
        if era is None:
            raise DateResolutionError(f"Date before the first Japanese era: {year}-{month:02d}-{day:02d}")
        return era

    def era_of_year(self, year: int) -> Era:
        """Era in force on Jan 1 of `year` (used when only YEAR is known)."""
        return self.era_of_date(year, 1, 1, iso.to_epoch_day(year, 1, 1))

    def year_of_era(self, era: Era, year: int) -> int:
        return year - era.since[0] + 1

    def era_year_span(self, era: Era, year: int, start: int, end: int) -> Tuple[int, int]:
        lo = max(start, self.start_epoch_day(era))
        nxt = self.end_epoch_day(era)
        hi = end if nxt is None else min(end, nxt)
        return lo, hi

    def year_of_era_range(self, era: Era, years: ValueRange) -> ValueRange:
        end = self.end_epoch_day(era)
        last = years.maximum if end is None else iso.from_epoch_day(end - 1)[0]
        return ValueRange.of(1, last - era.since[0] + 1)

    def field_range(self, field: ChronoField) -> Optional[ValueRange]:
        if field in _UNSUPPORTED:
            raise UnsupportedFieldError(f"Unsupported field: {field}")
        if field is ChronoField.ERA:
            return ValueRange.of(self._eras[0].value, self._eras[-1].value)
        if field is ChronoField.YEAR:
            return ValueRange.of(MEIJI_6[0], iso.YEAR_MAX)
        if field is ChronoField.YEAR_OF_ERA:
            spans = [b.since[0] - a.since[0] + 1 for a, b in zip(self._eras, self._eras[1:])]
            return ValueRange.of(1, 1, min(spans), iso.YEAR_MAX - self.current.since[0] + 1)
        if field is ChronoField.DAY_OF_YEAR:
            return ValueRange.of(1, 1, self._shortest_era_year(), 366)
        return None

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------

    def _era_at(self, epoch_day: int) -> Optional[Era]:
        for era, start in zip(reversed(self._eras), reversed(self._starts)):
            if epoch_day >= start:
                return era
        return None

    def _shortest_era_year(self) -> int:
        out = 365
        for era, start in zip(self._eras[1:], self._starts[1:]):
            y = era.since[0]
            jan1 = iso.to_epoch_day(y, 1, 1)
            nxt = iso.to_epoch_day(y + 1, 1, 1)
            if start > jan1:
                out = min(out, start - jan1)
            out = min(out, nxt - start)
        return out
