"""
chronocal.engines.hijrah_backend
--------------------------------
Table-driven backend for Hijrah (Islamic lunar) calendar variants.

The variant's configuration resource lists the length of every month for a
contiguous range of years. It is turned into an epoch-month table: the epoch
day of the first day of each month, plus one sentinel for the day after the
last month.

    month_index = year*12 + (month-1) - first_year*12
    epoch_day   = table[month_index] + day - 1

The table is built lazily, exactly once per backend, and published as an
immutable tuple. A failed build is not cached so the caller may retry.
"""

from __future__ import annotations

import bisect
import logging
import re
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core import time as iso
from ..core.config import CalendarConfig
from ..core.errors import CalendarConfigError, DateOutOfRangeError
from ..core.fields import ChronoField, ValueRange
from ..core.types import YMD
from .properties import load_properties

logger = logging.getLogger(__name__)

KEY_ID = "id"
KEY_TYPE = "type"
KEY_VERSION = "version"
KEY_ISO_START = "iso-start"

MIN_MONTH_LENGTH = 29
MAX_MONTH_LENGTH = 32

_ISO_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


@dataclass(frozen=True)
class HijrahParams:
    variant_id: str
    calendar_type: str
    resource: str
    config: CalendarConfig = field(default_factory=CalendarConfig)


@dataclass(frozen=True)
class HijrahTable:
    version: str
    first_year: int
    last_year: int
    epoch_months: Tuple[int, ...]
    min_month_length: int
    max_month_length: int
    min_year_length: int
    max_year_length: int

    @property
    def min_epoch_day(self) -> int:
        return self.epoch_months[0]

    @property
    def max_epoch_day(self) -> int:
        """Exclusive upper bound (first day after the table)."""
        return self.epoch_months[-1]


def parse_iso_date(text: str, *, resource: str, key: str) -> YMD:
    m = _ISO_DATE.match(text)
    if m is None:
        raise CalendarConfigError(f"{resource}: {key}: date must be yyyy-MM-dd, got {text!r}", resource=resource, key=key)
    y, mo, d = (int(g) for g in m.groups())
    if not (1 <= mo <= 12) or not (1 <= d <= iso.month_length(y, mo)):
        raise CalendarConfigError(f"{resource}: {key}: invalid date {text!r}", resource=resource, key=key)
    return y, mo, d


def _parse_months(line: str, *, resource: str, key: str) -> List[int]:
    parts = line.split()
    if len(parts) != 12:
        raise CalendarConfigError(
            f"{resource}: year {key}: wrong number of months: {len(parts)}", resource=resource, key=key
        )
    try:
        return [int(p) for p in parts]
    except ValueError:
        raise CalendarConfigError(
            f"{resource}: year {key}: month lengths must be integers: {line!r}", resource=resource, key=key
        ) from None


def build_table(props: Dict[str, str], *, variant_id: str, calendar_type: str, resource: str) -> HijrahTable:
    """
    Validate a parsed configuration and build the epoch-month table.
    Raises CalendarConfigError naming the resource and offending key.
    """
    years: Dict[int, List[int]] = {}
    for key, value in props.items():
        if key in (KEY_ID, KEY_TYPE, KEY_VERSION, KEY_ISO_START):
            continue
        try:
            year = int(key)
        except ValueError:
            raise CalendarConfigError(f"{resource}: bad key: {key!r}", resource=resource, key=key) from None
        years[year] = _parse_months(value, resource=resource, key=key)

    if props.get(KEY_ID) != variant_id:
        raise CalendarConfigError(
            f"{resource}: configuration is for a different calendar: {props.get(KEY_ID)!r}",
            resource=resource, key=KEY_ID,
        )
    if props.get(KEY_TYPE) != calendar_type:
        raise CalendarConfigError(
            f"{resource}: configuration is for a different calendar type: {props.get(KEY_TYPE)!r}",
            resource=resource, key=KEY_TYPE,
        )
    version = props.get(KEY_VERSION, "")
    if not version:
        raise CalendarConfigError(f"{resource}: configuration does not contain a version", resource=resource, key=KEY_VERSION)
    start = props.get(KEY_ISO_START, "")
    if not start:
        raise CalendarConfigError(
            f"{resource}: configuration does not contain an ISO start date", resource=resource, key=KEY_ISO_START
        )
    start_day = iso.to_epoch_day(*parse_iso_date(start, resource=resource, key=KEY_ISO_START))

    if not years:
        raise CalendarConfigError(f"{resource}: configuration contains no years", resource=resource)
    first, last = min(years), max(years)
    missing = [y for y in range(first, last + 1) if y not in years]
    if missing:
        raise CalendarConfigError(
            f"{resource}: years are not contiguous, missing {missing[0]}", resource=resource, key=str(missing[0])
        )

    epoch_months: List[int] = []
    e = start_day
    for y in range(first, last + 1):
        for length in years[y]:
            if not (MIN_MONTH_LENGTH <= length <= MAX_MONTH_LENGTH):
                raise CalendarConfigError(
                    f"{resource}: invalid month length {length} in year {y}", resource=resource, key=str(y)
                )
            epoch_months.append(e)
            e += length
    epoch_months.append(e)

    month_lengths = [b - a for a, b in zip(epoch_months, epoch_months[1:])]
    year_lengths = [epoch_months[i + 12] - epoch_months[i] for i in range(0, len(epoch_months) - 1, 12)]
    return HijrahTable(
        version=version,
        first_year=first,
        last_year=last,
        epoch_months=tuple(epoch_months),
        min_month_length=min(month_lengths),
        max_month_length=max(month_lengths),
        min_year_length=min(year_lengths),
        max_year_length=max(year_lengths),
    )


class HijrahBackend:
    """
    Implements CalendarBackendProtocol over a lazily built HijrahTable.
    """
    def __init__(self, params: HijrahParams):
        self.p = params
        self._lock = threading.Lock()
        self._table: Optional[HijrahTable] = None

    # ---------------------------------------------------------
    # Table lifecycle
    # ---------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._table is not None

    def table(self) -> HijrahTable:
        t = self._table
        if t is not None:
            return t
        with self._lock:
            if self._table is None:
                self._table = self._load()
            return self._table

    def _load(self) -> HijrahTable:
        p = self.p
        logger.debug("building Hijrah table for %s from %s", p.variant_id, p.resource)
        props = load_properties(p.resource, p.config)
        t = build_table(props, variant_id=p.variant_id, calendar_type=p.calendar_type, resource=p.resource)
        logger.debug(
            "Hijrah %s v%s: years %d..%d, epoch days [%d, %d)",
            p.variant_id, t.version, t.first_year, t.last_year, t.min_epoch_day, t.max_epoch_day,
        )
        return t

    # ---------------------------------------------------------
    # Protocol Methods
    # ---------------------------------------------------------

    def to_epoch_day(self, year: int, month: int, day: int) -> int:
        t = self.table()
        idx = self._month_index(t, year, month)
        start = t.epoch_months[idx]
        length = t.epoch_months[idx + 1] - start
        if not (1 <= day <= length):
            raise DateOutOfRangeError(
                f"Invalid Hijrah day of month: {day}", field=ChronoField.DAY_OF_MONTH, value=day
            )
        return start + day - 1

    def from_epoch_day(self, epoch_day: int) -> YMD:
        t = self.table()
        if not (t.min_epoch_day <= epoch_day < t.max_epoch_day):
            raise DateOutOfRangeError(
                f"Hijrah date out of range: epoch day {epoch_day}", field=ChronoField.EPOCH_DAY, value=epoch_day
            )
        idx = bisect.bisect_right(t.epoch_months, epoch_day) - 1
        return t.first_year + idx // 12, idx % 12 + 1, epoch_day - t.epoch_months[idx] + 1

    def month_length(self, year: int, month: int) -> int:
        t = self.table()
        idx = self._month_index(t, year, month)
        return t.epoch_months[idx + 1] - t.epoch_months[idx]

    def year_length(self, year: int) -> int:
        t = self.table()
        idx = self._month_index(t, year, 1)
        return t.epoch_months[idx + 12] - t.epoch_months[idx]

    def is_leap_year(self, year: int) -> bool:
        return self.year_length(year) > 354

    def field_range(self, f: ChronoField) -> Optional[ValueRange]:
        t = self.table()
        if f is ChronoField.DAY_OF_MONTH:
            return ValueRange.of(1, 1, t.min_month_length, t.max_month_length)
        if f is ChronoField.DAY_OF_YEAR:
            return ValueRange.of(1, t.max_year_length)
        if f is ChronoField.ALIGNED_WEEK_OF_MONTH:
            return ValueRange.of(1, 5)
        if f in (ChronoField.YEAR, ChronoField.YEAR_OF_ERA):
            return ValueRange.of(t.first_year, t.last_year)
        if f is ChronoField.ERA:
            return ValueRange.of(1, 1)
        if f is ChronoField.PROLEPTIC_MONTH:
            return ValueRange.of(t.first_year * 12, t.last_year * 12 + 11)
        if f is ChronoField.EPOCH_DAY:
            return ValueRange.of(t.min_epoch_day, t.max_epoch_day - 1)
        return None

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------

    @staticmethod
    def _month_index(t: HijrahTable, year: int, month: int) -> int:
        if not (t.first_year <= year <= t.last_year):
            raise DateOutOfRangeError(
                f"Invalid Hijrah year: {year} (valid {t.first_year} - {t.last_year})",
                field=ChronoField.YEAR, value=year,
            )
        if not (1 <= month <= 12):
            raise DateOutOfRangeError(f"Invalid Hijrah month: {month}", field=ChronoField.MONTH_OF_YEAR, value=month)
        return year * 12 + (month - 1) - t.first_year * 12
