"""
chronocal.core.datetime
-----------------------
Composition of a CalendarDate with a time of day and a time zone.

  ChronoLocalDateTime   (date, nano_of_day)            no zone, no instant
  ChronoZonedDateTime   (local date-time, offset, zone) one instant

Time of day is held as nanoseconds since midnight, so sub-microsecond
precision survives even though datetime.time stops at microseconds. Zone
rules come from any datetime.tzinfo (zoneinfo.ZoneInfo, datetime.timezone);
they are consulted through Python's fold convention, so the local date must
fall in ISO years 1..9999 whenever a zone is involved.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple, Union

from . import time as iso
from .date import CalendarDate, _trunc_div
from .errors import DateOutOfRangeError, UnsupportedFieldError
from .exact import LONG_MAX, LONG_MIN, add_exact, check_long, floor_div, floor_mod, multiply_exact
from .fields import (
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
    SECONDS_PER_DAY,
    Unit,
)

# Nanoseconds per time-based unit.
_UNIT_NANOS = {
    Unit.NANOS: 1,
    Unit.MICROS: 1_000,
    Unit.MILLIS: 1_000_000,
    Unit.SECONDS: NANOS_PER_SECOND,
    Unit.MINUTES: NANOS_PER_MINUTE,
    Unit.HOURS: NANOS_PER_HOUR,
    Unit.HALF_DAYS: NANOS_PER_HOUR * 12,
}


def nano_of_day_of(t: _dt.time) -> int:
    secs = t.hour * 3600 + t.minute * 60 + t.second
    return secs * NANOS_PER_SECOND + t.microsecond * 1_000


def time_of(nano_of_day: int) -> _dt.time:
    """datetime.time for a nano-of-day; nanoseconds below a microsecond are dropped."""
    secs, nanos = divmod(nano_of_day, NANOS_PER_SECOND)
    h, rem = divmod(secs, 3600)
    m, s = divmod(rem, 60)
    return _dt.time(h, m, s, nanos // 1_000)


def _format_time(nano_of_day: int) -> str:
    secs, nanos = divmod(nano_of_day, NANOS_PER_SECOND)
    h, rem = divmod(secs, 3600)
    m, s = divmod(rem, 60)
    out = f"{h:02d}:{m:02d}"
    if s or nanos:
        out += f":{s:02d}"
        if nanos:
            frac = f"{nanos:09d}"
            out += "." + (frac[:3] if nanos % 1_000_000 == 0 else frac[:6] if nanos % 1_000 == 0 else frac)
    return out


def _format_offset(seconds: int) -> str:
    if seconds == 0:
        return "Z"
    sign = "+" if seconds > 0 else "-"
    h, rem = divmod(abs(seconds), 3600)
    m, s = divmod(rem, 60)
    return f"{sign}{h:02d}:{m:02d}" + (f":{s:02d}" if s else "")


# ============================================================
# LOCAL DATE-TIME
# ============================================================

@total_ordering
@dataclass(frozen=True, eq=False)
class ChronoLocalDateTime:
    date: CalendarDate
    nano_of_day: int

    def __post_init__(self) -> None:
        if not (0 <= self.nano_of_day < NANOS_PER_DAY):
            raise DateOutOfRangeError(
                f"Invalid value for NanoOfDay (valid values 0 - {NANOS_PER_DAY - 1}): {self.nano_of_day}",
                value=self.nano_of_day,
            )

    @classmethod
    def of(cls, date: CalendarDate, t: Union[_dt.time, int] = 0) -> "ChronoLocalDateTime":
        """Combine a date with a datetime.time or a nano-of-day."""
        nod = nano_of_day_of(t) if isinstance(t, _dt.time) else t
        return cls(date, nod)

    # ---------------------------------------------------------
    # Accessors
    # ---------------------------------------------------------

    @property
    def chronology(self):
        return self.date.chronology

    @property
    def time(self) -> _dt.time:
        return time_of(self.nano_of_day)

    @property
    def hour(self) -> int:
        return self.nano_of_day // NANOS_PER_HOUR

    @property
    def minute(self) -> int:
        return self.nano_of_day // NANOS_PER_MINUTE % 60

    @property
    def second(self) -> int:
        return self.nano_of_day // NANOS_PER_SECOND % 60

    @property
    def nano(self) -> int:
        return self.nano_of_day % NANOS_PER_SECOND

    def with_date(self, date: CalendarDate) -> "ChronoLocalDateTime":
        return self if date == self.date else ChronoLocalDateTime(date, self.nano_of_day)

    def with_time(self, t: Union[_dt.time, int]) -> "ChronoLocalDateTime":
        return ChronoLocalDateTime.of(self.date, t)

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def plus(self, amount: int, unit: Unit) -> "ChronoLocalDateTime":
        check_long(amount)
        if unit.is_date_based:
            return self.with_date(self.date.plus(amount, unit))
        per = _UNIT_NANOS.get(unit)
        if per is None:
            raise UnsupportedFieldError(f"Unsupported unit: {unit}")
        # whole days first so the nano carry stays inside one day
        units_per_day = NANOS_PER_DAY // per
        days = floor_div(amount, units_per_day)
        nanos = floor_mod(amount, units_per_day) * per
        return self._plus_with_overflow(days, nanos)

    def minus(self, amount: int, unit: Unit) -> "ChronoLocalDateTime":
        if amount == LONG_MIN:
            return self.plus(LONG_MAX, unit).plus(1, unit)
        return self.plus(-check_long(amount), unit)

    def plus_nanos(self, nanos: int) -> "ChronoLocalDateTime":
        return self.plus(nanos, Unit.NANOS)

    def plus_seconds(self, seconds: int) -> "ChronoLocalDateTime":
        return self.plus(seconds, Unit.SECONDS)

    def plus_minutes(self, minutes: int) -> "ChronoLocalDateTime":
        return self.plus(minutes, Unit.MINUTES)

    def plus_hours(self, hours: int) -> "ChronoLocalDateTime":
        return self.plus(hours, Unit.HOURS)

    def plus_days(self, days: int) -> "ChronoLocalDateTime":
        return self.plus(days, Unit.DAYS)

    def _plus_with_overflow(self, days: int, nanos: int) -> "ChronoLocalDateTime":
        if days == 0 and nanos == 0:
            return self
        total = self.nano_of_day + nanos
        days = add_exact(days, floor_div(total, NANOS_PER_DAY))
        return ChronoLocalDateTime(self.date.plus_days(days), floor_mod(total, NANOS_PER_DAY))

    def until(self, end: "ChronoLocalDateTime", unit: Unit) -> int:
        """Whole units from this date-time to `end`, truncated toward zero."""
        if unit.is_date_based:
            end_date = self.chronology.date_from(end.date)
            if end_date.is_after(self.date) and end.nano_of_day < self.nano_of_day:
                end_date = end_date.plus_days(-1)
            elif end_date.is_before(self.date) and end.nano_of_day > self.nano_of_day:
                end_date = end_date.plus_days(1)
            return self.date.until(end_date, unit)
        per = _UNIT_NANOS.get(unit)
        if per is None:
            raise UnsupportedFieldError(f"Unsupported unit: {unit}")
        days = end.date.epoch_day - self.date.epoch_day
        total = multiply_exact(days, NANOS_PER_DAY) + (end.nano_of_day - self.nano_of_day)
        return check_long(_trunc_div(total, per))

    # ---------------------------------------------------------
    # Zone
    # ---------------------------------------------------------

    def to_epoch_second(self, offset: Union[_dt.timedelta, int]) -> int:
        off = _offset_seconds(offset)
        return self.date.epoch_day * SECONDS_PER_DAY + self.nano_of_day // NANOS_PER_SECOND - off

    def at_zone(self, zone: _dt.tzinfo, preferred_offset: Optional[_dt.timedelta] = None) -> "ChronoZonedDateTime":
        return ChronoZonedDateTime.of_best_offset(self, zone, preferred_offset)

    def to_naive_datetime(self) -> _dt.datetime:
        d = _iso_date(self.date.epoch_day)
        return _dt.datetime.combine(d, self.time)

    # ---------------------------------------------------------
    # Value semantics
    # ---------------------------------------------------------

    def _key(self) -> Tuple[int, int, str]:
        return self.date.epoch_day, self.nano_of_day, self.chronology.id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChronoLocalDateTime):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "ChronoLocalDateTime") -> bool:
        if not isinstance(other, ChronoLocalDateTime):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return f"{self.date}T{_format_time(self.nano_of_day)}"


def _offset_seconds(offset: Union[_dt.timedelta, int]) -> int:
    if isinstance(offset, _dt.timedelta):
        return offset.days * SECONDS_PER_DAY + offset.seconds
    return offset


def _iso_date(epoch_day: int) -> _dt.date:
    try:
        return iso.date_of(epoch_day)
    except (ValueError, OverflowError):
        raise DateOutOfRangeError(
            f"Time-zone rules need an ISO year in 1..9999; epoch day {epoch_day} is outside", value=epoch_day
        ) from None


def zone_offsets(zone: _dt.tzinfo, local: ChronoLocalDateTime) -> Tuple[int, int]:
    """
    (fold=0, fold=1) UTC offsets in seconds for a local date-time.
    Equal: one valid offset. off0 > off1: overlap, both valid.
    off0 < off1: gap, none valid.
    """
    naive = local.to_naive_datetime()
    out = []
    for fold in (0, 1):
        off = naive.replace(tzinfo=zone, fold=fold).utcoffset()
        if off is None:
            raise ValueError(f"time zone {zone!r} has no UTC offset")
        out.append(_offset_seconds(off))
    return out[0], out[1]


# ============================================================
# ZONED DATE-TIME
# ============================================================

@total_ordering
@dataclass(frozen=True, eq=False)
class ChronoZonedDateTime:
    local: ChronoLocalDateTime
    offset_seconds: int
    zone: _dt.tzinfo

    @classmethod
    def of_best_offset(
        cls,
        local: ChronoLocalDateTime,
        zone: _dt.tzinfo,
        preferred_offset: Optional[Union[_dt.timedelta, int]] = None,
    ) -> "ChronoZonedDateTime":
        """
        Local date-time in a zone, choosing the offset:
          one valid offset  -> it
          overlap           -> preferred offset if valid, else the earlier one
          gap               -> local time moved later by the gap length, later offset
        """
        off0, off1 = zone_offsets(zone, local)
        if off0 == off1:
            return cls(local, off0, zone)
        if off0 > off1:
            pref = _offset_seconds(preferred_offset) if preferred_offset is not None else None
            return cls(local, pref if pref in (off0, off1) else off0, zone)
        return cls(local.plus_seconds(off1 - off0), off1, zone)

    @classmethod
    def of_instant(cls, chronology, epoch_second: int, zone: _dt.tzinfo, nano: int = 0) -> "ChronoZonedDateTime":
        """The instant `epoch_second` + `nano` ns, seen in `zone`."""
        epoch_second = add_exact(epoch_second, floor_div(nano, NANOS_PER_SECOND))
        nano = floor_mod(nano, NANOS_PER_SECOND)
        utc_day = floor_div(epoch_second, SECONDS_PER_DAY)
        utc = _dt.datetime.combine(_iso_date(utc_day), _dt.time(), tzinfo=_dt.timezone.utc)
        utc += _dt.timedelta(seconds=floor_mod(epoch_second, SECONDS_PER_DAY))
        off = _offset_seconds(utc.astimezone(zone).utcoffset())
        local_second = epoch_second + off
        date = chronology.date_epoch_day(floor_div(local_second, SECONDS_PER_DAY))
        nod = floor_mod(local_second, SECONDS_PER_DAY) * NANOS_PER_SECOND + nano
        return cls(ChronoLocalDateTime(date, nod), off, zone)

    # ---------------------------------------------------------
    # Accessors
    # ---------------------------------------------------------

    @property
    def offset(self) -> _dt.timedelta:
        return _dt.timedelta(seconds=self.offset_seconds)

    @property
    def date(self) -> CalendarDate:
        return self.local.date

    @property
    def chronology(self):
        return self.local.chronology

    def to_epoch_second(self) -> int:
        return self.local.to_epoch_second(self.offset_seconds)

    # ---------------------------------------------------------
    # Offsets and zones
    # ---------------------------------------------------------

    def with_earlier_offset_at_overlap(self) -> "ChronoZonedDateTime":
        off0, off1 = zone_offsets(self.zone, self.local)
        if off0 > off1 and off0 != self.offset_seconds:
            return ChronoZonedDateTime(self.local, off0, self.zone)
        return self

    def with_later_offset_at_overlap(self) -> "ChronoZonedDateTime":
        off0, off1 = zone_offsets(self.zone, self.local)
        if off0 > off1 and off1 != self.offset_seconds:
            return ChronoZonedDateTime(self.local, off1, self.zone)
        return self

    def with_zone_same_local(self, zone: _dt.tzinfo) -> "ChronoZonedDateTime":
        if zone is self.zone:
            return self
        return ChronoZonedDateTime.of_best_offset(self.local, zone, self.offset_seconds)

    def with_zone_same_instant(self, zone: _dt.tzinfo) -> "ChronoZonedDateTime":
        if zone is self.zone:
            return self
        return ChronoZonedDateTime.of_instant(self.chronology, self.to_epoch_second(), zone, self.local.nano)

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def plus(self, amount: int, unit: Unit) -> "ChronoZonedDateTime":
        """Date units move along the local time-line, time units along the instant time-line."""
        moved = self.local.plus(amount, unit)
        if unit.is_date_based:
            return ChronoZonedDateTime.of_best_offset(moved, self.zone, self.offset_seconds)
        return ChronoZonedDateTime.of_instant(
            self.chronology, moved.to_epoch_second(self.offset_seconds), self.zone, moved.nano
        )

    def minus(self, amount: int, unit: Unit) -> "ChronoZonedDateTime":
        if amount == LONG_MIN:
            return self.plus(LONG_MAX, unit).plus(1, unit)
        return self.plus(-check_long(amount), unit)

    def to_datetime(self) -> _dt.datetime:
        """Aware standard library datetime (microsecond precision)."""
        return self.local.to_naive_datetime().replace(tzinfo=self.zone, fold=self._fold())

    def _fold(self) -> int:
        off0, off1 = zone_offsets(self.zone, self.local)
        return 1 if off0 != off1 and self.offset_seconds == off1 else 0

    # ---------------------------------------------------------
    # Value semantics
    # ---------------------------------------------------------

    def _instant_key(self) -> Tuple[int, int]:
        return self.to_epoch_second(), self.local.nano

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChronoZonedDateTime):
            return NotImplemented
        return (self.local, self.offset_seconds, str(self.zone)) == (other.local, other.offset_seconds, str(other.zone))

    def __lt__(self, other: "ChronoZonedDateTime") -> bool:
        if not isinstance(other, ChronoZonedDateTime):
            return NotImplemented
        a = (self._instant_key(), self.local._key(), str(self.zone))
        b = (other._instant_key(), other.local._key(), str(other.zone))
        return a < b

    def __hash__(self) -> int:
        return hash((self.local, self.offset_seconds, str(self.zone)))

    def is_before(self, other: "ChronoZonedDateTime") -> bool:
        return self._instant_key() < other._instant_key()

    def is_after(self, other: "ChronoZonedDateTime") -> bool:
        return self._instant_key() > other._instant_key()

    def __str__(self) -> str:
        out = f"{self.local}{_format_offset(self.offset_seconds)}"
        zone = str(self.zone)
        if zone != _format_offset(self.offset_seconds) and zone != "UTC":
            out += f"[{zone}]"
        return out
