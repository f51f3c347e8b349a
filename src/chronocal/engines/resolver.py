"""
chronocal.engines.resolver
--------------------------
Field resolution: turn a partial map of calendar fields into one date.

The map is consumed as it is resolved; fields that played no part are left
in it for the caller. Resolution runs in priority order:

  1. EPOCH_DAY                      -> date immediately
  2. PROLEPTIC_MONTH                -> YEAR + MONTH_OF_YEAR
  3. YEAR_OF_ERA (+ ERA)            -> YEAR
  4. YEAR with, in order:
       MONTH_OF_YEAR + DAY_OF_MONTH
       DAY_OF_YEAR
       MONTH_OF_YEAR + ALIGNED_WEEK_OF_MONTH + (ALIGNED_DAY_OF_WEEK_IN_MONTH | DAY_OF_WEEK)
       ALIGNED_WEEK_OF_YEAR + (ALIGNED_DAY_OF_WEEK_IN_YEAR | DAY_OF_WEEK)

Too few fields is not an error: resolve() returns None. Contradictions raise
DateResolutionError, out-of-range values DateOutOfRangeError.

Modes:
  LENIENT  month/week/day values are not range checked; the date is built
           from day 1 of the year by adding (value - 1) months, weeks, days.
  SMART    ranges checked; (Y, M, D) clamps the day to the end of the month.
  STRICT   ranges checked; exact construction, week-aligned results must stay
           in the requested month or year.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

from ..core.date import CalendarDate
from ..core.errors import DateResolutionError
from ..core.exact import floor_div, floor_mod, subtract_exact, to_int_exact
from ..core.fields import ChronoField, ResolverStyle

if TYPE_CHECKING:
    from .chronology import Chronology

F = ChronoField
FieldMap = Dict[ChronoField, int]


def add_field_value(fields: FieldMap, field: ChronoField, value: int) -> None:
    """Insert `value`, raising if the field is already present with another value."""
    old = fields.get(field)
    if old is not None and old != value:
        raise DateResolutionError(
            f"Conflict found: {field} {old} differs from {field} {value}",
            field=field, existing=old, value=value,
        )
    fields[field] = value


class FieldResolver:
    def __init__(self, chronology: "Chronology"):
        self.chrono = chronology

    def resolve(self, fields: FieldMap, style: ResolverStyle = ResolverStyle.SMART) -> Optional[CalendarDate]:
        c = self.chrono
        if F.EPOCH_DAY in fields:
            return c.date_epoch_day(fields.pop(F.EPOCH_DAY))

        self.resolve_proleptic_month(fields, style)

        resolved = self.resolve_year_of_era(fields, style)
        if resolved is not None:
            return resolved

        if F.YEAR not in fields:
            return None
        if F.MONTH_OF_YEAR in fields and F.DAY_OF_MONTH in fields:
            return self.resolve_ymd(fields, style)
        if F.DAY_OF_YEAR in fields:
            return self.resolve_yd(fields, style)
        if F.MONTH_OF_YEAR in fields and F.ALIGNED_WEEK_OF_MONTH in fields:
            if F.ALIGNED_DAY_OF_WEEK_IN_MONTH in fields:
                return self.resolve_ymaa(fields, style)
            if F.DAY_OF_WEEK in fields:
                return self.resolve_ymad(fields, style)
        if F.ALIGNED_WEEK_OF_YEAR in fields:
            if F.ALIGNED_DAY_OF_WEEK_IN_YEAR in fields:
                return self.resolve_yaa(fields, style)
            if F.DAY_OF_WEEK in fields:
                return self.resolve_yad(fields, style)
        return None

    # ---------------------------------------------------------
    # Steps 2 and 3
    # ---------------------------------------------------------

    def resolve_proleptic_month(self, fields: FieldMap, style: ResolverStyle) -> None:
        pm = fields.pop(F.PROLEPTIC_MONTH, None)
        if pm is None:
            return
        if style is not ResolverStyle.LENIENT:
            self._check(F.PROLEPTIC_MONTH, pm)
        # day 1 is valid in every month; not every chronology has a year zero to count from
        d = self.chrono.date_now().with_field(F.DAY_OF_MONTH, 1).with_field(F.PROLEPTIC_MONTH, pm)
        add_field_value(fields, F.MONTH_OF_YEAR, d.month)
        add_field_value(fields, F.YEAR, d.proleptic_year)

    def resolve_year_of_era(self, fields: FieldMap, style: ResolverStyle) -> Optional[CalendarDate]:
        c = self.chrono
        yoe_value = fields.pop(F.YEAR_OF_ERA, None)
        if yoe_value is None:
            if F.ERA in fields:
                self._check(F.ERA, fields[F.ERA])
            return None

        era_value = fields.pop(F.ERA, None)
        if style is not ResolverStyle.LENIENT:
            yoe = self._check_int(F.YEAR_OF_ERA, yoe_value)
        else:
            yoe = to_int_exact(yoe_value)

        if era_value is not None:
            era = c.era_of(self._check_int(F.ERA, era_value))
            add_field_value(fields, F.YEAR, c.proleptic_year(era, yoe))
        elif F.YEAR in fields:
            year = self._check_int(F.YEAR, fields[F.YEAR])
            era = c.date_year_day(year, 1).era
            add_field_value(fields, F.YEAR, c.proleptic_year(era, yoe))
        elif style is ResolverStyle.STRICT:
            fields[F.YEAR_OF_ERA] = yoe_value
        else:
            add_field_value(fields, F.YEAR, c.proleptic_year(c.current_era, yoe))
        return None

    # ---------------------------------------------------------
    # Step 4 groups
    # ---------------------------------------------------------

    def resolve_ymd(self, fields: FieldMap, style: ResolverStyle) -> CalendarDate:
        c = self.chrono
        y = self._check_int(F.YEAR, fields.pop(F.YEAR))
        if style is ResolverStyle.LENIENT:
            months = subtract_exact(fields.pop(F.MONTH_OF_YEAR), 1)
            days = subtract_exact(fields.pop(F.DAY_OF_MONTH), 1)
            return c.date(y, 1, 1).plus_months(months).plus_days(days)
        moy = self._check_int(F.MONTH_OF_YEAR, fields.pop(F.MONTH_OF_YEAR))
        dom = self._check_int(F.DAY_OF_MONTH, fields.pop(F.DAY_OF_MONTH))
        if style is ResolverStyle.SMART:
            dom = min(dom, c.backend.month_length(y, moy))
        return c.date(y, moy, dom)

    def resolve_yd(self, fields: FieldMap, style: ResolverStyle) -> CalendarDate:
        c = self.chrono
        y = self._check_int(F.YEAR, fields.pop(F.YEAR))
        if style is ResolverStyle.LENIENT:
            days = subtract_exact(fields.pop(F.DAY_OF_YEAR), 1)
            return c.date_year_day(y, 1).plus_days(days)
        doy = self._check_int(F.DAY_OF_YEAR, fields.pop(F.DAY_OF_YEAR))
        return c.date_year_day(y, doy)

    def resolve_ymaa(self, fields: FieldMap, style: ResolverStyle) -> CalendarDate:
        c = self.chrono
        y = self._check_int(F.YEAR, fields.pop(F.YEAR))
        if style is ResolverStyle.LENIENT:
            months = subtract_exact(fields.pop(F.MONTH_OF_YEAR), 1)
            weeks = subtract_exact(fields.pop(F.ALIGNED_WEEK_OF_MONTH), 1)
            days = subtract_exact(fields.pop(F.ALIGNED_DAY_OF_WEEK_IN_MONTH), 1)
            return c.date(y, 1, 1).plus_months(months).plus_weeks(weeks).plus_days(days)
        moy = self._check_int(F.MONTH_OF_YEAR, fields.pop(F.MONTH_OF_YEAR))
        aw = self._check_int(F.ALIGNED_WEEK_OF_MONTH, fields.pop(F.ALIGNED_WEEK_OF_MONTH))
        ad = self._check_int(F.ALIGNED_DAY_OF_WEEK_IN_MONTH, fields.pop(F.ALIGNED_DAY_OF_WEEK_IN_MONTH))
        d = c.date(y, moy, 1).plus_days((aw - 1) * 7 + (ad - 1))
        if style is ResolverStyle.STRICT and d.month != moy:
            raise DateResolutionError("Strict mode rejected resolved date as it is in a different month")
        return d

    def resolve_ymad(self, fields: FieldMap, style: ResolverStyle) -> CalendarDate:
        c = self.chrono
        y = self._check_int(F.YEAR, fields.pop(F.YEAR))
        if style is ResolverStyle.LENIENT:
            months = subtract_exact(fields.pop(F.MONTH_OF_YEAR), 1)
            weeks = subtract_exact(fields.pop(F.ALIGNED_WEEK_OF_MONTH), 1)
            dow = fields.pop(F.DAY_OF_WEEK)
            return self.resolve_aligned(c.date(y, 1, 1), months, weeks, dow)
        moy = self._check_int(F.MONTH_OF_YEAR, fields.pop(F.MONTH_OF_YEAR))
        aw = self._check_int(F.ALIGNED_WEEK_OF_MONTH, fields.pop(F.ALIGNED_WEEK_OF_MONTH))
        dow = self._check_int(F.DAY_OF_WEEK, fields.pop(F.DAY_OF_WEEK))
        d = _next_or_same(c.date(y, moy, 1).plus_days((aw - 1) * 7), dow)
        if style is ResolverStyle.STRICT and d.month != moy:
            raise DateResolutionError("Strict mode rejected resolved date as it is in a different month")
        return d

    def resolve_yaa(self, fields: FieldMap, style: ResolverStyle) -> CalendarDate:
        c = self.chrono
        y = self._check_int(F.YEAR, fields.pop(F.YEAR))
        if style is ResolverStyle.LENIENT:
            weeks = subtract_exact(fields.pop(F.ALIGNED_WEEK_OF_YEAR), 1)
            days = subtract_exact(fields.pop(F.ALIGNED_DAY_OF_WEEK_IN_YEAR), 1)
            return c.date_year_day(y, 1).plus_weeks(weeks).plus_days(days)
        aw = self._check_int(F.ALIGNED_WEEK_OF_YEAR, fields.pop(F.ALIGNED_WEEK_OF_YEAR))
        ad = self._check_int(F.ALIGNED_DAY_OF_WEEK_IN_YEAR, fields.pop(F.ALIGNED_DAY_OF_WEEK_IN_YEAR))
        d = c.date_year_day(y, 1).plus_days((aw - 1) * 7 + (ad - 1))
        if style is ResolverStyle.STRICT and d.proleptic_year != y:
            raise DateResolutionError("Strict mode rejected resolved date as it is in a different year")
        return d

    def resolve_yad(self, fields: FieldMap, style: ResolverStyle) -> CalendarDate:
        c = self.chrono
        y = self._check_int(F.YEAR, fields.pop(F.YEAR))
        if style is ResolverStyle.LENIENT:
            weeks = subtract_exact(fields.pop(F.ALIGNED_WEEK_OF_YEAR), 1)
            dow = fields.pop(F.DAY_OF_WEEK)
            return self.resolve_aligned(c.date_year_day(y, 1), 0, weeks, dow)
        aw = self._check_int(F.ALIGNED_WEEK_OF_YEAR, fields.pop(F.ALIGNED_WEEK_OF_YEAR))
        dow = self._check_int(F.DAY_OF_WEEK, fields.pop(F.DAY_OF_WEEK))
        d = _next_or_same(c.date_year_day(y, 1).plus_days((aw - 1) * 7), dow)
        if style is ResolverStyle.STRICT and d.proleptic_year != y:
            raise DateResolutionError("Strict mode rejected resolved date as it is in a different year")
        return d

    def resolve_aligned(self, base: CalendarDate, months: int, weeks: int, dow: int) -> CalendarDate:
        """Lenient day-of-week: values outside 1..7 move whole weeks first."""
        d = base.plus_months(months).plus_weeks(weeks)
        if dow > 7:
            d = d.plus_weeks((dow - 1) // 7)
            dow = (dow - 1) % 7 + 1
        elif dow < 1:
            d = d.plus_weeks(-((7 - dow) // 7))
            dow = (dow - 1) % 7 + 1
        return _next_or_same(d, dow)

    # ---------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------

    def _check(self, field: ChronoField, value: int) -> int:
        return self.chrono.range(field).check_valid_value(value, field)

    def _check_int(self, field: ChronoField, value: int) -> int:
        return self.chrono.range(field).check_valid_int_value(value, field)


def _next_or_same(d: CalendarDate, dow: int) -> CalendarDate:
    return d.plus_days((dow - d.day_of_week) % 7)


# ============================================================
# CHRONOLOGY-SPECIFIC RESOLVERS
# ============================================================

class IsoFieldResolver(FieldResolver):
    """
    Proleptic month splits arithmetically; the era of a bare year-of-era
    follows the sign of YEAR.
    """

    def resolve_proleptic_month(self, fields: FieldMap, style: ResolverStyle) -> None:
        pm = fields.pop(F.PROLEPTIC_MONTH, None)
        if pm is None:
            return
        if style is not ResolverStyle.LENIENT:
            self._check(F.PROLEPTIC_MONTH, pm)
        add_field_value(fields, F.MONTH_OF_YEAR, floor_mod(pm, 12) + 1)
        add_field_value(fields, F.YEAR, floor_div(pm, 12))

    def resolve_year_of_era(self, fields: FieldMap, style: ResolverStyle) -> Optional[CalendarDate]:
        yoe = fields.pop(F.YEAR_OF_ERA, None)
        if yoe is None:
            if F.ERA in fields:
                self._check(F.ERA, fields[F.ERA])
            return None
        if style is not ResolverStyle.LENIENT:
            self._check(F.YEAR_OF_ERA, yoe)
        era = fields.pop(F.ERA, None)
        if era is None:
            year = fields.get(F.YEAR)
            if style is ResolverStyle.STRICT:
                if year is not None:
                    add_field_value(fields, F.YEAR, yoe if year > 0 else subtract_exact(1, yoe))
                else:
                    fields[F.YEAR_OF_ERA] = yoe
            else:
                add_field_value(fields, F.YEAR, yoe if year is None or year > 0 else subtract_exact(1, yoe))
        elif era == 1:
            add_field_value(fields, F.YEAR, yoe)
        elif era == 0:
            add_field_value(fields, F.YEAR, subtract_exact(1, yoe))
        else:
            raise DateResolutionError(f"Invalid value for era: {era}", field=F.ERA, value=era)
        return None


class JapaneseFieldResolver(FieldResolver):
    """
    ERA and YEAR_OF_ERA resolve directly against the era when a month/day or
    day-of-year is present, so that dates in an era's first or last partial
    year keep their era.
    """

    def resolve_year_of_era(self, fields: FieldMap, style: ResolverStyle) -> Optional[CalendarDate]:
        c = self.chrono
        era = None
        if F.ERA in fields:
            era = c.era_of(self._check_int(F.ERA, fields[F.ERA]))
        yoe_value = fields.get(F.YEAR_OF_ERA)
        yoe = 0
        if yoe_value is not None:
            yoe = self._check_int(F.YEAR_OF_ERA, yoe_value)
        if era is None and yoe_value is not None and F.YEAR not in fields and style is not ResolverStyle.STRICT:
            era = c.current_era
        if yoe_value is not None and era is not None:
            if F.MONTH_OF_YEAR in fields and F.DAY_OF_MONTH in fields:
                return self._resolve_era_ymd(era, yoe, fields, style)
            if F.DAY_OF_YEAR in fields:
                return self._resolve_era_yd(era, yoe, fields, style)
        return None

    def _resolve_era_ymd(self, era, yoe: int, fields: FieldMap, style: ResolverStyle) -> CalendarDate:
        c = self.chrono
        fields.pop(F.ERA, None)
        fields.pop(F.YEAR_OF_ERA, None)
        y = era.since[0] + yoe - 1
        if style is ResolverStyle.LENIENT:
            months = subtract_exact(fields.pop(F.MONTH_OF_YEAR), 1)
            days = subtract_exact(fields.pop(F.DAY_OF_MONTH), 1)
            return c.date(y, 1, 1).plus_months(months).plus_days(days)
        moy = self._check_int(F.MONTH_OF_YEAR, fields.pop(F.MONTH_OF_YEAR))
        dom = self._check_int(F.DAY_OF_MONTH, fields.pop(F.DAY_OF_MONTH))
        if style is ResolverStyle.SMART:
            c.range(F.YEAR).check_valid_int_value(y, F.YEAR)
            result = c.date(y, moy, min(dom, c.backend.month_length(y, moy)))
            # an era change is allowed only inside the Jan-Dec of the change
            if result.era != era and result.year_of_era > 1 and yoe > 1:
                raise DateResolutionError(
                    f"Invalid YearOfEra for Era: {era} {yoe}", field=F.YEAR_OF_ERA, value=yoe
                )
            return result
        return c.date_era(era, yoe, moy, dom)

    def _resolve_era_yd(self, era, yoe: int, fields: FieldMap, style: ResolverStyle) -> CalendarDate:
        c = self.chrono
        fields.pop(F.ERA, None)
        fields.pop(F.YEAR_OF_ERA, None)
        if style is ResolverStyle.LENIENT:
            # day 1 is the first day of the era-year, which is the era start in year 1
            days = subtract_exact(fields.pop(F.DAY_OF_YEAR), 1)
            base = c.date(*era.since) if yoe == 1 else c.date_year_day(era.since[0] + yoe - 1, 1)
            return base.plus_days(days)
        doy = self._check_int(F.DAY_OF_YEAR, fields.pop(F.DAY_OF_YEAR))
        return c.date_era_year_day(era, yoe, doy)
