# tests/test_resolver.py

import pytest

import chronocal
from chronocal import ChronoField as F
from chronocal import DateOutOfRangeError, DateResolutionError, ResolverStyle

LENIENT, SMART, STRICT = ResolverStyle.LENIENT, ResolverStyle.SMART, ResolverStyle.STRICT


def _iso(y, m, d):
    return chronocal.date(y, m, d)


def _resolve(fields, style=SMART, calendar="ISO"):
    return chronocal.chronology(calendar).resolve_date(fields, style)


# ---------------------------------------------------------
# Year / month / day
# ---------------------------------------------------------

def test_smart_clamps_day_of_month():
    fields = {F.YEAR: 2001, F.MONTH_OF_YEAR: 2, F.DAY_OF_MONTH: 29}
    assert _resolve(fields) == _iso(2001, 2, 28)
    assert fields == {}


def test_strict_rejects_invalid_day_of_month():
    with pytest.raises(DateOutOfRangeError):
        _resolve({F.YEAR: 2001, F.MONTH_OF_YEAR: 2, F.DAY_OF_MONTH: 29}, STRICT)


def test_smart_still_checks_field_ranges():
    with pytest.raises(DateOutOfRangeError):
        _resolve({F.YEAR: 2001, F.MONTH_OF_YEAR: 2, F.DAY_OF_MONTH: 32})


def test_lenient_rolls_over():
    assert _resolve({F.YEAR: 2000, F.MONTH_OF_YEAR: 13, F.DAY_OF_MONTH: 1}, LENIENT) == _iso(2001, 1, 1)
    assert _resolve({F.YEAR: 2000, F.MONTH_OF_YEAR: 1, F.DAY_OF_MONTH: 0}, LENIENT) == _iso(1999, 12, 31)
    assert _resolve({F.YEAR: 2000, F.MONTH_OF_YEAR: 0, F.DAY_OF_MONTH: 1}, LENIENT) == _iso(1999, 12, 1)


def test_lenient_still_checks_year():
    with pytest.raises(DateOutOfRangeError):
        _resolve({F.YEAR: 10**12, F.MONTH_OF_YEAR: 1, F.DAY_OF_MONTH: 1}, LENIENT)


# ---------------------------------------------------------
# Epoch day, proleptic month, era
# ---------------------------------------------------------

def test_epoch_day_wins_and_leaves_other_fields():
    fields = {F.EPOCH_DAY: 0, F.YEAR: 2000}
    assert _resolve(fields) == _iso(1970, 1, 1)
    assert fields == {F.YEAR: 2000}


def test_proleptic_month_split():
    assert _resolve({F.PROLEPTIC_MONTH: 2000 * 12 + 2, F.DAY_OF_MONTH: 5}) == _iso(2000, 3, 5)
    assert _resolve({F.PROLEPTIC_MONTH: -1, F.DAY_OF_MONTH: 1}) == _iso(-1, 12, 1)


def test_proleptic_month_conflict():
    with pytest.raises(DateResolutionError) as ei:
        _resolve({F.YEAR: 2000, F.MONTH_OF_YEAR: 2, F.DAY_OF_MONTH: 10, F.PROLEPTIC_MONTH: 24002})
    assert "Conflict found" in str(ei.value)
    assert ei.value.field is F.MONTH_OF_YEAR


def test_iso_era_and_year_of_era():
    assert _resolve({F.ERA: 0, F.YEAR_OF_ERA: 1, F.MONTH_OF_YEAR: 1, F.DAY_OF_MONTH: 1}) == _iso(0, 1, 1)
    assert _resolve({F.ERA: 1, F.YEAR_OF_ERA: 2024, F.MONTH_OF_YEAR: 1, F.DAY_OF_MONTH: 1}) == _iso(2024, 1, 1)
    # a bare year-of-era follows the sign of YEAR
    assert _resolve({F.YEAR_OF_ERA: 5, F.YEAR: -4, F.MONTH_OF_YEAR: 1, F.DAY_OF_MONTH: 1}) == _iso(-4, 1, 1)


def test_iso_year_of_era_conflicts_with_year():
    with pytest.raises(DateResolutionError):
        _resolve({F.ERA: 1, F.YEAR_OF_ERA: 2024, F.YEAR: 2023, F.MONTH_OF_YEAR: 1, F.DAY_OF_MONTH: 1})


def test_invalid_era_value():
    with pytest.raises(DateResolutionError):
        _resolve({F.ERA: 2, F.YEAR_OF_ERA: 1, F.MONTH_OF_YEAR: 1, F.DAY_OF_MONTH: 1})


def test_insufficient_fields_return_none():
    fields = {F.YEAR: 2000, F.MONTH_OF_YEAR: 5}
    assert _resolve(fields) is None
    assert fields == {F.YEAR: 2000, F.MONTH_OF_YEAR: 5}


def test_minguo_bare_year_of_era():
    fields = {F.YEAR_OF_ERA: 5}
    assert _resolve(fields, SMART, "Minguo") is None
    assert fields == {F.YEAR: 5}

    fields = {F.YEAR_OF_ERA: 5}
    assert _resolve(fields, STRICT, "Minguo") is None
    assert fields == {F.YEAR_OF_ERA: 5}


def test_minguo_year_of_era_with_year():
    d = _resolve({F.YEAR_OF_ERA: 1, F.YEAR: 0, F.MONTH_OF_YEAR: 6, F.DAY_OF_MONTH: 1}, SMART, "Minguo")
    assert d.proleptic_year == 0
    assert d.era.name == "BEFORE_ROC"


# ---------------------------------------------------------
# Day of year
# ---------------------------------------------------------

def test_year_day():
    assert _resolve({F.YEAR: 2024, F.DAY_OF_YEAR: 60}) == _iso(2024, 2, 29)
    with pytest.raises(DateOutOfRangeError) as ei:
        _resolve({F.YEAR: 2023, F.DAY_OF_YEAR: 366}, STRICT)
    assert "not a leap year" in str(ei.value)
    assert _resolve({F.YEAR: 2023, F.DAY_OF_YEAR: 366}, LENIENT) == _iso(2024, 1, 1)


def test_month_day_takes_priority_over_day_of_year():
    fields = {F.YEAR: 2024, F.MONTH_OF_YEAR: 3, F.DAY_OF_MONTH: 1, F.DAY_OF_YEAR: 1}
    assert _resolve(fields) == _iso(2024, 3, 1)
    assert fields == {F.DAY_OF_YEAR: 1}


# ---------------------------------------------------------
# Aligned weeks
# ---------------------------------------------------------

def test_aligned_week_of_month():
    fields = {F.YEAR: 2024, F.MONTH_OF_YEAR: 1, F.ALIGNED_WEEK_OF_MONTH: 2, F.ALIGNED_DAY_OF_WEEK_IN_MONTH: 3}
    assert _resolve(fields) == _iso(2024, 1, 10)
    fields = {F.YEAR: 2024, F.MONTH_OF_YEAR: 1, F.ALIGNED_WEEK_OF_MONTH: 1, F.DAY_OF_WEEK: 1}
    assert _resolve(fields) == _iso(2024, 1, 1)


def test_aligned_day_of_week_drift():
    # week 5 of Feb 2023 starts on Mar 1 (Wednesday); the next Sunday is Mar 5
    def fields():
        return {F.YEAR: 2023, F.MONTH_OF_YEAR: 2, F.ALIGNED_WEEK_OF_MONTH: 5, F.DAY_OF_WEEK: 7}

    assert _resolve(fields(), SMART) == _iso(2023, 3, 5)
    with pytest.raises(DateResolutionError):
        _resolve(fields(), STRICT)


def test_lenient_day_of_week_out_of_range():
    base = {F.YEAR: 2024, F.MONTH_OF_YEAR: 1, F.ALIGNED_WEEK_OF_MONTH: 1}
    # day-of-week 0 is the Sunday before
    assert _resolve({**base, F.DAY_OF_WEEK: 0}, LENIENT) == _iso(2023, 12, 31)
    assert _resolve({**base, F.DAY_OF_WEEK: 8}, LENIENT) == _iso(2024, 1, 8)


def test_aligned_week_of_year():
    assert _resolve({F.YEAR: 2024, F.ALIGNED_WEEK_OF_YEAR: 2, F.ALIGNED_DAY_OF_WEEK_IN_YEAR: 1}) == _iso(2024, 1, 8)
    assert _resolve({F.YEAR: 2024, F.ALIGNED_WEEK_OF_YEAR: 1, F.DAY_OF_WEEK: 7}) == _iso(2024, 1, 7)
    with pytest.raises(DateResolutionError):
        _resolve({F.YEAR: 2023, F.ALIGNED_WEEK_OF_YEAR: 53, F.ALIGNED_DAY_OF_WEEK_IN_YEAR: 7}, STRICT)


# ---------------------------------------------------------
# Public helper
# ---------------------------------------------------------

def test_api_resolve_accepts_names_and_copies():
    fields = {"YEAR": 2001, "month_of_year": 2, "DAY_OF_MONTH": 29}
    assert chronocal.resolve(fields, style="smart") == _iso(2001, 2, 28)
    assert len(fields) == 3
    with pytest.raises(DateOutOfRangeError):
        chronocal.resolve(fields, style="strict")


# ---------------------------------------------------------
# Properties
# ---------------------------------------------------------

@pytest.mark.parametrize("calendar", ["ISO", "Minguo", "ThaiBuddhist", "Hijrah", "Japanese"])
def test_strict_results_hold_in_every_mode(calendar):
    import random

    c = chronocal.chronology(calendar)
    r = c.range(F.EPOCH_DAY)
    random.seed(42)
    for _ in range(300):
        d = c.date_epoch_day(random.randint(max(r.minimum, -50_000), min(r.maximum, 50_000)))
        groups = [
            {F.YEAR: d.proleptic_year, F.MONTH_OF_YEAR: d.month, F.DAY_OF_MONTH: d.day},
            {F.ERA: d.era.value, F.YEAR_OF_ERA: d.year_of_era, F.MONTH_OF_YEAR: d.month, F.DAY_OF_MONTH: d.day},
            {F.ERA: d.era.value, F.YEAR_OF_ERA: d.year_of_era, F.DAY_OF_YEAR: d.day_of_year},
            {F.YEAR: d.proleptic_year, F.DAY_OF_YEAR: d.epoch_day - c.date(d.proleptic_year, 1, 1).epoch_day + 1},
        ]
        for g in groups:
            assert {c.resolve_date(dict(g), st) for st in (STRICT, SMART, LENIENT)} == {d}


@pytest.mark.parametrize("calendar", ["ISO", "Minguo", "ThaiBuddhist", "Hijrah", "Japanese"])
def test_era_inverse(calendar):
    c = chronocal.chronology(calendar)
    years = c.range(F.YEAR)
    for y in range(max(years.minimum, -3000), min(years.maximum, 3000) + 1, 7):
        era = c.era_system.era_of_year(y)
        assert c.proleptic_year(era, c.era_system.year_of_era(era, y)) == y
    for era in c.eras():
        y = c.proleptic_year(era, 1)
        if y < years.minimum:
            continue  # Meiji 1 predates the supported range
        first = c.date_year_day(y, 1) if era.since is None else c.date_era(era, 1, *era.since[1:])
        assert first.era == era
