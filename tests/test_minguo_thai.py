# tests/test_minguo_thai.py

import pytest
import random

import chronocal
from chronocal import ChronoField as F
from chronocal import DateOutOfRangeError

MINGUO = chronocal.chronology("Minguo")
THAI = chronocal.chronology("ThaiBuddhist")
ISO = chronocal.chronology("ISO")


def test_minguo_offset():
    d = MINGUO.date(89, 1, 1)
    assert d == chronocal.convert(chronocal.date(2000, 1, 1), to="Minguo")
    assert d.era.name == "ROC"
    assert d.year_of_era == 89
    assert str(d) == "Minguo ROC 89-01-01"


def test_minguo_before_roc():
    d = MINGUO.date(0, 1, 1)
    assert d.to_date().year == 1911
    assert d.era.name == "BEFORE_ROC"
    assert d.year_of_era == 1
    assert MINGUO.date_era(MINGUO.era_of(0), 1, 1, 1) == d
    assert MINGUO.date(-1, 1, 1).year_of_era == 2


def test_thai_offset():
    d = THAI.date(2543, 1, 1)
    assert d.to_date().isoformat() == "2000-01-01"
    assert d.era.name == "BE"
    assert chronocal.chronology("buddhist") is THAI
    assert THAI.date(544, 1, 1).to_date().year == 1


def test_leap_years_follow_iso():
    assert MINGUO.is_leap_year(89)         # 2000
    assert not MINGUO.is_leap_year(-11)    # 1900
    assert THAI.is_leap_year(2567)         # 2024
    with pytest.raises(DateOutOfRangeError) as ei:
        MINGUO.date(90, 2, 29)
    assert "not a leap year" in str(ei.value)


def test_year_ranges():
    assert MINGUO.range(F.YEAR).maximum == 999_999_999 - 1911
    assert THAI.range(F.YEAR).minimum == -999_999_999 + 543
    with pytest.raises(DateOutOfRangeError):
        MINGUO.date(999_999_999, 1, 1)


def test_iso_eras_and_format():
    assert ISO.date(0, 1, 1).era.name == "BCE"
    assert ISO.date(0, 1, 1).year_of_era == 1
    assert str(ISO.date(-5, 1, 1)) == "-0005-01-01"
    assert str(ISO.date(12345, 6, 7)) == "+12345-06-07"
    with pytest.raises(DateOutOfRangeError) as ei:
        ISO.date(2023, 4, 31)
    assert str(ei.value) == "Invalid date 'APRIL 31'"


def test_conversions_agree():
    random.seed(42)
    for _ in range(2000):
        e = random.randint(-100_000, 100_000)
        i, m, t = ISO.date_epoch_day(e), MINGUO.date_epoch_day(e), THAI.date_epoch_day(e)
        assert m.proleptic_year == i.proleptic_year - 1911
        assert t.proleptic_year == i.proleptic_year + 543
        assert (m.month, m.day) == (t.month, t.day) == (i.month, i.day)
        assert m.is_equal(i) and t.is_equal(i)
        assert m != i
