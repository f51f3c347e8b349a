# tests/test_registry_api.py

import pytest

import chronocal
from chronocal._bootstrap import build_registry
from chronocal.core.config import CalendarConfig
from chronocal.core.registry import ChronologyRegistry
from chronocal.engines.specs import MINGUO


def test_builtin_chronologies():
    names = chronocal.list_chronologies()
    for n in ("ISO", "Japanese", "Minguo", "ThaiBuddhist", "Hijrah", "Hijrah-civil", "islamic"):
        assert n in names
    assert names == sorted(names)


def test_lookup_by_type():
    assert chronocal.chronology("roc").id == "Minguo"
    assert chronocal.chronology("iso8601").id == "ISO"
    assert chronocal.chronology("japanese").id == "Japanese"
    with pytest.raises(KeyError) as ei:
        chronocal.chronology("Mayan")
    assert "Mayan" in str(ei.value)


def test_info():
    info = chronocal.chronology_info("Japanese")
    assert info["id"] == "Japanese"
    assert info["backend"] == "IsoBackend"
    assert info["eras"][-1] == "Reiwa"
    assert info["year_range"][0] == 1873
    assert chronocal.chronology_info("Hijrah")["year_range"] == (1300, 1600)


def test_first_registration_wins(caplog):
    reg = ChronologyRegistry()
    a = chronocal.make_chronology(MINGUO)
    b = chronocal.make_chronology(MINGUO)
    assert reg.register(a) is None
    assert reg.register(b) is a
    assert reg.get("Minguo") is a
    assert "already registered" in caplog.text
    assert reg.register(a, "roc-alias") is None
    assert reg.list() == ["Minguo", "roc-alias"]
    assert reg.available() == [a]


def test_set_registry():
    saved = chronocal.get_registry()
    try:
        reg = build_registry(CalendarConfig())
        chronocal.set_registry(reg)
        assert chronocal.get_registry() is reg
        assert chronocal.date(2000, 1, 1).chronology is reg.get("ISO")
    finally:
        chronocal.set_registry(saved)


def test_api_dates():
    assert chronocal.date_era(2, 1, 1, 8, calendar="Japanese") == chronocal.date(1989, 1, 8, calendar="Japanese")
    jp = chronocal.chronology("Japanese")
    assert chronocal.date_era(jp.era_of(3), 1, 5, 1, calendar=jp).to_date().isoformat() == "2019-05-01"
    assert chronocal.date_epoch_day(0).to_date().isoformat() == "1970-01-01"
    assert [e.name for e in chronocal.eras("Minguo")] == ["BEFORE_ROC", "ROC"]


def test_convert_and_today():
    from datetime import date, datetime

    assert chronocal.convert(date(2000, 1, 1), to="ThaiBuddhist").proleptic_year == 2543
    assert chronocal.convert(datetime(2000, 1, 1, 12), to="Minguo").proleptic_year == 89
    t = chronocal.today(calendar="Japanese")
    assert t.chronology.id == "Japanese"
    assert chronocal.convert(t, to="ISO").is_equal(t)
    with pytest.raises(TypeError):
        chronocal.convert("2000-01-01", to="ISO")
