# tests/test_hijrah.py

import pytest
import random

import chronocal
from chronocal import ChronoField as F
from chronocal import CalendarConfigError, DateOutOfRangeError, ResolverStyle
from chronocal._bootstrap import build_registry
from chronocal.core.config import CalendarConfig
from chronocal.engines.hijrah_backend import build_table
from chronocal.engines.specs import hijrah_specs

CIVIL_YEAR = "30 29 30 29 30 29 30 29 30 29 30 29"


def _props(**extra):
    p = {"id": "Test", "type": "islamic-test", "version": "1", "iso-start": "1882-11-12",
         "1300": CIVIL_YEAR, "1301": CIVIL_YEAR}
    p.update(extra)
    return p


def test_hijrah_aliases():
    h = chronocal.chronology("Hijrah")
    assert h is chronocal.chronology("islamic")
    assert h is chronocal.chronology("Hijrah-civil")
    assert h is chronocal.chronology("islamic-civil")


def test_table_shape():
    t = chronocal.chronology("Hijrah").backend.table()
    assert (t.first_year, t.last_year) == (1300, 1600)
    assert len(t.epoch_months) == 301 * 12 + 1
    assert all(b > a for a, b in zip(t.epoch_months, t.epoch_months[1:]))
    assert (t.min_month_length, t.max_month_length) == (29, 30)
    assert (t.min_year_length, t.max_year_length) == (354, 355)
    assert t.min_epoch_day == -31826


def test_known_dates():
    h = chronocal.chronology("Hijrah")
    assert h.date(1400, 1, 1).epoch_day == 3611
    assert h.date(1400, 1, 1).to_date().isoformat() == "1979-11-21"
    d = h.date(1445, 1, 1)
    assert d.epoch_day == 19557
    assert d.day_of_week == 3
    assert str(d) == "Hijrah-civil AH 1445-01-01"
    assert chronocal.convert(chronocal.date(2023, 7, 19), to="Hijrah") == d


def test_leap_years():
    h = chronocal.chronology("Hijrah")
    assert h.is_leap_year(1445)
    assert not h.is_leap_year(1446)
    assert h.date(1445, 12, 30).length_of_year == 355
    assert h.date(1446, 12, 29).length_of_month == 29


def test_epoch_day_roundtrip():
    h = chronocal.chronology("Hijrah")
    r = h.range(F.EPOCH_DAY)
    random.seed(42)
    for _ in range(5000):
        e = random.randint(r.minimum, r.maximum)
        d = h.date_epoch_day(e)
        assert h.date(d.proleptic_year, d.month, d.day).epoch_day == e


def test_out_of_range():
    h = chronocal.chronology("Hijrah")
    with pytest.raises(DateOutOfRangeError):
        h.date_epoch_day(-31827)
    with pytest.raises(DateOutOfRangeError):
        h.date_epoch_day(h.range(F.EPOCH_DAY).maximum + 1)
    with pytest.raises(DateOutOfRangeError):
        h.date(1299, 12, 1)
    with pytest.raises(DateOutOfRangeError):
        h.date(1445, 2, 30)
    with pytest.raises(DateOutOfRangeError):
        h.is_leap_year(1601)


def test_field_ranges():
    h = chronocal.chronology("Hijrah")
    assert h.range(F.DAY_OF_MONTH) == chronocal.ValueRange.of(1, 1, 29, 30)
    assert h.range(F.DAY_OF_YEAR).maximum == 355
    assert h.range(F.YEAR_OF_ERA) == chronocal.ValueRange.of(1300, 1600)
    assert [e.name for e in h.eras()] == ["AH"]


def test_resolve():
    h = chronocal.chronology("Hijrah")
    fields = {F.YEAR: 1445, F.MONTH_OF_YEAR: 2, F.DAY_OF_MONTH: 30}
    assert h.resolve_date(dict(fields)) == h.date(1445, 2, 29)
    with pytest.raises(DateOutOfRangeError):
        h.resolve_date(dict(fields), ResolverStyle.STRICT)
    assert h.resolve_date({F.YEAR_OF_ERA: 1445, F.MONTH_OF_YEAR: 1, F.DAY_OF_MONTH: 1}) == h.date(1445, 1, 1)
    assert h.resolve_date({F.PROLEPTIC_MONTH: 1445 * 12 + 1, F.DAY_OF_MONTH: 3}) == h.date(1445, 2, 3)


# ---------------------------------------------------------
# Configuration
# ---------------------------------------------------------

def test_build_table_from_props():
    t = build_table(_props(), variant_id="Test", calendar_type="islamic-test", resource="t")
    assert (t.first_year, t.last_year, t.version) == (1300, 1301, "1")
    assert t.max_epoch_day - t.min_epoch_day == 2 * 354


@pytest.mark.parametrize(
    "props,key",
    [
        (_props(**{"1301": "30 29 30"}), "1301"),
        (_props(**{"1301": "30 29 30 29 30 29 30 29 30 29 30 x"}), "1301"),
        (_props(**{"1301": "30 29 30 29 30 29 30 29 30 29 30 33"}), "1301"),
        (_props(**{"1303": CIVIL_YEAR}), "1302"),
        (_props(**{"abc": CIVIL_YEAR}), "abc"),
        (_props(id="Other"), "id"),
        (_props(type="other"), "type"),
        (_props(version=""), "version"),
        (_props(**{"iso-start": ""}), "iso-start"),
        (_props(**{"iso-start": "1882-02-30"}), "iso-start"),
    ],
)
def test_build_table_rejects(props, key):
    with pytest.raises(CalendarConfigError) as ei:
        build_table(props, variant_id="Test", calendar_type="islamic-test", resource="t")
    assert ei.value.key == key
    assert ei.value.resource == "t"


def _write_variant(d, body):
    (d / "calendars.properties").write_text(
        "calendar.hijrah.Test=test.properties\ncalendar.hijrah.Test.type=islamic-test\n", encoding="utf-8"
    )
    (d / "test.properties").write_text(body, encoding="utf-8")


def test_variant_from_calendars_dir(tmp_path):
    body = "id=Test\ntype=islamic-test\nversion=7\niso-start=1882-11-12\n"
    body += f"1300={CIVIL_YEAR}\n1301={CIVIL_YEAR}\n"
    _write_variant(tmp_path, body)
    reg = build_registry(CalendarConfig(calendars_dir=tmp_path))
    h = reg.get("Hijrah")
    assert h.id == "Test"
    assert reg.get("islamic-test") is h
    assert h.backend.table().version == "7"
    assert h.date(1301, 1, 1).epoch_day == -31826 + 354


def test_broken_variant_is_skipped(tmp_path, caplog):
    _write_variant(tmp_path, "id=Test\ntype=islamic-test\nversion=1\n" + f"1300={CIVIL_YEAR}\n")
    reg = build_registry(CalendarConfig(calendars_dir=tmp_path))
    assert "Hijrah" not in reg
    assert "ISO" in reg
    assert "Test" in caplog.text


def test_calendars_entry_without_type(tmp_path):
    (tmp_path / "calendars.properties").write_text("calendar.hijrah.Test=test.properties\n", encoding="utf-8")
    with pytest.raises(CalendarConfigError) as ei:
        hijrah_specs(CalendarConfig(calendars_dir=tmp_path))
    assert ei.value.key == "calendar.hijrah.Test.type"


def test_failed_table_load_is_not_cached(tmp_path):
    _write_variant(tmp_path, "id=Test\n")
    chrono = chronocal.make_chronology(hijrah_specs(CalendarConfig(calendars_dir=tmp_path))[0])
    with pytest.raises(CalendarConfigError):
        chrono.backend.table()
    assert not chrono.backend.is_loaded
    body = "id=Test\ntype=islamic-test\nversion=1\niso-start=1882-11-12\n" + f"1300={CIVIL_YEAR}\n"
    (tmp_path / "test.properties").write_text(body, encoding="utf-8")
    assert chrono.backend.table().last_year == 1300
    assert chrono.backend.is_loaded


def test_table_built_once_under_concurrent_first_use(monkeypatch):
    import threading

    from chronocal.engines import hijrah_backend
    from chronocal.engines.factory import make_chronology

    calls = []
    real_build = hijrah_backend.build_table

    def counting_build(*args, **kwargs):
        calls.append(1)
        return real_build(*args, **kwargs)

    monkeypatch.setattr(hijrah_backend, "build_table", counting_build)
    backend = make_chronology(hijrah_specs()[0]).backend
    assert not backend.is_loaded

    n = 16
    barrier = threading.Barrier(n)
    tables = []

    def first_use():
        barrier.wait()
        tables.append(backend.table())

    threads = [threading.Thread(target=first_use) for _ in range(n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(tables) == n
    assert all(t is tables[0] for t in tables)
