# tests/test_time.py

import pytest
import random
from datetime import date

from chronocal.core import time as iso
from chronocal.core.errors import CalendarArithmeticError
from chronocal.core.exact import LONG_MAX, LONG_MIN, add_exact, floor_div, floor_mod, multiply_exact, to_int_exact


def test_epoch_day_roundtrip():
    random.seed(42)
    for _ in range(10000):
        e = random.randint(-10_000_000, 10_000_000)
        assert iso.to_epoch_day(*iso.from_epoch_day(e)) == e


def test_epoch_day_matches_stdlib():
    random.seed(42)
    for _ in range(2000):
        d = date.fromordinal(random.randint(1, 3_652_059))
        e = iso.epoch_day_of(d)
        assert iso.to_epoch_day(d.year, d.month, d.day) == e
        assert iso.date_of(e) == d


def test_known_epoch_days():
    assert iso.to_epoch_day(1970, 1, 1) == 0
    assert iso.to_epoch_day(2000, 1, 1) == 10957
    assert iso.from_epoch_day(-1) == (1969, 12, 31)
    assert iso.to_epoch_day(0, 1, 1) == -719528


def test_day_of_week():
    assert iso.day_of_week(0) == 4          # Thursday
    assert iso.day_of_week(10957) == 6      # 2000-01-01, Saturday
    assert iso.day_of_week(-1) == 3


@pytest.mark.parametrize(
    "year,leap",
    [(2000, True), (1900, False), (2024, True), (2023, False), (0, True), (-4, True), (-100, False)],
)
def test_is_leap(year, leap):
    assert iso.is_leap(year) is leap
    assert iso.year_length(year) == (366 if leap else 365)


def test_day_of_year():
    assert iso.day_of_year(2024, 3, 1) == 61
    assert iso.day_of_year(2023, 12, 31) == 365


def test_exact_arithmetic():
    assert add_exact(LONG_MAX - 1, 1) == LONG_MAX
    with pytest.raises(CalendarArithmeticError):
        add_exact(LONG_MAX, 1)
    with pytest.raises(CalendarArithmeticError):
        multiply_exact(LONG_MIN, -1)
    with pytest.raises(CalendarArithmeticError):
        to_int_exact(1 << 31)
    assert floor_div(-1, 12) == -1
    assert floor_mod(-1, 12) == 11
