# tests/test_fields.py

import pytest

from chronocal.core.errors import DateOutOfRangeError
from chronocal.core.fields import ChronoField, Unit, ValueRange


def test_value_range_of():
    r = ValueRange.of(1, 28, 31)
    assert (r.minimum, r.largest_minimum, r.smallest_maximum, r.maximum) == (1, 1, 28, 31)
    assert str(r) == "1 - 28/31"
    assert not r.is_fixed
    assert ValueRange.of(1, 12).is_fixed
    assert str(ValueRange.of(0, 1, 1, 5)) == "0/1 - 5"


def test_value_range_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        ValueRange(5, 1, 10, 10)
    with pytest.raises(ValueError):
        ValueRange(1, 1, 10, 5)
    with pytest.raises(TypeError):
        ValueRange.of(1)


def test_check_valid_value_message():
    with pytest.raises(DateOutOfRangeError) as ei:
        ChronoField.MONTH_OF_YEAR.check_valid_value(13)
    assert str(ei.value) == "Invalid value for MonthOfYear (valid values 1 - 12): 13"
    assert ei.value.field is ChronoField.MONTH_OF_YEAR
    assert ei.value.value == 13


def test_check_valid_int_value():
    assert ChronoField.YEAR.check_valid_int_value(2024) == 2024
    with pytest.raises(DateOutOfRangeError):
        ChronoField.EPOCH_DAY.check_valid_int_value(0)  # range is wider than int


def test_unit_kinds():
    assert Unit.DAYS.is_date_based
    assert Unit.ERAS.is_date_based
    assert Unit.HALF_DAYS.is_time_based
    assert not Unit.NANOS.is_date_based
    assert str(Unit.HALF_DAYS) == "HalfDays"
