#!/usr/bin/env python3
"""Tests for field values and the Measurement model."""

import sys
sys.path.insert(0, "src")

from datetime import datetime, timedelta, timezone

import pytest

from influent import (
    Measurement, String, Float, Integer, Boolean,
    InvalidMeasurementError, InvalidValueError, InfluentError,
    value_from_python, datetime_to_nanoseconds,
)


# ============================================================================
# Values
# ============================================================================

def test_integer_range():
    Integer(2 ** 63 - 1)
    Integer(-(2 ** 63))
    with pytest.raises(InvalidValueError):
        Integer(2 ** 63)
    with pytest.raises(InvalidValueError):
        Integer(-(2 ** 63) - 1)


def test_integer_rejects_bool_and_float():
    with pytest.raises(InvalidValueError):
        Integer(True)
    with pytest.raises(InvalidValueError):
        Integer(1.5)


def test_float_rejects_non_finite():
    for bad in (float("nan"), float("inf"), float("-inf")):
        with pytest.raises(InvalidValueError):
            Float(bad)


def test_float_accepts_int_and_stores_float():
    value = Float(10)
    assert isinstance(value.value, float)
    assert value == Float(10.0)


def test_float_rejects_huge_int():
    with pytest.raises(InvalidValueError):
        Float(10 ** 400)


def test_string_and_boolean_types():
    with pytest.raises(InvalidValueError):
        String(5)
    with pytest.raises(InvalidValueError):
        Boolean(1)


def test_value_errors_are_value_errors():
    with pytest.raises(ValueError):
        Integer(2 ** 64)
    assert issubclass(InvalidValueError, InfluentError)


def test_value_from_python():
    assert value_from_python(True) == Boolean(True)
    assert value_from_python(3) == Integer(3)
    assert value_from_python(2.5) == Float(2.5)
    assert value_from_python("x") == String("x")
    assert value_from_python(Integer(4)) == Integer(4)


def test_value_from_python_rejects_other_types():
    with pytest.raises(InvalidValueError):
        value_from_python(None)
    with pytest.raises(InvalidValueError):
        value_from_python([1, 2])


# ============================================================================
# Measurement
# ============================================================================

def test_measurement_requires_key():
    with pytest.raises(InvalidMeasurementError):
        Measurement("")
    with pytest.raises(InvalidMeasurementError):
        Measurement(None)


def test_add_field_and_tag_replace():
    measurement = Measurement("key")
    measurement.add_field("f", Integer(1))
    measurement.add_field("f", Integer(2))
    measurement.add_tag("t", "a")
    measurement.add_tag("t", "b")
    assert measurement.fields == {"f": Integer(2)}
    assert measurement.tags == {"t": "b"}


def test_add_field_requires_value_variant():
    measurement = Measurement("key")
    with pytest.raises(InvalidValueError):
        measurement.add_field("f", 1)


def test_add_tag_requires_text():
    measurement = Measurement("key")
    with pytest.raises(InvalidMeasurementError):
        measurement.add_tag("t", 1)


def test_constructor_fields_and_tags_are_validated():
    with pytest.raises(InvalidValueError):
        Measurement("key", fields={"a": 1})
    with pytest.raises(InvalidMeasurementError):
        Measurement("key", fields={"a": Integer(1)}, tags={"t": 5})
    with pytest.raises(InvalidMeasurementError):
        Measurement("key", fields=[("a", Integer(1))])


def test_constructor_fields_and_tags_are_copied():
    fields = {"a": Integer(1)}
    tags = {"t": "x"}
    measurement = Measurement("key", fields=fields, tags=tags)
    measurement.add_field("b", Integer(2))
    measurement.add_tag("u", "y")
    assert measurement.fields == {"a": Integer(1), "b": Integer(2)}
    assert measurement.tags == {"t": "x", "u": "y"}
    assert fields == {"a": Integer(1)}
    assert tags == {"t": "x"}


def test_set_timestamp_from_datetime_rejects_other_types():
    measurement = Measurement("key")
    with pytest.raises(InvalidMeasurementError):
        measurement.set_timestamp_from_datetime("2015-06-11T20:46:02Z")


def test_timestamp_last_write_wins():
    measurement = Measurement("key")
    assert measurement.timestamp is None
    measurement.set_timestamp(1)
    measurement.set_timestamp(2)
    assert measurement.timestamp == 2


def test_timestamp_range():
    measurement = Measurement("key")
    with pytest.raises(InvalidMeasurementError):
        measurement.set_timestamp(2 ** 63)
    with pytest.raises(InvalidMeasurementError):
        measurement.set_timestamp(1.5)
    with pytest.raises(InvalidMeasurementError):
        Measurement("key", timestamp=-(2 ** 63) - 1)


def test_datetime_to_nanoseconds():
    dt = datetime(2015, 6, 11, 20, 46, 2, tzinfo=timezone.utc)
    assert datetime_to_nanoseconds(dt) == 1434055562000000000
    assert datetime_to_nanoseconds(dt.replace(tzinfo=None)) == 1434055562000000000
    assert datetime_to_nanoseconds(dt.replace(microsecond=123456)) == 1434055562123456000


def test_datetime_to_nanoseconds_offset_and_pre_epoch():
    dt = datetime(2015, 6, 11, 22, 46, 2, tzinfo=timezone(timedelta(hours=2)))
    assert datetime_to_nanoseconds(dt) == 1434055562000000000
    assert datetime_to_nanoseconds(datetime(1969, 12, 31, 23, 59, 59, tzinfo=timezone.utc)) == -1_000_000_000


def test_set_timestamp_from_datetime():
    measurement = Measurement("key")
    measurement.set_timestamp_from_datetime(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc))
    assert measurement.timestamp == 1_000_000_000
