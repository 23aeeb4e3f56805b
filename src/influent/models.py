#!/usr/bin/env python3
"""
Influent Data Models

Field values and the Measurement record encoded by the line protocol.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Union

from .exceptions import InvalidMeasurementError, InvalidValueError


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ============================================================================
# Field Values
# ============================================================================

@dataclass(frozen=True)
class String:
    """
    A text field value.

    Attributes:
        value: The text, written quoted with `"` escaped
    """
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise InvalidValueError(f"String value must be str, got {type(self.value).__name__}")


@dataclass(frozen=True)
class Float:
    """
    A 64-bit floating point field value.

    Attributes:
        value: A finite float (NaN and infinities have no wire representation)
    """
    value: float

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise InvalidValueError(f"Float value must be a number, got {type(self.value).__name__}")
        try:
            object.__setattr__(self, 'value', float(self.value))
        except OverflowError as e:
            raise InvalidValueError(f"Float value out of range: {e}") from e
        if not math.isfinite(self.value):
            raise InvalidValueError(f"Float value must be finite, got {self.value!r}")


@dataclass(frozen=True)
class Integer:
    """
    A signed 64-bit integer field value.

    Attributes:
        value: An int in the signed 64-bit range
    """
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidValueError(f"Integer value must be int, got {type(self.value).__name__}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise InvalidValueError(f"Integer value {self.value} does not fit in 64 bits")


@dataclass(frozen=True)
class Boolean:
    """
    A boolean field value.

    Attributes:
        value: True or False
    """
    value: bool

    def __post_init__(self):
        if not isinstance(self.value, bool):
            raise InvalidValueError(f"Boolean value must be bool, got {type(self.value).__name__}")


Value = Union[String, Float, Integer, Boolean]

_VALUE_TYPES = (String, Float, Integer, Boolean)


def value_from_python(value: Any) -> Value:
    """
    Convert a plain Python scalar to a field Value.

    bool is checked before int since bool is an int subclass.

    Args:
        value: A str, int, float, bool or an existing Value

    Returns:
        The matching Value variant

    Raises:
        InvalidValueError: If the type has no field representation
    """
    if isinstance(value, _VALUE_TYPES):
        return value
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, int):
        return Integer(value)
    if isinstance(value, float):
        return Float(value)
    if isinstance(value, str):
        return String(value)
    raise InvalidValueError(f"Cannot convert {type(value).__name__} to a field value")


def datetime_to_nanoseconds(dt: datetime) -> int:
    """
    Convert a datetime to integer nanoseconds since the Unix epoch.

    Naive datetimes are treated as UTC. Only integer arithmetic is used so
    the result is exact to the microsecond.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - _EPOCH
    seconds = delta.days * 86400 + delta.seconds
    return seconds * 1_000_000_000 + delta.microseconds * 1_000


# ============================================================================
# Measurement
# ============================================================================

@dataclass
class Measurement:
    """
    A single line protocol point.

    Tags and fields are plain dicts; encoders sort them at encode time so
    insertion order never affects the output.

    Attributes:
        key: Measurement name, non-empty
        timestamp: Optional nanosecond epoch timestamp
        fields: Field name -> Value
        tags: Tag name -> tag value
    """
    key: str
    timestamp: Optional[int] = None
    fields: Dict[str, Value] = field(default_factory=dict)
    tags: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.key, str) or not self.key:
            raise InvalidMeasurementError("Measurement key must be a non-empty string")
        if self.timestamp is not None:
            self.set_timestamp(self.timestamp)

        # Entries given to the constructor go through the same checks as
        # add_field/add_tag, into dicts the caller does not share.
        supplied_fields, supplied_tags = self.fields, self.tags
        if not isinstance(supplied_fields, Mapping) or not isinstance(supplied_tags, Mapping):
            raise InvalidMeasurementError("Measurement fields and tags must be mappings")
        self.fields, self.tags = {}, {}
        for name, value in supplied_fields.items():
            self.add_field(name, value)
        for name, value in supplied_tags.items():
            self.add_tag(name, value)

    def add_field(self, name: str, value: Value) -> None:
        """
        Add a field, replacing any previous value under the same name.

        Example:
            ```python
            measurement = Measurement("cpu")
            measurement.add_field("load", Float(0.64))
            ```
        """
        if not isinstance(name, str):
            raise InvalidMeasurementError(f"Field name must be str, got {type(name).__name__}")
        if not isinstance(value, _VALUE_TYPES):
            raise InvalidValueError(
                f"Field {name!r} needs a String, Float, Integer or Boolean, got {type(value).__name__}"
            )
        self.fields[name] = value

    def add_tag(self, name: str, value: str) -> None:
        """Add a tag, replacing any previous value under the same name."""
        if not isinstance(name, str) or not isinstance(value, str):
            raise InvalidMeasurementError("Tag names and values must be str")
        self.tags[name] = value

    def set_timestamp(self, timestamp: int) -> None:
        """Set the nanosecond epoch timestamp. Last write wins."""
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise InvalidMeasurementError(f"Timestamp must be int, got {type(timestamp).__name__}")
        if not INT64_MIN <= timestamp <= INT64_MAX:
            raise InvalidMeasurementError(f"Timestamp {timestamp} does not fit in 64 bits")
        self.timestamp = timestamp

    def set_timestamp_from_datetime(self, dt: datetime) -> None:
        if not isinstance(dt, datetime):
            raise InvalidMeasurementError(f"Timestamp must be a datetime, got {type(dt).__name__}")
        self.set_timestamp(datetime_to_nanoseconds(dt))
