#!/usr/bin/env python3
"""
Influent Line Protocol Encoder

Encoder for the InfluxDB line protocol:

    key[,tag=value...] field=value[,field=value...] [timestamp]

Example output:
    cpu,host=server\\ 01,region=eu idle=f,load=0.64,procs=112i,state="ok" 1434055562000000000
"""

from __future__ import annotations

import io
from decimal import Decimal
from enum import Enum
from typing import BinaryIO, Dict, List

from .base import Encoder
from ..exceptions import InvalidMeasurementError
from ..models import Boolean, Float, Integer, Measurement, String, Value


CONTENT_TYPE = "text/plain; charset=utf-8"


class EqualsEscape(Enum):
    """
    How `=` is escaped in tag keys, tag values and field keys.

    LEGACY writes `=` as `\\ `, the same sequence used for a space. Servers
    read that back as a space, so the mapping is lossy; it is kept as the
    default because existing data was written that way. STANDARD writes `\\=`.
    """
    LEGACY = "legacy"
    STANDARD = "standard"


_KEY_ESCAPES = str.maketrans({',': '\\,', ' ': '\\ '})

_TAG_ESCAPES: Dict[EqualsEscape, dict] = {
    EqualsEscape.LEGACY: str.maketrans({',': '\\,', ' ': '\\ ', '=': '\\ '}),
    EqualsEscape.STANDARD: str.maketrans({',': '\\,', ' ': '\\ ', '=': '\\='}),
}


# ============================================================================
# Escaping
# ============================================================================

def escape_key(key: str) -> str:
    """Escape a measurement key: commas and spaces."""
    return key.translate(_KEY_ESCAPES)


def escape_tag(text: str, equals_escape: EqualsEscape = EqualsEscape.LEGACY) -> str:
    """
    Escape a tag key, tag value or field key.

    Args:
        text: Raw text
        equals_escape: Sequence used for `=` (see EqualsEscape)

    Returns:
        Text with commas, spaces and equals signs escaped
    """
    return text.translate(_TAG_ESCAPES[equals_escape])


def _unescape(text: str, escaped: str) -> str:
    # A backslash only starts an escape when followed by one of `escaped`;
    # every other backslash was present in the raw text.
    out: List[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '\\' and i + 1 < len(text) and text[i + 1] in escaped:
            out.append(text[i + 1])
            i += 2
        else:
            out.append(ch)
            i += 1
    return ''.join(out)


def unescape_key(key: str) -> str:
    """Reverse escape_key."""
    return _unescape(key, ', ')


def unescape_tag(text: str, equals_escape: EqualsEscape = EqualsEscape.LEGACY) -> str:
    """
    Reverse escape_tag.

    Under LEGACY, `\\ ` always decodes to a space, so text that originally
    held `=` does not round-trip.
    """
    if equals_escape is EqualsEscape.STANDARD:
        return _unescape(text, ', =')
    return _unescape(text, ', ')


# ============================================================================
# Value Formatting
# ============================================================================

def _format_float(value: float) -> str:
    # repr() is the shortest round-trippable form; Decimal turns any
    # exponent into positional digits.
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def format_value(value: Value) -> str:
    """
    Format a field value.

    Strings are quoted with `"` escaped, integers get an `i` suffix, floats
    use the shortest decimal form and booleans are `t` / `f`.
    """
    if isinstance(value, String):
        return '"' + value.value.replace('"', '\\"') + '"'
    if isinstance(value, Integer):
        return f"{value.value}i"
    if isinstance(value, Float):
        return _format_float(value.value)
    if isinstance(value, Boolean):
        return 't' if value.value else 'f'
    raise TypeError(f"Unsupported field value type: {type(value).__name__}")


# ============================================================================
# Encoder
# ============================================================================

class LineEncoder(Encoder):
    """
    Line protocol encoder for Measurements.

    Tags and fields are emitted in ascending name order, so two measurements
    with the same contents always encode to the same bytes. The encoder holds
    no mutable state and may be shared between threads.
    """

    def __init__(self, equals_escape: EqualsEscape = EqualsEscape.LEGACY):
        self.equals_escape = EqualsEscape(equals_escape)

    def encode(self, measurement: Measurement) -> bytes:
        """
        Encode a Measurement to line protocol bytes.

        Args:
            measurement: The Measurement to encode

        Returns:
            UTF-8 encoded line, without a trailing newline

        Raises:
            InvalidMeasurementError: If the measurement has no fields
        """
        if not measurement.fields:
            raise InvalidMeasurementError(
                f"Measurement {measurement.key!r} has no fields; line protocol requires at least one"
            )

        eq = self.equals_escape
        parts = [escape_key(measurement.key)]

        for name in sorted(measurement.tags):
            parts.append(f",{escape_tag(name, eq)}={escape_tag(measurement.tags[name], eq)}")

        parts.append(' ')
        parts.append(','.join(
            f"{escape_tag(name, eq)}={format_value(measurement.fields[name])}"
            for name in sorted(measurement.fields)
        ))

        if measurement.timestamp is not None:
            parts.append(f" {measurement.timestamp}")

        return ''.join(parts).encode('utf-8')

    def encode_into(self, measurement: Measurement, sink: BinaryIO) -> int:
        """
        Encode a Measurement and write it to a binary sink.

        Short writes from raw or bounded sinks are retried until the whole
        line is written. Errors raised by the sink propagate unchanged; on
        failure the caller should discard whatever the sink already holds.

        Returns:
            Number of bytes written to the sink

        Raises:
            OSError: If the sink stops accepting bytes mid-line
        """
        data = memoryview(self.encode(measurement))
        written = 0
        while written < len(data):
            count = sink.write(data[written:])
            if count is None:
                # BufferedIOBase always writes everything and may return None
                if isinstance(sink, io.BufferedIOBase):
                    written = len(data)
                    break
                raise OSError(f"Sink would block after {written} of {len(data)} bytes")
            if count == 0:
                raise OSError(f"Sink accepted 0 bytes after {written} of {len(data)} bytes")
            written += count
        return written

    def content_type(self) -> str:
        """Return the line protocol content type."""
        return CONTENT_TYPE


_default_encoder = LineEncoder()


def encode(measurement: Measurement) -> bytes:
    """Encode a Measurement with the default LineEncoder."""
    return _default_encoder.encode(measurement)
