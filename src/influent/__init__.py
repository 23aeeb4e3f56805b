#!/usr/bin/env python3
"""
Influent - InfluxDB Line Protocol Encoding

Encodes measurements (a key, tags, typed fields and an optional nanosecond
timestamp) into line protocol bytes. Encoding is pure; sending the bytes is
left to a transport.

Usage (Encoding):
    from influent import Measurement, String, Integer, Float, Boolean, encode

    measurement = Measurement("cpu")
    measurement.add_tag("host", "server01")
    measurement.add_field("load", Float(0.64))
    measurement.add_field("procs", Integer(112))
    measurement.set_timestamp(1434055562000000000)

    encode(measurement)
    # b'cpu,host=server01 load=0.64,procs=112i 1434055562000000000'

Usage (Writing):
    import influent
    from influent.transport import SyncFileTransport

    influent.configure(transport=SyncFileTransport("out/points.lp"))
    influent.write(measurement)

Usage (Models):
    from typing import Annotated
    from pydantic import BaseModel
    from influent import TagAttr, FieldAttr, measurement_from_model

    class CpuSample(BaseModel):
        host: Annotated[str, TagAttr]
        load: Annotated[float, FieldAttr]

    measurement_from_model(CpuSample(host="a", load=0.5), key="cpu")

Escaping:
    Measurement keys escape `,` and ` `. Tag keys, tag values and field keys
    also escape `=`, written as `\\ ` by default (EqualsEscape.LEGACY) or as
    `\\=` with EqualsEscape.STANDARD. String field values escape only `"`.
"""

from .core import (
    configure,
    get_config,
    write,
    write_async,
    InfluentConfig,
)

from .models import (
    Measurement,
    Value,
    String,
    Float,
    Integer,
    Boolean,
    value_from_python,
    datetime_to_nanoseconds,
)

from .exceptions import (
    InfluentError,
    InvalidMeasurementError,
    InvalidValueError,
    ConfigurationError,
)

from .encoder import (
    Encoder,
    LineEncoder,
    EqualsEscape,
    encode,
    escape_key,
    escape_tag,
    unescape_key,
    unescape_tag,
    format_value,
)
from .transport import SyncTransport, AsyncTransport, SyncFileTransport, AsyncFileTransport

from .extraction import TagAttr, FieldAttr, TimestampAttr, measurement_from_model


try:
    from influent._version import version as __version__
except ImportError:
    __version__ = "0.0.0+dev"


__all__ = [
    # Core API
    'configure',
    'get_config',
    'write',
    'write_async',
    'InfluentConfig',

    # Models
    'Measurement',
    'Value',
    'String',
    'Float',
    'Integer',
    'Boolean',
    'value_from_python',
    'datetime_to_nanoseconds',

    # Exceptions
    'InfluentError',
    'InvalidMeasurementError',
    'InvalidValueError',
    'ConfigurationError',

    # Encoder
    'Encoder',
    'LineEncoder',
    'EqualsEscape',
    'encode',
    'escape_key',
    'escape_tag',
    'unescape_key',
    'unescape_tag',
    'format_value',

    # Transport
    'SyncTransport',
    'AsyncTransport',
    'SyncFileTransport',
    'AsyncFileTransport',

    # Extraction
    'TagAttr',
    'FieldAttr',
    'TimestampAttr',
    'measurement_from_model',
]
