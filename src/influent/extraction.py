#!/usr/bin/env python3
"""
Influent Measurement Extraction

Build Measurements from annotated pydantic models or dataclasses:

    class CpuSample(BaseModel):
        __measurement__: ClassVar[str] = "cpu"

        host: Annotated[str, TagAttr]
        load: Annotated[float, FieldAttr]
        taken_at: Annotated[int, TimestampAttr]
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any, Iterator, Optional, Tuple, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from .exceptions import InvalidMeasurementError
from .models import Measurement, value_from_python


logger = logging.getLogger(__name__)


# ============================================================================
# Annotation Markers
# ============================================================================

@dataclass(frozen=True)
class TagAttr:
    """
    Mark an attribute as a tag:

        host: Annotated[str, TagAttr]
        host: Annotated[str, TagAttr(name="hostname")]

    Attributes:
        name: Optional tag name (defaults to the attribute name)
    """
    name: Optional[str] = None


@dataclass(frozen=True)
class FieldAttr:
    """
    Mark an attribute as a field. Values go through value_from_python.

    Attributes:
        name: Optional field name (defaults to the attribute name)
    """
    name: Optional[str] = None


@dataclass(frozen=True)
class TimestampAttr:
    """Mark an int (nanoseconds) or datetime attribute as the timestamp."""


_MARKERS = (TagAttr, FieldAttr, TimestampAttr)


def _marker_of(metadata: Tuple[Any, ...]) -> Optional[Any]:
    for item in metadata:
        # Markers can be given as the class itself or an instance
        if item in _MARKERS:
            return item()
        if isinstance(item, _MARKERS):
            return item
    return None


def _annotated_attributes(obj: Any) -> Iterator[Tuple[str, Any]]:
    """Yield (attribute name, marker) for every marked attribute of obj."""
    cls = type(obj)

    if isinstance(obj, BaseModel):
        # Pydantic moves Annotated extras into FieldInfo.metadata
        for attr_name, info in cls.model_fields.items():
            marker = _marker_of(tuple(info.metadata))
            if marker is not None:
                yield attr_name, marker
        return

    if dataclasses.is_dataclass(obj):
        hints = get_type_hints(cls, include_extras=True)
        for f in dataclasses.fields(obj):
            hint = hints.get(f.name)
            if get_origin(hint) is Annotated:
                marker = _marker_of(get_args(hint)[1:])
                if marker is not None:
                    yield f.name, marker
        return

    raise TypeError(f"Expected a pydantic model or dataclass instance, got {cls.__name__}")


# ============================================================================
# Extraction
# ============================================================================

def measurement_from_model(
    obj: Any,
    key: Optional[str] = None,
    timestamp: Optional[int] = None,
) -> Measurement:
    """
    Build a Measurement from an annotated model instance.

    Args:
        obj: Pydantic model or dataclass instance
        key: Measurement key (defaults to `__measurement__` or the class name)
        timestamp: Explicit timestamp, overrides any TimestampAttr attribute

    Returns:
        A new Measurement. Attributes that are None are skipped.

    Raises:
        InvalidMeasurementError: If more than one TimestampAttr is present
    """
    cls = type(obj)
    measurement = Measurement(key or getattr(cls, '__measurement__', None) or cls.__name__)
    seen_timestamp = False

    for attr_name, marker in _annotated_attributes(obj):
        value = getattr(obj, attr_name)

        if isinstance(marker, TimestampAttr):
            if seen_timestamp:
                raise InvalidMeasurementError(f"{cls.__name__} has more than one TimestampAttr")
            seen_timestamp = True
            if value is None or timestamp is not None:
                continue
            if isinstance(value, datetime):
                measurement.set_timestamp_from_datetime(value)
            elif isinstance(value, int) and not isinstance(value, bool):
                measurement.set_timestamp(value)
            else:
                raise InvalidMeasurementError(
                    f"{cls.__name__}.{attr_name} must be an int or datetime timestamp, "
                    f"got {type(value).__name__}"
                )
            continue

        if value is None:
            logger.debug(f"Skipping {cls.__name__}.{attr_name}: value is None")
            continue

        if isinstance(marker, TagAttr):
            measurement.add_tag(marker.name or attr_name, str(value))
        else:
            measurement.add_field(marker.name or attr_name, value_from_python(value))

    if timestamp is not None:
        measurement.set_timestamp(timestamp)

    return measurement
