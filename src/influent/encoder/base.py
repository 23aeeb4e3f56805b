#!/usr/bin/env python3
"""
Influent Encoder Interface

Anything that turns a Measurement into one wire-format record satisfies
Encoder and can be passed to influent.configure(encoder=...).
"""

from __future__ import annotations

from typing import Protocol

from ..models import Measurement


class Encoder(Protocol):
    """
    Turns a Measurement into the bytes of a single record.

    Implementations must be pure: the measurement is only read, nothing is
    written anywhere, and equal measurements give equal bytes no matter in
    which order their tags and fields were added. Validation failures are
    raised as InfluentError subclasses before any output exists.
    """

    def encode(self, measurement: Measurement) -> bytes:
        """Return the encoded record, without a record separator."""
        ...

    def content_type(self) -> str:
        """MIME type transports should attach to the encoded bytes."""
        ...
