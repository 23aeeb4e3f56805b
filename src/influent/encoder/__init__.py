#!/usr/bin/env python3
"""
Influent Encoders

Encoders for serializing Measurements to wire formats.
"""

from .base import Encoder
from .line import (
    LineEncoder,
    EqualsEscape,
    encode,
    escape_key,
    escape_tag,
    unescape_key,
    unescape_tag,
    format_value,
)

__all__ = [
    'Encoder',
    'LineEncoder',
    'EqualsEscape',
    'encode',
    'escape_key',
    'escape_tag',
    'unescape_key',
    'unescape_tag',
    'format_value',
]
