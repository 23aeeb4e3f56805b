#!/usr/bin/env python3
"""
Influent exceptions.

All Influent exceptions inherit from InfluentError for easy catching.
"""


class InfluentError(Exception):
    """Base exception for all Influent errors."""


class InvalidMeasurementError(InfluentError, ValueError):
    """Measurement cannot be encoded (empty key, no fields, bad timestamp)."""


class InvalidValueError(InfluentError, ValueError):
    """A field value falls outside what the line protocol can carry."""


class ConfigurationError(InfluentError):
    """Write helpers used without a usable encoder or transport."""
