#!/usr/bin/env python3
"""
Influent Core API

Global configuration and helpers that encode a Measurement and hand it to
the configured transport.
"""

from __future__ import annotations

import inspect
import logging
import threading
from dataclasses import dataclass
from typing import Optional, Union

from .encoder import Encoder, EqualsEscape, LineEncoder
from .exceptions import ConfigurationError
from .models import Measurement
from .transport import AsyncTransport, SyncTransport


logger = logging.getLogger(__name__)


# ============================================================================
# Global Configuration
# ============================================================================

@dataclass
class InfluentConfig:
    """
    Global configuration for Influent writes.

    Attributes:
        enabled: Whether write()/write_async() send anything
        encoder: Encoder instance to use
        transport: Sync or async transport (required for writes)
        equals_escape: `=` escaping for the default encoder
    """
    enabled: bool = True
    encoder: Optional[Encoder] = None
    transport: Optional[Union[SyncTransport, AsyncTransport]] = None
    equals_escape: EqualsEscape = EqualsEscape.LEGACY

    def __post_init__(self):
        """Set default encoder if not provided."""
        if self.encoder is None:
            self.encoder = LineEncoder(equals_escape=self.equals_escape)


_config: Optional[InfluentConfig] = None
_config_lock = threading.Lock()


def configure(
    enabled: bool = True,
    encoder: Optional[Encoder] = None,
    transport: Optional[Union[SyncTransport, AsyncTransport]] = None,
    equals_escape: EqualsEscape = EqualsEscape.LEGACY,
) -> InfluentConfig:
    """
    Configure Influent writes.

    Args:
        enabled: Whether writes are sent (default: True)
        encoder: Encoder instance (defaults to LineEncoder)
        transport: Transport that receives encoded lines
        equals_escape: `=` escaping used when no encoder is given

    Example:
        ```python
        from influent.transport import SyncFileTransport

        influent.configure(transport=SyncFileTransport("out/points.lp"))
        ```
    """
    global _config

    config = InfluentConfig(
        enabled=enabled,
        encoder=encoder,
        transport=transport,
        equals_escape=EqualsEscape(equals_escape),
    )
    with _config_lock:
        _config = config

    logger.info(
        f"Influent configured: enabled={enabled}, encoder={type(config.encoder).__name__}, "
        f"transport={type(transport).__name__ if transport is not None else None}"
    )
    return config


def get_config() -> InfluentConfig:
    """Get the current configuration, creating the default one if needed."""
    global _config
    with _config_lock:
        if _config is None:
            _config = InfluentConfig()
        return _config


def _is_async_transport(transport) -> bool:
    return inspect.iscoroutinefunction(getattr(transport, 'send', None))


def _prepare(measurement: Measurement, want_async: bool) -> Optional[tuple]:
    config = get_config()

    if not config.enabled:
        return None

    if config.transport is None:
        raise ConfigurationError("No transport configured; call influent.configure(transport=...)")

    if _is_async_transport(config.transport) != want_async:
        kind = "an async" if want_async else "a sync"
        raise ConfigurationError(
            f"{type(config.transport).__name__} is not {kind} transport; "
            f"use {'write()' if want_async else 'write_async()'} instead"
        )

    try:
        data = config.encoder.encode(measurement)
    except Exception as e:
        logger.error(f"Failed to encode measurement {measurement.key!r}: {e}")
        raise

    return config, data


def write(measurement: Measurement) -> None:
    """
    Encode a Measurement and send it through the configured sync transport.

    Encoder and transport errors are logged and re-raised unchanged.
    """
    prepared = _prepare(measurement, want_async=False)
    if prepared is None:
        return
    config, data = prepared

    try:
        config.transport.send(data, config.encoder.content_type())
    except Exception as e:
        logger.error(f"Failed to send measurement {measurement.key!r}: {e}")
        raise

    logger.debug(f"Wrote measurement {measurement.key!r} ({len(data)} bytes)")


async def write_async(measurement: Measurement) -> None:
    """Encode a Measurement and send it through the configured async transport."""
    prepared = _prepare(measurement, want_async=True)
    if prepared is None:
        return
    config, data = prepared

    try:
        await config.transport.send(data, config.encoder.content_type())
    except Exception as e:
        logger.error(f"Failed to send measurement {measurement.key!r}: {e}")
        raise

    logger.debug(f"Wrote measurement {measurement.key!r} ({len(data)} bytes)")
