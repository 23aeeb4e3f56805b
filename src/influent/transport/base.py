#!/usr/bin/env python3
"""
Influent Transport Interface

Protocols for delivering encoded measurements. Network transports live
outside this package; anything matching these protocols can be configured.
"""

from __future__ import annotations

from typing import Protocol


class SyncTransport(Protocol):
    """
    Protocol for synchronous transports (blocking I/O).

    Use these with influent.write().
    """

    def send(self, data: bytes, content_type: str) -> None:
        """
        Send one encoded measurement (blocking).

        Args:
            data: A single encoded line, without trailing newline
            content_type: MIME content type of the data
        """
        ...

    def close(self) -> None:
        """Close the transport and release resources."""
        ...


class AsyncTransport(Protocol):
    """
    Protocol for asynchronous transports.

    Use these with influent.write_async().
    """

    async def send(self, data: bytes, content_type: str) -> None:
        """
        Send one encoded measurement (async).

        Args:
            data: A single encoded line, without trailing newline
            content_type: MIME content type of the data
        """
        ...

    async def close(self) -> None:
        """Close the transport and release resources."""
        ...
