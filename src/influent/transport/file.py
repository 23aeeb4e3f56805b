#!/usr/bin/env python3
"""
Influent File Transports

Append encoded measurements to a file, one line each. The result can be
loaded with `influx write --file`.
"""

from __future__ import annotations

import asyncio
import threading
from pathlib import Path


class SyncFileTransport:
    """
    Synchronous file transport using blocking I/O.

    Thread-safe with a lock for concurrent writes.
    """

    def __init__(self, filepath: str | Path):
        """
        Initialize the file transport.

        Args:
            filepath: Path to the output file. Created if it doesn't exist.
        """
        self.filepath = Path(filepath)
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.filepath, 'ab')
        self._lock = threading.Lock()

    def send(self, data: bytes, content_type: str) -> None:
        """Append data and a newline (blocking call)."""
        with self._lock:
            if self._file is None:
                raise ValueError(f"Transport for {self.filepath} is closed")
            self._file.write(data + b'\n')
            self._file.flush()

    def close(self) -> None:
        """Close the file handle."""
        with self._lock:
            if self._file is not None and not self._file.closed:
                self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class AsyncFileTransport:
    """
    Asynchronous file transport.

    Uses asyncio.to_thread() so file writes don't block the event loop.
    """

    def __init__(self, filepath: str | Path):
        self.filepath = Path(filepath)
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.filepath, 'ab')
        self._lock = asyncio.Lock()

    async def send(self, data: bytes, content_type: str) -> None:
        """Append data and a newline without blocking the loop."""
        async with self._lock:
            if self._file is None:
                raise ValueError(f"Transport for {self.filepath} is closed")
            await asyncio.to_thread(self._write_sync, data)

    def _write_sync(self, data: bytes) -> None:
        self._file.write(data + b'\n')
        self._file.flush()

    async def close(self) -> None:
        """Close the file handle asynchronously."""
        async with self._lock:
            if self._file is not None and not self._file.closed:
                await asyncio.to_thread(self._file.close)
            self._file = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
