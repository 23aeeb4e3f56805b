#!/usr/bin/env python3
"""Tests for the file transports."""

import sys
sys.path.insert(0, "src")

import threading

import pytest

from influent import Measurement, Integer, encode
from influent.transport import SyncFileTransport, AsyncFileTransport


def line(i):
    measurement = Measurement("key")
    measurement.add_field("i", Integer(i))
    return encode(measurement)


# ============================================================================
# Sync File Transport
# ============================================================================

def test_sync_file_transport_appends_lines(tmp_path):
    path = tmp_path / "nested" / "points.lp"
    with SyncFileTransport(path) as transport:
        transport.send(line(1), "text/plain")
        transport.send(line(2), "text/plain")

    assert path.read_bytes() == b"key i=1i\nkey i=2i\n"


def test_sync_file_transport_send_after_close(tmp_path):
    transport = SyncFileTransport(tmp_path / "points.lp")
    transport.close()
    transport.close()
    with pytest.raises(ValueError):
        transport.send(line(1), "text/plain")


def test_sync_file_transport_concurrent_writes(tmp_path):
    path = tmp_path / "points.lp"
    transport = SyncFileTransport(path)

    def worker(start):
        for i in range(start, start + 50):
            transport.send(line(i), "text/plain")

    threads = [threading.Thread(target=worker, args=(n * 50,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    transport.close()

    lines = path.read_bytes().splitlines()
    assert sorted(lines) == sorted(line(i) for i in range(200))


# ============================================================================
# Async File Transport
# ============================================================================

@pytest.mark.asyncio
async def test_async_file_transport_appends_lines(tmp_path):
    path = tmp_path / "points.lp"
    async with AsyncFileTransport(path) as transport:
        await transport.send(line(1), "text/plain")
        await transport.send(line(2), "text/plain")

    assert path.read_bytes() == b"key i=1i\nkey i=2i\n"


@pytest.mark.asyncio
async def test_async_file_transport_send_after_close(tmp_path):
    transport = AsyncFileTransport(tmp_path / "points.lp")
    await transport.close()
    with pytest.raises(ValueError):
        await transport.send(line(1), "text/plain")
