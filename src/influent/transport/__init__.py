#!/usr/bin/env python3
"""
Influent Transports

Destinations for encoded line protocol data.
"""

from .base import SyncTransport, AsyncTransport
from .file import SyncFileTransport, AsyncFileTransport

__all__ = [
    'SyncTransport',
    'AsyncTransport',
    'SyncFileTransport',
    'AsyncFileTransport',
]
