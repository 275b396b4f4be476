"""
Memory Zeroization Utilities
============================

Explicit wiping of mutable buffers that held plaintext or key material.

Key Concepts:
- Zeroization: overwriting memory with zeros/patterns
- Guard: automatic cleanup on scope exit, normal or exceptional
"""

from __future__ import annotations

import ctypes
from contextlib import contextmanager
from typing import Iterator


def secure_zero(data: bytearray | memoryview) -> None:
    """
    Securely zero a byte buffer.

    Uses ctypes for direct memory access where possible,
    with fallback to Python-level zeroing.

    Security Notes:
        - This is best-effort; Python may have copies
        - Buffer must be mutable (bytearray, not bytes)
    """
    if len(data) == 0:
        return

    if isinstance(data, memoryview):
        if data.readonly:
            raise TypeError("Cannot zero a read-only memoryview")
        data.cast("B")[:] = bytes(data.nbytes)
        return

    try:
        address = ctypes.addressof((ctypes.c_char * len(data)).from_buffer(data))
        ctypes.memset(address, 0, len(data))
        ctypes.memset(address, 0xFF, len(data))
        ctypes.memset(address, 0, len(data))
    except (TypeError, ValueError, BufferError):
        # exported buffers refuse from_buffer() while a view is held
        for i in range(len(data)):
            data[i] = 0


@contextmanager
def ZeroizeContext(*buffers: bytearray) -> Iterator[None]:
    """
    Context manager that zeroizes buffers on exit.

    Usage:
        staging = bytearray()
        with ZeroizeContext(staging):
            staging += stream.read()
            ciphertext = cipher.encrypt(staging)
        # staging is now zeroed
    """
    try:
        yield
    finally:
        for buf in buffers:
            secure_zero(buf)
