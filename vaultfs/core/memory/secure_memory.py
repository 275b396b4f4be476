"""
Secure Memory Buffers
=====================

Wipeable byte buffers for key material.

Security Properties:
- Explicit zeroization (don't rely on Python GC)
- Memory locking where supported (prevent swapping)
- Redacted representation (contents never appear in repr/str)

Limitations:
- Python's memory model copies data internally
- Bytes handed out through .data are ordinary immutable copies
- Best-effort security, not guaranteed
"""

from __future__ import annotations

import ctypes
import platform
from typing import Final

from vaultfs.core.memory.zeroization import secure_zero


IS_WINDOWS: Final[bool] = platform.system() == "Windows"
IS_LINUX: Final[bool] = platform.system() == "Linux"
IS_MACOS: Final[bool] = platform.system() == "Darwin"

MIN_BUFFER_SIZE: Final[int] = 32
MAX_BUFFER_SIZE: Final[int] = 1024 * 1024  # 1 MB, keys only


def _libc() -> ctypes.CDLL:
    return ctypes.CDLL("libc.so.6" if IS_LINUX else "libc.dylib", use_errno=True)


def _address_of(buffer: bytearray) -> int:
    return ctypes.addressof((ctypes.c_char * len(buffer)).from_buffer(buffer))


def _mlock(buffer: bytearray) -> bool:
    """
    Lock the pages backing `buffer` so they are not swapped out.

    Returns True if successful, False otherwise.
    """
    try:
        address, size = _address_of(buffer), len(buffer)
        if IS_WINDOWS:
            kernel32 = ctypes.windll.kernel32
            return bool(kernel32.VirtualLock(ctypes.c_void_p(address), ctypes.c_size_t(size)))
        if IS_LINUX or IS_MACOS:
            return _libc().mlock(ctypes.c_void_p(address), ctypes.c_size_t(size)) == 0
    except (OSError, AttributeError, ValueError, TypeError):
        pass
    return False


def _munlock(buffer: bytearray) -> None:
    try:
        address, size = _address_of(buffer), len(buffer)
        if IS_WINDOWS:
            ctypes.windll.kernel32.VirtualUnlock(ctypes.c_void_p(address), ctypes.c_size_t(size))
        elif IS_LINUX or IS_MACOS:
            _libc().munlock(ctypes.c_void_p(address), ctypes.c_size_t(size))
    except (OSError, AttributeError, ValueError, TypeError):
        pass


class SecureBuffer:
    """
    Fixed-capacity byte buffer that is zeroed on wipe().

    The buffer never prints its contents: repr() and str() only report the
    capacity and lock state, so an instance that ends up in a traceback,
    a log line or a debugger dump does not disclose what it holds.

    Usage:
        buf = SecureBuffer.from_bytes(key_material)
        try:
            use(buf.data)
        finally:
            buf.wipe()
    """

    __slots__ = ("_buffer", "_length", "_wiped", "_locked", "__weakref__")

    def __init__(self, size: int = MIN_BUFFER_SIZE, lock_memory: bool = True) -> None:
        size = max(size, MIN_BUFFER_SIZE)
        if size > MAX_BUFFER_SIZE:
            raise ValueError(f"Buffer too large (max {MAX_BUFFER_SIZE})")

        self._buffer = bytearray(size)
        self._length = 0
        self._wiped = False
        self._locked = _mlock(self._buffer) if lock_memory else False

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview, lock_memory: bool = True) -> "SecureBuffer":
        """
        Copy `data` into a new buffer.

        The source is NOT wiped - caller is responsible.
        """
        buf = cls(size=len(data), lock_memory=lock_memory)
        buf._buffer[: len(data)] = data
        buf._length = len(data)
        return buf

    @property
    def data(self) -> bytes:
        """Copy of the stored bytes."""
        if self._wiped:
            raise ValueError("Buffer has been wiped")
        return bytes(self._buffer[: self._length])

    @property
    def data_length(self) -> int:
        return self._length

    @property
    def is_wiped(self) -> bool:
        return self._wiped

    @property
    def is_locked(self) -> bool:
        return self._locked

    def wipe(self) -> None:
        """Overwrite the whole buffer with zeros and release the page lock."""
        if self._wiped:
            return

        secure_zero(self._buffer)
        if self._locked:
            _munlock(self._buffer)
            self._locked = False

        self._length = 0
        self._wiped = True

    def __enter__(self) -> "SecureBuffer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.wipe()

    def __del__(self) -> None:
        try:
            self.wipe()
        except Exception:
            pass

    def __len__(self) -> int:
        return self._length

    def __reduce__(self):
        raise TypeError("SecureBuffer cannot be pickled")

    def __repr__(self) -> str:
        if self._wiped:
            return "SecureBuffer(WIPED)"
        return f"SecureBuffer(size={len(self._buffer)}, locked={self._locked})"

    __str__ = __repr__

