"""
VaultFS Memory Security Module
==============================

Provides secure memory handling primitives.

Components:
- secure_memory.py: wipeable, non-printing buffers for key material
- zeroization.py: wiping helpers for plaintext staging buffers

WARNING:
- Python's memory model doesn't guarantee secure erasure
- These are best-effort mitigations
"""

from vaultfs.core.memory.secure_memory import SecureBuffer
from vaultfs.core.memory.zeroization import secure_zero, ZeroizeContext

__all__ = [
    "SecureBuffer",
    "secure_zero",
    "ZeroizeContext",
]
