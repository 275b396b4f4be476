"""
VaultFS Storage Module
======================

Storage backend interface, decorators and the in-memory backend.

Components:
- base.py: StorageBackend interface and failure signals
- passthrough.py: forwarding decorator base
- encrypted.py: transparent encryption decorator
- memory.py: in-process backend
"""

from vaultfs.storage.base import (
    VISIBILITY_PRIVATE,
    VISIBILITY_PUBLIC,
    StorageBackend,
    StorageError,
    StorageExistsError,
    StorageNotFoundError,
)
from vaultfs.storage.encrypted import EncryptedBackend
from vaultfs.storage.memory import MemoryBackend
from vaultfs.storage.passthrough import PassthroughBackend

__all__ = [
    "StorageBackend",
    "StorageError",
    "StorageExistsError",
    "StorageNotFoundError",
    "VISIBILITY_PUBLIC",
    "VISIBILITY_PRIVATE",
    "PassthroughBackend",
    "EncryptedBackend",
    "MemoryBackend",
]
