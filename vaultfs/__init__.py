"""
VaultFS - Transparent Encryption for Pluggable Storage
======================================================

Wraps any StorageBackend so that content is encrypted before it is
stored and decrypted when it is read back.

Security Notice:
- No secrets are logged
- Fail-closed design pattern
- Keys never appear in repr(), str() or pickles
"""

from vaultfs.core.config import VaultFSConfig
from vaultfs.core.crypto import (
    AuthenticationError,
    DecryptionError,
    EncryptionError,
    EncryptionKey,
    InvalidKeyError,
)
from vaultfs.core.logging import configure_logging, get_secure_logger
from vaultfs.storage import (
    EncryptedBackend,
    MemoryBackend,
    PassthroughBackend,
    StorageBackend,
    StorageError,
    StorageExistsError,
    StorageNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "VaultFSConfig",
    "configure_logging",
    "get_secure_logger",
    "EncryptionKey",
    "InvalidKeyError",
    "EncryptionError",
    "DecryptionError",
    "AuthenticationError",
    "StorageBackend",
    "PassthroughBackend",
    "EncryptedBackend",
    "MemoryBackend",
    "StorageError",
    "StorageExistsError",
    "StorageNotFoundError",
    "__version__",
]
