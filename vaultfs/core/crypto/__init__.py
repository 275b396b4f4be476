"""
VaultFS Cryptographic Core
==========================

Authenticated encryption for content stored through an encrypted backend.

Suites:
    1. AES-256-GCM: default
    2. ChaCha20-Poly1305: alternative for hosts without AES-NI

Security Properties:
    - All encryption is authenticated (AEAD)
    - Keys live in wipeable, non-printing holders
    - Secure RNG for all nonces
    - Memory-hard password derivation (Argon2id)

WARNING: This module handles sensitive cryptographic material.
         Incorrect usage can compromise security.
"""

from typing import Final

from vaultfs.core.crypto.aead import (
    AeadCipher,
    AuthenticationError,
    DecryptionError,
    EncryptionError,
)
from vaultfs.core.crypto.aes_gcm import AesGcmCipher
from vaultfs.core.crypto.chacha20 import ChaCha20Cipher
from vaultfs.core.crypto.key import EncryptionKey, InvalidKeyError

CIPHER_SUITES: Final[dict[str, type[AeadCipher]]] = {
    AesGcmCipher.name: AesGcmCipher,
    ChaCha20Cipher.name: ChaCha20Cipher,
}


def get_cipher(name: str, key: EncryptionKey) -> AeadCipher:
    """
    Build the named suite bound to `key`.

    Raises:
        ValueError: If the suite name is unknown
    """
    try:
        suite = CIPHER_SUITES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown cipher suite {name!r} (expected one of {sorted(CIPHER_SUITES)})"
        ) from None
    return suite(key)


__all__ = [
    "AeadCipher",
    "AesGcmCipher",
    "ChaCha20Cipher",
    "CIPHER_SUITES",
    "get_cipher",
    "EncryptionKey",
    "InvalidKeyError",
    "EncryptionError",
    "DecryptionError",
    "AuthenticationError",
]
