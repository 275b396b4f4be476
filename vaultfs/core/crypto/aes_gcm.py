"""
AES-256-GCM Authenticated Encryption
====================================

Default suite for encrypted backends.

Security Properties:
    - 256-bit key (128-bit security level)
    - 96-bit nonce (NIST recommended)
    - 128-bit authentication tag

NIST SP 800-38D Compliance:
    - GCM mode with 96-bit IV
    - Unique nonce for each encryption under same key

WARNING:
    - Random 96-bit nonces stay safe for ~2^32 messages per key
"""

from __future__ import annotations

from typing import Final

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from vaultfs.core.crypto.aead import AeadCipher

AES_KEY_SIZE: Final[int] = 32  # 256 bits
AES_NONCE_SIZE: Final[int] = 12  # 96 bits (NIST recommended for GCM)
AES_TAG_SIZE: Final[int] = 16  # 128 bits


class AesGcmCipher(AeadCipher):
    """
    AES-256-GCM bound to a single key.

    Usage:
        cipher = AesGcmCipher(EncryptionKey.generate())
        blob = cipher.encrypt(b"file content")
        assert cipher.decrypt(blob) == b"file content"
    """

    __slots__ = ()

    name = "aes-256-gcm"
    key_size = AES_KEY_SIZE
    nonce_size = AES_NONCE_SIZE
    tag_size = AES_TAG_SIZE

    def _primitive(self, raw_key: bytes) -> AESGCM:
        return AESGCM(raw_key)
