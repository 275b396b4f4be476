"""
Authenticated Encryption Base
=============================

Shared blob handling for the AEAD suites a backend can be bound to.

Blob Format:
    NONCE (nonce_size) | CIPHERTEXT (len(plaintext)) | TAG (tag_size)

No header or version byte is added; the suite is a property of the
backend configuration, not of the stored blob.

Security Properties:
    - Fresh random nonce per encrypt() call (never reused)
    - Tag verified before any plaintext is returned (all-or-nothing)
    - Error messages never include key material
"""

from __future__ import annotations

import secrets
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

from cryptography.exceptions import InvalidTag

from vaultfs.core.crypto.key import EncryptionKey, InvalidKeyError


class EncryptionError(Exception):
    """Raised when encryption fails."""
    pass


class DecryptionError(Exception):
    """
    Raised when a blob cannot be decrypted.

    Covers structurally malformed blobs (too short to hold nonce + tag).
    """
    pass


class AuthenticationError(DecryptionError):
    """
    Raised when the authentication tag does not verify.

    This indicates tampering, truncation or a different key.
    """
    pass


class AeadCipher(ABC):
    """
    AEAD cipher bound to one EncryptionKey.

    Subclasses set the suite constants and build the primitive from the
    raw key; encrypt/decrypt and the blob layout live here.
    """

    __slots__ = ("_key",)

    name: ClassVar[str]
    key_size: ClassVar[int]
    nonce_size: ClassVar[int]
    tag_size: ClassVar[int]

    def __init__(self, key: EncryptionKey) -> None:
        if not isinstance(key, EncryptionKey):
            raise TypeError(f"key must be an EncryptionKey, not {type(key).__name__}")
        if len(key) != self.key_size:
            raise InvalidKeyError(f"{self.name} requires a {self.key_size}-byte key")
        self._key = key

    @abstractmethod
    def _primitive(self, raw_key: bytes) -> Any:
        """Build the cryptography AEAD object for `raw_key`."""

    @classmethod
    def generate_nonce(cls) -> bytes:
        """Cryptographically secure random nonce for one encryption."""
        return secrets.token_bytes(cls.nonce_size)

    @property
    def overhead(self) -> int:
        """Bytes added to every plaintext."""
        return self.nonce_size + self.tag_size

    def encrypt(self, plaintext: bytes | bytearray, aad: Optional[bytes] = None) -> bytes:
        """
        Encrypt plaintext (can be empty).

        Returns:
            nonce || ciphertext || tag

        Raises:
            EncryptionError: If the primitive rejects the input
        """
        aead = self._primitive(self._key.reveal())
        nonce = self.generate_nonce()
        try:
            ciphertext = aead.encrypt(nonce, bytes(plaintext), aad)
        except (ValueError, TypeError, OverflowError) as exc:
            raise EncryptionError(f"{self.name} encryption failed") from exc
        return nonce + ciphertext

    def decrypt(self, blob: bytes | bytearray, aad: Optional[bytes] = None) -> bytes:
        """
        Verify and decrypt a blob produced by encrypt().

        Raises:
            DecryptionError: If the blob is too short to be valid
            AuthenticationError: If the tag does not verify

        Security Notes:
            - Do NOT catch AuthenticationError silently
        """
        if len(blob) < self.overhead:
            raise DecryptionError(
                f"Ciphertext too short ({len(blob)} bytes, need at least {self.overhead})"
            )

        aead = self._primitive(self._key.reveal())
        nonce = bytes(blob[: self.nonce_size])
        ciphertext = bytes(blob[self.nonce_size :])
        try:
            return aead.decrypt(nonce, ciphertext, aad)
        except InvalidTag as exc:
            raise AuthenticationError(
                "Authentication failed: data was tampered with, truncated, or encrypted under a different key"
            ) from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
