"""
Symmetric Data-Encryption Key
=============================

Holder for the single 256-bit key an encrypted backend is bound to.

Security Properties:
    - Length validated once, at construction (fail-closed)
    - Stored in a wipeable SecureBuffer, never as a plain bytes attribute
    - repr()/str() are redacted; pickling is refused
    - Constant-time equality

ASCII-safe encoding:
    HEX( VERSION_HEADER(4) | KEY(32) | SHA256(VERSION_HEADER | KEY)(32) )

The checksum catches copy/paste damage; it is not an integrity guarantee
against an attacker, who could recompute it.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Final, Optional

from vaultfs.core.config import VaultFSConfig
from vaultfs.core.crypto.kdf import derive_key
from vaultfs.core.memory import SecureBuffer

KEY_SIZE: Final[int] = 32  # 256 bits
KEY_VERSION_HEADER: Final[bytes] = b"\xde\xf0\x00\x00"
KEY_CHECKSUM_SIZE: Final[int] = 32
ASCII_SAFE_KEY_LENGTH: Final[int] = 2 * (len(KEY_VERSION_HEADER) + KEY_SIZE + KEY_CHECKSUM_SIZE)


class InvalidKeyError(ValueError):
    """Raised when key material is malformed or has the wrong length."""
    pass


class EncryptionKey:
    """
    Immutable 256-bit symmetric key.

    Usage:
        key = EncryptionKey.generate()
        saved = key.to_ascii_safe()
        ...
        key = EncryptionKey.from_ascii_safe(saved)

    Security Notes:
        - reveal() returns a fresh bytes copy; keep it local to the call
        - wipe() makes the key unusable for the rest of the process
    """

    __slots__ = ("_buffer",)

    def __init__(self, key_bytes: bytes | bytearray | memoryview) -> None:
        if not isinstance(key_bytes, (bytes, bytearray, memoryview)):
            raise InvalidKeyError(f"Key material must be bytes, not {type(key_bytes).__name__}")
        if len(key_bytes) != KEY_SIZE:
            raise InvalidKeyError(
                f"Key must be exactly {KEY_SIZE} bytes (got {len(key_bytes)})"
            )
        self._buffer = SecureBuffer.from_bytes(key_bytes)

    @classmethod
    def generate(cls) -> "EncryptionKey":
        """Create a new key from the OS CSPRNG."""
        return cls(secrets.token_bytes(KEY_SIZE))

    @classmethod
    def from_password(
        cls,
        password: str | bytes,
        salt: bytes,
        kdf: Optional[str] = None,
    ) -> "EncryptionKey":
        """
        Derive a key from a password.

        The same password, salt and kdf always yield the same key. The salt
        is not secret but must be stored by the caller.

        Args:
            password: User password
            salt: Random salt (at least 16 bytes)
            kdf: "argon2id" or "pbkdf2-sha256"; defaults to the configured
                crypto.kdf

        Raises:
            ValueError: If the salt is shorter than 16 bytes or kdf is unknown
        """
        algorithm = kdf or VaultFSConfig.get_instance().crypto.kdf
        derived = bytearray(derive_key(password, salt, algorithm=algorithm, length=KEY_SIZE))
        try:
            return cls(derived)
        finally:
            derived[:] = bytes(len(derived))

    @classmethod
    def from_ascii_safe(cls, encoded: str) -> "EncryptionKey":
        """
        Load a key saved with to_ascii_safe().

        Raises:
            InvalidKeyError: If the encoding, header, length or checksum is wrong
        """
        encoded = encoded.strip()
        if len(encoded) != ASCII_SAFE_KEY_LENGTH:
            raise InvalidKeyError("Encoded key has the wrong length")
        try:
            raw = bytes.fromhex(encoded)
        except ValueError as exc:
            raise InvalidKeyError("Encoded key is not valid hex") from exc

        header_end = len(KEY_VERSION_HEADER)
        key_end = header_end + KEY_SIZE
        header, key_bytes, checksum = raw[:header_end], raw[header_end:key_end], raw[key_end:]

        if not hmac.compare_digest(header, KEY_VERSION_HEADER):
            raise InvalidKeyError("Encoded key has an unknown version header")
        expected = hashlib.sha256(header + key_bytes).digest()
        if not hmac.compare_digest(checksum, expected):
            raise InvalidKeyError("Encoded key checksum mismatch")

        return cls(key_bytes)

    def to_ascii_safe(self) -> str:
        """Hex encoding with version header and checksum; see module docstring."""
        payload = KEY_VERSION_HEADER + self.reveal()
        return (payload + hashlib.sha256(payload).digest()).hex()

    def reveal(self) -> bytes:
        """
        Return the raw key bytes.

        Raises:
            InvalidKeyError: If the key has been wiped
        """
        if self._buffer.is_wiped:
            raise InvalidKeyError("Key has been wiped")
        return self._buffer.data

    def wipe(self) -> None:
        self._buffer.wipe()

    @property
    def is_wiped(self) -> bool:
        return self._buffer.is_wiped

    def __len__(self) -> int:
        return KEY_SIZE

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EncryptionKey):
            return NotImplemented
        return hmac.compare_digest(self.reveal(), other.reveal())

    __hash__ = None  # type: ignore[assignment]

    def __reduce__(self):
        raise TypeError("EncryptionKey cannot be pickled")

    def __repr__(self) -> str:
        if self._buffer.is_wiped:
            return "EncryptionKey(WIPED)"
        return "EncryptionKey(<redacted>)"

    __str__ = __repr__
