"""
Encrypted Backend
=================

Transparent encryption in front of any StorageBackend.

Content-bearing operations are intercepted: plaintext is encrypted
before it reaches the wrapped backend and ciphertext is decrypted
before it is returned. Everything else (existence, listing, rename,
copy, delete, directories, visibility, timestamps) passes through.

Size and Type:
    The wrapped backend only ever holds ciphertext, so the size and
    content-sniffed mimetype it reports describe the ciphertext. They
    are stripped from metadata; get_size() decrypts to measure and
    get_mimetype() goes by extension alone.

Streams:
    Streams are buffered in full and transformed as one AEAD message.
    No plaintext byte is released before the whole message has been
    authenticated, at the cost of holding plaintext and ciphertext in
    memory together (ciphertext spools to a temporary file above
    CryptoConfig.spool_max_size).
"""

from __future__ import annotations

import io
import logging
import tempfile
from typing import Any, BinaryIO, Final, Optional

from vaultfs.core.config import VaultFSConfig
from vaultfs.core.crypto import (
    AeadCipher,
    DecryptionError,
    EncryptionKey,
    get_cipher,
)
from vaultfs.core.memory import ZeroizeContext
from vaultfs.storage.base import StorageBackend, WriteOptions
from vaultfs.storage.passthrough import PassthroughBackend
from vaultfs.utils.mime import guess_mimetype_by_extension
from vaultfs.utils.validators import normalize_path

# Metadata fields that describe stored bytes rather than plaintext
CONTENT_DERIVED_FIELDS: Final[frozenset[str]] = frozenset({"size", "mimetype"})


class EncryptedBackend(PassthroughBackend):
    """
    Encrypts/decrypts transparently for a wrapped backend.

    Usage:
        key = EncryptionKey.generate()
        backend = EncryptedBackend(MemoryBackend(), key)
        backend.write("test.png", b"file content")
        backend.read("test.png")["contents"]   # b"file content"
        backend.get_size("test.png")["size"]   # 12

    Security Notes:
        - The key is copied into a redacted EncryptionKey owned by the
          backend; repr() of the backend never shows it
        - Decryption failures are raised, never turned into empty content
        - The backend is stateless between calls and safe to share
          across threads when the wrapped backend is
    """

    def __init__(
        self,
        backend: StorageBackend,
        key: EncryptionKey | bytes | bytearray,
        cipher: Optional[str] = None,
        config: Optional[VaultFSConfig] = None,
    ) -> None:
        """
        Args:
            backend: The backend to encrypt
            key: 32-byte key, raw or wrapped in EncryptionKey
            cipher: Suite name; defaults to config.crypto.cipher
            config: Settings; defaults to VaultFSConfig.get_instance()

        Raises:
            InvalidKeyError: If the key has the wrong size or was wiped
            ValueError: If the cipher suite is unknown
            TypeError: If backend is not a StorageBackend
        """
        # Private holder: wiping the caller's key must not disable this backend
        if isinstance(key, EncryptionKey):
            key = EncryptionKey(key.reveal())
        else:
            key = EncryptionKey(key)

        config = config or VaultFSConfig.get_instance()
        self._cipher: AeadCipher = get_cipher(cipher or config.crypto.cipher, key)
        self._chunk_size = config.crypto.stream_chunk_size
        self._spool_max_size = config.crypto.spool_max_size
        self._default_mimetype = config.storage.default_mimetype
        self._log = logging.getLogger("vaultfs.storage.encrypted")

        super().__init__(backend)

    @property
    def cipher_name(self) -> str:
        return self._cipher.name

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def get_metadata(self, path: str) -> dict[str, Any]:
        metadata = self.backend.get_metadata(path)
        return {k: v for k, v in metadata.items() if k not in CONTENT_DERIVED_FIELDS}

    def get_mimetype(self, path: str) -> dict[str, Any]:
        mimetype = guess_mimetype_by_extension(path, default=self._default_mimetype)
        return {"path": normalize_path(path), "mimetype": mimetype}

    def get_size(self, path: str) -> dict[str, Any]:
        result = self.read(path)
        return {"path": result.get("path", path), "size": len(result["contents"])}

    def list_contents(self, directory: str = "", recursive: bool = False) -> list[dict[str, Any]]:
        return [
            {k: v for k, v in entry.items() if k not in CONTENT_DERIVED_FIELDS}
            for entry in self.backend.list_contents(directory, recursive)
        ]

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read(self, path: str) -> dict[str, Any]:
        result = dict(self.backend.read(path))
        result["contents"] = self._decrypt_for(path, result["contents"])
        return self._strip_content_derived(result)

    def read_stream(self, path: str) -> dict[str, Any]:
        result = dict(self.backend.read_stream(path))
        stream = result["stream"]
        try:
            result["stream"] = self._decrypt_stream_for(path, stream)
        finally:
            stream.close()
        return self._strip_content_derived(result)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def write(self, path: str, contents: bytes, options: WriteOptions = None) -> dict[str, Any]:
        result = self.backend.write(path, self._encrypt_for(path, contents), options)
        return self._strip_content_derived(dict(result))

    def write_stream(self, path: str, stream: BinaryIO, options: WriteOptions = None) -> dict[str, Any]:
        with self.encrypt_stream(stream) as encrypted:
            self._log.debug("Encrypted stream for %s", path)
            result = self.backend.write_stream(path, encrypted, options)
        return self._strip_content_derived(dict(result))

    def update(self, path: str, contents: bytes, options: WriteOptions = None) -> dict[str, Any]:
        result = self.backend.update(path, self._encrypt_for(path, contents), options)
        return self._strip_content_derived(dict(result))

    def update_stream(self, path: str, stream: BinaryIO, options: WriteOptions = None) -> dict[str, Any]:
        with self.encrypt_stream(stream) as encrypted:
            self._log.debug("Encrypted stream for %s", path)
            result = self.backend.update_stream(path, encrypted, options)
        return self._strip_content_derived(dict(result))

    # ------------------------------------------------------------------
    # Whole-buffer and stream transforms
    # ------------------------------------------------------------------

    def encrypt(self, plaintext: bytes | bytearray) -> bytes:
        """Encrypt a buffer; see AeadCipher.encrypt()."""
        return self._cipher.encrypt(plaintext)

    def decrypt(self, ciphertext: bytes | bytearray) -> bytes:
        """
        Decrypt a buffer.

        Raises:
            DecryptionError: If the blob is malformed
            AuthenticationError: If the blob fails authentication
        """
        return self._cipher.decrypt(ciphertext)

    def encrypt_stream(self, stream: BinaryIO) -> BinaryIO:
        """
        Consume `stream` and return a new stream of its ciphertext,
        positioned at the start. The caller owns (and closes) both.
        """
        staging = bytearray()
        with ZeroizeContext(staging):
            self._drain(stream, staging)
            ciphertext = self._cipher.encrypt(staging)

        out = tempfile.SpooledTemporaryFile(max_size=self._spool_max_size, mode="w+b")
        out.write(ciphertext)
        out.seek(0)
        return out

    def decrypt_stream(self, stream: BinaryIO) -> BinaryIO:
        """
        Consume `stream` and return an in-memory stream of its plaintext,
        positioned at the start.

        Raises:
            DecryptionError: If the stream does not hold a valid blob
        """
        ciphertext = bytearray()
        with ZeroizeContext(ciphertext):
            self._drain(stream, ciphertext)
            plaintext = self._cipher.decrypt(ciphertext)
        return io.BytesIO(plaintext)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _drain(self, stream: BinaryIO, into: bytearray) -> None:
        while True:
            chunk = stream.read(self._chunk_size)
            if not chunk:
                return
            into += chunk

    def _encrypt_for(self, path: str, plaintext: bytes) -> bytes:
        ciphertext = self._cipher.encrypt(plaintext)
        self._log.debug("Encrypted %d bytes for %s", len(plaintext), path)
        return ciphertext

    def _decrypt_for(self, path: str, ciphertext: bytes) -> bytes:
        try:
            plaintext = self._cipher.decrypt(ciphertext)
        except DecryptionError as exc:
            self._log.warning("Decryption failed for %s: %s", path, exc)
            raise
        self._log.debug("Decrypted %d bytes for %s", len(plaintext), path)
        return plaintext

    def _decrypt_stream_for(self, path: str, stream: BinaryIO) -> BinaryIO:
        try:
            return self.decrypt_stream(stream)
        except DecryptionError as exc:
            self._log.warning("Decryption failed for %s: %s", path, exc)
            raise

    @staticmethod
    def _strip_content_derived(result: dict[str, Any]) -> dict[str, Any]:
        for field_name in CONTENT_DERIVED_FIELDS:
            result.pop(field_name, None)
        return result

    def __repr__(self) -> str:
        return (
            f"EncryptedBackend(backend={type(self.backend).__name__}, "
            f"cipher={self._cipher.name!r})"
        )
