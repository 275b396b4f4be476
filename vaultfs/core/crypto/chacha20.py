"""
ChaCha20-Poly1305 Authenticated Encryption
==========================================

Alternative suite for hosts without AES hardware acceleration.

Security Properties:
    - 256-bit key
    - 96-bit nonce
    - 128-bit Poly1305 authentication tag
    - IETF RFC 8439 compliant

Blobs are laid out exactly like AES-256-GCM blobs, so the overhead is
the same 28 bytes, but the two suites cannot read each other's data.
"""

from __future__ import annotations

from typing import Final

from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from vaultfs.core.crypto.aead import AeadCipher

# Constants per RFC 8439
CHACHA_KEY_SIZE: Final[int] = 32  # 256 bits
CHACHA_NONCE_SIZE: Final[int] = 12  # 96 bits (IETF variant)
CHACHA_TAG_SIZE: Final[int] = 16  # 128 bits Poly1305


class ChaCha20Cipher(AeadCipher):
    """ChaCha20-Poly1305 (RFC 8439) bound to a single key."""

    __slots__ = ()

    name = "chacha20-poly1305"
    key_size = CHACHA_KEY_SIZE
    nonce_size = CHACHA_NONCE_SIZE
    tag_size = CHACHA_TAG_SIZE

    def _primitive(self, raw_key: bytes) -> ChaCha20Poly1305:
        return ChaCha20Poly1305(raw_key)
