"""
Key Derivation Functions
========================

Password-based derivation of data-encryption keys.

Implements:
    - Argon2id for memory-hard password hashing (default)
    - PBKDF2-HMAC-SHA256 for environments that mandate it
"""

from __future__ import annotations

from typing import Final

from argon2.low_level import Type, hash_secret_raw
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

# Argon2id parameters (OWASP recommended)
ARGON2_TIME_COST: Final[int] = 3
ARGON2_MEMORY_COST: Final[int] = 65536  # 64 MB
ARGON2_PARALLELISM: Final[int] = 4

PBKDF2_ITERATIONS: Final[int] = 600_000

MIN_SALT_LENGTH: Final[int] = 16

KDF_ARGON2ID: Final[str] = "argon2id"
KDF_PBKDF2: Final[str] = "pbkdf2-sha256"
KDF_ALGORITHMS: Final[frozenset[str]] = frozenset({KDF_ARGON2ID, KDF_PBKDF2})


def _password_bytes(password: str | bytes) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


def _check_salt(salt: bytes) -> None:
    if len(salt) < MIN_SALT_LENGTH:
        raise ValueError(f"Salt must be at least {MIN_SALT_LENGTH} bytes")


def derive_key_argon2(
    password: str | bytes,
    salt: bytes,
    length: int = 32,
) -> bytes:
    """
    Derive a key from password using Argon2id.

    Args:
        password: User password
        salt: Random salt (at least 16 bytes)
        length: Output key length

    Returns:
        Derived key bytes
    """
    _check_salt(salt)
    return hash_secret_raw(
        secret=_password_bytes(password),
        salt=salt,
        time_cost=ARGON2_TIME_COST,
        memory_cost=ARGON2_MEMORY_COST,
        parallelism=ARGON2_PARALLELISM,
        hash_len=length,
        type=Type.ID,
    )


def derive_key_pbkdf2(
    password: str | bytes,
    salt: bytes,
    length: int = 32,
    iterations: int = PBKDF2_ITERATIONS,
) -> bytes:
    """
    Derive a key from password using PBKDF2-HMAC-SHA256.

    Args:
        password: User password
        salt: Random salt (at least 16 bytes)
        length: Output key length
        iterations: PBKDF2 work factor

    Returns:
        Derived key bytes
    """
    _check_salt(salt)
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=length,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(_password_bytes(password))


def derive_key(
    password: str | bytes,
    salt: bytes,
    algorithm: str = KDF_ARGON2ID,
    length: int = 32,
) -> bytes:
    """Derive `length` bytes from `password` with the named algorithm."""
    if algorithm == KDF_ARGON2ID:
        return derive_key_argon2(password, salt, length)
    if algorithm == KDF_PBKDF2:
        return derive_key_pbkdf2(password, salt, length)
    raise ValueError(f"Unknown key derivation function: {algorithm!r}")
