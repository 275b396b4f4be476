# tests/unit/core/test_kdf.py
"""Tests for password-based key derivation."""

from __future__ import annotations

import pytest

from vaultfs.core.crypto.kdf import (
    KDF_ARGON2ID,
    KDF_PBKDF2,
    derive_key,
    derive_key_argon2,
    derive_key_pbkdf2,
)

SALT = b"a sixteen b salt"


class TestDeriveKey:
    def test_argon2_length(self) -> None:
        assert len(derive_key_argon2("pw", SALT, length=48)) == 48

    def test_str_and_bytes_passwords_agree(self) -> None:
        assert derive_key_pbkdf2("pässword", SALT, iterations=1000) == derive_key_pbkdf2(
            "pässword".encode("utf-8"), SALT, iterations=1000
        )

    def test_pbkdf2_iterations_change_output(self) -> None:
        derived = derive_key_pbkdf2(b"password", b"saltsaltsaltsalt", length=32, iterations=1)
        assert derived == derive_key_pbkdf2(b"password", b"saltsaltsaltsalt", length=32, iterations=1)
        assert derived != derive_key_pbkdf2(b"password", b"saltsaltsaltsalt", length=32, iterations=2)

    def test_dispatch(self) -> None:
        assert derive_key("pw", SALT, algorithm=KDF_ARGON2ID) == derive_key_argon2("pw", SALT)
        assert derive_key("pw", SALT, algorithm=KDF_PBKDF2) == derive_key_pbkdf2("pw", SALT)

    def test_unknown_algorithm(self) -> None:
        with pytest.raises(ValueError, match="Unknown key derivation function"):
            derive_key("pw", SALT, algorithm="scrypt")

    @pytest.mark.parametrize("derive", [derive_key_argon2, derive_key_pbkdf2])
    def test_short_salt(self, derive) -> None:
        with pytest.raises(ValueError, match="at least 16 bytes"):
            derive("pw", b"0123456789")
