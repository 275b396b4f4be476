# tests/conftest.py
"""Shared fixtures for VaultFS tests.

Backends are built with an explicit VaultFSConfig so that VAULTFS_*
variables in the developer's environment never leak into a test.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from vaultfs.core.config import VaultFSConfig
from vaultfs.core.crypto import EncryptionKey
from vaultfs.storage import EncryptedBackend, MemoryBackend


@pytest.fixture
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear VAULTFS_* variables and the cached config around a test."""
    for name in list(os.environ):
        if name.startswith("VAULTFS_"):
            monkeypatch.delenv(name)
    VaultFSConfig.reset_instance()
    yield
    VaultFSConfig.reset_instance()


@pytest.fixture
def config() -> VaultFSConfig:
    return VaultFSConfig()


@pytest.fixture
def key() -> EncryptionKey:
    return EncryptionKey.generate()


@pytest.fixture
def memory() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def backend(memory: MemoryBackend, key: EncryptionKey, config: VaultFSConfig) -> EncryptedBackend:
    """Encrypted backend over `memory` holding test.png = b"file content"."""
    encrypted = EncryptedBackend(memory, key, config=config)
    encrypted.write("test.png", b"file content")
    return encrypted
