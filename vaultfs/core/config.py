"""
VaultFS Configuration Module
============================

Provides immutable, environment-aware configuration with security-first defaults.

Security Features:
- Immutable configuration after initialization
- Environment variable override support
- No secrets in configuration (keys are passed to backends explicitly)
- Type-safe configuration access
"""

from __future__ import annotations

import hashlib
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Optional


_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset({
    "password", "secret", "key", "token", "private", "credential", "salt"
})

CIPHER_NAMES: Final[frozenset[str]] = frozenset({"aes-256-gcm", "chacha20-poly1305"})
KDF_NAMES: Final[frozenset[str]] = frozenset({"argon2id", "pbkdf2-sha256"})


def _is_sensitive_key(key: str) -> bool:
    """Check if a configuration key might contain sensitive data."""
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in _SENSITIVE_KEYS)


def _get_default_log_dir() -> Path:
    """Get OS-appropriate default log directory."""
    system = platform.system().lower()

    if system == "windows":
        base = Path(os.environ.get("LOCALAPPDATA", Path.home() / "AppData" / "Local"))
        return base / "VaultFS" / "Logs"
    elif system == "darwin":
        return Path.home() / "Library" / "Logs" / "VaultFS"
    else:  # Linux and others
        return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state")) / "vaultfs" / "logs"


@dataclass(frozen=True, slots=True)
class CryptoConfig:
    """Immutable encryption settings."""

    cipher: str = "aes-256-gcm"
    kdf: str = "argon2id"
    stream_chunk_size: int = 1024 * 1024  # 1 MB reads when buffering streams
    spool_max_size: int = 8 * 1024 * 1024  # ciphertext spills to a temp file above this

    def __post_init__(self) -> None:
        """Validate crypto settings."""
        if self.cipher.lower() not in CIPHER_NAMES:
            raise ValueError(f"Unknown cipher: {self.cipher}")
        if self.kdf.lower() not in KDF_NAMES:
            raise ValueError(f"Unknown key derivation function: {self.kdf}")
        if self.stream_chunk_size < 1:
            raise ValueError("stream_chunk_size must be positive")
        if self.spool_max_size < 0:
            raise ValueError("spool_max_size cannot be negative")


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Immutable storage settings."""

    # Reported for paths whose extension has no registered mimetype
    default_mimetype: str = "text/plain"

    def __post_init__(self) -> None:
        if "/" not in self.default_mimetype:
            raise ValueError(f"Invalid default mimetype: {self.default_mimetype}")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Immutable logging configuration."""

    level: str = "INFO"
    log_dir: Path = field(default_factory=_get_default_log_dir)
    max_file_size_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5
    enable_console: bool = True
    enable_file: bool = False
    enable_json: bool = False

    def __post_init__(self) -> None:
        """Validate logging settings."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {self.level}")
        if not self.log_dir.is_absolute():
            raise ValueError(f"log_dir must be an absolute path: {self.log_dir}")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


class VaultFSConfig:
    """
    Centralized, immutable configuration loader with environment override support.

    Usage:
        config = VaultFSConfig.load()
        cipher = config.crypto.cipher
        fallback = config.storage.default_mimetype
    """

    __slots__ = ("_crypto", "_storage", "_logging", "_frozen", "_config_hash")

    _instance: Optional[VaultFSConfig] = None

    def __init__(
        self,
        crypto: Optional[CryptoConfig] = None,
        storage: Optional[StorageConfig] = None,
        logging: Optional[LoggingConfig] = None,
    ) -> None:
        """Initialize configuration. Use VaultFSConfig.load() for standard initialization."""
        object.__setattr__(self, "_frozen", False)
        object.__setattr__(self, "_crypto", crypto or CryptoConfig())
        object.__setattr__(self, "_storage", storage or StorageConfig())
        object.__setattr__(self, "_logging", logging or LoggingConfig())
        object.__setattr__(self, "_config_hash", self._compute_hash())
        object.__setattr__(self, "_frozen", True)

    def _compute_hash(self) -> str:
        """Compute a hash of the configuration for integrity checking."""
        config_str = f"{self._crypto}|{self._storage}|{self._logging}"
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    @property
    def crypto(self) -> CryptoConfig:
        return self._crypto

    @property
    def storage(self) -> StorageConfig:
        return self._storage

    @property
    def logging(self) -> LoggingConfig:
        return self._logging

    @property
    def config_hash(self) -> str:
        return self._config_hash

    @classmethod
    def load(cls, env_prefix: str = "VAULTFS") -> VaultFSConfig:
        """
        Load configuration with environment variable overrides.

        Environment variables are prefixed with VAULTFS_ and use double
        underscores between section and key.

        Examples:
            VAULTFS_CRYPTO__CIPHER=chacha20-poly1305
            VAULTFS_STORAGE__DEFAULT_MIMETYPE=application/octet-stream
            VAULTFS_LOGGING__LEVEL=DEBUG

        Raises:
            ValueError: If an override has an invalid value
        """
        env_overrides = cls._parse_env_overrides(env_prefix)

        crypto_kwargs: dict[str, Any] = {}
        if "crypto.cipher" in env_overrides:
            crypto_kwargs["cipher"] = env_overrides["crypto.cipher"].lower()
        if "crypto.kdf" in env_overrides:
            crypto_kwargs["kdf"] = env_overrides["crypto.kdf"].lower()
        if "crypto.stream_chunk_size" in env_overrides:
            crypto_kwargs["stream_chunk_size"] = int(env_overrides["crypto.stream_chunk_size"])
        if "crypto.spool_max_size" in env_overrides:
            crypto_kwargs["spool_max_size"] = int(env_overrides["crypto.spool_max_size"])

        storage_kwargs: dict[str, Any] = {}
        if "storage.default_mimetype" in env_overrides:
            storage_kwargs["default_mimetype"] = env_overrides["storage.default_mimetype"]

        logging_kwargs: dict[str, Any] = {}
        if "logging.level" in env_overrides:
            logging_kwargs["level"] = env_overrides["logging.level"]
        if "logging.log_dir" in env_overrides:
            logging_kwargs["log_dir"] = Path(env_overrides["logging.log_dir"])
        for flag in ("enable_console", "enable_file", "enable_json"):
            if f"logging.{flag}" in env_overrides:
                logging_kwargs[flag] = _parse_bool(env_overrides[f"logging.{flag}"])

        return cls(
            crypto=CryptoConfig(**crypto_kwargs) if crypto_kwargs else None,
            storage=StorageConfig(**storage_kwargs) if storage_kwargs else None,
            logging=LoggingConfig(**logging_kwargs) if logging_kwargs else None,
        )

    @staticmethod
    def _parse_env_overrides(prefix: str) -> dict[str, str]:
        """Parse environment variables with the given prefix."""
        overrides: dict[str, str] = {}
        prefix_upper = f"{prefix.upper()}_"

        for key, value in os.environ.items():
            if key.startswith(prefix_upper):
                # VAULTFS_SECTION__KEY -> section.key
                config_key = key[len(prefix_upper):].lower().replace("__", ".")

                # SECURITY: never take secrets from the environment
                if _is_sensitive_key(config_key):
                    continue

                overrides[config_key] = value

        return overrides

    @classmethod
    def get_instance(cls) -> VaultFSConfig:
        """Get or create the process-wide configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance. Use only for testing."""
        cls._instance = None

    def __repr__(self) -> str:
        return f"VaultFSConfig(hash={self._config_hash}, cipher={self._crypto.cipher})"

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if getattr(self, "_frozen", False):
            raise AttributeError("VaultFSConfig is immutable after initialization")
        super().__setattr__(name, value)
