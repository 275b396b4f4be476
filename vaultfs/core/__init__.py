"""
Core module - Contains configuration, logging, crypto and memory components.
"""

from vaultfs.core.config import VaultFSConfig
from vaultfs.core.logging import configure_logging, get_secure_logger, SecureLogFilter

__all__ = ["VaultFSConfig", "configure_logging", "get_secure_logger", "SecureLogFilter"]
