"""
Utils module - Utility functions and helpers.

This module contains utility functions used throughout VaultFS.
"""

from vaultfs.utils.mime import guess_mimetype_by_extension, sniff_mimetype
from vaultfs.utils.validators import PathValidationError, ValidationError, normalize_path

__all__ = [
    "guess_mimetype_by_extension",
    "sniff_mimetype",
    "normalize_path",
    "ValidationError",
    "PathValidationError",
]
