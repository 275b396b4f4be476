"""
Validation Utilities
====================

Input validation for storage paths.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """Raised when validation fails."""
    pass


class PathValidationError(ValidationError):
    """Raised when a storage path is unusable or escapes the storage root."""
    pass


def normalize_path(path: str) -> str:
    """
    Normalize a storage path.

    Backslashes become slashes, empty and "." segments are dropped,
    ".." consumes the previous segment, and the result carries no
    leading or trailing slash. The root is the empty string.

    Args:
        path: Path relative to the storage root

    Returns:
        Normalized path

    Raises:
        PathValidationError: If the path is not a string, contains NUL
            bytes, or ".." climbs above the root
    """
    if not isinstance(path, str):
        raise PathValidationError(f"Path must be a string, not {type(path).__name__}")
    if "\x00" in path:
        raise PathValidationError("Path contains invalid characters")

    parts: list[str] = []
    for segment in path.replace("\\", "/").split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if not parts:
                raise PathValidationError(f"Path is outside of the defined root: {path!r}")
            parts.pop()
            continue
        parts.append(segment)

    return "/".join(parts)


def parent_path(path: str) -> str:
    """Parent of a normalized path ("" for top-level entries)."""
    head, _, _ = path.rpartition("/")
    return head
