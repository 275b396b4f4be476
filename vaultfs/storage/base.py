"""
Storage Backend Interface
=========================

Defines the StorageBackend abstract class: path-addressed byte content
with capability-style operations. Encrypting and other decorating
backends implement the same interface so they can be used anywhere a
plain backend is expected.

Result Records:
    Operations return plain dicts. Files carry at least "type" ("file"),
    "path" and, depending on the operation, "contents", "stream", "size",
    "mimetype", "timestamp" or "visibility". Directories carry "type"
    ("dir") and "path".

Failure Signals:
    StorageNotFoundError  - the path does not exist
    StorageExistsError    - the path is taken by an incompatible entry
    StorageError          - any other backend failure
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Final, Mapping, Optional

VISIBILITY_PUBLIC: Final[str] = "public"
VISIBILITY_PRIVATE: Final[str] = "private"

WriteOptions = Optional[Mapping[str, Any]]


class StorageError(Exception):
    """Raised when the underlying storage fails."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class StorageNotFoundError(StorageError, FileNotFoundError):
    """Raised when a path does not exist in the backend."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path not found: {path!r}", path)


class StorageExistsError(StorageError, FileExistsError):
    """Raised when a path is occupied by an entry of the wrong kind."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Path already exists: {path!r}", path)


class StorageBackend(ABC):
    """
    Abstract storage backend.

    Implementations must be thread-safe if used concurrently.
    """

    @abstractmethod
    def has(self, path: str) -> bool:
        """Return True if a file or directory exists at `path`."""

    @abstractmethod
    def read(self, path: str) -> dict[str, Any]:
        """Return the file record with its "contents" bytes."""

    @abstractmethod
    def read_stream(self, path: str) -> dict[str, Any]:
        """Return the file record with a readable binary "stream"."""

    @abstractmethod
    def list_contents(self, directory: str = "", recursive: bool = False) -> list[dict[str, Any]]:
        """Return metadata records for the entries below `directory`."""

    @abstractmethod
    def get_metadata(self, path: str) -> dict[str, Any]:
        """Return the metadata record for `path`."""

    @abstractmethod
    def get_size(self, path: str) -> dict[str, Any]:
        """Return {"path", "size"} for a file."""

    @abstractmethod
    def get_mimetype(self, path: str) -> dict[str, Any]:
        """Return {"path", "mimetype"} for a file."""

    @abstractmethod
    def get_timestamp(self, path: str) -> dict[str, Any]:
        """Return {"path", "timestamp"} for a file."""

    @abstractmethod
    def get_visibility(self, path: str) -> dict[str, Any]:
        """Return {"path", "visibility"} for a file."""

    @abstractmethod
    def write(self, path: str, contents: bytes, options: WriteOptions = None) -> dict[str, Any]:
        """Store `contents` at `path`, creating parent directories."""

    @abstractmethod
    def write_stream(self, path: str, stream: BinaryIO, options: WriteOptions = None) -> dict[str, Any]:
        """Store everything readable from `stream` at `path`."""

    @abstractmethod
    def update(self, path: str, contents: bytes, options: WriteOptions = None) -> dict[str, Any]:
        """Replace the contents of an existing file."""

    @abstractmethod
    def update_stream(self, path: str, stream: BinaryIO, options: WriteOptions = None) -> dict[str, Any]:
        """Replace the contents of an existing file from `stream`."""

    @abstractmethod
    def rename(self, path: str, new_path: str) -> None:
        """Move a file or directory."""

    @abstractmethod
    def copy(self, path: str, new_path: str) -> None:
        """Copy a file."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Delete a file."""

    @abstractmethod
    def delete_dir(self, dirname: str) -> None:
        """Delete a directory and everything below it."""

    @abstractmethod
    def create_dir(self, dirname: str, options: WriteOptions = None) -> dict[str, Any]:
        """Create a directory (and its parents)."""

    @abstractmethod
    def set_visibility(self, path: str, visibility: str) -> dict[str, Any]:
        """Set a file's visibility and return {"path", "visibility"}."""
