"""
Passthrough Backend
===================

Decorator base that forwards every StorageBackend call to a wrapped
backend. Subclasses override only the operations they change.
"""

from __future__ import annotations

from typing import Any, BinaryIO

from vaultfs.storage.base import StorageBackend, WriteOptions


class PassthroughBackend(StorageBackend):
    """
    Forwards all operations to `backend` unchanged.

    The wrapped backend is shared, not owned: it may be referenced
    elsewhere and may outlive the decorator.
    """

    def __init__(self, backend: StorageBackend) -> None:
        if not isinstance(backend, StorageBackend):
            raise TypeError(f"backend must be a StorageBackend, not {type(backend).__name__}")
        self._backend = backend

    @property
    def backend(self) -> StorageBackend:
        """The wrapped backend."""
        return self._backend

    def has(self, path: str) -> bool:
        return self._backend.has(path)

    def read(self, path: str) -> dict[str, Any]:
        return self._backend.read(path)

    def read_stream(self, path: str) -> dict[str, Any]:
        return self._backend.read_stream(path)

    def list_contents(self, directory: str = "", recursive: bool = False) -> list[dict[str, Any]]:
        return self._backend.list_contents(directory, recursive)

    def get_metadata(self, path: str) -> dict[str, Any]:
        return self._backend.get_metadata(path)

    def get_size(self, path: str) -> dict[str, Any]:
        return self._backend.get_size(path)

    def get_mimetype(self, path: str) -> dict[str, Any]:
        return self._backend.get_mimetype(path)

    def get_timestamp(self, path: str) -> dict[str, Any]:
        return self._backend.get_timestamp(path)

    def get_visibility(self, path: str) -> dict[str, Any]:
        return self._backend.get_visibility(path)

    def write(self, path: str, contents: bytes, options: WriteOptions = None) -> dict[str, Any]:
        return self._backend.write(path, contents, options)

    def write_stream(self, path: str, stream: BinaryIO, options: WriteOptions = None) -> dict[str, Any]:
        return self._backend.write_stream(path, stream, options)

    def update(self, path: str, contents: bytes, options: WriteOptions = None) -> dict[str, Any]:
        return self._backend.update(path, contents, options)

    def update_stream(self, path: str, stream: BinaryIO, options: WriteOptions = None) -> dict[str, Any]:
        return self._backend.update_stream(path, stream, options)

    def rename(self, path: str, new_path: str) -> None:
        self._backend.rename(path, new_path)

    def copy(self, path: str, new_path: str) -> None:
        self._backend.copy(path, new_path)

    def delete(self, path: str) -> None:
        self._backend.delete(path)

    def delete_dir(self, dirname: str) -> None:
        self._backend.delete_dir(dirname)

    def create_dir(self, dirname: str, options: WriteOptions = None) -> dict[str, Any]:
        return self._backend.create_dir(dirname, options)

    def set_visibility(self, path: str, visibility: str) -> dict[str, Any]:
        return self._backend.set_visibility(path, visibility)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(backend={type(self._backend).__name__})"
