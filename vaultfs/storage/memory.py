"""
In-Memory Storage Backend
=========================

Dict-backed StorageBackend for tests, examples and ephemeral data.

Files are keyed by normalized path. Directories exist implicitly for
every ancestor of a stored file and explicitly after create_dir().
Reported metadata includes the stored byte size and a content-sniffed
mimetype, as a plain backend would.
"""

from __future__ import annotations

import io
import threading
import time
from typing import Any, BinaryIO

from vaultfs.storage.base import (
    VISIBILITY_PRIVATE,
    VISIBILITY_PUBLIC,
    StorageBackend,
    StorageError,
    StorageExistsError,
    StorageNotFoundError,
    WriteOptions,
)
from vaultfs.utils.mime import sniff_mimetype
from vaultfs.utils.validators import normalize_path, parent_path

_VISIBILITIES = frozenset({VISIBILITY_PUBLIC, VISIBILITY_PRIVATE})


def _visibility_option(options: WriteOptions, default: str) -> str:
    visibility = (options or {}).get("visibility", default)
    if visibility not in _VISIBILITIES:
        raise StorageError(f"Invalid visibility: {visibility!r}")
    return visibility


class MemoryBackend(StorageBackend):
    """
    Thread-safe in-process backend.

    Usage:
        backend = MemoryBackend()
        backend.write("docs/readme.txt", b"hello")
        backend.read("docs/readme.txt")["contents"]  # b"hello"
    """

    def __init__(self) -> None:
        self._files: dict[str, dict[str, Any]] = {}
        self._dirs: set[str] = set()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Internal helpers (caller holds the lock)
    # ------------------------------------------------------------------

    def _file(self, path: str) -> dict[str, Any]:
        try:
            return self._files[path]
        except KeyError:
            raise StorageNotFoundError(path) from None

    def _ensure_parents(self, path: str) -> None:
        parent = parent_path(path)
        while parent:
            if parent in self._files:
                raise StorageExistsError(parent)
            self._dirs.add(parent)
            parent = parent_path(parent)

    def _is_dir(self, path: str) -> bool:
        if path == "" or path in self._dirs:
            return True
        prefix = path + "/"
        return any(name.startswith(prefix) for name in self._files)

    def _file_metadata(self, path: str) -> dict[str, Any]:
        entry = self._file(path)
        return {
            "type": "file",
            "path": path,
            "timestamp": entry["timestamp"],
            "size": len(entry["contents"]),
            "mimetype": sniff_mimetype(path, entry["contents"]),
            "visibility": entry["visibility"],
        }

    def _store(self, path: str, contents: bytes, visibility: str) -> dict[str, Any]:
        if not path or self._is_dir(path):
            raise StorageExistsError(path)
        self._ensure_parents(path)
        self._files[path] = {
            "contents": bytes(contents),
            "timestamp": int(time.time()),
            "visibility": visibility,
        }
        result = self._file_metadata(path)
        result["contents"] = self._files[path]["contents"]
        return result

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def has(self, path: str) -> bool:
        path = normalize_path(path)
        with self._lock:
            return path in self._files or self._is_dir(path)

    def read(self, path: str) -> dict[str, Any]:
        path = normalize_path(path)
        with self._lock:
            result = self._file_metadata(path)
            result["contents"] = self._files[path]["contents"]
        return result

    def read_stream(self, path: str) -> dict[str, Any]:
        result = self.read(path)
        result["stream"] = io.BytesIO(result.pop("contents"))
        return result

    def list_contents(self, directory: str = "", recursive: bool = False) -> list[dict[str, Any]]:
        directory = normalize_path(directory)
        prefix = f"{directory}/" if directory else ""

        def _wanted(path: str) -> bool:
            if not path.startswith(prefix) or path == directory:
                return False
            return recursive or parent_path(path) == directory

        with self._lock:
            dirs = set(self._dirs)
            for name in self._files:
                parent = parent_path(name)
                while parent:
                    dirs.add(parent)
                    parent = parent_path(parent)

            listing = [{"type": "dir", "path": d} for d in dirs if _wanted(d)]
            listing += [self._file_metadata(f) for f in self._files if _wanted(f)]

        return sorted(listing, key=lambda entry: entry["path"])

    def get_metadata(self, path: str) -> dict[str, Any]:
        path = normalize_path(path)
        with self._lock:
            if path in self._files:
                return self._file_metadata(path)
            if self._is_dir(path):
                return {"type": "dir", "path": path}
        raise StorageNotFoundError(path)

    def get_size(self, path: str) -> dict[str, Any]:
        metadata = self.get_metadata(path)
        return {"path": metadata["path"], "size": metadata.get("size", 0)}

    def get_mimetype(self, path: str) -> dict[str, Any]:
        path = normalize_path(path)
        with self._lock:
            metadata = self._file_metadata(path)
        return {"path": path, "mimetype": metadata["mimetype"]}

    def get_timestamp(self, path: str) -> dict[str, Any]:
        path = normalize_path(path)
        with self._lock:
            return {"path": path, "timestamp": self._file(path)["timestamp"]}

    def get_visibility(self, path: str) -> dict[str, Any]:
        path = normalize_path(path)
        with self._lock:
            return {"path": path, "visibility": self._file(path)["visibility"]}

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def write(self, path: str, contents: bytes, options: WriteOptions = None) -> dict[str, Any]:
        path = normalize_path(path)
        visibility = _visibility_option(options, VISIBILITY_PUBLIC)
        with self._lock:
            return self._store(path, contents, visibility)

    def write_stream(self, path: str, stream: BinaryIO, options: WriteOptions = None) -> dict[str, Any]:
        result = self.write(path, stream.read(), options)
        del result["contents"]
        return result

    def update(self, path: str, contents: bytes, options: WriteOptions = None) -> dict[str, Any]:
        path = normalize_path(path)
        with self._lock:
            current = self._file(path)
            visibility = _visibility_option(options, current["visibility"])
            return self._store(path, contents, visibility)

    def update_stream(self, path: str, stream: BinaryIO, options: WriteOptions = None) -> dict[str, Any]:
        result = self.update(path, stream.read(), options)
        del result["contents"]
        return result

    def rename(self, path: str, new_path: str) -> None:
        path, new_path = normalize_path(path), normalize_path(new_path)
        with self._lock:
            if new_path in self._files or self._is_dir(new_path):
                raise StorageExistsError(new_path)

            if path in self._files:
                self._ensure_parents(new_path)
                self._files[new_path] = self._files.pop(path)
                return

            if not path or not self._is_dir(path):
                raise StorageNotFoundError(path)
            if new_path == path or new_path.startswith(path + "/"):
                raise StorageError(f"Cannot move {path!r} into itself", path)

            self._ensure_parents(new_path)
            prefix = path + "/"
            for name in [n for n in self._files if n.startswith(prefix)]:
                self._files[new_path + "/" + name[len(prefix):]] = self._files.pop(name)
            for name in [d for d in self._dirs if d == path or d.startswith(prefix)]:
                self._dirs.discard(name)
                self._dirs.add(new_path + name[len(path):])

    def copy(self, path: str, new_path: str) -> None:
        path, new_path = normalize_path(path), normalize_path(new_path)
        with self._lock:
            entry = self._file(path)
            self._store(new_path, entry["contents"], entry["visibility"])

    def delete(self, path: str) -> None:
        path = normalize_path(path)
        with self._lock:
            self._file(path)
            del self._files[path]

    def delete_dir(self, dirname: str) -> None:
        path = normalize_path(dirname)
        with self._lock:
            if not path or not self._is_dir(path):
                raise StorageNotFoundError(path)
            prefix = path + "/"
            for name in [n for n in self._files if n.startswith(prefix)]:
                del self._files[name]
            self._dirs = {d for d in self._dirs if d != path and not d.startswith(prefix)}

    def create_dir(self, dirname: str, options: WriteOptions = None) -> dict[str, Any]:
        path = normalize_path(dirname)
        with self._lock:
            if path in self._files:
                raise StorageExistsError(path)
            if path:
                self._ensure_parents(path)
                self._dirs.add(path)
        return {"type": "dir", "path": path}

    def set_visibility(self, path: str, visibility: str) -> dict[str, Any]:
        path = normalize_path(path)
        visibility = _visibility_option({"visibility": visibility}, VISIBILITY_PUBLIC)
        with self._lock:
            self._file(path)["visibility"] = visibility
        return {"path": path, "visibility": visibility}
