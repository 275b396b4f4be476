# tests/unit/storage/test_memory_backend.py
"""Tests for the dict-backed MemoryBackend."""

from __future__ import annotations

import io
import threading

import pytest

from vaultfs.storage import (
    MemoryBackend,
    StorageError,
    StorageExistsError,
    StorageNotFoundError,
)
from vaultfs.utils.validators import PathValidationError

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def tree() -> MemoryBackend:
    backend = MemoryBackend()
    backend.write("a.txt", b"alpha")
    backend.write("dir/b.txt", b"bravo")
    backend.write("dir/sub/c.txt", b"charlie")
    return backend


class TestReadWrite:
    def test_write_then_read(self, memory: MemoryBackend) -> None:
        result = memory.write("docs/readme.txt", b"hello")

        assert result["contents"] == b"hello"
        assert result["size"] == 5
        assert memory.read("docs/readme.txt")["contents"] == b"hello"

    def test_write_overwrites(self, memory: MemoryBackend) -> None:
        memory.write("a.txt", b"one")
        memory.write("a.txt", b"two")
        assert memory.read("a.txt")["contents"] == b"two"

    def test_paths_are_normalized(self, memory: MemoryBackend) -> None:
        memory.write("/docs//./readme.txt", b"hello")
        assert memory.has("docs/readme.txt")
        assert memory.read("docs\\readme.txt")["path"] == "docs/readme.txt"

    def test_path_outside_root_is_rejected(self, memory: MemoryBackend) -> None:
        with pytest.raises(PathValidationError):
            memory.write("../escape.txt", b"x")

    def test_read_missing(self, memory: MemoryBackend) -> None:
        with pytest.raises(StorageNotFoundError) as excinfo:
            memory.read("missing.txt")
        assert excinfo.value.path == "missing.txt"
        assert isinstance(excinfo.value, FileNotFoundError)

    def test_read_stream(self, memory: MemoryBackend) -> None:
        memory.write("a.bin", b"\x00\x01")
        result = memory.read_stream("a.bin")

        assert "contents" not in result
        assert result["stream"].read() == b"\x00\x01"

    def test_write_stream(self, memory: MemoryBackend) -> None:
        result = memory.write_stream("a.bin", io.BytesIO(b"streamed"))

        assert "contents" not in result
        assert memory.read("a.bin")["contents"] == b"streamed"

    def test_update_missing_is_not_found(self, memory: MemoryBackend) -> None:
        with pytest.raises(StorageNotFoundError):
            memory.update("missing.txt", b"x")

    def test_update_keeps_visibility(self, memory: MemoryBackend) -> None:
        memory.write("a.txt", b"one", {"visibility": "private"})
        memory.update("a.txt", b"two")

        assert memory.get_visibility("a.txt")["visibility"] == "private"

    def test_update_stream(self, memory: MemoryBackend) -> None:
        memory.write("a.txt", b"one")
        result = memory.update_stream("a.txt", io.BytesIO(b"two"))

        assert "contents" not in result
        assert memory.read("a.txt")["contents"] == b"two"

    def test_write_over_directory(self, tree: MemoryBackend) -> None:
        with pytest.raises(StorageExistsError):
            tree.write("dir", b"x")

    def test_write_below_file(self, tree: MemoryBackend) -> None:
        with pytest.raises(StorageExistsError):
            tree.write("a.txt/child.txt", b"x")

    def test_write_to_root(self, memory: MemoryBackend) -> None:
        with pytest.raises(StorageExistsError):
            memory.write("/", b"x")

    def test_invalid_visibility(self, memory: MemoryBackend) -> None:
        with pytest.raises(StorageError, match="Invalid visibility"):
            memory.write("a.txt", b"x", {"visibility": "world"})

    def test_concurrent_writes(self, memory: MemoryBackend) -> None:
        def worker(n: int) -> None:
            for i in range(50):
                memory.write(f"t{n}/f{i}.txt", b"x")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        files = [e for e in memory.list_contents("", recursive=True) if e["type"] == "file"]
        assert len(files) == 200


class TestMetadata:
    def test_metadata_reports_stored_size(self, memory: MemoryBackend) -> None:
        memory.write("a.txt", b"hello")
        metadata = memory.get_metadata("a.txt")

        assert metadata["type"] == "file"
        assert metadata["size"] == 5
        assert metadata["visibility"] == "public"
        assert isinstance(metadata["timestamp"], int)

    def test_mimetype_is_sniffed_from_content(self, memory: MemoryBackend) -> None:
        memory.write("picture", PNG_HEADER + b"rest")
        assert memory.get_mimetype("picture")["mimetype"] == "image/png"

    def test_mimetype_falls_back_to_extension(self, memory: MemoryBackend) -> None:
        memory.write("doc.pdf", b"\x80\x81")
        assert memory.get_mimetype("doc.pdf")["mimetype"] == "application/pdf"

    def test_size_of_directory_is_zero(self, tree: MemoryBackend) -> None:
        assert tree.get_size("dir") == {"path": "dir", "size": 0}

    def test_metadata_missing(self, memory: MemoryBackend) -> None:
        with pytest.raises(StorageNotFoundError):
            memory.get_metadata("missing")

    def test_has(self, tree: MemoryBackend) -> None:
        assert tree.has("")
        assert tree.has("dir")
        assert tree.has("dir/sub/c.txt")
        assert not tree.has("dir/none.txt")


class TestListing:
    def test_list_root(self, tree: MemoryBackend) -> None:
        assert [e["path"] for e in tree.list_contents()] == ["a.txt", "dir"]

    def test_list_recursive(self, tree: MemoryBackend) -> None:
        paths = [e["path"] for e in tree.list_contents("", recursive=True)]
        assert paths == ["a.txt", "dir", "dir/b.txt", "dir/sub", "dir/sub/c.txt"]

    def test_list_subdirectory(self, tree: MemoryBackend) -> None:
        listing = tree.list_contents("dir")
        assert [(e["type"], e["path"]) for e in listing] == [("file", "dir/b.txt"), ("dir", "dir/sub")]

    def test_list_includes_empty_created_dirs(self, memory: MemoryBackend) -> None:
        memory.create_dir("empty")
        assert memory.list_contents() == [{"type": "dir", "path": "empty"}]


class TestMoveCopyDelete:
    def test_rename_file(self, tree: MemoryBackend) -> None:
        tree.rename("a.txt", "new/a.txt")

        assert not tree.has("a.txt")
        assert tree.read("new/a.txt")["contents"] == b"alpha"

    def test_rename_directory(self, tree: MemoryBackend) -> None:
        tree.rename("dir", "moved")

        assert not tree.has("dir")
        assert tree.read("moved/b.txt")["contents"] == b"bravo"
        assert tree.read("moved/sub/c.txt")["contents"] == b"charlie"

    def test_rename_onto_existing(self, tree: MemoryBackend) -> None:
        with pytest.raises(StorageExistsError):
            tree.rename("a.txt", "dir/b.txt")

    def test_rename_into_itself(self, tree: MemoryBackend) -> None:
        with pytest.raises(StorageError, match="into itself"):
            tree.rename("dir", "dir/sub/deeper")

    def test_rename_missing(self, memory: MemoryBackend) -> None:
        with pytest.raises(StorageNotFoundError):
            memory.rename("missing", "other")

    def test_copy(self, tree: MemoryBackend) -> None:
        tree.copy("a.txt", "copy.txt")

        assert tree.read("copy.txt")["contents"] == b"alpha"
        assert tree.read("a.txt")["contents"] == b"alpha"

    def test_copy_missing(self, memory: MemoryBackend) -> None:
        with pytest.raises(StorageNotFoundError):
            memory.copy("missing", "other")

    def test_delete(self, tree: MemoryBackend) -> None:
        tree.delete("a.txt")
        assert not tree.has("a.txt")

    def test_delete_missing(self, memory: MemoryBackend) -> None:
        with pytest.raises(StorageNotFoundError):
            memory.delete("missing.txt")

    def test_delete_dir(self, tree: MemoryBackend) -> None:
        tree.delete_dir("dir")

        assert not tree.has("dir")
        assert not tree.has("dir/sub/c.txt")
        assert tree.has("a.txt")

    def test_delete_dir_missing(self, memory: MemoryBackend) -> None:
        with pytest.raises(StorageNotFoundError):
            memory.delete_dir("missing")

    def test_create_dir_over_file(self, tree: MemoryBackend) -> None:
        with pytest.raises(StorageExistsError):
            tree.create_dir("a.txt")


class TestVisibility:
    def test_set_visibility(self, tree: MemoryBackend) -> None:
        assert tree.set_visibility("a.txt", "private") == {"path": "a.txt", "visibility": "private"}
        assert tree.get_visibility("a.txt")["visibility"] == "private"

    def test_set_invalid_visibility(self, tree: MemoryBackend) -> None:
        with pytest.raises(StorageError):
            tree.set_visibility("a.txt", "hidden")

    def test_visibility_of_missing(self, memory: MemoryBackend) -> None:
        with pytest.raises(StorageNotFoundError):
            memory.get_visibility("missing")
