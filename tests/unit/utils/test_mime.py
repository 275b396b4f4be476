# tests/unit/utils/test_mime.py
"""Tests for extension lookup and content sniffing."""

from __future__ import annotations

import pytest

from vaultfs.utils.mime import (
    BINARY_MIMETYPE,
    DEFAULT_MIMETYPE,
    extension_of,
    guess_mimetype_by_extension,
    mimetype_for_extension,
    sniff_mimetype,
)


class TestExtension:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("test.png", "png"),
            ("dir/archive.tar.gz", "gz"),
            ("dir.d/README", ""),
            ("win\\path\\file.txt", "txt"),
            ("", ""),
        ],
    )
    def test_extension_of(self, path: str, expected: str) -> None:
        assert extension_of(path) == expected

    def test_mimetype_for_extension(self) -> None:
        assert mimetype_for_extension("png") == "image/png"
        assert mimetype_for_extension("") is None
        assert mimetype_for_extension("no-such-extension") is None


class TestGuessByExtension:
    def test_known(self) -> None:
        assert guess_mimetype_by_extension("test.png") == "image/png"

    def test_unknown_uses_default(self) -> None:
        assert guess_mimetype_by_extension("blob.no-such-extension") == DEFAULT_MIMETYPE
        assert guess_mimetype_by_extension("README") == "text/plain"

    def test_custom_default(self) -> None:
        assert guess_mimetype_by_extension("blob", default=BINARY_MIMETYPE) == BINARY_MIMETYPE


class TestSniff:
    @pytest.mark.parametrize(
        ("contents", "expected"),
        [
            (b"\x89PNG\r\n\x1a\nrest", "image/png"),
            (b"\xff\xd8\xff\xe0", "image/jpeg"),
            (b"GIF89a", "image/gif"),
            (b"%PDF-1.7", "application/pdf"),
            (b"PK\x03\x04", "application/zip"),
            (b"\x1f\x8b\x08", "application/gzip"),
        ],
    )
    def test_signatures_win_over_extension(self, contents: bytes, expected: str) -> None:
        assert sniff_mimetype("misnamed.txt", contents) == expected

    def test_extension_when_no_signature(self) -> None:
        assert sniff_mimetype("page.html", b"\x80\x81") == "text/html"

    def test_text(self) -> None:
        assert sniff_mimetype("notes", "plain ünïcode".encode("utf-8")) == DEFAULT_MIMETYPE

    def test_binary(self) -> None:
        assert sniff_mimetype("blob", b"\x80\x81\x82") == BINARY_MIMETYPE
