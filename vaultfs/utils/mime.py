"""
Mimetype Lookup
===============

Extension-based lookup (backed by the standard `mimetypes` registry) and
the content sniffing plain backends use when they report metadata.
"""

from __future__ import annotations

import mimetypes
from pathlib import PurePosixPath
from typing import Final, Optional

DEFAULT_MIMETYPE: Final[str] = "text/plain"
BINARY_MIMETYPE: Final[str] = "application/octet-stream"

# Leading bytes of common formats
_SIGNATURES: Final[tuple[tuple[bytes, str], ...]] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"%PDF-", "application/pdf"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b", "application/gzip"),
)


def extension_of(path: str) -> str:
    """Extension of the final path segment without the dot ("" if none)."""
    return PurePosixPath(path.replace("\\", "/")).suffix[1:]


def mimetype_for_extension(extension: str) -> Optional[str]:
    """Registered mimetype for `extension`, or None when unknown or empty."""
    if not extension:
        return None
    mimetype, _ = mimetypes.guess_type(f"file.{extension}", strict=False)
    return mimetype


def guess_mimetype_by_extension(path: str, default: str = DEFAULT_MIMETYPE) -> str:
    """
    Mimetype of `path` judged by its extension alone.

    Never touches stored content, so it works for paths that do not exist.
    """
    return mimetype_for_extension(extension_of(path)) or default


def sniff_mimetype(path: str, contents: bytes) -> str:
    """
    Mimetype of `contents`, falling back to the extension and then to a
    text/binary decision.
    """
    for signature, mimetype in _SIGNATURES:
        if contents.startswith(signature):
            return mimetype

    by_extension = mimetype_for_extension(extension_of(path))
    if by_extension:
        return by_extension

    try:
        contents.decode("utf-8")
    except UnicodeDecodeError:
        return BINARY_MIMETYPE
    return DEFAULT_MIMETYPE
