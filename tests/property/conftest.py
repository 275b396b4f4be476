# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import binary_content, storage_paths

    @given(content=binary_content, path=storage_paths)
    def test_round_trip(content: bytes, path: str) -> None:
        ...
"""

from __future__ import annotations

from hypothesis import strategies as st

from vaultfs.core.crypto import CIPHER_SUITES

# Content including the empty file
binary_content = st.binary(min_size=0, max_size=4096)

# Long enough that a chance match against ciphertext is negligible
substantial_content = st.binary(min_size=16, max_size=1024)

cipher_names = st.sampled_from(sorted(CIPHER_SUITES))

# Stream read sizes from pathological to typical
chunk_sizes = st.integers(min_value=1, max_value=8192)

_segment = st.text(
    alphabet=st.characters(categories=("Ll", "Lu", "Nd"), include_characters="-_"),
    min_size=1,
    max_size=12,
)

# Normalized relative paths: one to four segments, optional extension
storage_paths = st.builds(
    lambda segments, ext: "/".join(segments) + ext,
    st.lists(_segment, min_size=1, max_size=4),
    st.sampled_from(["", ".txt", ".png", ".bin", ".json"]),
)
