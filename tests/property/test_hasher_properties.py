"""Property-based tests for piece hashing.

Hashing a payload split into arbitrary sources must match hashing the
concatenated payload in fixed slices.
"""

import hashlib

import pytest
from hypothesis import given
from hypothesis import strategies as st

from torrentsmith.core.hasher import hash_streams

pytestmark = [pytest.mark.property]


def _reference(data: bytes, piece_length: int) -> list[bytes]:
    return [
        hashlib.sha1(data[i : i + piece_length]).digest()
        for i in range(0, len(data), piece_length)
    ]


class TestHasherProperties:
    """Property-based tests for hash_streams."""

    @given(st.lists(st.binary(max_size=300), max_size=12), st.integers(min_value=1, max_value=128))
    def test_matches_concatenated_slices(self, chunks, piece_length):
        """Source boundaries never influence piece boundaries."""
        assert hash_streams(chunks, piece_length) == _reference(b"".join(chunks), piece_length)

    @given(st.lists(st.binary(max_size=300), max_size=12), st.integers(min_value=1, max_value=128))
    def test_piece_count(self, chunks, piece_length):
        """One digest per started piece, none for an empty payload."""
        total = sum(len(chunk) for chunk in chunks)
        digests = hash_streams(chunks, piece_length)
        assert len(digests) == -(-total // piece_length)
        assert all(len(digest) == 20 for digest in digests)
