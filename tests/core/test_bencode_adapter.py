"""Tests for the bencode adapter."""

from __future__ import annotations

import pytest

from torrentsmith.core.bencode import decode, encode
from torrentsmith.exceptions import BencodeError, ValidationError

pytestmark = [pytest.mark.unit, pytest.mark.core]


class TestBencodeAdapter:
    """Encoding and decoding through bencodepy."""

    def test_dictionary_keys_are_sorted(self):
        assert encode({b"b": 1, b"a": 2}) == b"d1:ai2e1:bi1ee"

    def test_nested_structure(self):
        value = {b"info": {b"files": [{b"length": 3, b"path": [b"a", b"b"]}]}}
        assert encode(value) == b"d4:infod5:filesld6:lengthi3e4:pathl1:a1:beeeee"

    def test_decode(self):
        assert decode(b"d3:keyl4:spami42eee") == {b"key": [b"spam", 42]}

    def test_invalid_data(self):
        with pytest.raises(BencodeError):
            decode(b"d3:key")

    def test_unsupported_type(self):
        with pytest.raises(BencodeError) as exc_info:
            encode({b"when": object()})

        assert isinstance(exc_info.value, ValidationError)
