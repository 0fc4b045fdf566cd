"""Bencode adapter for torrentsmith.

Wraps the ``bencodepy`` codec so the rest of the package depends on two plain
functions and a single error type.
"""

from __future__ import annotations

from typing import Any

import bencodepy

from torrentsmith.exceptions import BencodeError


def encode(value: Any) -> bytes:
    """Bencode a value built from bytes, str, int, list and dict.

    Raises:
        BencodeError: If the value contains an unsupported type

    """
    try:
        return bencodepy.encode(value)
    except Exception as e:
        msg = f"Failed to bencode value of type {type(value).__name__}: {e}"
        raise BencodeError(msg) from e


def decode(data: bytes) -> Any:
    """Decode bencoded bytes. Dictionary keys are returned as bytes.

    Raises:
        BencodeError: If the data is not valid bencode

    """
    try:
        return bencodepy.decode(data)
    except Exception as e:
        msg = f"Failed to decode bencoded data: {e}"
        raise BencodeError(msg) from e
