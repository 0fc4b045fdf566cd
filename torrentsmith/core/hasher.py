"""Piece hashing.

The payload is the concatenation of every input file in traversal order. It
is cut into ``piece_length`` chunks regardless of where files begin or end,
and each chunk is hashed with SHA-1. Only the last piece may be short.

One buffer of exactly ``piece_length`` bytes is allocated per operation and
refilled in place, so peak memory stays O(piece_length) for any payload size.
"""

from __future__ import annotations

import hashlib
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Sequence

from torrentsmith.exceptions import InvalidArgumentError, IOFailureError

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


@dataclass
class PieceAccumulator:
    """Piece buffer, fill cursor and digests collected so far.

    The same accumulator is fed every source in order; ``fill`` carries over
    between sources, which is how a piece comes to span two or more files.
    """

    piece_length: int
    fill: int = 0
    digests: list[bytes] = field(default_factory=list)
    buffer: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Allocate the piece buffer."""
        if self.piece_length <= 0:
            msg = f"Piece length must be greater than 0, got {self.piece_length}"
            raise InvalidArgumentError(msg)
        self.buffer = bytearray(self.piece_length)

    def consume(self, stream: BinaryIO, progress: ProgressCallback | None = None) -> int:
        """Read ``stream`` to EOF into the buffer, hashing every full piece.

        Returns:
            Number of bytes read from the stream

        """
        consumed = 0
        with memoryview(self.buffer) as view:
            while True:
                try:
                    read = stream.readinto(view[self.fill :])
                except OSError as e:
                    name = getattr(stream, "name", repr(stream))
                    msg = f"Failed to read {name} while hashing pieces: {e}"
                    raise IOFailureError(msg, {"path": str(name)}) from e
                if not read:
                    break
                self.fill += read
                consumed += read
                if progress is not None:
                    progress(read)
                if self.fill == self.piece_length:
                    self.digests.append(hashlib.sha1(view).digest())  # nosec B324 - SHA-1 required by BitTorrent protocol (BEP 3)
                    self.fill = 0
        return consumed

    def finish(self) -> list[bytes]:
        """Hash the trailing short piece, if any, and return all digests."""
        if self.fill > 0:
            with memoryview(self.buffer) as view:
                self.digests.append(hashlib.sha1(view[: self.fill]).digest())  # nosec B324 - SHA-1 required by BitTorrent protocol (BEP 3)
            self.fill = 0
        return self.digests


def hash_streams(
    streams: Iterable[BinaryIO | bytes],
    piece_length: int,
    progress: ProgressCallback | None = None,
) -> list[bytes]:
    """Hash a sequence of in-memory or already open byte sources as one stream."""
    accumulator = PieceAccumulator(piece_length)
    for source in streams:
        stream = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
        accumulator.consume(stream, progress)
    return accumulator.finish()


def hash_pieces(
    files: Sequence[str | Path],
    piece_length: int,
    progress: ProgressCallback | None = None,
) -> list[bytes]:
    """Hash the concatenation of ``files`` into SHA-1 piece digests.

    Args:
        files: Paths in traversal order
        piece_length: Concrete piece length in bytes (never AUTO)
        progress: Called with the byte count of every read

    Returns:
        One 20-byte digest per piece; empty when there is no data

    Raises:
        InvalidArgumentError: If ``piece_length`` is not positive
        IOFailureError: If any file cannot be opened or read

    """
    accumulator = PieceAccumulator(piece_length)
    for file_path in files:
        try:
            stream = open(file_path, "rb")
        except OSError as e:
            msg = f"Failed to open file {file_path} while hashing pieces: {e}"
            raise IOFailureError(msg, {"path": str(file_path)}) from e
        with stream:
            consumed = accumulator.consume(stream, progress)
        logger.debug(
            "Hashed %s (%d bytes, %d pieces so far, %d bytes pending)",
            file_path,
            consumed,
            len(accumulator.digests),
            accumulator.fill,
        )
    return accumulator.finish()
