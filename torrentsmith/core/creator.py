"""Torrent creation.

Ties the catalog, piece-size selection, piece hashing and metainfo assembly
together. A call either returns a complete bencoded torrent or raises; the
file variant writes nothing until the whole torrent has been encoded.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from torrentsmith.core.bencode import encode
from torrentsmith.core.catalog import (
    MD5_CHUNK_SIZE,
    catalog_file,
    catalog_paths,
    iter_files,
    total_size,
)
from torrentsmith.core.hasher import ProgressCallback, hash_pieces
from torrentsmith.core.metainfo import assemble_metainfo, validate_tracker_url
from torrentsmith.core.piece_size import DEFAULT_TARGET_PIECE_COUNT, resolve_piece_size
from torrentsmith.exceptions import (
    InvalidArgumentError,
    IOFailureError,
    PathNotFoundError,
)
from torrentsmith.models import PieceSize, TorrentMetadata
from torrentsmith.utils.logging_config import LoggingContext

logger = logging.getLogger(__name__)


class TorrentCreator:
    """Creates v1 torrent metainfo from a directory or a single file."""

    def __init__(
        self,
        target_piece_count: int = DEFAULT_TARGET_PIECE_COUNT,
        md5_chunk_size: int = MD5_CHUNK_SIZE,
        created_by: str | None = None,
    ) -> None:
        """Initialize the creator.

        Args:
            target_piece_count: Piece count the AUTO piece size aims for
            md5_chunk_size: Read size for whole-file MD5 digests
            created_by: Value for the ``created by`` field, omitted if None

        """
        if target_piece_count <= 0:
            msg = f"Target piece count must be greater than 0, got {target_piece_count}"
            raise InvalidArgumentError(msg)
        if md5_chunk_size <= 0:
            msg = f"MD5 chunk size must be greater than 0, got {md5_chunk_size}"
            raise InvalidArgumentError(msg)
        self.target_piece_count = target_piece_count
        self.md5_chunk_size = md5_chunk_size
        self.created_by = created_by

    def build_metadata(
        self,
        input_path: str | Path,
        torrent_name: str,
        tracker_url: str,
        piece_size: PieceSize | int = PieceSize.AUTO,
        *,
        comment: str | None = None,
        private: bool = False,
        created_at: datetime | None = None,
        progress: ProgressCallback | None = None,
    ) -> TorrentMetadata:
        """Catalog and hash ``input_path`` and assemble its metadata.

        A directory produces a multi-file torrent; a regular file produces a
        single-file torrent.

        Raises:
            PathNotFoundError: If ``input_path`` does not exist
            InvalidArgumentError: On an empty name, malformed tracker URL or
                unknown piece size
            IOFailureError: If a file cannot be read

        """
        if not input_path:
            msg = "Input path is required"
            raise PathNotFoundError(msg)
        source = Path(input_path)
        if not source.exists():
            msg = f"Input path does not exist: {source}"
            raise PathNotFoundError(msg, {"path": str(source)})
        if not torrent_name or not torrent_name.strip():
            msg = "Torrent name is required"
            raise InvalidArgumentError(msg)
        validate_tracker_url(tracker_url)

        single_file = source.is_file()

        with LoggingContext("torrent_create", logger=logger, source=str(source)):
            if single_file:
                files = [source]
                entries = [catalog_file(source, self.md5_chunk_size)]
            else:
                files = iter_files(source)
                entries = catalog_paths(source, files, self.md5_chunk_size)

            payload_size = total_size(entries)
            piece_length = resolve_piece_size(piece_size, payload_size, self.target_piece_count)
            logger.info(
                "Hashing %d files (%d bytes) with %d byte pieces",
                len(files),
                payload_size,
                piece_length,
            )

            digests = hash_pieces(files, piece_length, progress)

            return assemble_metainfo(
                tracker_url,
                torrent_name,
                piece_length,
                digests,
                entries,
                created_at,
                created_by=self.created_by,
                comment=comment,
                private=private,
                single_file=single_file,
            )

    def create(
        self,
        input_path: str | Path,
        torrent_name: str,
        tracker_url: str,
        piece_size: PieceSize | int = PieceSize.AUTO,
        **kwargs,
    ) -> bytes:
        """Create a torrent for ``input_path`` and return the bencoded bytes.

        Args:
            input_path: Directory (or single file) to describe
            torrent_name: Name clients use for the torrent and its folder
            tracker_url: Tracker announce URL
            piece_size: AUTO or a concrete PieceSize
            **kwargs: Forwarded to ``build_metadata``

        Returns:
            Bencoded metainfo

        """
        metadata = self.build_metadata(input_path, torrent_name, tracker_url, piece_size, **kwargs)
        return encode(metadata.to_dict())

    def create_file(
        self,
        input_path: str | Path,
        torrent_name: str,
        tracker_url: str,
        output_file: str | Path,
        piece_size: PieceSize | int = PieceSize.AUTO,
        **kwargs,
    ) -> bool:
        """Create a torrent and write it to ``output_file``.

        The output directory is checked before any hashing starts.

        Raises:
            PathNotFoundError: If the output directory does not exist
            IOFailureError: If the torrent cannot be written

        """
        if not output_file:
            msg = "Output path is required"
            raise PathNotFoundError(msg)
        output = Path(output_file)
        if not output.parent.is_dir():
            msg = f"Output path does not exist: {output}"
            raise PathNotFoundError(msg, {"path": str(output)})

        torrent_bytes = self.create(input_path, torrent_name, tracker_url, piece_size, **kwargs)

        try:
            output.write_bytes(torrent_bytes)
        except OSError as e:
            msg = f"Failed to write torrent file {output}: {e}"
            raise IOFailureError(msg, {"path": str(output)}) from e

        logger.info("Torrent saved to %s (%d bytes)", output, len(torrent_bytes))
        return True


def create_torrent(
    input_path: str | Path,
    torrent_name: str,
    tracker_url: str,
    piece_size: PieceSize | int = PieceSize.AUTO,
    **kwargs,
) -> bytes:
    """Module-level shortcut for ``TorrentCreator().create(...)``."""
    return TorrentCreator().create(input_path, torrent_name, tracker_url, piece_size, **kwargs)
