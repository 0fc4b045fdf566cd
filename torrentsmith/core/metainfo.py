"""Metainfo assembly.

Packages a tracker URL, timestamp, piece length, piece digests and file
catalog into a TorrentMetadata ready for bencoding. Nothing here touches the
filesystem or hashes file data.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable
from urllib.parse import urlparse

from pydantic import ValidationError as PydanticValidationError

from torrentsmith.exceptions import InvalidArgumentError
from torrentsmith.models import SHA1_DIGEST_SIZE, FileEntry, TorrentMetadata


def validate_tracker_url(tracker_url: str | None) -> str:
    """Require a well-formed absolute URL (scheme and host, no whitespace)."""
    if not tracker_url or not tracker_url.strip():
        msg = "Tracker URL is required"
        raise InvalidArgumentError(msg)
    if any(ch.isspace() for ch in tracker_url):
        msg = f"Tracker URL must not contain whitespace: {tracker_url!r}"
        raise InvalidArgumentError(msg)
    try:
        parsed = urlparse(tracker_url)
        # Accessing port validates the netloc's port component
        _ = parsed.port
    except ValueError as e:
        msg = f"Tracker URL is not a valid URL: {tracker_url}"
        raise InvalidArgumentError(msg) from e
    if not parsed.scheme or not parsed.netloc or not parsed.hostname:
        msg = f"Tracker URL must be an absolute URL: {tracker_url}"
        raise InvalidArgumentError(msg)
    return tracker_url


def assemble_metainfo(
    tracker_url: str,
    torrent_name: str,
    piece_length: int,
    digests: Iterable[bytes],
    files: Iterable[FileEntry],
    created_at: datetime | None = None,
    *,
    created_by: str | None = None,
    comment: str | None = None,
    private: bool = False,
    single_file: bool = False,
) -> TorrentMetadata:
    """Validate inputs and build the immutable TorrentMetadata.

    Args:
        tracker_url: Announce URL
        torrent_name: Display name, also the directory name clients save into
        piece_length: Resolved piece length in bytes
        digests: Piece digests in stream order
        files: File entries in traversal order
        created_at: Creation time; defaults to now (UTC)
        created_by: Optional ``created by`` field
        comment: Optional ``comment`` field
        private: Set the private flag
        single_file: Emit the single-file layout

    Raises:
        InvalidArgumentError: On a malformed URL, empty name, bad digest or
            non-positive piece length

    """
    validate_tracker_url(tracker_url)
    if not torrent_name or not torrent_name.strip():
        msg = "Torrent name is required"
        raise InvalidArgumentError(msg)
    if piece_length <= 0:
        msg = f"Piece length must be greater than 0, got {piece_length}"
        raise InvalidArgumentError(msg)

    digest_list = tuple(digests)
    for index, digest in enumerate(digest_list):
        if len(digest) != SHA1_DIGEST_SIZE:
            msg = f"Piece digest {index} is {len(digest)} bytes, expected {SHA1_DIGEST_SIZE}"
            raise InvalidArgumentError(msg)

    try:
        return TorrentMetadata(
            tracker_url=tracker_url,
            name=torrent_name,
            created_at=created_at or datetime.now(timezone.utc),
            piece_length=piece_length,
            piece_digests=digest_list,
            files=tuple(files),
            created_by=created_by,
            comment=comment,
            private=private,
            single_file=single_file,
        )
    except PydanticValidationError as e:
        msg = f"Invalid torrent metadata: {e}"
        raise InvalidArgumentError(msg) from e
