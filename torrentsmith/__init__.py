"""torrentsmith - BitTorrent metainfo (.torrent) file creation."""

from __future__ import annotations

__version__ = "0.1.0"

from torrentsmith.core import (
    TorrentCreator,
    build_catalog,
    create_torrent,
    hash_pieces,
    select_piece_size,
)
from torrentsmith.exceptions import (
    InvalidArgumentError,
    IOFailureError,
    PathNotFoundError,
    TorrentSmithError,
)
from torrentsmith.models import FileEntry, PieceSize, TorrentMetadata

__all__ = [
    "FileEntry",
    "IOFailureError",
    "InvalidArgumentError",
    "PathNotFoundError",
    "PieceSize",
    "TorrentCreator",
    "TorrentMetadata",
    "TorrentSmithError",
    "__version__",
    "build_catalog",
    "create_torrent",
    "hash_pieces",
    "select_piece_size",
]
