"""Core torrent creation components.

- Bencoding (adapter over bencodepy)
- File catalog and whole-file MD5 digests
- Piece-size selection
- Piece hashing across file boundaries
- Metainfo assembly and torrent creation
"""

from __future__ import annotations

from torrentsmith.core.bencode import decode, encode
from torrentsmith.core.catalog import (
    build_catalog,
    calculate_file_md5,
    catalog_file,
    iter_files,
)
from torrentsmith.core.hasher import PieceAccumulator, hash_pieces, hash_streams
from torrentsmith.core.metainfo import assemble_metainfo, validate_tracker_url
from torrentsmith.core.piece_size import (
    calculate_piece_count,
    calculate_pieces,
    resolve_piece_size,
    select_piece_size,
)
from torrentsmith.core.creator import TorrentCreator, create_torrent

__all__ = [
    "PieceAccumulator",
    "TorrentCreator",
    "assemble_metainfo",
    "build_catalog",
    "calculate_file_md5",
    "calculate_piece_count",
    "calculate_pieces",
    "catalog_file",
    "create_torrent",
    "decode",
    "encode",
    "hash_pieces",
    "hash_streams",
    "iter_files",
    "resolve_piece_size",
    "select_piece_size",
    "validate_tracker_url",
]
