"""File catalog for torrent creation.

Enumerates the regular files under an input directory and records, for each,
its relative path, its size and a whole-file MD5 digest.

Traversal order is lexicographic by relative POSIX path, compared as
filesystem bytes. The piece hasher consumes files through ``iter_files`` as
well, so the file list and the hashed byte stream always follow the same
sequence.
"""

from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path
from typing import Iterable

from torrentsmith.exceptions import (
    InvalidArgumentError,
    IOFailureError,
    PathNotFoundError,
)
from torrentsmith.models import FileEntry

logger = logging.getLogger(__name__)

MD5_CHUNK_SIZE = 1024 * 1024  # 1 MiB


def _require_directory(root: str | Path) -> Path:
    """Return ``root`` as a Path, or raise if it is not an existing directory."""
    if not root:
        msg = "Input path is required"
        raise PathNotFoundError(msg)
    path = Path(root)
    if not path.is_dir():
        msg = f"Input path does not exist: {path}"
        raise PathNotFoundError(msg, {"path": str(path)})
    return path


def relative_path(file_path: Path, root: Path) -> bytes:
    """Path of ``file_path`` below ``root`` as filesystem bytes with ``/`` separators.

    Names are kept as the raw bytes the filesystem reports, so they need not
    be valid UTF-8. Falls back to the base name when nothing is left after
    stripping the root.
    """
    relative = file_path.relative_to(root).as_posix()
    if not relative or relative == ".":
        return os.fsencode(file_path.name)
    return os.fsencode(relative)


def iter_files(root: str | Path) -> list[Path]:
    """All regular files below ``root``, sorted by relative POSIX path.

    Raises:
        PathNotFoundError: If ``root`` is not an existing directory

    """
    base = _require_directory(root)
    files = [path for path in base.rglob("*") if path.is_file()]
    files.sort(key=lambda path: relative_path(path, base))
    return files


def directory_size(root: str | Path) -> int:
    """Total size in bytes of every file below ``root``."""
    total = 0
    for path in iter_files(root):
        try:
            total += path.stat().st_size
        except OSError as e:
            msg = f"Cannot stat file {path}: {e}"
            raise IOFailureError(msg, {"path": str(path)}) from e
    return total


def md5_digest(file_path: str | Path, chunk_size: int = MD5_CHUNK_SIZE) -> bytes:
    """Stream a file through MD5 in ``chunk_size`` reads and return the raw digest.

    Raises:
        IOFailureError: If the file cannot be read

    """
    md5 = hashlib.md5()  # nosec B324 - md5sum is an integrity field, not a security control
    try:
        with open(file_path, "rb") as f:
            while chunk := f.read(chunk_size):
                md5.update(chunk)
    except OSError as e:
        msg = f"Failed to read file {file_path}: {e}"
        raise IOFailureError(msg, {"path": str(file_path)}) from e
    return md5.digest()


def calculate_file_md5(file_path: str | Path, chunk_size: int = MD5_CHUNK_SIZE) -> str:
    """Calculate the uppercase hex MD5 of a file without loading it whole.

    Raises:
        InvalidArgumentError: If ``file_path`` is empty or not a file
        IOFailureError: If the file cannot be read

    """
    if not file_path or not Path(file_path).is_file():
        msg = f"Invalid file path: {file_path}"
        raise InvalidArgumentError(msg)
    return md5_digest(file_path, chunk_size).hex().upper()


def _entry_for(file_path: Path, rel_path: bytes, chunk_size: int) -> FileEntry:
    try:
        size = file_path.stat().st_size
    except OSError as e:
        msg = f"Cannot stat file {file_path}: {e}"
        raise IOFailureError(msg, {"path": str(file_path)}) from e

    entry = FileEntry(
        raw_path=rel_path,
        size_bytes=size,
        content_md5=md5_digest(file_path, chunk_size),
    )
    logger.debug("Cataloged %s (%d bytes, md5 %s)", entry.relative_path, size, entry.md5_hex)
    return entry


def build_catalog(root: str | Path, chunk_size: int = MD5_CHUNK_SIZE) -> list[FileEntry]:
    """Catalog every regular file below ``root`` in traversal order.

    Args:
        root: Input directory
        chunk_size: Read size for MD5 streaming

    Returns:
        One FileEntry per file; empty for an empty directory

    Raises:
        PathNotFoundError: If ``root`` is not an existing directory
        IOFailureError: If a file cannot be read

    """
    base = _require_directory(root)
    return catalog_paths(base, iter_files(base), chunk_size)


def catalog_paths(
    root: Path,
    files: Iterable[Path],
    chunk_size: int = MD5_CHUNK_SIZE,
) -> list[FileEntry]:
    """Catalog an already enumerated file list, keeping its order."""
    return [
        _entry_for(file_path, relative_path(file_path, root), chunk_size)
        for file_path in files
    ]


def catalog_file(file_path: str | Path, chunk_size: int = MD5_CHUNK_SIZE) -> FileEntry:
    """Catalog a lone file, recorded under its base name."""
    path = Path(file_path)
    if not path.is_file():
        msg = f"Input file does not exist: {path}"
        raise PathNotFoundError(msg, {"path": str(path)})
    return _entry_for(path, os.fsencode(path.name), chunk_size)


def total_size(entries: Iterable[FileEntry]) -> int:
    """Sum of ``size_bytes`` over a catalog."""
    return sum(entry.size_bytes for entry in entries)
