"""Pydantic models for torrentsmith.

Provides validated data models for the metainfo produced by the core and for
the configuration consumed by the CLI.
"""

from __future__ import annotations

import hashlib
import os
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MD5_DIGEST_SIZE = 16
SHA1_DIGEST_SIZE = 20


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class PieceSize(IntEnum):
    """Selectable piece lengths, valued in bytes.

    AUTO is a marker resolved by the piece-size selector before hashing; it
    never reaches the piece hasher.
    """

    AUTO = -1
    SIZE_64KIB = 65536
    SIZE_128KIB = 131072
    SIZE_256KIB = 262144
    SIZE_512KIB = 524288
    SIZE_1MIB = 1048576
    SIZE_2MIB = 2097152
    SIZE_4MIB = 4194304
    SIZE_8MIB = 8388608
    SIZE_16MIB = 16777216

    @classmethod
    def candidates(cls) -> list[PieceSize]:
        """Concrete piece sizes in ascending order."""
        return sorted(member for member in cls if member is not cls.AUTO)

    @property
    def label(self) -> str:
        """Human readable label, e.g. ``256KiB`` or ``Auto``."""
        if self is PieceSize.AUTO:
            return "Auto"
        if self.value >= 1024 * 1024:
            return f"{self.value // (1024 * 1024)}MiB"
        return f"{self.value // 1024}KiB"

    @classmethod
    def from_label(cls, value: str | int) -> PieceSize:
        """Parse ``auto``, ``64KiB``, ``1MiB`` or a byte count.

        Raises:
            ValueError: If the value names no member

        """
        if isinstance(value, int):
            return cls(value)
        text = value.strip()
        if text.lstrip("-").isdigit():
            return cls(int(text))
        for member in cls:
            if member.label.lower() == text.lower() or member.name.lower() == text.lower():
                return member
        msg = f"Unknown piece size: {value}"
        raise ValueError(msg)


class FileEntry(BaseModel):
    """One input file as recorded in the torrent's file list.

    The path is kept as filesystem bytes so that names which are not valid
    UTF-8 (legal on POSIX) reach the torrent unchanged.
    """

    model_config = ConfigDict(frozen=True)

    raw_path: bytes = Field(..., min_length=1, description="POSIX path relative to the input root, as bytes")
    size_bytes: int = Field(..., ge=0, description="File length in bytes")
    content_md5: bytes = Field(
        ...,
        min_length=MD5_DIGEST_SIZE,
        max_length=MD5_DIGEST_SIZE,
        description="Whole-file MD5 digest",
    )

    @model_validator(mode="before")
    @classmethod
    def accept_relative_path(cls, data: Any) -> Any:
        """Allow ``relative_path=`` as a str in place of ``raw_path``."""
        if isinstance(data, dict) and "relative_path" in data and "raw_path" not in data:
            data = dict(data)
            data["raw_path"] = os.fsencode(data.pop("relative_path"))
        return data

    @property
    def relative_path(self) -> str:
        """Display form of the path; undecodable bytes become U+FFFD."""
        return self.raw_path.decode("utf-8", errors="replace")

    @property
    def path_segments(self) -> tuple[bytes, ...]:
        """Path components as stored in the ``path`` list of the info dict."""
        return tuple(part for part in self.raw_path.split(b"/") if part)

    @property
    def md5_hex(self) -> str:
        """Uppercase hex form of the MD5 digest (``md5sum`` field)."""
        return self.content_md5.hex().upper()



class TorrentMetadata(BaseModel):
    """Everything the bencode encoder needs to emit a torrent file."""

    model_config = ConfigDict(frozen=True)

    tracker_url: str = Field(..., description="Announce URL")
    name: str = Field(..., min_length=1, description="Torrent display name")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    piece_length: int = Field(..., gt=0, description="Resolved piece length in bytes")
    piece_digests: tuple[bytes, ...] = Field(default=(), description="SHA-1 digest per piece")
    files: tuple[FileEntry, ...] = Field(default=(), description="File list in traversal order")

    created_by: str | None = Field(None, description="Created by")
    comment: str | None = Field(None, description="Torrent comment")
    private: bool = Field(default=False, description="Private flag (BEP 27)")
    single_file: bool = Field(
        default=False,
        description="Emit single-file layout (length/md5sum directly in info)",
    )

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        """Treat naive timestamps as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_validator("piece_digests")
    @classmethod
    def validate_piece_digests(cls, v: tuple[bytes, ...]) -> tuple[bytes, ...]:
        """Every digest must be a 20-byte SHA-1 output."""
        for index, digest in enumerate(v):
            if len(digest) != SHA1_DIGEST_SIZE:
                msg = f"Piece digest {index} is {len(digest)} bytes, expected {SHA1_DIGEST_SIZE}"
                raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_layout(self) -> TorrentMetadata:
        """Single-file layout describes exactly one file."""
        if self.single_file and len(self.files) != 1:
            msg = f"Single-file layout requires exactly one file, got {len(self.files)}"
            raise ValueError(msg)
        return self

    @property
    def pieces(self) -> bytes:
        """Concatenated piece digests (the ``pieces`` field)."""
        return b"".join(self.piece_digests)

    @property
    def num_pieces(self) -> int:
        """Number of pieces."""
        return len(self.piece_digests)

    @property
    def total_size(self) -> int:
        """Total payload size in bytes."""
        return sum(entry.size_bytes for entry in self.files)

    @property
    def creation_date(self) -> int:
        """Creation timestamp as integer UTC epoch seconds."""
        return int(self.created_at.timestamp())

    def info_dict(self) -> dict[bytes, Any]:
        """Build the ``info`` dictionary."""
        info: dict[bytes, Any] = {
            b"name": self.name.encode("utf-8"),
            b"piece length": self.piece_length,
            b"pieces": self.pieces,
        }
        if self.single_file:
            entry = self.files[0]
            info[b"length"] = entry.size_bytes
            info[b"md5sum"] = entry.md5_hex.encode("ascii")
        else:
            info[b"files"] = [
                {
                    b"length": entry.size_bytes,
                    b"path": list(entry.path_segments),
                    b"md5sum": entry.md5_hex.encode("ascii"),
                }
                for entry in self.files
            ]
        if self.private:
            info[b"private"] = 1
        return info

    def to_dict(self) -> dict[bytes, Any]:
        """Build the complete metainfo dictionary handed to the encoder."""
        torrent: dict[bytes, Any] = {
            b"announce": self.tracker_url.encode("utf-8"),
            b"creation date": self.creation_date,
            b"info": self.info_dict(),
        }
        if self.created_by:
            torrent[b"created by"] = self.created_by.encode("utf-8")
        if self.comment:
            torrent[b"comment"] = self.comment.encode("utf-8")
        return torrent

    @property
    def info_hash(self) -> bytes:
        """SHA-1 of the bencoded info dictionary."""
        from torrentsmith.core.bencode import encode

        return hashlib.sha1(encode(self.info_dict())).digest()  # nosec B324 - SHA-1 required by BitTorrent protocol (BEP 3)


class CreateConfig(BaseModel):
    """Defaults for torrent creation from the CLI."""

    piece_size: PieceSize = Field(default=PieceSize.AUTO, description="Default piece size")
    target_piece_count: int = Field(
        default=2000,
        gt=0,
        description="Piece count the automatic piece size aims for",
    )
    created_by: str = Field(default="torrentsmith", description="Created by field")
    md5_chunk_size: int = Field(
        default=1024 * 1024,
        ge=4096,
        le=64 * 1024 * 1024,
        description="Read size used when computing whole-file MD5 digests",
    )
    private: bool = Field(default=False, description="Mark new torrents private")

    @field_validator("piece_size", mode="before")
    @classmethod
    def parse_piece_size(cls, v: Any) -> Any:
        """Accept labels such as ``auto`` or ``1MiB`` in config files."""
        if isinstance(v, (str, int)) and not isinstance(v, PieceSize):
            return PieceSize.from_label(v)
        return v


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Log level")
    log_file: str | None = Field(None, description="Log file path")
    structured_logging: bool = Field(
        default=False,
        description="Write JSON log records to the log file",
    )
    log_correlation_id: bool = Field(
        default=True,
        description="Include correlation IDs",
    )


class Config(BaseModel):
    """Top-level configuration."""

    create: CreateConfig = Field(default_factory=CreateConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
