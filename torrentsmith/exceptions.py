"""Exception hierarchy for torrentsmith.

Every failure raised by the library derives from TorrentSmithError so that
callers can treat a failed torrent creation as a single error class.
"""

from __future__ import annotations

from typing import Any


class TorrentSmithError(Exception):
    """Base exception for all torrentsmith errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize torrentsmith error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ValidationError(TorrentSmithError):
    """Data validation errors."""


class InvalidArgumentError(ValidationError):
    """Malformed or out-of-range argument (URL, name, size, target)."""


class ConfigurationError(ValidationError):
    """Configuration validation errors."""


class BencodeError(ValidationError):
    """Bencode encoding/decoding errors."""


class DiskError(TorrentSmithError):
    """Disk I/O related errors."""


class PathNotFoundError(DiskError):
    """Input or output directory does not exist."""


class IOFailureError(DiskError):
    """A file could not be read while cataloging or hashing."""
