"""Verbosity management for the torrentsmith CLI.

Maps -v, -vv, -vvv flags onto logging levels.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any

from torrentsmith.models import LogLevel


class VerbosityLevel(IntEnum):
    """Verbosity levels for CLI commands."""

    NORMAL = 0  # Default: warnings and errors
    VERBOSE = 1  # -v: progress information
    DEBUG = 2  # -vv: per-file debug messages
    TRACE = 3  # -vvv: debug plus stack traces on errors


class VerbosityManager:
    """Manages verbosity levels and maps them to logging levels."""

    LEVEL_TO_LOGGING: dict[VerbosityLevel, int] = {
        VerbosityLevel.NORMAL: logging.WARNING,
        VerbosityLevel.VERBOSE: logging.INFO,
        VerbosityLevel.DEBUG: logging.DEBUG,
        VerbosityLevel.TRACE: logging.DEBUG,
    }

    def __init__(self, verbosity_count: int = 0):
        """Initialize verbosity manager.

        Args:
            verbosity_count: Number of -v flags (clamped to 0-3)

        """
        self.verbosity_count = max(0, min(3, verbosity_count))
        self.level = VerbosityLevel(self.verbosity_count)
        self.logging_level = self.LEVEL_TO_LOGGING[self.level]

    @classmethod
    def from_count(cls, count: int) -> VerbosityManager:
        """Create VerbosityManager from count."""
        return cls(count)

    def should_log(self, log_level: int) -> bool:
        """Check if a log level should be displayed."""
        return log_level >= self.logging_level

    def should_show_stack_trace(self) -> bool:
        """Stack traces are only printed at TRACE level."""
        return self.level == VerbosityLevel.TRACE

    def is_verbose(self) -> bool:
        """Check if verbose mode is enabled."""
        return self.level >= VerbosityLevel.VERBOSE

    def is_debug(self) -> bool:
        """Check if debug mode is enabled."""
        return self.level >= VerbosityLevel.DEBUG

    def log_level(self) -> LogLevel | None:
        """Log level override implied by the flags, or None at NORMAL."""
        if self.is_debug():
            return LogLevel.DEBUG
        if self.is_verbose():
            return LogLevel.INFO
        return None


def get_verbosity_from_ctx(obj: dict[str, Any] | None) -> VerbosityManager:
    """Get verbosity manager from a Click context object (NORMAL if absent)."""
    if not obj:
        return VerbosityManager(0)
    manager = obj.get("verbosity_manager")
    if isinstance(manager, VerbosityManager):
        return manager
    return VerbosityManager(obj.get("verbosity", 0))
