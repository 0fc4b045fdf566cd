"""Shared utilities and infrastructure.

This module contains the logging setup used throughout the application.
"""

from __future__ import annotations

from torrentsmith.utils.logging_config import (
    LoggingContext,
    get_logger,
    setup_logging,
)

__all__ = [
    "LoggingContext",
    "get_logger",
    "setup_logging",
]
