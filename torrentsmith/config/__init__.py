"""Configuration management.

This module handles configuration loading and validation for the CLI.
"""

from __future__ import annotations

from torrentsmith.config.config import (
    Config,
    ConfigManager,
    get_config,
    get_create_config,
    init_config,
)

__all__ = [
    "Config",
    "ConfigManager",
    "get_config",
    "get_create_config",
    "init_config",
]
