"""Configuration management for torrentsmith.

Loads CLI defaults hierarchically: built-in defaults, then a TOML config
file, then environment variables. The core library never reads
configuration; the CLI passes explicit values down.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import toml
from pydantic import ValidationError as PydanticValidationError

from torrentsmith.exceptions import ConfigurationError
from torrentsmith.models import Config, CreateConfig, ObservabilityConfig
from torrentsmith.utils.logging_config import setup_logging

CONFIG_FILE_NAME = "torrentsmith.toml"

ENV_MAPPINGS: dict[str, str] = {
    "TORRENTSMITH_PIECE_SIZE": "create.piece_size",
    "TORRENTSMITH_TARGET_PIECE_COUNT": "create.target_piece_count",
    "TORRENTSMITH_CREATED_BY": "create.created_by",
    "TORRENTSMITH_MD5_CHUNK_SIZE": "create.md5_chunk_size",
    "TORRENTSMITH_PRIVATE": "create.private",
    "TORRENTSMITH_LOG_LEVEL": "observability.log_level",
    "TORRENTSMITH_LOG_FILE": "observability.log_file",
    "TORRENTSMITH_STRUCTURED_LOGGING": "observability.structured_logging",
}

# Global configuration instance
_config_manager: ConfigManager | None = None


def _parse_env_value(raw: str) -> Any:
    """Convert an environment string to bool/int where it clearly is one."""
    lowered = raw.strip().lower()
    if lowered in {"true", "yes", "on"}:
        return True
    if lowered in {"false", "no", "off"}:
        return False
    if lowered.isdigit():
        return int(lowered)
    return raw


def _set_nested(d: dict[str, Any], path: str, value: Any) -> None:
    keys = path.split(".")
    current = d
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


class ConfigManager:
    """Loads and validates configuration."""

    def __init__(self, config_file: str | Path | None = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to TOML config file. If None, searches for
                torrentsmith.toml in standard locations

        """
        self.config_file = self._find_config_file(config_file)
        self.config = self._load_config()

    def _find_config_file(self, config_file: str | Path | None) -> Path | None:
        """Find configuration file in standard locations."""
        if config_file:
            return Path(config_file)

        search_paths = [
            Path.cwd() / CONFIG_FILE_NAME,
            Path.home() / ".config" / "torrentsmith" / CONFIG_FILE_NAME,
        ]
        for path in search_paths:
            if path.exists():
                return path
        return None

    def _load_config(self) -> Config:
        """Load configuration from file and environment."""
        config_data: dict[str, Any] = {}

        if self.config_file is not None:
            if not self.config_file.exists():
                msg = f"Config file not found: {self.config_file}"
                raise ConfigurationError(msg)
            try:
                with open(self.config_file, encoding="utf-8") as f:
                    config_data.update(toml.load(f))
            except (OSError, toml.TomlDecodeError) as e:
                msg = f"Failed to load config file {self.config_file}: {e}"
                raise ConfigurationError(msg) from e

        config_data = self._merge_config(config_data, self._get_env_config())

        try:
            return Config(**config_data)
        except PydanticValidationError as e:
            msg = f"Invalid configuration: {e}"
            raise ConfigurationError(msg) from e

    def _get_env_config(self) -> dict[str, Any]:
        """Get configuration from environment variables."""
        env_config: dict[str, Any] = {}
        for env_var, config_path in ENV_MAPPINGS.items():
            raw = os.environ.get(env_var)
            if raw is not None:
                _set_nested(env_config, config_path, _parse_env_value(raw))
        return env_config

    def _merge_config(
        self,
        base: dict[str, Any],
        override: dict[str, Any],
    ) -> dict[str, Any]:
        """Recursively merge ``override`` into ``base``."""
        result = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(result.get(key), dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def setup_logging(self) -> None:
        """Apply the observability section to the logging system."""
        setup_logging(self.config.observability)

    def export(self) -> str:
        """Export the effective configuration as TOML."""
        return toml.dumps(self.config.model_dump(mode="json", exclude_none=True))


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.config


def init_config(config_file: str | Path | None = None) -> ConfigManager:
    """Initialize the global configuration manager."""
    global _config_manager
    _config_manager = ConfigManager(config_file)
    logging.getLogger(__name__).debug(
        "Loaded configuration from %s", _config_manager.config_file or "defaults"
    )
    return _config_manager


def reset_config() -> None:
    """Forget the global configuration (used by tests)."""
    global _config_manager
    _config_manager = None


def get_create_config() -> CreateConfig:
    """Get torrent creation defaults."""
    return get_config().create


def get_observability_config() -> ObservabilityConfig:
    """Get observability configuration."""
    return get_config().observability
