"""Pytest configuration and shared fixtures for torrentsmith tests."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

import pytest

from torrentsmith.config import config as config_module


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("unit", "marks tests as unit tests"),
        ("core", "marks tests as core functionality tests"),
        ("cli", "marks tests as CLI tests"),
        ("config", "marks tests as configuration tests"),
        ("property", "marks tests as property-based tests"),
        ("integration", "marks tests as integration tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep user config files and TORRENTSMITH_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    for key in list(os.environ):
        if key.startswith("TORRENTSMITH_"):
            monkeypatch.delenv(key, raising=False)
    config_module.reset_config()
    yield
    config_module.reset_config()


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)


@pytest.fixture
def make_tree(tmp_path) -> Callable[[dict[str, bytes]], Path]:
    """Build a directory tree from ``{relative_path: content}``."""

    def _make(files: dict[str, bytes], name: str = "payload") -> Path:
        root = tmp_path / name
        root.mkdir()
        for rel_path, content in files.items():
            file_path = root / rel_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(content)
        return root

    return _make


@pytest.fixture
def pattern_bytes() -> Callable[[int, int], bytes]:
    """Deterministic, non-repeating-looking byte pattern of a given size."""

    def _pattern(size: int, seed: int = 0) -> bytes:
        return bytes((i * 31 + seed * 7 + (i >> 8)) % 256 for i in range(size))

    return _pattern


@pytest.fixture
def tracker_url() -> str:
    return "http://tracker.example.com:8080/announce"
