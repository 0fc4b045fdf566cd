"""Command line interface for torrentsmith."""

from torrentsmith.cli.main import cli, main

__all__ = [
    "cli",
    "main",
]
