"""Console helpers for Rich output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape


def create_console() -> Console:
    """Console for command output; long paths are never wrapped."""
    return Console(soft_wrap=True, highlight=False)


def print_error(console: Console, message: str) -> None:
    """Print an error line in red."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def print_success(console: Console, message: str) -> None:
    """Print a success line in green."""
    console.print(f"[green]{escape(message)}[/green]")


def print_info(console: Console, message: str) -> None:
    """Print a dimmed informational line."""
    console.print(f"[dim]{escape(message)}[/dim]")
