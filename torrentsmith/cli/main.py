"""Command line interface for torrentsmith.

Provides:
- ``create``: build a .torrent file from a directory or file
- ``piece-size``: show the automatic piece size for a payload size
- ``pieces``: count pieces for a directory at a given piece size
- ``md5``: whole-file MD5 digest as stored in ``md5sum``
- ``config``: print the effective configuration
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.table import Table

from torrentsmith import __version__
from torrentsmith.cli.console import create_console, print_error
from torrentsmith.cli.create_torrent import PIECE_SIZE_CHOICES, config_from_ctx, create_torrent
from torrentsmith.cli.verbosity import VerbosityManager
from torrentsmith.config.config import init_config
from torrentsmith.core.catalog import calculate_file_md5
from torrentsmith.core.piece_size import (
    calculate_piece_count,
    calculate_pieces,
    select_piece_size,
)
from torrentsmith.exceptions import TorrentSmithError
from torrentsmith.models import PieceSize

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(__version__, prog_name="torrentsmith")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: info, -vv: debug, -vvv: trace)",
)
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: int) -> None:
    """torrentsmith - create BitTorrent metainfo files."""
    ctx.ensure_object(dict)
    verbosity_manager = VerbosityManager.from_count(verbose)
    ctx.obj["verbosity"] = verbose
    ctx.obj["verbosity_manager"] = verbosity_manager

    try:
        config_manager = init_config(config)
    except TorrentSmithError as e:
        print_error(create_console(), e.message)
        raise click.Abort from e
    ctx.obj["config_manager"] = config_manager

    override = verbosity_manager.log_level()
    if override is not None:
        config_manager.config.observability.log_level = override
    config_manager.setup_logging()


@cli.command("piece-size")
@click.argument("total_bytes", type=int)
@click.option(
    "--target",
    type=int,
    default=None,
    help="Target piece count (default from config, normally 2000)",
)
@click.pass_context
def piece_size_cmd(ctx: click.Context, total_bytes: int, target: int | None) -> None:
    """Show the automatic piece size for TOTAL_BYTES of payload."""
    console = create_console()
    target_count = target if target is not None else config_from_ctx(ctx).create.target_piece_count
    try:
        selected = select_piece_size(total_bytes, target_count)
    except TorrentSmithError as e:
        print_error(console, e.message)
        raise click.Abort from e

    table = Table(title="Piece size")
    table.add_column("Payload (bytes)", justify="right")
    table.add_column("Piece size")
    table.add_column("Pieces", justify="right")
    table.add_row(
        str(total_bytes),
        f"{selected.label} ({selected.value} bytes)",
        str(calculate_piece_count(total_bytes, selected.value)),
    )
    console.print(table)


@cli.command("pieces")
@click.argument("source", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--piece-size",
    "piece_size_label",
    required=True,
    type=click.Choice([label for label in PIECE_SIZE_CHOICES if label != PieceSize.AUTO.label], case_sensitive=False),
    help="Concrete piece size",
)
def pieces_cmd(source: Path, piece_size_label: str) -> None:
    """Count the pieces SOURCE would be split into."""
    console = create_console()
    try:
        count = calculate_pieces(source, PieceSize.from_label(piece_size_label))
    except TorrentSmithError as e:
        print_error(console, e.message)
        raise click.Abort from e
    console.print(str(count))


@cli.command("md5")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def md5_cmd(ctx: click.Context, file: Path) -> None:
    """Print the uppercase MD5 digest of FILE."""
    console = create_console()
    try:
        digest = calculate_file_md5(file, config_from_ctx(ctx).create.md5_chunk_size)
    except TorrentSmithError as e:
        print_error(console, e.message)
        raise click.Abort from e
    console.print(f"{digest}  {file}")


@cli.command("config")
@click.pass_context
def config_cmd(ctx: click.Context) -> None:
    """Print the effective configuration as TOML."""
    click.echo(ctx.obj["config_manager"].export())


cli.add_command(create_torrent)


def main() -> None:
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
