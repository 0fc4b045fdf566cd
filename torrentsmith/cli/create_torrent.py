"""CLI command for creating torrent files.

Creates v1 torrents with per-file md5sum fields from a directory or a single
file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TransferSpeedColumn,
)

from torrentsmith.cli.console import create_console, print_error, print_info, print_success
from torrentsmith.cli.verbosity import get_verbosity_from_ctx
from torrentsmith.config.config import get_config
from torrentsmith.core.bencode import encode
from torrentsmith.core.catalog import directory_size
from torrentsmith.core.creator import TorrentCreator
from torrentsmith.exceptions import TorrentSmithError
from torrentsmith.models import Config, PieceSize

logger = logging.getLogger(__name__)

PIECE_SIZE_CHOICES = [member.label for member in PieceSize]


def config_from_ctx(ctx: click.Context) -> Config:
    """Config loaded by the command group, or the global one."""
    obj: dict[str, Any] | None = ctx.obj
    if obj and obj.get("config_manager") is not None:
        return obj["config_manager"].config
    return get_config()


def default_output_path(source: Path, torrent_name: str, output: Path | None) -> Path:
    """Where to write the torrent when ``--output`` is absent or a directory.

    Without ``--output`` the torrent goes next to the source as
    ``<source name>.torrent``, never inside a source directory.
    """
    if output is None:
        resolved = source.resolve()
        return resolved.parent / f"{resolved.name}.torrent"
    if output.is_dir():
        return output / f"{torrent_name}.torrent"
    return output


def output_inside_source(source: Path, output_path: Path) -> bool:
    """True if writing ``output_path`` would replace the source or add to its payload."""
    resolved_source = source.resolve()
    resolved_output = output_path.resolve()
    if resolved_output == resolved_source:
        return True
    return resolved_source.is_dir() and resolved_source in resolved_output.parents


@click.command("create")
@click.argument("source", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--tracker",
    "-t",
    required=True,
    type=str,
    help="Tracker announce URL",
)
@click.option(
    "--name",
    "-n",
    type=str,
    help="Torrent name (default: source base name)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output torrent file path (default: <source>.torrent)",
)
@click.option(
    "--piece-size",
    "piece_size_label",
    type=click.Choice(PIECE_SIZE_CHOICES, case_sensitive=False),
    help="Piece size (default from config, normally Auto)",
)
@click.option("--comment", type=str, help="Torrent comment")
@click.option("--created-by", type=str, help="Created by field")
@click.option(
    "--private/--public",
    default=None,
    help="Mark torrent as private (BEP 27)",
)
@click.pass_context
def create_torrent(
    ctx: click.Context,
    source: Path,
    tracker: str,
    name: str | None,
    output: Path | None,
    piece_size_label: str | None,
    comment: str | None,
    created_by: str | None,
    private: bool | None,
) -> None:
    """Create a torrent file from a directory or file.

    Examples:
        torrentsmith create ./album -t http://tracker.example.com/announce

        torrentsmith create ./album -t udp://tracker.example.com:6969 --piece-size 1MiB

    """
    console = create_console()
    verbosity = get_verbosity_from_ctx(ctx.obj)

    try:
        config = config_from_ctx(ctx)
    except TorrentSmithError as e:
        print_error(console, e.message)
        raise click.Abort from e
    create_cfg = config.create

    torrent_name = name or source.resolve().name
    piece_size = (
        PieceSize.from_label(piece_size_label) if piece_size_label else create_cfg.piece_size
    )
    output_path = default_output_path(source, torrent_name, output)

    print_info(console, f"Source: {source}")
    print_info(console, f"Output: {output_path}")
    print_info(console, f"Piece size: {piece_size.label}")

    creator = TorrentCreator(
        target_piece_count=create_cfg.target_piece_count,
        md5_chunk_size=create_cfg.md5_chunk_size,
        created_by=created_by or create_cfg.created_by,
    )

    if output_inside_source(source, output_path):
        print_error(console, f"Output path {output_path} would be written into the source {source}")
        raise click.Abort

    try:
        if not output_path.parent.is_dir():
            print_error(console, f"Output directory does not exist: {output_path.parent}")
            raise click.Abort

        payload_size = source.stat().st_size if source.is_file() else directory_size(source)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Hashing pieces...", total=payload_size or None)
            metadata = creator.build_metadata(
                source,
                torrent_name,
                tracker,
                piece_size,
                comment=comment,
                private=create_cfg.private if private is None else private,
                progress=lambda n: progress.advance(task, n),
            )
            torrent_bytes = encode(metadata.to_dict())
            progress.update(task, description=f"Saving torrent to {output_path}...")
            output_path.write_bytes(torrent_bytes)

    except TorrentSmithError as e:
        logger.debug("Torrent creation failed", exc_info=verbosity.should_show_stack_trace())
        print_error(console, e.message)
        raise click.Abort from e
    except OSError as e:
        logger.debug("Writing torrent failed", exc_info=verbosity.should_show_stack_trace())
        print_error(console, f"Cannot write {output_path}: {e}")
        raise click.Abort from e

    print_success(console, f"Torrent created successfully: {output_path}")
    print_info(
        console,
        f"{len(metadata.files)} files, {metadata.total_size} bytes, "
        f"{metadata.num_pieces} pieces of {metadata.piece_length} bytes",
    )
    print_info(console, f"Info hash (SHA-1): {metadata.info_hash.hex()}")
