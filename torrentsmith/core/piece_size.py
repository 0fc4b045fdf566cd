"""Piece length selection.

Chooses the power-of-two piece length whose piece count lands closest to a
target (2000 by default), and resolves the ``PieceSize.AUTO`` marker into a
concrete length before any hashing starts.
"""

from __future__ import annotations

import logging
from pathlib import Path

from torrentsmith.core.catalog import directory_size
from torrentsmith.exceptions import InvalidArgumentError
from torrentsmith.models import PieceSize

logger = logging.getLogger(__name__)

DEFAULT_TARGET_PIECE_COUNT = 2000


def calculate_piece_count(total_size: int, piece_length: int) -> int:
    """Number of pieces needed to cover ``total_size`` bytes (ceiling division)."""
    if piece_length <= 0:
        msg = f"Piece length must be greater than 0, got {piece_length}"
        raise InvalidArgumentError(msg)
    if total_size < 0:
        msg = f"Total size must not be negative, got {total_size}"
        raise InvalidArgumentError(msg)
    return -(-total_size // piece_length)


def select_piece_size(
    total_size: int,
    target_piece_count: int = DEFAULT_TARGET_PIECE_COUNT,
) -> PieceSize:
    """Pick the candidate piece size whose piece count is closest to the target.

    Candidates are scanned smallest first. When a larger candidate ties the
    best distance seen so far the scan stops and the smaller one is kept; an
    exact hit also stops the scan.

    Args:
        total_size: Total payload size in bytes
        target_piece_count: Desired number of pieces

    Returns:
        The selected concrete PieceSize

    Raises:
        InvalidArgumentError: If either argument is not positive

    """
    if total_size <= 0:
        msg = f"Total torrent size must be greater than 0, got {total_size}"
        raise InvalidArgumentError(msg)
    if target_piece_count <= 0:
        msg = f"Target piece count must be greater than 0, got {target_piece_count}"
        raise InvalidArgumentError(msg)

    candidates = PieceSize.candidates()
    optimal = candidates[0]
    smallest_difference: int | None = None

    for candidate in candidates:
        piece_count = calculate_piece_count(total_size, candidate)
        difference = abs(piece_count - target_piece_count)

        # Equidistant from the target: keep the smaller (previous) size
        if difference == smallest_difference:
            break

        if smallest_difference is None or difference < smallest_difference:
            optimal = candidate
            smallest_difference = difference

        if difference == 0:
            break

    logger.debug(
        "Selected piece size %s for %d bytes (target %d pieces)",
        optimal.label,
        total_size,
        target_piece_count,
    )
    return optimal


def resolve_piece_size(
    piece_size: PieceSize | int,
    total_size: int,
    target_piece_count: int = DEFAULT_TARGET_PIECE_COUNT,
) -> int:
    """Turn a piece size option into a concrete length in bytes.

    An empty payload has nothing to size against, so AUTO falls back to the
    smallest candidate.

    Raises:
        InvalidArgumentError: If ``piece_size`` is not a known option

    """
    try:
        option = PieceSize(piece_size)
    except ValueError as e:
        msg = f"Unsupported piece size: {piece_size}"
        raise InvalidArgumentError(msg, {"allowed": [p.value for p in PieceSize.candidates()]}) from e

    if option is not PieceSize.AUTO:
        return int(option)
    if total_size == 0:
        return int(PieceSize.candidates()[0])
    return int(select_piece_size(total_size, target_piece_count))


def calculate_pieces(input_path: str | Path, piece_size: PieceSize | int) -> int:
    """Count the pieces a directory would be split into at a fixed piece size.

    Raises:
        PathNotFoundError: If ``input_path`` is not an existing directory
        InvalidArgumentError: If ``piece_size`` is AUTO or unknown

    """
    if piece_size == PieceSize.AUTO:
        msg = "Piece size must be specified when calculating pieces (non-Auto)"
        raise InvalidArgumentError(msg)
    piece_length = resolve_piece_size(piece_size, 0)
    total_size = directory_size(input_path)
    return calculate_piece_count(total_size, piece_length)
