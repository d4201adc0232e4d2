"""Distances and open lines between two squares of the same board."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import PieceType
from chessrules.core.types import NUM_FILES
from chessrules.errors import InvalidSquarePairError

if TYPE_CHECKING:
    from chessrules.core.square import Square


def _check_pair(start: Square, end: Square) -> None:
    if start is None or end is None or start.board is not end.board:
        raise InvalidSquarePairError("Squares must belong to the same board")


def rank_distance(start: Square, end: Square) -> int:
    """Absolute rank difference, e.g. a3 → d7 is 4."""
    _check_pair(start, end)
    return abs(start.rank - end.rank)


def file_distance(start: Square, end: Square) -> int:
    """Absolute file difference, e.g. a3 → d7 is 3."""
    _check_pair(start, end)
    return abs(start.file - end.file)


def is_same_diagonal(start: Square, end: Square) -> bool:
    """Whether both squares lie on one diagonal (a square is on its own)."""
    return file_distance(start, end) == rank_distance(start, end)


def is_same_line(start: Square, end: Square) -> bool:
    """Whether the squares share a rank, a file or a diagonal."""
    return (
        start.rank == end.rank
        or start.file == end.file
        or is_same_diagonal(start, end)
    )


def _stride(start: Square, end: Square) -> int:
    """Index step from *start* toward *end*; 0 when they share no line."""
    if start.rank == end.rank:
        step = 1
    elif start.file == end.file:
        step = NUM_FILES
    elif is_same_diagonal(start, end):
        rising = (end.rank - start.rank > 0) == (end.file - start.file > 0)
        step = NUM_FILES + 1 if rising else NUM_FILES - 1
    else:
        return 0
    return step if end.index > start.index else -step


def squares_between(start: Square, end: Square) -> list[Square]:
    """Squares strictly between *start* and *end* along their shared line.

    Returns an empty list for adjacent or identical squares and for pairs
    that share no rank, file or diagonal.
    """
    _check_pair(start, end)
    if start is end:
        return []
    step = _stride(start, end)
    if step == 0:
        return []
    squares = start.board.squares
    return [squares[i] for i in range(start.index + step, end.index, step)]


def is_path_clear(start: Square, end: Square) -> bool:
    """Whether nothing stands strictly between two squares.

    A square is always clear to itself, and a knight on *start* jumps so its
    path is always clear. Squares sharing no line are never clear.
    """
    _check_pair(start, end)
    if start is end:
        return True
    mover = start.piece
    if mover is not None and mover.piece_type == PieceType.KNIGHT:
        return True
    if _stride(start, end) == 0:
        return False
    return all(square.is_empty() for square in squares_between(start, end))
