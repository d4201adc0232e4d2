"""Board geometry constants and coordinate helpers.

Board layout (little-endian rank-file mapping, files and ranks are 1-based)::

    a1=0, b1=1, ..., h1=7
    a2=8, b2=9, ..., h2=15
    ...
    a8=56, b8=57, ..., h8=63
"""

from __future__ import annotations

import re

from chessrules.core.enums import Color
from chessrules.errors import InvalidSquareNameError

NUM_FILES = 8
NUM_RANKS = 8
NUM_SQUARES = NUM_FILES * NUM_RANKS

FILE_NAMES = "abcdefgh"
SQUARE_NAME_RE = re.compile(r"^[a-h][1-8]$")

KINGSIDE_ROOK_FILE = 8
QUEENSIDE_ROOK_FILE = 1
KING_FILE = 5


def square_index(file: int, rank: int) -> int:
    """Flat index for a 1-based (file, rank) pair."""
    if not (1 <= file <= NUM_FILES and 1 <= rank <= NUM_RANKS):
        raise ValueError(f"Coordinates out of range: file={file}, rank={rank}")
    return (rank - 1) * NUM_FILES + (file - 1)


def file_of(index: int) -> int:
    """File number 1–8 (a–h)."""
    return index % NUM_FILES + 1


def rank_of(index: int) -> int:
    """Rank number 1–8."""
    return index // NUM_FILES + 1


def file_name(file: int) -> str:
    return FILE_NAMES[file - 1]


def file_number(name: str) -> int:
    """``'a'`` → 1 ... ``'h'`` → 8."""
    if len(name) != 1 or name not in FILE_NAMES:
        raise InvalidSquareNameError(f"Invalid file name: {name!r}")
    return FILE_NAMES.index(name) + 1


def square_name(index: int) -> str:
    """Human-readable name, e.g. 0 → 'a1', 63 → 'h8'."""
    return f"{file_name(file_of(index))}{rank_of(index)}"


def parse_square_name(name: str) -> int:
    """Parse a square name, e.g. 'e4' → 28."""
    if not isinstance(name, str) or SQUARE_NAME_RE.match(name) is None:
        raise InvalidSquareNameError(f"Invalid square name: {name!r}")
    return square_index(file_number(name[0]), int(name[1]))


def starting_rank(color: Color) -> int:
    """Rank holding *color*'s major pieces at the start."""
    return 1 if color is Color.WHITE else NUM_RANKS


def starting_pawn_rank(color: Color) -> int:
    return 2 if color is Color.WHITE else NUM_RANKS - 1


def forward(color: Color) -> int:
    """Rank direction a pawn of *color* advances in."""
    return 1 if color is Color.WHITE else -1


def is_kingside(file: int) -> bool:
    """Files e–h belong to the kingside."""
    return file > NUM_FILES // 2
