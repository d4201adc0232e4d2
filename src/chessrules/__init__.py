"""Chess rules engine: board model, move legality, FEN and PGN."""

from chessrules.errors import (
    AmbiguousMoveError,
    ChessError,
    IllegalMoveError,
    InvalidSquareNameError,
    InvalidSquarePairError,
    MalformedFENError,
    MalformedPGNError,
)

__version__ = "0.1.0"

__all__ = [
    "AmbiguousMoveError",
    "ChessError",
    "IllegalMoveError",
    "InvalidSquareNameError",
    "InvalidSquarePairError",
    "MalformedFENError",
    "MalformedPGNError",
    "__version__",
]
