"""Typed failures raised by the rules and notation layers.

All of them are ordinary, recoverable errors: a failed move attempt leaves
the board untouched, so callers can report the message and carry on.
"""

from __future__ import annotations


class ChessError(ValueError):
    """Base class for every rules / notation failure."""


class IllegalMoveError(ChessError):
    """The move breaks a movement rule, a pin, turn order or castling rights."""


class AmbiguousMoveError(ChessError):
    """More than one piece matches a SAN move."""


class InvalidSquareNameError(ChessError):
    """Square text does not match ``[a-h][1-8]``."""


class InvalidSquarePairError(ChessError):
    """Two squares were compared that do not belong to the same board."""


class MalformedFENError(ChessError):
    """FEN text violates the six-field format."""


class MalformedPGNError(ChessError):
    """PGN text violates the tokenizer or the game grammar."""

    def __init__(self, message: str, line_number: int) -> None:
        super().__init__(f"{message} (line {line_number})")
        self.line_number = line_number
