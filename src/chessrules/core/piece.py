"""Piece record: one tagged entity per piece on a board."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, PieceType


@dataclass(eq=False, slots=True)
class Piece:
    """A single piece tracked by a board's piece table.

    Per-variant behavior is not attached here; the legality predicates in
    :mod:`chessrules.core.rules` dispatch on :attr:`piece_type`. Squares are
    referenced by board index so the piece holds no pointer to its board.
    """

    id: int
    color: Color
    piece_type: PieceType
    square_index: int | None = None
    last_square_index: int | None = None
    captured: bool = False

    @property
    def symbol(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = self.piece_type.symbol
        return letter.upper() if self.color is Color.WHITE else letter

    @property
    def has_moved(self) -> bool:
        return self.last_square_index is not None

    def __str__(self) -> str:
        return f"{self.color} {self.piece_type}"
