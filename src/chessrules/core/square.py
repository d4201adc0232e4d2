"""Square: fixed coordinates on a board plus an optional occupant."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.types import file_of, file_name, rank_of

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.piece import Piece


class Square:
    """One of the 64 squares of a :class:`Board`.

    Rank and file never change after construction. The occupant is stored
    as a piece id and resolved through the owning board's piece table.
    """

    __slots__ = ("board", "index", "file", "rank", "occupant_id")

    def __init__(self, board: Board, index: int) -> None:
        self.board = board
        self.index = index
        self.file = file_of(index)
        self.rank = rank_of(index)
        self.occupant_id: int | None = None

    @property
    def name(self) -> str:
        return f"{file_name(self.file)}{self.rank}"

    @property
    def piece(self) -> Piece | None:
        if self.occupant_id is None:
            return None
        return self.board.piece_by_id(self.occupant_id)

    def is_empty(self) -> bool:
        return self.occupant_id is None

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Square({self.name})"
