"""Move records: committed moves and SAN-resolved partial moves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessrules.core.enums import MoveType

if TYPE_CHECKING:
    from chessrules.core.piece import Piece
    from chessrules.core.square import Square


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a move committed to a board."""

    moved_piece: Piece
    captured_piece: Piece | None
    start: Square
    end: Square
    move_type: MoveType
    move_number: int
    san: str = ""

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    def __str__(self) -> str:
        capture = f" (captured {self.captured_piece})" if self.captured_piece else ""
        return f"({self.move_number}) {self.moved_piece}: {self.start} => {self.end}{capture}"


@dataclass(frozen=True, slots=True)
class PartialMove:
    """A SAN move resolved to a piece and destination but not yet committed."""

    moved_piece: Piece
    end: Square
    move_type: MoveType = MoveType.NORMAL
    san: str = ""
