"""Core enumerations and flags for the chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def fen_char(self) -> str:
        """Active-color field of a FEN string."""
        return "w" if self is Color.WHITE else "b"

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def symbol(self) -> str:
        """Lowercase letter, e.g. ``'n'`` for a knight."""
        return _SYMBOLS[self]

    @property
    def material_value(self) -> int:
        return _MATERIAL_VALUES[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> PieceType:
        """Piece type for a FEN/SAN letter of either case."""
        try:
            return _SYMBOLS_REV[symbol.lower()]
        except KeyError:
            raise ValueError(f"Invalid piece symbol: {symbol!r}") from None

    def __str__(self) -> str:
        return self.name.lower()


_SYMBOLS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_SYMBOLS_REV: dict[str, PieceType] = {v: k for k, v in _SYMBOLS.items()}

# The king is priceless; a large value keeps it first when sorting captures.
_MATERIAL_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
    PieceType.KING: 1_000,
}


class MoveType(Enum):
    """How a committed move is classified."""

    NORMAL = "normal"
    CASTLING = "castling"
    EN_PASSANT = "en_passant"
    CHECKMATE = "checkmate"


class CastlingFlag(IntFlag):
    """Eight independent castling bits: can-castle and castled, per color and side."""

    NONE = 0
    WHITE_CAN_CASTLE_KINGSIDE = 0x01
    WHITE_CAN_CASTLE_QUEENSIDE = 0x02
    WHITE_CASTLED_KINGSIDE = 0x04
    WHITE_CASTLED_QUEENSIDE = 0x08
    BLACK_CAN_CASTLE_KINGSIDE = 0x10
    BLACK_CAN_CASTLE_QUEENSIDE = 0x20
    BLACK_CASTLED_KINGSIDE = 0x40
    BLACK_CASTLED_QUEENSIDE = 0x80

    WHITE_CAN_CASTLE = WHITE_CAN_CASTLE_KINGSIDE | WHITE_CAN_CASTLE_QUEENSIDE
    WHITE_CASTLED = WHITE_CASTLED_KINGSIDE | WHITE_CASTLED_QUEENSIDE
    BLACK_CAN_CASTLE = BLACK_CAN_CASTLE_KINGSIDE | BLACK_CAN_CASTLE_QUEENSIDE
    BLACK_CASTLED = BLACK_CASTLED_KINGSIDE | BLACK_CASTLED_QUEENSIDE
    ALL_RIGHTS = WHITE_CAN_CASTLE | BLACK_CAN_CASTLE


class GameResult(IntEnum):
    """Outcome recorded by a PGN game termination marker."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
