"""Game state: side to move, castling bitset, en passant target, counters."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.enums import CastlingFlag, Color
from chessrules.core.types import square_name

_CAN_CASTLE: dict[tuple[Color, bool], CastlingFlag] = {
    (Color.WHITE, True): CastlingFlag.WHITE_CAN_CASTLE_KINGSIDE,
    (Color.WHITE, False): CastlingFlag.WHITE_CAN_CASTLE_QUEENSIDE,
    (Color.BLACK, True): CastlingFlag.BLACK_CAN_CASTLE_KINGSIDE,
    (Color.BLACK, False): CastlingFlag.BLACK_CAN_CASTLE_QUEENSIDE,
}
_CASTLED: dict[tuple[Color, bool], CastlingFlag] = {
    (Color.WHITE, True): CastlingFlag.WHITE_CASTLED_KINGSIDE,
    (Color.WHITE, False): CastlingFlag.WHITE_CASTLED_QUEENSIDE,
    (Color.BLACK, True): CastlingFlag.BLACK_CASTLED_KINGSIDE,
    (Color.BLACK, False): CastlingFlag.BLACK_CASTLED_QUEENSIDE,
}
_FEN_RIGHTS: tuple[tuple[str, CastlingFlag], ...] = (
    ("K", CastlingFlag.WHITE_CAN_CASTLE_KINGSIDE),
    ("Q", CastlingFlag.WHITE_CAN_CASTLE_QUEENSIDE),
    ("k", CastlingFlag.BLACK_CAN_CASTLE_KINGSIDE),
    ("q", CastlingFlag.BLACK_CAN_CASTLE_QUEENSIDE),
)


class CastlingAvailability:
    """Eight-bit castling record.

    Castling is a one-time event per color: setting a *castled* bit clears
    both of that color's *can castle* bits.
    """

    __slots__ = ("_state",)

    def __init__(self, state: CastlingFlag = CastlingFlag.ALL_RIGHTS) -> None:
        self._state = CastlingFlag(state)

    @classmethod
    def from_fen_field(cls, field_text: str) -> CastlingAvailability:
        """Rights from a FEN castling field such as ``'KQkq'`` or ``'-'``."""
        state = CastlingFlag.NONE
        for char, flag in _FEN_RIGHTS:
            if char in field_text:
                state |= flag
        return cls(state)

    @property
    def state(self) -> CastlingFlag:
        return self._state

    def is_status(self, status: CastlingFlag) -> bool:
        """Whether any bit of *status* is set."""
        return bool(self._state & status)

    def can_castle(self, color: Color, kingside: bool) -> bool:
        return self.is_status(_CAN_CASTLE[(color, kingside)])

    def castled(self, color: Color) -> bool:
        """Whether *color* has castled on either side."""
        return self.is_status(_CASTLED[(color, True)] | _CASTLED[(color, False)])

    def castle(self, color: Color, kingside: bool) -> None:
        """Record that *color* castled; no further castling for that color."""
        self.revoke(color)
        self._state |= _CASTLED[(color, kingside)]

    def revoke(self, color: Color, kingside: bool | None = None) -> None:
        """Clear one side's right, or both when *kingside* is ``None``."""
        if kingside is None:
            self._state &= ~(_CAN_CASTLE[(color, True)] | _CAN_CASTLE[(color, False)])
        else:
            self._state &= ~_CAN_CASTLE[(color, kingside)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CastlingAvailability):
            return NotImplemented
        return self._state == other._state

    def __str__(self) -> str:
        rights = "".join(char for char, flag in _FEN_RIGHTS if self.is_status(flag))
        return rights or "-"

    def __repr__(self) -> str:
        return f"CastlingAvailability({self._state!r})"


@dataclass
class GameState:
    """Authoritative game metadata owned by a board.

    Mutated only as a side effect of a committed move (or of FEN import
    on a sandbox board). ``en_passant`` is a board index.
    """

    active_color: Color = Color.WHITE
    castling: CastlingAvailability = field(default_factory=CastlingAvailability)
    en_passant: int | None = None
    move_count: int = 1
    half_move_clock: int = 0
    half_move_total: int = 0

    def toggle_active_color(self) -> None:
        """Pass the turn; the move counter advances after Black moves."""
        if self.active_color is Color.BLACK:
            self.move_count += 1
        self.active_color = self.active_color.opposite

    def reset_half_move_clock(self) -> None:
        self.half_move_clock = 0

    def increment_half_move_clock(self) -> None:
        self.half_move_clock += 1

    def increment_half_move_total(self) -> None:
        self.half_move_total += 1

    def __str__(self) -> str:
        """The five FEN fields following the piece placement."""
        ep = square_name(self.en_passant) if self.en_passant is not None else "-"
        return (
            f"{self.active_color.fen_char} {self.castling} {ep} "
            f"{self.half_move_clock} {self.move_count}"
        )
