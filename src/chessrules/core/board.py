"""Board - squares, piece table, piece lists, game state and history."""

from __future__ import annotations

import logging

from chessrules.core import rules
from chessrules.core.engine import MoveEngine
from chessrules.core.enums import CastlingFlag, Color, MoveType, PieceType
from chessrules.core.history import MoveHistory
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.square import Square
from chessrules.core.state import CastlingAvailability, GameState
from chessrules.core.types import (
    NUM_FILES,
    NUM_RANKS,
    NUM_SQUARES,
    file_number,
    parse_square_name,
    square_index,
    starting_pawn_rank,
    starting_rank,
)
from chessrules.errors import InvalidSquareNameError

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 64-square board owning every piece placed on it.

    ``Board()`` holds the standard starting position; :meth:`empty` returns
    a sandbox board for :meth:`place_piece` / :meth:`remove_piece`.

    Squares and pieces refer to each other only by index into the board's
    tables. The active/captured piece lists are maintained on every
    placement and capture, never rebuilt by scanning the grid.
    """

    __slots__ = (
        "_squares",
        "_pieces",
        "_active",
        "_active_by_type",
        "_captured",
        "state",
        "history",
        "_engine",
    )

    def __init__(self, *, setup: bool = True) -> None:
        self._squares: tuple[Square, ...] = tuple(
            Square(self, index) for index in range(NUM_SQUARES)
        )
        self._pieces: list[Piece] = []
        self._active: dict[Color, list[Piece]] = {color: [] for color in Color}
        self._active_by_type: dict[Color, dict[PieceType, list[Piece]]] = {
            color: {piece_type: [] for piece_type in PieceType} for color in Color
        }
        self._captured: dict[Color, list[Piece]] = {color: [] for color in Color}
        self.state = GameState()
        self.history = MoveHistory()
        self._engine = MoveEngine(self)
        if setup:
            self._setup_initial()
        else:
            self.state.castling = CastlingAvailability(CastlingFlag.NONE)

    # ── Factories ─────────────────────────────────────────────────────

    @classmethod
    def empty(cls) -> Board:
        """Sandbox board: no pieces, no castling rights, White to move."""
        return cls(setup=False)

    @classmethod
    def from_fen(cls, fen: str) -> Board:
        """Sandbox board holding the position described by *fen*."""
        from chessrules.core.notation.fen import board_from_fen

        return board_from_fen(fen)

    def _setup_initial(self) -> None:
        for color in Color:
            pawn_rank = starting_pawn_rank(color)
            home_rank = starting_rank(color)
            for file in range(1, NUM_FILES + 1):
                self._add_piece(color, PieceType.PAWN, self.square_at(file, pawn_rank))
            for file, piece_type in enumerate(_BACK_RANK, start=1):
                self._add_piece(color, piece_type, self.square_at(file, home_rank))

    # ── Square lookup ─────────────────────────────────────────────────

    @property
    def squares(self) -> tuple[Square, ...]:
        """All squares, a1 first and h8 last."""
        return self._squares

    def square_at(self, file: int | str, rank: int) -> Square:
        """Square for a file (1–8 or ``'a'``–``'h'``) and a rank (1–8)."""
        if isinstance(file, str):
            file = file_number(file)
        if not (1 <= file <= NUM_FILES and 1 <= rank <= NUM_RANKS):
            raise InvalidSquareNameError(f"No square at file={file}, rank={rank}")
        return self._squares[square_index(file, rank)]

    def square_by_name(self, name: str) -> Square:
        """Square for an algebraic name such as ``'e4'``."""
        return self._squares[parse_square_name(name)]

    def _resolve(self, target: Square | str) -> Square:
        return self.square_by_name(target) if isinstance(target, str) else target

    # ── Piece lookup ──────────────────────────────────────────────────

    def piece_by_id(self, piece_id: int) -> Piece:
        return self._pieces[piece_id]

    def piece_at(self, target: Square | str) -> Piece | None:
        return self._resolve(target).piece

    def square_of(self, piece: Piece) -> Square | None:
        """Square *piece* stands on, or ``None`` once captured."""
        if piece.square_index is None:
            return None
        return self._squares[piece.square_index]

    def active_pieces(
        self, color: Color, piece_type: PieceType | None = None
    ) -> list[Piece]:
        """Active pieces of *color*, optionally of one non-king type."""
        if piece_type is None:
            return list(self._active[color])
        if piece_type == PieceType.KING:
            raise ValueError("Use Board.king() to look up a king")
        return list(self._active_by_type[color][piece_type])

    def captured_pieces(self, color: Color) -> list[Piece]:
        """Pieces of *color* that have been captured, in capture order."""
        return list(self._captured[color])

    def king(self, color: Color) -> Piece | None:
        """The active king of *color* (``None`` on a sandbox board without one)."""
        kings = self._active_by_type[color][PieceType.KING]
        return kings[0] if kings else None

    # ── Rules queries ─────────────────────────────────────────────────

    def is_legal_square(
        self, piece: Piece, dest: Square | str, ignore_pins: bool = False
    ) -> bool:
        return rules.is_legal_square(self, piece, self._resolve(dest), ignore_pins)

    def is_attacking(self, piece: Piece, dest: Square | str) -> bool:
        return rules.is_attacking(self, piece, self._resolve(dest))

    def is_pinned(self, piece: Piece) -> bool:
        return rules.is_pinned(self, piece)

    def legal_squares(self, piece: Piece) -> list[Square]:
        """Every square *piece* may legally move to right now."""
        return [sq for sq in self._squares if rules.is_legal_square(self, piece, sq)]

    @property
    def en_passant_square(self) -> Square | None:
        index = self.state.en_passant
        return None if index is None else self._squares[index]

    # ── Moves ─────────────────────────────────────────────────────────

    def move(
        self,
        piece: Piece,
        dest: Square | str,
        move_type: MoveType | None = None,
    ) -> Move:
        """Commit *piece* to *dest* after full validation.

        Raises :class:`~chessrules.errors.IllegalMoveError` and leaves the
        board untouched when the move is not allowed.
        """
        return self._engine.commit(piece, self._resolve(dest), move_type)

    def move_san(self, san: str) -> Move:
        """Resolve a SAN move for the side to move and commit it."""
        from chessrules.core.notation.san import parse_move

        partial = parse_move(self, self.state.active_color, san)
        return self._engine.commit(
            partial.moved_piece, partial.end, partial.move_type, san=partial.san
        )

    # ── Sandbox editing ───────────────────────────────────────────────

    def place_piece(
        self, color: Color, piece_type: PieceType, square_name: str
    ) -> Piece:
        """Create a piece on an empty square, ignoring legality and turn order."""
        square = self.square_by_name(square_name)
        if not square.is_empty():
            raise ValueError(f"Square {square.name} is occupied")
        if piece_type == PieceType.KING and self.king(color) is not None:
            raise ValueError(f"{color} already has a king on the board")
        piece = self._add_piece(color, piece_type, square)
        _LOGGER.debug("Placed %s on %s", piece, square.name)
        return piece

    def remove_piece(self, target: Square | str | Piece) -> Piece | None:
        """Take a piece off the board; it joins the captured list."""
        if isinstance(target, Piece):
            piece: Piece | None = target
        else:
            piece = self._resolve(target).piece
        if piece is None or piece.captured:
            return None
        self.capture(piece)
        return piece

    def _add_piece(self, color: Color, piece_type: PieceType, square: Square) -> Piece:
        piece = Piece(len(self._pieces), color, piece_type, square_index=square.index)
        self._pieces.append(piece)
        self._active[color].append(piece)
        self._active_by_type[color][piece_type].append(piece)
        square.occupant_id = piece.id
        return piece

    # ── Low-level mutation (no legality checks) ───────────────────────

    def relocate(self, piece: Piece, dest: Square) -> Piece | None:
        """Move *piece* to *dest*, capturing any occupant; returns the capture."""
        captured = dest.piece
        if captured is not None:
            self.capture(captured)
        origin = self.square_of(piece)
        if origin is not None:
            origin.occupant_id = None
        piece.last_square_index = piece.square_index
        piece.square_index = dest.index
        dest.occupant_id = piece.id
        return captured

    def capture(self, piece: Piece) -> None:
        """Move *piece* from the active lists to the captured list."""
        square = self.square_of(piece)
        if square is not None and square.occupant_id == piece.id:
            square.occupant_id = None
        piece.captured = True
        piece.last_square_index = piece.square_index
        piece.square_index = None
        self._active[piece.color].remove(piece)
        self._active_by_type[piece.color][piece.piece_type].remove(piece)
        self._captured[piece.color].append(piece)

    # ── Views ─────────────────────────────────────────────────────────

    def to_fen(self) -> str:
        """Full six-field FEN of the current position."""
        from chessrules.core.notation.fen import board_to_fen

        return board_to_fen(self)

    def pretty_print(self) -> str:
        """ASCII grid with rank/file labels and a captured-piece summary."""
        from chessrules.core.formatter import format_board

        return format_board(self)

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(NUM_RANKS, 0, -1):
            row = []
            for file in range(1, NUM_FILES + 1):
                piece = self.square_at(file, rank).piece
                row.append(piece.symbol if piece else ".")
            rows.append(f"{rank} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
