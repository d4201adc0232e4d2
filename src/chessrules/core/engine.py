"""Move commit: validation followed by every side effect of a move."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chessrules.core.enums import MoveType, PieceType
from chessrules.core.move import Move
from chessrules.core.paths import file_distance, rank_distance
from chessrules.core.rules import is_legal_square
from chessrules.core.types import (
    KING_FILE,
    KINGSIDE_ROOK_FILE,
    QUEENSIDE_ROOK_FILE,
    forward,
    is_kingside,
    starting_rank,
)
from chessrules.errors import IllegalMoveError

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.piece import Piece
    from chessrules.core.square import Square

_LOGGER = logging.getLogger(__name__)

# King destination file -> (rook start file, rook end file)
_CASTLING_ROOK_FILES: dict[int, tuple[int, int]] = {
    7: (KINGSIDE_ROOK_FILE, 6),
    3: (QUEENSIDE_ROOK_FILE, 4),
}


class MoveEngine:
    """Commits moves to one board.

    :meth:`commit` checks everything up front and raises
    :class:`IllegalMoveError` before touching the board, so a rejected move
    leaves pieces, state and history exactly as they were.
    """

    __slots__ = ("_board",)

    def __init__(self, board: Board) -> None:
        self._board = board

    def classify(self, piece: Piece, start: Square, dest: Square) -> MoveType:
        """Geometric move type of *piece* going from *start* to *dest*."""
        if piece.piece_type == PieceType.KING and file_distance(start, dest) == 2:
            return MoveType.CASTLING
        if (
            piece.piece_type == PieceType.PAWN
            and file_distance(start, dest) == 1
            and dest.index == self._board.state.en_passant
        ):
            return MoveType.EN_PASSANT
        return MoveType.NORMAL

    def commit(
        self,
        piece: Piece,
        dest: Square,
        move_type: MoveType | None = None,
        san: str | None = None,
    ) -> Move:
        board = self._board
        state = board.state
        start = board.square_of(piece)

        # ── Validation ───────────────────────────────────────────────────
        if piece.captured or start is None or start.piece is not piece:
            raise IllegalMoveError(f"{piece} is not on the board")
        if piece.color is not state.active_color:
            raise IllegalMoveError(
                f"It is {state.active_color}'s turn; cannot move {piece}"
            )
        if not is_legal_square(board, piece, dest):
            raise IllegalMoveError(f"Illegal move: {piece} {start} => {dest}")

        actual = self.classify(piece, start, dest)
        if move_type in (MoveType.CASTLING, MoveType.EN_PASSANT) and move_type is not actual:
            raise IllegalMoveError(
                f"{piece} {start} => {dest} is not a {move_type.value} move"
            )
        if actual is MoveType.CASTLING:
            kingside = dest.file > start.file
            if not state.castling.can_castle(piece.color, kingside):
                raise IllegalMoveError(f"{piece.color} may not castle that way")

        victim: Piece | None = None
        if actual is MoveType.EN_PASSANT:
            victim = board.square_at(dest.file, dest.rank - forward(piece.color)).piece
            if (
                victim is None
                or victim.color is piece.color
                or victim.piece_type != PieceType.PAWN
            ):
                raise IllegalMoveError(f"No pawn to capture en passant on {dest}")

        recorded = (
            MoveType.CHECKMATE
            if move_type is MoveType.CHECKMATE and actual is MoveType.NORMAL
            else actual
        )
        if not san:
            from chessrules.core.notation.san import describe_move

            san = describe_move(board, piece, dest, recorded)
        move_number = state.move_count

        # ── Side effects ─────────────────────────────────────────────────
        if actual is MoveType.CASTLING:
            self._move_castling_rook(piece, dest)
            state.castling.castle(piece.color, dest.file > start.file)
        elif start.rank == starting_rank(piece.color):
            # Only a piece leaving its home square can forfeit a right.
            if piece.piece_type == PieceType.KING and start.file == KING_FILE:
                state.castling.revoke(piece.color)
            elif piece.piece_type == PieceType.ROOK and start.file in (
                KINGSIDE_ROOK_FILE,
                QUEENSIDE_ROOK_FILE,
            ):
                state.castling.revoke(piece.color, is_kingside(start.file))

        if victim is not None:
            board.capture(victim)
        captured = board.relocate(piece, dest) or victim
        if captured is not None and captured is not victim:
            self._revoke_for_captured_rook(captured, dest)

        self._update_en_passant(piece, start, dest)

        if captured is not None or piece.piece_type == PieceType.PAWN:
            state.reset_half_move_clock()
        else:
            state.increment_half_move_clock()
        state.increment_half_move_total()
        state.toggle_active_color()

        move = Move(piece, captured, start, dest, recorded, move_number, san)
        board.history.add(move)
        _LOGGER.info("%s played %s", piece.color, san)
        return move

    def _move_castling_rook(self, king: Piece, dest: Square) -> None:
        board = self._board
        rank = starting_rank(king.color)
        rook_from, rook_to = _CASTLING_ROOK_FILES[dest.file]
        rook = board.square_at(rook_from, rank).piece
        assert rook is not None
        board.relocate(rook, board.square_at(rook_to, rank))

    def _revoke_for_captured_rook(self, captured: Piece, dest: Square) -> None:
        """A rook taken on its home corner takes that castling right with it."""
        if captured.piece_type != PieceType.ROOK:
            return
        if dest.rank != starting_rank(captured.color):
            return
        if dest.file in (KINGSIDE_ROOK_FILE, QUEENSIDE_ROOK_FILE):
            self._board.state.castling.revoke(
                captured.color, dest.file == KINGSIDE_ROOK_FILE
            )

    def _update_en_passant(self, piece: Piece, start: Square, dest: Square) -> None:
        state = self._board.state
        if piece.piece_type == PieceType.PAWN and rank_distance(start, dest) == 2:
            passed = self._board.square_at(dest.file, dest.rank - forward(piece.color))
            state.en_passant = passed.index
            _LOGGER.info("En passant square set to %s", passed.name)
        elif state.en_passant is not None:
            state.en_passant = None
            _LOGGER.info("En passant square cleared")

