"""SAN (Standard Algebraic Notation) resolution and description."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, MoveType, PieceType
from chessrules.core.move import PartialMove
from chessrules.core.rules import is_legal_square
from chessrules.core.types import file_name, file_number, starting_rank
from chessrules.errors import (
    AmbiguousMoveError,
    IllegalMoveError,
    InvalidSquareNameError,
)

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.piece import Piece
    from chessrules.core.square import Square

_LOGGER = logging.getLogger(__name__)

CASTLE_KINGSIDE = "O-O"
CASTLE_QUEENSIDE = "O-O-O"

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}

_CASTLING_TOKENS: dict[str, bool] = {
    "O-O": True,
    "0-0": True,
    "O-O-O": False,
    "0-0-0": False,
}


def parse_move(board: Board, color: Color, san: str) -> PartialMove:
    """Resolve *san* to the unique piece of *color* that can make it.

    Check, mate and promotion suffixes are stripped; a trailing ``#``
    marks the result as :attr:`MoveType.CHECKMATE`.

    Raises:
        IllegalMoveError: no piece can make the move, or the text is not SAN.
        AmbiguousMoveError: several non-pawn pieces can make it.
    """
    text = san.strip()
    _LOGGER.debug("Attempting to parse move %r for %s", text, color)
    checkmate = text.rstrip("!?").endswith("#")
    clean = text.rstrip("+#!?")

    if clean in _CASTLING_TOKENS:
        _LOGGER.debug("%r is a castling move", text)
        return _parse_castling(board, color, text, _CASTLING_TOKENS[clean])

    if "=" in clean:
        # Promotion is not modelled; the piece letter is dropped.
        clean = clean[: clean.index("=")]

    if len(clean) < 2:
        raise IllegalMoveError(f"Illegal move: {san}")
    try:
        dest = board.square_by_name(clean[-2:])
    except InvalidSquareNameError:
        raise IllegalMoveError(f"Illegal move: {san}") from None
    clean = clean[:-2]

    capture = clean.endswith("x")
    if capture:
        clean = clean[:-1]
        if dest.is_empty() and dest.index != board.state.en_passant:
            raise IllegalMoveError(f"Illegal move: {san} (nothing to capture)")

    move_type = MoveType.CHECKMATE if checkmate else MoveType.NORMAL
    if not clean or clean[0].islower():
        _LOGGER.debug("%r is a pawn move", text)
        piece = _resolve_pawn(board, color, san, clean, dest, capture)
        if capture and dest.index == board.state.en_passant:
            move_type = MoveType.EN_PASSANT
    else:
        _LOGGER.debug("%r is a piece move", text)
        piece = _resolve_piece(board, color, san, clean, dest)
    return PartialMove(piece, dest, move_type, text)


def _parse_castling(board: Board, color: Color, san: str, kingside: bool) -> PartialMove:
    king = board.king(color)
    if king is None or not board.state.castling.can_castle(color, kingside):
        raise IllegalMoveError(f"Illegal move: {san}")
    dest = board.square_at(7 if kingside else 3, starting_rank(color))
    if not is_legal_square(board, king, dest):
        raise IllegalMoveError(f"Illegal move: {san}")
    return PartialMove(king, dest, MoveType.CASTLING, san)


def _resolve_pawn(
    board: Board, color: Color, san: str, prefix: str, dest: Square, capture: bool
) -> Piece:
    if capture:
        if len(prefix) != 1:
            raise IllegalMoveError(f"Illegal move: {san}")
        try:
            file = file_number(prefix)
        except InvalidSquareNameError:
            raise IllegalMoveError(f"Illegal move: {san}") from None
        if abs(file - dest.file) != 1:
            raise IllegalMoveError(f"Illegal move: {san}")
    elif prefix:
        raise IllegalMoveError(f"Illegal move: {san}")
    else:
        file = dest.file

    candidates = [
        pawn
        for pawn in board.active_pieces(color, PieceType.PAWN)
        if board.square_of(pawn).file == file  # type: ignore[union-attr]
        and is_legal_square(board, pawn, dest)
    ]
    # Two pawns can never share a legal target from one file.
    if len(candidates) != 1:
        raise IllegalMoveError(f"Illegal move: {san}")
    return candidates[0]


def _resolve_piece(
    board: Board, color: Color, san: str, prefix: str, dest: Square
) -> Piece:
    piece_type = _SAN_PIECE_REV.get(prefix[0])
    if piece_type is None:
        raise IllegalMoveError(f"Illegal move: {san}")
    hint = prefix[1:]

    if len(hint) > 2:
        raise IllegalMoveError(f"Illegal move: {san}")
    from_file: int | None = None
    from_rank: int | None = None
    try:
        if len(hint) == 2:
            from_file = file_number(hint[0])
            from_rank = int(hint[1])
        elif len(hint) == 1:
            if hint.isalpha():
                from_file = file_number(hint)
            else:
                from_rank = int(hint)
    except ValueError:
        # InvalidSquareNameError is a ValueError too.
        raise IllegalMoveError(f"Illegal move: {san}") from None

    if piece_type == PieceType.KING:
        king = board.king(color)
        pool = [king] if king is not None else []
    else:
        pool = board.active_pieces(color, piece_type)

    candidates: list[Piece] = []
    for piece in pool:
        square = board.square_of(piece)
        if square is None:
            continue
        if from_file is not None and square.file != from_file:
            continue
        if from_rank is not None and square.rank != from_rank:
            continue
        if is_legal_square(board, piece, dest):
            candidates.append(piece)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise IllegalMoveError(f"Illegal move: {san}")
    origins = ", ".join(str(board.square_of(p)) for p in candidates)
    raise AmbiguousMoveError(f"Ambiguous move: {san} ({origins})")


def describe_move(board: Board, piece: Piece, dest: Square, move_type: MoveType) -> str:
    """SAN for *piece* moving to *dest*, given the board before the move.

    Only ``#`` is ever appended (for :attr:`MoveType.CHECKMATE`); there is
    no check detection, so ``+`` is never produced.
    """
    start = board.square_of(piece)
    assert start is not None

    if move_type is MoveType.CASTLING:
        san = CASTLE_KINGSIDE if dest.file > start.file else CASTLE_QUEENSIDE
    else:
        san = ""
        is_capture = not dest.is_empty() or move_type is MoveType.EN_PASSANT

        if piece.piece_type == PieceType.PAWN:
            if is_capture:
                san += file_name(start.file)
        else:
            san += _SAN_PIECE[piece.piece_type]
            if piece.piece_type != PieceType.KING:
                san += _disambiguation(board, piece, start, dest)

        if is_capture:
            san += "x"
        san += dest.name

    if move_type is MoveType.CHECKMATE:
        san += "#"
    return san


def _disambiguation(board: Board, piece: Piece, start: Square, dest: Square) -> str:
    rivals = [
        board.square_of(other)
        for other in board.active_pieces(piece.color, piece.piece_type)
        if other is not piece and is_legal_square(board, other, dest)
    ]
    if not rivals:
        return ""
    if not any(sq.file == start.file for sq in rivals):  # type: ignore[union-attr]
        return file_name(start.file)
    if not any(sq.rank == start.rank for sq in rivals):  # type: ignore[union-attr]
        return str(start.rank)
    return start.name
