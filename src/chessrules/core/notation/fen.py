"""FEN validation, export and import."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType
from chessrules.core.state import CastlingAvailability
from chessrules.core.types import NUM_FILES, NUM_RANKS, parse_square_name, rank_of
from chessrules.errors import MalformedFENError

if TYPE_CHECKING:
    from chessrules.core.board import Board

_LOGGER = logging.getLogger(__name__)

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_RANK_RE = re.compile(r"^(([1-7]?[bknpqrBKNPQR])+[1-7]?|8)$")
_ACTIVE_COLOR_RE = re.compile(r"^[wb]$")
_CASTLING_RE = re.compile(r"^(KQ?k?q?|Qk?q?|kq?|q|-)$")
_EN_PASSANT_RE = re.compile(r"^([a-h][36]|-)$")
_NUMBER_RE = re.compile(r"^[0-9]+$")


def _rank_width(rank_text: str) -> int:
    return sum(int(ch) if ch.isdigit() else 1 for ch in rank_text)


def validate_fen(fen: str) -> None:
    """Raise :class:`MalformedFENError` naming the first broken field."""
    parts = fen.split(" ")
    if len(parts) != 6:
        raise MalformedFENError(f"Invalid FEN (need 6 fields): {fen!r}")
    placement, active, castling, en_passant, half_moves, full_moves = parts

    ranks = placement.split("/")
    if len(ranks) != NUM_RANKS:
        raise MalformedFENError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    for rank_text in ranks:
        if not _RANK_RE.match(rank_text) or _rank_width(rank_text) != NUM_FILES:
            raise MalformedFENError(f"Invalid FEN rank {rank_text!r}: {fen!r}")

    if not _ACTIVE_COLOR_RE.match(active):
        raise MalformedFENError(f"Invalid FEN side-to-move field: {active!r}")
    if not _CASTLING_RE.match(castling):
        raise MalformedFENError(f"Invalid FEN castling field: {castling!r}")
    if not _EN_PASSANT_RE.match(en_passant):
        raise MalformedFENError(f"Invalid FEN en-passant square: {en_passant!r}")
    if not _NUMBER_RE.match(half_moves):
        raise MalformedFENError(f"Invalid FEN halfmove clock: {half_moves!r}")
    if not _NUMBER_RE.match(full_moves):
        raise MalformedFENError(f"Invalid FEN fullmove number: {full_moves!r}")


def is_valid_fen_string(fen: str) -> bool:
    """Whether *fen* is syntactically valid six-field FEN."""
    try:
        validate_fen(fen)
    except MalformedFENError:
        return False
    return True


def placement_to_fen(board: Board) -> str:
    """Piece-placement field: rank 8 down to rank 1, files a–h."""
    rows: list[str] = []
    for rank in range(NUM_RANKS, 0, -1):
        empty = 0
        row = ""
        for file in range(1, NUM_FILES + 1):
            piece = board.square_at(file, rank).piece
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += piece.symbol
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def board_to_fen(board: Board) -> str:
    """Serialise *board* to six-field FEN."""
    return f"{placement_to_fen(board)} {board.state}"


def board_from_fen(fen: str) -> Board:
    """Build a sandbox :class:`Board` holding the position described by *fen*.

    Beyond :func:`validate_fen`, import also requires the en passant square
    to match the side to move, at most one king per color and a fullmove
    number of at least 1.
    """
    from chessrules.core.board import Board

    validate_fen(fen)
    placement, active, castling, en_passant, half_moves, full_moves = fen.split(" ")
    _LOGGER.debug("Importing FEN %s", fen)

    board = Board.empty()
    for rank_idx, rank_text in enumerate(placement.split("/")):
        rank = NUM_RANKS - rank_idx
        file = 1
        for ch in rank_text:
            if ch.isdigit():
                file += int(ch)
                continue
            color = Color.WHITE if ch.isupper() else Color.BLACK
            try:
                board.place_piece(
                    color, PieceType.from_symbol(ch), board.square_at(file, rank).name
                )
            except ValueError as exc:
                raise MalformedFENError(f"Invalid FEN placement: {exc}") from exc
            file += 1

    state = board.state
    state.active_color = Color.WHITE if active == "w" else Color.BLACK
    state.castling = CastlingAvailability.from_fen_field(castling)

    if en_passant != "-":
        ep = parse_square_name(en_passant)
        expected_rank = 6 if state.active_color is Color.WHITE else 3
        if rank_of(ep) != expected_rank:
            raise MalformedFENError(
                f"Invalid FEN en-passant square for side-to-move: {en_passant!r}"
            )
        state.en_passant = ep

    state.half_move_clock = int(half_moves)
    state.move_count = int(full_moves)
    if state.move_count < 1:
        raise MalformedFENError(f"Invalid FEN fullmove number: {full_moves!r}")
    state.half_move_total = 2 * (state.move_count - 1) + int(state.active_color)
    return board
