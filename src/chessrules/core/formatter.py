"""ASCII rendering of a board for terminal display."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color
from chessrules.core.notation.fen import placement_to_fen

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.piece import Piece

SPACING = "  "
WIDE_SPACING = "\t\t"
RANK_SEPARATOR = SPACING + "  +---+---+---+---+---+---+---+---+\n"
FILE_LABELS = SPACING + "    a   b   c   d   e   f   g   h  \n"


def _join_captured(pieces: list[Piece]) -> str:
    """Piece letters, most valuable first."""
    ordered = sorted(pieces, key=lambda p: p.piece_type.material_value, reverse=True)
    return " ".join(p.symbol for p in ordered)


def _status_info(rank: int, white_lost: list[Piece], black_lost: list[Piece]) -> str:
    if rank == 7 and (white_lost or black_lost):
        return f"{WIDE_SPACING}[[ Captured Pieces ]]"
    if rank == 6 and white_lost:
        return f"{WIDE_SPACING}W: {_join_captured(white_lost)}"
    if rank == 5 and black_lost:
        return f"{WIDE_SPACING}B: {_join_captured(black_lost)}"
    return ""


def format_board(board: Board) -> str:
    """Bordered 8×8 grid, rank 8 on top, with the captured pieces on the right."""
    white_lost = board.captured_pieces(Color.WHITE)
    black_lost = board.captured_pieces(Color.BLACK)
    parts = [RANK_SEPARATOR]

    for rank, rank_text in zip(range(8, 0, -1), placement_to_fen(board).split("/")):
        row = f"{SPACING}{rank} |"
        for ch in rank_text:
            row += "   |" * int(ch) if ch.isdigit() else f" {ch} |"
        row += _status_info(rank, white_lost, black_lost)
        parts.append(row + "\n" + RANK_SEPARATOR)

    parts.append(FILE_LABELS)
    return "".join(parts)
