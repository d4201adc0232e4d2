"""Core domain layer: board, pieces, move rules and game state.

Quick start::

    from chessrules.core import Board

    board = Board()
    board.move_san("e4")
    board.move_san("c5")
    print(board.to_fen())
    print(board.pretty_print())
"""

from chessrules.core.board import Board
from chessrules.core.engine import MoveEngine
from chessrules.core.enums import CastlingFlag, Color, GameResult, MoveType, PieceType
from chessrules.core.formatter import format_board
from chessrules.core.history import MoveHistory
from chessrules.core.move import Move, PartialMove
from chessrules.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    describe_move,
    is_valid_fen_string,
    parse_move,
    read_pgn,
)
from chessrules.core.paths import (
    file_distance,
    is_path_clear,
    is_same_diagonal,
    rank_distance,
)
from chessrules.core.piece import Piece
from chessrules.core.square import Square
from chessrules.core.state import CastlingAvailability, GameState

__all__ = [
    # Enums / flags
    "CastlingFlag",
    "Color",
    "GameResult",
    "MoveType",
    "PieceType",
    # Geometry
    "file_distance",
    "is_path_clear",
    "is_same_diagonal",
    "rank_distance",
    # Domain objects
    "Board",
    "CastlingAvailability",
    "GameState",
    "Move",
    "MoveEngine",
    "MoveHistory",
    "PartialMove",
    "Piece",
    "Square",
    "format_board",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "describe_move",
    "is_valid_fen_string",
    "parse_move",
    "read_pgn",
]
