"""Notation package: FEN / SAN / PGN parsing and serialization."""

from chessrules.core.notation.fen import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    is_valid_fen_string,
    placement_to_fen,
    validate_fen,
)
from chessrules.core.notation.models import PgnGame, PgnMove
from chessrules.core.notation.pgn import (
    build_pgn,
    export_pgn,
    game_result_from_pgn,
    pgn_movetext,
    pgn_result_token,
)
from chessrules.core.notation.reader import (
    PGNReader,
    read_pgn,
    read_pgn_file,
    read_pgn_games,
)
from chessrules.core.notation.san import describe_move, parse_move
from chessrules.core.notation.tokenizer import PGNTokenizer, Token, TokenType

__all__ = [
    "STARTING_FEN",
    "PgnGame",
    "PgnMove",
    "PGNReader",
    "PGNTokenizer",
    "Token",
    "TokenType",
    "board_from_fen",
    "board_to_fen",
    "build_pgn",
    "describe_move",
    "export_pgn",
    "game_result_from_pgn",
    "is_valid_fen_string",
    "parse_move",
    "pgn_movetext",
    "pgn_result_token",
    "placement_to_fen",
    "read_pgn",
    "read_pgn_file",
    "read_pgn_games",
    "validate_fen",
]
