"""Tests for FEN validation, export and import."""

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.notation.fen import (
    STARTING_FEN,
    board_from_fen,
    is_valid_fen_string,
    placement_to_fen,
    validate_fen,
)
from chessrules.errors import MalformedFENError


class TestValidity:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "8/8/8/8/8/8/8/8 w - - 0 1",
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "r3k2r/8/8/8/8/8/8/R3K2R w Kkq - 12 40",
            "4k3/8/8/8/8/8/8/4K3 b Qq - 0 1",
        ],
    )
    def test_valid(self, fen: str) -> None:
        assert is_valid_fen_string(fen)

    @pytest.mark.parametrize(
        "fen",
        [
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/ppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/44/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w QK - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkqk - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e4 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - -1 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1 extra",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR  w KQkq - 0 1",
            "",
        ],
    )
    def test_invalid(self, fen: str) -> None:
        assert not is_valid_fen_string(fen)

    def test_error_names_field(self) -> None:
        with pytest.raises(MalformedFENError, match="castling"):
            validate_fen("8/8/8/8/8/8/8/8 w KK - 0 1")


class TestExport:
    def test_start(self, board: Board) -> None:
        assert board.to_fen() == STARTING_FEN

    def test_placement(self, board: Board) -> None:
        board.move_san("e4")
        assert placement_to_fen(board) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"

    def test_after_moves(self, board: Board) -> None:
        for san in ("e4", "c5", "Nf3"):
            board.move_san(san)
        assert board.to_fen() == (
            "rnbqkbnr/pp1ppppp/8/2p5/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2"
        )

    def test_export_is_valid(self, board: Board) -> None:
        for san in ("d4", "d5", "c4"):
            board.move_san(san)
        assert is_valid_fen_string(board.to_fen())


class TestImport:
    def test_round_trip(self) -> None:
        fen = "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3"
        assert board_from_fen(fen).to_fen() == fen

    def test_state_fields(self) -> None:
        board = Board.from_fen("4k3/8/8/8/3Pp3/8/8/4K3 b - d3 0 31")
        state = board.state
        assert state.active_color is Color.BLACK
        assert str(state.castling) == "-"
        assert board.en_passant_square.name == "d3"
        assert state.move_count == 31

    def test_pieces_registered(self) -> None:
        board = Board.from_fen("4k3/8/8/8/8/8/4P3/4K2R w K - 0 1")
        assert len(board.active_pieces(Color.WHITE)) == 3
        assert board.active_pieces(Color.WHITE, PieceType.ROOK)[0].symbol == "R"
        assert board.king(Color.BLACK) is not None

    def test_imported_position_is_playable(self) -> None:
        board = Board.from_fen("4k3/8/8/8/3Pp3/8/8/4K3 b - d3 0 31")
        move = board.move_san("exd3")
        assert move.captured_piece is not None
        assert board.to_fen() == "4k3/8/8/8/8/3p4/8/4K3 w - - 0 32"

    def test_rejects_malformed(self) -> None:
        with pytest.raises(MalformedFENError):
            board_from_fen("not a fen")

    def test_rejects_two_kings(self) -> None:
        with pytest.raises(MalformedFENError, match="king"):
            board_from_fen("4k3/8/8/8/8/8/8/3KK3 w - - 0 1")

    def test_rejects_wrong_en_passant_rank(self) -> None:
        with pytest.raises(MalformedFENError, match="en-passant"):
            board_from_fen("4k3/8/8/8/4P3/8/8/4K3 w - e3 0 1")

    def test_rejects_move_zero(self) -> None:
        with pytest.raises(MalformedFENError, match="fullmove"):
            board_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 0")
