"""Tests for committing moves: state updates, special moves and rejection."""

import logging

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import CastlingFlag, Color, MoveType, PieceType
from chessrules.errors import IllegalMoveError

CASTLING_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"


def _piece(board: Board, name: str):
    piece = board.square_by_name(name).piece
    assert piece is not None
    return piece


class TestBasicMoves:
    def test_knight_then_pawn(self, board: Board) -> None:
        board.move(_piece(board, "b1"), "c3")
        assert board.state.active_color is Color.BLACK
        assert board.state.move_count == 1

        board.move(_piece(board, "d7"), "d5")
        assert board.state.active_color is Color.WHITE
        assert board.state.move_count == 2
        assert board.to_fen() == (
            "rnbqkbnr/ppp1pppp/8/3p4/8/2N5/PPPPPPPP/R1BQKBNR w KQkq d6 0 2"
        )

    def test_move_record(self, board: Board) -> None:
        knight = _piece(board, "g1")
        move = board.move(knight, "f3")
        assert move.moved_piece is knight
        assert move.start.name == "g1"
        assert move.end.name == "f3"
        assert move.move_type is MoveType.NORMAL
        assert move.move_number == 1
        assert move.san == "Nf3"
        assert not move.is_capture
        assert board.history.last is move
        assert knight.has_moved
        assert str(move) == "(1) white knight: g1 => f3"

    def test_capture(self, board: Board) -> None:
        board.move_san("e4")
        board.move_san("d5")
        move = board.move_san("exd5")
        assert move.is_capture
        assert move.captured_piece.piece_type is PieceType.PAWN
        assert board.captured_pieces(Color.BLACK) == [move.captured_piece]
        assert len(board.active_pieces(Color.BLACK)) == 15
        assert move.captured_piece.captured

    def test_captured_piece_cannot_move(self, board: Board) -> None:
        board.move_san("e4")
        board.move_san("d5")
        victim = board.move_san("exd5").captured_piece
        with pytest.raises(IllegalMoveError, match="not on the board"):
            board.move(victim, "d4")

    def test_logs_move(self, board: Board, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="chessrules"):
            board.move_san("Nf3")
        assert "white played Nf3" in caplog.text


class TestRejection:
    def test_turn_order(self, board: Board) -> None:
        with pytest.raises(IllegalMoveError, match="turn"):
            board.move(_piece(board, "e7"), "e5")

    def test_illegal_leaves_board_untouched(self, board: Board) -> None:
        before = board.to_fen()
        with pytest.raises(IllegalMoveError):
            board.move(_piece(board, "b1"), "b3")
        assert board.to_fen() == before
        assert len(board.history) == 0
        assert board.square_by_name("b1").piece is not None

    def test_declared_type_conflict(self, board: Board) -> None:
        with pytest.raises(IllegalMoveError, match="castling"):
            board.move(_piece(board, "b1"), "c3", MoveType.CASTLING)
        assert board.state.active_color is Color.WHITE

    def test_pinned_piece(self) -> None:
        board = Board.from_fen("4r1k1/8/8/8/8/8/4B3/4K3 w - - 0 1")
        with pytest.raises(IllegalMoveError):
            board.move(_piece(board, "e2"), "d3")


class TestClocks:
    def test_half_move_clock(self, board: Board) -> None:
        for san in ("Nf3", "Nf6", "Ng1", "Ng8"):
            board.move_san(san)
        assert board.state.half_move_clock == 4
        assert board.state.half_move_total == 4
        assert board.state.move_count == 3

    def test_pawn_move_resets(self, board: Board) -> None:
        board.move_san("Nf3")
        board.move_san("e5")
        assert board.state.half_move_clock == 0

    def test_capture_resets(self, board: Board) -> None:
        for san in ("e4", "d5", "Nc3", "Nf6", "Nxd5"):
            board.move_san(san)
        assert board.state.half_move_clock == 0


class TestEnPassant:
    def test_target_set_and_cleared(self, board: Board) -> None:
        board.move_san("e4")
        assert board.en_passant_square.name == "e3"
        board.move_san("Nf6")
        assert board.state.en_passant is None

    def test_capture(self, board: Board) -> None:
        for san in ("e4", "a6", "e5", "d5"):
            board.move_san(san)
        move = board.move_san("exd6")
        assert move.move_type is MoveType.EN_PASSANT
        assert move.captured_piece is not None
        assert board.square_by_name("d5").is_empty()
        assert board.to_fen() == (
            "rnbqkbnr/1pp1pppp/p2P4/8/8/8/PPPP1PPP/RNBQKBNR b KQkq - 0 3"
        )

    def test_inferred_for_direct_move(self, board: Board) -> None:
        for san in ("e4", "a6", "e5", "d5"):
            board.move_san(san)
        move = board.move(_piece(board, "e5"), "d6")
        assert move.move_type is MoveType.EN_PASSANT
        assert move.san == "exd6"
        assert board.captured_pieces(Color.BLACK) == [move.captured_piece]

    def test_expires_after_one_move(self, board: Board) -> None:
        for san in ("e4", "a6", "e5", "d5", "Nf3", "Nc6"):
            board.move_san(san)
        with pytest.raises(IllegalMoveError):
            board.move(_piece(board, "e5"), "d6")


class TestCastling:
    def test_kingside(self) -> None:
        board = Board.from_fen(CASTLING_FEN)
        move = board.move_san("O-O")
        assert move.move_type is MoveType.CASTLING
        assert move.san == "O-O"
        assert board.to_fen() == "r3k2r/8/8/8/8/8/8/R4RK1 b kq - 1 1"
        castling = board.state.castling
        assert castling.castled(Color.WHITE)
        assert castling.is_status(CastlingFlag.WHITE_CASTLED_KINGSIDE)

    def test_queenside_inferred(self) -> None:
        board = Board.from_fen(CASTLING_FEN)
        move = board.move(board.king(Color.WHITE), "c1")
        assert move.move_type is MoveType.CASTLING
        assert move.san == "O-O-O"
        assert board.to_fen() == "r3k2r/8/8/8/8/8/8/2KR3R b kq - 1 1"

    def test_black_castles(self) -> None:
        board = Board.from_fen(CASTLING_FEN)
        board.move_san("O-O")
        board.move_san("O-O-O")
        assert board.to_fen() == "2kr3r/8/8/8/8/8/8/R4RK1 w - - 2 2"
        assert board.state.castling.is_status(CastlingFlag.BLACK_CASTLED_QUEENSIDE)

    def test_king_move_revokes_both(self) -> None:
        board = Board.from_fen(CASTLING_FEN)
        board.move(board.king(Color.WHITE), "e2")
        assert str(board.state.castling) == "kq"

    def test_rook_move_revokes_one_side(self) -> None:
        board = Board.from_fen(CASTLING_FEN)
        board.move(_piece(board, "a1"), "a2")
        assert str(board.state.castling) == "Kkq"

    def test_rook_capture_revokes_victim_side(self) -> None:
        board = Board.from_fen(CASTLING_FEN)
        board.move_san("Rxa8+")
        assert str(board.state.castling) == "Kk"

    def test_non_corner_rook_keeps_rights(self) -> None:
        board = Board.from_fen("4k3/8/8/7R/8/8/8/4K2R w K - 0 1")
        board.move(_piece(board, "h5"), "a5")
        assert str(board.state.castling) == "K"

    def test_king_off_home_square_keeps_rights(self) -> None:
        board = Board.from_fen("r3k2r/8/8/8/8/8/3K4/8 b kq - 0 1")
        board.move_san("Rb8")
        board.move(board.king(Color.WHITE), "d3")
        assert str(board.state.castling) == "k"

    def test_castling_after_right_lost(self) -> None:
        board = Board.from_fen(CASTLING_FEN)
        for san in ("Rb1", "Rb8", "Rh2", "Rh7"):
            board.move_san(san)
        with pytest.raises(IllegalMoveError):
            board.move_san("O-O")
        with pytest.raises(IllegalMoveError):
            board.move_san("O-O-O")


class TestDeclaredCheckmate:
    def test_fools_mate(self, board: Board) -> None:
        for san in ("f3", "e5", "g4"):
            board.move_san(san)
        move = board.move_san("Qh4#")
        assert move.move_type is MoveType.CHECKMATE
        assert move.san == "Qh4#"
        assert board.history.sans() == ["f3", "e5", "g4", "Qh4#"]
