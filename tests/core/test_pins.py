"""Tests for pin detection and pinned-piece movement."""

from chessrules.core.board import Board
from chessrules.core.enums import Color, PieceType
from chessrules.core.rules import is_square_attacked, pinning_piece


class TestFilePin:
    def _setup(self, empty_board: Board):
        empty_board.place_piece(Color.WHITE, PieceType.KING, "e1")
        rook = empty_board.place_piece(Color.WHITE, PieceType.ROOK, "e4")
        pinner = empty_board.place_piece(Color.BLACK, PieceType.ROOK, "e8")
        return rook, pinner

    def test_detected(self, empty_board: Board) -> None:
        rook, pinner = self._setup(empty_board)
        assert empty_board.is_pinned(rook)
        assert pinning_piece(empty_board, rook) is pinner

    def test_may_capture_pinner(self, empty_board: Board) -> None:
        rook, _ = self._setup(empty_board)
        assert empty_board.is_legal_square(rook, "e8")

    def test_may_move_along_line(self, empty_board: Board) -> None:
        rook, _ = self._setup(empty_board)
        assert empty_board.is_legal_square(rook, "e6")
        assert empty_board.is_legal_square(rook, "e2")

    def test_may_not_leave_line(self, empty_board: Board) -> None:
        rook, _ = self._setup(empty_board)
        assert not empty_board.is_legal_square(rook, "a4")
        assert not empty_board.is_legal_square(rook, "h4")

    def test_ignore_pins(self, empty_board: Board) -> None:
        rook, _ = self._setup(empty_board)
        assert empty_board.is_legal_square(rook, "a4", ignore_pins=True)

    def test_blocked_line_no_pin(self, empty_board: Board) -> None:
        rook, _ = self._setup(empty_board)
        empty_board.place_piece(Color.WHITE, PieceType.PAWN, "e6")
        assert not empty_board.is_pinned(rook)
        assert empty_board.is_legal_square(rook, "a4")


class TestDiagonalPin:
    def test_knight_pinned_by_bishop(self, empty_board: Board) -> None:
        empty_board.place_piece(Color.BLACK, PieceType.KING, "e8")
        knight = empty_board.place_piece(Color.BLACK, PieceType.KNIGHT, "d7")
        empty_board.place_piece(Color.WHITE, PieceType.BISHOP, "b5")
        assert empty_board.is_pinned(knight)
        assert empty_board.legal_squares(knight) == []

    def test_rook_does_not_pin_on_diagonal(self, empty_board: Board) -> None:
        empty_board.place_piece(Color.BLACK, PieceType.KING, "e8")
        knight = empty_board.place_piece(Color.BLACK, PieceType.KNIGHT, "d7")
        empty_board.place_piece(Color.WHITE, PieceType.ROOK, "b5")
        assert not empty_board.is_pinned(knight)

    def test_bishop_may_slide_toward_pinner(self, empty_board: Board) -> None:
        empty_board.place_piece(Color.WHITE, PieceType.KING, "a1")
        bishop = empty_board.place_piece(Color.WHITE, PieceType.BISHOP, "c3")
        empty_board.place_piece(Color.BLACK, PieceType.QUEEN, "f6")
        assert empty_board.is_pinned(bishop)
        assert empty_board.is_legal_square(bishop, "e5")
        assert empty_board.is_legal_square(bishop, "f6")
        assert empty_board.is_legal_square(bishop, "b2")
        assert not empty_board.is_legal_square(bishop, "d2")


class TestPinnedPinner:
    def test_pinned_pinner_still_pins(self, empty_board: Board) -> None:
        empty_board.place_piece(Color.WHITE, PieceType.KING, "e1")
        white_rook = empty_board.place_piece(Color.WHITE, PieceType.ROOK, "e3")
        black_rook = empty_board.place_piece(Color.BLACK, PieceType.ROOK, "e6")
        empty_board.place_piece(Color.BLACK, PieceType.KING, "e8")
        assert empty_board.is_pinned(black_rook)
        assert empty_board.is_pinned(white_rook)


class TestSquareAttacked:
    def test_pinned_piece_still_attacks(self, empty_board: Board) -> None:
        empty_board.place_piece(Color.BLACK, PieceType.KING, "e8")
        empty_board.place_piece(Color.BLACK, PieceType.KNIGHT, "d7")
        empty_board.place_piece(Color.WHITE, PieceType.BISHOP, "b5")
        assert is_square_attacked(empty_board, empty_board.square_by_name("f6"), Color.BLACK)

    def test_unattacked(self, board: Board) -> None:
        assert not is_square_attacked(board, board.square_by_name("e4"), Color.BLACK)
        assert is_square_attacked(board, board.square_by_name("f6"), Color.BLACK)
