"""Tests for MoveHistory recording and cursor navigation."""

import pytest

from chessrules.core.board import Board
from chessrules.core.history import MoveHistory


@pytest.fixture
def played() -> Board:
    board = Board()
    for san in ("e4", "e5", "Nf3", "Nc6"):
        board.move_san(san)
    return board


class TestRecording:
    def test_empty(self) -> None:
        history = MoveHistory()
        assert len(history) == 0
        assert history.last is None
        assert not history.has_next()
        assert not history.has_previous()

    def test_moves_in_order(self, played: Board) -> None:
        history = played.history
        assert len(history) == 4
        assert history.sans() == ["e4", "e5", "Nf3", "Nc6"]
        assert [move.move_number for move in history] == [1, 1, 2, 2]
        assert history[2].san == "Nf3"

    def test_cursor_after_add(self, played: Board) -> None:
        assert played.history.index == 4
        assert played.history.has_previous()
        assert not played.history.has_next()

    def test_clear(self, played: Board) -> None:
        played.history.clear()
        assert len(played.history) == 0
        assert played.history.index == 0

    def test_str_lists_moves(self, played: Board) -> None:
        lines = str(played.history).splitlines()
        assert lines[0] == "(1) white pawn: e2 => e4"
        assert len(lines) == 4


class TestNavigation:
    def test_rewind_and_step(self, played: Board) -> None:
        history = played.history
        history.rewind()
        assert history.index == 0
        assert history.peek_next().san == "e4"
        assert history.next_move().san == "e4"
        assert history.next_move().san == "e5"
        assert history.index == 2
        assert history.previous_move().san == "e5"
        assert history.peek_previous().san == "e4"

    def test_fast_forward(self, played: Board) -> None:
        history = played.history
        history.rewind()
        history.fast_forward()
        assert history.index == len(history)

    def test_next_past_end(self, played: Board) -> None:
        with pytest.raises(IndexError):
            played.history.next_move()

    def test_previous_before_start(self, played: Board) -> None:
        played.history.rewind()
        with pytest.raises(IndexError):
            played.history.previous_move()

    def test_index_setter_bounds(self, played: Board) -> None:
        played.history.index = 1
        assert played.history.peek_next().san == "e5"
        with pytest.raises(IndexError):
            played.history.index = 5

    def test_navigation_does_not_touch_board(self, played: Board) -> None:
        fen = played.to_fen()
        played.history.rewind()
        assert played.to_fen() == fen
