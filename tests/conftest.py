"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from chessrules.core.board import Board


@pytest.fixture
def board() -> Board:
    """A board in the standard starting position."""
    return Board()


@pytest.fixture
def empty_board() -> Board:
    """A sandbox board with no pieces and no castling rights."""
    return Board.empty()
