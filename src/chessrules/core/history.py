"""Append-only move history with a navigation cursor."""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.move import Move


class MoveHistory:
    """Committed moves in play order plus a replay cursor.

    The cursor sits *between* moves: index ``0`` is before the first move
    and ``len(history)`` after the last. Moving the cursor never touches
    the board; it only drives replay-style navigation.
    """

    __slots__ = ("_moves", "_index")

    def __init__(self) -> None:
        self._moves: list[Move] = []
        self._index = 0

    # ── Recording ────────────────────────────────────────────────────────

    def add(self, move: Move) -> None:
        """Append *move*; the cursor moves past it."""
        self._moves.append(move)
        self._index = len(self._moves)

    def clear(self) -> None:
        self._moves.clear()
        self._index = 0

    # ── Cursor ───────────────────────────────────────────────────────────

    @property
    def index(self) -> int:
        return self._index

    @index.setter
    def index(self, value: int) -> None:
        if not (0 <= value <= len(self._moves)):
            raise IndexError(f"History index out of range: {value}")
        self._index = value

    def has_next(self) -> bool:
        return self._index < len(self._moves)

    def has_previous(self) -> bool:
        return self._index > 0

    def peek_next(self) -> Move:
        if not self.has_next():
            raise IndexError("No next move in history")
        return self._moves[self._index]

    def next_move(self) -> Move:
        move = self.peek_next()
        self._index += 1
        return move

    def peek_previous(self) -> Move:
        if not self.has_previous():
            raise IndexError("No previous move in history")
        return self._moves[self._index - 1]

    def previous_move(self) -> Move:
        move = self.peek_previous()
        self._index -= 1
        return move

    def rewind(self) -> None:
        self._index = 0

    def fast_forward(self) -> None:
        self._index = len(self._moves)

    # ── Sequence protocol ────────────────────────────────────────────────

    @property
    def last(self) -> Move | None:
        return self._moves[-1] if self._moves else None

    def sans(self) -> list[str]:
        return [move.san for move in self._moves]

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self._moves)

    def __getitem__(self, index: int) -> Move:
        return self._moves[index]

    def __str__(self) -> str:
        return "".join(f"{move}\n" for move in self._moves)
