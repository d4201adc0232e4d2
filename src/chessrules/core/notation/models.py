"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chessrules.core.enums import GameResult

if TYPE_CHECKING:
    from chessrules.core.board import Board


@dataclass(slots=True)
class PgnMove:
    """A single mainline move extracted from PGN movetext."""

    san: str
    comment: str = ""

    def add_comment(self, comment: str) -> None:
        clean = " ".join(comment.split())
        if not clean:
            return
        self.comment = f"{self.comment} {clean}" if self.comment else clean


@dataclass(slots=True)
class PgnGame:
    """One game read from PGN: tag pairs, the replayed board and the mainline.

    ``board.history`` holds the committed mainline, rewound to its start.
    """

    tags: dict[str, str]
    board: Board
    moves: list[PgnMove] = field(default_factory=list)
    result: str = "*"

    @property
    def game_result(self) -> GameResult:
        from chessrules.core.notation.pgn import game_result_from_pgn

        return game_result_from_pgn(self.result)

    @property
    def sans(self) -> list[str]:
        return [move.san for move in self.moves]
