"""PGN serialization helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color, GameResult
from chessrules.core.notation.models import PgnMove
from chessrules.core.notation.tokenizer import BLACK_WINS, DRAW, UNFINISHED, WHITE_WINS

if TYPE_CHECKING:
    from chessrules.core.board import Board

_TOKEN_RESULTS: dict[str, GameResult] = {
    WHITE_WINS: GameResult.WHITE_WINS,
    BLACK_WINS: GameResult.BLACK_WINS,
    DRAW: GameResult.DRAW,
    UNFINISHED: GameResult.IN_PROGRESS,
}
_RESULT_TOKENS: dict[GameResult, str] = {v: k for k, v in _TOKEN_RESULTS.items()}

PGN_RESULT_TOKENS = frozenset(_TOKEN_RESULTS)


def pgn_result_token(result: GameResult) -> str:
    return _RESULT_TOKENS[result]


def game_result_from_pgn(token: str) -> GameResult:
    """Game termination marker to :class:`GameResult`; anything unknown is in progress."""
    return _TOKEN_RESULTS.get(token, GameResult.IN_PROGRESS)


def pgn_movetext(
    moves: list[PgnMove],
    result_token: str,
    first_move_number: int = 1,
    black_first: bool = False,
) -> str:
    """Build PGN movetext from mainline moves with optional comments.

    A black move gets its own ``n...`` number when it opens the movetext or
    follows a comment.
    """
    parts: list[str] = []
    number = first_move_number
    white_to_move = not black_first
    needs_number = True
    for move in moves:
        if white_to_move:
            parts.append(f"{number}.")
        elif needs_number:
            parts.append(f"{number}...")
        parts.append(move.san)
        needs_number = False
        if move.comment:
            # PGN comments cannot contain a closing brace.
            safe_comment = move.comment.replace("}", "]")
            parts.append(f"{{{safe_comment}}}")
            needs_number = True
        if not white_to_move:
            number += 1
        white_to_move = not white_to_move
    parts.append(result_token)
    return " ".join(parts)


def build_pgn(
    tags: dict[str, str],
    sans: list[str],
    result_token: str,
    comments: list[str | None] | None = None,
) -> str:
    """Build a single-game PGN document."""
    if comments is not None and len(comments) != len(sans):
        raise ValueError("PGN comments length must match SAN move length")
    if result_token not in PGN_RESULT_TOKENS:
        raise ValueError(f"Invalid PGN result token: {result_token!r}")

    moves = [
        PgnMove(san=san, comment=(comments[idx] or "") if comments else "")
        for idx, san in enumerate(sans)
    ]
    return _document(tags, pgn_movetext(moves, result_token))


def export_pgn(
    board: Board,
    tags: dict[str, str] | None = None,
    result_token: str = UNFINISHED,
) -> str:
    """PGN document for every move committed to *board*.

    Numbering follows the recorded moves, so a game started from FEN keeps
    its move numbers. The ``Result`` tag is filled in when absent.
    """
    if result_token not in PGN_RESULT_TOKENS:
        raise ValueError(f"Invalid PGN result token: {result_token!r}")
    all_tags = dict(tags or {})
    all_tags.setdefault("Result", result_token)

    history = list(board.history)
    moves = [PgnMove(san=move.san) for move in history]
    if history:
        first = history[0]
        movetext = pgn_movetext(
            moves,
            result_token,
            first_move_number=first.move_number,
            black_first=first.moved_piece.color is Color.BLACK,
        )
    else:
        movetext = result_token
    return _document(all_tags, movetext)


def _document(tags: dict[str, str], movetext: str) -> str:
    lines: list[str] = []
    for key, value in tags.items():
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'[{key} "{escaped}"]')
    lines.append("")
    lines.append(movetext)
    lines.append("")
    return "\n".join(lines)
