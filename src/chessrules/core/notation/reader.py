"""PGN reader: tag section plus movetext, replayed onto a board."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import TextIO

from chessrules.core.board import Board
from chessrules.core.notation.models import PgnGame, PgnMove
from chessrules.core.notation.tokenizer import PGNTokenizer, Token, TokenType
from chessrules.errors import MalformedPGNError

_LOGGER = logging.getLogger(__name__)


class PGNReader:
    """Reads games from a PGN token stream.

    Grammar::

        game            := tag_section movetext GAME_TERMINATION
        tag_section     := ( "[" SYMBOL STRING "]" )*
        movetext        := ( INTEGER "."* | SYMBOL | NAG | SUFFIX | COMMENT
                           | "(" movetext ")" )*

    Mainline SYMBOL tokens are played with :meth:`Board.move_san`; moves
    inside variations are skipped. Illegal or ambiguous mainline moves
    propagate as :class:`IllegalMoveError` / :class:`AmbiguousMoveError`.
    """

    def __init__(self, source: str | TextIO | PGNTokenizer) -> None:
        self._tokenizer = (
            source if isinstance(source, PGNTokenizer) else PGNTokenizer(source)
        )

    def read(self) -> PgnGame:
        """Read the next game; its board history is rewound afterwards."""
        tags = self._tag_section()
        _LOGGER.debug("Reading game with %d tag pairs", len(tags))
        board = _initial_board(tags)
        moves = self._movetext(board)
        result = self._expect(
            TokenType.GAME_TERMINATION,
            "Expected movetext section to end with a game termination marker",
        ).text
        board.history.rewind()
        return PgnGame(tags=tags, board=board, moves=moves, result=result)

    def read_games(self) -> Iterator[PgnGame]:
        """Yield every game until the end of input."""
        while self._tokenizer.peek().type is not TokenType.EOF:
            yield self.read()

    # ── Grammar ──────────────────────────────────────────────────────────

    def _expect(self, token_type: TokenType, message: str) -> Token:
        token = self._tokenizer.next_token()
        if token.type is not token_type:
            raise MalformedPGNError(message, token.line)
        return token

    def _tag_section(self) -> dict[str, str]:
        tags: dict[str, str] = {}
        while self._tokenizer.peek().type is TokenType.LEFT_BRACKET:
            self._tokenizer.consume()
            name = self._expect(TokenType.SYMBOL, "Expected tag name to be a symbol")
            value = self._expect(TokenType.STRING, "Expected tag value to be a string")
            self._expect(TokenType.RIGHT_BRACKET, "Expected ']' to end tag pair")
            _LOGGER.debug("Read tag %s = %r", name.text, value.text)
            tags[name.text] = value.text
        return tags

    def _movetext(self, board: Board) -> list[PgnMove]:
        moves: list[PgnMove] = []
        depth = 0
        while True:
            token = self._tokenizer.peek()
            kind = token.type
            if kind is TokenType.INTEGER:
                self._tokenizer.consume()
                while self._tokenizer.peek().type is TokenType.PERIOD:
                    self._tokenizer.consume()
            elif kind is TokenType.SYMBOL:
                self._tokenizer.consume()
                if depth == 0:
                    board.move_san(token.text)
                    moves.append(PgnMove(token.text))
            elif kind in (TokenType.NUMERIC_ANNOTATION_GLYPH, TokenType.SUFFIX_ANNOTATION):
                self._tokenizer.consume()
            elif kind is TokenType.COMMENT:
                self._tokenizer.consume()
                if depth == 0 and moves:
                    moves[-1].add_comment(token.text)
            elif kind is TokenType.LEFT_PAREN:
                self._tokenizer.consume()
                depth += 1
            elif kind is TokenType.RIGHT_PAREN:
                if depth == 0:
                    raise MalformedPGNError("Unexpected ')' outside a variation", token.line)
                self._tokenizer.consume()
                depth -= 1
            else:
                break
        if depth:
            raise MalformedPGNError(
                "Expected ')' to end recursive variation", self._tokenizer.peek().line
            )
        return moves


def _initial_board(tags: dict[str, str]) -> Board:
    if tags.get("SetUp") == "1" and "FEN" in tags:
        return Board.from_fen(tags["FEN"])
    return Board()


def read_pgn(text: str | TextIO) -> PgnGame:
    """Read the first game of a PGN document."""
    return PGNReader(text).read()


def read_pgn_games(text: str | TextIO) -> list[PgnGame]:
    """Read every game of a PGN document."""
    return list(PGNReader(text).read_games())


def read_pgn_file(path: str | Path, encoding: str = "utf-8") -> list[PgnGame]:
    """Read every game of a PGN file, streaming it line by line."""
    with open(path, encoding=encoding) as handle:
        return list(PGNReader(handle).read_games())
