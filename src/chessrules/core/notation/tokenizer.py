"""PGN tokenizer: turns PGN text into a stream of typed tokens."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from chessrules.errors import MalformedPGNError

DRAW = "1/2-1/2"
WHITE_WINS = "1-0"
BLACK_WINS = "0-1"
UNFINISHED = "*"

_SYMBOL_PUNCTUATION = frozenset("+-_:#=")
_SUFFIX_CHARS = frozenset("!?")
_ASCII_MIN = 0x20


class TokenType(Enum):
    """Token kinds; delimiter kinds carry their fixed text as the value."""

    EOF = "eof"
    INTEGER = "integer"
    GAME_TERMINATION = "game_termination"
    NUMERIC_ANNOTATION_GLYPH = "nag"
    STRING = "string"
    SYMBOL = "symbol"
    COMMENT = "comment"
    SUFFIX_ANNOTATION = "suffix_annotation"
    LEFT_ANGLE_BRACKET = "<"
    LEFT_BRACKET = "["
    LEFT_PAREN = "("
    RIGHT_ANGLE_BRACKET = ">"
    RIGHT_BRACKET = "]"
    RIGHT_PAREN = ")"
    PERIOD = "."


_DELIMITERS: dict[str, TokenType] = {t.value: t for t in TokenType if len(t.value) == 1}


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    text: str
    line: int


class PGNTokenizer:
    """Lazily tokenizes PGN text with one token of look-ahead.

    :meth:`peek` returns the next token without consuming it; the following
    :meth:`next_token` returns that same token. Errors are raised as
    :class:`MalformedPGNError` carrying the current line number.
    """

    def __init__(self, source: str | TextIO) -> None:
        lines = source.splitlines(keepends=True) if isinstance(source, str) else source
        self._lines: Iterator[str] = iter(lines)
        self._buf = ""
        self._pos = 0
        self._line = 0
        self._peeked: Token | None = None

    @property
    def line_number(self) -> int:
        return self._line

    # ── Stream API ───────────────────────────────────────────────────────

    def peek(self) -> Token:
        if self._peeked is None:
            self._peeked = self._read_token()
        return self._peeked

    def next_token(self) -> Token:
        token = self.peek()
        self._peeked = None
        return token

    def consume(self) -> None:
        self.next_token()

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                return

    # ── Character helpers ────────────────────────────────────────────────

    def _fill(self) -> bool:
        """Load lines until one has unread characters; False at end of input."""
        while self._pos >= len(self._buf):
            line = next(self._lines, None)
            if line is None:
                return False
            self._buf = line
            self._pos = 0
            self._line += 1
        return True

    def _peek_char(self) -> str:
        if not self._fill():
            return ""
        return self._buf[self._pos]

    def _next_char(self) -> str:
        ch = self._peek_char()
        if ch:
            self._pos += 1
        return ch

    def _at_line_start(self) -> bool:
        return self._pos == 0

    def _error(self, message: str) -> MalformedPGNError:
        return MalformedPGNError(message, self._line)

    # ── Token reader ─────────────────────────────────────────────────────

    def _read_token(self) -> Token:
        while True:
            if self._peek_char() == "%" and self._at_line_start():
                # Escape mechanism: the whole line is ignored.
                while self._peek_char() not in ("", "\n"):
                    self._next_char()
                continue
            ch = self._peek_char()
            if ch and ch.isspace():
                self._next_char()
                continue
            break

        line = self._line
        ch = self._next_char()
        if not ch:
            return Token(TokenType.EOF, "", line)
        if ch == '"':
            return Token(TokenType.STRING, self._read_string(), line)
        if ch == "$":
            digits = self._read_while(str.isdigit)
            if not digits:
                raise self._error("Illegal NAG token")
            return Token(TokenType.NUMERIC_ANNOTATION_GLYPH, digits, line)
        if ch == "{":
            return Token(TokenType.COMMENT, self._read_brace_comment(), line)
        if ch == ";":
            text = self._read_while(lambda c: c != "\n")
            return Token(TokenType.COMMENT, text.strip(), line)
        if ch in _SUFFIX_CHARS:
            text = ch + self._read_while(lambda c: c in _SUFFIX_CHARS)
            return Token(TokenType.SUFFIX_ANNOTATION, text, line)
        if ch == "*":
            return Token(TokenType.GAME_TERMINATION, UNFINISHED, line)
        if ch in _DELIMITERS:
            return Token(_DELIMITERS[ch], ch, line)
        if ch == "1" and self._peek_char() == "/":
            for expected in DRAW[1:]:
                if self._next_char() != expected:
                    raise self._error(
                        "Unrecognized token (possibly malformed game terminator?)"
                    )
            return Token(TokenType.GAME_TERMINATION, DRAW, line)
        if ch.isalnum():
            text = ch + self._read_while(_is_symbol_char)
            if text in (WHITE_WINS, BLACK_WINS):
                return Token(TokenType.GAME_TERMINATION, text, line)
            kind = TokenType.INTEGER if text.isdigit() else TokenType.SYMBOL
            return Token(kind, text, line)
        raise self._error(f"Unrecognized token: {ch}")

    def _read_while(self, predicate: Callable[[str], bool]) -> str:
        chars: list[str] = []
        while True:
            ch = self._peek_char()
            if not ch or not predicate(ch):
                return "".join(chars)
            chars.append(self._next_char())

    def _read_string(self) -> str:
        chars: list[str] = []
        while True:
            ch = self._peek_char()
            if not ch or ord(ch) < _ASCII_MIN:
                raise self._error(f"Unterminated string token: {''.join(chars)}")
            self._next_char()
            if ch == '"':
                return "".join(chars)
            if ch == "\\" and self._peek_char() in ('"', "\\"):
                chars.append(self._next_char())
            else:
                chars.append(ch)

    def _read_brace_comment(self) -> str:
        chars: list[str] = []
        while True:
            ch = self._next_char()
            if not ch:
                raise self._error("Unterminated comment")
            if ch == "}":
                return " ".join("".join(chars).split())
            chars.append(ch)


def _is_symbol_char(ch: str) -> bool:
    return ch.isalnum() or ch in _SYMBOL_PUNCTUATION
