"""Per-variant movement predicates, attack scans and pin detection.

Every function takes the owning :class:`Board` explicitly; pieces carry no
behavior of their own. The variant-specific geometry is looked up in the
``_LEGALITY`` / ``_ATTACKS`` dispatch tables keyed by :class:`PieceType`.

Scope note: the only check-avoidance performed is (a) a pinned piece must
stay on its pin line and (b) a king may not step onto an attacked square.
There is no general "is this side in check" query.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType
from chessrules.core.paths import (
    file_distance,
    is_path_clear,
    is_same_diagonal,
    rank_distance,
    squares_between,
)
from chessrules.core.types import (
    KING_FILE,
    KINGSIDE_ROOK_FILE,
    QUEENSIDE_ROOK_FILE,
    forward,
    starting_pawn_rank,
    starting_rank,
)

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.piece import Piece
    from chessrules.core.square import Square

_Predicate = Callable[["Board", "Piece", "Square", bool], bool]

_LINE_PINNERS: dict[str, tuple[PieceType, ...]] = {
    "rank": (PieceType.QUEEN, PieceType.ROOK),
    "file": (PieceType.QUEEN, PieceType.ROOK),
    "diagonal": (PieceType.QUEEN, PieceType.BISHOP),
}


# ── Pins ──────────────────────────────────────────────────────────────


def _is_line_open(start: Square, end: Square) -> bool:
    return all(square.is_empty() for square in squares_between(start, end))


def pinning_piece(board: Board, piece: Piece) -> Piece | None:
    """The enemy piece pinning *piece* to its own king, if any.

    Kings are never pinned. A piece is pinned when it shares a rank, file
    or diagonal with its king, nothing stands between them, and an enemy
    queen/rook (rank or file) or queen/bishop (diagonal) on the king's line
    attacks the piece along that line.
    """
    if piece.piece_type == PieceType.KING or piece.captured:
        return None
    king = board.king(piece.color)
    if king is None:
        return None
    square = board.square_of(piece)
    king_square = board.square_of(king)
    if square is None or king_square is None:
        return None

    if square.rank == king_square.rank:
        line = "rank"
    elif square.file == king_square.file:
        line = "file"
    elif is_same_diagonal(square, king_square):
        line = "diagonal"
    else:
        return None
    if not _is_line_open(square, king_square):
        return None

    for enemy in board.active_pieces(piece.color.opposite):
        if enemy.piece_type not in _LINE_PINNERS[line]:
            continue
        enemy_square = board.square_of(enemy)
        if enemy_square is None:
            continue
        if line == "rank":
            on_line = enemy_square.rank == king_square.rank
        elif line == "file":
            on_line = enemy_square.file == king_square.file
        else:
            on_line = is_same_diagonal(enemy_square, king_square)
        # The pinner keeps pinning even when it is pinned itself.
        if on_line and is_attacking(board, enemy, square, ignore_pins=True):
            return enemy
    return None


def is_pinned(board: Board, piece: Piece) -> bool:
    return pinning_piece(board, piece) is not None


def _on_pin_line(board: Board, piece: Piece, pinner: Piece, dest: Square) -> bool:
    """Whether *dest* keeps *piece* between its king and *pinner* (or takes it)."""
    king = board.king(piece.color)
    pinner_square = board.square_of(pinner)
    if king is None or pinner_square is None:
        return True
    king_square = board.square_of(king)
    if king_square is None:
        return True
    return dest is pinner_square or dest in squares_between(king_square, pinner_square)


# ── Shared contract ───────────────────────────────────────────────────


def _is_enterable(piece: Piece, dest: Square) -> bool:
    occupant = dest.piece
    return occupant is None or occupant.color != piece.color


def _common(board: Board, piece: Piece, dest: Square, ignore_pins: bool) -> bool:
    """Checks shared by every variant but the king."""
    square = board.square_of(piece)
    if piece.captured or square is None:
        return False
    if not ignore_pins:
        pinner = pinning_piece(board, piece)
        if pinner is not None and not _on_pin_line(board, piece, pinner, dest):
            return False
    return is_path_clear(square, dest) and _is_enterable(piece, dest)


# ── Variants ──────────────────────────────────────────────────────────


def _pawn_legal(board: Board, piece: Piece, dest: Square, ignore_pins: bool) -> bool:
    if not _common(board, piece, dest, ignore_pins):
        return False
    square = board.square_of(piece)
    assert square is not None
    advance = (dest.rank - square.rank) * forward(piece.color)
    files = file_distance(square, dest)
    if advance not in (1, 2) or files > 1:
        return False

    if files == 1:
        if advance != 1:
            return False
        if dest.index == board.state.en_passant:
            return True
        occupant = dest.piece
        return occupant is not None and occupant.color != piece.color

    if not dest.is_empty():
        return False
    return advance == 1 or square.rank == starting_pawn_rank(piece.color)


def _pawn_attacks(board: Board, piece: Piece, dest: Square, ignore_pins: bool) -> bool:
    """Pawns cover both forward diagonals whatever stands there."""
    square = board.square_of(piece)
    if piece.captured or square is None:
        return False
    if not ignore_pins and is_pinned(board, piece):
        return False
    advance = (dest.rank - square.rank) * forward(piece.color)
    return advance == 1 and file_distance(square, dest) == 1


def _knight_legal(board: Board, piece: Piece, dest: Square, ignore_pins: bool) -> bool:
    if not _common(board, piece, dest, ignore_pins):
        return False
    square = board.square_of(piece)
    assert square is not None
    return (rank_distance(square, dest), file_distance(square, dest)) in ((2, 1), (1, 2))


def _bishop_legal(board: Board, piece: Piece, dest: Square, ignore_pins: bool) -> bool:
    if not _common(board, piece, dest, ignore_pins):
        return False
    square = board.square_of(piece)
    assert square is not None
    return is_same_diagonal(square, dest)


def _rook_legal(board: Board, piece: Piece, dest: Square, ignore_pins: bool) -> bool:
    if not _common(board, piece, dest, ignore_pins):
        return False
    square = board.square_of(piece)
    assert square is not None
    return square.rank == dest.rank or square.file == dest.file


def _queen_legal(board: Board, piece: Piece, dest: Square, ignore_pins: bool) -> bool:
    return _bishop_legal(board, piece, dest, ignore_pins) or _rook_legal(
        board, piece, dest, ignore_pins
    )


# ── King ──────────────────────────────────────────────────────────────


def is_square_attacked(board: Board, square: Square, by: Color) -> bool:
    """Whether any active piece of color *by* attacks *square*.

    The enemy king counts through adjacency alone so that the scan never
    asks a king about its own safety.
    """
    for enemy in board.active_pieces(by):
        enemy_square = board.square_of(enemy)
        if enemy_square is None:
            continue
        if enemy.piece_type == PieceType.KING:
            if (
                enemy_square is not square
                and rank_distance(enemy_square, square) < 2
                and file_distance(enemy_square, square) < 2
            ):
                return True
        elif is_attacking(board, enemy, square, ignore_pins=True):
            return True
    return False


def _can_castle_to(board: Board, king: Piece, square: Square, dest: Square) -> bool:
    home = starting_rank(king.color)
    if square.rank != home or square.file != KING_FILE:
        return False
    kingside = dest.file > square.file
    if not board.state.castling.can_castle(king.color, kingside):
        return False

    rook_square = board.square_at(
        KINGSIDE_ROOK_FILE if kingside else QUEENSIDE_ROOK_FILE, home
    )
    rook = rook_square.piece
    if (
        rook is None
        or rook.color != king.color
        or rook.piece_type != PieceType.ROOK
        or not _is_line_open(square, rook_square)
    ):
        return False

    crossed = board.square_at(square.file + (1 if kingside else -1), home)
    return not is_square_attacked(board, crossed, king.color.opposite)


def _king_legal(board: Board, piece: Piece, dest: Square, ignore_pins: bool) -> bool:
    # A king is never pinned, so ignore_pins has no effect here.
    square = board.square_of(piece)
    if piece.captured or square is None or dest is square:
        return False
    if not (is_path_clear(square, dest) and _is_enterable(piece, dest)):
        return False

    ranks = rank_distance(square, dest)
    files = file_distance(square, dest)
    if ranks == 0 and files == 2:
        if not _can_castle_to(board, piece, square, dest):
            return False
    elif ranks > 1 or files > 1:
        return False

    return not is_square_attacked(board, dest, piece.color.opposite)


def _king_attacks(board: Board, piece: Piece, dest: Square, ignore_pins: bool) -> bool:
    square = board.square_of(piece)
    if piece.captured or square is None or dest is square:
        return False
    return (
        rank_distance(square, dest) < 2
        and file_distance(square, dest) < 2
        and _is_enterable(piece, dest)
    )


_LEGALITY: dict[PieceType, _Predicate] = {
    PieceType.PAWN: _pawn_legal,
    PieceType.KNIGHT: _knight_legal,
    PieceType.BISHOP: _bishop_legal,
    PieceType.ROOK: _rook_legal,
    PieceType.QUEEN: _queen_legal,
    PieceType.KING: _king_legal,
}

_ATTACKS: dict[PieceType, _Predicate] = {
    PieceType.PAWN: _pawn_attacks,
    PieceType.KING: _king_attacks,
}


# ── Public predicates ─────────────────────────────────────────────────


def is_legal_square(
    board: Board, piece: Piece, dest: Square, ignore_pins: bool = False
) -> bool:
    """Whether *piece* may move to *dest* in the current position.

    The piece must be active, respect its pin (unless *ignore_pins*), have
    a clear path, land on an empty or enemy square, and satisfy its own
    movement geometry.
    """
    return _LEGALITY[piece.piece_type](board, piece, dest, ignore_pins)


def is_attacking(
    board: Board, piece: Piece, dest: Square, ignore_pins: bool = False
) -> bool:
    """Whether *piece* currently attacks *dest*.

    Same as :func:`is_legal_square` except for pawns (both forward
    diagonals, occupied or not) and kings (plain adjacency).
    """
    predicate = _ATTACKS.get(piece.piece_type, _LEGALITY[piece.piece_type])
    return predicate(board, piece, dest, ignore_pins)
