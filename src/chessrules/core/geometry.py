"""Pseudo-legal movement geometry, one pure predicate per piece type.

Nothing here looks at king safety or castling; those live in
:mod:`chessrules.core.validator`, which is layered on top of this module
and :mod:`chessrules.core.attacks`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import Square

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.state import BoardState

GeometryRule = Callable[["BoardState", Square, Square, Piece], bool]

_PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


def pawn_start_row(color: Color) -> int:
    return _PAWN_START_ROW[color]


def double_step_row(color: Color) -> int:
    """Row a pawn of *color* lands on after its two-square advance."""
    return _PAWN_START_ROW[color] + 2 * color.forward


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def path_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Every square strictly between two aligned squares is empty."""
    dr = _sign(to_sq.row - from_sq.row)
    dc = _sign(to_sq.col - from_sq.col)
    row, col = from_sq.row + dr, from_sq.col + dc
    while (row, col) != (to_sq.row, to_sq.col):
        if board[Square(row, col)] is not None:
            return False
        row += dr
        col += dc
    return True


# -- Piece rules ------------------------------------------------------------


def _is_en_passant_capture(
    state: BoardState, from_sq: Square, to_sq: Square, piece: Piece
) -> bool:
    target = state.en_passant
    if target is None or target.color == piece.color or target.column != to_sq.col:
        return False
    if from_sq.row != double_step_row(target.color):
        return False
    passed = state.board[Square(from_sq.row, to_sq.col)]
    return (
        passed is not None
        and passed.piece_type == PieceType.PAWN
        and passed.color == target.color
    )


def _pawn(state: BoardState, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    board = state.board
    step = piece.color.forward
    dr = to_sq.row - from_sq.row
    dc = to_sq.col - from_sq.col

    if dc == 0:
        if not board.is_empty(to_sq):
            return False
        if dr == step:
            return True
        return (
            dr == 2 * step
            and not piece.has_moved
            and from_sq.row == _PAWN_START_ROW[piece.color]
            and board.is_empty(Square(from_sq.row + step, from_sq.col))
        )

    if abs(dc) == 1 and dr == step:
        if board[to_sq] is not None:
            return True
        return _is_en_passant_capture(state, from_sq, to_sq, piece)
    return False


def _knight(state: BoardState, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    dr = abs(to_sq.row - from_sq.row)
    dc = abs(to_sq.col - from_sq.col)
    return (dr, dc) in ((1, 2), (2, 1))


def _bishop(state: BoardState, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    dr = abs(to_sq.row - from_sq.row)
    dc = abs(to_sq.col - from_sq.col)
    return dr == dc != 0 and path_clear(state.board, from_sq, to_sq)


def _rook(state: BoardState, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    if (from_sq.row == to_sq.row) == (from_sq.col == to_sq.col):
        return False
    return path_clear(state.board, from_sq, to_sq)


def _queen(state: BoardState, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    return _rook(state, from_sq, to_sq, piece) or _bishop(state, from_sq, to_sq, piece)


def _king(state: BoardState, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    dr = abs(to_sq.row - from_sq.row)
    dc = abs(to_sq.col - from_sq.col)
    return max(dr, dc) == 1


GEOMETRY_RULES: dict[PieceType, GeometryRule] = {
    PieceType.PAWN: _pawn,
    PieceType.KNIGHT: _knight,
    PieceType.BISHOP: _bishop,
    PieceType.ROOK: _rook,
    PieceType.QUEEN: _queen,
    PieceType.KING: _king,
}


# -- Public predicates ------------------------------------------------------


def pseudo_legal(state: BoardState, from_sq: Square, to_sq: Square) -> bool:
    """Whether the piece on *from_sq* may geometrically move to *to_sq*.

    Ignores whose turn it is and whether the mover's king ends up safe.
    The two-square castling king move is never pseudo-legal here.
    """
    if from_sq == to_sq:
        return False
    board = state.board
    piece = board[from_sq]
    if piece is None:
        return False
    target = board[to_sq]
    if target is not None and target.color == piece.color:
        return False
    return GEOMETRY_RULES[piece.piece_type](state, from_sq, to_sq, piece)


def attacks(state: BoardState, from_sq: Square, to_sq: Square) -> bool:
    """Whether the piece on *from_sq* attacks *to_sq*, occupied or not.

    Identical to the movement geometry except for pawns, which attack
    their two forward diagonals but never the square in front of them.
    """
    if from_sq == to_sq:
        return False
    piece = state.board[from_sq]
    if piece is None:
        return False
    if piece.piece_type == PieceType.PAWN:
        return (
            to_sq.row - from_sq.row == piece.color.forward
            and abs(to_sq.col - from_sq.col) == 1
        )
    return GEOMETRY_RULES[piece.piece_type](state, from_sq, to_sq, piece)
