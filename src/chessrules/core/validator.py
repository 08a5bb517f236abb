"""Full move legality: turn, occupancy, geometry, castling and king safety.

Two layers are kept strictly apart:

* :func:`chessrules.core.geometry.pseudo_legal`: movement shape and
  occupancy only;
* :func:`king_safe`: simulate the move on the live state and ask
  :func:`chessrules.core.attacks.is_king_in_check`.

Attack detection only ever uses the first layer, so there is no
recursion between check detection and legality.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.attacks import is_king_in_check, is_square_attacked
from chessrules.core.enums import PROMOTION_TYPES, CastlingRights, Color, PieceType
from chessrules.core.geometry import pseudo_legal
from chessrules.core.piece import Piece
from chessrules.core.types import Square, is_on_board

if TYPE_CHECKING:
    from chessrules.core.state import BoardState

KING_HOME_COL = 4
_KINGSIDE_ROOK_COL = 7
_QUEENSIDE_ROOK_COL = 0


def castling_rook_squares(row: int, kingside: bool) -> tuple[Square, Square]:
    """Origin and destination of the rook for a castle on *row*."""
    if kingside:
        return Square(row, _KINGSIDE_ROOK_COL), Square(row, KING_HOME_COL + 1)
    return Square(row, _QUEENSIDE_ROOK_COL), Square(row, KING_HOME_COL - 1)


def is_castling_move(piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    """A king moving two files along its row."""
    return (
        piece.piece_type == PieceType.KING
        and from_sq.row == to_sq.row
        and abs(to_sq.col - from_sq.col) == 2
    )


def is_promotion_move(piece: Piece, to_sq: Square) -> bool:
    """A pawn arriving on the opponent's back row."""
    return (
        piece.piece_type == PieceType.PAWN
        and to_sq.row == piece.color.opposite.back_row
    )


def king_safe(state: BoardState, from_sq: Square, to_sq: Square, color: Color) -> bool:
    """Simulate the move and report whether *color*'s king is left unattacked."""
    with state.try_move(from_sq, to_sq):
        return not is_king_in_check(state, color)


def can_castle(state: BoardState, from_sq: Square, to_sq: Square, color: Color) -> bool:
    """Castling preconditions for the king on *from_sq* moving to *to_sq*."""
    board = state.board
    king = board[from_sq]
    if king is None or king.color != color or king.has_moved:
        return False

    row = color.back_row
    if from_sq != Square(row, KING_HOME_COL) or to_sq.row != row:
        return False

    kingside = to_sq.col > from_sq.col
    if not state.has_right(CastlingRights.for_side(color, kingside)):
        return False

    rook_sq, _ = castling_rook_squares(row, kingside)
    rook = board[rook_sq]
    if (
        rook is None
        or rook.color != color
        or rook.piece_type != PieceType.ROOK
        or rook.has_moved
    ):
        return False

    lo, hi = sorted((from_sq.col, rook_sq.col))
    if any(not board.is_empty(Square(row, col)) for col in range(lo + 1, hi)):
        return False

    # Start square covers "not currently in check".
    step = 1 if kingside else -1
    opponent = color.opposite
    for col in (from_sq.col, from_sq.col + step, to_sq.col):
        if is_square_attacked(state, Square(row, col), opponent):
            return False
    return True


def is_legal(
    state: BoardState,
    from_sq: tuple[int, int],
    to_sq: tuple[int, int],
    promotion: PieceType | None = None,
    *,
    color: Color | None = None,
) -> bool:
    """Whether moving from *from_sq* to *to_sq* is legal for *color*.

    *color* defaults to the side to move.  The state is left exactly as it
    was found.  A *promotion* is only inspected on promoting moves, where it
    must be one of queen, rook, bishop or knight; a king or pawn there makes
    the move illegal rather than falling back to the default piece.

    Nothing is legal once the game is over.  Use :func:`allowed_by_position`
    to ask about the position regardless of the result.
    """
    if state.is_game_over:
        return False
    return allowed_by_position(state, from_sq, to_sq, promotion, color=color)


def allowed_by_position(
    state: BoardState,
    from_sq: tuple[int, int],
    to_sq: tuple[int, int],
    promotion: PieceType | None = None,
    *,
    color: Color | None = None,
) -> bool:
    """:func:`is_legal` judged on the position alone, ignoring the result."""
    if not (is_on_board(*from_sq) and is_on_board(*to_sq)):
        return False
    from_sq = Square(*from_sq)
    to_sq = Square(*to_sq)
    mover = state.turn if color is None else color

    board = state.board
    piece = board[from_sq]
    if piece is None or piece.color != mover:
        return False
    target = board[to_sq]
    if target is not None and target.color == mover:
        return False

    if is_castling_move(piece, from_sq, to_sq):
        if not can_castle(state, from_sq, to_sq, mover):
            return False
    elif not pseudo_legal(state, from_sq, to_sq):
        return False

    if (
        promotion is not None
        and promotion not in PROMOTION_TYPES
        and is_promotion_move(piece, to_sq)
    ):
        return False

    return king_safe(state, from_sq, to_sq, mover)
