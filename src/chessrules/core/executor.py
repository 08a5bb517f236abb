"""Applying validated moves, including every special-move side effect."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chessrules.core.attacks import is_king_in_check
from chessrules.core.enums import CastlingRights, Color, GameResult, PieceType
from chessrules.core.errors import IllegalMoveError
from chessrules.core.piece import Piece
from chessrules.core.scanner import has_any_legal_move
from chessrules.core.state import EnPassantTarget
from chessrules.core.types import Square, square_name
from chessrules.core.validator import (
    castling_rook_squares,
    is_castling_move,
    is_legal,
    is_promotion_move,
)

if TYPE_CHECKING:
    from chessrules.core.state import BoardState

_LOGGER = logging.getLogger(__name__)

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    Square(7, 0): CastlingRights.WHITE_QUEENSIDE,
    Square(7, 7): CastlingRights.WHITE_KINGSIDE,
    Square(0, 0): CastlingRights.BLACK_QUEENSIDE,
    Square(0, 7): CastlingRights.BLACK_KINGSIDE,
}


def refresh_check_flags(state: BoardState) -> None:
    """Recompute both colors' check flags from the current grid."""
    for color in Color:
        state.set_in_check(color, is_king_in_check(state, color))


def detect_game_end(state: BoardState, *, stalemate_is_draw: bool = True) -> None:
    """Finish the game if the side to move has no legal move.

    In check, that is checkmate.  Out of check it is stalemate, which ends
    the game as a draw only when *stalemate_is_draw* is set.
    """
    side = state.turn
    in_check = state.in_check(side)
    if not in_check and not stalemate_is_draw:
        return
    if has_any_legal_move(state, side):
        return
    if in_check:
        state.finish(GameResult.win_for(side.opposite))
        _LOGGER.info("Checkmate: %s wins after %d moves", side.opposite, state.move_count)
    else:
        state.finish(GameResult.DRAW)
        _LOGGER.info("Stalemate: %s has no legal move", side)


def _update_castling(
    state: BoardState, piece: Piece, from_sq: Square, to_sq: Square
) -> None:
    if piece.piece_type == PieceType.KING:
        state.revoke_castling(CastlingRights.both(piece.color))
    # A rook leaving its corner, or anything landing on one, ends that right.
    for sq in (from_sq, to_sq):
        right = _ROOK_CORNERS.get(sq)
        if right is not None:
            state.revoke_castling(right)


def apply_move(
    state: BoardState,
    from_sq: tuple[int, int],
    to_sq: tuple[int, int],
    promotion: PieceType | None = None,
    *,
    default_promotion: PieceType = PieceType.QUEEN,
    stalemate_is_draw: bool = True,
) -> BoardState:
    """Apply a legal move to *state* in place and return it.

    Raises:
        IllegalMoveError: if the game is over or the move is not legal;
            *state* is untouched in that case.
    """
    if state.is_game_over:
        raise IllegalMoveError(f"Game is over: {state.result.name}")
    if not is_legal(state, from_sq, to_sq, promotion):
        raise IllegalMoveError(
            f"Illegal move for {state.turn}: {_describe(from_sq)}-{_describe(to_sq)}"
        )
    from_sq = Square(*from_sq)
    to_sq = Square(*to_sq)

    board = state.board
    piece = board[from_sq]
    assert piece is not None
    mover = piece.color

    # The en passant target only survives a single ply.
    state.en_passant = None

    if (
        piece.piece_type == PieceType.PAWN
        and from_sq.col != to_sq.col
        and board.is_empty(to_sq)
    ):
        board[Square(from_sq.row, to_sq.col)] = None
        _LOGGER.debug("En passant capture on %s", square_name(to_sq))

    if is_castling_move(piece, from_sq, to_sq):
        kingside = to_sq.col > from_sq.col
        rook_from, rook_to = castling_rook_squares(from_sq.row, kingside)
        rook = board[rook_from]
        assert rook is not None
        board[rook_to] = rook
        board[rook_from] = None
        rook.has_moved = True
        _LOGGER.debug("%s castles %s", mover, "kingside" if kingside else "queenside")

    _update_castling(state, piece, from_sq, to_sq)

    board[to_sq] = piece
    board[from_sq] = None
    piece.has_moved = True
    state.move_count += 1

    if is_promotion_move(piece, to_sq):
        promoted = promotion if promotion is not None else default_promotion
        board[to_sq] = Piece(mover, promoted, has_moved=True)
        _LOGGER.debug("Pawn promoted to %s on %s", promoted, square_name(to_sq))

    if piece.piece_type == PieceType.PAWN and abs(to_sq.row - from_sq.row) == 2:
        state.en_passant = EnPassantTarget(from_sq.col, mover)

    state.turn = mover.opposite
    refresh_check_flags(state)
    detect_game_end(state, stalemate_is_draw=stalemate_is_draw)
    return state


def _describe(sq: tuple[int, int]) -> str:
    row, col = sq
    return square_name(Square(row, col)) if 0 <= row < 8 and 0 <= col < 8 else str(sq)
