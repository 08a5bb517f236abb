"""Exhaustive legal-move enumeration, used to detect the end of the game."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chessrules.core.attacks import is_king_in_check
from chessrules.core.enums import Color
from chessrules.core.types import ALL_SQUARES, Square
from chessrules.core.validator import allowed_by_position

if TYPE_CHECKING:
    from chessrules.core.state import BoardState


def _iter_legal(state: BoardState, color: Color) -> Iterator[tuple[Square, Square]]:
    # Snapshot the origins first; try_move reshuffles the grid while we scan.
    for from_sq in state.board.all_pieces(color):
        for to_sq in ALL_SQUARES:
            if allowed_by_position(state, from_sq, to_sq, color=color):
                yield from_sq, to_sq


def legal_moves(
    state: BoardState, color: Color | None = None
) -> list[tuple[Square, Square]]:
    """Every legal ``(from, to)`` pair for *color* (default: side to move).

    A promoting pawn move appears once, not once per promotion piece.
    Empty once the game is over, matching :func:`is_legal`.
    """
    if state.is_game_over:
        return []
    return list(_iter_legal(state, state.turn if color is None else color))


def has_any_legal_move(state: BoardState, color: Color) -> bool:
    """Whether the position gives *color* at least one move; stops at the first.

    The game result is not consulted, so this also answers for a finished game.
    """
    return next(_iter_legal(state, color), None) is not None


def is_checkmate(state: BoardState, color: Color | None = None) -> bool:
    color = state.turn if color is None else color
    return is_king_in_check(state, color) and not has_any_legal_move(state, color)


def is_stalemate(state: BoardState, color: Color | None = None) -> bool:
    color = state.turn if color is None else color
    return not is_king_in_check(state, color) and not has_any_legal_move(state, color)
