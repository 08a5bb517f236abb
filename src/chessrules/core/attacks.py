"""Attack detection built only on piece geometry.

Must never call into :mod:`chessrules.core.validator`: the validator's
king-safety filter is built on :func:`is_king_in_check`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import Color
from chessrules.core.geometry import attacks
from chessrules.core.types import Square

if TYPE_CHECKING:
    from chessrules.core.state import BoardState


def is_square_attacked(state: BoardState, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    for origin, piece in state.board.occupied():
        if piece.color == by_color and attacks(state, origin, sq):
            return True
    return False


def is_king_in_check(state: BoardState, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?

    Raises:
        BoardInvariantError: if *color* does not have exactly one king.
    """
    king_sq = state.board.king_square(color)
    return is_square_attacked(state, king_sq, color.opposite)
