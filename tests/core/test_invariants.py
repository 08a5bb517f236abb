"""Randomised playouts checking state invariants after every applied move."""

import random

import pytest

from chessrules.core.attacks import is_king_in_check
from chessrules.core.enums import CastlingRights, Color, PieceType
from chessrules.core.executor import apply_move
from chessrules.core.scanner import legal_moves
from chessrules.core.state import BoardState


def _assert_consistent(state: BoardState, previous_rights: CastlingRights) -> None:
    mover = state.turn.opposite
    assert not is_king_in_check(state, mover)
    for color in Color:
        assert state.in_check(color) == is_king_in_check(state, color)
        assert len(state.board.pieces(color, PieceType.KING)) == 1
    # Rights can only shrink.
    assert state.castling & ~previous_rights == CastlingRights.NONE
    for sq, piece in state.board.occupied():
        if piece.piece_type == PieceType.PAWN:
            assert sq.row not in (0, 7)


def _playout(seed: int, max_plies: int) -> BoardState:
    rng = random.Random(seed)
    state = BoardState.initial()
    for ply in range(max_plies):
        moves = legal_moves(state)
        if not moves:
            break
        rights = state.castling
        from_sq, to_sq = rng.choice(moves)
        apply_move(state, from_sq, to_sq)
        assert state.move_count == ply + 1
        _assert_consistent(state, rights)
    return state


class TestRandomPlayouts:
    def test_short_playout(self) -> None:
        _playout(seed=7, max_plies=40)

    @pytest.mark.slow
    @pytest.mark.parametrize("seed", range(8))
    def test_long_playouts(self, seed: int) -> None:
        state = _playout(seed=seed, max_plies=200)
        if not legal_moves(state):
            assert state.is_game_over
