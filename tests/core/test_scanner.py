"""Tests for legal-move enumeration and end-of-game predicates.

Move counts are checked against well-known perft positions.  Promotions are
counted once per (from, to) pair, which matches perft at these depths.
"""

import pytest

from chessrules.core.enums import Color, GameResult
from chessrules.core.executor import apply_move
from chessrules.core.notation import position_from_fen
from chessrules.core.scanner import (
    has_any_legal_move,
    is_checkmate,
    is_stalemate,
    legal_moves,
)
from chessrules.core.state import BoardState
from chessrules.core.types import parse_square

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


def perft(state: BoardState, depth: int) -> int:
    if depth == 0:
        return 1
    moves = legal_moves(state)
    if depth == 1:
        return len(moves)
    total = 0
    for from_sq, to_sq in moves:
        child = state.copy()
        apply_move(child, from_sq, to_sq)
        total += perft(child, depth - 1)
    return total


class TestLegalMoves:
    def test_initial_twenty(self, state: BoardState) -> None:
        assert len(legal_moves(state)) == 20

    def test_black_reply_twenty(self, play) -> None:
        state = play(BoardState.initial(), "e2e4")
        assert len(legal_moves(state)) == 20

    def test_explicit_color(self, state: BoardState) -> None:
        moves = legal_moves(state, Color.BLACK)
        assert len(moves) == 20
        assert all(from_sq.row in (0, 1) for from_sq, _ in moves)

    def test_king_escape_squares(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/8/3r4/4K3 w - - 0 1")
        names = {f"{a}{b}" for a, b in legal_moves(state)}
        assert names == {"e1f1", "e1d2"}

    def test_promotion_listed_once(self) -> None:
        state = position_from_fen("8/P6k/8/8/8/8/8/K7 w - - 0 1")
        names = sorted(f"{a}{b}" for a, b in legal_moves(state))
        assert names == ["a1a2", "a1b1", "a1b2", "a7a8"]

    def test_castles_included(self) -> None:
        state = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        moves = legal_moves(state)
        assert (parse_square("e1"), parse_square("g1")) in moves
        assert (parse_square("e1"), parse_square("c1")) in moves

    def test_enumeration_leaves_state_intact(self) -> None:
        state = position_from_fen(KIWIPETE)
        before = state.copy()
        legal_moves(state)
        assert state.board == before.board
        assert state.castling == before.castling

    def test_nothing_after_game_over(self, play) -> None:
        state = play(BoardState.initial(), "f2f3", "e7e5", "g2g4", "d8h4")
        assert legal_moves(state) == []


class TestPerft:
    def test_initial_depth_two(self, state: BoardState) -> None:
        assert perft(state, 2) == 400

    def test_kiwipete_depth_one(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 1) == 48

    def test_position3_depth_one(self) -> None:
        assert perft(position_from_fen(POS3), 1) == 14

    def test_position3_depth_two(self) -> None:
        assert perft(position_from_fen(POS3), 2) == 191

    @pytest.mark.slow
    def test_kiwipete_depth_two(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 2) == 2039

    @pytest.mark.slow
    def test_initial_depth_three(self, state: BoardState) -> None:
        assert perft(state, 3) == 8902


class TestEndPredicates:
    def test_start_is_neither(self, state: BoardState) -> None:
        assert has_any_legal_move(state, Color.WHITE)
        assert not is_checkmate(state)
        assert not is_stalemate(state)

    def test_fools_mate(self) -> None:
        state = position_from_fen(
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
        )
        assert is_checkmate(state)
        assert not is_stalemate(state)
        assert state.result == GameResult.BLACK_WINS

    def test_check_with_escape_is_not_mate(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/8/4r3/R3K3 w - - 0 1")
        assert state.white_in_check
        assert not is_checkmate(state)

    def test_stalemate(self) -> None:
        state = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert is_stalemate(state)
        assert not is_checkmate(state)
        assert state.result == GameResult.DRAW

    def test_stalemate_predicate_independent_of_policy(self) -> None:
        state = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1", stalemate_is_draw=False)
        assert state.result == GameResult.IN_PROGRESS
        assert is_stalemate(state)
        assert not has_any_legal_move(state, Color.BLACK)


class TestFinishedGame:
    def test_mate_is_not_stalemate_for_either_side(self, play) -> None:
        state = play(BoardState.initial(), "f2f3", "e7e5", "g2g4", "d8h4")
        assert is_checkmate(state)
        assert not is_stalemate(state, Color.WHITE)
        assert not is_stalemate(state, Color.BLACK)
        assert not is_checkmate(state, Color.BLACK)

    def test_position_still_answers_for_winner(self, play) -> None:
        state = play(BoardState.initial(), "f2f3", "e7e5", "g2g4", "d8h4")
        assert has_any_legal_move(state, Color.BLACK)
        assert not has_any_legal_move(state, Color.WHITE)

    def test_drawn_stalemate_keeps_its_predicate(self, play) -> None:
        state = play(position_from_fen("7k/8/5K2/8/8/8/6Q1/8 w - - 0 1"), "g2g6")
        assert state.result == GameResult.DRAW
        assert is_stalemate(state)
        assert not is_stalemate(state, Color.WHITE)
