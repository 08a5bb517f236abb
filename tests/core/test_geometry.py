"""Tests for per-piece movement geometry and attack shape."""

import pytest

from chessrules.core.enums import PieceType
from chessrules.core.geometry import GEOMETRY_RULES, attacks, path_clear, pseudo_legal
from chessrules.core.notation import position_from_fen
from chessrules.core.state import BoardState
from chessrules.core.types import parse_square


def _pl(state: BoardState, move: str) -> bool:
    return pseudo_legal(state, parse_square(move[:2]), parse_square(move[2:]))


class TestDispatchTable:
    def test_every_piece_type_has_a_rule(self) -> None:
        assert set(GEOMETRY_RULES) == set(PieceType)


class TestPawn:
    def test_single_and_double_step(self, state: BoardState) -> None:
        assert _pl(state, "e2e3")
        assert _pl(state, "e2e4")
        assert _pl(state, "d7d5")
        assert not _pl(state, "e2e5")

    def test_no_backwards_or_sideways(self) -> None:
        state = position_from_fen("4k3/8/8/8/4P3/8/8/4K3 w - - 0 1")
        assert not _pl(state, "e4e3")
        assert not _pl(state, "e4d4")

    def test_double_step_only_from_start(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/4P3/8/4K3 w - - 0 1")
        assert not _pl(state, "e3e5")

    def test_blocked_forward(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert not _pl(state, "e2e3")
        assert not _pl(state, "e2e4")

    def test_double_step_needs_empty_intermediate(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert not _pl(state, "e2e4")

    def test_diagonal_needs_capture(self) -> None:
        state = position_from_fen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
        assert _pl(state, "e4d5")
        assert not _pl(state, "e4f5")

    def test_en_passant_target(self) -> None:
        state = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 2")
        assert _pl(state, "e5d6")
        assert not _pl(state, "e5f6")

    def test_en_passant_needs_target(self) -> None:
        state = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - - 0 2")
        assert not _pl(state, "e5d6")


class TestPieces:
    def test_knight_jumps(self, state: BoardState) -> None:
        assert _pl(state, "g1f3")
        assert _pl(state, "b1c3")
        assert not _pl(state, "g1g3")
        assert not _pl(state, "g1e2")  # own pawn

    def test_bishop_blocked_at_start(self, state: BoardState) -> None:
        assert not _pl(state, "f1c4")

    def test_sliders_on_open_board(self) -> None:
        state = position_from_fen("4k3/8/8/8/3Q4/8/8/R3K2B w - - 0 1")
        assert _pl(state, "d4d8")
        assert _pl(state, "d4h8")
        assert _pl(state, "d4a7")
        assert not _pl(state, "d4e6")
        assert _pl(state, "a1a8")
        assert not _pl(state, "a1b2")
        assert _pl(state, "h1d5")
        assert not _pl(state, "h1h5")

    def test_rook_path_blocked(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/8/8/R2nK3 w - - 0 1")
        assert _pl(state, "a1d1")  # capture the blocker
        assert not _pl(state, "a1e1")
        assert not path_clear(state.board, parse_square("a1"), parse_square("e1"))

    def test_king_single_steps_only(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert _pl(state, "e1d1")
        assert _pl(state, "e1f2")
        assert not _pl(state, "e1g1")
        assert not _pl(state, "e1c1")

    def test_no_move_to_same_square_or_from_empty(self, state: BoardState) -> None:
        assert not _pl(state, "e2e2")
        assert not _pl(state, "e4e5")


class TestAttacks:
    @pytest.mark.parametrize("target,expected", [("d3", True), ("f3", True), ("e3", False)])
    def test_pawn_attacks_diagonals_even_when_empty(
        self, state: BoardState, target: str, expected: bool
    ) -> None:
        assert attacks(state, parse_square("e2"), parse_square(target)) is expected

    def test_slider_attack_ignores_occupant_color(self) -> None:
        state = position_from_fen("4k3/8/8/8/8/8/8/R2NK3 w - - 0 1")
        assert attacks(state, parse_square("a1"), parse_square("d1"))
        assert not attacks(state, parse_square("a1"), parse_square("e1"))
