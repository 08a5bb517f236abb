"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys

import pytest

from chessrules.core.enums import PieceType
from chessrules.core.executor import apply_move
from chessrules.core.state import BoardState
from chessrules.core.types import parse_square

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


@pytest.fixture
def state() -> BoardState:
    """A fresh game in the standard initial position."""
    return BoardState.initial()


def _play(state: BoardState, *moves: str) -> BoardState:
    """Apply moves written as 'e2e4' (optionally 'e7e8q') to *state*."""
    promotions = {
        "q": PieceType.QUEEN,
        "r": PieceType.ROOK,
        "b": PieceType.BISHOP,
        "n": PieceType.KNIGHT,
    }
    for text in moves:
        promotion = promotions[text[4]] if len(text) == 5 else None
        apply_move(state, parse_square(text[:2]), parse_square(text[2:4]), promotion)
    return state


@pytest.fixture
def play():
    """Helper applying coordinate moves such as 'e2e4' or 'a7a8n'."""
    return _play
