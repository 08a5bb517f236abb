"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import BoardState, apply_move, is_legal, parse_square

    state = BoardState.initial()
    e2, e4 = parse_square("e2"), parse_square("e4")
    if is_legal(state, e2, e4):
        apply_move(state, e2, e4)
"""

from chessrules.core.attacks import is_king_in_check, is_square_attacked
from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, GameResult, PieceType
from chessrules.core.errors import BoardInvariantError, IllegalMoveError
from chessrules.core.executor import apply_move
from chessrules.core.geometry import pseudo_legal
from chessrules.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chessrules.core.piece import Piece
from chessrules.core.scanner import (
    has_any_legal_move,
    is_checkmate,
    is_stalemate,
    legal_moves,
)
from chessrules.core.state import BoardState, EnPassantTarget
from chessrules.core.types import Square, is_on_board, parse_square, square_name
from chessrules.core.validator import is_legal

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Square",
    "is_on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "BoardState",
    "EnPassantTarget",
    "Piece",
    # Errors
    "BoardInvariantError",
    "IllegalMoveError",
    # Rules
    "apply_move",
    "has_any_legal_move",
    "is_checkmate",
    "is_king_in_check",
    "is_legal",
    "is_square_attacked",
    "is_stalemate",
    "legal_moves",
    "pseudo_legal",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
