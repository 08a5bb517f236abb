"""BoardState: the position plus every piece of metadata legality depends on."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import NamedTuple

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, GameResult, PieceType
from chessrules.core.errors import BoardInvariantError
from chessrules.core.types import Square


class EnPassantTarget(NamedTuple):
    """Column and color of the pawn that has just advanced two squares."""

    column: int
    color: Color


class BoardState:
    """Full game state: grid, side to move, rights, en passant, checks, result.

    Mutated only by :func:`chessrules.core.executor.apply_move`.  Legality
    checks use :meth:`try_move`, which mutates the grid in place and
    restores it before returning; callers must hold the owning session's
    lock for the duration.
    """

    __slots__ = (
        "board",
        "turn",
        "move_count",
        "white_in_check",
        "black_in_check",
        "en_passant",
        "castling",
        "_result",
    )

    def __init__(
        self,
        board: Board | None = None,
        turn: Color = Color.WHITE,
        move_count: int = 0,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: EnPassantTarget | None = None,
        *,
        white_in_check: bool = False,
        black_in_check: bool = False,
        result: GameResult = GameResult.IN_PROGRESS,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.turn = turn
        self.move_count = move_count
        self.castling = castling
        self.en_passant = en_passant
        self.white_in_check = white_in_check
        self.black_in_check = black_in_check
        self._result = result

    @classmethod
    def initial(cls) -> BoardState:
        """Standard starting position, White to move."""
        return cls()

    # ── Check flags ──────────────────────────────────────────────────────

    def in_check(self, color: Color) -> bool:
        return self.white_in_check if color == Color.WHITE else self.black_in_check

    def set_in_check(self, color: Color, value: bool) -> None:
        if color == Color.WHITE:
            self.white_in_check = value
        else:
            self.black_in_check = value

    # ── Castling rights ──────────────────────────────────────────────────

    def has_right(self, right: CastlingRights) -> bool:
        return bool(self.castling & right)

    def revoke_castling(self, rights: CastlingRights) -> None:
        """Clear *rights*. Rights are never granted back."""
        self.castling &= ~rights

    # ── Terminal state ───────────────────────────────────────────────────

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def is_game_over(self) -> bool:
        return self._result != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Color | None:
        return self._result.winner

    def finish(self, result: GameResult) -> None:
        """Record the terminal *result*. It can be set exactly once."""
        if result == GameResult.IN_PROGRESS:
            raise ValueError("Cannot finish a game with IN_PROGRESS")
        if self.is_game_over:
            raise BoardInvariantError(f"Game already finished: {self._result.name}")
        self._result = result

    # ── Hypothetical moves ───────────────────────────────────────────────

    @contextmanager
    def try_move(self, from_sq: Square, to_sq: Square) -> Iterator[None]:
        """Temporarily relocate the piece on *from_sq* to *to_sq*.

        An en passant capture also lifts the passed pawn, which sits beside
        the origin rather than on *to_sq*.  Turn, rights, en passant target
        and ``has_moved`` are left untouched.  The grid is restored on exit,
        whatever happens inside the block.
        """
        board = self.board
        piece = board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")

        captured = board[to_sq]
        ep_sq: Square | None = None
        ep_captured = None
        if (
            piece.piece_type == PieceType.PAWN
            and captured is None
            and from_sq.col != to_sq.col
        ):
            ep_sq = Square(from_sq.row, to_sq.col)
            ep_captured = board[ep_sq]
            board[ep_sq] = None

        board[to_sq] = piece
        board[from_sq] = None
        try:
            yield
        finally:
            board[from_sq] = piece
            board[to_sq] = captured
            if ep_sq is not None:
                board[ep_sq] = ep_captured

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> BoardState:
        """Independent deep copy."""
        return BoardState(
            board=self.board.copy(),
            turn=self.turn,
            move_count=self.move_count,
            castling=self.castling,
            en_passant=self.en_passant,
            white_in_check=self.white_in_check,
            black_in_check=self.black_in_check,
            result=self._result,
        )

    def __repr__(self) -> str:
        return (
            f"BoardState(turn={self.turn}, move_count={self.move_count}, "
            f"castling={self.castling!r}, en_passant={self.en_passant}, "
            f"result={self._result.name})\n{self.board!r}"
        )
