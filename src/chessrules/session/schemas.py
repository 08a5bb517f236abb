"""Pydantic schemas for board snapshots and session messages."""

from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, GameResult, PieceType
from chessrules.core.executor import refresh_check_flags
from chessrules.core.piece import Piece
from chessrules.core.state import BoardState, EnPassantTarget
from chessrules.core.types import Square, parse_square

ColorName = Literal["white", "black"]
PieceName = Literal["pawn", "knight", "bishop", "rook", "queen", "king"]
PromotionName = Literal["queen", "rook", "bishop", "knight"]
ResultName = Literal["in_progress", "white_wins", "black_wins", "draw"]

_PROMOTION_LETTERS = {"q": "queen", "r": "rook", "b": "bishop", "n": "knight"}


def color_name(color: Color) -> ColorName:
    return "white" if color == Color.WHITE else "black"


def parse_color(name: str) -> Color:
    return Color[name.upper()]


class PieceSnapshot(BaseModel):
    """A piece on an occupied square."""

    type: PieceName = Field(..., description="Piece type.")
    color: ColorName = Field(..., description="Piece color.")
    has_moved: bool = Field(False, description="Whether the piece has ever moved.")


class CastlingSnapshot(BaseModel):
    """The four castling rights."""

    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True


class EnPassantSnapshot(BaseModel):
    """The pawn that has just advanced two squares."""

    column: int = Field(..., ge=0, le=7, description="Column (0 = file a).")
    color: ColorName = Field(..., description="Color of the pawn that advanced.")


class BoardSnapshot(BaseModel):
    """Read-only, serializable view of a board state."""

    model_config = ConfigDict(frozen=True)

    board: List[List[Optional[PieceSnapshot]]] = Field(
        ...,
        description="8x8 grid, row 0 = rank 8, column 0 = file a.",
    )
    turn: ColorName = Field(..., description="Side to move.")
    move_count: int = Field(..., ge=0, description="Moves applied so far.")
    white_in_check: bool = False
    black_in_check: bool = False
    result: ResultName = "in_progress"
    winner: Optional[ColorName] = Field(None, description="Winner once the game is over.")
    castling: CastlingSnapshot = Field(default_factory=CastlingSnapshot)
    en_passant: Optional[EnPassantSnapshot] = None

    @field_validator("board")
    @classmethod
    def _check_grid(
        cls, grid: List[List[Optional[PieceSnapshot]]]
    ) -> List[List[Optional[PieceSnapshot]]]:
        if len(grid) != 8 or any(len(row) != 8 for row in grid):
            raise ValueError("board must be an 8x8 grid")
        return grid


class MoveRequest(BaseModel):
    """A request to move the piece on ``from`` to ``to``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_: str = Field(..., alias="from", description="From square, e.g. 'e2'.")
    to: str = Field(..., description="To square, e.g. 'e4'.")
    promotion: Optional[PromotionName] = Field(
        None,
        description="Promotion piece for a pawn reaching the last rank.",
        examples=["queen", "q"],
    )

    @field_validator("from_", "to")
    @classmethod
    def _check_square(cls, value: str) -> str:
        parse_square(value)
        return value

    @field_validator("promotion", mode="before")
    @classmethod
    def _expand_letter(cls, value: object) -> object:
        if isinstance(value, str):
            return _PROMOTION_LETTERS.get(value.lower(), value.lower())
        return value

    @property
    def from_square(self) -> Square:
        return parse_square(self.from_)

    @property
    def to_square(self) -> Square:
        return parse_square(self.to)

    @property
    def promotion_type(self) -> PieceType | None:
        return PieceType[self.promotion.upper()] if self.promotion else None

    def __str__(self) -> str:
        return f"{self.from_}{self.to}" + (f"={self.promotion}" if self.promotion else "")


class MessageType(str, Enum):
    """Kinds of message exchanged between a session and its participants."""

    MOVE = "move"
    BOARD_UPDATE = "board_update"
    PLAYER_ASSIGNED = "player_assigned"
    GAME_OVER = "game_over"
    CHECK_NOTIFICATION = "check_notification"
    CHAT = "chat"


class SessionMessage(BaseModel):
    """Envelope for every session message; fields beyond ``type`` are per kind."""

    type: MessageType
    move: Optional[MoveRequest] = None
    snapshot: Optional[BoardSnapshot] = None
    color: Optional[ColorName] = Field(
        None, description="Assigned seat, color in check, or chat author."
    )
    result: Optional[ResultName] = None
    winner: Optional[ColorName] = None
    text: Optional[str] = None

    @classmethod
    def create_move(cls, request: MoveRequest) -> SessionMessage:
        return cls(type=MessageType.MOVE, move=request)

    @classmethod
    def create_board_update(cls, snapshot: BoardSnapshot) -> SessionMessage:
        return cls(type=MessageType.BOARD_UPDATE, snapshot=snapshot)

    @classmethod
    def create_player_assignment(cls, color: Color) -> SessionMessage:
        return cls(type=MessageType.PLAYER_ASSIGNED, color=color_name(color))

    @classmethod
    def create_game_over(cls, result: GameResult) -> SessionMessage:
        winner = result.winner
        return cls(
            type=MessageType.GAME_OVER,
            result=result.name.lower(),
            winner=color_name(winner) if winner is not None else None,
        )

    @classmethod
    def create_check_notification(cls, color_in_check: Color) -> SessionMessage:
        return cls(type=MessageType.CHECK_NOTIFICATION, color=color_name(color_in_check))

    @classmethod
    def create_chat(cls, text: str, author: Color | None = None) -> SessionMessage:
        return cls(
            type=MessageType.CHAT,
            text=text,
            color=color_name(author) if author is not None else None,
        )


# ── Conversion ───────────────────────────────────────────────────────────────


def snapshot_state(state: BoardState) -> BoardSnapshot:
    """Capture *state* as an immutable, serializable snapshot."""
    grid: list[list[PieceSnapshot | None]] = [[None] * 8 for _ in range(8)]
    for sq, piece in state.board.occupied():
        grid[sq.row][sq.col] = PieceSnapshot(
            type=str(piece.piece_type),
            color=color_name(piece.color),
            has_moved=piece.has_moved,
        )

    ep = state.en_passant
    winner = state.winner
    return BoardSnapshot(
        board=grid,
        turn=color_name(state.turn),
        move_count=state.move_count,
        white_in_check=state.white_in_check,
        black_in_check=state.black_in_check,
        result=state.result.name.lower(),
        winner=color_name(winner) if winner is not None else None,
        castling=CastlingSnapshot(
            white_kingside=state.has_right(CastlingRights.WHITE_KINGSIDE),
            white_queenside=state.has_right(CastlingRights.WHITE_QUEENSIDE),
            black_kingside=state.has_right(CastlingRights.BLACK_KINGSIDE),
            black_queenside=state.has_right(CastlingRights.BLACK_QUEENSIDE),
        ),
        en_passant=(
            EnPassantSnapshot(column=ep.column, color=color_name(ep.color))
            if ep is not None
            else None
        ),
    )


def restore_state(snapshot: BoardSnapshot) -> BoardState:
    """Rebuild a live :class:`BoardState` from *snapshot*.

    Check flags are recomputed from the grid rather than trusted.

    Raises:
        BoardInvariantError: if either color does not have exactly one king.
    """
    board = Board()
    for row, cells in enumerate(snapshot.board):
        for col, cell in enumerate(cells):
            if cell is not None:
                board[Square(row, col)] = Piece(
                    parse_color(cell.color),
                    PieceType[cell.type.upper()],
                    cell.has_moved,
                )

    castling = CastlingRights.NONE
    for right, enabled in (
        (CastlingRights.WHITE_KINGSIDE, snapshot.castling.white_kingside),
        (CastlingRights.WHITE_QUEENSIDE, snapshot.castling.white_queenside),
        (CastlingRights.BLACK_KINGSIDE, snapshot.castling.black_kingside),
        (CastlingRights.BLACK_QUEENSIDE, snapshot.castling.black_queenside),
    ):
        if enabled:
            castling |= right

    ep = snapshot.en_passant
    state = BoardState(
        board,
        parse_color(snapshot.turn),
        snapshot.move_count,
        castling,
        EnPassantTarget(ep.column, parse_color(ep.color)) if ep is not None else None,
        result=GameResult[snapshot.result.upper()],
    )
    refresh_check_flags(state)
    return state
