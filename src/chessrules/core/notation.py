"""FEN position notation: loading and describing arbitrary positions."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceType
from chessrules.core.executor import detect_game_end, refresh_check_flags
from chessrules.core.geometry import pawn_start_row
from chessrules.core.piece import Piece
from chessrules.core.state import BoardState, EnPassantTarget
from chessrules.core.types import Square, parse_square, square_name
from chessrules.core.validator import KING_HOME_COL, castling_rook_squares

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def _derive_has_moved(board: Board, castling: CastlingRights) -> None:
    """FEN has no per-piece history, so infer ``has_moved`` from placement."""
    for sq, piece in board.occupied():
        color = piece.color
        if piece.piece_type == PieceType.PAWN:
            piece.has_moved = sq.row != pawn_start_row(color)
        elif piece.piece_type == PieceType.KING:
            home = Square(color.back_row, KING_HOME_COL)
            piece.has_moved = not (
                sq == home and castling & CastlingRights.both(color)
            )
        elif piece.piece_type == PieceType.ROOK:
            piece.has_moved = True
            for kingside in (True, False):
                rook_sq, _ = castling_rook_squares(color.back_row, kingside)
                if sq == rook_sq and castling & CastlingRights.for_side(color, kingside):
                    piece.has_moved = False


def position_from_fen(fen: str, *, stalemate_is_draw: bool = True) -> BoardState:
    """Parse a FEN string into a :class:`BoardState`.

    Check flags are computed and a finished position is marked as such.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement, rank 8 first (= row 0)
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board[Square(row, col)] = Piece.from_char(ch)
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        kings = board.pieces(color, PieceType.KING)
        if len(kings) != 1:
            raise ValueError(f"Invalid FEN: {color} must have exactly one king: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant: FEN names the skipped square, we track the pushed pawn
    ep: EnPassantTarget | None = None
    if ep_part != "-":
        ep_sq = parse_square(ep_part)
        pushed = side.opposite
        if ep_sq.row != pawn_start_row(pushed) + pushed.forward:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        ep = EnPassantTarget(ep_sq.col, pushed)

    # 5–6. Clocks (optional); only the move number is kept
    if len(parts) > 5:
        fullmove = int(parts[5])
        if fullmove < 1:
            raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")
    else:
        fullmove = 1
    move_count = 2 * (fullmove - 1) + (1 if side == Color.BLACK else 0)

    _derive_has_moved(board, castling)
    state = BoardState(board, side, move_count, castling, ep)
    refresh_check_flags(state)
    if state.in_check(side.opposite):
        raise ValueError(f"Invalid FEN: side not to move is in check: {fen!r}")
    detect_game_end(state, stalemate_is_draw=stalemate_is_draw)
    return state


def position_to_fen(state: BoardState) -> str:
    """Serialise a :class:`BoardState` to FEN (halfmove clock is always 0)."""
    # 1. Board
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = state.board[Square(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if state.turn == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if state.castling & right
    ) or "-"

    # 4. En passant
    ep_str = "-"
    if state.en_passant is not None:
        pushed = state.en_passant.color
        ep_str = square_name(
            Square(pawn_start_row(pushed) + pushed.forward, state.en_passant.column)
        )

    fullmove = state.move_count // 2 + 1
    return f"{board_str} {side_str} {castling_str} {ep_str} 0 {fullmove}"
