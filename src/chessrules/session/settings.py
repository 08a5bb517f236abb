"""Session settings."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import PROMOTION_TYPES, PieceType


@dataclass
class SessionSettings:
    """All configurable knobs of a :class:`~chessrules.session.GameSession`."""

    # Rules
    stalemate_is_draw: bool = True
    default_promotion: PieceType = PieceType.QUEEN

    # Seats
    max_players: int = 2

    def __post_init__(self) -> None:
        if self.default_promotion not in PROMOTION_TYPES:
            raise ValueError(f"Invalid default promotion: {self.default_promotion!r}")
        if not 1 <= self.max_players <= 2:
            raise ValueError(f"max_players must be 1 or 2, got {self.max_players}")
