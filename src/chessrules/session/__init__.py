"""Session layer: one serialized game, snapshots and wire messages.

Quick start::

    from chessrules.session import GameSession, MoveRequest

    session = GameSession()
    white = session.join()
    session.events.on_snapshot.append(print)
    session.submit(MoveRequest(**{"from": "e2", "to": "e4"}), white)

The Qt bridge lives in :mod:`chessrules.session.qt_bridge` and is imported
on its own, so headless hosts never pay for a Qt import.
"""

from chessrules.session.schemas import (
    BoardSnapshot,
    MessageType,
    MoveRequest,
    PieceSnapshot,
    SessionMessage,
    restore_state,
    snapshot_state,
)
from chessrules.session.session import GameSession, SessionEvents, SessionFullError
from chessrules.session.settings import SessionSettings

__all__ = [
    # Schemas
    "BoardSnapshot",
    "MessageType",
    "MoveRequest",
    "PieceSnapshot",
    "SessionMessage",
    "restore_state",
    "snapshot_state",
    # Session
    "GameSession",
    "SessionEvents",
    "SessionFullError",
    "SessionSettings",
]
