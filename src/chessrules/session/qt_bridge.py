"""Qt bridge exposing a game session through signals and slots."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessrules.core.enums import Color
from chessrules.session.schemas import MoveRequest, SessionMessage
from chessrules.session.session import GameSession


class SessionWorker(QObject):
    """Thread-affine wrapper that turns session callbacks into Qt signals.

    Move a worker to the thread owning the transport; queued connections
    to :meth:`submit_move` then give the session its single total order.
    """

    snapshot_ready = pyqtSignal(object)
    check_announced = pyqtSignal(object)
    game_over = pyqtSignal(object)
    move_rejected = pyqtSignal(object, str)
    chat_received = pyqtSignal(object, str)

    def __init__(self, session: GameSession | None = None) -> None:
        super().__init__()
        self._session = session if session is not None else GameSession()
        events = self._session.events
        events.on_snapshot.append(self.snapshot_ready.emit)
        events.on_check.append(self.check_announced.emit)
        events.on_game_over.append(self.game_over.emit)
        events.on_rejected.append(self.move_rejected.emit)
        events.on_chat.append(self.chat_received.emit)

    @property
    def session(self) -> GameSession:
        return self._session

    @pyqtSlot(object, object)
    def submit_move(self, request_obj: object, color_obj: object = None) -> None:
        """Forward *request_obj* to the session; outcomes arrive as signals."""
        if not isinstance(request_obj, MoveRequest):
            self.move_rejected.emit(request_obj, "Session received invalid move request")
            return
        color = color_obj if isinstance(color_obj, Color) else None
        self._session.submit(request_obj, color)

    @pyqtSlot(object, str)
    def send_chat(self, author_obj: object, text: str) -> None:
        """Relay a chat line from *author_obj* (a :class:`Color` or None)."""
        author = author_obj if isinstance(author_obj, Color) else None
        self._session.handle_message(SessionMessage.create_chat(text, author), author)

    @pyqtSlot()
    def restart(self) -> None:
        self._session.restart()
