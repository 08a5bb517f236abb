"""GameSession owns one board and serializes every move submitted to it.

Emits events via simple callbacks so a transport / UI / tests can subscribe.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from chessrules.core.enums import Color, GameResult
from chessrules.core.errors import IllegalMoveError
from chessrules.core.executor import apply_move
from chessrules.core.notation import position_from_fen
from chessrules.core.state import BoardState
from chessrules.core.validator import is_legal
from chessrules.session.schemas import (
    BoardSnapshot,
    MessageType,
    MoveRequest,
    SessionMessage,
    parse_color,
    snapshot_state,
)
from chessrules.session.settings import SessionSettings

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

SnapshotCallback = Callable[[BoardSnapshot], None]
CheckCallback = Callable[[Color], None]  # color in check
GameOverCallback = Callable[[GameResult], None]
RejectedCallback = Callable[[MoveRequest, str], None]  # request, reason
ChatCallback = Callable[["Color | None", str], None]  # author, text


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_snapshot: list[SnapshotCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_rejected: list[RejectedCallback] = field(default_factory=list)
    on_chat: list[ChatCallback] = field(default_factory=list)


class SessionFullError(RuntimeError):
    """Raised by :meth:`GameSession.join` when every seat is taken."""


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """One game between up to two participants.

    Thread-safety: every read and every validate-then-apply runs under a
    single re-entrant lock, so no caller can observe a hypothetical move
    made during validation.  Callbacks run while the lock is held, in the
    order the moves were applied; a callback may submit again from the
    same thread.
    """

    __slots__ = ("_settings", "_state", "_lock", "_seats", "events")

    def __init__(
        self,
        settings: SessionSettings | None = None,
        fen: str | None = None,
    ) -> None:
        self._settings = settings if settings is not None else SessionSettings()
        self._lock = threading.RLock()
        self._seats: list[Color] = []
        self._state = self._new_state(fen)
        self.events = SessionEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def state(self) -> BoardState:
        """The live state. Treat as read-only; mutate only via :meth:`submit`."""
        return self._state

    @property
    def seats(self) -> tuple[Color, ...]:
        return tuple(self._seats)

    def is_game_over(self) -> bool:
        with self._lock:
            return self._state.is_game_over

    def get_winner(self) -> Color | None:
        with self._lock:
            return self._state.winner

    def snapshot(self) -> BoardSnapshot:
        with self._lock:
            return snapshot_state(self._state)

    # ── Participants ─────────────────────────────────────────────────────

    def join(self) -> Color:
        """Assign the next free seat: White first, then Black."""
        with self._lock:
            if len(self._seats) >= self._settings.max_players:
                _LOGGER.warning("Session full, join rejected")
                raise SessionFullError("Game is full")
            color = Color(len(self._seats))
            self._seats.append(color)
            _LOGGER.info("Player assigned: %s", color)
            return color

    def restart(self, fen: str | None = None) -> None:
        """Start over from the initial position (or *fen*); seats are kept."""
        with self._lock:
            self._state = self._new_state(fen)
            _LOGGER.info("Session restarted")
            self._emit_snapshot(snapshot_state(self._state))

    # ── Moves ────────────────────────────────────────────────────────────

    def is_legal(self, request: MoveRequest) -> bool:
        with self._lock:
            return is_legal(
                self._state,
                request.from_square,
                request.to_square,
                request.promotion_type,
            )

    def submit(self, request: MoveRequest, color: Color | None = None) -> bool:
        """Validate and apply *request*. Returns True if it was applied.

        When *color* is given, the request is only accepted on that
        color's turn.
        """
        return self._submit(request, color) is not None

    def handle_message(
        self, message: SessionMessage, sender: Color | None = None
    ) -> list[SessionMessage]:
        """Process an incoming message; return the messages to broadcast."""
        if message.type == MessageType.MOVE and message.move is not None:
            outgoing = self._submit(message.move, sender)
            return outgoing if outgoing is not None else []
        if message.type == MessageType.CHAT and message.text is not None:
            author = sender
            if author is None and message.color is not None:
                author = parse_color(message.color)
            with self._lock:
                self._emit_chat(author, message.text)
            return [SessionMessage.create_chat(message.text, author)]
        _LOGGER.warning("Ignoring unsupported message: %s", message.type.value)
        return []

    # ── Internal helpers ─────────────────────────────────────────────────

    def _new_state(self, fen: str | None) -> BoardState:
        if fen is None:
            return BoardState.initial()
        return position_from_fen(fen, stalemate_is_draw=self._settings.stalemate_is_draw)

    def _submit(
        self, request: MoveRequest, color: Color | None
    ) -> list[SessionMessage] | None:
        with self._lock:
            state = self._state
            if color is not None and color != state.turn:
                self._reject(request, f"It is {state.turn}'s turn")
                return None

            was_in_check = {c: state.in_check(c) for c in Color}
            try:
                apply_move(
                    state,
                    request.from_square,
                    request.to_square,
                    request.promotion_type,
                    default_promotion=self._settings.default_promotion,
                    stalemate_is_draw=self._settings.stalemate_is_draw,
                )
            except IllegalMoveError as exc:
                self._reject(request, str(exc))
                return None

            _LOGGER.info("Move %d accepted: %s", state.move_count, request)
            snapshot = snapshot_state(state)
            outgoing = [SessionMessage.create_board_update(snapshot)]
            self._emit_snapshot(snapshot)

            for c in Color:
                if state.in_check(c) and not was_in_check[c]:
                    _LOGGER.info("%s king is in check", c)
                    outgoing.append(SessionMessage.create_check_notification(c))
                    self._emit_check(c)

            if state.is_game_over:
                _LOGGER.info("Game over: %s", state.result.name)
                outgoing.append(SessionMessage.create_game_over(state.result))
                self._emit_game_over(state.result)
            return outgoing

    def _reject(self, request: MoveRequest, reason: str) -> None:
        _LOGGER.info("Move rejected: %s (%s)", request, reason)
        for cb in self.events.on_rejected:
            cb(request, reason)

    def _emit_snapshot(self, snapshot: BoardSnapshot) -> None:
        for cb in self.events.on_snapshot:
            cb(snapshot)

    def _emit_check(self, color: Color) -> None:
        for cb in self.events.on_check:
            cb(color)

    def _emit_game_over(self, result: GameResult) -> None:
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_chat(self, author: Color | None, text: str) -> None:
        for cb in self.events.on_chat:
            cb(author, text)
