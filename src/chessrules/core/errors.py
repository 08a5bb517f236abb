"""Exception taxonomy of the rules engine."""

from __future__ import annotations


class IllegalMoveError(ValueError):
    """Raised when a proposed move is not legal in the current state."""


class BoardInvariantError(RuntimeError):
    """The board no longer satisfies an engine invariant (e.g. a missing king).

    Never expected in normal play; every legality computation assumes
    exactly one king per color, so this is treated as unrecoverable.
    """
