"""Deterministic chess rules engine with a thin, serialized game session."""

__version__ = "0.1.0"
