"""Storyloop - persisted, turn-based AI game sessions."""

__version__ = "0.1.0"
