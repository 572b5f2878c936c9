"""Storage module for atomic session persistence."""

from .session_store import SCHEMA_VERSION, SessionStore

__all__ = ["SCHEMA_VERSION", "SessionStore"]
