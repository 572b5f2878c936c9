"""Single-file session persistence.

Each game variant keeps exactly one session at a well-known path. Saves go
through a sibling ``.tmp`` file that is flushed to disk and then renamed over
the target with ``os.replace``, so a reader only ever sees the previous
committed file or the new one.
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Generic, TypeVar

from ..errors import CorruptSaveFailure, PersistenceFailure
from ..game.session_state import Session

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

S = TypeVar("S", bound=Session)


class SessionStore(Generic[S]):
    """Loads and atomically saves one session file."""

    def __init__(self, path: Path | str, session_type: type[S]):
        """Initialize the store.

        Args:
            path: Location of the committed session file
            session_type: Session class to decode into
        """
        self.path = Path(path)
        self.session_type = session_type

    @property
    def temp_path(self) -> Path:
        """Scratch file written before the atomic rename."""
        return self.path.with_name(self.path.name + ".tmp")

    def exists(self) -> bool:
        """Check whether a committed session file is present."""
        return self.path.exists()

    def load(self) -> S:
        """Load the committed session.

        Returns:
            The stored session, or a fresh one if no file exists

        Raises:
            PersistenceFailure: If the file exists but cannot be read
            CorruptSaveFailure: If the file is not a valid session
        """
        if not self.path.exists():
            logger.info(f"No session at {self.path}, starting fresh")
            return self.session_type()

        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptSaveFailure(f"{self.path} is not UTF-8 text") from e
        except OSError as e:
            raise PersistenceFailure(f"Could not read {self.path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptSaveFailure(f"{self.path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise CorruptSaveFailure(f"{self.path} does not hold a session object")

        version = data.get("version", SCHEMA_VERSION)
        if not isinstance(version, int) or version > SCHEMA_VERSION:
            raise CorruptSaveFailure(f"Unsupported session version: {version!r}")

        kind = data.get("kind", self.session_type.KIND)
        if kind != self.session_type.KIND:
            raise CorruptSaveFailure(f"Expected a {self.session_type.KIND} session, found {kind!r}")

        session = self.session_type.from_dict(data)
        logger.info(f"Loaded {kind} session from {self.path} ({len(session.history)} turns)")
        return session

    def save(self, session: S) -> None:
        """Commit the full session to disk.

        ``session.last_saved_at`` is only advanced once the rename succeeds.

        Raises:
            PersistenceFailure: If writing or renaming fails; the previously
                committed file is left untouched
        """
        saved_at = max(datetime.now().astimezone(), session.last_saved_at)
        data = {
            "version": SCHEMA_VERSION,
            "kind": session.KIND,
            **session.to_dict(),
            "last_saved_at": saved_at.isoformat(),
        }

        temp_path = self.temp_path
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            self._discard_temp()
            logger.error(f"Failed to save session to {self.path}: {e}")
            raise PersistenceFailure(f"Could not save to {self.path}: {e}") from e

        session.last_saved_at = saved_at
        logger.info(f"Saved {session.KIND} session to {self.path}")

    def _discard_temp(self) -> None:
        try:
            self.temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove {self.temp_path}: {e}")
