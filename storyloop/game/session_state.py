"""Session state - the persisted root of a game.

A session owns its conversation history and its game-specific payload.
History is append-only and only ever grows by whole exchanges, so it always
reads user, assistant, user, assistant, ... from index 0.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from ..characters.sheet import CharacterSheet
from ..errors import CorruptSaveFailure

USER = "user"
ASSISTANT = "assistant"

DEFAULT_QUESTION_LIMIT = 20


def _now() -> datetime:
    return datetime.now().astimezone()


def _parse_time(value: str) -> datetime:
    # Naive timestamps are read as local time
    return datetime.fromisoformat(value).astimezone()


@dataclass(frozen=True)
class Turn:
    """One role-tagged message in the conversation."""

    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Turn":
        if not isinstance(data, dict):
            raise CorruptSaveFailure("turn must be an object")
        role = data.get("role")
        content = data.get("content")
        if role not in (USER, ASSISTANT) or not isinstance(content, str):
            raise CorruptSaveFailure(f"invalid turn: {data!r:.80}")
        return cls(role, content)


@dataclass
class Session:
    """State shared by every game variant."""

    KIND: ClassVar[str] = "session"

    history: list[Turn] = field(default_factory=list)
    started_at: datetime = field(default_factory=_now)
    last_saved_at: datetime = field(default_factory=_now)

    def record_exchange(self, prompt: str, response: str) -> None:
        """Append a completed exchange as a user/assistant pair."""
        self.history.append(Turn(USER, prompt))
        self.history.append(Turn(ASSISTANT, response))

    def last_response(self) -> str | None:
        """Text of the most recent assistant turn, if any."""
        if self.history and self.history[-1].role == ASSISTANT:
            return self.history[-1].content
        return None

    @property
    def is_resumable(self) -> bool:
        """Whether the session holds a game worth continuing."""
        return bool(self.history)

    def _base_dict(self) -> dict[str, Any]:
        return {
            "history": [turn.to_dict() for turn in self.history],
            "started_at": self.started_at.isoformat(),
            "last_saved_at": self.last_saved_at.isoformat(),
        }

    @staticmethod
    def _base_fields(data: dict[str, Any]) -> dict[str, Any]:
        history = data["history"]
        if not isinstance(history, list):
            raise CorruptSaveFailure("history must be a list")
        turns = [Turn.from_dict(item) for item in history]
        for index, turn in enumerate(turns):
            expected = USER if index % 2 == 0 else ASSISTANT
            if turn.role != expected:
                raise CorruptSaveFailure(f"history out of order at turn {index}")
        if len(turns) % 2:
            raise CorruptSaveFailure("history ends with an unanswered prompt")

        return {
            "history": turns,
            "started_at": _parse_time(data["started_at"]),
            "last_saved_at": _parse_time(data["last_saved_at"]),
        }

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for storage."""
        return self._base_dict()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Session":
        """Deserialize from dict."""
        try:
            return cls(**cls._base_fields(data))
        except (KeyError, TypeError, ValueError) as e:
            raise CorruptSaveFailure(f"invalid session: {e}") from e


@dataclass
class AdventureSession(Session):
    """A D&D adventure: one character, one campaign."""

    KIND: ClassVar[str] = "adventure"

    character: CharacterSheet = field(default_factory=CharacterSheet)
    campaign: str = ""
    current_location: str = ""
    current_quest: str = ""
    turns_taken: int = 0

    @property
    def is_resumable(self) -> bool:
        return bool(self.campaign)

    def to_dict(self) -> dict[str, Any]:
        return {
            "character": self.character.to_dict(),
            "campaign": self.campaign,
            "current_location": self.current_location,
            "current_quest": self.current_quest,
            "turns_taken": self.turns_taken,
            **self._base_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AdventureSession":
        try:
            return cls(
                character=CharacterSheet.from_dict(data["character"]),
                campaign=str(data["campaign"]),
                current_location=str(data["current_location"]),
                current_quest=str(data["current_quest"]),
                turns_taken=int(data.get("turns_taken", 0)),
                **cls._base_fields(data),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise CorruptSaveFailure(f"invalid adventure session: {e}") from e


@dataclass
class QuestionsSession(Session):
    """A twenty-questions game around one secret subject."""

    KIND: ClassVar[str] = "questions"

    category: str = ""
    subject: str = ""
    question_limit: int = DEFAULT_QUESTION_LIMIT
    questions_asked: int = 0
    has_won: bool = False
    current_guess: str | None = None
    revealed: bool = False

    @property
    def remaining(self) -> int:
        """Questions left before a guess is forced."""
        return max(0, self.question_limit - self.questions_asked)

    @property
    def is_over(self) -> bool:
        return self.has_won or self.revealed

    @property
    def is_resumable(self) -> bool:
        return bool(self.subject) and not self.is_over

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "subject": self.subject,
            "question_limit": self.question_limit,
            "questions_asked": self.questions_asked,
            "has_won": self.has_won,
            "current_guess": self.current_guess,
            "revealed": self.revealed,
            **self._base_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuestionsSession":
        try:
            guess = data["current_guess"]
            if guess is not None and not isinstance(guess, str):
                raise TypeError("current_guess must be a string or null")
            return cls(
                category=str(data["category"]),
                subject=str(data["subject"]),
                question_limit=int(data["question_limit"]),
                questions_asked=int(data["questions_asked"]),
                has_won=bool(data["has_won"]),
                current_guess=guess,
                revealed=bool(data["revealed"]),
                **cls._base_fields(data),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise CorruptSaveFailure(f"invalid questions session: {e}") from e
