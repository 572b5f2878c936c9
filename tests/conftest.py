"""Shared fixtures for the Storyloop test suite."""

import pytest

from storyloop.characters.creator import CharacterCreator
from storyloop.game.session_state import AdventureSession, QuestionsSession
from storyloop.llm.orchestrator import ChatOrchestrator
from storyloop.storage.session_store import SessionStore


class FakeChat:
    """Chat double that replays canned responses and records every call."""

    def __init__(self, responses=None, default="The story continues."):
        self.responses = list(responses or [])
        self.default = default
        self.calls: list[tuple[str, list]] = []
        self.error: Exception | None = None

    async def exchange(self, prompt, history):
        self.calls.append((prompt, list(history)))
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.pop(0)
        return self.default


class RecordingProgress:
    """Progress double that records announce/clear events."""

    def __init__(self):
        self.events: list[tuple[str, str | None]] = []

    def announce(self, message):
        self.events.append(("announce", message))

    def clear(self):
        self.events.append(("clear", None))


@pytest.fixture
def fake_chat():
    return FakeChat()


@pytest.fixture
def progress():
    return RecordingProgress()


@pytest.fixture
def orchestrator(fake_chat, progress):
    return ChatOrchestrator(fake_chat, progress)


@pytest.fixture
def rogue():
    """Level-1 halfling rogue trained in Stealth, DEX 16."""
    return CharacterCreator().create(
        name="Pip",
        race="Halfling",
        class_name="Rogue",
        background="Urchin",
        scores={
            "strength": 8,
            "dexterity": 16,
            "constitution": 14,
            "intelligence": 12,
            "wisdom": 10,
            "charisma": 13,
        },
        skills=["Stealth", "Perception", "Acrobatics", "Deception"],
    )


@pytest.fixture
def adventure_store(tmp_path):
    return SessionStore(tmp_path / "saves" / "dnd_adventure_save.json", AdventureSession)


@pytest.fixture
def questions_store(tmp_path):
    return SessionStore(tmp_path / "saves" / "twenty_questions_save.json", QuestionsSession)
