"""Tests for the chat orchestrator."""

import asyncio

import pytest

from storyloop.errors import ChatFailure
from storyloop.game.session_state import ASSISTANT, USER, Turn
from storyloop.llm.chat import LogProgress
from storyloop.llm.orchestrator import DEFAULT_PROGRESS_MESSAGE, ChatOrchestrator


class BrokenProgress:
    """Progress reporter that always fails."""

    def announce(self, message):
        raise RuntimeError("screen gone")

    def clear(self):
        raise RuntimeError("screen gone")


class TestExchange:
    """Test ChatOrchestrator.exchange."""

    def test_returns_stripped_text(self, orchestrator, fake_chat):
        """Responses are trimmed."""
        fake_chat.responses = ["  The door creaks open.\n"]
        result = asyncio.run(orchestrator.exchange("I open the door.", []))
        assert result == "The door creaks open."

    def test_sends_prompt_and_history(self, orchestrator, fake_chat):
        """The chat sees the prompt and the prior turns."""
        history = [Turn(USER, "Hello"), Turn(ASSISTANT, "Greetings")]
        asyncio.run(orchestrator.exchange("Next", history))
        assert fake_chat.calls == [("Next", history)]

    def test_history_untouched(self, orchestrator):
        """The orchestrator never appends to the caller's history."""
        history = [Turn(USER, "Hello"), Turn(ASSISTANT, "Greetings")]
        asyncio.run(orchestrator.exchange("Next", history))
        assert len(history) == 2

    def test_progress_announced_and_cleared(self, orchestrator, progress):
        """Progress brackets the exchange."""
        asyncio.run(orchestrator.exchange("Hi", [], "Thinking..."))
        assert progress.events == [("announce", "Thinking..."), ("clear", None)]

    def test_default_progress_message(self, orchestrator, progress):
        """A generic message is used when none is given."""
        asyncio.run(orchestrator.exchange("Hi", []))
        assert progress.events[0] == ("announce", DEFAULT_PROGRESS_MESSAGE)

    def test_default_progress_is_logging(self, fake_chat):
        """Without a reporter, progress goes to the log."""
        assert isinstance(ChatOrchestrator(fake_chat).progress, LogProgress)


class TestFailures:
    """Test failure handling."""

    def test_transport_error_wrapped(self, orchestrator, fake_chat, progress):
        """Arbitrary errors become ChatFailure and progress is still cleared."""
        error = ConnectionError("connection refused")
        fake_chat.error = error
        with pytest.raises(ChatFailure) as excinfo:
            asyncio.run(orchestrator.exchange("Hi", []))
        assert excinfo.value.cause == "connection refused"
        assert excinfo.value.__cause__ is error
        assert progress.events[-1] == ("clear", None)

    def test_blank_error_message_uses_type(self, orchestrator, fake_chat):
        """Errors without text are named by type."""
        fake_chat.error = TimeoutError()
        with pytest.raises(ChatFailure) as excinfo:
            asyncio.run(orchestrator.exchange("Hi", []))
        assert excinfo.value.cause == "TimeoutError"

    def test_chat_failure_passes_through(self, orchestrator, fake_chat):
        """ChatFailure from the chat is re-raised as is."""
        error = ChatFailure("model not found")
        fake_chat.error = error
        with pytest.raises(ChatFailure) as excinfo:
            asyncio.run(orchestrator.exchange("Hi", []))
        assert excinfo.value is error

    @pytest.mark.parametrize("response", ["", "   \n\t", None])
    def test_empty_response(self, orchestrator, fake_chat, response):
        """Blank or missing text is a failure."""
        fake_chat.responses = [response]
        with pytest.raises(ChatFailure):
            asyncio.run(orchestrator.exchange("Hi", []))

    def test_broken_progress_does_not_abort(self, fake_chat):
        """A failing progress reporter is logged and ignored."""
        fake_chat.responses = ["Still here."]
        orchestrator = ChatOrchestrator(fake_chat, BrokenProgress())
        assert asyncio.run(orchestrator.exchange("Hi", [])) == "Still here."
