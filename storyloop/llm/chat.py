"""Chat and progress capabilities consumed by the session engine.

The engine only knows these two protocols. Transport, credentials and model
selection stay inside the concrete implementations.
"""

import logging
from typing import Protocol, Sequence

from ..game.session_state import Turn
from .client import GenerationConfig, LLMClient, Message

logger = logging.getLogger(__name__)


class Chat(Protocol):
    """Stateful text-completion service."""

    async def exchange(self, prompt: str, history: Sequence[Turn]) -> str:
        """Send a prompt after the given history and return the reply text."""
        ...


class Progress(Protocol):
    """Fire-and-forget feedback while an exchange is pending."""

    def announce(self, message: str) -> None:
        ...

    def clear(self) -> None:
        ...


class LogProgress:
    """Progress reporter that only writes to the log."""

    def announce(self, message: str) -> None:
        logger.info(message)

    def clear(self) -> None:
        pass


class ChatAgent:
    """A Chat backed by an LLM client and a fixed system preamble."""

    def __init__(
        self,
        client: LLMClient,
        preamble: str,
        config: GenerationConfig | None = None,
    ):
        """Initialize the agent.

        Args:
            client: Provider client exposing ``achat``
            preamble: System prompt sent ahead of every conversation
            config: Generation settings
        """
        self.client = client
        self.preamble = preamble
        self.config = config or GenerationConfig()

    def build_messages(self, prompt: str, history: Sequence[Turn]) -> list[Message]:
        """Assemble the provider message list for one exchange."""
        messages = [Message(role="system", content=self.preamble)]
        messages.extend(Message(role=turn.role, content=turn.content) for turn in history)
        messages.append(Message(role="user", content=prompt))
        return messages

    async def exchange(self, prompt: str, history: Sequence[Turn]) -> str:
        result = await self.client.achat(self.build_messages(prompt, history), config=self.config)
        return result.content
