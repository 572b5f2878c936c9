"""Chat orchestration - one exchange at a time, no side effects on history."""

import logging
from typing import Sequence

from ..errors import ChatFailure
from ..game.session_state import Turn
from .chat import Chat, LogProgress, Progress

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_MESSAGE = "Waiting for a response..."


class ChatOrchestrator:
    """Runs exchanges against a Chat and reports pending work.

    The orchestrator never appends to history or saves anything; the caller
    owns both so that a turn is recorded whole or not at all.
    """

    def __init__(self, chat: Chat, progress: Progress | None = None):
        """Initialize the orchestrator.

        Args:
            chat: The text-completion capability
            progress: Feedback sink for pending exchanges
        """
        self.chat = chat
        self.progress = progress or LogProgress()

    async def exchange(
        self,
        prompt: str,
        history: Sequence[Turn],
        progress_message: str = DEFAULT_PROGRESS_MESSAGE,
    ) -> str:
        """Send one prompt after the given history.

        Args:
            prompt: The outgoing user prompt
            history: Conversation so far, oldest first
            progress_message: Text shown while the exchange is pending

        Returns:
            The stripped response text

        Raises:
            ChatFailure: On transport/service errors or an empty response
        """
        self._notify(self.progress.announce, progress_message)
        try:
            response = await self.chat.exchange(prompt, list(history))
        except ChatFailure:
            raise
        except Exception as e:
            logger.error(f"Chat exchange failed: {e}")
            raise ChatFailure(str(e) or type(e).__name__) from e
        finally:
            self._notify(self.progress.clear)

        if not isinstance(response, str) or not response.strip():
            logger.error(f"Chat returned no usable text: {response!r:.80}")
            raise ChatFailure("The service returned an empty response")

        logger.debug(f"Exchange complete ({len(history)} prior turns, {len(response)} chars)")
        return response.strip()

    @staticmethod
    def _notify(callback, *args) -> None:
        try:
            callback(*args)
        except Exception as e:
            logger.warning(f"Progress reporter failed: {e}")
