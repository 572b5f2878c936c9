"""Custom Textual widgets for the Storyloop UI."""

from .character_display import CharacterDisplayWidget
from .chat_log import ChatLogWidget

__all__ = ["CharacterDisplayWidget", "ChatLogWidget"]
