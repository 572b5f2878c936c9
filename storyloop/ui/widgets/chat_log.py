"""Transcript widget: a scrolling log above a single input line."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from rich.markup import escape
from textual.app import ComposeResult
from textual.message import Message
from textual.widgets import Input, RichLog, Static


class MessageType(Enum):
    """Who or what produced a transcript entry."""

    PLAYER = "player"
    NARRATOR = "narrator"
    SYSTEM = "system"
    DICE = "dice"
    ERROR = "error"


# Rich style applied to the whole entry, or to the label for speaking entries
STYLES = {
    MessageType.PLAYER: "bold cyan",
    MessageType.NARRATOR: "bold magenta",
    MessageType.SYSTEM: "dim italic",
    MessageType.DICE: "bold yellow",
    MessageType.ERROR: "bold red",
}


@dataclass(frozen=True)
class ChatMessage:
    """One transcript entry."""

    content: str
    message_type: MessageType
    speaker: str = "DM"
    timestamp: datetime | None = None

    @property
    def label(self) -> str | None:
        if self.message_type == MessageType.PLAYER:
            return ">"
        if self.message_type == MessageType.NARRATOR:
            return f"{escape(self.speaker)}:"
        return None

    @property
    def formatted(self) -> str:
        """Rich markup for the log. Content is escaped, model text can hold brackets."""
        style = STYLES[self.message_type]
        body = escape(self.content)
        if self.label is not None:
            text = f"[{style}]{self.label}[/] {body}"
        else:
            text = f"[{style}]{body}[/]"
        if self.timestamp is not None:
            text = f"[dim]{self.timestamp:%H:%M}[/dim] {text}"
        return text


class ChatLogWidget(Static):
    """Session transcript with the player's input line underneath."""

    DEFAULT_CSS = """
    ChatLogWidget {
        height: 1fr;
        border: solid $secondary;
    }

    ChatLogWidget #chat-log {
        height: 1fr;
        border: none;
        padding: 0 1;
    }

    ChatLogWidget #chat-input {
        width: 100%;
        margin: 0 1;
    }
    """

    class PlayerMessage(Message):
        """Posted when the player submits a non-empty line."""

        def __init__(self, content: str) -> None:
            self.content = content
            super().__init__()

    def __init__(self, speaker: str = "DM", placeholder: str = "What do you do?", **kwargs):
        """Initialize the chat log.

        Args:
            speaker: Label shown before narrator entries
            placeholder: Initial hint in the input line
        """
        super().__init__(**kwargs)
        self.speaker = speaker
        self.placeholder = placeholder
        self.messages: list[ChatMessage] = []

    def compose(self) -> ComposeResult:
        yield RichLog(id="chat-log", markup=True, wrap=True)
        yield Input(placeholder=self.placeholder, id="chat-input")

    @property
    def input(self) -> Input:
        return self.query_one("#chat-input", Input)

    def set_placeholder(self, text: str) -> None:
        self.input.placeholder = text

    def take_input(self) -> str:
        """Return the typed text, stripped, and empty the input line."""
        value = self.input.value.strip()
        self.input.clear()
        return value

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if event.input.id != "chat-input":
            return
        content = self.take_input()
        if content:
            self.post_message(self.PlayerMessage(content))

    def add_message(self, content: str, message_type: MessageType, timestamped: bool = False) -> None:
        message = ChatMessage(
            content,
            message_type,
            self.speaker,
            datetime.now() if timestamped else None,
        )
        self.messages.append(message)
        log = self.query_one("#chat-log", RichLog)
        log.write(message.formatted)
        log.write("")

    def add_player_message(self, content: str) -> None:
        self.add_message(content, MessageType.PLAYER)

    def add_narrator_message(self, content: str) -> None:
        self.add_message(content, MessageType.NARRATOR, timestamped=True)

    def add_system_message(self, content: str) -> None:
        self.add_message(content, MessageType.SYSTEM)

    def add_dice_message(self, content: str) -> None:
        self.add_message(content, MessageType.DICE)

    def add_error_message(self, content: str) -> None:
        self.add_message(content, MessageType.ERROR)
