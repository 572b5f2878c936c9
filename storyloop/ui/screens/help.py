"""Rules and commands modal."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class HelpScreen(ModalScreen[None]):
    """Shows the help text for the current game."""

    CSS = """
    HelpScreen {
        align: center middle;
    }

    #help-container {
        width: 80;
        max-height: 90%;
        height: auto;
        padding: 1 2;
        background: $surface-darken-1;
        border: round $primary;
    }

    #help-text {
        height: auto;
        max-height: 30;
    }

    #btn-close {
        width: 100%;
        margin-top: 1;
    }
    """

    BINDINGS = [Binding("escape", "close", "Close")]

    def __init__(self, text: str):
        super().__init__()
        self.text = text

    def compose(self) -> ComposeResult:
        with Vertical(id="help-container"):
            with VerticalScroll(id="help-text"):
                yield Static(self.text)
            yield Button("Back to menu", id="btn-close", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-close":
            self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
