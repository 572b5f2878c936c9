"""Category picker for a new twenty questions game."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Button, Label, OptionList
from textual.widgets.option_list import Option

from ...game.categories import CATEGORIES
from ...game.controller import ControllerState
from .questions_session import QuestionsSessionScreen


class CategorySelectScreen(Screen):
    """Choose the category the secret subject is drawn from."""

    CSS = """
    CategorySelectScreen {
        align: center middle;
    }

    #category-container {
        width: 50;
        height: auto;
        padding: 1 2;
        border: round $primary;
    }

    #category-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $primary;
        margin-bottom: 1;
    }

    #category-list {
        height: auto;
        max-height: 12;
    }

    #btn-cancel {
        width: 100%;
        margin-top: 1;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel", show=True)]

    def __init__(self):
        super().__init__()
        self._starting = False

    def compose(self) -> ComposeResult:
        with Center():
            with Vertical(id="category-container"):
                yield Label("Choose a category", id="category-title")
                yield OptionList(
                    *[Option(f"{name} ({len(subjects)} secrets)", id=name) for name, subjects in CATEGORIES.items()],
                    id="category-list",
                )
                yield Button("Cancel", id="btn-cancel", variant="error")

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if self._starting:
            return
        self._starting = True
        self.query_one("#category-title", Label).update(f"Starting a game of {event.option.id}...")
        self.run_worker(self._start(event.option.id), exclusive=True)

    async def _start(self, category: str) -> None:
        outcome = await self.app.controller.start_game(category)
        self._starting = False
        if outcome.ok:
            self.app.switch_screen(QuestionsSessionScreen(outcome.response))
            return

        self.notify(f"Could not start the game: {outcome.error}", title="Error", severity="error")
        if self.app.controller.state == ControllerState.MAIN_MENU:
            self.app.pop_screen()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-cancel":
            self.action_cancel()

    def action_cancel(self) -> None:
        if self._starting:
            return
        self.app.controller.cancel_setup()
        self.app.pop_screen()
