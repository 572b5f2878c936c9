"""Main menu screen for Storyloop."""

from textual.app import ComposeResult
from textual.containers import Center, Container, Vertical
from textual.screen import Screen
from textual.widgets import Button, Label, Static

from ... import __version__
from .adventure_session import AdventureSessionScreen
from .category_select import CategorySelectScreen
from .character_creation import CharacterCreationScreen
from .help import HelpScreen
from .questions_session import QuestionsSessionScreen


class MainMenuScreen(Screen):
    """New game, continue, help and quit."""

    CSS = """
    MainMenuScreen {
        background: $surface;
        align: center middle;
    }

    #main-title {
        width: 100%;
        text-align: center;
        color: $primary;
        text-style: bold;
        padding: 1 0;
    }

    #subtitle {
        width: 100%;
        text-align: center;
        color: $text-muted;
        margin-bottom: 1;
    }

    #menu-container {
        width: 60;
        height: auto;
        padding: 1 2;
        background: $surface-darken-1;
        border: round $primary;
    }

    #button-group {
        width: 100%;
        height: auto;
        padding: 0 2;
    }

    .menu-button {
        width: 100%;
        margin: 1 0 0 0;
    }

    .divider {
        height: 1;
        margin: 1 0 0 0;
    }

    #btn-new-game {
        background: $success-darken-1;
    }

    #btn-quit {
        background: $error-darken-2;
    }

    #version-label {
        width: 100%;
        text-align: center;
        color: $text-muted;
        margin-top: 1;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the main menu."""
        is_adventure = self.app.variant == "adventure"
        with Center():
            with Vertical(id="menu-container"):
                yield Label("Storyloop", id="main-title")
                yield Label(
                    "D&D 5e with an AI Dungeon Master" if is_adventure
                    else "Twenty Questions with an AI Question Master",
                    id="subtitle",
                )

                with Container(id="button-group"):
                    yield Button(
                        "Start New Adventure" if is_adventure else "Start New Game",
                        id="btn-new-game",
                        classes="menu-button",
                    )
                    yield Button(
                        "Continue Saved Adventure" if is_adventure else "Continue Saved Game",
                        id="btn-continue",
                        classes="menu-button",
                    )
                    yield Static("", classes="divider")
                    yield Button("View Rules & Commands", id="btn-help", classes="menu-button")
                    yield Button("Quit", id="btn-quit", classes="menu-button")

                yield Label(f"v{__version__}", id="version-label")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id
        controller = self.app.controller

        if button_id == "btn-new-game":
            if controller.begin_new():
                self.app.push_screen(self._setup_screen())
        elif button_id == "btn-continue":
            self._continue()
        elif button_id == "btn-help":
            self.app.push_screen(HelpScreen(controller.show_help()))
        elif button_id == "btn-quit":
            controller.quit()
            self.app.exit()

    def _setup_screen(self) -> Screen:
        if self.app.variant == "questions":
            return CategorySelectScreen()
        return CharacterCreationScreen()

    def _play_screen(self) -> Screen:
        if self.app.variant == "questions":
            return QuestionsSessionScreen()
        return AdventureSessionScreen()

    def _continue(self) -> None:
        if self.app.controller.resume():
            self.app.push_screen(self._play_screen())
        else:
            self.app.notify("No saved game found. Start a new one!", title="Continue", severity="warning")
