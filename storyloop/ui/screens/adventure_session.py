"""Adventure play screen."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Input, Label, Select

from ...game.controller import TurnOutcome, TurnStatus
from ...game.dice import DICE_TYPES
from ...game.rules import SKILLS
from ..widgets.character_display import CharacterDisplayWidget, sheet_text
from ..widgets.chat_log import ChatLogWidget


class AdventureSessionScreen(Screen):
    """The main adventure screen: transcript, actions and character sheet."""

    CSS = """
    AdventureSessionScreen {
        layout: grid;
        grid-size: 2;
        grid-columns: 1fr 3fr;
    }

    #sidebar {
        height: 100%;
        padding: 0 1;
    }

    #main-area {
        height: 100%;
    }

    #status-line {
        width: 100%;
        height: 1;
        padding: 0 1;
        background: $boost;
        color: $warning;
    }

    .action-row {
        height: 3;
        padding: 0 1;
    }

    .action-row Select {
        width: 28;
    }

    #input-dice-count {
        width: 12;
    }

    .action-row Button {
        margin: 0 1 0 0;
    }
    """

    BINDINGS = [
        Binding("escape", "menu", "Menu", show=True),
        Binding("ctrl+s", "save", "Save", show=True),
    ]

    def __init__(self, opening: str | None = None):
        """Initialize the screen.

        Args:
            opening: Narration of a freshly started campaign; None when resuming
        """
        super().__init__()
        self.opening = opening
        self._processing = False

    @property
    def controller(self):
        return self.app.controller

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="sidebar"):
            yield CharacterDisplayWidget(self.controller.session.character, id="character-display")

        with Vertical(id="main-area"):
            yield Label("", id="status-line")
            yield ChatLogWidget(
                speaker="DM",
                placeholder="What would you like to do? (describe your action)",
                id="chat",
            )
            with Horizontal(classes="action-row"):
                yield Select(
                    [(skill, skill) for skill in SKILLS],
                    prompt="Skill",
                    id="select-skill",
                )
                yield Button("Check", id="btn-check", variant="primary")
                yield Select(
                    [(label, sides) for label, sides in DICE_TYPES.items()],
                    prompt="Die",
                    value=20,
                    id="select-die",
                )
                yield Input(placeholder="How many?", id="input-dice-count")
                yield Button("Roll", id="btn-roll")
            with Horizontal(classes="action-row"):
                yield Button("Sheet", id="btn-sheet")
                yield Button("Save", id="btn-save", variant="success")
                yield Button("Menu", id="btn-menu", variant="error")

    def on_mount(self) -> None:
        """Show the opening narration or a recap of the saved game."""
        chat = self.query_one(ChatLogWidget)
        session = self.controller.session
        if self.opening is not None:
            chat.add_system_message(f"Welcome to {session.campaign}")
            chat.add_narrator_message(self.opening)
        else:
            chat.add_system_message(f"Continuing your adventure in {session.campaign}...")
            last = session.last_response()
            if last:
                chat.add_system_message("Previously in your adventure:")
                chat.add_narrator_message(last)
        self._refresh_status()
        chat.input.focus()

    def on_chat_log_widget_player_message(self, event: ChatLogWidget.PlayerMessage) -> None:
        """Treat submitted input as an action."""
        if self._processing:
            self.notify("The Dungeon Master is still responding.", severity="warning")
            return
        self.query_one(ChatLogWidget).add_player_message(event.content)
        self._start_turn(self.controller.take_action, event.content)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id

        if button_id == "btn-check":
            self._skill_check()
        elif button_id == "btn-roll":
            self._roll_dice()
        elif button_id == "btn-sheet":
            self.query_one(ChatLogWidget).add_system_message(sheet_text(self.controller.inspect()))
        elif button_id == "btn-save":
            self.action_save()
        elif button_id == "btn-menu":
            self.action_menu()

    def _skill_check(self) -> None:
        if self._processing:
            return
        skill = self.query_one("#select-skill", Select).value
        if skill == Select.BLANK:
            self.notify("Choose a skill to check.", severity="warning")
            return
        self.query_one(ChatLogWidget).add_player_message(f"{skill} check")
        self._start_turn(self.controller.skill_check, str(skill))

    def _roll_dice(self) -> None:
        die = self.query_one("#select-die", Select).value
        sides = 20 if die == Select.BLANK else int(die)
        count_input = self.query_one("#input-dice-count", Input)
        result = self.controller.roll_dice(sides, count_input.value)
        count_input.clear()
        self.query_one(ChatLogWidget).add_dice_message(f"Rolled {result}")

    def _start_turn(self, action, *args) -> None:
        self._processing = True
        self.run_worker(self._play(action, *args), exclusive=True)

    async def _play(self, action, *args) -> None:
        try:
            outcome = await action(*args)
        finally:
            self._processing = False
        self._show_outcome(outcome)

    def _show_outcome(self, outcome: TurnOutcome) -> None:
        chat = self.query_one(ChatLogWidget)
        if outcome.detail:
            chat.add_dice_message(outcome.detail)

        if outcome.status == TurnStatus.INVALID:
            self.notify(outcome.error or "Not now.", severity="warning")
            return
        if outcome.status == TurnStatus.CHAT_FAILED:
            chat.add_error_message(f"The Dungeon Master cannot respond... {outcome.error}")
            return

        if outcome.response:
            chat.add_narrator_message(outcome.response)
        if outcome.status == TurnStatus.SAVE_FAILED:
            chat.add_error_message(f"Error saving game: {outcome.error}")
        self._refresh_status()

    def _refresh_status(self) -> None:
        session = self.controller.session
        character = session.character
        self.query_one("#status-line", Label).update(
            f"{escape(session.current_location)}  |  Quest: {escape(session.current_quest)}  |  "
            f"HP {character.hit_points}/{character.max_hit_points}  |  AC {character.armor_class}"
        )
        self.query_one("#character-display", CharacterDisplayWidget).update_character(character)

    def action_save(self) -> None:
        if self._processing:
            return
        outcome = self.controller.save()
        if outcome.ok:
            self.notify("Game saved!", title="Save")
        else:
            self.notify(f"Error saving game: {outcome.error}", title="Save", severity="error")

    def action_menu(self) -> None:
        """Return to the main menu; progress is already saved."""
        if self._processing:
            self.notify("Wait for the Dungeon Master to finish.", severity="warning")
            return
        self.controller.return_to_menu()
        self.app.pop_screen()
