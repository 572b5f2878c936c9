"""Twenty questions play screen."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Label

from ...game.controller import TurnOutcome, TurnStatus
from ..widgets.chat_log import ChatLogWidget

PLACEHOLDERS = {
    "question": "Ask a yes-or-no question",
    "guess": "No questions left - type your guess",
    "reveal": "Press Reveal to see the answer",
    "over": "Game over - return to the menu for a new game",
}


class QuestionsSessionScreen(Screen):
    """Transcript plus ask / guess / reveal controls."""

    CSS = """
    QuestionsSessionScreen {
        layout: vertical;
    }

    #status-line {
        width: 100%;
        height: 1;
        padding: 0 1;
        background: $boost;
        color: $warning;
    }

    #main-area {
        height: 1fr;
    }

    .action-row {
        height: 3;
        padding: 0 1;
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
            opening: Greeting of a freshly started game; None when resuming
        """
        super().__init__()
        self.opening = opening
        self._processing = False

    @property
    def controller(self):
        return self.app.controller

    def compose(self) -> ComposeResult:
        with Vertical(id="main-area"):
            yield Label("", id="status-line")
            yield ChatLogWidget(speaker="QM", placeholder=PLACEHOLDERS["question"], id="chat")
            with Horizontal(classes="action-row"):
                yield Button("Ask", id="btn-ask", variant="primary")
                yield Button("Guess", id="btn-guess", variant="warning")
                yield Button("Reveal", id="btn-reveal")
                yield Button("Save", id="btn-save", variant="success")
                yield Button("Menu", id="btn-menu", variant="error")

    def on_mount(self) -> None:
        chat = self.query_one(ChatLogWidget)
        session = self.controller.session
        if self.opening is not None:
            chat.add_system_message(f"Category: {session.category}")
            chat.add_narrator_message(self.opening)
        else:
            chat.add_system_message(
                f"Continuing your game in {session.category} "
                f"({session.questions_asked} questions asked)."
            )
            last = session.last_response()
            if last:
                chat.add_narrator_message(last)
        self._refresh_controls()
        chat.input.focus()

    def on_chat_log_widget_player_message(self, event: ChatLogWidget.PlayerMessage) -> None:
        """Submitted input asks a question, or guesses once questions run out."""
        step = self.controller.next_step()
        if step == "guess":
            self._guess(event.content)
        elif step == "question":
            self._ask(event.content)
        else:
            self.notify(PLACEHOLDERS[step], severity="warning")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id
        chat = self.query_one(ChatLogWidget)

        if button_id == "btn-ask":
            text = chat.take_input()
            if text:
                self._ask(text)
        elif button_id == "btn-guess":
            text = chat.take_input()
            if text:
                self._guess(text)
            else:
                self.notify("Type your guess first.", severity="warning")
        elif button_id == "btn-reveal":
            self._start_turn(self.controller.reveal)
        elif button_id == "btn-save":
            self.action_save()
        elif button_id == "btn-menu":
            self.action_menu()

    def _ask(self, question: str) -> None:
        if self._processing:
            return
        self.query_one(ChatLogWidget).add_player_message(question)
        self._start_turn(self.controller.ask_question, question)

    def _guess(self, guess: str) -> None:
        if self._processing:
            return
        self.query_one(ChatLogWidget).add_player_message(f"Is it {guess}?")
        self._start_turn(self.controller.make_guess, guess)

    def _start_turn(self, action, *args) -> None:
        if self._processing:
            return
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
        session = self.controller.session

        if outcome.status == TurnStatus.INVALID:
            self.notify(outcome.error or "Not now.", severity="warning")
        elif outcome.status == TurnStatus.CHAT_FAILED:
            chat.add_error_message(f"The Question Master cannot respond... {outcome.error}")
        elif outcome.status == TurnStatus.GUESS_REQUIRED:
            chat.add_system_message("You have used all your questions. Make your guess!")
        elif outcome.status == TurnStatus.GAME_OVER:
            chat.add_system_message("This game is over. Return to the menu to start a new one.")
        else:
            if outcome.response:
                chat.add_narrator_message(outcome.response)
            if outcome.status == TurnStatus.SAVE_FAILED:
                chat.add_error_message(f"Error saving game: {outcome.error}")
            if session.has_won:
                chat.add_system_message(
                    f"You got it in {session.questions_asked} questions! The answer was {session.subject}."
                )
            elif session.revealed:
                chat.add_system_message(f"The answer was {session.subject}.")
            elif outcome.status == TurnStatus.REVEAL_REQUIRED:
                chat.add_system_message("Not quite! Press Reveal to see the answer.")
        self._refresh_controls()

    def _refresh_controls(self) -> None:
        session = self.controller.session
        step = self.controller.next_step()

        self.query_one("#status-line", Label).update(
            f"Category: {session.category}  |  Questions: {session.questions_asked}/"
            f"{session.question_limit}  |  Remaining: {session.remaining}"
        )
        self.query_one(ChatLogWidget).set_placeholder(PLACEHOLDERS[step])
        self.query_one("#btn-ask", Button).disabled = step != "question"
        self.query_one("#btn-guess", Button).disabled = step not in ("question", "guess")
        self.query_one("#btn-reveal", Button).disabled = step == "over"

    def action_save(self) -> None:
        if self._processing:
            return
        outcome = self.controller.save()
        if outcome.ok:
            self.notify("Game saved!", title="Save")
        else:
            self.notify(f"Error saving game: {outcome.error}", title="Save", severity="error")

    def action_menu(self) -> None:
        if self._processing:
            self.notify("Wait for the Question Master to finish.", severity="warning")
            return
        self.controller.return_to_menu()
        self.app.pop_screen()
