"""Main Textual application for Storyloop."""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..config import AppConfig, get_config
from ..game.controller import AdventureController, QuestionsController, SessionController
from ..game.session_state import AdventureSession, QuestionsSession
from ..llm.chat import ChatAgent
from ..llm.client import GenerationConfig, create_client
from ..llm.orchestrator import ChatOrchestrator
from ..prompts.contracts import DM_PREAMBLE, QUESTIONS_PREAMBLE
from ..storage.session_store import SessionStore
from .progress import HeaderProgress
from .screens.help import HelpScreen
from .screens.main_menu import MainMenuScreen

logger = logging.getLogger(__name__)

VARIANTS = ("adventure", "questions")

TITLES = {
    "adventure": ("Storyloop", "D&D 5e Adventure"),
    "questions": ("Storyloop", "Twenty Questions"),
}


def build_controller(config: AppConfig, variant: str, progress=None) -> SessionController:
    """Wire client, chat agent, orchestrator and store into a controller.

    Args:
        config: Application configuration
        variant: "adventure" or "questions"
        progress: Progress reporter for pending exchanges

    Returns:
        The controller for the variant, at the main menu

    Raises:
        ValueError: If the variant or LLM provider is unknown
    """
    if variant not in VARIANTS:
        raise ValueError(f"Unknown game: {variant}")

    client = create_client(config.llm)
    generation = GenerationConfig(
        temperature=config.llm.temperature,
        max_tokens=config.llm.max_tokens,
    )
    save_file = config.paths.save_file(variant)

    if variant == "questions":
        orchestrator = ChatOrchestrator(ChatAgent(client, QUESTIONS_PREAMBLE, generation), progress)
        return QuestionsController(
            SessionStore(save_file, QuestionsSession),
            orchestrator,
            question_limit=config.game.question_limit,
        )

    orchestrator = ChatOrchestrator(ChatAgent(client, DM_PREAMBLE, generation), progress)
    return AdventureController(
        SessionStore(save_file, AdventureSession),
        orchestrator,
        default_dice_count=config.game.default_dice_count,
    )


class StoryloopApp(App):
    """The Storyloop application."""

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", show=True),
        Binding("escape", "back", "Back", show=True),
        Binding("f1", "help", "Help", show=True),
    ]

    def __init__(self, variant: str | None = None, config: AppConfig | None = None):
        """Initialize the application.

        Args:
            variant: Game to play; defaults to the configured variant
            config: Application configuration
        """
        super().__init__()
        self.config = config or get_config()
        self.variant = variant or self.config.game.default_variant
        self.title, self.sub_title = TITLES.get(self.variant, TITLES["adventure"])
        self.progress = HeaderProgress(self, idle_text=self.sub_title)
        self.controller = build_controller(self.config, self.variant, self.progress)

    def compose(self) -> ComposeResult:
        yield Header()
        yield Footer()

    def on_mount(self) -> None:
        """Check the chat service and show the main menu."""
        self._check_llm()
        self.push_screen(MainMenuScreen())

    def _check_llm(self) -> None:
        client = self.controller.orchestrator.chat.client
        if client.is_available():
            logger.info(f"LLM provider {self.config.llm.provider} available")
            return
        logger.warning(f"LLM provider {self.config.llm.provider} not available")
        self.notify(
            f"Could not reach {self.config.llm.provider} model {self.config.llm.model}. "
            "Turns will fail until it is available.",
            title="Warning",
            severity="warning",
            timeout=5,
        )

    def action_back(self) -> None:
        """Go back to previous screen."""
        if len(self.screen_stack) > 2:
            self.pop_screen()

    def action_help(self) -> None:
        """Show the rules and commands."""
        self.push_screen(HelpScreen(self.controller.show_help()))

    def action_quit(self) -> None:
        self.controller.quit()
        self.exit()
