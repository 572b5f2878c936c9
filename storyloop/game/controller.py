"""Session controller - the turn loop for both game variants.

The controller is the only writer of session history. A turn either
completes (prompt and response appended together, then saved) or is
abandoned with history untouched.
"""

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, ClassVar, Generic, TypeVar

from ..characters.sheet import CharacterSheet
from ..errors import ChatFailure, CorruptSaveFailure, PersistenceFailure
from ..llm.orchestrator import ChatOrchestrator
from ..prompts import builder
from ..prompts.contracts import ADVENTURE_HELP, QUESTIONS_HELP
from ..storage.session_store import SessionStore
from .categories import CATEGORIES, pick_subject
from .dice import DICE_TYPES, DiceResult, DiceRoller, parse_dice_count
from .rules import SKILLS, resolve_skill_check
from .session_state import DEFAULT_QUESTION_LIMIT, AdventureSession, QuestionsSession, Session

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=Session)


class ControllerState(Enum):
    """Where the player is in the application."""

    MAIN_MENU = "main_menu"
    SETUP = "setup"
    ACTIVE_PLAY = "active_play"
    ENDED = "ended"


class TurnStatus(Enum):
    """How a player action turned out."""

    OK = "ok"
    CHAT_FAILED = "chat_failed"
    SAVE_FAILED = "save_failed"
    GUESS_REQUIRED = "guess_required"
    REVEAL_REQUIRED = "reveal_required"
    GAME_OVER = "game_over"
    INVALID = "invalid"


@dataclass(frozen=True)
class TurnOutcome:
    """Result of one player action, ready for display."""

    status: TurnStatus
    response: str = ""
    error: str | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status == TurnStatus.OK


class SessionController(Generic[S]):
    """State machine shared by the adventure and questions games."""

    help_text: ClassVar[str] = ""

    def __init__(self, store: SessionStore[S], orchestrator: ChatOrchestrator):
        """Initialize the controller.

        Args:
            store: Persistence for this variant's single session file
            orchestrator: Runs exchanges against the chat service
        """
        self.store = store
        self.orchestrator = orchestrator
        self.state = ControllerState.MAIN_MENU
        self.session: S = store.session_type()

    def _set_state(self, state: ControllerState) -> None:
        if state != self.state:
            logger.info(f"Controller state {self.state.value} -> {state.value}")
        self.state = state

    # Main menu

    def begin_new(self) -> bool:
        """Leave the main menu to set up a new game."""
        if self.state != ControllerState.MAIN_MENU:
            return False
        self.session = self.store.session_type()
        self._set_state(ControllerState.SETUP)
        return True

    def resume(self) -> bool:
        """Continue the saved game, if there is a valid one.

        Returns:
            True if play resumed; False leaves the controller at the main menu
        """
        if self.state != ControllerState.MAIN_MENU:
            return False
        try:
            session = self.store.load()
        except (CorruptSaveFailure, PersistenceFailure) as e:
            logger.warning(f"Saved session unusable: {e}")
            return False
        if not session.is_resumable:
            logger.info("No saved session to resume")
            return False

        self.session = session
        self._set_state(ControllerState.ACTIVE_PLAY)
        return True

    def show_help(self) -> str:
        """Rules and commands text; does not change state."""
        return self.help_text

    def quit(self) -> None:
        self._set_state(ControllerState.ENDED)

    def return_to_menu(self) -> None:
        """Leave play or setup; the saved file is kept as is."""
        if self.state in (ControllerState.ACTIVE_PLAY, ControllerState.SETUP):
            self._set_state(ControllerState.MAIN_MENU)

    def cancel_setup(self) -> None:
        if self.state == ControllerState.SETUP:
            self._set_state(ControllerState.MAIN_MENU)

    # Play

    def save(self) -> TurnOutcome:
        """Explicitly save the active session."""
        if self.state != ControllerState.ACTIVE_PLAY:
            return self._invalid("Nothing to save outside of play")
        return self._persist()

    def _persist(self, response: str = "") -> TurnOutcome:
        try:
            self.store.save(self.session)
        except PersistenceFailure as e:
            return TurnOutcome(TurnStatus.SAVE_FAILED, response=response, error=str(e))
        return TurnOutcome(TurnStatus.OK, response=response)

    async def _play_turn(
        self,
        prompt: str,
        progress_message: str,
        apply: Callable[[str], None] | None = None,
    ) -> TurnOutcome:
        """Run one exchange, record it, apply its effects, then save.

        Args:
            prompt: Outgoing prompt
            progress_message: Text shown while waiting
            apply: Updates session fields from the response once recorded
        """
        try:
            response = await self.orchestrator.exchange(prompt, self.session.history, progress_message)
        except ChatFailure as e:
            logger.warning(f"Turn abandoned: {e.cause}")
            return TurnOutcome(TurnStatus.CHAT_FAILED, error=e.cause)

        self.session.record_exchange(prompt, response)
        if apply is not None:
            apply(response)
        return self._persist(response)

    def _commit_setup(self, session: S, response: str) -> TurnOutcome:
        try:
            self.store.save(session)
        except PersistenceFailure as e:
            self._set_state(ControllerState.MAIN_MENU)
            return TurnOutcome(TurnStatus.SAVE_FAILED, response=response, error=str(e))
        self.session = session
        self._set_state(ControllerState.ACTIVE_PLAY)
        return TurnOutcome(TurnStatus.OK, response=response)

    def _setup_failed(self, error: ChatFailure) -> TurnOutcome:
        logger.warning(f"Setup abandoned: {error.cause}")
        self._set_state(ControllerState.MAIN_MENU)
        return TurnOutcome(TurnStatus.CHAT_FAILED, error=error.cause)

    def _invalid(self, message: str) -> TurnOutcome:
        logger.debug(f"Rejected action in state {self.state.value}: {message}")
        return TurnOutcome(TurnStatus.INVALID, error=message)


class AdventureController(SessionController[AdventureSession]):
    """Turn loop for a single-character D&D adventure."""

    help_text = ADVENTURE_HELP

    def __init__(
        self,
        store: SessionStore[AdventureSession],
        orchestrator: ChatOrchestrator,
        roller: DiceRoller | None = None,
        default_dice_count: int = 1,
    ):
        super().__init__(store, orchestrator)
        self.roller = roller or DiceRoller()
        self.default_dice_count = default_dice_count

    async def start_adventure(self, character: CharacterSheet) -> TurnOutcome:
        """Open a new campaign for a freshly created character.

        Runs the campaign-opening and scene-setting exchanges, then saves.
        Any failure returns to the main menu with nothing saved.

        Returns:
            Outcome whose response holds the campaign intro and opening scene
        """
        if self.state != ControllerState.SETUP:
            return self._invalid("Start a new game from the main menu first")

        session = AdventureSession(character=character)
        opening = builder.build_campaign_prompt(character)
        try:
            intro = await self.orchestrator.exchange(opening, session.history, builder.CREATING_CAMPAIGN)
            session.record_exchange(opening, intro)

            details = builder.parse_campaign_details(intro)
            session.campaign = details.campaign
            session.current_location = details.location
            session.current_quest = details.quest

            scene = await self.orchestrator.exchange(
                builder.SCENE_SETTING_PROMPT, session.history, builder.SETTING_SCENE
            )
            session.record_exchange(builder.SCENE_SETTING_PROMPT, scene)
        except ChatFailure as e:
            return self._setup_failed(e)

        logger.info(f"Started campaign '{session.campaign}' for {character.title}")
        return self._commit_setup(session, f"{intro}\n\n{scene}")

    async def take_action(self, action: str) -> TurnOutcome:
        """Narrate the outcome of a free-text action."""
        if self.state != ControllerState.ACTIVE_PLAY:
            return self._invalid("No adventure in progress")
        action = action.strip()
        if not action:
            return self._invalid("Describe what your character does")

        prompt = builder.build_action_prompt(self.session.character, action)
        return await self._play_turn(prompt, builder.RESPONDING, self._count_turn)

    async def skill_check(self, skill: str, d20_roll: int | None = None) -> TurnOutcome:
        """Roll and resolve a skill check, then let the DM narrate it.

        Args:
            skill: Skill name
            d20_roll: Natural roll to use instead of rolling

        Returns:
            Outcome whose detail is the resolved check line
        """
        if self.state != ControllerState.ACTIVE_PLAY:
            return self._invalid("No adventure in progress")
        if skill not in SKILLS:
            return self._invalid(f"Unknown skill: {skill}")

        roll = d20_roll if d20_roll is not None else self.roller.roll_d20()
        check = resolve_skill_check(self.session.character, skill, roll)
        logger.info(f"Skill check {check}")

        prompt = builder.build_skill_check_prompt(self.session.character, check)
        outcome = await self._play_turn(prompt, builder.RESOLVING_CHECK, self._count_turn)
        return replace(outcome, detail=str(check))

    def roll_dice(self, sides: int, count_text: str = "") -> DiceResult:
        """Roll raw dice for display; nothing is recorded or saved.

        Args:
            sides: Faces per die, one of the standard dice
            count_text: Player-typed count; malformed input rolls the default

        Raises:
            ValueError: If ``sides`` is not a standard die
        """
        if sides not in DICE_TYPES.values():
            raise ValueError(f"Unsupported die: d{sides}")
        count = parse_dice_count(count_text, self.default_dice_count)
        result = self.roller.roll(count, sides)
        logger.info(f"Rolled {result}")
        return result

    def inspect(self) -> CharacterSheet:
        """The active character sheet, for display."""
        return self.session.character

    def _count_turn(self, response: str) -> None:
        self.session.turns_taken += 1


class QuestionsController(SessionController[QuestionsSession]):
    """Turn loop for twenty questions."""

    help_text = QUESTIONS_HELP

    def __init__(
        self,
        store: SessionStore[QuestionsSession],
        orchestrator: ChatOrchestrator,
        question_limit: int = DEFAULT_QUESTION_LIMIT,
        rng: random.Random | None = None,
    ):
        super().__init__(store, orchestrator)
        self.question_limit = question_limit
        self.rng = rng or random.Random()

    @staticmethod
    def categories() -> list[str]:
        return list(CATEGORIES)

    async def start_game(self, category: str) -> TurnOutcome:
        """Pick a secret subject in a category and brief the Question Master.

        Runs the category-setup and subject-commitment exchanges, then saves.
        Any failure returns to the main menu with nothing saved.

        Returns:
            Outcome whose response is the Question Master's greeting
        """
        if self.state != ControllerState.SETUP:
            return self._invalid("Start a new game from the main menu first")
        if category not in CATEGORIES:
            return self._invalid(f"Unknown category: {category}")

        session = QuestionsSession(
            category=category,
            subject=pick_subject(category, self.rng),
            question_limit=self.question_limit,
        )
        setup = builder.build_category_prompt(category, session.question_limit)
        commitment = builder.build_subject_prompt(category, session.subject)
        try:
            greeting = await self.orchestrator.exchange(setup, session.history, builder.PREPARING_GAME)
            session.record_exchange(setup, greeting)
            confirmation = await self.orchestrator.exchange(
                commitment, session.history, builder.CHOOSING_SUBJECT
            )
            session.record_exchange(commitment, confirmation)
        except ChatFailure as e:
            return self._setup_failed(e)

        logger.info(f"Started twenty questions in {category}")
        return self._commit_setup(session, greeting)

    def next_step(self) -> str:
        """What the player has to do next: question, guess, reveal or over."""
        if self.session.is_over:
            return "over"
        if self.session.current_guess is not None:
            return "reveal"
        if self.session.remaining == 0:
            return "guess"
        return "question"

    def _gate(self) -> TurnOutcome | None:
        if self.state != ControllerState.ACTIVE_PLAY:
            return self._invalid("No game in progress")
        step = self.next_step()
        if step == "over":
            return TurnOutcome(TurnStatus.GAME_OVER)
        if step == "reveal":
            return TurnOutcome(TurnStatus.REVEAL_REQUIRED)
        return None

    async def ask_question(self, question: str) -> TurnOutcome:
        """Ask one yes-or-no question.

        Once the limit is reached no exchange happens and the outcome is
        GUESS_REQUIRED.
        """
        blocked = self._gate()
        if blocked is not None:
            return blocked
        if self.session.remaining == 0:
            return TurnOutcome(TurnStatus.GUESS_REQUIRED, error="No questions left, make your guess")
        question = question.strip()
        if not question:
            return self._invalid("Ask a yes-or-no question")

        prompt = builder.build_question_prompt(
            question, self.session.questions_asked + 1, self.session.question_limit
        )
        return await self._play_turn(prompt, builder.THINKING, self._count_question)

    async def make_guess(self, guess: str) -> TurnOutcome:
        """Make the single, final guess.

        Returns:
            OK when correct, REVEAL_REQUIRED when wrong
        """
        blocked = self._gate()
        if blocked is not None:
            return blocked
        guess = guess.strip()
        if not guess:
            return self._invalid("Name your guess")

        prompt = builder.build_guess_prompt(guess)

        def judge(response: str) -> None:
            self.session.current_guess = guess
            self.session.has_won = builder.parse_guess_verdict(response) or _same(guess, self.session.subject)
            logger.info(f"Guess '{guess}' judged {'correct' if self.session.has_won else 'incorrect'}")

        outcome = await self._play_turn(prompt, builder.JUDGING_GUESS, judge)
        if outcome.ok and not self.session.has_won:
            return replace(outcome, status=TurnStatus.REVEAL_REQUIRED)
        return outcome

    async def reveal(self) -> TurnOutcome:
        """Give up, or finish after a wrong guess, and learn the answer."""
        if self.state != ControllerState.ACTIVE_PLAY:
            return self._invalid("No game in progress")
        if self.session.is_over:
            return TurnOutcome(TurnStatus.GAME_OVER)

        prompt = builder.build_reveal_prompt(self.session.questions_asked)

        def mark_revealed(response: str) -> None:
            self.session.revealed = True

        outcome = await self._play_turn(prompt, builder.REVEALING, mark_revealed)
        return replace(outcome, detail=self.session.subject) if self.session.revealed else outcome

    def _count_question(self, response: str) -> None:
        self.session.questions_asked += 1


ARTICLES = ("the ", "a ", "an ")


def _normalize(text: str) -> str:
    text = " ".join(text.lower().split())
    for article in ARTICLES:
        if text.startswith(article):
            return text[len(article):]
    return text


def _same(guess: str, subject: str) -> bool:
    return _normalize(guess) == _normalize(subject)
