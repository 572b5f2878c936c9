"""Character creation screen for a new adventure."""

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, Input, Label, Select, SelectionList, Static

from ...characters.classes import CLASSES, get_class
from ...characters.creator import SCORE_METHODS, CharacterCreator
from ...characters.races import BACKGROUNDS, RACES
from ...game.rules import ABILITIES, ability_modifier
from .adventure_session import AdventureSessionScreen

logger = logging.getLogger(__name__)


class CharacterCreationScreen(Screen):
    """Form for building a level-1 character."""

    CSS = """
    CharacterCreationScreen {
        layout: grid;
        grid-size: 2;
        grid-columns: 3fr 2fr;
        padding: 0 1;
    }

    #left-panel {
        height: 100%;
        border: solid $primary;
        padding: 0 1;
    }

    #right-panel {
        height: 100%;
        border: solid $secondary;
        padding: 0 1;
    }

    .section-header {
        text-style: bold;
        color: $primary;
        margin-top: 1;
    }

    Select {
        width: 100%;
    }

    .score-row {
        height: 3;
    }

    .score-label {
        width: 14;
        padding: 1 0;
    }

    .score-row Select {
        width: 20;
    }

    #skill-list {
        height: 10;
    }

    #button-row {
        height: 3;
        margin-top: 1;
    }

    #button-row Button {
        margin: 0 1 0 0;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel", show=True)]

    def __init__(self, creator: CharacterCreator | None = None):
        super().__init__()
        self.creator = creator or CharacterCreator()
        self.pool: list[int] = []
        self._starting = False

    def compose(self) -> ComposeResult:
        with VerticalScroll(id="left-panel"):
            yield Label("Create Your Character", classes="section-header")
            yield Input(placeholder="What is your character's name?", id="input-name")
            yield Select([(race, race) for race in RACES], prompt="Race", id="select-race")
            yield Select([(name, name) for name in CLASSES], prompt="Class", id="select-class")
            yield Select([(bg, bg) for bg in BACKGROUNDS], prompt="Background", id="select-background")

            yield Label("Ability Scores", classes="section-header")
            with Horizontal(classes="score-row"):
                yield Select(
                    [(label, method) for method, label in SCORE_METHODS.items()],
                    value="4d6_drop_lowest",
                    id="select-method",
                )
                yield Button("Generate", id="btn-generate", variant="primary")
            yield Label("Generate a set of scores, then assign one to each ability.", id="pool-label")
            for ability in ABILITIES:
                with Horizontal(classes="score-row"):
                    yield Label(ability.capitalize(), classes="score-label")
                    yield Select([], prompt="Score", id=f"score-{ability}")

            yield Label("Skills", classes="section-header", id="skills-header")
            yield SelectionList[str](id="skill-list")

            with Horizontal(id="button-row"):
                yield Button("Begin Adventure", id="btn-create", variant="success")
                yield Button("Cancel", id="btn-cancel", variant="error")

        with VerticalScroll(id="right-panel"):
            yield Label("Class Info", classes="section-header")
            yield Static("Select a class to see details.", id="class-info")
            yield Label("Preview", classes="section-header")
            yield Static("", id="preview-area")

    def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id == "select-class":
            self._update_class_info()
        self._update_preview()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        button_id = event.button.id

        if button_id == "btn-generate":
            self._generate_scores()
        elif button_id == "btn-create":
            self._create_character()
        elif button_id == "btn-cancel":
            self.action_cancel()

    def _value(self, select_id: str):
        value = self.query_one(f"#{select_id}", Select).value
        return None if value == Select.BLANK else value

    def _generate_scores(self) -> None:
        method = self._value("select-method") or "4d6_drop_lowest"
        self.pool = self.creator.generate_scores(method)
        options = [(f"{score} ({ability_modifier(score):+d})", index) for index, score in enumerate(self.pool)]
        for index, ability in enumerate(ABILITIES):
            select = self.query_one(f"#score-{ability}", Select)
            select.set_options(options)
            # Suggest the scores in order; the player can reassign
            select.value = index

        self.query_one("#pool-label", Label).update(
            f"{SCORE_METHODS[method]}: {', '.join(str(s) for s in self.pool)}"
        )
        self._update_preview()

    def _update_class_info(self) -> None:
        class_name = self._value("select-class")
        info = self.query_one("#class-info", Static)
        skills = self.query_one("#skill-list", SelectionList)
        skills.clear_options()
        if not class_name:
            info.update("Select a class to see details.")
            return

        char_class = get_class(class_name)
        skills.add_options([(skill, skill) for skill in char_class.skill_choices])
        self.query_one("#skills-header", Label).update(f"Skills (choose {char_class.skill_count})")
        info.update(
            f"Hit Die: d{char_class.hit_die}\n"
            f"Skills: choose {char_class.skill_count}\n"
            f"Starting Gold: {char_class.gold}\n\n"
            f"Equipment:\n" + "\n".join(f"  - {item}" for item in char_class.equipment)
        )

    def _assigned_scores(self) -> dict[str, int] | None:
        indexes = [self._value(f"score-{ability}") for ability in ABILITIES]
        if not self.pool or None in indexes or len(set(indexes)) != len(indexes):
            return None
        return {ability: self.pool[index] for ability, index in zip(ABILITIES, indexes)}

    def _update_preview(self) -> None:
        name = self.query_one("#input-name", Input).value.strip() or "Unnamed"
        race = self._value("select-race") or "?"
        class_name = self._value("select-class") or "?"
        background = self._value("select-background") or "?"

        text = f"{name}\n{race} {class_name}\nBackground: {background}\n"
        scores = self._assigned_scores()
        if scores:
            text += "\n" + "\n".join(
                f"{ability[:3].upper()}: {score} ({ability_modifier(score):+d})"
                for ability, score in scores.items()
            )
        self.query_one("#preview-area", Static).update(text)

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "input-name":
            self._update_preview()

    def _create_character(self) -> None:
        if self._starting:
            return
        race = self._value("select-race")
        class_name = self._value("select-class")
        background = self._value("select-background")
        if not (race and class_name and background):
            self.notify("Choose a race, class and background.", title="Error", severity="error")
            return

        scores = self._assigned_scores()
        if scores is None:
            self.notify("Assign each generated score to exactly one ability.", title="Error", severity="error")
            return

        chosen = list(self.query_one("#skill-list", SelectionList).selected)
        limit = get_class(class_name).skill_count
        if len(chosen) > limit:
            self.notify(f"A {class_name} can choose only {limit} skills.", title="Error", severity="error")
            return

        character = self.creator.create(
            name=self.query_one("#input-name", Input).value,
            race=race,
            class_name=class_name,
            background=background,
            scores=scores,
            skills=chosen,
        )
        self._starting = True
        self.query_one("#btn-create", Button).disabled = True
        self.run_worker(self._start(character), exclusive=True)

    async def _start(self, character) -> None:
        outcome = await self.app.controller.start_adventure(character)
        self._starting = False
        if outcome.ok:
            self.app.switch_screen(AdventureSessionScreen(outcome.response))
            return

        logger.warning(f"Adventure setup failed: {outcome.status.value}")
        self.notify(f"Could not start the adventure: {outcome.error}", title="Error", severity="error")
        self.app.pop_screen()

    def action_cancel(self) -> None:
        if self._starting:
            return
        self.app.controller.cancel_setup()
        self.app.pop_screen()
