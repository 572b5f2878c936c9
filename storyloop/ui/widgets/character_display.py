"""Character sheet widgets for the adventure sidebar."""

from rich.markup import escape
from textual.app import ComposeResult
from textual.widgets import Label, ProgressBar, Static

from ...characters.sheet import CharacterSheet
from ...game.rules import ABILITIES, ability_modifier


def short_name(ability: str) -> str:
    return ability[:3].upper()


def hp_colour(current: int, maximum: int) -> str:
    """Bar colour for the fraction of hit points left."""
    if maximum <= 0:
        return "red"
    fraction = current / maximum
    if fraction > 0.5:
        return "green"
    if fraction > 0.25:
        return "yellow"
    return "red"


class HPBar(Static):
    """Hit points as a label over a coloured bar."""

    DEFAULT_CSS = """
    HPBar {
        height: 2;
    }

    HPBar ProgressBar {
        padding: 0;
    }
    """

    def __init__(self, current: int = 10, maximum: int = 10, **kwargs):
        super().__init__(**kwargs)
        self.current = current
        self.maximum = maximum

    def compose(self) -> ComposeResult:
        yield Label(f"HP: {self.current}/{self.maximum}")
        yield ProgressBar(show_eta=False, show_percentage=False)

    def on_mount(self) -> None:
        bar = self.query_one(ProgressBar)
        bar.update(total=max(self.maximum, 1), progress=self.current)
        bar.styles.color = hp_colour(self.current, self.maximum)


class AbilityScoreWidget(Static):
    """Six scores with their modifiers, one per line."""

    DEFAULT_CSS = """
    AbilityScoreWidget {
        height: auto;
    }
    """

    def __init__(self, abilities: dict[str, int] | None = None, **kwargs):
        """Initialize the widget.

        Args:
            abilities: Short ability name (STR, DEX, ...) -> score
        """
        super().__init__(**kwargs)
        self.abilities = abilities or {short_name(a): 10 for a in ABILITIES}

    def compose(self) -> ComposeResult:
        rows = [
            f"[b]{name:<4}[/b]{score:>3}  [cyan]({ability_modifier(score):+d})[/]"
            for name, score in self.abilities.items()
        ]
        yield Static("\n".join(rows))


class CharacterDisplayWidget(Static):
    """Sidebar sheet: identity, hit points, defences, scores, skills and gear."""

    DEFAULT_CSS = """
    CharacterDisplayWidget {
        height: auto;
        border: solid $primary;
        padding: 0 1;
    }

    CharacterDisplayWidget .char-name {
        text-style: bold;
        color: $primary;
    }

    CharacterDisplayWidget .muted {
        color: $text-muted;
    }

    CharacterDisplayWidget .heading {
        text-style: bold;
        margin-top: 1;
    }
    """

    def __init__(self, character: CharacterSheet | None = None, **kwargs):
        super().__init__(**kwargs)
        self.character = character

    def compose(self) -> ComposeResult:
        char = self.character
        if char is None:
            yield Label("No character loaded", classes="char-name")
            return

        yield Label(escape(char.name), classes="char-name")
        yield Label(f"Level {char.level} {char.race} {char.character_class}", classes="muted")
        yield Label(char.background, classes="muted")
        yield HPBar(current=char.hit_points, maximum=char.max_hit_points)
        yield Label(f"AC {char.armor_class}   Gold {char.gold}   XP {char.experience}")

        yield Label("Abilities", classes="heading")
        yield AbilityScoreWidget({short_name(a): char.abilities.get_score(a) for a in ABILITIES})

        yield Label("Proficient Skills", classes="heading")
        yield Static(", ".join(char.proficient_skills()) or "None")

        yield Label("Inventory", classes="heading")
        yield Static("\n".join(f"- {item}" for item in char.inventory) or "Empty")

    def update_character(self, character: CharacterSheet) -> None:
        self.character = character
        self.refresh(recompose=True)


def sheet_text(character: CharacterSheet) -> str:
    """Plain-text character sheet for the transcript."""
    lines = [
        f"{character.name} - Level {character.level} {character.race} {character.character_class}",
        f"Background: {character.background}",
        f"HP: {character.hit_points}/{character.max_hit_points}   AC: {character.armor_class}   "
        f"XP: {character.experience}   Gold: {character.gold}",
        "",
    ]
    for ability in ABILITIES:
        score = character.abilities.get_score(ability)
        lines.append(f"{ability.capitalize():<13} {score:>2} ({ability_modifier(score):+d})")
    lines.append("")
    lines.append(f"Skills: {', '.join(character.proficient_skills()) or 'None'}")
    lines.append(f"Inventory: {', '.join(character.inventory) or 'Empty'}")
    return "\n".join(lines)
