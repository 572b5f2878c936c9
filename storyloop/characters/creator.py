"""Character creation for D&D 5e adventurers."""

import logging
from typing import Iterable

from ..game.dice import DiceRoller
from ..game.rules import ABILITIES, ability_modifier
from .classes import COMMON_GEAR, get_class
from .sheet import AbilityScores, CharacterSheet

logger = logging.getLogger(__name__)

SCORE_METHODS = {
    "4d6_drop_lowest": "Roll 4d6 (drop lowest)",
    "standard_array": "Standard Array",
    "point_buy": "Point Buy",
}

DEFAULT_NAME = "Adventurer"


class CharacterCreator:
    """Builds level-1 characters from player choices."""

    def __init__(self, roller: DiceRoller | None = None):
        """Initialize the creator.

        Args:
            roller: Dice roller used for rolled ability scores
        """
        self.roller = roller or DiceRoller()

    def generate_scores(self, method: str = "4d6_drop_lowest") -> list[int]:
        """Produce the pool of six scores the player will assign."""
        return self.roller.roll_ability_scores(method)

    def create(
        self,
        name: str,
        race: str,
        class_name: str,
        background: str,
        scores: dict[str, int],
        skills: Iterable[str] = (),
    ) -> CharacterSheet:
        """Build a finished character sheet.

        Args:
            name: Character name; blank names become "Adventurer"
            race: Race name
            class_name: Class name
            background: Background name
            scores: Ability name -> assigned score (missing abilities get 10)
            skills: Requested skill proficiencies; only the class's choices
                are honored, up to the class's skill count

        Returns:
            CharacterSheet with derived hit points, armor class and kit
        """
        char_class = get_class(class_name)
        abilities = AbilityScores(**{a: int(scores.get(a, 10)) for a in ABILITIES})

        character = CharacterSheet(
            name=name.strip() or DEFAULT_NAME,
            race=race,
            character_class=char_class.name,
            background=background,
            abilities=abilities,
        )

        con_mod = ability_modifier(abilities.constitution)
        dex_mod = ability_modifier(abilities.dexterity)
        character.hit_points = max(char_class.hit_die + con_mod, 1)
        character.max_hit_points = character.hit_points
        character.armor_class = char_class.armor_class(dex_mod)

        for skill in self.allowed_skills(class_name, skills):
            character.skills[skill] = True

        character.inventory = [*char_class.equipment, *COMMON_GEAR]
        character.gold = char_class.gold

        logger.info(f"Created character {character.title}")
        return character

    @staticmethod
    def allowed_skills(class_name: str, requested: Iterable[str]) -> list[str]:
        """Filter requested skills down to what the class may pick."""
        char_class = get_class(class_name)
        chosen: list[str] = []
        for skill in requested:
            if skill in char_class.skill_choices and skill not in chosen:
                chosen.append(skill)
            if len(chosen) == char_class.skill_count:
                break
        return chosen
