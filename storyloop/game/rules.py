"""D&D 5e rules engine for ability modifiers and skill checks."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..characters.sheet import CharacterSheet


ABILITIES = ("strength", "dexterity", "constitution", "intelligence", "wisdom", "charisma")

# Skill -> governing ability
SKILL_ABILITIES: dict[str, str] = {
    "Acrobatics": "dexterity",
    "Animal Handling": "wisdom",
    "Arcana": "intelligence",
    "Athletics": "strength",
    "Deception": "charisma",
    "History": "intelligence",
    "Insight": "wisdom",
    "Intimidation": "charisma",
    "Investigation": "intelligence",
    "Medicine": "wisdom",
    "Nature": "intelligence",
    "Perception": "wisdom",
    "Performance": "charisma",
    "Persuasion": "charisma",
    "Religion": "intelligence",
    "Sleight of Hand": "dexterity",
    "Stealth": "dexterity",
    "Survival": "wisdom",
}

SKILLS = tuple(SKILL_ABILITIES)

# Reference difficulty classes quoted to the DM
DIFFICULTY_CLASSES = (
    ("Easy", 10),
    ("Medium", 15),
    ("Hard", 20),
    ("Very Hard", 25),
    ("Nearly Impossible", 30),
)


def ability_modifier(score: int) -> int:
    """Get the modifier for an ability score.

    Rounds toward negative infinity, so a score of 7 gives -2.
    """
    return (score - 10) // 2


def proficiency_bonus(level: int) -> int:
    """Get the proficiency bonus for a character level."""
    if level <= 4:
        return 2
    if level <= 8:
        return 3
    if level <= 12:
        return 4
    if level <= 16:
        return 5
    return 6


def skill_check_total(d20_roll: int, ability_mod: int, proficient: bool, prof_bonus: int) -> int:
    """Total a skill check: d20 + ability modifier + proficiency if trained."""
    return d20_roll + ability_mod + (prof_bonus if proficient else 0)


@dataclass(frozen=True)
class SkillCheck:
    """A fully resolved skill check."""

    skill: str
    roll: int
    ability_mod: int
    proficient: bool
    prof_bonus: int
    total: int

    @property
    def applied_bonus(self) -> int:
        """Proficiency bonus actually added to the total."""
        return self.prof_bonus if self.proficient else 0

    def __str__(self) -> str:
        """Human-readable result string."""
        parts = [f"{self.skill}: {self.roll}"]
        parts.append(f"{self.ability_mod:+d}")
        if self.proficient:
            parts.append(f"{self.prof_bonus:+d} (proficient)")
        parts.append(f"= {self.total}")
        return " ".join(parts)


def resolve_skill_check(character: "CharacterSheet", skill: str, d20_roll: int) -> SkillCheck:
    """Resolve a skill check for a character.

    Args:
        character: The character making the check
        skill: Skill name from SKILL_ABILITIES
        d20_roll: The natural d20 result

    Returns:
        SkillCheck with every component of the total
    """
    ability = SKILL_ABILITIES.get(skill)
    ability_mod = character.get_modifier(ability) if ability else 0
    prof_bonus = proficiency_bonus(character.level)
    proficient = character.is_proficient(skill)

    return SkillCheck(
        skill=skill,
        roll=d20_roll,
        ability_mod=ability_mod,
        proficient=proficient,
        prof_bonus=prof_bonus,
        total=skill_check_total(d20_roll, ability_mod, proficient, prof_bonus),
    )
