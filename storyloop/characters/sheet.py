"""Character sheet data model for D&D 5e."""

from dataclasses import dataclass, field
from typing import Any

from ..errors import CorruptSaveFailure
from ..game.rules import ABILITIES, SKILLS, ability_modifier


@dataclass
class AbilityScores:
    """Character ability scores with modifiers."""

    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10

    def get_score(self, ability: str) -> int:
        """Get the score for an ability."""
        return getattr(self, ability.lower())

    def get_modifier(self, ability: str) -> int:
        """Get the modifier for an ability score."""
        return ability_modifier(self.get_score(ability))

    def __getitem__(self, key: str) -> int:
        """Allow dictionary-style access to ability scores."""
        return self.get_score(key)

    def to_dict(self) -> dict[str, int]:
        return {ability: self.get_score(ability) for ability in ABILITIES}


def _default_skills() -> dict[str, bool]:
    return {skill: False for skill in SKILLS}


@dataclass
class CharacterSheet:
    """A single adventurer's sheet."""

    name: str = ""
    race: str = ""
    character_class: str = ""
    background: str = ""
    level: int = 1
    experience: int = 0
    abilities: AbilityScores = field(default_factory=AbilityScores)
    hit_points: int = 10
    max_hit_points: int = 10
    armor_class: int = 10
    skills: dict[str, bool] = field(default_factory=_default_skills)
    inventory: list[str] = field(default_factory=list)
    gold: int = 0

    def get_modifier(self, ability: str) -> int:
        """Get the modifier for one of the six abilities."""
        return self.abilities.get_modifier(ability)

    def is_proficient(self, skill: str) -> bool:
        """Check whether the character is trained in a skill."""
        return self.skills.get(skill, False)

    def proficient_skills(self) -> list[str]:
        """Trained skills in table order."""
        return [skill for skill in SKILLS if self.skills.get(skill)]

    @property
    def title(self) -> str:
        """Short "Name the Race Class" description."""
        return f"{self.name} the {self.race} {self.character_class}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for storage."""
        return {
            "name": self.name,
            "race": self.race,
            "class": self.character_class,
            "background": self.background,
            "level": self.level,
            "experience": self.experience,
            **self.abilities.to_dict(),
            "hit_points": self.hit_points,
            "max_hit_points": self.max_hit_points,
            "armor_class": self.armor_class,
            "skills": dict(self.skills),
            "inventory": list(self.inventory),
            "gold": self.gold,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CharacterSheet":
        """Deserialize from dict.

        Raises:
            CorruptSaveFailure: If a field is missing or has the wrong shape
        """
        if not isinstance(data, dict):
            raise CorruptSaveFailure("character must be an object")

        try:
            skills = data["skills"]
            inventory = data["inventory"]
            if not isinstance(skills, dict) or not isinstance(inventory, list):
                raise TypeError("skills must be an object and inventory a list")

            return cls(
                name=str(data["name"]),
                race=str(data["race"]),
                character_class=str(data["class"]),
                background=str(data["background"]),
                level=int(data["level"]),
                experience=int(data["experience"]),
                abilities=AbilityScores(**{a: int(data[a]) for a in ABILITIES}),
                hit_points=int(data["hit_points"]),
                max_hit_points=int(data["max_hit_points"]),
                armor_class=int(data["armor_class"]),
                skills={str(k): bool(v) for k, v in skills.items()},
                inventory=[str(item) for item in inventory],
                gold=int(data["gold"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise CorruptSaveFailure(f"invalid character: {e}") from e
