"""Class definitions and starting kits for D&D 5e."""

from dataclasses import dataclass

from ..game.rules import SKILLS


# Gear every new character carries regardless of class
COMMON_GEAR = (
    "Backpack",
    "Bedroll",
    "Rations (5 days)",
    "Waterskin",
    "Torch (3)",
)

DEFAULT_SKILL_CHOICES = ("Arcana", "History", "Investigation", "Nature", "Religion")


@dataclass(frozen=True)
class CharacterClass:
    """A character class with its level-1 package."""

    name: str
    hit_die: int = 8
    skill_count: int = 2
    skill_choices: tuple[str, ...] = DEFAULT_SKILL_CHOICES
    equipment: tuple[str, ...] = ("Adventurer's pack", "Simple weapon")
    gold: int = 20
    # "chain_mail", "scale_mail", "leather" or None for unarmored
    armor: str | None = None

    def armor_class(self, dex_mod: int) -> int:
        """Armor class from starting armor and dexterity."""
        if self.armor == "chain_mail":
            return 16
        if self.armor == "scale_mail":
            return 14 + min(dex_mod, 2)
        if self.armor == "leather":
            return max(11 + dex_mod, 1)
        return max(10 + dex_mod, 1)


CLASSES: dict[str, CharacterClass] = {
    c.name: c
    for c in (
        CharacterClass(
            name="Fighter",
            hit_die=10,
            skill_choices=(
                "Acrobatics", "Animal Handling", "Athletics", "History",
                "Insight", "Intimidation", "Perception", "Survival",
            ),
            equipment=("Longsword", "Shield", "Chain mail", "Dungeoneer's pack"),
            gold=10,
            armor="chain_mail",
        ),
        CharacterClass(
            name="Wizard",
            hit_die=6,
            skill_choices=("Arcana", "History", "Insight", "Investigation", "Medicine", "Religion"),
            equipment=("Spellbook", "Staff", "Component pouch", "Scholar's pack"),
            gold=25,
        ),
        CharacterClass(
            name="Cleric",
            hit_die=8,
            skill_choices=("History", "Insight", "Medicine", "Persuasion", "Religion"),
            equipment=("Mace", "Scale mail", "Shield", "Holy symbol"),
            gold=15,
            armor="scale_mail",
        ),
        CharacterClass(
            name="Rogue",
            hit_die=8,
            skill_count=4,
            skill_choices=(
                "Acrobatics", "Athletics", "Deception", "Insight", "Intimidation",
                "Investigation", "Perception", "Performance", "Persuasion",
                "Sleight of Hand", "Stealth",
            ),
            equipment=("Shortsword", "Shortbow with 20 arrows", "Leather armor", "Thieves' tools"),
            gold=30,
            armor="leather",
        ),
        CharacterClass(
            name="Ranger",
            hit_die=10,
            skill_count=3,
            skill_choices=(
                "Animal Handling", "Athletics", "Insight", "Investigation",
                "Nature", "Perception", "Stealth", "Survival",
            ),
        ),
        CharacterClass(
            name="Paladin",
            hit_die=10,
            skill_choices=("Athletics", "Insight", "Intimidation", "Medicine", "Persuasion", "Religion"),
        ),
        CharacterClass(
            name="Barbarian",
            hit_die=12,
            skill_choices=("Animal Handling", "Athletics", "Intimidation", "Nature", "Perception", "Survival"),
        ),
        CharacterClass(name="Bard", hit_die=8, skill_count=3, skill_choices=SKILLS),
        CharacterClass(
            name="Druid",
            hit_die=8,
            skill_choices=(
                "Arcana", "Animal Handling", "Insight", "Medicine",
                "Nature", "Perception", "Religion", "Survival",
            ),
        ),
        CharacterClass(
            name="Monk",
            hit_die=8,
            skill_choices=("Acrobatics", "Athletics", "History", "Insight", "Religion", "Stealth"),
        ),
        CharacterClass(
            name="Sorcerer",
            hit_die=6,
            skill_choices=("Arcana", "Deception", "Insight", "Intimidation", "Persuasion", "Religion"),
        ),
        CharacterClass(
            name="Warlock",
            hit_die=8,
            skill_choices=(
                "Arcana", "Deception", "History", "Intimidation",
                "Investigation", "Nature", "Religion",
            ),
        ),
        CharacterClass(name="Artificer"),
    )
}


def get_class(name: str) -> CharacterClass:
    """Look up a class by name, falling back to a generic adventurer."""
    return CLASSES.get(name) or CharacterClass(name=name)
