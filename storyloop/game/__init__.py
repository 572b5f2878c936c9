"""Game mechanics module for dice, rules, and session state."""

from .dice import DiceResult, DiceRoller, roll_dice
from .rules import SkillCheck, ability_modifier, proficiency_bonus, skill_check_total

__all__ = [
    "DiceResult", "DiceRoller", "roll_dice",
    "SkillCheck", "ability_modifier", "proficiency_bonus", "skill_check_total",
]
