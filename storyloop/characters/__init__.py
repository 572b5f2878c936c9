"""Character management module for creation and sheets."""

from .sheet import AbilityScores, CharacterSheet
from .creator import CharacterCreator

__all__ = ["AbilityScores", "CharacterSheet", "CharacterCreator"]
