"""UI screens for the main menu, setup and play."""

from .adventure_session import AdventureSessionScreen
from .category_select import CategorySelectScreen
from .character_creation import CharacterCreationScreen
from .help import HelpScreen
from .main_menu import MainMenuScreen
from .questions_session import QuestionsSessionScreen

__all__ = [
    "AdventureSessionScreen",
    "CategorySelectScreen",
    "CharacterCreationScreen",
    "HelpScreen",
    "MainMenuScreen",
    "QuestionsSessionScreen",
]
