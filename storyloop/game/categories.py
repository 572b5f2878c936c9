"""Category tables for the twenty-questions game."""

import random

CATEGORIES: dict[str, tuple[str, ...]] = {
    "Animals": (
        "Elephant", "Octopus", "Penguin", "Kangaroo", "Owl",
        "Giraffe", "Honeybee", "Dolphin", "Chameleon", "Wolf",
    ),
    "Household Objects": (
        "Toaster", "Umbrella", "Candle", "Scissors", "Mirror",
        "Teapot", "Pillow", "Ladder", "Clock", "Key",
    ),
    "Foods": (
        "Pizza", "Pineapple", "Sushi", "Pancake", "Avocado",
        "Chocolate", "Croissant", "Mushroom", "Popcorn", "Honey",
    ),
    "Places": (
        "Eiffel Tower", "Sahara Desert", "Mount Everest", "Venice", "Great Barrier Reef",
        "Machu Picchu", "Antarctica", "Tokyo", "Grand Canyon", "Stonehenge",
    ),
    "Famous People": (
        "Albert Einstein", "Cleopatra", "Leonardo da Vinci", "Marie Curie", "William Shakespeare",
        "Nelson Mandela", "Amelia Earhart", "Mozart", "Frida Kahlo", "Isaac Newton",
    ),
    "Fantasy Creatures": (
        "Dragon", "Unicorn", "Phoenix", "Griffin", "Mermaid",
        "Goblin", "Vampire", "Centaur", "Kraken", "Werewolf",
    ),
}


def pick_subject(category: str, rng: random.Random | None = None) -> str:
    """Choose the secret subject for a new game.

    Raises:
        KeyError: If the category is not in the table
    """
    return (rng or random.Random()).choice(CATEGORIES[category])
