"""Dice rolling engine for D&D 5e sessions."""

import random
from dataclasses import dataclass


# Dice offered for raw rolls, by label
DICE_TYPES: dict[str, int] = {
    "d4": 4,
    "d6": 6,
    "d8": 8,
    "d10": 10,
    "d12": 12,
    "d20": 20,
    "d100": 100,
}

STANDARD_ARRAY = [15, 14, 13, 12, 10, 8]

# Simplified 27-point buy spread
POINT_BUY_ARRAY = [13, 13, 13, 12, 12, 8]

# Largest count a player may roll at once
MAX_DICE = 100


@dataclass
class DiceResult:
    """Result of a dice roll."""

    notation: str
    rolls: list[int]

    @property
    def total(self) -> int:
        """Sum of all dice."""
        return sum(self.rolls)

    def __str__(self) -> str:
        """Human-readable representation of the roll."""
        return f"{self.notation}: [{', '.join(str(r) for r in self.rolls)}] = {self.total}"


class DiceRoller:
    """Dice rolling engine with an injectable random source."""

    def __init__(self, rng: random.Random | None = None):
        """Initialize the dice roller.

        Args:
            rng: Random number generator instance. Uses default if not provided.
        """
        self.rng = rng or random.Random()

    def seed(self, seed: int) -> None:
        """Seed the random number generator for reproducible rolls.

        Args:
            seed: Seed value
        """
        self.rng.seed(seed)

    def roll_dice(self, count: int, sides: int) -> list[int]:
        """Roll `count` independent dice with `sides` faces.

        Args:
            count: Number of dice (0 gives an empty list)
            sides: Faces per die, at least 1

        Returns:
            One value in [1, sides] per die
        """
        return [self.rng.randint(1, sides) for _ in range(count)]

    def roll(self, count: int, sides: int) -> DiceResult:
        """Roll dice and wrap the result for display.

        Args:
            count: Number of dice
            sides: Faces per die

        Returns:
            DiceResult with notation and individual rolls
        """
        return DiceResult(notation=f"{count}d{sides}", rolls=self.roll_dice(count, sides))

    def roll_d20(self) -> int:
        """Roll a single d20."""
        return self.roll_dice(1, 20)[0]

    def roll_ability_scores(self, method: str = "4d6_drop_lowest") -> list[int]:
        """Generate a set of six ability scores.

        Args:
            method: "4d6_drop_lowest", "standard_array" or "point_buy"

        Returns:
            Six scores, in generation order

        Raises:
            ValueError: If the method is unknown
        """
        if method == "standard_array":
            return list(STANDARD_ARRAY)
        if method == "point_buy":
            return list(POINT_BUY_ARRAY)
        if method != "4d6_drop_lowest":
            raise ValueError(f"Unknown ability score method: {method}")

        scores = []
        for _ in range(6):
            rolls = sorted(self.roll_dice(4, 6))
            scores.append(sum(rolls[1:]))
        return scores


def roll_dice(count: int, sides: int, rng: random.Random | None = None) -> list[int]:
    """Quick roll using a throwaway roller.

    Args:
        count: Number of dice
        sides: Faces per die
        rng: Optional random source

    Returns:
        List of individual die results
    """
    return DiceRoller(rng).roll_dice(count, sides)


def parse_dice_count(text: str, default: int = 1) -> int:
    """Parse a player-typed dice count.

    Anything that is not a whole number from 0 to MAX_DICE falls back to `default`.
    """
    try:
        count = int(text.strip())
    except (AttributeError, ValueError):
        return default
    if count < 0 or count > MAX_DICE:
        return default
    return count
