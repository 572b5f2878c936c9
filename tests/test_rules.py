"""Tests for ability modifiers, proficiency and skill checks."""

import pytest

from storyloop.game.rules import (
    SKILL_ABILITIES,
    SKILLS,
    SkillCheck,
    ability_modifier,
    proficiency_bonus,
    resolve_skill_check,
    skill_check_total,
)


class TestAbilityModifier:
    """Test the ability modifier formula."""

    @pytest.mark.parametrize(
        "score,expected",
        [(1, -5), (3, -4), (7, -2), (8, -1), (9, -1), (10, 0), (11, 0), (12, 1), (15, 2), (18, 4), (20, 5)],
    )
    def test_modifier(self, score, expected):
        """Odd scores below 10 round down."""
        assert ability_modifier(score) == expected


class TestProficiencyBonus:
    """Test the proficiency bonus table."""

    @pytest.mark.parametrize(
        "level,expected",
        [(1, 2), (4, 2), (5, 3), (8, 3), (9, 4), (12, 4), (13, 5), (16, 5), (17, 6), (20, 6)],
    )
    def test_boundaries(self, level, expected):
        """Bonus steps up every four levels."""
        assert proficiency_bonus(level) == expected


class TestSkillCheckTotal:
    """Test skill check arithmetic."""

    def test_proficient(self):
        """Roll 15, +3 modifier, proficient at +2 totals 20."""
        assert skill_check_total(15, 3, True, 2) == 20

    def test_not_proficient(self):
        """Proficiency bonus is ignored when untrained."""
        assert skill_check_total(15, 3, False, 2) == 18

    def test_negative_modifier(self):
        """Negative modifiers reduce the total."""
        assert skill_check_total(1, -2, False, 2) == -1


class TestSkillTable:
    """Test the skill to ability table."""

    def test_eighteen_skills(self):
        """All eighteen 5e skills are present."""
        assert len(SKILLS) == 18

    def test_governing_abilities(self):
        """Spot-check the governing abilities."""
        assert SKILL_ABILITIES["Athletics"] == "strength"
        assert SKILL_ABILITIES["Stealth"] == "dexterity"
        assert SKILL_ABILITIES["Arcana"] == "intelligence"
        assert SKILL_ABILITIES["Perception"] == "wisdom"
        assert SKILL_ABILITIES["Persuasion"] == "charisma"


class TestResolveSkillCheck:
    """Test resolving a check against a character sheet."""

    def test_proficient_check(self, rogue):
        """DEX 16 rogue trained in Stealth rolls 15 for a total of 20."""
        check = resolve_skill_check(rogue, "Stealth", 15)
        assert check == SkillCheck(
            skill="Stealth", roll=15, ability_mod=3, proficient=True, prof_bonus=2, total=20
        )
        assert check.applied_bonus == 2

    def test_untrained_check(self, rogue):
        """Untrained skills add only the ability modifier."""
        check = resolve_skill_check(rogue, "Athletics", 10)
        assert check.ability_mod == -1
        assert not check.proficient
        assert check.applied_bonus == 0
        assert check.total == 9

    def test_unknown_skill(self, rogue):
        """Unknown skills use a zero modifier."""
        check = resolve_skill_check(rogue, "Cooking", 12)
        assert check.ability_mod == 0
        assert check.total == 12

    def test_higher_level_bonus(self, rogue):
        """Proficiency follows the character's level."""
        rogue.level = 9
        assert resolve_skill_check(rogue, "Stealth", 10).total == 10 + 3 + 4

    def test_str(self, rogue):
        """String form shows every component."""
        assert str(resolve_skill_check(rogue, "Stealth", 15)) == "Stealth: 15 +3 +2 (proficient) = 20"
