"""Tests for character creation and the character sheet."""

import random

import pytest

from storyloop.characters.classes import CLASSES, COMMON_GEAR, get_class
from storyloop.characters.creator import DEFAULT_NAME, CharacterCreator
from storyloop.characters.races import BACKGROUNDS, RACES
from storyloop.characters.sheet import AbilityScores, CharacterSheet
from storyloop.errors import CorruptSaveFailure
from storyloop.game.dice import DiceRoller


def _scores(**overrides):
    scores = {
        "strength": 10,
        "dexterity": 10,
        "constitution": 10,
        "intelligence": 10,
        "wisdom": 10,
        "charisma": 10,
    }
    scores.update(overrides)
    return scores


class TestTables:
    """Test the static creation tables."""

    def test_races_and_backgrounds(self):
        """Race and background lists are populated."""
        assert "Human" in RACES
        assert "Dragonborn" in RACES
        assert "Acolyte" in BACKGROUNDS

    def test_skill_counts(self):
        """Rogues pick four skills, bards and rangers three, others two."""
        assert CLASSES["Rogue"].skill_count == 4
        assert CLASSES["Bard"].skill_count == 3
        assert CLASSES["Ranger"].skill_count == 3
        assert CLASSES["Wizard"].skill_count == 2

    def test_unknown_class_falls_back(self):
        """Unknown classes get a generic package."""
        generic = get_class("Mystic")
        assert generic.name == "Mystic"
        assert generic.hit_die == 8


class TestArmorClass:
    """Test starting armor class."""

    def test_fighter_chain_mail(self):
        """Chain mail ignores dexterity."""
        assert get_class("Fighter").armor_class(3) == 16

    def test_cleric_scale_mail_caps_dex(self):
        """Scale mail adds at most +2 dexterity."""
        assert get_class("Cleric").armor_class(4) == 16
        assert get_class("Cleric").armor_class(1) == 15

    def test_rogue_leather(self):
        """Leather armor adds full dexterity."""
        assert get_class("Rogue").armor_class(3) == 14

    def test_unarmored_minimum(self):
        """Armor class never drops below 1."""
        assert get_class("Wizard").armor_class(-20) == 1


class TestCharacterCreator:
    """Test CharacterCreator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.creator = CharacterCreator(DiceRoller(random.Random(5)))

    def test_create_fighter(self):
        """Fighter gets d10 + CON hit points, chain mail and its kit."""
        fighter = self.creator.create(
            "Bruna", "Dwarf", "Fighter", "Soldier", _scores(constitution=14, strength=15)
        )
        assert fighter.hit_points == 12
        assert fighter.max_hit_points == 12
        assert fighter.armor_class == 16
        assert fighter.gold == 10
        assert "Longsword" in fighter.inventory
        for item in COMMON_GEAR:
            assert item in fighter.inventory
        assert fighter.level == 1
        assert fighter.experience == 0

    def test_minimum_hit_points(self):
        """Hit points are at least 1."""
        wizard = self.creator.create("Feeble", "Gnome", "Wizard", "Sage", _scores(constitution=1))
        assert wizard.hit_points == 1

    def test_blank_name(self):
        """A blank name becomes the default."""
        character = self.creator.create("  ", "Human", "Bard", "Entertainer", _scores())
        assert character.name == DEFAULT_NAME

    def test_missing_scores_default_to_ten(self):
        """Unassigned abilities are 10."""
        character = self.creator.create("Kit", "Human", "Monk", "Hermit", {"dexterity": 16})
        assert character.abilities.dexterity == 16
        assert character.abilities.wisdom == 10

    def test_skills_limited_to_class_choices(self):
        """Only class skills are honored, up to the class's count."""
        wizard = self.creator.create(
            "Ilsa", "Elf", "Wizard", "Sage", _scores(),
            skills=["Stealth", "Arcana", "History", "Medicine"],
        )
        assert wizard.proficient_skills() == ["Arcana", "History"]

    def test_all_skills_listed(self):
        """The sheet tracks every skill."""
        character = self.creator.create("Kit", "Human", "Monk", "Hermit", _scores())
        assert len(character.skills) == 18
        assert not any(character.skills.values())

    def test_generate_scores(self):
        """Generated pools have six scores."""
        assert self.creator.generate_scores("standard_array") == [15, 14, 13, 12, 10, 8]
        assert len(self.creator.generate_scores()) == 6


class TestCharacterSheet:
    """Test CharacterSheet serialization."""

    def test_round_trip(self, rogue):
        """A sheet survives to_dict/from_dict."""
        assert CharacterSheet.from_dict(rogue.to_dict()) == rogue

    def test_flat_ability_keys(self, rogue):
        """Abilities and class are stored as flat keys."""
        data = rogue.to_dict()
        assert data["dexterity"] == 16
        assert data["class"] == "Rogue"

    def test_title(self, rogue):
        """Title reads like the narration."""
        assert rogue.title == "Pip the Halfling Rogue"

    def test_modifier_lookup(self):
        """Modifiers come from the ability scores."""
        sheet = CharacterSheet(abilities=AbilityScores(wisdom=7))
        assert sheet.get_modifier("wisdom") == -2
        assert sheet.abilities["wisdom"] == 7

    @pytest.mark.parametrize("missing", ["name", "class", "dexterity", "skills", "inventory"])
    def test_missing_field_is_corrupt(self, rogue, missing):
        """Missing fields raise CorruptSaveFailure."""
        data = rogue.to_dict()
        del data[missing]
        with pytest.raises(CorruptSaveFailure):
            CharacterSheet.from_dict(data)

    def test_wrong_shape_is_corrupt(self, rogue):
        """Non-numeric scores raise CorruptSaveFailure."""
        data = rogue.to_dict()
        data["strength"] = "strong"
        with pytest.raises(CorruptSaveFailure):
            CharacterSheet.from_dict(data)

    def test_not_a_dict(self):
        """Non-objects raise CorruptSaveFailure."""
        with pytest.raises(CorruptSaveFailure):
            CharacterSheet.from_dict(["Pip"])
