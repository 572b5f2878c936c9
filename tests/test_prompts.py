"""Tests for prompt rendering and response parsing."""

import pytest

from storyloop.game.rules import resolve_skill_check
from storyloop.prompts import builder
from storyloop.prompts.builder import (
    DEFAULT_CAMPAIGN,
    DEFAULT_LOCATION,
    DEFAULT_QUEST,
    CampaignDetails,
    parse_campaign_details,
    parse_guess_verdict,
)


class TestPromptBuilders:
    """Test prompt text."""

    def test_builders_are_deterministic(self, rogue):
        """Same inputs give byte-identical prompts."""
        check = resolve_skill_check(rogue, "Stealth", 15)
        assert builder.build_campaign_prompt(rogue) == builder.build_campaign_prompt(rogue)
        assert builder.build_action_prompt(rogue, "I sneak") == builder.build_action_prompt(rogue, "I sneak")
        assert builder.build_skill_check_prompt(rogue, check) == builder.build_skill_check_prompt(rogue, check)

    def test_campaign_prompt_mentions_character(self, rogue):
        """The opening prompt describes the character and asks for labelled lines."""
        prompt = builder.build_campaign_prompt(rogue)
        assert "Halfling Rogue named Pip" in prompt
        assert "DEX 16" in prompt
        assert "Background: Urchin" in prompt
        assert '"Campaign: ..."' in prompt

    def test_action_prompt(self, rogue):
        """Actions are quoted under the character's title."""
        prompt = builder.build_action_prompt(rogue, "I pick the lock.")
        assert "Pip the Halfling Rogue" in prompt
        assert "I pick the lock." in prompt

    def test_skill_check_prompt_embeds_numbers(self, rogue):
        """Every component of the resolved check is in the prompt."""
        prompt = builder.build_skill_check_prompt(rogue, resolve_skill_check(rogue, "Stealth", 15))
        assert "rolls a Stealth check" in prompt
        assert "Dice roll: 15" in prompt
        assert "Ability modifier: +3" in prompt
        assert "Proficiency: Yes (+2)" in prompt
        assert "Total: 20" in prompt
        assert "Very Hard: 25" in prompt

    def test_skill_check_prompt_untrained(self, rogue):
        """Untrained checks say so and show negative modifiers with a sign."""
        prompt = builder.build_skill_check_prompt(rogue, resolve_skill_check(rogue, "Athletics", 4))
        assert "Ability modifier: -1" in prompt
        assert "Proficiency: No" in prompt
        assert "Total: 3" in prompt

    def test_question_prompt_numbering(self):
        """Questions carry their number and the limit."""
        prompt = builder.build_question_prompt("Is it alive?", 3, 20)
        assert prompt.startswith("Question 3 of 20: Is it alive?")

    def test_subject_prompt_names_subject(self):
        """The commitment prompt names the secret."""
        prompt = builder.build_subject_prompt("Animals", "Owl")
        assert "Owl" in prompt
        assert "Ready." in prompt

    def test_guess_prompt_asks_for_verdict(self):
        """The guess prompt asks for a CORRECT/INCORRECT opener."""
        prompt = builder.build_guess_prompt("Penguin")
        assert "Penguin" in prompt
        assert "CORRECT or INCORRECT" in prompt


class TestParseCampaignDetails:
    """Test scraping the campaign-opening response."""

    def test_plain_lines(self):
        """Labelled lines are picked up."""
        text = "Campaign: The Sunken Crown\nLocation: Saltmarsh\nQuest: Find the drowned bell\n\nGulls cry."
        assert parse_campaign_details(text) == CampaignDetails(
            "The Sunken Crown", "Saltmarsh", "Find the drowned bell"
        )

    def test_markdown_emphasis(self):
        """Bold and numbered markdown labels are cleaned up."""
        text = "1. **Campaign:** The Sunken Crown\n2. **Location:** *Saltmarsh*\n3. **Quest Hook:** Ring the bell"
        details = parse_campaign_details(text)
        assert details.campaign == "The Sunken Crown"
        assert details.location == "Saltmarsh"
        assert details.quest == "Ring the bell"

    def test_defaults_when_missing(self):
        """Unlabelled prose keeps every default."""
        details = parse_campaign_details("Once upon a time, in a land far away...")
        assert details == CampaignDetails(DEFAULT_CAMPAIGN, DEFAULT_LOCATION, DEFAULT_QUEST)

    def test_partial(self):
        """Only the fields found are replaced."""
        details = parse_campaign_details("Location: Brindle")
        assert details.location == "Brindle"
        assert details.campaign == DEFAULT_CAMPAIGN
        assert details.quest == DEFAULT_QUEST

    def test_empty_value_ignored(self):
        """A label with nothing after the colon is skipped."""
        details = parse_campaign_details("Campaign:\nCampaign: Ashes of Varn")
        assert details.campaign == "Ashes of Varn"

    def test_later_lines_win(self):
        """When a marker repeats, the last line wins."""
        details = parse_campaign_details("Quest: Old\nThe hook: New")
        assert details.quest == "New"

    def test_adventure_marker(self):
        """'Adventure' lines name the campaign too."""
        assert parse_campaign_details("Adventure name: Frostfall").campaign == "Frostfall"


class TestParseGuessVerdict:
    """Test reading the guess verdict."""

    @pytest.mark.parametrize(
        "text",
        ["CORRECT! Well done.", "correct, it was an owl", "**CORRECT** Nice!", '  "Correct." You got it.'],
    )
    def test_correct(self, text):
        """Responses opening with CORRECT are wins."""
        assert parse_guess_verdict(text)

    @pytest.mark.parametrize(
        "text",
        ["INCORRECT. Not quite.", "**Incorrect**", "That is correct!", "", "Nope"],
    )
    def test_incorrect(self, text):
        """Anything else is a miss."""
        assert not parse_guess_verdict(text)
