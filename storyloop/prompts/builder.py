"""Prompt Builder - Renders fixed-shape prompts from session fields.

Every builder is a pure function: the same arguments always produce the same
text. Mechanics results arrive already resolved; no prompt asks the model to
roll dice.
"""

import re
from dataclasses import dataclass

from ..characters.sheet import CharacterSheet
from ..game.rules import DIFFICULTY_CLASSES, SkillCheck

# Progress messages shown while an exchange is pending
CREATING_CAMPAIGN = "The Dungeon Master is creating your adventure..."
SETTING_SCENE = "The Dungeon Master is setting the scene..."
RESPONDING = "The Dungeon Master is responding..."
RESOLVING_CHECK = "The Dungeon Master is resolving your check..."
PREPARING_GAME = "The Question Master is preparing the game..."
CHOOSING_SUBJECT = "The Question Master is committing to a secret..."
THINKING = "The Question Master is thinking..."
JUDGING_GUESS = "The Question Master is judging your guess..."
REVEALING = "The Question Master is revealing the answer..."

DEFAULT_CAMPAIGN = "Mystical Adventure"
DEFAULT_LOCATION = "Starting Town"
DEFAULT_QUEST = "Find adventure"

SCENE_SETTING_PROMPT = (
    "Now, describe the opening scene. The player's character has just arrived at the "
    "starting location. Provide rich sensory details and introduce an NPC or situation "
    "that connects to the quest hook. End with a question or prompt for the player to "
    "respond to."
)


def _stat_line(character: CharacterSheet) -> str:
    scores = character.abilities
    return (
        f"STR {scores.strength}, DEX {scores.dexterity}, CON {scores.constitution}, "
        f"INT {scores.intelligence}, WIS {scores.wisdom}, CHA {scores.charisma}"
    )


def build_campaign_prompt(character: CharacterSheet) -> str:
    """Build the campaign-opening prompt.

    Args:
        character: The freshly created player character

    Returns:
        Prompt asking for a campaign name, starting location and quest hook
    """
    return f"""Create an exciting campaign hook and starting location for a {character.race} {character.character_class} named {character.name}.
The character is level {character.level} with the following stats: {_stat_line(character)}.
Background: {character.background}.

Provide a brief introduction to the campaign setting, including:
1. Campaign: the name of the campaign/adventure
2. Location: the starting location (town/city/village name)
3. Quest: the initial quest or hook to draw the player in
4. A brief description of the area and its people

Put each of the first three on its own line as "Campaign: ...", "Location: ..." and "Quest: ...".
Focus on immersive, evocative descriptions rather than mechanical details. Make it engaging and atmospheric!"""


def build_action_prompt(character: CharacterSheet, action: str) -> str:
    """Build the prompt for a free-text player action."""
    return f"""The player ({character.title}) takes the following action:

{action}

Respond as the Dungeon Master, describing the outcome of this action.
Use rich, evocative language to create an immersive experience.
If dice rolls would be needed, describe the check but don't roll dice yourself.
End with either a question or a prompt that gives the player clear options for what they might do next.
If the player attempts something impossible, gently steer them toward better options."""


def build_skill_check_prompt(character: CharacterSheet, check: SkillCheck) -> str:
    """Build the prompt for an already-resolved skill check.

    Args:
        character: The acting character
        check: Resolved roll, modifier, proficiency and total

    Returns:
        Prompt embedding every number of the check
    """
    proficiency = f"Yes (+{check.prof_bonus})" if check.proficient else "No"
    dc_lines = "\n".join(f"- {label}: {dc}" for label, dc in DIFFICULTY_CLASSES)
    return f"""The player ({character.title}) rolls a {check.skill} check.
Dice roll: {check.roll}
Ability modifier: {check.ability_mod:+d}
Proficiency: {proficiency}
Total: {check.total}

Interpret this skill check result in the current context.
Describe the outcome of their action based on this result.
For reference, typical difficulty classes are:
{dc_lines}

Continue the scene after describing the result of this check."""


def build_category_prompt(category: str, question_limit: int) -> str:
    """Build the prompt that opens a game in a category."""
    return f"""Let's play Twenty Questions. The category is: {category}.
The player may ask up to {question_limit} yes-or-no questions and then makes a single guess.
Greet the player in two or three sentences, name the category, and invite the first question.
Do not hint at any particular subject yet."""


def build_subject_prompt(category: str, subject: str) -> str:
    """Build the prompt that commits the model to the secret subject.

    This prompt is part of the history but is never shown to the player.
    """
    return f"""The secret subject for this game is: {subject} (category: {category}).
Answer every following question about {subject}. Do not reveal it until asked.
Reply only with "Ready." to confirm."""


def build_question_prompt(question: str, number: int, question_limit: int) -> str:
    """Build the prompt for one yes-or-no question."""
    return f"""Question {number} of {question_limit}: {question}

Answer truthfully about the secret subject."""


def build_guess_prompt(guess: str) -> str:
    """Build the prompt that asks the model to judge a guess."""
    return f"""The player guesses: {guess}

Is this the secret subject? Accept close synonyms and minor misspellings.
Begin your reply with exactly CORRECT or INCORRECT, then add one sentence for the player.
Do not name the secret subject if the guess is incorrect."""


def build_reveal_prompt(questions_asked: int) -> str:
    """Build the prompt that ends the game by revealing the subject."""
    return f"""The game is over after {questions_asked} questions.
Reveal the secret subject and give two or three fun facts about it."""


@dataclass
class CampaignDetails:
    """Campaign fields scraped from the opening response."""

    campaign: str = DEFAULT_CAMPAIGN
    location: str = DEFAULT_LOCATION
    quest: str = DEFAULT_QUEST


_EMPHASIS = re.compile(r"^[\s*#_>-]+|[\s*#_]+$")


def _value_after_colon(line: str) -> str:
    _, sep, value = line.partition(":")
    if not sep:
        return ""
    return _EMPHASIS.sub("", value)


def parse_campaign_details(text: str) -> CampaignDetails:
    """Scrape campaign name, location and quest from free text.

    Best effort: a line mentioning a marker word contributes the text after
    its first colon. Later lines override earlier ones and missing fields
    keep their defaults.

    Args:
        text: The campaign-opening response

    Returns:
        CampaignDetails with scraped or default values
    """
    found: dict[str, str] = {}
    for line in text.splitlines():
        lowered = line.lower()
        value = _value_after_colon(line)
        if not value:
            continue
        if "campaign" in lowered or "adventure" in lowered:
            found["campaign"] = value
        if "location" in lowered:
            found["location"] = value
        if "quest" in lowered or "hook" in lowered:
            found["quest"] = value
    return CampaignDetails(**found)


def parse_guess_verdict(text: str) -> bool:
    """Read the verdict of a guess-judgment response.

    Returns:
        True only when the response opens with CORRECT
    """
    opening = text.lstrip(" \t\r\n*_#\"'`").upper()
    return opening.startswith("CORRECT")
