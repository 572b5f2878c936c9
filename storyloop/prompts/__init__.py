"""Prompt contracts and builders for both game variants."""

from .contracts import ADVENTURE_HELP, DM_PREAMBLE, QUESTIONS_HELP, QUESTIONS_PREAMBLE
from .builder import (
    SCENE_SETTING_PROMPT,
    CampaignDetails,
    build_action_prompt,
    build_campaign_prompt,
    build_category_prompt,
    build_guess_prompt,
    build_question_prompt,
    build_reveal_prompt,
    build_skill_check_prompt,
    build_subject_prompt,
    parse_campaign_details,
    parse_guess_verdict,
)

__all__ = [
    "ADVENTURE_HELP", "DM_PREAMBLE", "QUESTIONS_HELP", "QUESTIONS_PREAMBLE",
    "SCENE_SETTING_PROMPT", "CampaignDetails",
    "build_action_prompt", "build_campaign_prompt", "build_category_prompt",
    "build_guess_prompt", "build_question_prompt", "build_reveal_prompt",
    "build_skill_check_prompt", "build_subject_prompt",
    "parse_campaign_details", "parse_guess_verdict",
]
