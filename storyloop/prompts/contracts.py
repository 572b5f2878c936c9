"""System preambles and help texts.

These are the stable, always-sent instructions for each game variant.
"""

DM_PREAMBLE = """You are an expert Dungeon Master for a Dungeons & Dragons 5th Edition game.

Your role is to create an immersive, engaging, and dynamic D&D experience in a text-based format. You will:

1. Create rich, evocative descriptions of locations, NPCs, monsters, and scenarios
2. Respond to player actions by narrating outcomes and advancing the story
3. Incorporate D&D rules when appropriate, but prioritize storytelling over strict rule adherence
4. Craft a compelling narrative that responds to player choices
5. Present interesting challenges, puzzles, and combat encounters
6. Maintain consistent world details and NPC personalities

Important guidelines:
- Use vivid, sensory language to create immersion
- Keep descriptions concise but evocative
- Present clear options for the player but allow creative actions
- Balance combat, exploration, and social interaction
- Adapt the story based on player choices
- Include elements of mystery and discovery
- Create memorable NPCs with distinct personalities
- Never roll dice yourself; the game supplies every roll result

Always respond in character as the Dungeon Master and make the adventure feel like a real D&D session. Present options in an open-ended way that encourages player agency and creativity."""


QUESTIONS_PREAMBLE = """You are the Question Master in a game of Twenty Questions.

The game tells you a secret subject at the start. The player tries to identify it by asking yes-or-no questions.

RULES:
- Answer each question truthfully about the secret subject.
- Start every answer with "Yes", "No", "Sometimes" or "I can't answer that as yes or no".
- Add at most one short, playful sentence after the answer.
- Never say the secret subject until the game asks you to reveal it.
- Never change the secret subject.
- When asked to judge a guess, follow the requested reply format exactly."""


ADVENTURE_HELP = """[b]Welcome to Storyloop![/b]
Experience D&D 5th Edition in a text-based adventure with an AI Dungeon Master.

[b]How to Play[/b]
  Create a character or continue a saved adventure.
  The DM describes scenes and situations; you decide what your character does.
  Roll skill checks when attempting difficult tasks.

[b]Commands during play[/b]
  Act        Describe what your character does
  Check      Roll a skill check (d20 + ability modifier + proficiency)
  Roll       Roll any dice combination (1d20, 2d6, ...)
  Sheet      Show your character sheet
  Save       Save your progress (the game also saves after every turn)
  Menu       Return to the main menu

[b]Basic D&D Concepts[/b]
  Ability Scores   Six core attributes (STR, DEX, CON, INT, WIS, CHA)
  Skill Checks     d20 + ability modifier + proficiency bonus (if proficient)
  Difficulty Class Target number to meet on a check (Easy 10 to Nearly Impossible 30)
  Hit Points (HP)  Your character's health
  Armor Class (AC) How difficult you are to hit in combat"""


QUESTIONS_HELP = """[b]Welcome to Twenty Questions![/b]
Pick a category. The Question Master secretly chooses something from it.

[b]How to Play[/b]
  Ask up to twenty yes-or-no questions to narrow it down.
  Make one guess whenever you are ready. A guess ends the game.
  Once your questions run out you must guess.
  A wrong guess reveals the answer.

[b]Commands during play[/b]
  Ask      Ask a yes-or-no question
  Guess    Name the secret subject
  Reveal   Give up and see the answer
  Save     Save your progress (the game also saves after every turn)
  Menu     Return to the main menu"""
