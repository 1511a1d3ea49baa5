"""
Personality module - Combines all personality parts into the system prompt.
"""

from config.personality.backstory import BACKSTORY
from config.personality.instructions import FALLBACK_REPLY, INSTRUCTIONS
from config.personality.never_say import NEVER_SAY


def build_system_prompt(name: str, instance: str) -> str:
    """Combine the personality parts for a bot called `name` on `instance`."""
    return BACKSTORY.format(name=name, instance=instance) + NEVER_SAY + INSTRUCTIONS


__all__ = ["build_system_prompt", "BACKSTORY", "INSTRUCTIONS", "NEVER_SAY", "FALLBACK_REPLY"]
