"""Terminal user interface for FIRECONF.

This package contains:
- prompts: Questionary-based prompt helpers
- interaction: Prompt abstraction injected into the resolvers
"""

from fireconf.ui.interaction import (
    NonInteractiveUserInteraction,
    QuestionaryUserInteraction,
    UserInteractionInterface,
)
from fireconf.ui.prompts import (
    custom_style,
    prompt_input,
    prompt_multi_select,
    prompt_select,
)

__all__ = [
    "NonInteractiveUserInteraction",
    "QuestionaryUserInteraction",
    "UserInteractionInterface",
    "custom_style",
    "prompt_input",
    "prompt_multi_select",
    "prompt_select",
]
