"""Interactive prompts for FIRECONF.

This module provides Questionary-based user input prompts with
consistent styling and error handling. Prompts are awaited with
ask_async() on the caller's event loop. Selection prompts return the
index of the chosen entry so callers never depend on label text.
"""

from collections.abc import Callable, Sequence

import questionary
from questionary import Style

from fireconf.utils.errors import UserCancelledError
from fireconf.utils.logging import log_message

# Validator contract: True when valid, otherwise the message to show.
Validator = Callable[[str], bool | str]

# Custom style matching the application theme
custom_style = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:green bold"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:green"),
        ("separator", "fg:cyan"),
        ("instruction", "fg:white"),
        ("text", ""),
        ("disabled", "fg:gray italic"),
    ]
)


async def prompt_input(
    message: str,
    *,
    validate: Validator | None = None,
    default: str = "",
) -> str:
    """Prompt for text input.

    Args:
        message: Prompt message
        validate: Optional validation function; questionary re-asks until it passes
        default: Default value

    Returns:
        User input string

    Raises:
        UserCancelledError: If user presses Ctrl+C
    """
    log_message(f"Prompt input: {message}")

    try:
        result = await questionary.text(
            message,
            default=default,
            validate=validate,
            style=custom_style,
        ).ask_async()

        if result is None:
            raise UserCancelledError("User cancelled input prompt")

        log_message(f"User input: {result[:50]}")
        return str(result)

    except KeyboardInterrupt as e:
        raise UserCancelledError("User cancelled with Ctrl+C") from e


async def prompt_select(message: str, choices: Sequence[str]) -> int:
    """Prompt for a single selection from a list.

    Args:
        message: Prompt message
        choices: Labels to display

    Returns:
        Index of the selected label

    Raises:
        UserCancelledError: If user presses Ctrl+C
    """
    log_message(f"Prompt select: {message}")

    try:
        result = await questionary.select(
            message,
            choices=[questionary.Choice(label, value=i) for i, label in enumerate(choices)],
            style=custom_style,
        ).ask_async()

        if result is None:
            raise UserCancelledError("User cancelled selection prompt")

        log_message(f"User selected: {choices[result]}")
        return int(result)

    except KeyboardInterrupt as e:
        raise UserCancelledError("User cancelled with Ctrl+C") from e


async def prompt_multi_select(
    message: str,
    choices: Sequence[str],
    defaults: Sequence[bool] | None = None,
) -> set[int]:
    """Prompt for multiple selections from a list.

    Args:
        message: Prompt message
        choices: Labels to display
        defaults: Pre-checked state per label

    Returns:
        Indices of the checked labels

    Raises:
        UserCancelledError: If user presses Ctrl+C
    """
    log_message(f"Prompt multi-select: {message}")
    checked = list(defaults) if defaults is not None else [False] * len(choices)

    try:
        result = await questionary.checkbox(
            message,
            choices=[
                questionary.Choice(label, value=i, checked=checked[i])
                for i, label in enumerate(choices)
            ],
            style=custom_style,
        ).ask_async()

        if result is None:
            raise UserCancelledError("User cancelled checkbox prompt")

        log_message(f"User selected: {[choices[i] for i in result]}")
        return {int(i) for i in result}

    except KeyboardInterrupt as e:
        raise UserCancelledError("User cancelled with Ctrl+C") from e


__all__ = [
    "Validator",
    "custom_style",
    "prompt_input",
    "prompt_select",
    "prompt_multi_select",
]
