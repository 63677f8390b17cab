"""User interaction abstraction for the create workflow.

Resolvers never call questionary directly. They receive an implementation
of UserInteractionInterface, which enables:
- Testing resolvers with scripted answers
- CI usage where any prompt is a hard error
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from fireconf.ui import prompts
from fireconf.ui.prompts import Validator
from fireconf.utils.console import print_error, print_info, print_success, print_warning
from fireconf.utils.errors import MissingRequiredInputError


class UserInteractionInterface(ABC):
    """Abstract interface for user interactions.

    All user-facing prompts must go through this interface. Prompt methods
    are coroutines; display_message is synchronous.
    """

    @abstractmethod
    async def prompt_input(self, message: str, validator: Validator | None = None) -> str:
        """Ask for free text.

        Args:
            message: Prompt message to display
            validator: Returns True for valid input, else an error message

        Returns:
            User input string
        """

    @abstractmethod
    async def prompt_select(self, message: str, choices: Sequence[str]) -> int:
        """Ask for exactly one of ``choices`` and return its index."""

    @abstractmethod
    async def prompt_multi_select(
        self,
        message: str,
        choices: Sequence[str],
        defaults: Sequence[bool],
    ) -> set[int]:
        """Ask for any subset of ``choices``, pre-checked per ``defaults``.

        Returns:
            Indices of the checked choices
        """

    def display_message(self, message: str, level: str = "info") -> None:
        """Display a message to the user.

        Args:
            message: Message to display
            level: One of "info", "warning", "error", "success"
        """
        printers = {
            "info": print_info,
            "warning": print_warning,
            "error": print_error,
            "success": print_success,
        }
        printers.get(level, print_info)(message)


class QuestionaryUserInteraction(UserInteractionInterface):
    """Terminal implementation backed by questionary prompts."""

    async def prompt_input(self, message: str, validator: Validator | None = None) -> str:
        return await prompts.prompt_input(message, validate=validator)

    async def prompt_select(self, message: str, choices: Sequence[str]) -> int:
        return await prompts.prompt_select(message, choices)

    async def prompt_multi_select(
        self,
        message: str,
        choices: Sequence[str],
        defaults: Sequence[bool],
    ) -> set[int]:
        return await prompts.prompt_multi_select(message, choices, defaults)


class NonInteractiveUserInteraction(UserInteractionInterface):
    """Implementation for unattended runs (CI or --yes).

    Every prompt raises MissingRequiredInputError naming the input the
    prompt would have collected.
    """

    def __init__(self, input_name: str = "interactive input") -> None:
        self.input_name = input_name

    def _refuse(self, message: str) -> MissingRequiredInputError:
        return MissingRequiredInputError(
            self.input_name,
            f"Cannot prompt '{message}' in non-interactive mode. "
            f"Please provide a value for {self.input_name}.",
        )

    async def prompt_input(self, message: str, validator: Validator | None = None) -> str:
        raise self._refuse(message)

    async def prompt_select(self, message: str, choices: Sequence[str]) -> int:
        raise self._refuse(message)

    async def prompt_multi_select(
        self,
        message: str,
        choices: Sequence[str],
        defaults: Sequence[bool],
    ) -> set[int]:
        raise self._refuse(message)


__all__ = [
    "UserInteractionInterface",
    "QuestionaryUserInteraction",
    "NonInteractiveUserInteraction",
]
