"""Custom exceptions and exit codes for FIRECONF.

This module defines the exit codes and exception hierarchy used throughout
the application. Every error carries the name of the offending input so
the CLI can report it before terminating with a non-zero exit code.
"""

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Exit codes reported by the CLI.

    These codes are used for consistent error reporting and can be
    checked by calling scripts or CI systems.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    MISSING_INPUT = 2
    PROJECT_ERROR = 3
    USER_CANCELLED = 4
    EXTERNAL_SERVICE_ERROR = 5
    VALIDATION_ERROR = 6


class FireconfError(Exception):
    """Base exception for FIRECONF errors.

    All custom exceptions in this application should inherit from this class.
    Each exception type has an associated exit code for proper error reporting.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        """Initialize the exception."""
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Get the exit code for this exception."""
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


class MissingRequiredInputError(FireconfError):
    """A required value has no non-interactive source.

    Raised when:
    - Running in CI or with --yes and a value would need a prompt
    - A mandatory per-platform identifier is missing in CI
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.MISSING_INPUT

    def __init__(self, input_name: str, message: str | None = None) -> None:
        self.input_name = input_name
        if message is None:
            message = (
                f"Please provide a value for {input_name}. "
                "Interactive prompts are disabled in CI or when --yes is used."
            )
        super().__init__(message)


class ProjectRequiredError(FireconfError):
    """No Firebase project could be resolved without prompting."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.PROJECT_ERROR

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "A Firebase project id is required. Pass --project or set a default "
            "project in .firebaserc."
        )


class ProjectNotFoundError(FireconfError):
    """The requested project id is not in the account's project list."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.PROJECT_ERROR

    def __init__(self, project_id: str) -> None:
        self.project_id = project_id
        super().__init__(
            f"Firebase project '{project_id}' could not be found. Check the id and that "
            "the selected account has access to it."
        )


class ValidationError(FireconfError):
    """A user-supplied value failed validation.

    Attributes:
        value: The rejected value
        reason: Why it was rejected
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.VALIDATION_ERROR

    def __init__(self, value: str, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value '{value}': {reason}")


class ExternalServiceError(FireconfError):
    """A collaborator (project API, generation pipeline) failed."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.EXTERNAL_SERVICE_ERROR


class ProjectApiError(ExternalServiceError):
    """The Firebase project-management API returned an error.

    Attributes:
        status_code: HTTP status code, when the failure was an HTTP response
        operation: Name of the API operation that failed
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str = "",
        status_code: int | None = None,
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        if operation:
            message = f"[{operation}] {message}"
        super().__init__(message)


class GenerationError(ExternalServiceError):
    """A generation pipeline phase failed.

    Attributes:
        phase: The pipeline phase that failed (prepare, generate, finalize)
    """

    def __init__(self, message: str, phase: str = "") -> None:
        self.phase = phase
        super().__init__(message)


class UserCancelledError(FireconfError):
    """User cancelled the operation.

    Raised when:
    - User presses Ctrl+C
    - User dismisses a prompt
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.USER_CANCELLED


__all__ = [
    "ExitCode",
    "FireconfError",
    "MissingRequiredInputError",
    "ProjectRequiredError",
    "ProjectNotFoundError",
    "ValidationError",
    "ExternalServiceError",
    "ProjectApiError",
    "GenerationError",
    "UserCancelledError",
]
