"""Utility modules for FIRECONF.

This package contains:
- console: Rich-based terminal output utilities
- env_utils: CI detection and sensitive key handling
- errors: Custom exceptions and exit codes
- logging: Logging configuration
- retry: Exponential backoff for transient API errors
"""

from fireconf.utils.console import (
    console,
    print_error,
    print_header,
    print_info,
    print_step,
    print_success,
    print_warning,
)
from fireconf.utils.env_utils import is_ci, is_sensitive_key, mask_value
from fireconf.utils.errors import (
    ExitCode,
    ExternalServiceError,
    FireconfError,
    GenerationError,
    MissingRequiredInputError,
    ProjectApiError,
    ProjectNotFoundError,
    ProjectRequiredError,
    UserCancelledError,
    ValidationError,
)
from fireconf.utils.logging import log_command, log_message, setup_logging
from fireconf.utils.retry import RetryConfig, calculate_backoff_delay, retry_async

__all__ = [
    # Console
    "console",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    "print_step",
    # Env Utils
    "is_ci",
    "is_sensitive_key",
    "mask_value",
    # Errors
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
    # Logging
    "setup_logging",
    "log_message",
    "log_command",
    # Retry
    "RetryConfig",
    "calculate_backoff_delay",
    "retry_async",
]
