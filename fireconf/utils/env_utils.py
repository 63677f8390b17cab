"""Environment utilities for FIRECONF.

This module detects continuous-integration environments and identifies
sensitive configuration keys so their values are never printed or logged.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

# Keys containing these substrings are considered sensitive and should not be logged
SENSITIVE_KEY_PATTERNS = ("TOKEN", "KEY", "SECRET", "PASSWORD", "CREDENTIAL")

# Variables set by the common CI providers (GitHub Actions, GitLab, Jenkins, Codemagic, ...)
CI_ENVIRONMENT_VARIABLES = ("CI", "CONTINUOUS_INTEGRATION", "BUILD_NUMBER", "RUN_ID")

_FALSY_VALUES = frozenset({"", "0", "false", "no"})


def is_ci(environ: Mapping[str, str] | None = None) -> bool:
    """Check whether the process runs under continuous integration.

    Args:
        environ: Environment to inspect (defaults to os.environ)

    Returns:
        True if any known CI variable is set to a truthy value
    """
    env = os.environ if environ is None else environ
    return any(
        env.get(name, "").strip().lower() not in _FALSY_VALUES
        for name in CI_ENVIRONMENT_VARIABLES
    )


def is_sensitive_key(key: str) -> bool:
    """Check if a configuration key contains sensitive data.

    Args:
        key: The configuration key name

    Returns:
        True if the key is considered sensitive
    """
    key_upper = key.upper()
    return any(pattern in key_upper for pattern in SENSITIVE_KEY_PATTERNS)


def mask_value(value: str) -> str:
    """Mask a sensitive value for display, keeping only its last 4 characters."""
    if not value:
        return ""
    if len(value) <= 4:
        return "****"
    return f"****{value[-4:]}"


__all__ = [
    "CI_ENVIRONMENT_VARIABLES",
    "SENSITIVE_KEY_PATTERNS",
    "is_ci",
    "is_sensitive_key",
    "mask_value",
]
