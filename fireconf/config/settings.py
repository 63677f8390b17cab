"""Settings dataclass for FIRECONF configuration.

This module defines the Settings dataclass that holds all configuration
values together with the mapping between config-file keys and attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_API_BASE_URL = "https://firebase.googleapis.com/v1beta1"
DEFAULT_RESOURCE_MANAGER_URL = "https://cloudresourcemanager.googleapis.com/v1"
DEFAULT_CONFIGURE_COMMAND = "flutterfire configure"


@dataclass
class Settings:
    """Configuration settings for FIRECONF.

    All settings have sensible defaults and can be loaded from
    the configuration file (~/.fireconf-config).

    Attributes:
        access_token: OAuth bearer token for the Firebase Management API
        default_account: Account used when --account is not given
        api_base_url: Base URL of the Firebase Management API
        resource_manager_url: Base URL of the Cloud Resource Manager API
        http_timeout_seconds: Per-request timeout for API calls
        http_max_retries: Retries for transient API failures
        operation_poll_seconds: Interval between long-running operation polls
        operation_max_polls: Poll attempts before giving up on an operation
        configure_command: Follow-on command run after generation
        handoff: What the follow-on step receives ("fixed" or "resolved")
        max_prompt_attempts: Cap on re-prompts for an invalid project id
    """

    # API settings
    access_token: str = ""
    default_account: str = ""
    api_base_url: str = DEFAULT_API_BASE_URL
    resource_manager_url: str = DEFAULT_RESOURCE_MANAGER_URL
    http_timeout_seconds: int = 30
    http_max_retries: int = 3
    operation_poll_seconds: int = 2
    operation_max_polls: int = 60

    # Workflow settings
    configure_command: str = DEFAULT_CONFIGURE_COMMAND
    handoff: str = "fixed"
    max_prompt_attempts: int = 10

    # Config key to attribute mapping
    _key_mapping: dict[str, str] = field(
        default_factory=lambda: {
            "FIRECONF_ACCESS_TOKEN": "access_token",
            "FIRECONF_DEFAULT_ACCOUNT": "default_account",
            "FIRECONF_API_BASE_URL": "api_base_url",
            "FIRECONF_RESOURCE_MANAGER_URL": "resource_manager_url",
            "FIRECONF_HTTP_TIMEOUT_SECONDS": "http_timeout_seconds",
            "FIRECONF_HTTP_MAX_RETRIES": "http_max_retries",
            "FIRECONF_OPERATION_POLL_SECONDS": "operation_poll_seconds",
            "FIRECONF_OPERATION_MAX_POLLS": "operation_max_polls",
            "FIRECONF_CONFIGURE_COMMAND": "configure_command",
            "FIRECONF_HANDOFF": "handoff",
            "FIRECONF_MAX_PROMPT_ATTEMPTS": "max_prompt_attempts",
        },
        repr=False,
    )

    def get_attribute_for_key(self, key: str) -> str | None:
        """Get the attribute name for a config key."""
        return self._key_mapping.get(key)

    @classmethod
    def get_config_keys(cls) -> list[str]:
        """Get list of all valid configuration keys."""
        temp = cls()
        return list(temp._key_mapping.keys())


# Default configuration file path
CONFIG_FILE = Path.home() / ".fireconf-config"


__all__ = [
    "Settings",
    "CONFIG_FILE",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_CONFIGURE_COMMAND",
    "DEFAULT_RESOURCE_MANAGER_URL",
]
