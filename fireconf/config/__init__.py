"""Configuration management for FIRECONF."""

from fireconf.config.manager import ConfigManager
from fireconf.config.settings import CONFIG_FILE, Settings

__all__ = [
    "ConfigManager",
    "Settings",
    "CONFIG_FILE",
]
