"""Layered configuration loading for FIRECONF.

Values are read from up to three layers and merged, later layers winning:

    global   ~/.fireconf-config
    local    the nearest .fireconf between the cwd and the repository root
    env      FIRECONF_* environment variables

Anything not set by a layer keeps its Settings default.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import fields
from pathlib import Path

from rich.markup import escape

from fireconf.config.settings import CONFIG_FILE, Settings
from fireconf.utils.console import console, print_header, print_info
from fireconf.utils.env_utils import is_sensitive_key, mask_value
from fireconf.utils.logging import log_message

logger = logging.getLogger(__name__)

_ASSIGNMENT = re.compile(r"^(?P<key>[A-Za-z_]\w*)=(?P<value>.*)$")
_TRUTHY = frozenset({"true", "1", "yes"})


def _unquote(raw: str) -> str:
    """Strip surrounding quotes.

    Double-quoted values understand \\\\ and \\" escapes; single-quoted
    values are taken literally.
    """
    if len(raw) >= 2 and raw[0] == raw[-1] == '"':
        return raw[1:-1].replace("\\\\", "\\").replace('\\"', '"')
    if len(raw) >= 2 and raw[0] == raw[-1] == "'":
        return raw[1:-1]
    return raw


def parse_config_lines(lines: Iterable[str]) -> Iterator[tuple[str, str]]:
    """Yield (key, value) pairs from KEY=VALUE lines.

    Blank lines, comments and lines that are not assignments are skipped.
    Nothing is evaluated.
    """
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        match = _ASSIGNMENT.match(line)
        if match:
            yield match["key"], _unquote(match["value"])


def find_local_config(start: Path, name: str) -> Path | None:
    """Look for ``name`` in ``start`` and its parents.

    The search ends at the first directory holding a .git entry or at the
    filesystem root.
    """
    for directory in (start, *start.parents):
        candidate = directory / name
        if candidate.is_file():
            return candidate
        if (directory / ".git").exists():
            return None
    return None


class ConfigManager:
    """Loads Settings from the global file, a local file and the environment.

    Attributes:
        settings: Settings produced by the last load()
        global_config_path: Location of the global config file
        local_config_path: Local .fireconf used by the last load(), if any
    """

    LOCAL_CONFIG_NAME = ".fireconf"

    def __init__(self, global_config_path: Path | None = None) -> None:
        self.global_config_path = global_config_path or CONFIG_FILE
        self.local_config_path: Path | None = None
        self.settings = Settings()
        self._values: dict[str, str] = {}
        self._sources: dict[str, str] = {}

    def load(self) -> Settings:
        """Merge every layer into a fresh Settings instance.

        Calling load() again discards the previous result.
        """
        self._values = {}
        self._sources = {}
        self.local_config_path = find_local_config(Path.cwd(), self.LOCAL_CONFIG_NAME)

        if self.global_config_path.is_file():
            log_message(f"Reading global config {self.global_config_path}")
            self._merge_file(self.global_config_path, "global")
        if self.local_config_path is not None:
            log_message(f"Reading local config {self.local_config_path}")
            self._merge_file(self.local_config_path, f"local ({self.local_config_path})")
        self._merge_environment()

        self.settings = self._build_settings()
        log_message(f"Config loaded: {len(self._values)} keys")
        return self.settings

    def _merge_file(self, path: Path, source: str) -> None:
        with path.open() as f:
            for key, value in parse_config_lines(f):
                self._values[key] = value
                self._sources[key] = source

    def _merge_environment(self) -> None:
        for key in Settings.get_config_keys():
            if key in os.environ:
                self._values[key] = os.environ[key]
                self._sources[key] = "environment"

    def _build_settings(self) -> Settings:
        settings = Settings()
        types = {f.name: type(getattr(settings, f.name)) for f in fields(settings)}
        for key, raw in self._values.items():
            attr = settings.get_attribute_for_key(key)
            if attr is None:
                continue
            kind = types[attr]
            if kind is bool:
                setattr(settings, attr, raw.lower() in _TRUTHY)
            elif kind is int:
                try:
                    setattr(settings, attr, int(raw))
                except ValueError:
                    logger.warning(f"{key}={raw!r} is not an integer, keeping the default")
            else:
                setattr(settings, attr, raw)
        return settings

    def get_config_source(self, key: str) -> str:
        """Layer that supplied ``key``, or "default"."""
        return self._sources.get(key, "default")

    def show(self) -> None:
        """Print the effective configuration with secrets masked."""
        print_header("Current Configuration")
        print_info(f"Global config: {self.global_config_path}")
        print_info(f"Local config:  {self.local_config_path or '(not found)'}")
        console.print()

        for key in Settings.get_config_keys():
            attr = self.settings.get_attribute_for_key(key)
            value = str(getattr(self.settings, attr)) if attr else ""
            shown = mask_value(value) if is_sensitive_key(key) else value
            console.print(
                f"    {key}: {escape(shown) or '(not set)'} "
                f"[dim]({escape(self.get_config_source(key))})[/dim]",
                highlight=False,
            )
        console.print()


__all__ = [
    "ConfigManager",
    "find_local_config",
    "parse_config_lines",
]
