"""Flutter application inspection.

FlutterApp answers the two questions the create workflow asks about the
host application: which platform folders exist, and whether a package is
declared as a dependency in pubspec.yaml. It also provides the default
project id recorded in .firebaserc.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from fireconf.utils.errors import FireconfError
from fireconf.utils.logging import log_message

PUBSPEC_FILE = "pubspec.yaml"
FIREBASERC_FILE = ".firebaserc"


class FlutterAppError(FireconfError):
    """The directory is not a readable Flutter application."""


class FlutterApp:
    """A Flutter application rooted at ``root``.

    Attributes:
        root: Application directory containing pubspec.yaml
        package: Parsed pubspec.yaml contents
    """

    def __init__(self, root: Path, package: dict[str, Any]) -> None:
        self.root = root
        self.package = package

    @classmethod
    def load(cls, root: Path) -> FlutterApp:
        """Read pubspec.yaml from ``root``.

        Raises:
            FlutterAppError: If pubspec.yaml is missing or not a YAML mapping
        """
        pubspec = root / PUBSPEC_FILE
        if not pubspec.is_file():
            raise FlutterAppError(
                f"No {PUBSPEC_FILE} found in {root}. Run this command from the "
                "root of your Flutter application."
            )
        try:
            data = yaml.safe_load(pubspec.read_text()) or {}
        except yaml.YAMLError as e:
            raise FlutterAppError(f"Could not parse {pubspec}: {e}") from e
        if not isinstance(data, dict):
            raise FlutterAppError(f"{pubspec} does not contain a YAML mapping")
        log_message(f"Loaded Flutter app '{data.get('name', '')}' from {root}")
        return cls(root, data)

    @property
    def name(self) -> str:
        return str(self.package.get("name", ""))

    def depends_on_package(self, package_name: str) -> bool:
        """Check dependencies and dev_dependencies for ``package_name``."""
        for section in ("dependencies", "dev_dependencies"):
            deps = self.package.get(section) or {}
            if isinstance(deps, dict) and package_name in deps:
                return True
        return False

    def has_platform(self, platform: str) -> bool:
        """Check whether the platform folder (android, ios, web, ...) exists."""
        return (self.root / platform).is_dir()


def get_default_project_id(root: Path) -> str | None:
    """Read ``projects.default`` from ``root/.firebaserc``.

    Returns None when the file is absent, unreadable, or has no default.
    """
    rc_file = root / FIREBASERC_FILE
    if not rc_file.is_file():
        return None
    try:
        data = json.loads(rc_file.read_text())
    except (OSError, ValueError) as e:
        log_message(f"Ignoring unreadable {rc_file}: {e}")
        return None
    projects = data.get("projects") if isinstance(data, dict) else None
    default = projects.get("default") if isinstance(projects, dict) else None
    return str(default) if default else None


__all__ = [
    "FIREBASERC_FILE",
    "PUBSPEC_FILE",
    "FlutterApp",
    "FlutterAppError",
    "get_default_project_id",
]
