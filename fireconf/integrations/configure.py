"""Follow-on configuration step.

After generation succeeds, the create command hands over to a separate
configuration command (``flutterfire configure`` by default). The command
is opaque to this package: it runs synchronously in the application
directory and only its exit status is interpreted.
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Mapping
from pathlib import Path

from fireconf.config.settings import DEFAULT_CONFIGURE_COMMAND
from fireconf.utils.errors import ExternalServiceError
from fireconf.utils.logging import log_command


class ConfigureStep:
    """Runs the follow-on configuration command.

    Attributes:
        command: Command line to run
        cwd: Directory to run the command in
    """

    def __init__(self, command: str = DEFAULT_CONFIGURE_COMMAND, cwd: Path | None = None) -> None:
        self.command = command
        self.cwd = cwd

    def build_argv(self, variables: Mapping[str, str] | None = None) -> list[str]:
        """Build the argument vector.

        With resolved variables the project and platforms are forwarded as
        ``--project`` / ``--platforms``. Otherwise no arguments are added.

        Raises:
            ExternalServiceError: If the command is empty or cannot be parsed
        """
        try:
            argv = shlex.split(self.command)
        except ValueError as e:
            raise ExternalServiceError(
                f"Invalid configuration command {self.command!r}: {e}. "
                "Check FIRECONF_CONFIGURE_COMMAND."
            ) from e
        if not argv:
            raise ExternalServiceError(
                "No configuration command set. "
                "Set FIRECONF_CONFIGURE_COMMAND to the command to run."
            )
        if variables:
            if variables.get("project_id"):
                argv += ["--project", variables["project_id"]]
            if variables.get("platforms"):
                argv += ["--platforms", variables["platforms"]]
        return argv

    def run(self, variables: Mapping[str, str] | None = None) -> None:
        """Run the command and wait for it.

        Raises:
            ExternalServiceError: If the command is missing or exits non-zero
        """
        argv = self.build_argv(variables)
        try:
            result = subprocess.run(argv, cwd=self.cwd, check=False)
        except FileNotFoundError as e:
            log_command(" ".join(argv), 127)
            raise ExternalServiceError(
                f"Configuration command not found: {argv[0]}. "
                "Set FIRECONF_CONFIGURE_COMMAND to the command to run."
            ) from e
        log_command(" ".join(argv), result.returncode)
        if result.returncode != 0:
            raise ExternalServiceError(
                f"Configuration command '{' '.join(argv)}' failed with exit code "
                f"{result.returncode}"
            )


__all__ = [
    "ConfigureStep",
]
