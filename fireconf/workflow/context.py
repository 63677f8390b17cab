"""Resolution context and unattended-mode guard.

The context is computed once per invocation and passed explicitly to the
platform selector and the project resolver. The guard enforces that, when
no prompt may be shown, every required decision has an explicit source.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from fireconf.ui.interaction import NonInteractiveUserInteraction, UserInteractionInterface
from fireconf.utils.env_utils import is_ci as detect_ci
from fireconf.utils.errors import MissingRequiredInputError
from fireconf.workflow.platforms import (
    IDENTIFIER_FLAGS,
    Platform,
    PlatformIdentifiers,
    PlatformSelection,
    parse_platforms,
)


@dataclass(frozen=True)
class ResolutionContext:
    """Inputs for one create invocation.

    Attributes:
        explicit_project_id: Value of --project, if given
        explicit_platforms: Platforms parsed from --platforms
        unattended: True in CI or with --yes; no prompt may be shown
        account: Account identifier used for API calls
        is_ci: Whether a CI environment was detected
        accept_defaults: Whether --yes was given
    """

    explicit_project_id: str | None = None
    explicit_platforms: tuple[Platform, ...] = ()
    unattended: bool = False
    account: str | None = None
    is_ci: bool = False
    accept_defaults: bool = False

    @classmethod
    def create(
        cls,
        *,
        project_id: str | None = None,
        platforms: str | None = None,
        accept_defaults: bool = False,
        account: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> ResolutionContext:
        """Build the context from raw flags and the environment."""
        ci = detect_ci(environ)
        return cls(
            explicit_project_id=project_id or None,
            explicit_platforms=parse_platforms(platforms),
            unattended=ci or accept_defaults,
            account=account or None,
            is_ci=ci,
            accept_defaults=accept_defaults,
        )


class SessionGuard:
    """Enforces explicit inputs for unattended runs."""

    def __init__(self, context: ResolutionContext) -> None:
        self.context = context

    @property
    def unattended(self) -> bool:
        return self.context.unattended

    def require(self, input_name: str, value: str | None) -> str | None:
        """Return ``value``, or fail if unattended and it is empty.

        Raises:
            MissingRequiredInputError: Unattended and no value was supplied
        """
        if self.unattended and not value:
            raise MissingRequiredInputError(input_name)
        return value

    def interaction(
        self, interactive: UserInteractionInterface, input_name: str
    ) -> UserInteractionInterface:
        """Prompt implementation to use for collecting ``input_name``.

        Unattended runs get one that refuses every prompt, naming the input.
        """
        if self.unattended:
            return NonInteractiveUserInteraction(input_name)
        return interactive

    def require_platform_identifiers(
        self, selection: PlatformSelection, identifiers: PlatformIdentifiers
    ) -> None:
        """In CI, require an identifier for each selected native platform.

        Outside CI (including --yes), missing identifiers are left for
        the generation pipeline to detect from the app's native projects.

        Raises:
            MissingRequiredInputError: Naming the first missing flag
        """
        if not self.context.is_ci:
            return
        for platform in selection.selected:
            flag = IDENTIFIER_FLAGS.get(platform)
            if flag:
                self.require(flag, identifiers.for_platform(platform))


__all__ = [
    "ResolutionContext",
    "SessionGuard",
]
