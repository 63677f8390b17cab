"""Generation orchestration.

Builds the generation variables from the resolved project and platforms,
drives the prepare / generate / finalize pipeline and, only when all
three phases succeed, runs the follow-on configuration step once.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from fireconf.integrations.projects import BackendProject
from fireconf.utils.console import print_step
from fireconf.utils.logging import log_message
from fireconf.workflow.platforms import PlatformIdentifiers, PlatformSelection

DEFAULT_ORG = "com.example"
# Identity values used by the fixed handoff
PLACEHOLDER_NAME = "coucou"
PLACEHOLDER_DESCRIPTION = "coucou"


class HandoffMode(Enum):
    """How resolved data is handed to generation and the follow-on step.

    FIXED uses placeholder name, org and description (so the target
    directory is always <out>/coucou) and runs the follow-on step with no
    arguments beyond the application directory.
    RESOLVED derives name, org and description from the app and the
    identifiers, and also passes the resolved project and platforms to the
    follow-on step.
    """

    FIXED = "fixed"
    RESOLVED = "resolved"

    @classmethod
    def parse(cls, value: str) -> HandoffMode:
        """Parse a config value, falling back to FIXED for unknown values."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            log_message(f"Unknown handoff mode '{value}', using 'fixed'")
            return cls.FIXED


class GenerationVariables(Mapping[str, str]):
    """Read-only string variables passed to the generation pipeline."""

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = MappingProxyType({str(k): str(v) for k, v in values.items()})

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"GenerationVariables({dict(self._values)!r})"


class GenerationPipeline(Protocol):
    """Three-phase artifact generator."""

    def prepare(self, variables: Mapping[str, str]) -> None: ...

    def generate(self, target_dir: Path, variables: Mapping[str, str]) -> object: ...

    def finalize(self, variables: Mapping[str, str]) -> None: ...


class FollowOnStep(Protocol):
    """Configuration step run after successful generation."""

    def run(self, variables: Mapping[str, str] | None = None) -> None: ...


def _org_from_identifier(identifier: str) -> str:
    """Derive an organization from a reverse-DNS identifier (com.acme.app -> com.acme)."""
    if identifier.count(".") >= 1:
        return identifier.rsplit(".", 1)[0]
    return ""


def build_generation_variables(
    project: BackendProject,
    selection: PlatformSelection,
    identifiers: PlatformIdentifiers,
    handoff: HandoffMode = HandoffMode.FIXED,
    *,
    app_name: str = "",
    description: str = "",
    extra: Mapping[str, str] | None = None,
) -> GenerationVariables:
    """Assemble generation variables.

    The project, platform and identifier keys are always resolved values.
    Only name, org and description depend on ``handoff``.

    Args:
        project: Resolved Firebase project
        selection: Resolved platform selection
        identifiers: Bundle ids / package name from flags ("" = detect downstream)
        handoff: FIXED for placeholder identity values, RESOLVED to derive them
        app_name: Flutter app name; the project id is used when empty (RESOLVED)
        description: App description; the project display name is used when empty (RESOLVED)
        extra: Additional variables (flags forwarded to the pipeline)
    """
    if handoff is HandoffMode.RESOLVED:
        name = app_name or project.project_id
        org = (
            _org_from_identifier(identifiers.android_package_name)
            or _org_from_identifier(identifiers.ios_bundle_id)
            or _org_from_identifier(identifiers.macos_bundle_id)
            or DEFAULT_ORG
        )
        description = description or project.display_name
    else:
        name, org, description = PLACEHOLDER_NAME, DEFAULT_ORG, PLACEHOLDER_DESCRIPTION

    values: dict[str, str] = {
        "name": name,
        "org": org,
        "description": description,
        "project_id": project.project_id,
        "project_display_name": project.display_name,
        "platforms": selection.as_names(),
        "android_package_name": identifiers.android_package_name,
        "ios_bundle_id": identifiers.ios_bundle_id,
        "macos_bundle_id": identifiers.macos_bundle_id,
    }
    for platform, enabled in selection.items():
        values[platform.value] = "true" if enabled else "false"
    if extra:
        values.update(extra)
    return GenerationVariables(values)


class GenerationOrchestrator:
    """Runs the generation pipeline and the follow-on step.

    Attributes:
        pipeline: Generation pipeline
        follow_on: Step run once after successful generation
        output_path: Directory under which the target directory is created
        handoff: What the follow-on step receives
    """

    def __init__(
        self,
        pipeline: GenerationPipeline,
        follow_on: FollowOnStep,
        output_path: Path,
        handoff: HandoffMode = HandoffMode.FIXED,
    ) -> None:
        self.pipeline = pipeline
        self.follow_on = follow_on
        self.output_path = output_path
        self.handoff = handoff

    def target_directory(self, variables: Mapping[str, str]) -> Path:
        return self.output_path / variables["name"]

    def run(self, variables: GenerationVariables) -> Path:
        """Run prepare, generate, finalize, then the follow-on step.

        A failing phase stops the run and its exception propagates as-is.
        Nothing written by earlier phases is cleaned up here.

        Returns:
            The target directory files were generated into
        """
        target_dir = self.target_directory(variables)

        print_step("Preparing configuration templates")
        self.pipeline.prepare(variables)
        print_step(f"Generating configuration in {target_dir}")
        self.pipeline.generate(target_dir, variables)
        self.pipeline.finalize(variables)
        log_message(f"Generation finished in {target_dir}")

        print_step("Running follow-on configuration")
        if self.handoff is HandoffMode.RESOLVED:
            self.follow_on.run(variables)
        else:
            self.follow_on.run()
        return target_dir


__all__ = [
    "DEFAULT_ORG",
    "PLACEHOLDER_DESCRIPTION",
    "PLACEHOLDER_NAME",
    "FollowOnStep",
    "GenerationOrchestrator",
    "GenerationPipeline",
    "GenerationVariables",
    "HandoffMode",
    "build_generation_variables",
]
