"""Create workflow.

Wires the context guard, platform selector, project resolver and
generation orchestrator together for one ``fireconf create`` invocation.
All collaborators are injected so the CLI can pass real implementations
and tests can pass doubles.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

from fireconf.integrations.flutter_app import FlutterApp
from fireconf.integrations.projects import BackendProject, ProjectService
from fireconf.ui.interaction import UserInteractionInterface
from fireconf.utils.console import print_header, print_success, print_warning
from fireconf.utils.logging import log_message
from fireconf.workflow.context import ResolutionContext, SessionGuard
from fireconf.workflow.orchestrator import (
    FollowOnStep,
    GenerationOrchestrator,
    GenerationPipeline,
    GenerationVariables,
    HandoffMode,
    build_generation_variables,
)
from fireconf.workflow.platforms import PlatformIdentifiers, PlatformSelection, select_platforms
from fireconf.workflow.project_resolver import DEFAULT_MAX_PROMPT_ATTEMPTS, ProjectResolver

DEFAULT_OUTPUT_PATH = "lib/firebase_options.dart"


@dataclass(frozen=True)
class CreateOptions:
    """Command-line inputs of ``fireconf create``."""

    out: str = DEFAULT_OUTPUT_PATH
    yes: bool = False
    platforms: str | None = None
    project_id: str | None = None
    account: str | None = None
    ios_bundle_id: str | None = None
    macos_bundle_id: str | None = None
    android_package_name: str | None = None
    android_app_id: str | None = None
    apply_gradle_plugins: bool = True
    app_id_json: bool = True


@dataclass(frozen=True)
class CreateResult:
    """Outcome of a successful create run."""

    project: BackendProject
    selection: PlatformSelection
    variables: GenerationVariables
    target_dir: Path


def resolve_android_package_name(options: CreateOptions) -> str:
    """Pick --android-package-name, falling back to the deprecated --android-app-id."""
    if options.android_package_name:
        return options.android_package_name
    if options.android_app_id:
        print_warning(
            "--android-app-id is deprecated. Consider using --android-package-name instead."
        )
        return options.android_app_id
    return ""


async def run_create(
    options: CreateOptions,
    *,
    app: FlutterApp,
    project_service: ProjectService,
    pipeline: GenerationPipeline,
    follow_on: FollowOnStep,
    interaction: UserInteractionInterface,
    default_project_id: Callable[[], str | None] | None = None,
    handoff: HandoffMode = HandoffMode.FIXED,
    max_prompt_attempts: int = DEFAULT_MAX_PROMPT_ATTEMPTS,
    environ: Mapping[str, str] | None = None,
) -> CreateResult:
    """Resolve platforms and project, then generate configuration.

    Raises:
        MissingRequiredInputError: Unattended run lacks a required value
        ProjectRequiredError: Unattended run with no project id
        ProjectNotFoundError: Requested project does not exist
        ValidationError: New project id kept failing validation
        ExternalServiceError: Project API, pipeline or follow-on step failed
    """
    context = ResolutionContext.create(
        project_id=options.project_id,
        platforms=options.platforms,
        accept_defaults=options.yes,
        account=options.account,
        environ=environ,
    )
    guard = SessionGuard(context)
    log_message(
        f"Create: unattended={context.unattended} ci={context.is_ci} "
        f"project={context.explicit_project_id} platforms={options.platforms}"
    )

    print_header("Platforms")
    selection = await select_platforms(
        context, app, guard.interaction(interaction, "--platforms")
    )
    identifiers = PlatformIdentifiers(
        android_package_name=resolve_android_package_name(options),
        ios_bundle_id=options.ios_bundle_id or "",
        macos_bundle_id=options.macos_bundle_id or "",
    )
    guard.require_platform_identifiers(selection, identifiers)

    print_header("Firebase Project")
    resolver = ProjectResolver(
        context,
        project_service,
        guard.interaction(interaction, "--project"),
        default_project_id=default_project_id,
        max_prompt_attempts=max_prompt_attempts,
    )
    project = await resolver.resolve()

    variables = build_generation_variables(
        project,
        selection,
        identifiers,
        handoff,
        app_name=app.name,
        description=str(app.package.get("description") or ""),
        extra={
            "apply_gradle_plugins": "true" if options.apply_gradle_plugins else "false",
            "app_id_json": "true" if options.app_id_json else "false",
        },
    )

    print_header("Generate")
    orchestrator = GenerationOrchestrator(
        pipeline,
        follow_on,
        app.root / options.out,
        handoff=handoff,
    )
    target_dir = orchestrator.run(variables)

    print_success(f"Firebase configuration for {project.project_id} is ready.")
    return CreateResult(
        project=project,
        selection=selection,
        variables=variables,
        target_dir=target_dir,
    )


__all__ = [
    "DEFAULT_OUTPUT_PATH",
    "CreateOptions",
    "CreateResult",
    "resolve_android_package_name",
    "run_create",
]
