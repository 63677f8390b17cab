"""Firebase project resolution.

Resolution is an explicit state machine. Each state is a frozen
dataclass and ProjectResolver.step() maps one state to the next:

    Start ──explicit/default id──▶ Lookup ──found──▶ Resolved
      │                              └──missing──▶ Failed(ProjectNotFoundError)
      └──no id──▶ NoIdKnown ──unattended──▶ Failed(ProjectRequiredError)
                     ├──no projects──▶ PromptCreate ──▶ Resolved
                     └──projects──▶ PromptSelectOrCreate ──pick──▶ Resolved
                                                      └──create──▶ PromptCreate

Errors from the project service (ProjectApiError) propagate unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from fireconf.integrations.projects import BackendProject, ProjectService
from fireconf.ui.interaction import UserInteractionInterface
from fireconf.utils.console import console
from fireconf.utils.errors import (
    FireconfError,
    ProjectNotFoundError,
    ProjectRequiredError,
    ValidationError,
)
from fireconf.utils.logging import log_message
from fireconf.workflow.context import ResolutionContext

PROJECT_ID_PATTERN = re.compile(r"[a-zA-Z0-9-]+")
PROJECT_ID_RULES = (
    "Firebase project ids must be lowercase and contain only alphanumeric and dash characters."
)
CREATE_NEW_PROJECT_LABEL = "<create a new project>"
SELECT_PROJECT_PROMPT = "Select a Firebase project to configure your Flutter application with"
NEW_PROJECT_PROMPT = "Enter a project id for your new Firebase project (e.g. my-cool-project)"
DEFAULT_MAX_PROMPT_ATTEMPTS = 10


def validate_project_id(candidate: str) -> bool | str:
    """Validate a new project id.

    Returns:
        True when valid, otherwise the message explaining the rules
    """
    if PROJECT_ID_PATTERN.fullmatch(candidate):
        return True
    return PROJECT_ID_RULES


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Lookup:
    project_id: str


@dataclass(frozen=True)
class NoIdKnown:
    pass


@dataclass(frozen=True)
class PromptSelectOrCreate:
    projects: tuple[BackendProject, ...]


@dataclass(frozen=True)
class PromptCreate:
    pass


@dataclass(frozen=True)
class Resolved:
    project: BackendProject


@dataclass(frozen=True)
class Failed:
    error: FireconfError


ResolverState = Start | Lookup | NoIdKnown | PromptSelectOrCreate | PromptCreate | Resolved | Failed
TERMINAL_STATES = (Resolved, Failed)


class ProjectResolver:
    """Resolves exactly one Firebase project for an invocation.

    The project list is fetched at most once, whichever path is taken.

    Attributes:
        context: Resolution context for this invocation
        list_calls: Number of list_projects calls made so far
    """

    def __init__(
        self,
        context: ResolutionContext,
        service: ProjectService,
        interaction: UserInteractionInterface,
        *,
        default_project_id: Callable[[], str | None] | None = None,
        max_prompt_attempts: int = DEFAULT_MAX_PROMPT_ATTEMPTS,
    ) -> None:
        self.context = context
        self._service = service
        self._interaction = interaction
        self._default_project_id = default_project_id or (lambda: None)
        self._max_prompt_attempts = max(max_prompt_attempts, 1)
        self._projects: tuple[BackendProject, ...] | None = None
        self.list_calls = 0

    async def resolve(self) -> BackendProject:
        """Run the state machine to a terminal state.

        Raises:
            ProjectRequiredError: Unattended and no project id is known
            ProjectNotFoundError: The requested id is not in the project list
            ValidationError: Too many invalid new project ids
            MissingRequiredInputError: A prompt was needed in unattended mode
            ProjectApiError: The project service failed
        """
        state: ResolverState = Start()
        while not isinstance(state, TERMINAL_STATES):
            next_state = await self.step(state)
            log_message(
                f"Project resolution: {type(state).__name__} -> {type(next_state).__name__}"
            )
            state = next_state

        if isinstance(state, Failed):
            raise state.error
        return state.project

    async def step(self, state: ResolverState) -> ResolverState:
        """Compute the state following ``state``."""
        match state:
            case Start():
                return self._start()
            case NoIdKnown():
                return await self._no_id_known()
            case Lookup(project_id=project_id):
                return await self._lookup(project_id)
            case PromptSelectOrCreate(projects=projects):
                return await self._prompt_select_or_create(projects)
            case PromptCreate():
                return await self._prompt_create()
            case _:
                return state

    def _start(self) -> ResolverState:
        project_id = self.context.explicit_project_id or self._default_project_id()
        if project_id:
            return Lookup(project_id)
        return NoIdKnown()

    async def _no_id_known(self) -> ResolverState:
        if self.context.unattended:
            return Failed(ProjectRequiredError())
        projects = await self._fetch_projects()
        if not projects:
            # Nothing to choose from, go straight to creation
            return PromptCreate()
        return PromptSelectOrCreate(projects)

    async def _lookup(self, project_id: str) -> ResolverState:
        projects = await self._fetch_projects(selecting=project_id)
        for project in projects:
            if project.project_id == project_id:
                return Resolved(project)
        return Failed(ProjectNotFoundError(project_id))

    async def _prompt_select_or_create(self, projects: Sequence[BackendProject]) -> ResolverState:
        choices = [p.label for p in projects] + [CREATE_NEW_PROJECT_LABEL]
        index = await self._interaction.prompt_select(SELECT_PROJECT_PROMPT, choices)
        # Last choice is to create a new project
        if index == len(choices) - 1:
            return PromptCreate()
        return Resolved(projects[index])

    async def _prompt_create(self) -> ResolverState:
        candidate = ""
        for _ in range(self._max_prompt_attempts):
            candidate = await self._interaction.prompt_input(
                NEW_PROJECT_PROMPT, validate_project_id
            )
            verdict = validate_project_id(candidate)
            if verdict is True:
                break
            self._interaction.display_message(str(verdict), level="warning")
        else:
            return Failed(
                ValidationError(
                    candidate,
                    f"{PROJECT_ID_RULES} Gave up after {self._max_prompt_attempts} attempts.",
                )
            )

        with console.status(f"Creating new Firebase project {candidate}...", spinner="dots"):
            project = await self._service.create_project(candidate, self.context.account)
        self._interaction.display_message(
            f"New Firebase project {candidate} created successfully.", level="success"
        )
        return Resolved(project)

    async def _fetch_projects(self, selecting: str | None = None) -> tuple[BackendProject, ...]:
        if self._projects is None:
            with console.status("Fetching available Firebase projects...", spinner="dots"):
                self.list_calls += 1
                self._projects = tuple(await self._service.list_projects(self.context.account))
            message = f"Found {len(self._projects)} Firebase projects."
            if selecting:
                message += f" Selecting project {selecting}."
            self._interaction.display_message(message)
        return self._projects


__all__ = [
    "CREATE_NEW_PROJECT_LABEL",
    "PROJECT_ID_PATTERN",
    "Failed",
    "Lookup",
    "NoIdKnown",
    "ProjectResolver",
    "PromptCreate",
    "PromptSelectOrCreate",
    "Resolved",
    "ResolverState",
    "Start",
    "validate_project_id",
]
