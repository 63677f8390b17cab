"""Create workflow for FIRECONF.

This package contains:
- platforms: Platform enum and platform selection
- context: Resolution context and unattended-mode guard
- project_resolver: Project resolution state machine
- orchestrator: Generation variables and pipeline orchestration
- runner: End-to-end create workflow
"""

from fireconf.workflow.context import ResolutionContext, SessionGuard
from fireconf.workflow.orchestrator import (
    PLACEHOLDER_DESCRIPTION,
    PLACEHOLDER_NAME,
    GenerationOrchestrator,
    GenerationVariables,
    HandoffMode,
    build_generation_variables,
)
from fireconf.workflow.platforms import (
    Platform,
    PlatformIdentifiers,
    PlatformSelection,
    parse_platforms,
    select_platforms,
)
from fireconf.workflow.project_resolver import ProjectResolver, validate_project_id
from fireconf.workflow.runner import CreateOptions, CreateResult, run_create

__all__ = [
    "CreateOptions",
    "CreateResult",
    "GenerationOrchestrator",
    "GenerationVariables",
    "HandoffMode",
    "PLACEHOLDER_DESCRIPTION",
    "PLACEHOLDER_NAME",
    "Platform",
    "PlatformIdentifiers",
    "PlatformSelection",
    "ProjectResolver",
    "ResolutionContext",
    "SessionGuard",
    "build_generation_variables",
    "parse_platforms",
    "run_create",
    "select_platforms",
    "validate_project_id",
]
