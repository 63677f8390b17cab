"""Firebase project records and the project service contract.

The create workflow consumes the project-management API only through
ProjectService, so tests and alternative backends can be substituted.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class BackendProject:
    """A Firebase project as returned by the management API.

    Attributes:
        project_id: Globally unique project id (lowercase alphanumerics and dashes)
        display_name: Human-readable project name
        project_number: Numeric project number, when known
        state: Lifecycle state reported by the API (e.g. ACTIVE)
    """

    project_id: str
    display_name: str
    project_number: str = ""
    state: str = ""

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> BackendProject:
        """Build a record from a FirebaseProject JSON resource."""
        project_id = str(data.get("projectId", ""))
        return cls(
            project_id=project_id,
            display_name=str(data.get("displayName") or project_id),
            project_number=str(data.get("projectNumber", "")),
            state=str(data.get("state", "")),
        )

    @property
    def label(self) -> str:
        """Label used in selection prompts."""
        return f"{self.project_id} ({self.display_name})"


@runtime_checkable
class ProjectService(Protocol):
    """Async contract for the project-management API."""

    async def list_projects(self, account: str | None = None) -> Sequence[BackendProject]:
        """Return a full snapshot of the projects visible to ``account``."""
        ...

    async def create_project(
        self, project_id: str, account: str | None = None
    ) -> BackendProject:
        """Create a Firebase project and return it."""
        ...


__all__ = [
    "BackendProject",
    "ProjectService",
]
