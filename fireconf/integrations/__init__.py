"""External integrations for FIRECONF.

This package contains:
- projects: BackendProject record and the ProjectService contract
- management_api: httpx client for the Firebase Management API
- flutter_app: pubspec.yaml / platform folder inspection and .firebaserc lookup
- configure: Follow-on configuration command
"""

from fireconf.integrations.configure import ConfigureStep
from fireconf.integrations.flutter_app import (
    FlutterApp,
    FlutterAppError,
    get_default_project_id,
)
from fireconf.integrations.management_api import ManagementApiClient
from fireconf.integrations.projects import BackendProject, ProjectService

__all__ = [
    "BackendProject",
    "ConfigureStep",
    "FlutterApp",
    "FlutterAppError",
    "ManagementApiClient",
    "ProjectService",
    "get_default_project_id",
]
