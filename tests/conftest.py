"""Shared pytest fixtures for FIRECONF tests."""

from pathlib import Path

import pytest

from fireconf.config.settings import Settings
from fireconf.integrations.flutter_app import FlutterApp
from fireconf.integrations.projects import BackendProject
from fireconf.utils.env_utils import CI_ENVIRONMENT_VARIABLES
from tests.helpers.flutter import write_flutter_app


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove CI markers and FIRECONF_* overrides inherited from the host."""
    for name in CI_ENVIRONMENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    for key in Settings.get_config_keys():
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def flutter_app_dir(tmp_path: Path) -> Path:
    """Flutter app with android and ios folders."""
    return write_flutter_app(tmp_path / "my_app")


@pytest.fixture
def flutter_app(flutter_app_dir: Path) -> FlutterApp:
    return FlutterApp.load(flutter_app_dir)


@pytest.fixture
def sample_projects() -> list[BackendProject]:
    return [
        BackendProject(project_id="alpha-app", display_name="Alpha"),
        BackendProject(project_id="beta-app", display_name="Beta"),
    ]
