"""Tests for fireconf.integrations.flutter_app module."""

import json

import pytest

from fireconf.integrations.flutter_app import (
    FlutterApp,
    FlutterAppError,
    get_default_project_id,
)
from tests.helpers.flutter import write_flutter_app


class TestFlutterAppLoad:
    """Tests for FlutterApp.load."""

    def test_reads_pubspec(self, flutter_app_dir):
        app = FlutterApp.load(flutter_app_dir)

        assert app.name == "my_app"
        assert app.root == flutter_app_dir
        assert app.package["description"] == "A Flutter app"

    def test_missing_pubspec(self, tmp_path):
        with pytest.raises(FlutterAppError, match="No pubspec.yaml"):
            FlutterApp.load(tmp_path)

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "pubspec.yaml").write_text("name: [unclosed\n")

        with pytest.raises(FlutterAppError, match="Could not parse"):
            FlutterApp.load(tmp_path)

    def test_non_mapping_yaml(self, tmp_path):
        (tmp_path / "pubspec.yaml").write_text("- just\n- a list\n")

        with pytest.raises(FlutterAppError, match="YAML mapping"):
            FlutterApp.load(tmp_path)

    def test_empty_pubspec(self, tmp_path):
        (tmp_path / "pubspec.yaml").write_text("")

        assert FlutterApp.load(tmp_path).name == ""


class TestFlutterAppQueries:
    @pytest.mark.parametrize(
        ("platform", "expected"),
        [("android", True), ("ios", True), ("macos", False), ("web", False), ("linux", False)],
    )
    def test_platform_folders(self, flutter_app, platform, expected):
        assert flutter_app.has_platform(platform) is expected

    def test_depends_on_package(self, flutter_app):
        assert flutter_app.depends_on_package("firebase_core") is True
        assert flutter_app.depends_on_package("firebase_core_desktop") is False

    def test_dev_dependencies_count(self, tmp_path):
        root = write_flutter_app(tmp_path / "app")
        pubspec = root / "pubspec.yaml"
        pubspec.write_text(
            pubspec.read_text() + "\ndev_dependencies:\n  firebase_core_desktop: any\n"
        )

        assert FlutterApp.load(root).depends_on_package("firebase_core_desktop") is True

    def test_file_is_not_a_platform_folder(self, flutter_app_dir):
        (flutter_app_dir / "web").write_text("not a folder")

        assert FlutterApp.load(flutter_app_dir).has_platform("web") is False


class TestDefaultProjectId:
    """Tests for get_default_project_id."""

    def test_reads_default(self, tmp_path):
        (tmp_path / ".firebaserc").write_text(
            json.dumps({"projects": {"default": "alpha-app", "staging": "alpha-staging"}})
        )

        assert get_default_project_id(tmp_path) == "alpha-app"

    def test_missing_file(self, tmp_path):
        assert get_default_project_id(tmp_path) is None

    def test_invalid_json(self, tmp_path):
        (tmp_path / ".firebaserc").write_text("{not json")

        assert get_default_project_id(tmp_path) is None

    @pytest.mark.parametrize(
        "content",
        [{}, {"projects": {}}, {"projects": "alpha"}, [], {"projects": {"default": ""}}],
    )
    def test_no_default(self, tmp_path, content):
        (tmp_path / ".firebaserc").write_text(json.dumps(content))

        assert get_default_project_id(tmp_path) is None
