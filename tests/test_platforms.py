"""Tests for fireconf.workflow.platforms module.

Tests cover:
- --platforms parsing (case, whitespace, duplicates, unknown tokens)
- Eligibility rules for desktop platforms
- Selection from explicit list vs. detected folders
- Interactive vs. unattended selection
"""

import pytest

from fireconf.integrations.flutter_app import FlutterApp
from fireconf.workflow.context import ResolutionContext
from fireconf.workflow.platforms import (
    ALL_PLATFORMS,
    PLATFORM_PROMPT,
    Platform,
    PlatformIdentifiers,
    PlatformSelection,
    compute_selection,
    detect_platforms,
    eligible_platforms,
    parse_platforms,
    select_platforms,
)
from tests.fakes import ScriptedInteraction
from tests.helpers.flutter import write_flutter_app


class TestParsePlatforms:
    """Tests for parse_platforms."""

    def test_none_and_empty(self):
        assert parse_platforms(None) == ()
        assert parse_platforms("") == ()

    def test_case_and_whitespace_insensitive(self):
        assert parse_platforms("ios,Android, WEB") == (
            Platform.IOS,
            Platform.ANDROID,
            Platform.WEB,
        )

    def test_unknown_tokens_dropped(self):
        assert parse_platforms("android,tvos,,fuchsia") == (Platform.ANDROID,)

    def test_duplicates_keep_first_position(self):
        assert parse_platforms("web,android,WEB") == (Platform.WEB, Platform.ANDROID)


class TestPlatformSelection:
    """Tests for the PlatformSelection mapping."""

    def test_selected_and_names_follow_insertion_order(self):
        selection = PlatformSelection(
            [(Platform.ANDROID, True), (Platform.IOS, False), (Platform.WEB, True)]
        )

        assert selection.selected == (Platform.ANDROID, Platform.WEB)
        assert selection.as_names() == "android,web"
        assert len(selection) == 3

    def test_is_read_only(self):
        selection = PlatformSelection({Platform.ANDROID: True})

        with pytest.raises(TypeError):
            selection._values[Platform.ANDROID] = False

    def test_ineligible_platform_is_not_a_key(self):
        selection = PlatformSelection({Platform.ANDROID: True})

        assert Platform.LINUX not in selection
        with pytest.raises(KeyError):
            selection[Platform.LINUX]


class TestEligibility:
    """Tests for eligible_platforms and detect_platforms."""

    def test_desktop_excluded_without_desktop_package(self, tmp_path):
        app = FlutterApp.load(write_flutter_app(tmp_path / "app", platforms=("linux",)))

        eligible = eligible_platforms(app)

        assert Platform.LINUX not in eligible
        assert Platform.WINDOWS not in eligible
        assert eligible == (Platform.ANDROID, Platform.IOS, Platform.MACOS, Platform.WEB)

    def test_desktop_included_with_desktop_package(self, tmp_path):
        app = FlutterApp.load(write_flutter_app(tmp_path / "app", desktop=True))

        assert eligible_platforms(app) == ALL_PLATFORMS

    def test_detect_reports_existing_folders(self, flutter_app):
        detected = detect_platforms(flutter_app, eligible_platforms(flutter_app))

        assert detected[Platform.ANDROID] is True
        assert detected[Platform.IOS] is True
        assert detected[Platform.WEB] is False
        assert Platform.LINUX not in detected


class TestComputeSelection:
    eligible = (Platform.ANDROID, Platform.IOS, Platform.MACOS, Platform.WEB)

    def test_explicit_list_wins_over_detection(self):
        detected = {Platform.ANDROID: True, Platform.IOS: True}

        selection = compute_selection(self.eligible, (Platform.WEB,), detected)

        assert selection.selected == (Platform.WEB,)
        assert set(selection) == set(self.eligible)

    def test_detection_used_without_explicit_list(self):
        detected = {Platform.ANDROID: True, Platform.MACOS: True}

        selection = compute_selection(self.eligible, (), detected)

        assert selection.selected == (Platform.ANDROID, Platform.MACOS)

    def test_explicit_ineligible_platform_ignored(self):
        selection = compute_selection(self.eligible, (Platform.LINUX, Platform.IOS), {})

        assert selection.selected == (Platform.IOS,)
        assert Platform.LINUX not in selection


class TestSelectPlatforms:
    """Tests for select_platforms."""

    async def test_explicit_list_skips_prompt(self, flutter_app):
        context = ResolutionContext.create(platforms="ios,Android, WEB", environ={})
        interaction = ScriptedInteraction()

        selection = await select_platforms(context, flutter_app, interaction)

        assert selection.selected == (Platform.ANDROID, Platform.IOS, Platform.WEB)
        assert selection[Platform.MACOS] is False
        assert interaction.prompts == []

    async def test_unattended_uses_detection(self, flutter_app):
        context = ResolutionContext.create(accept_defaults=True, environ={})
        interaction = ScriptedInteraction()

        selection = await select_platforms(context, flutter_app, interaction)

        assert selection.selected == (Platform.ANDROID, Platform.IOS)
        assert interaction.prompts == []

    async def test_interactive_prechecks_detected_platforms(self, flutter_app):
        context = ResolutionContext.create(environ={})
        interaction = ScriptedInteraction(multi_selects=[{0, 1}])

        await select_platforms(context, flutter_app, interaction)

        assert interaction.prompts == [("multi_select", PLATFORM_PROMPT)]
        assert interaction.multi_select_defaults == [[True, True, False, False]]

    async def test_interactive_answer_replaces_selection(self, flutter_app):
        context = ResolutionContext.create(environ={})
        # Choices are android, ios, macos, web
        interaction = ScriptedInteraction(multi_selects=[{3}])

        selection = await select_platforms(context, flutter_app, interaction)

        assert selection.selected == (Platform.WEB,)
        assert selection[Platform.ANDROID] is False

    async def test_interactive_empty_answer(self, flutter_app):
        context = ResolutionContext.create(environ={})
        interaction = ScriptedInteraction(multi_selects=[set()])

        selection = await select_platforms(context, flutter_app, interaction)

        assert selection.selected == ()
        assert selection.as_names() == ""


class TestPlatformIdentifiers:
    def test_for_platform(self):
        identifiers = PlatformIdentifiers(android_package_name="com.acme.app")

        assert identifiers.for_platform(Platform.ANDROID) == "com.acme.app"
        assert identifiers.for_platform(Platform.IOS) == ""
        assert identifiers.for_platform(Platform.WEB) is None
