"""Tests for fireconf.workflow.context module."""

from unittest.mock import call, patch

import pytest

from fireconf.ui.interaction import NonInteractiveUserInteraction
from fireconf.utils.errors import MissingRequiredInputError
from fireconf.workflow.context import ResolutionContext, SessionGuard
from fireconf.workflow.platforms import Platform, PlatformIdentifiers, PlatformSelection
from tests.fakes import ScriptedInteraction


class TestResolutionContext:
    """Tests for ResolutionContext.create."""

    def test_interactive_by_default(self):
        context = ResolutionContext.create(environ={})

        assert context.unattended is False
        assert context.is_ci is False
        assert context.explicit_project_id is None
        assert context.explicit_platforms == ()

    def test_yes_flag_makes_unattended(self):
        context = ResolutionContext.create(accept_defaults=True, environ={})

        assert context.unattended is True
        assert context.is_ci is False
        assert context.accept_defaults is True

    def test_ci_makes_unattended(self):
        context = ResolutionContext.create(environ={"CI": "true"})

        assert context.unattended is True
        assert context.is_ci is True

    def test_empty_strings_become_none(self):
        context = ResolutionContext.create(project_id="", account="", environ={})

        assert context.explicit_project_id is None
        assert context.account is None

    def test_platforms_are_parsed(self):
        context = ResolutionContext.create(platforms="web, IOS", environ={})

        assert context.explicit_platforms == (Platform.WEB, Platform.IOS)

    def test_is_frozen(self):
        context = ResolutionContext.create(environ={})

        with pytest.raises(AttributeError):
            context.unattended = True


class TestSessionGuard:
    """Tests for SessionGuard."""

    def test_require_passes_value_through(self):
        guard = SessionGuard(ResolutionContext.create(accept_defaults=True, environ={}))

        assert guard.require("--project", "my-app") == "my-app"

    def test_require_fails_unattended_without_value(self):
        guard = SessionGuard(ResolutionContext.create(accept_defaults=True, environ={}))

        with pytest.raises(MissingRequiredInputError) as exc_info:
            guard.require("--project", None)

        assert exc_info.value.input_name == "--project"

    def test_require_allows_missing_value_interactively(self):
        guard = SessionGuard(ResolutionContext.create(environ={}))

        assert guard.require("--project", None) is None

    def test_interaction_interactive(self):
        guard = SessionGuard(ResolutionContext.create(environ={}))
        interactive = ScriptedInteraction()

        assert guard.interaction(interactive, "--project") is interactive

    def test_interaction_unattended_refuses_prompts(self):
        guard = SessionGuard(ResolutionContext.create(environ={"CI": "1"}))

        interaction = guard.interaction(ScriptedInteraction(), "--platforms")

        assert isinstance(interaction, NonInteractiveUserInteraction)
        assert interaction.input_name == "--platforms"


class TestRequirePlatformIdentifiers:
    """Per-platform identifiers are mandatory only in CI."""

    selection = PlatformSelection(
        {Platform.ANDROID: True, Platform.IOS: True, Platform.MACOS: False, Platform.WEB: True}
    )

    def test_ci_requires_identifier_for_selected_platforms(self):
        guard = SessionGuard(ResolutionContext.create(environ={"CI": "true"}))
        identifiers = PlatformIdentifiers(android_package_name="com.acme.app")

        with pytest.raises(MissingRequiredInputError) as exc_info:
            guard.require_platform_identifiers(self.selection, identifiers)

        assert exc_info.value.input_name == "--ios-bundle-id"

    def test_ci_with_all_identifiers(self):
        guard = SessionGuard(ResolutionContext.create(environ={"CI": "true"}))
        identifiers = PlatformIdentifiers(
            android_package_name="com.acme.app", ios_bundle_id="com.acme.app"
        )

        guard.require_platform_identifiers(self.selection, identifiers)

    def test_unselected_platform_needs_no_identifier(self):
        guard = SessionGuard(ResolutionContext.create(environ={"CI": "true"}))
        selection = PlatformSelection({Platform.MACOS: False, Platform.WEB: True})

        guard.require_platform_identifiers(selection, PlatformIdentifiers())

    def test_yes_without_ci_does_not_require_identifiers(self):
        guard = SessionGuard(ResolutionContext.create(accept_defaults=True, environ={}))

        guard.require_platform_identifiers(self.selection, PlatformIdentifiers())

    def test_identifier_check_goes_through_require(self):
        guard = SessionGuard(ResolutionContext.create(environ={"CI": "true"}))
        identifiers = PlatformIdentifiers(
            android_package_name="com.acme.app", ios_bundle_id="com.acme.ios"
        )

        with patch.object(guard, "require", wraps=guard.require) as mock_require:
            guard.require_platform_identifiers(self.selection, identifiers)

        assert mock_require.call_args_list == [
            call("--android-package-name", "com.acme.app"),
            call("--ios-bundle-id", "com.acme.ios"),
        ]
