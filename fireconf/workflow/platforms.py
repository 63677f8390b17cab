"""Platform selection.

Derives which Flutter platforms to configure from the --platforms flag,
the platform folders present in the app, or an interactive multi-select.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from fireconf import DESKTOP_SUPPORT_PACKAGE
from fireconf.utils.console import print_info
from fireconf.utils.logging import log_message

if TYPE_CHECKING:
    from fireconf.integrations.flutter_app import FlutterApp
    from fireconf.ui.interaction import UserInteractionInterface
    from fireconf.workflow.context import ResolutionContext


class Platform(Enum):
    """Platforms a Flutter app can target."""

    ANDROID = "android"
    IOS = "ios"
    MACOS = "macos"
    WEB = "web"
    WINDOWS = "windows"
    LINUX = "linux"


# Display and prompt order
ALL_PLATFORMS: tuple[Platform, ...] = (
    Platform.ANDROID,
    Platform.IOS,
    Platform.MACOS,
    Platform.WEB,
    Platform.WINDOWS,
    Platform.LINUX,
)
DESKTOP_PLATFORMS: frozenset[Platform] = frozenset({Platform.WINDOWS, Platform.LINUX})

PLATFORM_PROMPT = (
    "Which platforms should your configuration support (use arrow keys & space to select)?"
)


def parse_platforms(text: str | None) -> tuple[Platform, ...]:
    """Parse a comma separated platform list.

    Tokens are trimmed and lowercased; unknown tokens are dropped and
    duplicates keep their first position.

    Example:
        >>> parse_platforms("ios,Android, WEB,tvos")
        (<Platform.IOS: 'ios'>, <Platform.ANDROID: 'android'>, <Platform.WEB: 'web'>)
    """
    if not text:
        return ()
    known = {p.value: p for p in Platform}
    parsed: list[Platform] = []
    for token in text.split(","):
        platform = known.get(token.strip().lower())
        if platform is not None and platform not in parsed:
            parsed.append(platform)
    return tuple(parsed)


class PlatformSelection(Mapping[Platform, bool]):
    """Immutable mapping of eligible platform to "configure it" flag.

    Keys are exactly the eligible platforms. A platform that is not a key
    is not eligible for this app, which is different from being False.
    """

    def __init__(self, values: Mapping[Platform, bool] | Iterable[tuple[Platform, bool]]) -> None:
        items = dict(values)
        self._values = MappingProxyType(items)

    def __getitem__(self, platform: Platform) -> bool:
        return self._values[platform]

    def __iter__(self) -> Iterator[Platform]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        inner = ", ".join(f"{p.value}={v}" for p, v in self._values.items())
        return f"PlatformSelection({inner})"

    @property
    def selected(self) -> tuple[Platform, ...]:
        """Platforms marked True, in eligible order."""
        return tuple(p for p, enabled in self._values.items() if enabled)

    def as_names(self) -> str:
        """Comma separated names of the selected platforms."""
        return ",".join(p.value for p in self.selected)


def eligible_platforms(app: FlutterApp) -> tuple[Platform, ...]:
    """Platforms that can be configured for ``app``.

    Windows and Linux are only eligible when the app depends on the
    desktop-capable Firebase core package.
    """
    desktop = app.depends_on_package(DESKTOP_SUPPORT_PACKAGE)
    return tuple(p for p in ALL_PLATFORMS if desktop or p not in DESKTOP_PLATFORMS)


def detect_platforms(app: FlutterApp, eligible: Iterable[Platform]) -> dict[Platform, bool]:
    """Report which eligible platforms have a folder in the app."""
    return {p: app.has_platform(p.value) for p in eligible}


def compute_selection(
    eligible: Iterable[Platform],
    explicit: Iterable[Platform],
    detected: Mapping[Platform, bool],
) -> PlatformSelection:
    """Combine the explicit list and detection into a selection.

    A non-empty explicit list wins outright; otherwise detection decides.
    """
    explicit_set = frozenset(explicit)
    if explicit_set:
        return PlatformSelection((p, p in explicit_set) for p in eligible)
    return PlatformSelection((p, bool(detected.get(p, False))) for p in eligible)


@dataclass(frozen=True)
class PlatformIdentifiers:
    """Per-platform app identifiers supplied on the command line.

    Empty values are left for the generation pipeline to detect.
    """

    android_package_name: str = ""
    ios_bundle_id: str = ""
    macos_bundle_id: str = ""

    def for_platform(self, platform: Platform) -> str | None:
        """Identifier for ``platform``, or None for platforms that have none."""
        return {
            Platform.ANDROID: self.android_package_name,
            Platform.IOS: self.ios_bundle_id,
            Platform.MACOS: self.macos_bundle_id,
        }.get(platform)


# Flag used to supply each platform's identifier
IDENTIFIER_FLAGS: dict[Platform, str] = {
    Platform.ANDROID: "--android-package-name",
    Platform.IOS: "--ios-bundle-id",
    Platform.MACOS: "--macos-bundle-id",
}


async def select_platforms(
    context: ResolutionContext,
    app: FlutterApp,
    interaction: UserInteractionInterface,
) -> PlatformSelection:
    """Resolve the platforms to configure.

    With an explicit list, or when unattended, the computed selection is
    reported and used as-is. Otherwise it pre-checks a multi-select and
    the user's answer replaces it entirely.
    """
    eligible = eligible_platforms(app)
    detected = detect_platforms(app, eligible)
    computed = compute_selection(eligible, context.explicit_platforms, detected)
    log_message(f"Computed platform selection: {computed!r}")

    if context.explicit_platforms or context.unattended:
        print_info(f"Selected platforms: {computed.as_names() or '(none)'}")
        return computed

    keys = list(computed)
    answers = await interaction.prompt_multi_select(
        PLATFORM_PROMPT,
        [p.value for p in keys],
        [computed[p] for p in keys],
    )
    selection = PlatformSelection((p, i in answers) for i, p in enumerate(keys))
    log_message(f"User platform selection: {selection!r}")
    return selection


__all__ = [
    "ALL_PLATFORMS",
    "DESKTOP_PLATFORMS",
    "IDENTIFIER_FLAGS",
    "Platform",
    "PlatformIdentifiers",
    "PlatformSelection",
    "compute_selection",
    "detect_platforms",
    "eligible_platforms",
    "parse_platforms",
    "select_platforms",
]
