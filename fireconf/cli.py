"""Typer application and entry point for the fireconf CLI.

Commands:
    create     Select platforms and a Firebase project, then generate configuration
    configure  Run the follow-on configuration command on its own
"""

import asyncio
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Annotated, TypeVar

import typer

from fireconf.config.manager import ConfigManager
from fireconf.config.settings import Settings
from fireconf.generation.bundle import BundleGenerator
from fireconf.integrations.configure import ConfigureStep
from fireconf.integrations.flutter_app import FlutterApp, get_default_project_id
from fireconf.integrations.management_api import ManagementApiClient
from fireconf.ui.interaction import QuestionaryUserInteraction
from fireconf.utils.console import print_error, print_info, show_version
from fireconf.utils.errors import ExitCode, FireconfError, UserCancelledError
from fireconf.utils.logging import setup_logging
from fireconf.workflow.orchestrator import HandoffMode
from fireconf.workflow.runner import (
    DEFAULT_OUTPUT_PATH,
    CreateOptions,
    CreateResult,
    run_create,
)

app = typer.Typer(
    name="fireconf",
    help="FIRECONF - Configure Flutter applications with Firebase",
    add_completion=False,
    no_args_is_help=True,
)


T = TypeVar("T")


class AsyncLoopAlreadyRunningError(FireconfError):
    """Raised when trying to run async code in an existing event loop."""

    _default_exit_code = ExitCode.GENERAL_ERROR


def run_async(coro_factory: Callable[[], Coroutine[None, None, T]]) -> T:
    """Run a coroutine with asyncio.run(), refusing if a loop is already running.

    Takes a factory so the running-loop check happens before the
    coroutine object exists.

    Raises:
        AsyncLoopAlreadyRunningError: If an event loop is already running
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        raise AsyncLoopAlreadyRunningError(
            "Cannot run async operation: an event loop is already running. "
            "Run fireconf from a synchronous environment."
        )

    return asyncio.run(coro_factory())


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    show_config: Annotated[
        bool,
        typer.Option(
            "--config",
            help="Show current configuration and exit",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version information",
        ),
    ] = None,
) -> None:
    """FIRECONF - Configure Flutter applications with Firebase."""
    setup_logging()
    if show_config:
        config = ConfigManager()
        config.load()
        config.show()
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


async def _run_create_command(
    options: CreateOptions,
    flutter_app: FlutterApp,
    settings: Settings,
) -> CreateResult:
    async with ManagementApiClient.from_settings(settings) as client:
        return await run_create(
            options,
            app=flutter_app,
            project_service=client,
            pipeline=BundleGenerator(),
            follow_on=ConfigureStep(settings.configure_command, cwd=flutter_app.root),
            interaction=QuestionaryUserInteraction(),
            default_project_id=lambda: get_default_project_id(flutter_app.root),
            handoff=HandoffMode.parse(settings.handoff),
            max_prompt_attempts=settings.max_prompt_attempts,
        )


@app.command()
def create(
    out: Annotated[
        str,
        typer.Option(
            "--out",
            "-o",
            help="Where generated configuration is written, relative to the app directory",
        ),
    ] = DEFAULT_OUTPUT_PATH,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip prompts and accept default values",
        ),
    ] = False,
    platforms: Annotated[
        str | None,
        typer.Option(
            "--platforms",
            help="Comma separated platforms to configure (android,ios,macos,web,windows,linux)",
        ),
    ] = None,
    ios_bundle_id: Annotated[
        str | None,
        typer.Option(
            "--ios-bundle-id",
            "-i",
            help="iOS bundle id (detected from the Xcode project when omitted)",
        ),
    ] = None,
    macos_bundle_id: Annotated[
        str | None,
        typer.Option(
            "--macos-bundle-id",
            "-m",
            help="macOS bundle id (detected from the Xcode project when omitted)",
        ),
    ] = None,
    android_app_id: Annotated[
        str | None,
        typer.Option(
            "--android-app-id",
            help="DEPRECATED: use --android-package-name",
        ),
    ] = None,
    android_package_name: Annotated[
        str | None,
        typer.Option(
            "--android-package-name",
            "-a",
            help="Android package name (detected from build.gradle when omitted)",
        ),
    ] = None,
    project: Annotated[
        str | None,
        typer.Option(
            "--project",
            "-p",
            help="Firebase project id to use",
        ),
    ] = None,
    account: Annotated[
        str | None,
        typer.Option(
            "--account",
            "-e",
            help="Account used for Firebase API calls",
        ),
    ] = None,
    app_dir: Annotated[
        Path,
        typer.Option(
            "--app-dir",
            help="Flutter application directory",
        ),
    ] = Path("."),
    apply_gradle_plugins: Annotated[
        bool,
        typer.Option(
            "--apply-gradle-plugins/--no-apply-gradle-plugins",
            hidden=True,
        ),
    ] = True,
    app_id_json: Annotated[
        bool,
        typer.Option(
            "--app-id-json/--no-app-id-json",
            hidden=True,
        ),
    ] = True,
) -> None:
    """Select platforms and a Firebase project, then generate configuration."""
    try:
        config = ConfigManager()
        settings = config.load()
        flutter_app = FlutterApp.load(app_dir.resolve())

        options = CreateOptions(
            out=out,
            yes=yes,
            platforms=platforms,
            project_id=project,
            account=account or settings.default_account or None,
            ios_bundle_id=ios_bundle_id,
            macos_bundle_id=macos_bundle_id,
            android_package_name=android_package_name,
            android_app_id=android_app_id,
            apply_gradle_plugins=apply_gradle_plugins,
            app_id_json=app_id_json,
        )
        run_async(lambda: _run_create_command(options, flutter_app, settings))

    except UserCancelledError as e:
        print_info(f"\n{e}")
        raise typer.Exit(ExitCode.USER_CANCELLED) from e

    except FireconfError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code) from e

    except KeyboardInterrupt as e:
        print_info("\nOperation cancelled by user")
        raise typer.Exit(ExitCode.USER_CANCELLED) from e


@app.command()
def configure(
    app_dir: Annotated[
        Path,
        typer.Option(
            "--app-dir",
            help="Flutter application directory",
        ),
    ] = Path("."),
) -> None:
    """Run the follow-on configuration command in the application directory."""
    try:
        config = ConfigManager()
        settings = config.load()
        ConfigureStep(settings.configure_command, cwd=app_dir.resolve()).run()

    except FireconfError as e:
        print_error(str(e))
        raise typer.Exit(e.exit_code) from e


__all__ = [
    "AsyncLoopAlreadyRunningError",
    "app",
    "run_async",
]
