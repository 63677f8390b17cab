"""Rich-based console output utilities.

Messages are escaped before printing, so text such as "[list projects]"
is shown as-is and never parsed as markup. Status messages are also
written to the log file.
"""

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from fireconf import SCRIPT_NAME, __version__
from fireconf.utils.logging import log_message

custom_theme = Theme(
    {
        "error": "bold red",
        "success": "bold green",
        "warning": "bold yellow",
        "info": "bold blue",
        "header": "bold magenta",
        "step": "bold cyan",
        "highlight": "bold white",
    }
)

console = Console(theme=custom_theme)
console_err = Console(theme=custom_theme, stderr=True)

# level -> (tag style, message colour)
_LEVELS: dict[str, tuple[str, str]] = {
    "ERROR": ("error", "red"),
    "SUCCESS": ("success", "green"),
    "WARNING": ("warning", "yellow"),
    "INFO": ("info", "cyan"),
}


def _emit(level: str, message: str, target: Console = console) -> None:
    style, colour = _LEVELS[level]
    target.print(f"[{style}][[{level}]][/{style}] [{colour}]{escape(message)}[/{colour}]")
    log_message(f"{level}: {message}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    _emit("ERROR", message, console_err)


def print_success(message: str) -> None:
    _emit("SUCCESS", message)


def print_warning(message: str) -> None:
    _emit("WARNING", message)


def print_info(message: str) -> None:
    _emit("INFO", message)


def print_header(title: str) -> None:
    """Print a section header surrounded by blank lines."""
    console.print()
    console.print(f"[header]=== {escape(title)} ===[/header]")
    console.print()


def print_step(message: str) -> None:
    console.print(f"[step]➜[/step] {escape(message)}")


def show_version() -> None:
    console.print(f"[bold]{SCRIPT_NAME}[/bold] v{__version__}")


__all__ = [
    "console",
    "console_err",
    "custom_theme",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    "print_step",
    "show_version",
]
