"""File logging for FIRECONF.

Prompts and spinners own the terminal, so diagnostic output only ever goes
to a log file, and only when asked for:

    FIRECONF_LOG=true          turn file logging on (off by default)
    FIRECONF_LOG_FILE=<path>   where to write (default ~/.fireconf.log)
"""

import logging
import os
from pathlib import Path

LOGGER_NAME = "fireconf"
LOG_ENABLED = os.environ.get("FIRECONF_LOG", "false").lower() == "true"
LOG_FILE = Path(os.environ.get("FIRECONF_LOG_FILE", str(Path.home() / ".fireconf.log")))
LOG_FORMAT = "[%(asctime)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger: logging.Logger | None = None


def _build_handler() -> logging.Handler:
    if not LOG_ENABLED:
        return logging.NullHandler()
    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(LOG_FILE)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def setup_logging() -> logging.Logger:
    """Attach the file (or null) handler to the fireconf logger, once.

    Later calls return the same logger untouched.
    """
    global _logger
    if _logger is None:
        logger = logging.getLogger(LOGGER_NAME)
        logger.handlers.clear()
        logger.addHandler(_build_handler())
        if LOG_ENABLED:
            logger.setLevel(logging.INFO)
        _logger = logger
    return _logger


def get_logger() -> logging.Logger:
    return setup_logging()


def log_message(message: str) -> None:
    """Write ``message`` to the log file, if file logging is on."""
    get_logger().info(message)


def log_command(command: str, exit_code: int = 0) -> None:
    """Record an external command and how it exited."""
    get_logger().info(f"COMMAND: {command} | EXIT_CODE: {exit_code}")


__all__ = [
    "LOG_ENABLED",
    "LOG_FILE",
    "LOGGER_NAME",
    "setup_logging",
    "get_logger",
    "log_message",
    "log_command",
]
