"""Core utility functions: leveled console logging and command lookup."""

import shutil

from rich.console import Console

from gitstamp.config import LOG_LEVELS

console = Console()
err_console = Console(stderr=True)

_log_settings = {"level": "info", "silent": False}


def configure_logging(level: str = "info", silent: bool = False) -> None:
    """Set the process-wide log level and silent flag used by log()."""
    _log_settings["level"] = level if level in LOG_LEVELS else "info"
    _log_settings["silent"] = silent


def is_enabled(level: str) -> bool:
    """Pure-ish check: would a message at *level* be printed right now?"""
    if _log_settings["silent"]:
        return False
    current = LOG_LEVELS[_log_settings["level"]]
    return LOG_LEVELS.get(level, LOG_LEVELS["info"]) <= current


def log(level: str, message: str, style: str = "") -> None:
    """Print a message if its level is enabled.

    Warnings and errors go to stderr, everything else to stdout.
    Markup is disabled so refs and paths containing brackets print verbatim.
    """
    if not is_enabled(level):
        return
    target = err_console if level in ("error", "warn") else console
    if style:
        target.print(message, style=style, markup=False, highlight=False)
    else:
        target.print(message, markup=False, highlight=False)


def check_command(name: str) -> bool:
    """Check if a command is available on PATH."""
    return shutil.which(name) is not None
