"""
Logging setup for the dockergen CLI.

main.py resolves a level from its flags and calls ``setup_logging()``
once; every module logs through ``logging.getLogger(__name__)``.

Level precedence:
    --debug  >  --verbose  >  --quiet  >  DOCKERGEN_LOG_LEVEL  >  WARNING

A log file (``--log-file`` or DOCKERGEN_LOG_FILE) always gets the full
diagnostic format, at DOCKERGEN_LOG_FILE_LEVEL or the console level.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

import click

LEVEL_ENV = "DOCKERGEN_LOG_LEVEL"
FILE_ENV = "DOCKERGEN_LOG_FILE"
FILE_LEVEL_ENV = "DOCKERGEN_LOG_FILE_LEVEL"

_DIAGNOSTIC_FMT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_CONTEXT_FMT = "%(asctime)s [%(name)s] %(message)s"
_CLOCK = "%H:%M:%S"
_TIMESTAMP = "%Y-%m-%d %H:%M:%S"

_LEVEL_COLORS = {
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


class _ConsoleFormatter(logging.Formatter):
    """Bare messages, with warnings and errors colored for the terminal."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = _LEVEL_COLORS.get(record.levelno)
        if color is None:
            return message
        return click.style(message, fg=color)


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if env is None else env
    return env.get(LEVEL_ENV, "WARNING")


def _console_formatter(numeric_level: int) -> logging.Formatter:
    if numeric_level <= logging.DEBUG:
        return logging.Formatter(_DIAGNOSTIC_FMT, datefmt=_CLOCK)
    if numeric_level <= logging.INFO:
        return logging.Formatter(_CONTEXT_FMT, datefmt=_CLOCK)
    return _ConsoleFormatter("%(message)s")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler (and optional file handler) on the root logger.

    Args:
        level: Console level name.
        log_file: Optional log file path.
        log_file_level: Level for the log file; defaults to ``level``.
    """
    console_level = parse_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_DIAGNOSTIC_FMT, datefmt=_TIMESTAMP))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    # Handler errors (e.g. a closed stderr) must not surface as tracebacks.
    logging.raiseExceptions = False
