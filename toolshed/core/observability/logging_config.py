"""
Logging setup for the toolshed CLI.

``toolshed.main`` calls ``setup_logging`` once; modules log through
``logging.getLogger(__name__)`` and never configure handlers themselves.

Console level, highest priority first:
    --debug / --verbose / --quiet  >  TOOLSHED_LOG_LEVEL  >  WARNING

At WARNING the console shows bare ``warning: ...`` / ``error: ...``
lines, e.g. an install-method fallback. A log file can be added with
TOOLSHED_LOG_FILE (level from TOOLSHED_LOG_FILE_LEVEL).
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV = "TOOLSHED_LOG_LEVEL"
FILE_ENV = "TOOLSHED_LOG_FILE"
FILE_LEVEL_ENV = "TOOLSHED_LOG_FILE_LEVEL"

_INFO_FORMAT = "%(asctime)s %(name)s: %(message)s"
_DEBUG_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"
_CONSOLE_DATEFMT = "%H:%M:%S"
_FILE_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"


class _MinimalFormatter(logging.Formatter):
    """``warning: <msg>`` / ``error: <msg>``, nothing else."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.WARNING:
            return f"{record.levelname.lower()}: {message}"
        return message


def level_from_flags(
    *,
    verbose: bool = False,
    quiet: bool = False,
    debug: bool = False,
) -> str:
    """Map the global CLI flags to a level name, falling back to the env."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LEVEL_ENV, "WARNING")


def _to_level(name: str | None) -> int:
    """Level name → number; unknown or empty names mean WARNING."""
    value = logging.getLevelName(name.upper()) if name else None
    return value if isinstance(value, int) else logging.WARNING


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if level <= logging.DEBUG:
        handler.setFormatter(logging.Formatter(_DEBUG_FORMAT, _CONSOLE_DATEFMT))
    elif level <= logging.INFO:
        handler.setFormatter(logging.Formatter(_INFO_FORMAT, _CONSOLE_DATEFMT))
    else:
        handler.setFormatter(_MinimalFormatter())
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler and, if requested, a file handler.

    Args:
        level: Console level name.
        log_file: Log file path; $TOOLSHED_LOG_FILE when omitted.
        log_file_level: File level name; $TOOLSHED_LOG_FILE_LEVEL, then
            the console level, when omitted.
    """
    console_level = _to_level(level)
    handlers = [_console_handler(console_level)]

    log_file = log_file or os.environ.get(FILE_ENV)
    if log_file:
        file_level_name = log_file_level or os.environ.get(FILE_LEVEL_ENV)
        file_level = _to_level(file_level_name) if file_level_name else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    # a closed stderr (CliRunner, pipes) must not raise from emit()
    logging.raiseExceptions = False
