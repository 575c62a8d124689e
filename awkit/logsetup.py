"""Logging set-up: coloured lines on stdout, plain messages in a log file."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from awkit.dirs import get_log_dir

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_COLORS = {
    logging.DEBUG: "\x1b[37m",
    logging.INFO: "\x1b[32m",
    logging.WARNING: "\x1b[33m",
    logging.ERROR: "\x1b[31m",
}
_RESET = "\x1b[0m"
_MARK = "_awkit_handler"


def resolve_log_level(testing: bool, verbose: bool, env_value: str | None = None) -> int:
    """Pick the log level from a LOG_LEVEL value, falling back to the mode's default."""
    default = logging.DEBUG if testing or verbose else logging.INFO
    if env_value is None:
        return default
    return _LEVELS.get(env_value.lower(), default)


def log_filename(module: str, testing: bool, now: datetime | None = None) -> str:
    """Return the name of a new log file for ``module`` started at ``now``."""
    if now is None:
        now = datetime.now().astimezone()
    prefix = f"{module}-testing" if testing else module
    return f"{prefix}_{now.strftime('%Y-%m-%dT%H-%M-%S%z')}.log"


class _ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname
        color = _COLORS.get(record.levelno)
        if color is not None:
            level = f"{color}{level}{_RESET}"
        return f"[{stamp}][{level}][{record.name}]: {record.getMessage()}"


def _log_uncaught(exc_type, exc, tb, _previous=sys.excepthook) -> None:
    logging.getLogger().critical("Uncaught exception", exc_info=(exc_type, exc, tb))
    _previous(exc_type, exc, tb)


def setup_logger(
    module: str, testing: bool, verbose: bool, log_dir: Path | str | None = None
) -> Path:
    """Configure the root logger and return the path of the new log file."""
    directory = Path(log_dir) if log_dir is not None else get_log_dir(module)
    directory.mkdir(parents=True, exist_ok=True)
    logfile = directory / log_filename(module, testing)

    level = resolve_log_level(testing, verbose, os.environ.get("LOG_LEVEL"))
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _MARK, False):
            root.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(_ConsoleFormatter())
    file_handler = logging.FileHandler(logfile, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    for handler in (console, file_handler):
        setattr(handler, _MARK, True)
        root.addHandler(handler)
    root.setLevel(level)

    sys.excepthook = _log_uncaught
    return logfile