"""Process-wide logging setup: stderr plus an optional log file."""

import logging
import os
import sys

from brolog.errors import ConfigError

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LEVELS = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
}


def parse_level(name: str) -> int:
    """Map a level name (case-insensitive) to a logging level number."""
    try:
        return LEVELS[name.strip().lower()]
    except (KeyError, AttributeError):
        raise ConfigError(
            f"Unknown log level {name!r} (expected one of: {', '.join(sorted(LEVELS))})"
        ) from None


def configure_logging(level: str = "info", log_file: str | None = None) -> None:
    """Route log records to stderr and, when given, to *log_file*."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        directory = os.path.dirname(log_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=parse_level(level),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def trace(logger: logging.Logger, msg: str, *args) -> None:
    if logger.isEnabledFor(TRACE):
        logger.log(TRACE, msg, *args)
