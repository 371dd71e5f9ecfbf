"""Diagnostic logging for the haiku_commit package."""

import logging
import sys

LOGGER_NAME = "haiku_commit"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Call this once at startup. Logs go to stderr so stdout stays pipeable."""
    logger = logging.getLogger(LOGGER_NAME)

    # Clear any existing handlers (prevents duplicates)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False

    set_debug(debug)
    return logger


def set_debug(enabled: bool) -> None:
    """Toggle debug lines at runtime. Info, warnings and errors are always emitted."""
    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if enabled else logging.INFO)


def is_debug_enabled() -> bool:
    return logging.getLogger(LOGGER_NAME).isEnabledFor(logging.DEBUG)
