"""Logging setup for command line use.

Library modules only create loggers under the ``histolog`` namespace; this
adapter attaches the one stderr handler the command line tool writes
diagnostics through.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "histolog"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Marks the handler installed here so repeated calls replace it.
_HANDLER_ATTR = "_histolog_cli_handler"


def _level_for(verbosity: int, quiet: bool) -> int:
    """Map -v/-q flags to a logging level.

    - quiet → ERROR
    - 0 → WARNING
    - 1 → INFO
    - 2 or more → DEBUG
    """
    if quiet:
        return logging.ERROR
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def reset_logging() -> None:
    """Remove the handler installed by configure_logging, if any."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_ATTR, False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Send histolog diagnostics to stderr.

    Args:
        verbosity: Number of -v flags given.
        quiet: Only report errors, hiding "not matched" warnings.
        stream: Destination stream. Defaults to sys.stderr.

    Returns:
        The configured ``histolog`` logger.
    """
    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    logger.addHandler(handler)
    logger.setLevel(_level_for(verbosity, quiet))
    return logger
