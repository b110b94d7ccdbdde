"""Logging setup for dapp-deploy."""

import logging
import sys

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

LOGGER_NAME = "dapp_deploy"

# verbosity count -> lowest level shown
_VERBOSITY_LEVELS = {
    0: NOTICE,
    1: logging.INFO,
    2: logging.DEBUG,
}


def get_logger(name=None):
    return logging.getLogger(name or LOGGER_NAME)


def notice(logger: logging.Logger, msg: str, *args) -> None:
    """Log at NOTICE level."""
    logger.log(NOTICE, msg, *args)


def level_for(verbosity: int, quiet: bool = False) -> int:
    """
    Map CLI verbosity flags to a logging level.

    Args:
        verbosity: Number of -v flags
        quiet: Suppress every message

    Returns:
        Logging level for the package logger
    """
    if quiet:
        return logging.CRITICAL + 1
    return _VERBOSITY_LEVELS[min(max(verbosity, 0), 2)]


def configure_logging(verbosity: int = 0, quiet: bool = False, stream=None) -> logging.Logger:
    """
    Route package log records to stderr at the level chosen by the flags.

    Safe to call more than once; the previous handler is replaced.
    """
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level_for(verbosity, quiet))
    logger.propagate = False
    return logger
