"""Logging configuration for the application."""

import logging
import sys
from enum import Enum


class VerbosityLevel(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"
    DEBUG = "debug"

    def __ge__(self, other):
        """Allow >= comparison for verbosity filtering."""
        if not isinstance(other, VerbosityLevel):
            return NotImplemented
        levels = list(VerbosityLevel)
        return levels.index(self) >= levels.index(other)

    def __gt__(self, other):
        """Allow > comparison for verbosity filtering."""
        if not isinstance(other, VerbosityLevel):
            return NotImplemented
        levels = list(VerbosityLevel)
        return levels.index(self) > levels.index(other)


# Announcements and streamed command output are INFO, so NORMAL shows them
LEVEL_MAP = {
    VerbosityLevel.QUIET: logging.ERROR,
    VerbosityLevel.NORMAL: logging.INFO,
    VerbosityLevel.VERBOSE: logging.INFO,
    VerbosityLevel.DEBUG: logging.DEBUG,
}


def setup_logger(
    name: str = "scrutinizer",
    level: VerbosityLevel = VerbosityLevel.NORMAL,
) -> logging.Logger:
    """
    Set up and configure logger.

    Args:
        name: Logger name
        level: Verbosity level enum

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Remove existing handlers
    logger.handlers.clear()
    logger.setLevel(LEVEL_MAP[level])

    # Stderr keeps stdout clean for JSON output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(LEVEL_MAP[level])

    if level >= VerbosityLevel.VERBOSE:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
