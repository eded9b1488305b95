"""
Logging configuration for the meetingfinder package.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """
    Configure the 'meetingfinder' package logger.

    Log records go to stderr through rich, so they never mix with the
    results printed on stdout.

    Args:
        level: Logging level (e.g. logging.DEBUG or "INFO")
    """
    logger = logging.getLogger("meetingfinder")
    logger.setLevel(level)

    # Avoid duplicate output when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        log_time_format="%H:%M:%S",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("Logging initialized.")
    return logger
