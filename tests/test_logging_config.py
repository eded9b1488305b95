"""
Tests for logging setup.
"""

import logging

from rich.logging import RichHandler

from meetingfinder.logging_config import setup_logging


def test_setup_logging_configures_package_logger():
    logger = setup_logging("DEBUG")

    assert logger.name == "meetingfinder"
    assert logger.level == logging.DEBUG
    assert not logger.propagate
    assert [type(h) for h in logger.handlers] == [RichHandler]


def test_setup_logging_twice_keeps_one_handler():
    setup_logging(logging.INFO)
    logger = setup_logging(logging.WARNING)

    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING


def test_logger_is_restored_between_tests():
    """Records reach the root logger again once a test has finished."""
    logger = logging.getLogger("meetingfinder")

    assert logger.propagate
    assert not any(isinstance(h, RichHandler) for h in logger.handlers)
