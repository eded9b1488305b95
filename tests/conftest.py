"""
Shared pytest fixtures.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Leave the shared package logger as it was for later tests."""
    logger = logging.getLogger("meetingfinder")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate

    yield

    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
