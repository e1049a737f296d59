"""Shared pytest fixtures for exprcalc tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_exprcalc_logger():
    """Undo log level changes made by CLI invocations."""
    logger = logging.getLogger("exprcalc")
    level = logger.level
    yield
    logger.setLevel(level)
