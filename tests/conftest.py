"""Shared pytest fixtures."""
import pytest

from utils.logging import LOGGER_NAME, LoggingManager


@pytest.fixture(autouse=True)
def _reset_logging():
    """Let each test start from an unconfigured application logger."""
    yield
    LoggingManager.get_instance().reset(LOGGER_NAME)
