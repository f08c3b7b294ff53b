"""Shared fixtures for the whole test suite."""

import logging

import pytest

from digipin.config import Config


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Put back the root logger's handlers after tests that reconfigure logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def test_config():
    """Defaults-only Config (discovered config files are ignored under pytest)."""
    return Config()


@pytest.fixture
def sample_points():
    """Known coordinates and their published or reference codes."""
    return {
        'dak_bhawan': ((28.622788, 77.213033), '39J-49L-L8T4'),
        'new_delhi': ((28.6139, 77.2090), '39J-438-TJC7'),
        'bengaluru': ((12.9716, 77.5946), '4P3-JK8-52C9'),
        'mumbai': ((19.0760, 72.8777), '4FK-595-8823'),
    }
