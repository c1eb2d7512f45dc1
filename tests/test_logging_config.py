"""
Tests for config.logging_config
"""

from __future__ import annotations

import logging

import pytest

from config.logging_config import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, list(root.handlers)
    yield root
    root.setLevel(saved_level)
    root.handlers[:] = saved_handlers


def test_level_applied_when_runtime_handler_present(root_logger):
    """Lambda installs its own root handler before our code runs."""
    runtime_handler = logging.StreamHandler()
    root_logger.addHandler(runtime_handler)
    root_logger.setLevel(logging.WARNING)

    configure_logging("info")

    assert root_logger.level == logging.INFO
    assert runtime_handler in root_logger.handlers


def test_level_from_settings_string(root_logger):
    configure_logging("DEBUG")

    assert root_logger.level == logging.DEBUG
