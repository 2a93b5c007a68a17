"""Shared fixtures for isotiles tests."""

import logging
from pathlib import Path

import pytest

from isotiles.settings import AppSettings


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    """Settings backed by a throwaway INI file."""
    return AppSettings(settings_file=tmp_path / "settings.ini")


@pytest.fixture
def restore_logging():
    """Undo handler changes made by setup_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
