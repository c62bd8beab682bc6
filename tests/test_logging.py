"""Tests for logging configuration and the level taken from settings."""

import logging

import pytest

from backend.app.main import create_app
from issue_tracker.config import Settings
from issue_tracker.logging import build_processors, configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_root_level():
    root = logging.getLogger()
    original = root.level
    yield
    root.setLevel(original)


def test_later_call_changes_root_level():
    configure_logging("INFO")
    configure_logging("WARNING")

    assert logging.getLogger().level == logging.WARNING


def test_level_applies_after_logger_created_at_import():
    get_logger("issue_tracker.issues")
    configure_logging("ERROR")

    assert logging.getLogger().level == logging.ERROR


def test_create_app_uses_log_level_setting(test_db):
    configure_logging("INFO")

    create_app(Settings(DATABASE_URL="sqlite://", LOG_LEVEL="DEBUG", DEBUG=False), test_db)

    assert logging.getLogger().level == logging.DEBUG


def test_debug_setting_forces_debug_level(test_db):
    configure_logging("INFO")

    create_app(Settings(DATABASE_URL="sqlite://", LOG_LEVEL="WARNING", DEBUG=True), test_db)

    assert logging.getLogger().level == logging.DEBUG


def test_json_renderer_is_last_processor():
    processors = build_processors(json_logs=True)
    assert processors[-1].__class__.__name__ == "JSONRenderer"
