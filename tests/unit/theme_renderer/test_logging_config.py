"""Unit tests for logging configuration."""

import json
import logging

import pytest

from theme_renderer.logging_config import get_logger, log_with_context, setup_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way pytest configured it."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_json(tmp_path, restore_root_logger):
    """Test structured fields end up in the JSON log file."""
    setup_logging("DEBUG", log_dir=tmp_path)
    logger = get_logger("theme_renderer.test")

    log_with_context(logger, "info", "Theme set", theme="dark", event_type="theme_set")
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = (tmp_path / "theme_renderer.log").read_text(encoding="utf-8").splitlines()
    record = json.loads(lines[-1])
    assert record["message"] == "Theme set"
    assert record["theme"] == "dark"
    assert record["event_type"] == "theme_set"
    assert record["levelname"] == "INFO"


def test_setup_logging_sets_level(tmp_path, restore_root_logger):
    root = setup_logging("warning", log_dir=tmp_path)

    assert root.level == logging.WARNING
    assert len(root.handlers) == 2


def test_log_with_context_level(caplog):
    """Test the level name selects the logger method."""
    logger = get_logger("theme_renderer.test")

    with caplog.at_level(logging.DEBUG, logger="theme_renderer.test"):
        log_with_context(logger, "warning", "Layout missing", event_type="layout_fallback")

    assert caplog.records[-1].levelname == "WARNING"
    assert caplog.records[-1].event_type == "layout_fallback"
