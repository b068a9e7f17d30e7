"""Unit tests for the application entry point."""

import importlib
import sys
from unittest.mock import patch

from theme_renderer import config
from theme_renderer.config import ThemeSettings


def test_logging_configured_from_settings(monkeypatch):
    """Test importing the entry point configures logging with the settings' level."""
    monkeypatch.setattr(config, "_settings_instance", ThemeSettings(log_level="WARNING", _env_file=None))
    monkeypatch.delitem(sys.modules, "theme_renderer.main", raising=False)

    with patch("theme_renderer.logging_config.setup_logging") as setup_logging:
        importlib.import_module("theme_renderer.main")

    setup_logging.assert_called_once_with("WARNING")
