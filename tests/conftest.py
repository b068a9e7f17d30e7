"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from theme_renderer.adapters import StaticRouter
from theme_renderer.config import ThemeSettings
from theme_renderer.plugins import ThemePluginRegistry
from theme_renderer.views.template_renderer import ThemeRenderer

DEFAULT_LAYOUT = "<html><body>{{ renderer.content() }}</body></html>"


def write_file(path: Path, content: str) -> Path:
    """Create ``path`` (and its parents) with ``content``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class RecordingSink:
    """Output sink that remembers what was emitted."""

    def __init__(self):
        self.emitted: list[str] = []

    def emit(self, html: str) -> str:
        self.emitted.append(html)
        return "emitted"


@pytest.fixture
def write():
    """Helper for creating template and asset files."""
    return write_file


@pytest.fixture
def theme_root(tmp_path):
    """Theme directory containing only the default theme's layout."""
    root = tmp_path / "themes"
    write_file(root / "default" / "index.html", DEFAULT_LAYOUT)
    return root


@pytest.fixture
def theme_settings(theme_root, tmp_path):
    """ThemeSettings pointing at the temporary theme tree."""
    return ThemeSettings(
        theme="default",
        layout="index",
        path=theme_root,
        url="http://cdn.test/themes/",
        app_path=tmp_path / "app",
        views_dir=tmp_path / "templates",
    )


@pytest.fixture
def router():
    """Router reporting the blog module's posts/show action."""
    return StaticRouter(current_module="blog", current_controller="posts", current_method="show")


@pytest.fixture
def view_loader():
    """Framework view loader stand-in."""
    loader = MagicMock()
    loader.resolve = MagicMock(return_value="<p>framework view</p>")
    return loader


@pytest.fixture
def output_sink():
    """Sink capturing emitted pages."""
    return RecordingSink()


@pytest.fixture
def plugins():
    """Empty theme plugin registry."""
    return ThemePluginRegistry()


@pytest.fixture
def renderer(theme_settings, router, view_loader, output_sink, plugins):
    """ThemeRenderer wired to the temporary theme tree and test collaborators."""
    return ThemeRenderer(theme_settings, router, view_loader, output_sink, plugins)
