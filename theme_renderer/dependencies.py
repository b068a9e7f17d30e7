"""FastAPI dependencies for dependency injection."""

from fastapi import Depends, Request

from theme_renderer.adapters import RequestRouter, ResponseOutputSink, TemplatesViewLoader
from theme_renderer.config import ThemeSettings, get_settings
from theme_renderer.plugins import ThemePluginRegistry
from theme_renderer.views.template_renderer import ThemeRenderer


def get_theme_plugins(request: Request) -> ThemePluginRegistry:
    """
    Get the theme plugin registry from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared ThemePluginRegistry instance.

    Raises:
        RuntimeError: If the registry is not initialized.
    """
    plugins: ThemePluginRegistry | None = getattr(request.app.state, "theme_plugins", None)

    if plugins is None:
        raise RuntimeError("Theme plugin registry not initialized.")

    return plugins


def get_theme_renderer(
    request: Request,
    settings: ThemeSettings = Depends(get_settings),
    plugins: ThemePluginRegistry = Depends(get_theme_plugins),
) -> ThemeRenderer:
    """
    Build a ThemeRenderer for the current request.

    Each request gets its own renderer, so theme, layout, data and messages
    set by one handler never leak into another request.
    """
    return ThemeRenderer(
        settings,
        router=RequestRouter(request),
        view_loader=TemplatesViewLoader(settings.views_dir, settings.template_extension),
        output_sink=ResponseOutputSink(),
        plugins=plugins,
    )
