"""Application factory for creating and configuring the FastAPI app."""

from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from theme_renderer import __version__
from theme_renderer.config import ThemeSettings, get_settings
from theme_renderer.core.lifespan import lifespan
from theme_renderer.logging_config import get_logger, log_with_context
from theme_renderer.middleware.error_handlers import register_error_handlers
from theme_renderer.plugins import ThemePluginRegistry
from theme_renderer.routers import pages

logger = get_logger(__name__)


def mount_theme_assets(app: FastAPI, settings: ThemeSettings) -> None:
    """Serve the theme directory at the theme base URL.

    Skipped when the URL points elsewhere (e.g. a CDN) or the directory
    does not exist.
    """
    mount_path = settings.url.rstrip("/")
    theme_root = Path(settings.path)

    if not settings.url.startswith("/") or not mount_path or not theme_root.is_dir():
        log_with_context(
            logger,
            "info",
            "Theme assets are not served by this application",
            url=settings.url,
            theme_path=str(theme_root),
            event_type="static_mount_skipped",
        )
        return

    app.mount(mount_path, StaticFiles(directory=str(theme_root)), name="themes")


def create_app(settings: ThemeSettings | None = None, plugins: ThemePluginRegistry | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Theme settings; defaults to get_settings()
        plugins: Theme plugin registry shared by all requests

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Theme Renderer",
        description="Themed HTML pages rendered from layouts, views and theme assets.",
        version=__version__,
        lifespan=lifespan,
    )

    if settings is None:
        settings = get_settings()
    else:
        app.dependency_overrides[get_settings] = lambda: settings

    app.state.settings = settings
    app.state.theme_plugins = plugins or ThemePluginRegistry()

    register_error_handlers(app)

    mount_theme_assets(app, settings)

    app.include_router(pages.router, tags=["pages"])

    return app
