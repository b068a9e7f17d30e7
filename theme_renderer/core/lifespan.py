"""Application lifespan management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from theme_renderer import __version__
from theme_renderer.config import get_settings
from theme_renderer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan - startup and shutdown events.

    Exceptions after yield are re-raised so cleanup still runs.
    """
    settings = app.state.settings if hasattr(app.state, "settings") else get_settings()

    log_with_context(
        logger,
        "info",
        "Starting theme renderer application",
        version=__version__,
        theme=settings.theme,
        theme_path=str(settings.path),
        event_type="app_startup",
    )

    default_layout = Path(settings.path) / "default" / f"index{settings.template_extension}"
    if not default_layout.is_file():
        log_with_context(
            logger,
            "warning",
            "Default theme layout not found, pages will fail if the active theme has no layout",
            default_layout=str(default_layout),
            event_type="theme_config_check",
        )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down theme renderer application",
            event_type="app_shutdown",
        )
