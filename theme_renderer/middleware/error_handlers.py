"""Exception handlers for the application."""

from html import escape
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse, JSONResponse

from theme_renderer.exceptions import FatalThemeException, ThemeException
from theme_renderer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

ERROR_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Error</title>
</head>
<body>
<div id="container">
<h1>An Error Was Encountered</h1>
<p>{message}</p>
</div>
</body>
</html>
"""


async def fatal_theme_exception_handler(request: Request, exc: FatalThemeException) -> HTMLResponse:
    """Abort the request with an HTML error page.

    Nothing the renderer produced before the error is sent.
    """
    log_with_context(
        logger,
        "error",
        "Fatal theme error",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        method=request.method,
        url=str(request.url),
        event_type="theme_error",
    )

    return HTMLResponse(
        ERROR_PAGE.format(message=escape(exc.message)),
        status_code=exc.status_code,
    )


async def theme_exception_handler(request: Request, exc: ThemeException) -> JSONResponse:
    """Handle recoverable theme exceptions that nobody caught."""
    log_with_context(
        logger,
        "warning",
        "Theme error",
        error_code=exc.code.value,
        error_message=exc.message,
        status_code=exc.status_code,
        method=request.method,
        url=str(request.url),
        event_type="theme_error",
    )

    error_content: dict[str, Any] = {"code": exc.code.value, "message": exc.message, "details": exc.details}

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error_content},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions with logging."""
    log_with_context(
        logger,
        "error",
        "Unhandled exception",
        error=str(exc),
        error_type=type(exc).__name__,
        method=request.method,
        url=str(request.url),
        event_type="unhandled_error",
    )
    logger.error("Exception traceback:", exc_info=True)

    # Don't expose internal error details to clients
    return JSONResponse(
        status_code=500,
        content={"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


def register_error_handlers(app) -> None:
    """Register all exception handlers with the application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(FatalThemeException, fatal_theme_exception_handler)
    app.add_exception_handler(ThemeException, theme_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
