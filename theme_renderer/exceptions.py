"""Custom exceptions for the theme renderer with HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    THEME_ERROR = "THEME_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Asset errors
    UNSUPPORTED_ASSET_KIND = "UNSUPPORTED_ASSET_KIND"
    UNSUPPORTED_INPUT = "UNSUPPORTED_INPUT"
    STATIC_ASSET_MISSING = "STATIC_ASSET_MISSING"

    # Template errors
    THEME_CONFIGURATION_MISSING = "THEME_CONFIGURATION_MISSING"
    VIEW_NOT_FOUND = "VIEW_NOT_FOUND"

    # Plugin errors
    PLUGIN_ERROR = "PLUGIN_ERROR"


class ThemeException(Exception):
    """Base exception for theme errors with HTTP status code support.

    All custom exceptions inherit from this class so the error handlers
    can treat them uniformly.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.THEME_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize theme exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class FatalThemeException(ThemeException):
    """Errors that abort the request and are shown as an error page.

    The renderer never catches these; no partial output is produced.
    """


class UnsupportedAssetKindException(FatalThemeException):
    """Asset kind other than css/js."""

    def __init__(self, kind: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"The asset type '{kind}' is not supported (expected css or js)",
            code=ErrorCode.UNSUPPORTED_ASSET_KIND,
            details={"kind": kind, **(details or {})},
        )


class UnsupportedInputException(FatalThemeException):
    """Asset name given as an absolute URL."""

    def __init__(self, value: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"Asset names must be theme-relative, URLs are not understood: {value}",
            code=ErrorCode.UNSUPPORTED_INPUT,
            details={"value": value, **(details or {})},
        )


class ThemeConfigurationMissingException(FatalThemeException):
    """Neither the requested layout nor the default theme layout exists."""

    def __init__(self, default_layout: str, requested_layout: str | None = None):
        if requested_layout is None:
            message = (
                "Make sure you configured your theme (is the themes folder in place?). "
                f"Default theme: {default_layout} not found."
            )
        else:
            message = (
                "Make sure you configured your theme (is the themes folder in place?). "
                f"Requested theme: {requested_layout} not found. "
                f"Default theme: {default_layout} not found."
            )
        details = {"default_layout": default_layout}
        if requested_layout is not None:
            details["requested_layout"] = requested_layout
        super().__init__(message, code=ErrorCode.THEME_CONFIGURATION_MISSING, details=details)


class ViewNotFoundException(FatalThemeException):
    """View could not be resolved by the theme or the framework."""

    def __init__(self, view: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"Unable to load the requested view: {view}",
            code=ErrorCode.VIEW_NOT_FOUND,
            details={"view": view, **(details or {})},
        )


class StaticAssetMissingException(ThemeException):
    """Static asset check failed.

    Recoverable: callers may catch it around ``meta()`` without catching
    fatal theme errors.
    """

    def __init__(self, path: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"File is not exists: {path}",
            code=ErrorCode.STATIC_ASSET_MISSING,
            status_code=404,
            details={"path": path, **(details or {})},
        )


class PluginRegistrationException(ThemeException):
    """Invalid theme plugin or helper registration."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.PLUGIN_ERROR, details=details)
