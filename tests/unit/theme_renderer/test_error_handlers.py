"""Unit tests for exception handlers."""

import json
from unittest.mock import MagicMock

import pytest

from theme_renderer.exceptions import (
    StaticAssetMissingException,
    ThemeConfigurationMissingException,
    UnsupportedInputException,
)
from theme_renderer.middleware.error_handlers import (
    fatal_theme_exception_handler,
    general_exception_handler,
    theme_exception_handler,
)


@pytest.fixture
def mock_request():
    """Minimal request stand-in for the handlers."""
    request = MagicMock()
    request.method = "GET"
    request.url = "http://testserver/"
    return request


@pytest.mark.asyncio
async def test_fatal_handler_renders_error_page(mock_request):
    """Test fatal errors become an HTML error page with the message."""
    exc = ThemeConfigurationMissingException("/t/default/index.html", requested_layout="/t/dark/index.html")

    response = await fatal_theme_exception_handler(mock_request, exc)
    body = response.body.decode()

    assert response.status_code == 500
    assert response.media_type == "text/html"
    assert "An Error Was Encountered" in body
    assert "/t/dark/index.html" in body
    assert "/t/default/index.html" in body


@pytest.mark.asyncio
async def test_fatal_handler_escapes_message(mock_request):
    """Test user-supplied values in the message are escaped."""
    exc = UnsupportedInputException("http://x.com/<script>")

    response = await fatal_theme_exception_handler(mock_request, exc)

    assert "<script>" not in response.body.decode()
    assert "&lt;script&gt;" in response.body.decode()


@pytest.mark.asyncio
async def test_theme_handler_returns_json(mock_request):
    """Test recoverable theme errors become structured JSON."""
    exc = StaticAssetMissingException("/t/default/css/main.css")

    response = await theme_exception_handler(mock_request, exc)
    content = json.loads(response.body)

    assert response.status_code == 404
    assert content["error"]["code"] == "STATIC_ASSET_MISSING"
    assert content["error"]["details"]["path"] == "/t/default/css/main.css"


@pytest.mark.asyncio
async def test_general_handler_hides_details(mock_request):
    """Test unexpected errors do not leak internals."""
    response = await general_exception_handler(mock_request, RuntimeError("secret"))
    content = json.loads(response.body)

    assert response.status_code == 500
    assert content == {"error": {"code": "INTERNAL_ERROR", "message": "Internal server error"}}
