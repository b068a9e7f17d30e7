"""Unit tests for the FastAPI-side collaborators."""

from types import SimpleNamespace

import pytest
from fastapi.responses import HTMLResponse

from theme_renderer.adapters import RequestRouter, ResponseOutputSink, StaticRouter, TemplatesViewLoader
from theme_renderer.exceptions import ViewNotFoundException


def _endpoint(module_name: str, func_name: str):
    def endpoint():
        return None

    endpoint.__module__ = module_name
    endpoint.__name__ = func_name
    return endpoint


class TestStaticRouter:
    """Tests for StaticRouter."""

    def test_defaults_are_empty(self):
        router = StaticRouter()

        assert router.current_module == ""
        assert router.current_controller == ""
        assert router.current_method == ""


class TestRequestRouter:
    """Tests for RequestRouter."""

    def test_names_from_route(self):
        """Test module, controller and method come from the matched route."""
        route = SimpleNamespace(endpoint=_endpoint("app.routers.posts_router", "show"), tags=["blog", "public"])
        request = SimpleNamespace(scope={"route": route})

        router = RequestRouter(request)

        assert router.current_module == "blog"
        assert router.current_controller == "posts"
        assert router.current_method == "show"

    def test_untagged_route(self):
        """Test routes without tags have no module."""
        route = SimpleNamespace(endpoint=_endpoint("app.pages", "index"), tags=[])
        router = RequestRouter(SimpleNamespace(scope={"route": route}))

        assert router.current_module == ""
        assert router.current_controller == "pages"
        assert router.current_method == "index"

    def test_no_route(self):
        """Test requests without a matched route give empty names."""
        router = RequestRouter(SimpleNamespace(scope={}))

        assert router.current_module == ""
        assert router.current_controller == ""
        assert router.current_method == ""


class TestTemplatesViewLoader:
    """Tests for TemplatesViewLoader."""

    def test_resolve_renders_with_data(self, tmp_path, write):
        """Test the framework template gets the data mapping."""
        write(tmp_path / "welcome.html", "Hello {{ data.name }}")
        loader = TemplatesViewLoader(tmp_path)

        assert loader.resolve("welcome", {"name": "World"}) == "Hello World"

    def test_resolve_custom_extension(self, tmp_path, write):
        write(tmp_path / "welcome.j2", "j2")
        loader = TemplatesViewLoader(tmp_path, extension=".j2")

        assert loader.resolve("welcome", {}) == "j2"

    def test_missing_view(self, tmp_path):
        """Test a missing template raises ViewNotFoundException."""
        loader = TemplatesViewLoader(tmp_path)

        with pytest.raises(ViewNotFoundException) as exc_info:
            loader.resolve("missing", {})

        assert exc_info.value.details == {"view": "missing", "template": "missing.html"}


class TestResponseOutputSink:
    """Tests for ResponseOutputSink."""

    def test_emit_returns_html_response(self):
        sink = ResponseOutputSink()

        response = sink.emit("<p>page</p>")

        assert isinstance(response, HTMLResponse)
        assert response.body == b"<p>page</p>"
        assert sink.body == "<p>page</p>"

    def test_nothing_emitted(self):
        assert ResponseOutputSink().body is None

    def test_response_from_emitted_body(self):
        """Test response() rebuilds the page with the requested status."""
        sink = ResponseOutputSink()
        sink.emit("<p>page</p>")

        response = sink.response(status_code=404)

        assert isinstance(response, HTMLResponse)
        assert response.status_code == 404
        assert response.body == b"<p>page</p>"

    def test_response_before_emit(self):
        with pytest.raises(RuntimeError, match="No page has been rendered"):
            ResponseOutputSink().response()
