"""FastAPI-side implementations of the renderer's collaborators."""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateNotFound

from theme_renderer.exceptions import ViewNotFoundException
from theme_renderer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


@dataclass(frozen=True)
class StaticRouter:
    """Fixed module/controller/method names, for scripts and tests."""

    current_module: str = ""
    current_controller: str = ""
    current_method: str = ""


class RequestRouter:
    """Derives module/controller/method names from the matched FastAPI route.

    - module: first tag of the route (routers are tagged when included)
    - controller: the endpoint's module name without a ``_router`` suffix
    - method: the endpoint function name
    """

    def __init__(self, request: Request):
        route = request.scope.get("route")
        endpoint = getattr(route, "endpoint", None)
        tags = getattr(route, "tags", None) or []

        self.current_module = str(tags[0]) if tags else ""

        if endpoint is None:
            self.current_controller = ""
            self.current_method = ""
        else:
            controller = endpoint.__module__.rsplit(".", 1)[-1]
            self.current_controller = controller.removesuffix("_router")
            self.current_method = endpoint.__name__


class TemplatesViewLoader:
    """Resolves views from the framework's own Jinja2 templates directory."""

    def __init__(self, directory: str | Path, extension: str = ".html"):
        self.templates = Jinja2Templates(directory=str(directory))
        self.extension = extension

    def resolve(self, name: str, data: Mapping[str, Any]) -> str:
        """Render ``{name}{extension}`` with the view data as ``data``.

        Raises:
            ViewNotFoundException: If the template does not exist
        """
        template_name = f"{name}{self.extension}"
        try:
            template = self.templates.get_template(template_name)
        except TemplateNotFound as e:
            log_with_context(
                logger,
                "warning",
                "View not found in framework templates",
                view=name,
                error=str(e),
                event_type="view_not_found",
            )
            raise ViewNotFoundException(name, details={"template": template_name}) from e
        return template.render({"data": data})


class ResponseOutputSink:
    """Collects the rendered page for the route handler to return."""

    def __init__(self):
        self.body: str | None = None

    def emit(self, html: str) -> HTMLResponse:
        self.body = html
        return HTMLResponse(html)

    def response(self, status_code: int = 200) -> HTMLResponse:
        """Build a response from the last emitted page.

        Raises:
            RuntimeError: If nothing has been emitted yet
        """
        if self.body is None:
            raise RuntimeError("No page has been rendered for this request.")
        return HTMLResponse(self.body, status_code=status_code)
