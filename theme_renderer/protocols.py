"""Protocol definitions for the renderer's collaborators."""

from collections.abc import Mapping
from typing import Any, Protocol


class Router(Protocol):
    """Exposes the active module, controller and method names.

    Names may be empty strings; they are only used to build the
    template search path.
    """

    @property
    def current_module(self) -> str: ...

    @property
    def current_controller(self) -> str: ...

    @property
    def current_method(self) -> str: ...


class ViewLoader(Protocol):
    """Resolves a view through the host framework's own rules."""

    def resolve(self, name: str, data: Mapping[str, Any]) -> str:
        """Render view ``name`` with ``data`` and return the captured HTML.

        Raises:
            ViewNotFoundException: If the framework cannot find the view
        """
        ...


class OutputSink(Protocol):
    """Receives the final HTML when the caller does not ask for it back."""

    def emit(self, html: str) -> Any:
        """Hand ``html`` to the framework's output layer."""
        ...
