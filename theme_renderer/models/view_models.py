"""Models shared by the renderer and its templates."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from theme_renderer.plugins import HelperRegistry
    from theme_renderer.views.template_renderer import ThemeRenderer


class Message(BaseModel):
    """A flash-style message shown to the user."""

    text: str = Field(..., description="Message body (inserted into HTML unescaped)")
    kind: str = Field(default="info", description="Free-form kind, e.g. info/success/error/warning")


@dataclass(frozen=True)
class ViewContext:
    """Everything a view or layout can read while it executes.

    Templates see exactly three names: ``data``, ``renderer`` and ``helpers``.
    """

    data: Mapping[str, Any]
    renderer: "ThemeRenderer"
    helpers: "HelperRegistry"

    def template_vars(self) -> dict[str, Any]:
        """Variables handed to Jinja2's ``Template.render``."""
        return {
            "data": self.data,
            "renderer": self.renderer,
            "helpers": self.helpers,
        }
