"""Theme renderer models"""

from theme_renderer.models.view_models import Message, ViewContext

__all__ = [
    "Message",
    "ViewContext",
]
