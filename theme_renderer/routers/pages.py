"""Page routes rendered through the active theme."""

from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import HTMLResponse

from theme_renderer.dependencies import get_theme_renderer
from theme_renderer.views.template_renderer import ThemeRenderer

router = APIRouter()

NAME_PATTERN = r"^[A-Za-z0-9_-]+$"


@router.get("/", response_class=HTMLResponse)
async def index(
    renderer: ThemeRenderer = Depends(get_theme_renderer),
    theme: str | None = Query(default=None, pattern=NAME_PATTERN),
    layout: str | None = Query(default=None, pattern=NAME_PATTERN),
):
    """Render the home page, optionally previewing another theme or layout."""
    if theme:
        renderer.set_theme(theme)
    if layout:
        renderer.set_layout(layout)

    renderer.set("title", "Home")
    return renderer.view("home")


@router.get("/pages/{name}", response_class=HTMLResponse)
async def page(
    name: str = Path(pattern=NAME_PATTERN),
    renderer: ThemeRenderer = Depends(get_theme_renderer),
):
    """Render a named page view inside the layout."""
    renderer.set("title", name.replace("-", " ").title())
    html = renderer.view(name, {"page": name}, return_html=True)
    return HTMLResponse(html)
