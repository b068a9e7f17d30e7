"""Theme-aware view and layout rendering."""

from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import BaseLoader, Environment, TemplateNotFound

from theme_renderer.config import ThemeSettings
from theme_renderer.exceptions import ThemeConfigurationMissingException
from theme_renderer.logging_config import get_logger, log_with_context
from theme_renderer.models import Message, ViewContext
from theme_renderer.plugins import HelperRegistry, ThemePluginRegistry
from theme_renderer.protocols import OutputSink, Router, ViewLoader
from theme_renderer.views.assets import (
    build_asset_tags,
    rewrite_relative_urls,
    substitute_template_url,
)

logger = get_logger(__name__)

DEFAULT_THEME = "default"
DEFAULT_LAYOUT = "index"


class _FileLoader(BaseLoader):
    """Jinja2 loader whose template names are filesystem paths."""

    def get_source(self, environment: Environment, template: str) -> tuple[str, str, Callable[[], bool]]:
        path = Path(template)
        if not path.is_file():
            raise TemplateNotFound(template)
        source = path.read_text(encoding="utf-8")
        mtime = path.stat().st_mtime
        return source, str(path), lambda: path.is_file() and path.stat().st_mtime == mtime


class ThemeRenderer:
    """Renders views inside theme layouts for a single request.

    Views are looked up in the active theme, then the default theme, then the
    current module's own views directory, and finally through the framework's
    view loader. The rendered view is injected into the theme layout, which
    reads it back through ``renderer.content()``.
    """

    def __init__(
        self,
        settings: ThemeSettings,
        router: Router,
        view_loader: ViewLoader,
        output_sink: OutputSink,
        plugins: ThemePluginRegistry | None = None,
    ):
        """Initialize the renderer.

        Args:
            settings: Default theme configuration, copied so per-request changes stay local
            router: Source of the current module/controller/method names
            view_loader: Framework view resolution used when no theme file matches
            output_sink: Receives the page when the caller does not ask for the HTML
            plugins: Theme plugins providing template helpers
        """
        self._config: dict[str, Any] = settings.model_dump()
        self._data: dict[str, Any] = {}
        self._messages: list[Message] = []
        self._content = ""

        self._view_loader = view_loader
        self._output_sink = output_sink
        self._plugins = plugins or ThemePluginRegistry()
        self._theme_helpers: dict[str, HelperRegistry] = {}
        self.helpers = HelperRegistry()

        self.module = router.current_module or ""
        self.controller = router.current_controller or ""
        self.method = router.current_method or ""

        self._env = Environment(
            loader=_FileLoader(),
            autoescape=False,  # Views produce HTML that is injected verbatim
            keep_trailing_newline=True,
            cache_size=0,
        )
        self._template_locations: list[Path] = []

        self.set_theme(self._config["theme"])

    # Configuration

    def set_theme(self, theme: str = DEFAULT_THEME) -> "ThemeRenderer":
        """Switch the active theme and rebuild the search path.

        Each theme gets its own helpers; its plugin runs once per renderer,
        the first time the theme is selected. Config and search path change
        only after the plugin has been applied.
        """
        helpers = self._theme_helpers.get(theme)
        if helpers is None:
            helpers = HelperRegistry()
            if self._plugins.has(theme):
                self._plugins.apply(theme, helpers)
            self._theme_helpers[theme] = helpers

        self._template_locations = self._build_template_locations(theme)
        self.helpers = helpers
        self.set_config("theme", theme)
        log_with_context(
            logger,
            "debug",
            "Theme set",
            theme=theme,
            route_module=self.module,
            event_type="theme_set",
        )
        return self

    def set_layout(self, layout: str = DEFAULT_LAYOUT) -> "ThemeRenderer":
        """Select a layout of the active theme, falling back to ``index`` when it does not exist."""
        path = self._theme_dir() / f"{layout}{self._extension()}"
        if not path.is_file():
            log_with_context(
                logger,
                "debug",
                "Layout not found, using index",
                requested_layout=layout,
                layout_path=str(path),
                event_type="layout_fallback",
            )
            layout = DEFAULT_LAYOUT
        self.set_config("layout", layout)
        return self

    def set_config(self, name: str, value: Any) -> "ThemeRenderer":
        self._config[name] = value
        return self

    def config(self, name: str, default: Any = False) -> Any:
        value = self._config.get(name)
        return default if value is None else value

    @property
    def template_locations(self) -> list[Path]:
        """Directories probed for views, highest precedence first."""
        return list(self._template_locations)

    # Template data

    def set(self, name: str, value: Any) -> "ThemeRenderer":
        self._data[name] = value
        return self

    def get(self, name: str, default: Any = False) -> Any:
        value = self._data.get(name)
        return default if value is None else value

    # Messages

    def add_message(self, message: str, kind: str = "info") -> "ThemeRenderer":
        self._messages.append(Message(text=message, kind=kind))
        return self

    def set_messages(self, messages: Iterable[Message | Mapping[str, Any]] | None = None) -> "ThemeRenderer":
        """Replace the message queue.

        An empty list leaves the current queue untouched, so callers can pass
        whatever flash data they have without checking it first.
        """
        messages = list(messages or [])
        if messages:
            self._messages = [Message.model_validate(m) for m in messages]
        return self

    def clear_messages(self) -> "ThemeRenderer":
        self._messages = []
        return self

    def messages(self, as_html: bool = True) -> str | list[Message]:
        """Return the queued messages, by default as an HTML list.

        Message text and kind are inserted as-is; escape untrusted input
        before queueing it.
        """
        if not as_html:
            return list(self._messages)

        items = "".join(f'<li class="{m.kind}">{m.text}</li>' for m in self._messages)
        return f'<ul class="messages">{items}</ul>'

    # Rendering

    def content(self) -> str:
        """The view HTML produced by the last render."""
        return self._content

    def meta(self, kind: str, names: str | list[str]) -> str:
        """Build <link> (css) or <script> (js) tags for theme assets."""
        return build_asset_tags(kind, names, self._theme_dir(), self._template_url())

    def partial(self, view: str, data: Mapping[str, Any] | None = None) -> str:
        """Render a view with the template data overlaid by ``data``.

        The first search location containing the view wins; if none does,
        the framework's view loader resolves it.
        """
        merged = {**self._data, **(data or {})}
        filename = f"{view}{self._extension()}"

        for location in self._template_locations:
            path = location / filename
            if path.is_file():
                log_with_context(
                    logger,
                    "debug",
                    "View resolved from theme",
                    view=view,
                    view_path=str(path),
                    event_type="view_resolved",
                )
                return self._execute(path, merged)

        log_with_context(
            logger,
            "debug",
            "View not in theme, using framework loader",
            view=view,
            event_type="view_fallback_loader",
        )
        return self._view_loader.resolve(view, merged)

    def view(self, view: str, data: Mapping[str, Any] | None = None, return_html: bool = False) -> Any:
        """Render ``view`` and wrap it in the active layout."""
        data = {**self._data, **(data or {})}
        content = self.partial(view, data)
        return self.render(content, return_html)

    def render(self, content: str, return_html: bool = False) -> Any:
        """Wrap ``content`` in the active layout and post-process the page.

        Returns the HTML when ``return_html`` is true, otherwise whatever the
        output sink returns.

        Raises:
            ThemeConfigurationMissingException: If neither the layout nor the
                default theme's index layout exists
        """
        self._content = content
        layout_path = self._theme_dir() / f"{self.config('layout')}{self._extension()}"

        if not layout_path.is_file():
            default_layout = self._theme_root() / DEFAULT_THEME / f"{DEFAULT_LAYOUT}{self._extension()}"
            if self.config("theme") == DEFAULT_THEME:
                raise ThemeConfigurationMissingException(str(layout_path))
            if not default_layout.is_file():
                raise ThemeConfigurationMissingException(str(default_layout), requested_layout=str(layout_path))

            log_with_context(
                logger,
                "warning",
                "Layout missing, falling back to default theme",
                theme=self.config("theme"),
                requested_layout=str(layout_path),
                event_type="theme_fallback_default",
            )
            self.set_theme(DEFAULT_THEME)
            layout_path = default_layout

        html = self._execute(layout_path, self._data)
        html = rewrite_relative_urls(html)
        html = substitute_template_url(html, self._template_url())

        log_with_context(
            logger,
            "debug",
            "Page rendered",
            theme=self.config("theme"),
            layout_path=str(layout_path),
            size=len(html),
            event_type="theme_render_complete",
        )

        if return_html:
            return html
        return self._output_sink.emit(html)

    # Internals

    def _execute(self, path: Path, data: Mapping[str, Any]) -> str:
        context = ViewContext(data=data, renderer=self, helpers=self.helpers)
        template = self._env.get_template(str(path))
        return template.render(context.template_vars())

    def _build_template_locations(self, theme: str) -> list[Path]:
        root = self._theme_root()
        module = self.module

        locations = []
        if module:
            locations.append(root / theme / "views" / "modules" / module)
        locations.append(root / theme / "views")
        if module:
            locations.append(root / DEFAULT_THEME / "views" / "modules" / module)
        locations.append(root / DEFAULT_THEME / "views")
        if module:
            locations.append(Path(self.config("app_path")) / "modules" / module / "views")
        return locations

    def _theme_root(self) -> Path:
        return Path(self.config("path"))

    def _theme_dir(self) -> Path:
        return self._theme_root() / self.config("theme")

    def _template_url(self) -> str:
        return f"{self.config('url', '')}{self.config('theme')}"

    def _extension(self) -> str:
        return self.config("template_extension", ".html")
