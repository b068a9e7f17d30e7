"""Theme plugin registry.

A theme ships helpers for its templates by registering a setup callable
under its theme name::

    plugins = ThemePluginRegistry()

    @plugins.register("dark")
    def setup_dark(helpers: HelperRegistry) -> None:
        helpers.register("shout", lambda text: text.upper())

When a renderer switches to the ``dark`` theme it applies the setup once,
and templates call ``{{ helpers.shout(data.title) }}``.
"""

from collections.abc import Callable
from typing import Any

from theme_renderer.exceptions import PluginRegistrationException
from theme_renderer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

ThemeSetup = Callable[["HelperRegistry"], None]

# Registry attributes that a helper of the same name would hide
RESERVED_HELPER_NAMES = frozenset({"get", "register", "as_dict"})


class HelperRegistry:
    """Named helper callables exposed to templates as ``helpers``."""

    def __init__(self):
        self._helpers: dict[str, Callable[..., Any]] = {}

    def register(self, name: str, func: Callable[..., Any] | None = None):
        """Register ``func`` under ``name``; usable as a decorator when ``func`` is omitted.

        Raises:
            PluginRegistrationException: If the name is taken or reserved, or func is not callable
        """
        if func is None:

            def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
                self.register(name, f)
                return f

            return decorator

        if name in RESERVED_HELPER_NAMES or name.startswith("_"):
            raise PluginRegistrationException(f"Helper name '{name}' is reserved", details={"helper": name})
        if not callable(func):
            raise PluginRegistrationException(f"Helper '{name}' is not callable", details={"helper": name})
        if name in self._helpers:
            raise PluginRegistrationException(f"Helper '{name}' is already registered", details={"helper": name})

        self._helpers[name] = func
        return func

    def get(self, name: str) -> Callable[..., Any] | None:
        return self._helpers.get(name)

    def as_dict(self) -> dict[str, Callable[..., Any]]:
        return dict(self._helpers)

    def __contains__(self, name: object) -> bool:
        return name in self._helpers

    def __len__(self) -> int:
        return len(self._helpers)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Only called for names not found normally, i.e. helper lookups from templates
        helpers = self.__dict__.get("_helpers", {})
        try:
            return helpers[name]
        except KeyError:
            raise AttributeError(name) from None


class ThemePluginRegistry:
    """Maps theme names to setup callables that register template helpers."""

    def __init__(self):
        self._setups: dict[str, ThemeSetup] = {}

    def add(self, theme: str, setup: ThemeSetup) -> None:
        """Register ``setup`` for ``theme``.

        Raises:
            PluginRegistrationException: If the theme already has a plugin
        """
        if theme in self._setups:
            raise PluginRegistrationException(f"Theme '{theme}' already has a plugin", details={"theme": theme})
        self._setups[theme] = setup

    def register(self, theme: str) -> Callable[[ThemeSetup], ThemeSetup]:
        """Decorator form of :meth:`add`."""

        def decorator(setup: ThemeSetup) -> ThemeSetup:
            self.add(theme, setup)
            return setup

        return decorator

    def has(self, theme: str) -> bool:
        return theme in self._setups

    def apply(self, theme: str, helpers: HelperRegistry) -> None:
        """Run the theme's setup against ``helpers``."""
        setup = self._setups[theme]
        setup(helpers)
        log_with_context(
            logger,
            "debug",
            "Theme plugin applied",
            theme=theme,
            helper_count=len(helpers),
            event_type="theme_plugin_applied",
        )
