"""Theme Renderer"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("theme-renderer")
except PackageNotFoundError:
    __version__ = "dev"
