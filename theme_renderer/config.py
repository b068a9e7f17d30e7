from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent  # project root


class ThemeSettings(BaseSettings):
    """Theme renderer settings with validation.

    Values come from THEME_* environment variables or the .env file.
    ``url`` is joined to the theme name verbatim, so it normally ends
    with a slash.
    """

    theme: str = Field(default="default", description="Active theme identifier")
    layout: str = Field(default="index", description="Layout file basename inside the theme")
    path: Path = Field(default=BASE_DIR / "themes", description="Directory containing theme directories")
    url: str = Field(default="/themes/", description="Base URL for theme assets")

    app_path: Path = Field(default=BASE_DIR / "app", description="Application root holding modules/<module>/views/")
    views_dir: Path = Field(default=BASE_DIR / "templates", description="Framework views used as last resort")
    template_extension: str = Field(default=".html", description="Extension of layout and view files")

    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_prefix="THEME_",
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("theme", "layout", mode="after")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure theme and layout names are not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("theme and layout names cannot be empty")
        return v

    @field_validator("template_extension", mode="after")
    @classmethod
    def validate_template_extension(cls, v: str) -> str:
        """Ensure the template extension starts with a dot."""
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("template_extension must start with '.' (e.g. '.html')")
        return v


# Singleton settings instance (cached for performance)
_settings_instance: ThemeSettings | None = None


def get_settings() -> ThemeSettings:
    """Get singleton ThemeSettings instance for dependency injection.

    Use with FastAPI's Depends(); override it in tests through
    ``app.dependency_overrides``.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = ThemeSettings()
    return _settings_instance
