"""Application configuration settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from speedread.models.enums import Theme


DEFAULT_HIGHLIGHT_COLORS = {
    "Red": "#ef4444",
    "Orange": "#f97316",
    "Blue": "#3b82f6",
    "Green": "#22c55e",
    "Purple": "#a855f7",
    "Pink": "#ec4899",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SPEEDREAD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "SpeedRead"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_dir: str = "./logs"
    log_to_file: bool = False

    # Storage
    database_url: str = "sqlite:///./data/speedread.db"
    storage_key_prefix: str = "speedreader-"

    # Playback
    default_wpm: int = Field(300, gt=0)
    min_wpm: int = Field(100, gt=0)
    max_wpm: int = Field(1000, gt=0)
    wpm_step: int = Field(50, gt=0)

    # Limits
    large_document_threshold: int = Field(100_000, ge=0)
    minimap_max_visible: int = Field(5_000, ge=1)
    context_window_size: int = Field(50, ge=0)

    # Reader defaults
    default_highlight_color: str = "#ef4444"
    highlight_colors: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_HIGHLIGHT_COLORS)
    )
    default_theme: Theme = Theme.SYSTEM
    fullscreen_on_play: bool = False


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
