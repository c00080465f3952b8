"""Configuration settings for postpipe with caching utilities."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Blog pipeline settings"""

    model_config = SettingsConfigDict(
        env_prefix="POSTPIPE_",
        env_file=[".env.test", ".env"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Build
    pages_dir: Path = Path("pages")
    output_file: Path = Path("posts.json")
    excerpt_length: int = Field(default=200, gt=0)

    # Runtime loading
    content_root: str = "."  # directory or http(s) base URL
    index_name: str = "posts.json"
    request_timeout_seconds: float = 10.0

    # Search
    search_debounce_ms: int = Field(default=200, ge=0)

    # Theme persistence (None keeps the theme in memory only)
    theme_storage_path: Path | None = None
    prefers_dark_theme: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"
    log_dir: Path = Path("logs")

    # Display
    site_title: str = "Blog"

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000


_SETTINGS_LOCK = RLock()
_SETTINGS_CACHE: Settings | None = None


def get_settings(*, refresh: bool = False) -> Settings:
    """Return a cached ``Settings`` instance.

    Parameters
    ----------
    refresh:
        When ``True`` the cached instance is discarded and a new one is created.
    """

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        if refresh or _SETTINGS_CACHE is None:
            _SETTINGS_CACHE = Settings()
        return _SETTINGS_CACHE


def clear_settings_cache() -> None:
    """Clear the cached settings instance."""

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        _SETTINGS_CACHE = None


@contextmanager
def override_settings(**overrides: Any) -> Iterator[Settings]:
    """Temporarily override the cached settings within a context."""

    global _SETTINGS_CACHE

    with _SETTINGS_LOCK:
        previous_settings = _SETTINGS_CACHE

    base_settings = previous_settings or Settings()
    patched_settings = base_settings.model_copy(update=overrides)

    with _SETTINGS_LOCK:
        _SETTINGS_CACHE = patched_settings

    try:
        yield patched_settings
    finally:
        with _SETTINGS_LOCK:
            _SETTINGS_CACHE = previous_settings
