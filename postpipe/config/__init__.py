"""Configuration module for postpipe"""

from postpipe.config.settings import (
    Settings,
    clear_settings_cache,
    get_settings,
    override_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "override_settings",
]
