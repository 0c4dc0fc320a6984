"""Configuration loading for cargo-member."""
from __future__ import annotations

from .manager import CONFIG_FILE_ENV, ENV_PREFIX, LOG_LEVEL_ENV, ConfigManager, deep_merge
from .settings import Settings, get_settings, load_settings, reset_settings_cache

__all__ = [
    "ConfigManager",
    "Settings",
    "deep_merge",
    "get_settings",
    "load_settings",
    "reset_settings_cache",
    "ENV_PREFIX",
    "CONFIG_FILE_ENV",
    "LOG_LEVEL_ENV",
]
