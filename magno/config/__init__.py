"""Configuration management for Magno."""

from .manager import ConfigManager, load_settings, settings_path
from .schema import SearchConfig, SelectorsConfig, Settings, SiteConfig

__all__ = [
    "ConfigManager",
    "load_settings",
    "settings_path",
    "Settings",
    "SiteConfig",
    "SearchConfig",
    "SelectorsConfig",
]
