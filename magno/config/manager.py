"""Configuration manager for settings and dynamic sites."""

import logging
import os
from pathlib import Path

import yaml

from ..errors import ConfigError
from .schema import Settings, SiteConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "magno"
SETTINGS_FILE = CONFIG_DIR / "config.yaml"
SITES_FILE = CONFIG_DIR / "sites.yaml"


def settings_path() -> Path:
    """Settings file location, honouring MAGNO_CONFIG."""
    env = os.environ.get("MAGNO_CONFIG")
    return Path(env).expanduser() if env else SETTINGS_FILE


def load_settings(path: Path | None = None) -> Settings:
    """Load runtime settings, falling back to defaults if the file is absent."""
    path = path or settings_path()
    if not path.exists():
        return Settings()

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping")
    if data.get("sources") is None:
        data.pop("sources", None)

    try:
        return Settings.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e


class ConfigManager:
    """Manages reading and writing site configurations."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or SITES_FILE

    def _read(self) -> dict:
        if not self.config_path.exists():
            return {}
        with open(self.config_path) as f:
            return yaml.safe_load(f) or {}

    def _write(self, data: dict) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def load_all(self) -> dict[str, SiteConfig]:
        """Load all site configurations."""
        sites = {}
        for key, site_data in self._read().get("sites", {}).items():
            try:
                sites[key] = SiteConfig.from_dict(key, site_data)
            except (KeyError, TypeError, AttributeError):
                logger.warning("Skipping invalid site config %r", key)
        return sites

    def load_enabled(self) -> dict[str, SiteConfig]:
        """Load only enabled site configurations."""
        return {k: v for k, v in self.load_all().items() if v.enabled}

    def save(self, key: str, config: SiteConfig) -> None:
        """Save a site configuration."""
        data = self._read()
        data.setdefault("version", 1)
        data.setdefault("sites", {})
        data["sites"][key] = config.to_dict()
        self._write(data)

    def remove(self, key: str) -> bool:
        """Remove a site configuration. Returns True if removed."""
        data = self._read()
        sites = data.get("sites", {})
        if key not in sites:
            return False

        del sites[key]
        self._write(data)
        return True

    def set_enabled(self, key: str, enabled: bool) -> bool:
        """Enable or disable a site. Returns True if found."""
        data = self._read()
        sites = data.get("sites", {})
        if key not in sites:
            return False

        sites[key]["enabled"] = enabled
        self._write(data)
        return True
