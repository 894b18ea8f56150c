"""
Config Manager

Loads the Organizer configuration from a JSON file (or a dict supplied by the
host application), merges it over the built-in defaults and hands out the
validated per-kind bundle settings.
"""

import copy
import json
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from organizer.exceptions import ConfigError
from organizer.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "server_url": "/organizer",
    "signature": False,
    "cache": {
        "cache_dir": ".organizer-cache",
        "max_age": 86400,
    },
    "style": {
        "base_path": "css/",
        "cache": True,
        "minify": True,
        "parameter": "css",
        "asset_url": None,
    },
    "script": {
        "base_path": "js/",
        "cache": True,
        "minify": True,
        "parameter": "js",
    },
}


class BundleSettings(BaseModel):
    """Settings for one bundle kind."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    base_path: str = ""
    cache: bool = True
    minify: bool = False
    parameter: str
    asset_url: Optional[str] = None
    max_age: Optional[int] = None


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigManager:
    """Provides bundle settings, the signature switch and the server URL."""

    def __init__(self, config_path: Optional[str] = None,
                 config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the config manager.

        Args:
            config_path: Path to a JSON config file
            config: Config dict used instead of a file (takes precedence)
        """
        self.config_path = config_path
        self._overrides = config
        self.config: Dict[str, Any] = {}

    def get_config_path(self) -> Optional[str]:
        return self.config_path

    def load_config(self) -> Dict[str, Any]:
        """
        Load the configuration and merge it over the defaults.

        Returns:
            The merged configuration dict

        Raises:
            ConfigError: If the file cannot be read or is not a JSON object
        """
        if self._overrides is not None:
            user_config = self._overrides
        elif self.config_path and os.path.exists(self.config_path):
            user_config = self._read_json(self.config_path)
        else:
            if self.config_path:
                logger.warning("Config file %s not found, using defaults", self.config_path)
            user_config = {}

        if not isinstance(user_config, dict):
            raise ConfigError("Configuration root must be a JSON object", self.config_path)

        self.config = deep_merge(DEFAULT_CONFIG, user_config)
        logger.debug("Configuration loaded from %s", self.config_path or "defaults")
        return self.config

    def get_config(self) -> Dict[str, Any]:
        """Return the merged configuration, loading it on first use."""
        if not self.config:
            self.load_config()
        return self.config

    def get_bundle_settings(self, kind: str) -> BundleSettings:
        """
        Return the validated settings for a bundle kind.

        Args:
            kind: Bundle kind, used directly as the config section name

        Raises:
            ConfigError: If the section is missing or invalid
        """
        section = self.get_config().get(str(kind))
        if not isinstance(section, dict):
            raise ConfigError(f"No configuration section for bundle kind '{kind}'", self.config_path)
        try:
            return BundleSettings.model_validate(section)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration for '{kind}': {e}", self.config_path) from e

    def signature_enabled(self) -> bool:
        return bool(self.get_config().get("signature", False))

    def get_server_url(self) -> str:
        return str(self.get_config()["server_url"])

    def get_cache_config(self) -> Dict[str, Any]:
        return dict(self.get_config().get("cache") or {})

    @staticmethod
    def _read_json(path: str) -> Any:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {path}: {e}", path) from e
        except OSError as e:
            raise ConfigError(f"Could not read config file {path}: {e}", path) from e
