"""
Cache Strategy

Decides how long a cached bundle stays usable, per bundle kind.
"""

import base64
import binascii
import logging
from typing import Any, Dict, Optional

from organizer.logging_config import get_logger

DEFAULT_MAX_AGE = 86400  # 1 day


class CacheStrategy:
    """Maps bundle kinds to cache lifetimes."""

    def __init__(self, config_manager: Optional[Any] = None, logger: Optional[logging.Logger] = None) -> None:
        """
        Initialize cache strategy manager.

        Args:
            config_manager: Optional ConfigManager providing the 'cache' section
                and per-kind 'max_age' overrides
            logger: Optional logger instance
        """
        self.config_manager = config_manager
        self.logger = logger or get_logger(__name__)

    def get_default_max_age(self) -> int:
        if not self.config_manager:
            return DEFAULT_MAX_AGE
        cache_config = self.config_manager.get_config().get('cache') or {}
        return int(cache_config.get('max_age', DEFAULT_MAX_AGE))

    def get_cache_strategy(self, kind: str) -> Dict[str, Any]:
        """
        Get the cache strategy for a bundle kind.

        Args:
            kind: Bundle kind ('style', 'script') or 'default'

        Returns:
            Dictionary with max_age and memory_ttl in seconds
        """
        max_age = self.get_default_max_age()

        if self.config_manager and kind != 'default':
            kind_config = self.config_manager.get_config().get(kind)
            if isinstance(kind_config, dict) and kind_config.get('max_age') is not None:
                max_age = int(kind_config['max_age'])

        return {
            'max_age': max_age,
            # Memory never outlives the disk entry it mirrors
            'memory_ttl': max_age,
        }

    def get_kind_from_key(self, key: str) -> str:
        """
        Recover the bundle kind from a bundle cache key.

        Keys are base64 of '<kind>-<name>'; anything else maps to 'default'.
        """
        try:
            decoded = base64.b64decode(key, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError, ValueError):
            self.logger.debug("Cache key %s is not a bundle key", key)
            return 'default'
        kind, sep, _name = decoded.partition('-')
        return kind if sep and kind else 'default'
