"""
Cache Manager

Default cache collaborator for bundlers: a memory cache in front of a disk
cache, with entry lifetimes chosen by CacheStrategy.
"""

import os
from typing import Any, Optional

from organizer.cache.cache_strategy import CacheStrategy
from organizer.cache.disk_cache import DiskCache
from organizer.cache.memory_cache import MemoryCache
from organizer.logging_config import get_logger

logger = get_logger(__name__)


class CacheManager:
    """Stores built bundles under their cache keys."""

    def __init__(self, cache_dir: Optional[str] = None, config_manager: Optional[Any] = None,
                 memory_size: int = 1000) -> None:
        """
        Initialize the cache manager.

        Args:
            cache_dir: Directory for cache files; None keeps bundles in memory only
            config_manager: Optional ConfigManager for cache lifetimes
            memory_size: Maximum number of bundles held in memory
        """
        self.cache_dir = os.path.abspath(cache_dir) if cache_dir else None
        self._memory_cache_component = MemoryCache(max_size=memory_size)
        self._disk_cache_component = DiskCache(self.cache_dir)
        self._strategy_component = CacheStrategy(config_manager)

    @classmethod
    def from_config(cls, config_manager: Any) -> "CacheManager":
        """Create a cache manager from the 'cache' config section."""
        cache_config = config_manager.get_cache_config()
        return cls(cache_dir=cache_config.get('cache_dir'), config_manager=config_manager)

    def get_cache_dir(self) -> Optional[str]:
        return self.cache_dir

    def _max_age(self, key: str) -> int:
        kind = self._strategy_component.get_kind_from_key(key)
        return self._strategy_component.get_cache_strategy(kind)['max_age']

    def put(self, key: str, value: str) -> None:
        timestamp = self._disk_cache_component.set(key, value)
        self._memory_cache_component.set(key, value, timestamp=timestamp)
        logger.debug("Stored %d characters under %s", len(value), key)

    def get(self, key: str) -> Optional[str]:
        """Return the cached value, or None if absent or expired."""
        max_age = self._max_age(key)

        value = self._memory_cache_component.get(key, max_age=max_age)
        if value is not None:
            return value

        entry = self._disk_cache_component.get_entry(key)
        if entry is None:
            return None
        value, timestamp = entry
        # Keep the disk timestamp so both layers expire together
        self._memory_cache_component.set(key, value, timestamp=timestamp)
        return self._memory_cache_component.get(key, max_age=max_age)

    def is_usable(self, key: str) -> bool:
        """True if the key is cached and younger than its kind's max_age."""
        return self.get(key) is not None

    def clear(self, key: Optional[str] = None) -> None:
        self._memory_cache_component.clear(key)
        self._disk_cache_component.clear(key)
