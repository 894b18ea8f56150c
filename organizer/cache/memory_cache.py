"""
Memory Cache

In-process layer in front of the disk cache, bounded by entry count.
"""

import time
from typing import Any, Dict, Optional


class MemoryCache:
    """Timestamped in-memory key/value store."""

    def __init__(self, max_size: int = 1000) -> None:
        self._max_size = max_size
        self._data: Dict[str, Any] = {}
        self._timestamps: Dict[str, float] = {}

    def get(self, key: str, max_age: Optional[float] = None) -> Optional[Any]:
        """
        Get a value, or None if absent or older than max_age seconds.
        """
        if key not in self._data:
            return None
        if max_age is not None and time.time() - self._timestamps[key] >= max_age:
            return None
        return self._data[key]

    def set(self, key: str, value: Any, timestamp: Optional[float] = None) -> None:
        self._data[key] = value
        self._timestamps[key] = time.time() if timestamp is None else timestamp
        if len(self._data) > self._max_size:
            self._evict_oldest(len(self._data) - self._max_size)

    def clear(self, key: Optional[str] = None) -> None:
        if key is None:
            self._data.clear()
            self._timestamps.clear()
        else:
            self._data.pop(key, None)
            self._timestamps.pop(key, None)

    def size(self) -> int:
        return len(self._data)

    def max_size(self) -> int:
        return self._max_size

    def get_stats(self) -> Dict[str, Any]:
        return {
            'size': self.size(),
            'max_size': self._max_size,
        }

    def _evict_oldest(self, count: int) -> None:
        oldest = sorted(self._timestamps, key=self._timestamps.get)[:count]
        for key in oldest:
            self.clear(key)
