"""
Disk Cache

Stores one JSON file per cache key. Bundle cache keys are standard base64, so
'+' and '/' are mapped to '-' and '_' to form the file name.
"""

import json
import os
import tempfile
import time
from typing import Any, Optional, Tuple

from organizer.logging_config import get_logger

_FILENAME_TABLE = str.maketrans({'+': '-', '/': '_'})


class DiskCache:
    """File-backed cache; a cache_dir of None disables it."""

    def __init__(self, cache_dir: Optional[str], logger=None) -> None:
        self.cache_dir = cache_dir
        self.logger = logger or get_logger(__name__)
        if cache_dir:
            os.makedirs(cache_dir, exist_ok=True)

    def get_cache_dir(self) -> Optional[str]:
        return self.cache_dir

    def get_cache_path(self, key: str) -> Optional[str]:
        if not self.cache_dir:
            return None
        return os.path.join(self.cache_dir, f"{key.translate(_FILENAME_TABLE)}.json")

    def get_entry(self, key: str) -> Optional[Tuple[Any, float]]:
        """Return (data, timestamp) for a key, or None if absent or unreadable."""
        path = self.get_cache_path(key)
        if not path or not os.path.exists(path):
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                record = json.load(f)
            return record['data'], float(record['timestamp'])
        except (OSError, ValueError, KeyError, TypeError) as e:
            self.logger.warning("Ignoring unreadable cache file %s: %s", path, e)
            return None

    def get(self, key: str, max_age: Optional[float] = None) -> Optional[Any]:
        """
        Get cached data, or None if absent or older than max_age seconds.
        """
        entry = self.get_entry(key)
        if entry is None:
            return None
        data, timestamp = entry
        if max_age is not None and time.time() - timestamp >= max_age:
            return None
        return data

    def set(self, key: str, data: Any) -> Optional[float]:
        """
        Write data atomically.

        Returns:
            The stored timestamp, or None when disk caching is disabled
        """
        path = self.get_cache_path(key)
        if not path:
            return None
        timestamp = time.time()
        fd, tmp_path = tempfile.mkstemp(dir=self.cache_dir, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump({'timestamp': timestamp, 'data': data}, f)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        return timestamp

    def clear(self, key: Optional[str] = None) -> None:
        if not self.cache_dir:
            return
        if key is not None:
            path = self.get_cache_path(key)
            if os.path.exists(path):
                os.remove(path)
            return
        for name in os.listdir(self.cache_dir):
            if name.endswith('.json'):
                os.remove(os.path.join(self.cache_dir, name))
