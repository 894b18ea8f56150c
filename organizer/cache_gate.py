"""
Cache Gate

Derives the cache key of a bundle and decides whether a build can be skipped.

The key depends on the bundle kind and name only. Changing a bundle's sources
or version does not change its key, so a cached bundle stays in use until the
cache collaborator declares it stale.
"""

import base64
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from organizer.cache.cache_metrics import CacheMetrics
from organizer.config_manager import BundleSettings
from organizer.logging_config import get_logger

logger = get_logger(__name__)


def make_cache_key(kind: str, name: str) -> str:
    """Return base64('<kind>-<name>')."""
    return base64.b64encode(f"{kind}-{name}".encode("utf-8")).decode("ascii")


@dataclass(frozen=True)
class BuildArtifact:
    cache_key: str
    content: str
    is_minified: bool


class CacheGate:
    """Builds a bundle or reuses its cached copy."""

    def __init__(self, cache: Any, settings: BundleSettings,
                 metrics: Optional[CacheMetrics] = None) -> None:
        self.cache = cache
        self.settings = settings
        self.metrics = metrics or CacheMetrics()

    def _cached_content(self, key: str) -> Optional[str]:
        """Return the cached content, or None when caching is off or nothing usable is stored."""
        if not self.settings.cache or not self.cache.is_usable(key):
            return None
        return self.cache.get(key)

    def build_or_reuse(self, kind: str, name: str, build_fn: Callable[[], str]) -> BuildArtifact:
        """
        Return the cached artifact if usable, else build and store a fresh one.

        With caching disabled every call rebuilds. The cache is written only
        after build_fn returns.
        """
        key = make_cache_key(kind, name)

        cached = self._cached_content(key)
        if cached is not None:
            self.metrics.record_hit()
            logger.debug("Reusing cached bundle %s (%s)", name, key)
            return BuildArtifact(key, cached, self.settings.minify)

        self.metrics.record_miss()
        started = time.monotonic()
        content = build_fn()
        self.metrics.record_build_time(time.monotonic() - started)

        self.cache.put(key, content)
        logger.info("Built %s bundle %s (%d characters)", kind, name, len(content))
        return BuildArtifact(key, content, self.settings.minify)

    def retrieve(self, kind: str, name: str, build_fn: Callable[[], str]) -> str:
        """Return the bundle content, building it first if needed."""
        return self.build_or_reuse(kind, name, build_fn).content
