"""
Cache Metrics

Counts cache hits and misses and times fresh bundle builds.
"""

from typing import Any, Dict


class CacheMetrics:
    """Tracks cache performance."""

    def __init__(self) -> None:
        self._hits = 0
        self._misses = 0
        self._build_count = 0
        self._total_build_time = 0.0

    def record_hit(self) -> None:
        self._hits += 1

    def record_miss(self) -> None:
        self._misses += 1

    def record_build_time(self, duration: float) -> None:
        """Record the duration in seconds of one fresh build."""
        self._build_count += 1
        self._total_build_time += duration

    def get_metrics(self) -> Dict[str, Any]:
        total_requests = self._hits + self._misses
        return {
            'total_requests': total_requests,
            'cache_hit_rate': self._hits / total_requests if total_requests else 0.0,
            'build_count': self._build_count,
            'total_build_time': self._total_build_time,
            'average_build_time': (
                self._total_build_time / self._build_count if self._build_count else 0.0
            ),
        }
