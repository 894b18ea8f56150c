"""
Tests for CacheManager and cache components.

Tests memory cache, disk cache, strategy, metrics and their composition.
"""

import base64
import json
import os
import time

import pytest

from organizer.cache.cache_metrics import CacheMetrics
from organizer.cache.cache_strategy import DEFAULT_MAX_AGE, CacheStrategy
from organizer.cache.disk_cache import DiskCache
from organizer.cache.memory_cache import MemoryCache
from organizer.cache_manager import CacheManager
from organizer.config_manager import ConfigManager


def bundle_key(kind, name):
    return base64.b64encode(f"{kind}-{name}".encode()).decode()


class TestMemoryCache:
    """Test MemoryCache functionality."""

    def test_set_and_get(self):
        cache = MemoryCache()
        cache.set("key", "body{}")
        assert cache.get("key") == "body{}"

    def test_get_nonexistent(self):
        assert MemoryCache().get("nonexistent_key") is None

    def test_get_expired(self):
        """Test getting expired cache entry."""
        cache = MemoryCache()
        cache.set("key", "value")

        # Backdate the timestamp to ensure expiration
        cache._timestamps["key"] = time.time() - 10
        assert cache.get("key", max_age=1) is None
        assert cache.get("key") == "value"

    def test_clear_specific_key(self):
        cache = MemoryCache()
        cache.set("key1", "value1")
        cache.set("key2", "value2")

        cache.clear("key1")

        assert cache.get("key1") is None
        assert cache.get("key2") == "value2"

    def test_clear_all(self):
        cache = MemoryCache()
        cache.set("key1", "value1")
        cache.set("key2", "value2")

        cache.clear()

        assert cache.size() == 0

    def test_evicts_oldest_over_max_size(self):
        cache = MemoryCache(max_size=3)
        for i in range(5):
            cache.set(f"key{i}", f"value{i}", timestamp=1000.0 + i)

        assert cache.size() == 3
        assert cache.get("key0") is None
        assert cache.get("key1") is None
        assert cache.get("key4") == "value4"

    def test_get_stats(self):
        cache = MemoryCache(max_size=500)
        cache.set("key1", "value1")

        stats = cache.get_stats()

        assert stats == {"size": 1, "max_size": 500}
        assert cache.max_size() == 500


class TestDiskCache:
    """Test DiskCache functionality."""

    def test_get_cache_path(self, tmp_path):
        cache = DiskCache(cache_dir=str(tmp_path))
        assert cache.get_cache_path("test_key") == str(tmp_path / "test_key.json")

    def test_cache_path_is_filesystem_safe(self, tmp_path):
        cache = DiskCache(cache_dir=str(tmp_path))
        assert cache.get_cache_path("a+b/c==") == str(tmp_path / "a-b_c==.json")

    def test_get_cache_path_disabled(self):
        cache = DiskCache(cache_dir=None)
        assert cache.get_cache_path("test_key") is None
        assert cache.set("test_key", "x") is None
        assert cache.get("test_key") is None

    def test_creates_missing_directory(self, tmp_path):
        target = tmp_path / "nested" / "cache"
        DiskCache(cache_dir=str(target))
        assert target.is_dir()

    def test_set_and_get(self, tmp_path):
        cache = DiskCache(cache_dir=str(tmp_path))
        cache.set("test_key", "var a;")
        assert cache.get("test_key") == "var a;"

    def test_record_format(self, tmp_path):
        cache = DiskCache(cache_dir=str(tmp_path))
        timestamp = cache.set("test_key", "var a;")

        with open(tmp_path / "test_key.json") as f:
            record = json.load(f)

        assert record == {"timestamp": timestamp, "data": "var a;"}

    def test_get_expired(self, tmp_path):
        """Get with max_age=0 forces expiration."""
        cache = DiskCache(cache_dir=str(tmp_path))
        cache.set("test_key", "value")
        assert cache.get("test_key", max_age=0) is None

    def test_corrupt_file_is_a_miss(self, tmp_path):
        (tmp_path / "broken.json").write_text("{ not json")
        cache = DiskCache(cache_dir=str(tmp_path))
        assert cache.get("broken") is None

    def test_no_temp_files_left_behind(self, tmp_path):
        cache = DiskCache(cache_dir=str(tmp_path))
        cache.set("k", "v")
        assert os.listdir(tmp_path) == ["k.json"]

    def test_clear_specific_key(self, tmp_path):
        cache = DiskCache(cache_dir=str(tmp_path))
        cache.set("key1", "value1")
        cache.set("key2", "value2")

        cache.clear("key1")
        cache.clear("never-set")

        assert cache.get("key1") is None
        assert cache.get("key2") == "value2"

    def test_clear_all(self, tmp_path):
        cache = DiskCache(cache_dir=str(tmp_path))
        cache.set("key1", "value1")
        cache.set("key2", "value2")

        cache.clear()

        assert cache.get("key1") is None
        assert cache.get("key2") is None


class TestCacheStrategy:
    """Test CacheStrategy functionality."""

    def test_default_strategy_without_config(self):
        strategy = CacheStrategy()
        result = strategy.get_cache_strategy("script")
        assert result["max_age"] == DEFAULT_MAX_AGE
        assert result["memory_ttl"] == DEFAULT_MAX_AGE

    def test_cache_section_sets_default(self):
        config = ConfigManager(config={"cache": {"max_age": 60}})
        assert CacheStrategy(config).get_cache_strategy("script")["max_age"] == 60

    def test_kind_section_overrides_default(self):
        config = ConfigManager(config={"cache": {"max_age": 60}, "style": {"max_age": 5}})
        strategy = CacheStrategy(config)

        assert strategy.get_cache_strategy("style")["max_age"] == 5
        assert strategy.get_cache_strategy("script")["max_age"] == 60
        assert strategy.get_cache_strategy("default")["max_age"] == 60

    def test_get_kind_from_key(self):
        strategy = CacheStrategy()

        assert strategy.get_kind_from_key(bundle_key("style", "site")) == "style"
        assert strategy.get_kind_from_key(bundle_key("script", "my-app")) == "script"
        assert strategy.get_kind_from_key("not base64!") == "default"
        assert strategy.get_kind_from_key(base64.b64encode(b"nodash").decode()) == "default"


class TestCacheMetrics:
    """Test CacheMetrics functionality."""

    def test_empty_metrics(self):
        stats = CacheMetrics().get_metrics()
        assert stats["total_requests"] == 0
        assert stats["cache_hit_rate"] == 0.0
        assert stats["average_build_time"] == 0.0

    def test_cache_hit_rate(self):
        metrics = CacheMetrics()
        metrics.record_hit()
        metrics.record_hit()
        metrics.record_miss()

        stats = metrics.get_metrics()
        assert stats["total_requests"] == 3
        assert stats["cache_hit_rate"] == pytest.approx(0.666, abs=0.01)

    def test_record_build_time(self):
        metrics = CacheMetrics()
        metrics.record_build_time(0.5)
        metrics.record_build_time(1.5)

        stats = metrics.get_metrics()
        assert stats["build_count"] == 2
        assert stats["total_build_time"] == 2.0
        assert stats["average_build_time"] == 1.0


class TestCacheManager:
    """Test CacheManager integration (memory + disk)."""

    def test_put_and_get(self, tmp_path):
        cm = CacheManager(cache_dir=str(tmp_path))
        key = bundle_key("script", "app")

        cm.put(key, "var a;")

        assert cm.get(key) == "var a;"
        assert cm.is_usable(key) is True

    def test_missing_key_is_not_usable(self, tmp_path):
        cm = CacheManager(cache_dir=str(tmp_path))
        assert cm.is_usable(bundle_key("script", "app")) is False
        assert cm.get(bundle_key("script", "app")) is None

    def test_reads_disk_when_memory_is_empty(self, tmp_path):
        key = bundle_key("style", "site")
        CacheManager(cache_dir=str(tmp_path)).put(key, "body{}")

        fresh = CacheManager(cache_dir=str(tmp_path))

        assert fresh.get(key) == "body{}"
        assert fresh._memory_cache_component.get(key) == "body{}"

    def test_expired_entries_are_not_usable(self, tmp_path):
        config = ConfigManager(config={"script": {"max_age": 0}})
        cm = CacheManager(cache_dir=str(tmp_path), config_manager=config)
        key = bundle_key("script", "app")

        cm.put(key, "var a;")

        assert cm.is_usable(key) is False

    def test_memory_only_without_cache_dir(self):
        cm = CacheManager()
        key = bundle_key("script", "app")
        cm.put(key, "var a;")

        assert cm.get_cache_dir() is None
        assert cm.is_usable(key) is True

    def test_clear(self, tmp_path):
        cm = CacheManager(cache_dir=str(tmp_path))
        key = bundle_key("script", "app")
        cm.put(key, "var a;")

        cm.clear(key)

        assert cm.is_usable(key) is False

    def test_from_config(self, tmp_path):
        config = ConfigManager(config={"cache": {"cache_dir": str(tmp_path / "bundles")}})
        cm = CacheManager.from_config(config)
        assert cm.get_cache_dir() == str(tmp_path / "bundles")
