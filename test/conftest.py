"""Shared fixtures for Organizer tests."""

import os

import pytest

from organizer.config_manager import ConfigManager

SERVER_URL = "http://example.com/bundle"


class FakeCache:
    """In-memory cache collaborator that records writes."""

    def __init__(self):
        self.store = {}
        self.puts = []

    def put(self, key, value):
        self.store[key] = value
        self.puts.append(key)

    def get(self, key):
        return self.store.get(key)

    def is_usable(self, key):
        return key in self.store


@pytest.fixture
def asset_dir(tmp_path):
    """Directory with two scripts and a stylesheet."""
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "a.js").write_text("var a = 1;")
    (assets / "b.js").write_text("var b = 2;")
    (assets / "site.css").write_text("body { color: red; }")
    return assets


@pytest.fixture
def fake_cache():
    return FakeCache()


@pytest.fixture
def make_config(asset_dir):
    """Factory for a ConfigManager rooted at asset_dir, caching and minifying off."""

    def _make(signature=False, **sections):
        base_path = str(asset_dir) + os.sep
        config = {
            "server_url": SERVER_URL,
            "signature": signature,
            "cache": {"cache_dir": None, "max_age": 3600},
            "script": {"base_path": base_path, "cache": False, "minify": False, "parameter": "file"},
            "style": {"base_path": base_path, "cache": False, "minify": False, "parameter": "css"},
        }
        for kind, values in sections.items():
            config[kind].update(values)
        return ConfigManager(config=config)

    return _make
