"""
Organizer - bundles CSS and JavaScript fragments into cached, minified assets.

Fragments (files, glob patterns or inline code) are merged in insertion order,
optionally minified and signed, stored under a key derived from the bundle's
kind and name, and served through a URL built from that key.
"""

from organizer.bundlers import Bundler, BundleKind, BundleState, create_bundler
from organizer.cache_gate import BuildArtifact, CacheGate, make_cache_key
from organizer.cache_manager import CacheManager
from organizer.config_manager import BundleSettings, ConfigManager
from organizer.exceptions import BundleNotFoundError, ConfigError, InvalidFragmentError, OrganizerError
from organizer.fragments import FilePath, GlobPattern, InlineCode
from organizer.organizer import Organizer, ServedBundle

__version__ = "0.1.0"

__all__ = [
    "BuildArtifact",
    "BundleKind",
    "BundleNotFoundError",
    "BundleSettings",
    "BundleState",
    "Bundler",
    "CacheGate",
    "CacheManager",
    "ConfigError",
    "ConfigManager",
    "FilePath",
    "GlobPattern",
    "InlineCode",
    "InvalidFragmentError",
    "Organizer",
    "OrganizerError",
    "ServedBundle",
    "create_bundler",
    "make_cache_key",
]
