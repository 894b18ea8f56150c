"""
Organizer

Entry point for host applications: creates bundlers that share one
configuration and one cache, and maps bundle URLs back to cached content.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from organizer.bundlers import Bundler, BundleKind, create_bundler, get_flavor_class
from organizer.cache_manager import CacheManager
from organizer.config_manager import ConfigManager
from organizer.exceptions import BundleNotFoundError
from organizer.fragments import FragmentInput
from organizer.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ServedBundle:
    content: str
    content_type: str


class Organizer:
    """Factory for bundlers plus the lookup side of bundle URLs."""

    def __init__(self, config_manager: Optional[ConfigManager] = None, cache: Optional[Any] = None) -> None:
        self.config_manager = config_manager or ConfigManager()
        self.cache = cache if cache is not None else CacheManager.from_config(self.config_manager)

    def bundle(self, kind, name: str, includes: Optional[Sequence[FragmentInput]] = None,
               version: str = "1.0") -> Bundler:
        return create_bundler(kind, name, self.config_manager, self.cache, includes, version)

    def css(self, name: str, includes: Optional[Sequence[FragmentInput]] = None,
            version: str = "1.0") -> Bundler:
        return self.bundle(BundleKind.STYLE, name, includes, version)

    def js(self, name: str, includes: Optional[Sequence[FragmentInput]] = None,
           version: str = "1.0") -> Bundler:
        return self.bundle(BundleKind.SCRIPT, name, includes, version)

    def serve(self, params: Mapping[str, str]) -> ServedBundle:
        """
        Look up the cached bundle named by a bundle URL's query parameters.

        Args:
            params: Query parameters, e.g. {'js': '<key>', 'ver': '1.0'}

        Returns:
            The cached content and its content type

        Raises:
            BundleNotFoundError: If no parameter names a usable cached bundle
        """
        for kind in BundleKind:
            settings = self.config_manager.get_bundle_settings(kind.value)
            key = params.get(settings.parameter)
            if not key:
                continue

            # Kinds may share a parameter name; the key decides which one it is
            if not self._key_matches_kind(key, kind):
                continue
            content = self.cache.get(key) if self.cache.is_usable(key) else None
            if content is None:
                raise BundleNotFoundError(f"Bundle '{key}' is not cached")

            logger.debug("Serving %s bundle %s", kind.value, key)
            flavor_class = get_flavor_class(kind)
            return ServedBundle(content, flavor_class.content_type)

        raise BundleNotFoundError("No bundle of a known kind in request")

    @staticmethod
    def _key_matches_kind(key: str, kind: BundleKind) -> bool:
        try:
            decoded = base64.b64decode(key, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError, ValueError):
            return False
        return decoded.startswith(f"{kind.value}-")
