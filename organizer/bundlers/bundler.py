"""
Bundler

Collects fragments for one named, versioned bundle, builds it through the
cache gate and produces the URL, markup or literal content for a page.
"""

from enum import Enum
from typing import Any, Optional, Sequence, Union
from urllib.parse import urlencode

from organizer.bundlers.flavors import BundleFlavor
from organizer.cache_gate import CacheGate, make_cache_key
from organizer.fragments import FragmentInput, FragmentList
from organizer.logging_config import get_logger
from organizer.merger import Merger, build_signature
from organizer.resolver import SourceResolver

logger = get_logger(__name__)


class BundleState(Enum):
    EMPTY = "empty"
    FRAGMENTS_ADDED = "fragments_added"
    BUILT = "built"


class Bundler:
    """A bundle of one kind, e.g. the 'app' stylesheet at version 1.0."""

    def __init__(self, name: str, flavor: BundleFlavor, version: str,
                 config_manager: Any, cache: Any,
                 includes: Optional[Sequence[FragmentInput]] = None) -> None:
        """
        Initialize the bundler.

        Args:
            name: Bundle name
            flavor: Kind-specific behaviour (style or script)
            version: Bundle version, appended to the URL
            config_manager: Provides the signature switch and the server URL
            cache: Cache collaborator with put/get/is_usable
            includes: Initial fragments
        """
        self.name = name
        self.flavor = flavor
        self.kind = flavor.kind
        self.version = version
        self.config_manager = config_manager
        self.settings = flavor.settings
        self.cache = cache
        self.fragments = FragmentList()
        self.gate = CacheGate(cache, self.settings)
        self._built = False

        if includes:
            self.fragments.add(list(includes))

    def __repr__(self) -> str:
        return f"<Bundler {self.kind.value}:{self.name} v{self.version}>"

    @property
    def state(self) -> BundleState:
        if self._built:
            return BundleState.BUILT
        return BundleState.FRAGMENTS_ADDED if len(self.fragments) else BundleState.EMPTY

    @property
    def cache_key(self) -> str:
        return make_cache_key(self.kind.value, self.name)

    def add(self, item: Union[FragmentInput, Sequence[FragmentInput]]) -> "Bundler":
        self.fragments.add(item)
        return self

    def add_before(self, item: FragmentInput) -> "Bundler":
        self.fragments.add_before(item)
        return self

    def add_inline(self, code: str) -> None:
        self.fragments.add_inline(code)

    def merge(self) -> str:
        """Resolve and concatenate every fragment."""
        resolver = SourceResolver(self.settings.base_path)
        return Merger(resolver, self.flavor.pre_merge_process).merge(self.fragments)

    def signature(self) -> str:
        if not self.config_manager.signature_enabled():
            return ""
        return build_signature(self.name, self.version, self.flavor.comment_delimiters)

    def output(self) -> str:
        return self.signature() + self.merge()

    def output_minified(self) -> str:
        return self.signature() + self.flavor.minify(self.merge())

    def _build_content(self) -> str:
        return self.output_minified() if self.settings.minify else self.output()

    def build(self) -> str:
        """Build the bundle unless a usable cached copy exists; return its URL."""
        logger.debug("Building %r with %d fragments", self, len(self.fragments))
        self.gate.build_or_reuse(self.kind.value, self.name, self._build_content)
        self._built = True
        return self.url()

    def url(self) -> str:
        query = urlencode({self.settings.parameter: self.cache_key, "ver": self.version})
        return f"{self.config_manager.get_server_url()}?{query}"

    def embed_here(self) -> str:
        """Return the bundle content itself, for inlining into a page."""
        content = self.gate.retrieve(self.kind.value, self.name, self._build_content)
        self._built = True
        return content

    def include_here(self) -> str:
        """Build the bundle and return the markup that loads it."""
        return self.flavor.render_tag(self.build())
