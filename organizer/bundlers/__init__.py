"""Bundlers for style sheets and scripts."""

from typing import Any, Optional, Sequence

from organizer.bundlers.bundler import Bundler, BundleState
from organizer.bundlers.flavors import (
    BundleFlavor,
    BundleKind,
    ScriptFlavor,
    StyleFlavor,
    get_flavor_class,
)
from organizer.fragments import FragmentInput

__all__ = [
    "Bundler",
    "BundleFlavor",
    "BundleKind",
    "BundleState",
    "ScriptFlavor",
    "StyleFlavor",
    "create_bundler",
]


def create_bundler(kind, name: str, config_manager: Any, cache: Any,
                   includes: Optional[Sequence[FragmentInput]] = None,
                   version: str = "1.0") -> Bundler:
    """
    Create a bundler for the given kind.

    Args:
        kind: BundleKind or its string value ('style', 'script')
        name: Bundle name
        config_manager: Provides the kind's settings, signature switch and server URL
        cache: Cache collaborator
        includes: Initial fragments
        version: Bundle version

    Raises:
        ValueError: If the kind is unknown
    """
    flavor_class = get_flavor_class(kind)
    settings = config_manager.get_bundle_settings(flavor_class.kind.value)
    return Bundler(name, flavor_class(settings), version, config_manager, cache, includes)
