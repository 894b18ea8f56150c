"""
Bundle flavors

A flavor holds everything that differs between bundle kinds: comment syntax
for the signature banner, the minifier, the markup tag and any rewriting of
code before it is merged.
"""

import html
import os
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Tuple
from urllib.parse import urljoin

from organizer import minifiers
from organizer.config_manager import BundleSettings


class BundleKind(str, Enum):
    STYLE = "style"
    SCRIPT = "script"

    def __str__(self) -> str:
        return self.value


class BundleFlavor(ABC):
    """Kind-specific behaviour of a bundler."""

    kind: BundleKind
    content_type: str
    comment_delimiters: Tuple[str, str, str] = ("/*", "*/", "*")

    def __init__(self, settings: BundleSettings) -> None:
        self.settings = settings

    @abstractmethod
    def minify(self, code: str) -> str:
        ...

    @abstractmethod
    def render_tag(self, url: str) -> str:
        """Return the markup that loads the bundle from url."""
        ...

    def pre_merge_process(self, base_path: str, text: str) -> str:
        return text


# url(...) with optional single or double quotes
_CSS_URL = re.compile(r"""url\(\s*(['"]?)([^'")]+?)\1\s*\)""", re.IGNORECASE)
_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)


class StyleFlavor(BundleFlavor):
    kind = BundleKind.STYLE
    content_type = "text/css"

    def minify(self, code: str) -> str:
        return minifiers.minify(code, BundleKind.STYLE.value)

    def render_tag(self, url: str) -> str:
        return f'<link rel="stylesheet" type="text/css" href="{html.escape(url)}">'

    def pre_merge_process(self, base_path: str, text: str) -> str:
        """
        Rewrite relative url() references to absolute URLs under asset_url,
        keeping the stylesheet's directory relative to base_path.
        """
        asset_url = self.settings.asset_url
        if not asset_url:
            return text

        relative_dir = os.path.relpath(base_path or os.curdir, self.settings.base_path or os.curdir)
        if relative_dir == os.curdir:
            relative_dir = ""
        base_url = asset_url.rstrip("/") + "/"
        if relative_dir:
            base_url += relative_dir.replace(os.sep, "/").strip("/") + "/"

        def rewrite(match):
            quote, ref = match.group(1), match.group(2).strip()
            if ref.startswith(("/", "#", "data:")) or _SCHEME.match(ref):
                return match.group(0)
            return f"url({quote}{urljoin(base_url, ref)}{quote})"

        return _CSS_URL.sub(rewrite, text)


class ScriptFlavor(BundleFlavor):
    kind = BundleKind.SCRIPT
    content_type = "application/javascript"

    def minify(self, code: str) -> str:
        return minifiers.minify(code, BundleKind.SCRIPT.value)

    def render_tag(self, url: str) -> str:
        return f'<script type="text/javascript" src="{html.escape(url)}"></script>'


FLAVORS = {
    BundleKind.STYLE: StyleFlavor,
    BundleKind.SCRIPT: ScriptFlavor,
}


def get_flavor_class(kind) -> type:
    """
    Return the flavor class for a kind given as BundleKind or string.

    Raises:
        ValueError: If the kind is unknown
    """
    return FLAVORS[BundleKind(kind)]
