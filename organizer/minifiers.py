"""Minification of merged bundle code."""

import rcssmin
import rjsmin


def minify_style(code: str) -> str:
    return rcssmin.cssmin(code)


def minify_script(code: str) -> str:
    return rjsmin.jsmin(code)


_MINIFIERS = {
    "style": minify_style,
    "script": minify_script,
}


def minify(code: str, kind: str) -> str:
    """
    Minify code of the given bundle kind.

    Raises:
        ValueError: If kind has no minifier
    """
    try:
        minifier = _MINIFIERS[str(kind)]
    except KeyError:
        raise ValueError(f"No minifier for bundle kind '{kind}'") from None
    return minifier(code)
