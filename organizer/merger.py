"""
Merger

Concatenates resolved fragments into one blob and builds the signature banner
placed on top of built bundles.
"""

from datetime import datetime
from typing import Callable, Iterable, Optional, Tuple

import pytz

from organizer.fragments import Fragment
from organizer.resolver import SourceResolver

PROJECT_URL = "https://github.com/kabir-baidhya/organizer"
TIMESTAMP_FORMAT = "%b %d %Y %H:%M:%S"

PreMergeProcess = Callable[[str, str], str]


def _identity(base_path: str, text: str) -> str:
    return text


class Merger:
    """Joins fragments in list order, each piece preceded by a newline."""

    def __init__(self, resolver: SourceResolver,
                 pre_merge_process: Optional[PreMergeProcess] = None) -> None:
        self.resolver = resolver
        self.pre_merge_process = pre_merge_process or _identity

    def merge(self, fragments: Iterable[Fragment]) -> str:
        pieces = []
        for fragment in fragments:
            source = self.resolver.resolve(fragment)
            pieces.append("\n" + self.pre_merge_process(source.base_path, source.text))
        return "".join(pieces)


def build_signature(name: str, version: str, delimiters: Tuple[str, str, str],
                    now: Optional[datetime] = None) -> str:
    """
    Build the comment banner for a bundle.

    Args:
        name: Bundle name
        version: Bundle version
        delimiters: (open, close, line formatter) of the bundle's comment syntax
        now: Build time; defaults to the current UTC time
    """
    open_delim, close_delim, formatter = delimiters
    now = now or datetime.now(pytz.utc)
    stamp = now.astimezone(pytz.utc).strftime(TIMESTAMP_FORMAT)

    line = f" {formatter} "
    return (
        f"{open_delim} \n"
        f"{line}{name} v{version} | {stamp} UTC\n"
        f"{line}Organized by Organizer\n"
        f"{line}{PROJECT_URL}\n"
        f" {close_delim}\n"
    )
