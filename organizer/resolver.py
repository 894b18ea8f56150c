"""
Source Resolver

Turns a fragment into literal code text. A path or pattern is first tried as
an exact file below the configured base path and only then expanded as a glob.
"""

import errno
import glob
import os
from dataclasses import dataclass

from organizer.fragments import Fragment, InlineCode
from organizer.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolvedSource:
    """Code of one fragment plus the directory it was read from."""

    base_path: str
    text: str


class SourceResolver:
    """Resolves fragments relative to a base path."""

    def __init__(self, base_path: str) -> None:
        self.base_path = base_path

    def resolve(self, fragment: Fragment) -> ResolvedSource:
        """
        Resolve a fragment to its code.

        Raises:
            FileNotFoundError: If neither a file nor any glob match exists
        """
        if isinstance(fragment, InlineCode):
            return ResolvedSource(self.base_path, fragment.code)

        # Fragments always stay below the base path, even when written as absolute paths
        path = os.path.join(self.base_path, fragment.value.lstrip("/" + os.sep))

        if os.path.isfile(path):
            return ResolvedSource(os.path.dirname(path), self._read(path))

        matches = [match for match in glob.glob(path) if os.path.isfile(match)]
        if matches:
            logger.debug("Pattern %s matched %d files", path, len(matches))
            text = "".join("\n" + self._read(match) for match in matches)
            return ResolvedSource(os.path.dirname(path), text)

        missing = os.path.abspath(path)
        raise FileNotFoundError(errno.ENOENT, f"{missing} not found", missing)

    @staticmethod
    def _read(path: str) -> str:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
