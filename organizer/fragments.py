"""
Fragment types and the ordered fragment list of a bundle.

A fragment is a file path, a glob pattern or a piece of inline code. Insertion
order is output order. Path and pattern fragments are unique by their literal
string; inline code is never deduplicated.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Union

from organizer.exceptions import InvalidFragmentError

_GLOB_MAGIC = re.compile(r"[*?\[]")


@dataclass(frozen=True)
class FilePath:
    value: str


@dataclass(frozen=True)
class GlobPattern:
    value: str


@dataclass(frozen=True, eq=False)
class InlineCode:
    """Inline code compares by identity, so equal snippets stay distinct entries."""

    code: str


Fragment = Union[FilePath, GlobPattern, InlineCode]
FragmentInput = Union[str, FilePath, GlobPattern]


def to_fragment(item: FragmentInput) -> Union[FilePath, GlobPattern]:
    """
    Turn a literal string (or an already typed path/pattern) into a fragment.

    Raises:
        InvalidFragmentError: If item is neither a string nor a path/pattern
    """
    if isinstance(item, (FilePath, GlobPattern)):
        return item
    if isinstance(item, str):
        if _GLOB_MAGIC.search(item):
            return GlobPattern(item)
        return FilePath(item)
    raise InvalidFragmentError(f"Invalid fragment: {item!r}")


class FragmentList:
    """Ordered collection of fragments."""

    def __init__(self) -> None:
        self._items: List[Fragment] = []

    def add(self, item: Union[FragmentInput, Sequence[FragmentInput]]) -> None:
        """
        Append one fragment or a list/tuple of fragments, skipping duplicates.

        All items are validated before any is appended.

        Raises:
            InvalidFragmentError: If any item is not a string or path/pattern
        """
        if isinstance(item, (list, tuple)):
            fragments = [to_fragment(single) for single in item]
        else:
            fragments = [to_fragment(item)]

        for fragment in fragments:
            if fragment not in self._items:
                self._items.append(fragment)

    def add_before(self, item: FragmentInput) -> None:
        """
        Insert a single fragment ahead of all others.

        Raises:
            InvalidFragmentError: If item is not a string or is already present
        """
        fragment = to_fragment(item)
        if fragment in self._items:
            raise InvalidFragmentError(f"Fragment already included: {fragment.value!r}")
        self._items.insert(0, fragment)

    def add_inline(self, code: str) -> None:
        """
        Append inline code. Never deduplicated.

        Raises:
            InvalidFragmentError: If code is not a string
        """
        if not isinstance(code, str):
            raise InvalidFragmentError(f"Invalid inline code: {code!r}")
        self._items.append(InlineCode(code))

    def __iter__(self) -> Iterator[Fragment]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            item = to_fragment(item)
        return item in self._items

    def __repr__(self) -> str:
        return f"FragmentList({self._items!r})"
