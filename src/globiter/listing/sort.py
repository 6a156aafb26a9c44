"""Ordering of listing results by the glob that matched them."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Sequence
from pathlib import PurePath
from typing import TypeVar

from globiter.listing.matcher import GlobMatcher
from globiter.paths import to_absolute

T = TypeVar("T", str, os.PathLike)


def sort_by_globs(
    items: Iterable[T],
    globs: Sequence[str],
    end_weighted: bool = False,
    key: Callable[[T], str | os.PathLike[str]] | None = None,
) -> list[T]:
    """
    Stable sort of `items` by the index of the first glob (or the last, when
    `end_weighted`) that matches each one. Items matching no glob go last,
    keeping their relative order.

    Relative globs are matched against `key(item)` (the item itself by
    default), so results listed under a root can be ranked by their
    root-relative path. Absolute globs are matched against the item's
    absolute path.

    ```
    sort_by_globs(["b.txt", "a.rs", "c.rs"], ["*.rs", "*.txt"])
    -> ["a.rs", "c.rs", "b.txt"]
    ```
    """
    matchers = [(glob.startswith("/"), GlobMatcher([glob])) for glob in globs]
    if end_weighted:
        ranked = list(enumerate(matchers))[::-1]
    else:
        ranked = list(enumerate(matchers))
    no_match = len(matchers)

    def rank(item: T) -> int:
        relative = _match_text(key(item) if key is not None else item)
        absolute: str | None = None
        for index, (is_absolute, matcher) in ranked:
            if is_absolute:
                if absolute is None:
                    absolute = to_absolute(item)
                candidate = absolute
            else:
                candidate = relative
            if matcher.is_match(candidate):
                return index
        return no_match

    return sorted(items, key=rank)


def _match_text(item: str | os.PathLike[str]) -> str:
    text = item if isinstance(item, str) else PurePath(item).as_posix()
    while text.startswith("./"):
        text = text[2:]
    return text
