"""
Glob-driven file listing.

`GlobsFileIter` walks each traversal group in turn and yields every regular
file whose group-relative path matches one of the group's include patterns and
whose path is not excluded. A file reachable from more than one group is
yielded once, from the first group that reaches it.
"""

from __future__ import annotations

import itertools
import os
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from globiter.listing.plan import CompiledGroup, ListingPlan
from globiter.listing.types import ListOptions


class GlobsFileIter(Iterator[Path]):
    """
    Lazy iterator over files matched by glob patterns below `root`.

    Patterns are compiled on construction (raising `PatternError` for a bad
    one); the filesystem is only touched as the iterator is consumed.
    Yielded paths keep the form of `root`: relative in, relative out.
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        include_globs: Sequence[str] | None = None,
        options: ListOptions | None = None,
    ) -> None:
        self._plan = ListingPlan(root, include_globs, options)
        streams = (self._iter_group(cg) for cg in self._plan.groups)
        self._inner: Iterator[Path] = dedupe_paths(itertools.chain.from_iterable(streams))

    def __iter__(self) -> GlobsFileIter:
        return self

    def __next__(self) -> Path:
        return next(self._inner)

    def _iter_group(self, cg: CompiledGroup) -> Iterator[tuple[str, Path]]:
        for entry in self._plan.walk_group(cg):
            if entry.is_file and cg.matcher.is_match(entry.rel_path):
                yield self._plan.absolute_path(cg, entry), Path(entry.path)


def dedupe_paths(keyed_paths: Iterable[tuple[str, Path]]) -> Iterator[Path]:
    """Yield each path whose key hasn't been seen yet, in arrival order."""
    seen: set[str] = set()
    for key, path in keyed_paths:
        if key in seen:
            continue
        seen.add(key)
        yield path


def iter_files(
    root: str | os.PathLike[str],
    include_globs: Sequence[str] | None = None,
    options: ListOptions | None = None,
) -> GlobsFileIter:
    return GlobsFileIter(root, include_globs, options)


def list_files(
    root: str | os.PathLike[str],
    include_globs: Sequence[str] | None = None,
    options: ListOptions | None = None,
) -> list[Path]:
    """
    List files below `root` matching `include_globs` (all files when omitted),
    in traversal order.

    ```
    list_files("project", ["src/**/*.rs", "*.md"])
    list_files(".", ["**/*.py", "!tests/**"], ListOptions().with_relative_glob())
    ```
    """
    return list(GlobsFileIter(root, include_globs, options))
