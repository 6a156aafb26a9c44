"""
Glob-driven directory listing, the companion of `file_iter`.

Directories are matched against the include patterns the same way files are,
and excluded directories are neither yielded nor descended into. A group's
base directory is never yielded itself.
"""

from __future__ import annotations

import itertools
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from globiter.listing.file_iter import dedupe_paths
from globiter.listing.plan import CompiledGroup, ListingPlan
from globiter.listing.types import ListOptions


class GlobsDirIter(Iterator[Path]):
    """Lazy iterator over directories matched by glob patterns below `root`."""

    def __init__(
        self,
        root: str | os.PathLike[str],
        include_globs: Sequence[str] | None = None,
        options: ListOptions | None = None,
    ) -> None:
        self._plan = ListingPlan(root, include_globs, options)
        streams = (self._iter_group(cg) for cg in self._plan.groups)
        self._inner: Iterator[Path] = dedupe_paths(itertools.chain.from_iterable(streams))

    def __iter__(self) -> GlobsDirIter:
        return self

    def __next__(self) -> Path:
        return next(self._inner)

    def _iter_group(self, cg: CompiledGroup) -> Iterator[tuple[str, Path]]:
        for entry in self._plan.walk_group(cg):
            if entry.is_dir and cg.matcher.is_match(entry.rel_path):
                yield self._plan.absolute_path(cg, entry), Path(entry.path)


def iter_dirs(
    root: str | os.PathLike[str],
    include_globs: Sequence[str] | None = None,
    options: ListOptions | None = None,
) -> GlobsDirIter:
    return GlobsDirIter(root, include_globs, options)


def list_dirs(
    root: str | os.PathLike[str],
    include_globs: Sequence[str] | None = None,
    options: ListOptions | None = None,
) -> list[Path]:
    return list(GlobsDirIter(root, include_globs, options))
