"""
Bounded, pruning directory walker.

`scan_dir` is the directory-entry source: it reads one directory level and
reports each entry's kind. `walk` drives it lazily, depth first, asking the
caller whether each subdirectory should be skipped before descending into it.
Unreadable directories and entries are logged and skipped so a single fault
never ends a walk.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import structlog

from globiter.errors import TraversalError
from globiter.paths import join_path

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DirEntryInfo:
    """One entry of a directory listing."""

    path: str
    name: str
    is_dir: bool
    is_file: bool


@dataclass(frozen=True)
class WalkEntry:
    """
    An entry reached by `walk`. `rel_path` is relative to the walk base and
    `depth` counts levels below it (children of the base have depth 1).
    """

    path: str
    rel_path: str
    depth: int
    is_dir: bool
    is_file: bool


def scan_dir(directory: str, follow_links: bool = False) -> list[DirEntryInfo]:
    """
    List one directory level, sorted by name.

    Raises `TraversalError` if the directory itself cannot be read. An entry
    whose type cannot be determined is skipped.
    """
    try:
        with os.scandir(directory) as it:
            raw_entries = list(it)
    except OSError as e:
        raise TraversalError(directory, e) from e

    entries: list[DirEntryInfo] = []
    for entry in raw_entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=follow_links)
            is_file = entry.is_file(follow_symlinks=follow_links)
        except OSError as e:
            log.debug("dir_entry_skipped", directory=directory, name=entry.name, error=str(e))
            continue
        entries.append(
            DirEntryInfo(
                path=join_path(directory, entry.name),
                name=entry.name,
                is_dir=is_dir,
                is_file=is_file,
            )
        )
    entries.sort(key=lambda e: e.name)
    return entries


def _scan_or_skip(directory: str, follow_links: bool) -> list[DirEntryInfo]:
    try:
        return scan_dir(directory, follow_links)
    except TraversalError as e:
        log.debug("dir_scan_failed", path=e.path, error=str(e.cause))
        return []


def walk(
    base: str,
    max_depth: int,
    skip_dir: Callable[[WalkEntry], bool] | None = None,
    follow_links: bool = False,
) -> Iterator[WalkEntry]:
    """
    Lazily walk `base` depth first, up to `max_depth` levels below it.

    The base itself is not yielded. A directory for which `skip_dir` returns
    true is neither yielded nor descended into. Directories at `max_depth` are
    yielded but not descended into.
    """
    if max_depth < 1:
        return

    # Each frame is (remaining entries, depth of those entries, their parent's rel path).
    stack: list[tuple[Iterator[DirEntryInfo], int, str]] = [
        (iter(_scan_or_skip(base, follow_links)), 1, "")
    ]
    while stack:
        entries, depth, parent_rel = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            continue

        rel_path = entry.name if not parent_rel else f"{parent_rel}/{entry.name}"
        walk_entry = WalkEntry(
            path=entry.path,
            rel_path=rel_path,
            depth=depth,
            is_dir=entry.is_dir,
            is_file=entry.is_file,
        )

        if entry.is_dir:
            if skip_dir is not None and skip_dir(walk_entry):
                continue
            yield walk_entry
            if depth < max_depth:
                stack.append((iter(_scan_or_skip(entry.path, follow_links)), depth + 1, rel_path))
        else:
            yield walk_entry
