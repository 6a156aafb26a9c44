"""
Listing plan: everything an iterator needs, built once at construction.

Building a `ListingPlan` classifies the patterns, groups them, and compiles
every matcher, so pattern errors surface before any filesystem access. The
plan is immutable afterwards; walking a group only reads from it.
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, replace

import structlog

from globiter.listing.gitignore import GitignoreChain
from globiter.listing.groups import build_glob_groups, classify_patterns
from globiter.listing.matcher import GlobMatcher, check_pattern_syntax
from globiter.listing.prefixes import get_depth
from globiter.listing.types import GlobGroup, ListOptions
from globiter.listing.walker import WalkEntry, walk
from globiter.paths import diff_path, is_within, join_path, normalize_path, to_absolute

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CompiledGroup:
    """A `GlobGroup` with its include matcher and walk parameters."""

    group: GlobGroup
    matcher: GlobMatcher
    depth: int
    abs_base: str
    # Base relative to the listing root; starts with `..` for bases outside it.
    root_offset: str


class ListingPlan:
    def __init__(
        self,
        root: str | os.PathLike[str],
        include_globs: Sequence[str] | None = None,
        options: ListOptions | None = None,
    ) -> None:
        options = options or ListOptions()
        self.root: str = normalize_path(root)
        self.abs_root: str = to_absolute(self.root)

        includes, excludes = classify_patterns(include_globs, options.exclude_globs)
        # Grouping rebases patterns, so errors must be caught on the caller's text.
        for pattern in includes:
            check_pattern_syntax(pattern)
        self.options: ListOptions = replace(options, exclude_globs=excludes)
        self.exclude_matcher: GlobMatcher = GlobMatcher(self.options.effective_exclude)

        self.groups: list[CompiledGroup] = [
            self._compile_group(group) for group in build_glob_groups(self.root, includes)
        ]
        log.debug(
            "glob_groups_resolved",
            root=self.root,
            groups=[(g.group.base, list(g.group.patterns)) for g in self.groups],
            excludes=list(self.exclude_matcher.patterns),
            relative_glob=self.options.relative_glob,
        )

    def _compile_group(self, group: GlobGroup) -> CompiledGroup:
        abs_base = to_absolute(group.base)
        return CompiledGroup(
            group=group,
            matcher=GlobMatcher(group.patterns),
            depth=get_depth(group.patterns, self.options.depth),
            abs_base=abs_base,
            root_offset=diff_path(abs_base, self.abs_root),
        )

    def absolute_path(self, cg: CompiledGroup, entry: WalkEntry) -> str:
        return join_path(cg.abs_base, entry.rel_path)

    def exclude_path(self, cg: CompiledGroup, entry: WalkEntry) -> str:
        """The path exclude patterns are matched against, per `relative_glob`."""
        if self.options.relative_glob:
            return join_path(cg.root_offset, entry.rel_path) if cg.root_offset else entry.rel_path
        return self.absolute_path(cg, entry)

    def walk_group(self, cg: CompiledGroup) -> Iterator[WalkEntry]:
        """
        Walk one group's base, pruning excluded directories and directories
        outside the group's literal prefixes, and dropping excluded files.
        """
        gitignore: GitignoreChain | None = None
        if self.options.respect_gitignore:
            top = self.abs_root if is_within(cg.abs_base, self.abs_root) else cg.abs_base
            gitignore = GitignoreChain(top)

        def is_excluded(entry: WalkEntry) -> bool:
            if self.exclude_matcher.is_match(self.exclude_path(cg, entry)):
                return True
            return gitignore is not None and gitignore.is_ignored(
                self.absolute_path(cg, entry), entry.is_dir
            )

        prefixes = cg.group.prefixes

        def skip_dir(entry: WalkEntry) -> bool:
            return not _prefix_allows(prefixes, entry.rel_path) or is_excluded(entry)

        for entry in walk(cg.group.base, cg.depth, skip_dir, self.options.follow_links):
            # Directories reaching here already passed `skip_dir`.
            if entry.is_dir or not is_excluded(entry):
                yield entry


def _prefix_allows(prefixes: Sequence[str], rel_path: str) -> bool:
    """A directory is on the way to (or inside) some literal prefix."""
    if not prefixes:
        return True
    return any(
        rel_path == prefix or rel_path.startswith(prefix + "/") or prefix.startswith(rel_path + "/")
        for prefix in prefixes
    )
