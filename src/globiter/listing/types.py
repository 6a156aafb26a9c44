"""Option and group types for glob-driven listing."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from globiter.listing.defaults import DEFAULT_EXCLUDE_GLOBS


@dataclass
class ListOptions:
    """
    Options shared by file and directory listing.

    `exclude_globs=None` means use `DEFAULT_EXCLUDE_GLOBS`; providing a list
    replaces them entirely. `relative_glob` selects whether exclude patterns
    match root-relative paths (`True`) or absolute paths (`False`). `depth`,
    when set, overrides the depth derived from the include patterns.
    """

    exclude_globs: list[str] | None = None
    relative_glob: bool = False
    depth: int | None = None
    follow_links: bool = False
    respect_gitignore: bool = False

    def __post_init__(self) -> None:
        if self.depth is not None and self.depth < 1:
            raise ValueError(f"depth must be a positive integer, got {self.depth}")

    @classmethod
    def from_relative_glob(cls, value: bool) -> ListOptions:
        return cls(relative_glob=value)

    def with_exclude_globs(self, globs: Sequence[str]) -> ListOptions:
        return replace(self, exclude_globs=list(globs))

    def with_relative_glob(self) -> ListOptions:
        return replace(self, relative_glob=True)

    @property
    def effective_exclude(self) -> list[str]:
        """Caller excludes, or the defaults when none were given."""
        if self.exclude_globs is None:
            return list(DEFAULT_EXCLUDE_GLOBS)
        return list(self.exclude_globs)


@dataclass(frozen=True)
class GlobGroup:
    """
    Patterns that share one traversal root.

    `base` is an ancestor of (or equal to) the literal base of every pattern,
    and both `patterns` and `prefixes` are expressed relative to it. An empty
    `prefixes` tuple means the whole subtree must be visited.
    """

    base: str
    patterns: tuple[str, ...]
    prefixes: tuple[str, ...] = field(default_factory=tuple)
