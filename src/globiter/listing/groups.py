"""
Pattern classification and traversal grouping.

Include patterns are anchored at a base directory (their own literal base for
absolute patterns, the listing root joined with it for relative ones) and then
folded into groups so that patterns with nested bases share a single walk:

```
root="/project", patterns=["/project/src/**/*.rs", "*.md", "/opt/shared/*.toml"]
-> [GlobGroup(base="/project", patterns=("src/**/*.rs", "*.md")),
    GlobGroup(base="/opt/shared", patterns=("*.toml",))]
```

Group order follows the order patterns were supplied, which is also the order
groups are walked in.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from globiter.listing.prefixes import (
    glob_literal_prefixes,
    normalize_prefixes,
    split_literal_base,
)
from globiter.listing.types import GlobGroup
from globiter.paths import diff_path, is_within, join_path, normalize_path, to_absolute

NEGATION_PREFIX = "!"


def classify_patterns(
    include_globs: Sequence[str] | None,
    exclude_globs: Sequence[str] | None,
) -> tuple[list[str], list[str] | None]:
    """
    Split includes from negated (`!`-prefixed) entries and fold the latter into
    the excludes, after any caller excludes.

    Returns `(includes, excludes)`. `includes` is never empty (it defaults to
    `["**"]`). `excludes` is `None` when neither the caller nor a negation
    supplied one, meaning the default excludes apply.
    """
    includes: list[str] = []
    negated: list[str] = []
    for pattern in include_globs or []:
        if pattern.startswith(NEGATION_PREFIX):
            negated.append(pattern[len(NEGATION_PREFIX) :])
        else:
            includes.append(pattern)

    if not includes:
        includes = ["**"]

    if not negated:
        return includes, list(exclude_globs) if exclude_globs is not None else None
    return includes, [*(exclude_globs or []), *negated]


def resolve_pattern_base(root: str, pattern: str) -> tuple[str, str]:
    """
    Resolve the base directory of one include pattern and the pattern relative
    to it. `root` must be normalized.

    A relative pattern that already spells out the root (`"data/*.txt"` with
    root `"data"`) is taken as relative to the root, not nested below it.
    """
    if pattern.startswith("/"):
        literal_base, rest = split_literal_base(pattern)
        return normalize_path(literal_base), rest

    cleaned = pattern
    while cleaned.startswith("./"):
        cleaned = cleaned[2:]
    if root not in (".", "") and cleaned.startswith(root.rstrip("/") + "/"):
        cleaned = cleaned[len(root.rstrip("/")) + 1 :]

    literal_base, rest = split_literal_base(cleaned)
    return normalize_path(join_path(root, literal_base)), rest


@dataclass
class _GroupDraft:
    base: str
    abs_base: str
    patterns: list[str] = field(default_factory=list)

    def freeze(self) -> GlobGroup:
        return GlobGroup(
            base=self.base,
            patterns=tuple(self.patterns),
            prefixes=tuple(_group_prefixes(self.patterns)),
        )


def build_glob_groups(root: str, patterns: Sequence[str]) -> list[GlobGroup]:
    """
    Resolve each pattern's base and merge patterns whose bases are nested (or
    equal) into one group anchored at the shallowest base. Patterns with
    unrelated bases get separate groups.
    """
    drafts: list[_GroupDraft] = []
    for pattern in patterns:
        base, rest = resolve_pattern_base(root, pattern)
        _absorb(drafts, base, rest)
    return [draft.freeze() for draft in drafts]


def _absorb(drafts: list[_GroupDraft], base: str, pattern: str) -> None:
    """Fold one (base, pattern) pair into the running list of group drafts."""
    abs_base = to_absolute(base)

    # Drafts are pairwise unrelated, so at most one can contain the new base.
    for draft in drafts:
        if is_within(abs_base, draft.abs_base):
            draft.patterns.append(_rebase(pattern, diff_path(abs_base, draft.abs_base)))
            return

    nested = [i for i, draft in enumerate(drafts) if is_within(draft.abs_base, abs_base)]
    if not nested:
        drafts.append(_GroupDraft(base=base, abs_base=abs_base, patterns=[pattern]))
        return

    merged = _GroupDraft(base=base, abs_base=abs_base)
    for i in nested:
        draft = drafts[i]
        offset = diff_path(draft.abs_base, abs_base)
        merged.patterns.extend(_rebase(p, offset) for p in draft.patterns)
    merged.patterns.append(pattern)

    first = nested[0]
    drafts[first] = merged
    for i in reversed(nested[1:]):
        del drafts[i]


def _rebase(pattern: str, offset: str) -> str:
    """Express a pattern relative to an ancestor `offset` directories up."""
    return f"{offset}/{pattern}" if offset else pattern


def _group_prefixes(patterns: Sequence[str]) -> list[str]:
    prefixes: list[str] = []
    for pattern in patterns:
        pattern_prefixes = glob_literal_prefixes(pattern)
        if not pattern_prefixes:
            # This pattern can match anywhere below the base.
            return []
        prefixes.extend(pattern_prefixes)
    return normalize_prefixes(prefixes)
