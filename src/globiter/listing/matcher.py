"""
Glob matcher construction.

Patterns are matched with `wcmatch` in path mode: `*` and `?` never cross a
`/`, only `**` does, `{a,b}` alternation is expanded, and dotfiles are matched
like any other name. Invalid patterns are rejected up front with `PatternError`
rather than being read as literal text.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from wcmatch import glob as wcglob

from globiter.errors import PatternError

GLOB_FLAGS: int = wcglob.GLOBSTAR | wcglob.BRACE | wcglob.DOTGLOB | wcglob.FORCEUNIX | wcglob.CASE


class GlobMatcher:
    """
    A compiled, immutable set of glob patterns. `is_match` is true if any
    pattern matches. An empty pattern list matches nothing.
    """

    def __init__(self, patterns: Sequence[str]) -> None:
        self.patterns: tuple[str, ...] = tuple(patterns)
        regexes: list[re.Pattern[str]] = []
        for pattern in self.patterns:
            check_pattern_syntax(pattern)
            regexes.extend(_compile(pattern))
        self._regexes: tuple[re.Pattern[str], ...] = tuple(regexes)

    def is_match(self, path: str) -> bool:
        candidate = _strip_root(path)
        return any(regex.fullmatch(candidate) for regex in self._regexes)

    def __bool__(self) -> bool:
        return bool(self._regexes)

    def __repr__(self) -> str:
        return f"{type(self).__qualname__}(patterns={list(self.patterns)!r})"


def _compile(pattern: str) -> list[re.Pattern[str]]:
    try:
        # Brace expansion is bounded by the pattern length, so no limit is needed.
        positive, _ = wcglob.translate(_strip_root(pattern), flags=GLOB_FLAGS, limit=0)
        return [re.compile(regex) for regex in positive]
    except (re.error, ValueError) as e:
        raise PatternError(pattern, str(e)) from e


def _strip_root(path: str) -> str:
    # Absolute patterns and absolute paths are both compared without their root.
    return path.lstrip("/")


def check_pattern_syntax(pattern: str) -> None:
    """
    Reject malformed patterns: unclosed or reversed character classes,
    unbalanced braces, and a trailing lone backslash.
    """
    depth = 0
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "\\":
            if i + 1 >= n:
                raise PatternError(pattern, "dangling escape at end of pattern")
            i += 2
            continue
        if c == "[":
            i = _check_class(pattern, i)
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            if depth == 0:
                raise PatternError(pattern, "unopened alternation group")
            depth -= 1
        i += 1
    if depth:
        raise PatternError(pattern, "unclosed alternation group")


def _check_class(pattern: str, start: int) -> int:
    """Validate the class opening at `start` and return the index after it."""
    n = len(pattern)
    i = start + 1
    if i < n and pattern[i] in "!^":
        i += 1
    members_start = i
    # A `]` right after the opening (or negation) is a literal member.
    if i < n and pattern[i] == "]":
        i += 1
    while i < n and pattern[i] != "]":
        i += 2 if pattern[i] == "\\" else 1
    if i >= n:
        raise PatternError(pattern, "unclosed character class")
    _check_ranges(pattern, pattern[members_start:i])
    return i + 1


def _check_ranges(pattern: str, members: str) -> None:
    tokens: list[tuple[str, bool]] = []
    j = 0
    while j < len(members):
        if members[j] == "\\" and j + 1 < len(members):
            tokens.append((members[j + 1], True))
            j += 2
        else:
            tokens.append((members[j], False))
            j += 1

    k = 0
    while k < len(tokens):
        if k + 2 < len(tokens) and tokens[k + 1] == ("-", False):
            low, high = tokens[k][0], tokens[k + 2][0]
            if low > high:
                raise PatternError(pattern, f"invalid range '{low}-{high}' in character class")
            k += 3
        else:
            k += 1
