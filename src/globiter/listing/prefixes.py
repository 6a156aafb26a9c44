"""
Literal-prefix analysis for glob patterns.

Splits a pattern into the part that names concrete directories and the part
that needs matching, and derives the literal directory prefixes a match must
pass through so traversal can skip everything else. Brace alternation in a
directory segment (`{src,lib}/**`) is expanded here so that such patterns still
prune.
"""

from __future__ import annotations

from collections.abc import Sequence

from globiter.listing.defaults import TOP_MAX_DEPTH

# Characters that end the literal base of a pattern.
_LITERAL_BREAKERS = frozenset("*?[{")

# Characters that make a single segment a wildcard segment. Braces are handled
# separately by `expand_braces`.
_SEGMENT_WILDCARDS = frozenset("*?[")


def segment_contains_wildcard(segment: str) -> bool:
    """Check if a path segment contains `*`, `?` or `[`."""
    return any(c in _SEGMENT_WILDCARDS for c in segment)


def expand_braces(segment: str) -> list[str] | None:
    """
    Expand every top-level `{a,b,...}` group of a single path segment.

    Returns `None` if the segment has no balanced brace group. Otherwise returns
    the cartesian product of the alternatives, in left-to-right order with
    duplicates removed. Nested groups are not expanded: `a{b,{c,d}}` gives
    `["ab", "a{c,d}"]`. Empty alternatives expand to the empty string.
    """
    groups = _top_level_groups(segment)
    if not groups:
        return None

    expansions = [""]
    cursor = 0
    for start, end in groups:
        literal = segment[cursor:start]
        alternatives = _split_alternatives(segment[start + 1 : end])
        expansions = [prev + literal + alt for prev in expansions for alt in alternatives]
        cursor = end + 1

    tail = segment[cursor:]
    return list(dict.fromkeys(expansion + tail for expansion in expansions))


def _top_level_groups(segment: str) -> list[tuple[int, int]]:
    """Index pairs of each outermost `{...}`, or `[]` if braces are unbalanced."""
    groups: list[tuple[int, int]] = []
    depth = 0
    start = 0
    i = 0
    while i < len(segment):
        c = segment[i]
        if c == "\\":
            i += 2
            continue
        if c == "{":
            if depth == 0:
                start = i
            depth += 1
        elif c == "}":
            if depth == 0:
                return []
            depth -= 1
            if depth == 0:
                groups.append((start, i))
        i += 1
    if depth != 0:
        return []
    return groups


def _split_alternatives(inner: str) -> list[str]:
    """Split brace contents on commas that are not inside a nested group."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    i = 0
    while i < len(inner):
        c = inner[i]
        if c == "\\" and i + 1 < len(inner):
            current.append(inner[i : i + 2])
            i += 2
            continue
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
        elif c == "," and depth == 0:
            parts.append("".join(current))
            current = []
            i += 1
            continue
        current.append(c)
        i += 1
    parts.append("".join(current))
    return parts


def split_literal_base(pattern: str) -> tuple[str, str]:
    """
    Split a pattern into its literal base directory and the remaining pattern.

    The base is the leading run of segments without `*`, `?`, `[` or `{`, and
    never includes the final segment, so a fully literal pattern resolves to its
    parent directory. Absolute patterns keep their leading `/`.

    ```
    "/root/a/**/*.txt" -> ("/root/a", "**/*.txt")
    "src/main.rs"      -> ("src", "main.rs")
    "**"               -> ("", "**")
    ```
    """
    is_absolute = pattern.startswith("/")
    segments = [s for s in pattern.split("/") if s and s != "."]

    literal: list[str] = []
    for segment in segments[:-1]:
        if any(c in _LITERAL_BREAKERS for c in segment):
            break
        literal.append(segment)

    rest = "/".join(segments[len(literal) :]) or "**"
    base = "/".join(literal)
    if is_absolute:
        base = "/" + base
    return base, rest


def glob_literal_prefixes(pattern: str) -> list[str]:
    """
    Literal directory prefixes that any match of `pattern` must pass through.

    ```
    "assets/images/*.png" -> ["assets/images"]
    "{src,lib}/**/*.rs"   -> ["src", "lib"]
    "**/*.rs"             -> []
    ```

    An empty result means no restriction could be derived.
    """
    clean = pattern.removeprefix("./")
    segments = [s for s in clean.split("/") if s and s != "."]
    if len(segments) <= 1:
        return []

    prefixes = [""]
    for segment in segments[:-1]:
        if segment == ".." or segment_contains_wildcard(segment):
            break

        options = expand_braces(segment)
        if options is None:
            if "{" in segment or "}" in segment:
                break
            options = [segment]
        elif any(not _is_literal(option) for option in options):
            break

        prefixes = [_join_prefix(prefix, option) for prefix in prefixes for option in options]

    if prefixes == [""]:
        return []
    return prefixes


def _is_literal(option: str) -> bool:
    return not segment_contains_wildcard(option) and not any(c in option for c in "{}\\")


def _join_prefix(prefix: str, option: str) -> str:
    if not prefix:
        return option
    if not option:
        return prefix
    return f"{prefix}/{option}"


def normalize_prefixes(prefixes: Sequence[str]) -> list[str]:
    """
    Sort and deduplicate prefixes. Any empty prefix means the whole tree can
    match, which clears the list.
    """
    if any(not p for p in prefixes):
        return []
    return sorted(set(prefixes))


def get_depth(patterns: Sequence[str], depth: int | None = None) -> int:
    """
    Maximum walk depth needed for a set of base-relative patterns.

    An explicit `depth` wins. Otherwise any `**` needs `TOP_MAX_DEPTH`, and
    everything else needs one level per path segment. Returns at least 1.
    """
    if depth is not None:
        return depth
    if any("**" in p for p in patterns):
        return TOP_MAX_DEPTH
    max_depth = 0
    for p in patterns:
        max_depth = max(max_depth, p.count("/") + 1)
    return max(max_depth, 1)
