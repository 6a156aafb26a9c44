"""
Normalized posix path helpers.

All pattern and traversal code compares paths as plain strings in the form
produced by `normalize_path`: forward slashes, no `.` segments, `..` collapsed
where possible, and no trailing slash.
"""

from __future__ import annotations

import os
import posixpath
from pathlib import PurePath


def normalize_path(path: str | os.PathLike[str]) -> str:
    """
    Collapse separators and `.`/`..` segments. An empty path becomes `"."`.
    """
    text = PurePath(path).as_posix() if not isinstance(path, str) else path.replace(os.sep, "/")
    if not text:
        return "."
    return posixpath.normpath(text)


def to_absolute(path: str | os.PathLike[str]) -> str:
    """Absolute normalized form of `path`, resolved against the current directory."""
    return normalize_path(os.path.abspath(path))


def is_within(path: str, base: str) -> bool:
    """
    True if `path` equals `base` or lies below it, comparing whole segments.
    Both arguments must already be normalized and of the same kind (both
    absolute or both relative).
    """
    if path == base:
        return True
    if base == "/":
        return path.startswith("/")
    if base == ".":
        return not path.startswith("/") and path != ".." and not path.startswith("../")
    return path.startswith(base + "/")


def diff_path(path: str, base: str) -> str:
    """
    Posix path of `path` relative to `base`, or `""` when they are equal.
    The result starts with `..` when `path` is outside `base`.
    """
    if path == base:
        return ""
    if is_within(path, base):
        if base == ".":
            return path
        return path[len(base) :].lstrip("/")
    return posixpath.relpath(path, base)


def join_path(base: str, rel: str) -> str:
    """Join a normalized base and a relative posix path without re-normalizing."""
    if not rel:
        return base
    if base == ".":
        return rel
    if base.endswith("/"):
        return base + rel
    return f"{base}/{rel}"
