"""
Glob-driven file and directory listing with traversal pruning.

Usage::

    from globiter.listing import ListOptions, list_files

    files = list_files("project", ["src/**/*.rs", "*.md", "!**/generated/**"])
    files = list_files(".", ["**/*.py"], ListOptions(depth=3).with_relative_glob())
"""

from globiter.listing.defaults import DEFAULT_EXCLUDE_GLOBS, TOP_MAX_DEPTH
from globiter.listing.dir_iter import GlobsDirIter, iter_dirs, list_dirs
from globiter.listing.file_iter import GlobsFileIter, iter_files, list_files
from globiter.listing.sort import sort_by_globs
from globiter.listing.types import GlobGroup, ListOptions

__all__ = [
    "DEFAULT_EXCLUDE_GLOBS",
    "TOP_MAX_DEPTH",
    "GlobGroup",
    "GlobsDirIter",
    "GlobsFileIter",
    "ListOptions",
    "iter_dirs",
    "iter_files",
    "list_dirs",
    "list_files",
    "sort_by_globs",
]
