from globiter.errors import GlobIterError, PatternError, TraversalError
from globiter.listing import (
    DEFAULT_EXCLUDE_GLOBS,
    GlobsDirIter,
    GlobsFileIter,
    ListOptions,
    iter_dirs,
    iter_files,
    list_dirs,
    list_files,
    sort_by_globs,
)

__all__ = [
    "DEFAULT_EXCLUDE_GLOBS",
    "GlobIterError",
    "GlobsDirIter",
    "GlobsFileIter",
    "ListOptions",
    "PatternError",
    "TraversalError",
    "iter_dirs",
    "iter_files",
    "list_dirs",
    "list_files",
    "sort_by_globs",
]
