"""
Default exclude patterns and traversal limits.

The exclude patterns use the same glob syntax as include patterns and are
matched against directories during traversal, so a match prunes the whole
subtree.
"""

from __future__ import annotations

# Applied only when the caller supplies no exclude list of its own.
DEFAULT_EXCLUDE_GLOBS: list[str] = [
    # Version control
    "**/.git",
    "**/.hg",
    "**/.svn",
    # OS noise
    "**/.DS_Store",
    # Build output and dependency trees
    "**/target",
    "**/node_modules",
    "**/__pycache__",
]

# Depth ceiling for patterns containing `**`.
TOP_MAX_DEPTH: int = 100
