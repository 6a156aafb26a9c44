"""Exception types raised by globiter."""

from __future__ import annotations


class GlobIterError(Exception):
    """Base exception for all globiter errors."""


class PatternError(GlobIterError, ValueError):
    """
    A glob pattern could not be compiled. Raised while an iterator is being
    constructed, before any filesystem access.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern: str = pattern
        self.reason: str = reason
        super().__init__(f"Invalid glob pattern {pattern!r}: {reason}")


class TraversalError(GlobIterError):
    """
    A directory could not be read during a walk. The walker recovers from these
    locally, so they never escape a file or directory iterator.
    """

    def __init__(self, path: str, cause: OSError) -> None:
        self.path: str = path
        self.cause: OSError = cause
        super().__init__(f"Cannot read directory '{path}': {cause}")


class ConfigError(GlobIterError, ValueError):
    """A config file could not be parsed or holds a value of the wrong type."""

    def __init__(self, path: str, message: str) -> None:
        self.path: str = path
        super().__init__(f"{path}: {message}")
