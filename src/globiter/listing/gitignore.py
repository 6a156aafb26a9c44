"""Optional `.gitignore` filtering using pathspec."""

from __future__ import annotations

import posixpath

import pathspec
import structlog

from globiter.paths import diff_path, is_within

log = structlog.get_logger(__name__)


def load_gitignore(directory: str) -> pathspec.GitIgnoreSpec | None:
    """
    Read `.gitignore` in the given directory and return a compiled spec,
    or `None` if the file doesn't exist, is empty, or can't be read.
    """
    gitignore = posixpath.join(directory, ".gitignore")
    try:
        with open(gitignore, encoding="utf-8") as f:
            text = f.read()
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        log.warning("failed_to_read_gitignore", path=gitignore, error=str(e))
        return None
    lines = [line for line in text.splitlines() if line.strip() and not line.strip().startswith("#")]
    if not lines:
        return None
    return pathspec.GitIgnoreSpec.from_lines(lines)


class GitignoreChain:
    """
    Applies every `.gitignore` from `top` down to an entry's parent directory,
    each matched against the entry's path relative to the directory holding it.

    Paths passed in must be absolute and normalized. Specs are cached per
    directory for the lifetime of the chain.
    """

    def __init__(self, top: str) -> None:
        self._top: str = top
        self._cache: dict[str, pathspec.GitIgnoreSpec | None] = {}

    def is_ignored(self, path: str, is_dir: bool) -> bool:
        if not is_within(path, self._top) or path == self._top:
            return False
        suffix = "/" if is_dir else ""
        for directory in self._directories_above(path):
            spec = self._get(directory)
            if spec is not None and spec.match_file(diff_path(path, directory) + suffix):
                return True
        return False

    def _directories_above(self, path: str) -> list[str]:
        """`top` and each directory below it down to the parent of `path`."""
        parts = diff_path(posixpath.dirname(path), self._top).split("/")
        directories = [self._top]
        current = self._top
        for part in parts:
            if not part:
                continue
            current = posixpath.join(current, part)
            directories.append(current)
        return directories

    def _get(self, directory: str) -> pathspec.GitIgnoreSpec | None:
        if directory not in self._cache:
            self._cache[directory] = load_gitignore(directory)
        return self._cache[directory]
