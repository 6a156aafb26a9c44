"""Tests for the directory walker, path helpers and gitignore chain."""

from __future__ import annotations

import os
from contextlib import contextmanager
from pathlib import Path

import pytest

from globiter.errors import TraversalError
from globiter.listing.gitignore import GitignoreChain, load_gitignore
from globiter.listing.walker import scan_dir, walk
from globiter.paths import diff_path, is_within, join_path, normalize_path


def _tree(base: Path) -> str:
    (base / "a" / "b" / "c").mkdir(parents=True)
    (base / "a" / "one.txt").write_text("")
    (base / "a" / "b" / "two.txt").write_text("")
    (base / "z.txt").write_text("")
    return str(base)


def test_scan_dir_sorted(tmp_path: Path):
    base = _tree(tmp_path)
    entries = scan_dir(base)
    assert [(e.name, e.is_dir, e.is_file) for e in entries] == [("a", True, False), ("z.txt", False, True)]
    assert entries[0].path == f"{base}/a"


def test_scan_dir_missing_raises(tmp_path: Path):
    with pytest.raises(TraversalError) as exc:
        scan_dir(str(tmp_path / "missing"))
    assert exc.value.path == str(tmp_path / "missing")
    assert isinstance(exc.value.cause, FileNotFoundError)


class _UnstatableEntry:
    """A directory entry whose type lookup fails, like a file removed mid-scan."""

    def __init__(self, name: str) -> None:
        self.name = name

    def is_dir(self, follow_symlinks: bool = True) -> bool:
        raise PermissionError(13, "Permission denied", self.name)

    def is_file(self, follow_symlinks: bool = True) -> bool:
        raise PermissionError(13, "Permission denied", self.name)


def test_unstatable_entry_skipped_siblings_kept(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    base = _tree(tmp_path)
    real_scandir = os.scandir

    @contextmanager
    def scandir_with_broken_entry(directory):
        with real_scandir(directory) as it:
            yield [_UnstatableEntry("broken"), *it]

    monkeypatch.setattr(os, "scandir", scandir_with_broken_entry)

    assert [e.name for e in scan_dir(base)] == ["a", "z.txt"]
    assert [e.rel_path for e in walk(base, 10)] == [
        "a",
        "a/b",
        "a/b/c",
        "a/b/two.txt",
        "a/one.txt",
        "z.txt",
    ]


def test_walk_preorder_with_depths(tmp_path: Path):
    base = _tree(tmp_path)
    entries = [(e.rel_path, e.depth) for e in walk(base, 10)]
    assert entries == [
        ("a", 1),
        ("a/b", 2),
        ("a/b/c", 3),
        ("a/b/two.txt", 3),
        ("a/one.txt", 2),
        ("z.txt", 1),
    ]


def test_walk_max_depth(tmp_path: Path):
    base = _tree(tmp_path)
    assert [e.rel_path for e in walk(base, 1)] == ["a", "z.txt"]
    assert [e.rel_path for e in walk(base, 2)] == ["a", "a/b", "a/one.txt", "z.txt"]


def test_walk_skip_dir_prunes(tmp_path: Path):
    base = _tree(tmp_path)
    entries = [e.rel_path for e in walk(base, 10, skip_dir=lambda e: e.rel_path == "a/b")]
    assert entries == ["a", "a/one.txt", "z.txt"]


def test_walk_missing_base(tmp_path: Path):
    assert list(walk(str(tmp_path / "missing"), 5)) == []


def test_normalize_path():
    assert normalize_path("a//b/./c/../d/") == "a/b/d"
    assert normalize_path("") == "."
    assert normalize_path(Path("/x/y")) == "/x/y"


def test_is_within():
    assert is_within("/a/b", "/a")
    assert is_within("/a", "/a")
    assert not is_within("/ab", "/a")
    assert is_within("/a", "/")
    assert is_within("src", ".")
    assert not is_within("../x", ".")


def test_diff_and_join():
    assert diff_path("/a/b/c", "/a") == "b/c"
    assert diff_path("/a", "/a") == ""
    assert diff_path("/x/y", "/a/b") == "../../x/y"
    assert join_path(".", "src") == "src"
    assert join_path("/", "etc") == "/etc"
    assert join_path("/a", "") == "/a"


def test_load_gitignore(tmp_path: Path):
    assert load_gitignore(str(tmp_path)) is None
    (tmp_path / ".gitignore").write_text("# only comments\n\n")
    assert load_gitignore(str(tmp_path)) is None
    (tmp_path / ".gitignore").write_text("*.log\n")
    spec = load_gitignore(str(tmp_path))
    assert spec is not None
    assert spec.match_file("x.log")


def test_load_gitignore_non_utf8(tmp_path: Path):
    (tmp_path / ".gitignore").write_bytes(b"\xff\xfe*.log\n")
    assert load_gitignore(str(tmp_path)) is None


def test_gitignore_chain(tmp_path: Path):
    top = str(tmp_path)
    (tmp_path / ".gitignore").write_text("build/\n")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / ".gitignore").write_text("*.tmp\n!keep.tmp\n")
    chain = GitignoreChain(top)
    assert chain.is_ignored(f"{top}/build", is_dir=True)
    assert not chain.is_ignored(f"{top}/build", is_dir=False)
    assert chain.is_ignored(f"{top}/sub/x.tmp", is_dir=False)
    assert not chain.is_ignored(f"{top}/sub/keep.tmp", is_dir=False)
    assert not chain.is_ignored(f"{top}/x.tmp", is_dir=False)
    assert not chain.is_ignored(top, is_dir=True)
    assert not chain.is_ignored("/elsewhere/build", is_dir=True)
