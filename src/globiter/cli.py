#!/usr/bin/env python3
"""
globiter: List files matched by glob patterns, with traversal pruning

Common usage:
  globiter -g '**/*.py'
  globiter src -g '**/*.rs' -g '!**/generated/**'
  globiter . -g '*.md' -g '/etc/*.conf'
  globiter --dirs -g '**/tests'

Patterns prefixed with `!` are treated as excludes. Without --exclude, version
control and build output directories are excluded by default.

Settings can also be read from `.globiter.toml`, `globiter.toml`, or the
`[tool.globiter]` table of `pyproject.toml`; explicit flags take precedence.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from globiter.config import find_config_file, load_config, merge_cli_with_config
from globiter.errors import ConfigError, PatternError
from globiter.listing import ListOptions, iter_dirs, iter_files, sort_by_globs
from globiter.logging_setup import configure_logging
from globiter.paths import diff_path, to_absolute


@dataclass
class Options:
    """Command-line options for the globiter tool."""

    root: str
    globs: list[str]
    exclude: list[str] | None
    relative_glob: bool
    depth: int | None
    dirs: bool
    follow_links: bool
    respect_gitignore: bool
    sort_by_globs: bool
    end_weighted: bool
    log_level: str
    version: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    """
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="globiter",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=str,
        default=".",
        help="Directory relative patterns are anchored at (default: %(default)s)",
    )
    parser.add_argument(
        "-g",
        "--glob",
        action="append",
        dest="globs",
        default=[],
        metavar="PATTERN",
        help="Include pattern; prefix with '!' to exclude. Can be repeated (default: '**')",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Replace all default exclusion patterns. Can be repeated",
    )
    parser.add_argument(
        "--relative-glob",
        action="store_true",
        dest="relative_glob",
        help="Match exclude patterns against root-relative paths instead of absolute paths",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=None,
        metavar="N",
        help="Maximum number of directory levels to descend (default: derived from patterns)",
    )
    parser.add_argument(
        "--dirs",
        action="store_true",
        help="List matching directories instead of files",
    )
    parser.add_argument(
        "--follow-links",
        action="store_true",
        dest="follow_links",
        help="Follow symbolic links to directories and files",
    )
    parser.add_argument(
        "--respect-gitignore",
        action="store_true",
        dest="respect_gitignore",
        help="Also skip paths ignored by .gitignore files",
    )
    parser.add_argument(
        "--sort-by-globs",
        action="store_true",
        dest="sort_by_globs",
        help="Order results by the first include pattern that matches each one",
    )
    parser.add_argument(
        "--end-weighted",
        action="store_true",
        dest="end_weighted",
        help="With --sort-by-globs, rank by the last matching pattern instead",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default="warning",
        dest="log_level",
        help="Logging level for diagnostics on stderr (default: %(default)s)",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Track which flags the user explicitly set (for config merge precedence).
    # Sentinel defaults detect actual CLI presence even when the default value is passed.
    _SENTINEL = object()
    _tracked_flags = ["relative_glob", "depth", "follow_links", "respect_gitignore"]
    _tracked_flags += ["sort_by_globs", "end_weighted"]
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("-g", "--glob", dest="globs", action="append", default=None)
    sentinel_parser.add_argument("--exclude", action="append", default=None)
    sentinel_parser.add_argument(
        "--relative-glob", dest="relative_glob", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument("--depth", type=int, default=_SENTINEL)
    sentinel_parser.add_argument(
        "--follow-links", dest="follow_links", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument(
        "--respect-gitignore", dest="respect_gitignore", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument(
        "--sort-by-globs", dest="sort_by_globs", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument(
        "--end-weighted", dest="end_weighted", action="store_true", default=_SENTINEL
    )
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    # For append actions, None means not supplied; a list means supplied
    for dest_name in ("globs", "exclude"):
        if getattr(sentinel_opts, dest_name) is not None:
            explicit_flags.add(dest_name)
    for dest_name in _tracked_flags:
        if getattr(sentinel_opts, dest_name, _SENTINEL) is not _SENTINEL:
            explicit_flags.add(dest_name)

    return (
        Options(
            root=opts.root,
            globs=opts.globs,
            exclude=opts.exclude,
            relative_glob=opts.relative_glob,
            depth=opts.depth,
            dirs=opts.dirs,
            follow_links=opts.follow_links,
            respect_gitignore=opts.respect_gitignore,
            sort_by_globs=opts.sort_by_globs,
            end_weighted=opts.end_weighted,
            log_level=opts.log_level,
            version=opts.version,
        ),
        explicit_flags,
    )


def _list_paths(options: Options) -> Iterable[Path]:
    list_options = ListOptions(
        exclude_globs=options.exclude,
        relative_glob=options.relative_glob,
        depth=options.depth,
        follow_links=options.follow_links,
        respect_gitignore=options.respect_gitignore,
    )
    iterate = iter_dirs if options.dirs else iter_files
    paths = iterate(options.root, options.globs, list_options)
    if options.sort_by_globs and options.globs:
        includes = [g for g in options.globs if not g.startswith("!")]
        abs_root = to_absolute(options.root)
        return sort_by_globs(
            list(paths),
            includes,
            end_weighted=options.end_weighted,
            key=lambda p: diff_path(to_absolute(p), abs_root),
        )
    return paths


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the globiter CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    options, explicit_flags = _parse_args(args)

    # Display version information if requested
    if options.version:
        try:
            version = importlib.metadata.version("globiter")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    configure_logging(options.log_level)

    config_path = find_config_file(Path.cwd())
    if config_path:
        try:
            merge_cli_with_config(options, load_config(config_path), explicit_flags)
        except (ConfigError, OSError) as e:
            print(f"Error: Cannot load config {e}", file=sys.stderr)
            return 1

    if not Path(options.root).is_dir():
        print(f"Error: Root directory not found: {options.root}", file=sys.stderr)
        return 1

    try:
        for path in _list_paths(options):
            print(path)
    except PatternError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Invalid option values, like a non-positive depth from a config file.
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
