"""
Config file support for the globiter CLI.

Settings come from the nearest `.globiter.toml`, `globiter.toml`, or
`pyproject.toml` with a `[tool.globiter]` table, searching upward from the
current directory. Keys may be kebab-case and may be grouped under any table
(`[patterns]`, `[traversal]`, `[output]`); unknown keys are ignored.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

from globiter.errors import ConfigError

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class GlobiterConfig:
    """
    Settings read from a config file. `None` means the file didn't set it, so
    the CLI default (or an explicit flag) stays in effect.
    """

    globs: list[str] | None = None
    exclude: list[str] | None = None
    relative_glob: bool | None = None
    depth: int | None = None
    follow_links: bool | None = None
    respect_gitignore: bool | None = None
    sort_by_globs: bool | None = None
    end_weighted: bool | None = None


_STANDALONE_NAMES = (".globiter.toml", "globiter.toml")

_LIST_FIELDS = {"globs", "exclude"}
_INT_FIELDS = {"depth"}


def _read_table(path: Path) -> dict[str, Any] | None:
    """
    The globiter settings table of a config file, or `None` for a pyproject.toml
    without one.
    """
    try:
        data = tomllib.loads(path.read_text())
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(str(path), f"invalid TOML: {e}") from e
    if path.name != "pyproject.toml":
        return data
    table = data.get("tool", {}).get("globiter")
    return cast(dict[str, Any], table) if isinstance(table, dict) else None


def find_config_file(start_dir: Path) -> Path | None:
    """
    Nearest config file at or above `start_dir`. Within one directory a
    standalone file wins over pyproject.toml; a pyproject.toml counts only if it
    parses and has a `[tool.globiter]` table.
    """
    for directory in (start_dir.resolve(), *start_dir.resolve().parents):
        for name in _STANDALONE_NAMES:
            if (directory / name).is_file():
                return directory / name
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file():
            try:
                if _read_table(pyproject) is not None:
                    return pyproject
            except (ConfigError, OSError):
                pass
    return None


def _check_value(path: Path, key: str, value: Any) -> Any:
    if key in _LIST_FIELDS:
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(str(path), f"'{key}' must be a list of glob strings")
    elif key in _INT_FIELDS:
        # bool is an int subclass; `depth = true` is still a mistake.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(str(path), f"'{key}' must be an integer")
    elif not isinstance(value, bool):
        raise ConfigError(str(path), f"'{key}' must be true or false")
    return value


def load_config(config_path: Path) -> GlobiterConfig:
    table = _read_table(config_path) or {}

    flat: dict[str, Any] = {}
    for key, value in table.items():
        if isinstance(value, dict):
            flat.update(cast(dict[str, Any], value))
        else:
            flat[key] = value

    known = {f.name for f in fields(GlobiterConfig)}
    values: dict[str, Any] = {}
    for key, value in flat.items():
        name = key.replace("-", "_")
        if name in known:
            values[name] = _check_value(config_path, key, value)
    return GlobiterConfig(**values)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: GlobiterConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Copy config values onto `cli_opts` for every setting the user didn't pass
    on the command line.
    """
    if config is None:
        return cli_opts
    for cfg_field in fields(GlobiterConfig):
        value = getattr(config, cfg_field.name)
        if value is not None and cfg_field.name not in explicit_flags:
            setattr(cli_opts, cfg_field.name, value)
    return cli_opts
