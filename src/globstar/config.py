"""
TOML-based config file loading for globstar.

The nearest `.globstar.toml`, `globstar.toml` or `pyproject.toml` with a
`[tool.globstar]` table, found walking up from the current directory, supplies
defaults for the resolution flags. The config file only sets options: `exclude`
patterns are still evaluated relative to the current directory, not to the
directory holding the config file.

Values are type-checked on load, so `max-depth = "2"` is reported as a
`ConfigError` naming the key rather than failing later during a walk.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


class ConfigError(ValueError):
    """A config file holds a value of the wrong type for its key."""


@dataclass
class GlobstarConfig:
    """
    Resolution settings read from a config file. `None` means the key was absent,
    so the CLI default (or an explicit flag) stays in effect.
    """

    brace: bool | None = None
    tilde: bool | None = None
    include_hidden: bool | None = None
    follow_symlinks: bool | None = None
    max_depth: int | None = None
    exclude: list[str] | None = None
    respect_ignore_file: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".globstar.toml", "globstar.toml", "pyproject.toml"]

_BOOL_FIELDS = {"brace", "tilde", "include_hidden", "follow_symlinks", "respect_ignore_file"}

_VALID_FIELDS = {f.name for f in fields(GlobstarConfig)}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Return the globstar config closest to `start_dir`, or `None`. Within one
    directory `.globstar.toml` beats `globstar.toml`, which beats a
    `pyproject.toml` that has a `[tool.globstar]` table; a `pyproject.toml`
    without one (or one that does not parse) is passed over.
    """
    for directory in (start_dir.resolve(), *start_dir.resolve().parents):
        for filename in _CONFIG_FILENAMES:
            candidate = directory / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml" or _has_tool_table(candidate):
                return candidate
    return None


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text())
    except (tomllib.TOMLDecodeError, OSError):
        return False
    return "globstar" in data.get("tool", {})


def load_config(config_path: Path) -> GlobstarConfig:
    """
    Read a `GlobstarConfig` from `config_path`. For `pyproject.toml` only the
    `[tool.globstar]` table is used. Raises `tomllib.TOMLDecodeError` for
    malformed TOML and `ConfigError` for values of the wrong type.
    """
    data = tomllib.loads(config_path.read_text())

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("globstar", {})

    return _parse_config_data(data, source=config_path)


def _check_value(key: str, value: Any, source: Path | None) -> Any:
    where = f" in {source}" if source is not None else ""
    snake_key = key.replace("-", "_")
    if snake_key in _BOOL_FIELDS:
        if not isinstance(value, bool):
            raise ConfigError(f"{key}{where} must be true or false, got {value!r}")
    elif snake_key == "max_depth":
        # bool is an int subclass, so reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigError(f"{key}{where} must be a non-negative integer, got {value!r}")
    elif snake_key == "exclude":
        if not isinstance(value, list) or not all(
            isinstance(item, str) for item in cast(list[Any], value)
        ):
            raise ConfigError(f"{key}{where} must be a list of strings, got {value!r}")
    return value


def _parse_config_data(data: dict[str, Any], source: Path | None = None) -> GlobstarConfig:
    """
    Build a `GlobstarConfig` from TOML data. Keys may sit at the top level or in
    any table (`[matching]`, `[exclusion]`, ...); kebab-case is accepted and
    unknown keys are ignored.
    """
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            flat.update(cast(dict[str, Any], value))
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key in _VALID_FIELDS:
            mapped[snake_key] = _check_value(key, value, source)

    return GlobstarConfig(**mapped)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: GlobstarConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Copy every config value onto `cli_opts` unless the matching flag is in
    `explicit_flags`, i.e. was typed on the command line.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(GlobstarConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None or cfg_field.name in explicit_flags:
            continue
        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
