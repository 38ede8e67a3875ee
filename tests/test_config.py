"""Tests for config file loading and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from globstar.cli import Options
from globstar.config import (
    ConfigError,
    GlobstarConfig,
    find_config_file,
    load_config,
    merge_cli_with_config,
)


def _default_options(**overrides: object) -> Options:
    values: dict[str, object] = dict(
        patterns=["**/*.txt"],
        regex=False,
        match=None,
        verbose=False,
        version=False,
        brace=True,
        tilde=True,
        include_hidden=False,
        follow_symlinks=False,
        max_depth=0,
        exclude=[],
        respect_ignore_file=True,
    )
    values.update(overrides)
    return Options(**values)  # pyright: ignore[reportArgumentType]


def test_find_config_globstar_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "globstar.toml"
    config_file.write_text("max-depth = 3\n")
    assert find_config_file(tmp_path) == config_file.resolve()


def test_find_config_dot_globstar_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "globstar.toml").write_text("max-depth = 3\n")
    dot_config = tmp_path / ".globstar.toml"
    dot_config.write_text("max-depth = 5\n")
    assert find_config_file(tmp_path) == dot_config.resolve()


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("[tool.globstar]\ninclude-hidden = true\n")
    assert find_config_file(tmp_path) == config_file.resolve()


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    assert find_config_file(tmp_path) is None


def test_find_config_invalid_pyproject_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.globstar\n")
    assert find_config_file(tmp_path) is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "globstar.toml"
    config_file.write_text("brace = false\n")
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    assert find_config_file(subdir) == config_file.resolve()


def test_find_config_none_when_missing(tmp_path: Path) -> None:
    assert find_config_file(tmp_path) is None


def test_load_config_flat_keys(tmp_path: Path) -> None:
    config_file = tmp_path / "globstar.toml"
    config_file.write_text(
        "brace = false\n"
        "include-hidden = true\n"
        "max-depth = 4\n"
        'exclude = ["build/", "*.log"]\n'
    )
    config = load_config(config_file)
    assert config.brace is False
    assert config.include_hidden is True
    assert config.max_depth == 4
    assert config.exclude == ["build/", "*.log"]
    # Unset fields should be None (not set)
    assert config.tilde is None
    assert config.follow_symlinks is None


def test_load_config_sections_flattened(tmp_path: Path) -> None:
    config_file = tmp_path / ".globstar.toml"
    config_file.write_text(
        "[matching]\nfollow-symlinks = true\n\n[exclusion]\nrespect-ignore-file = false\n"
    )
    config = load_config(config_file)
    assert config.follow_symlinks is True
    assert config.respect_ignore_file is False


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("[tool.globstar]\ntilde = false\n")
    config = load_config(config_file)
    assert config.tilde is False


def test_load_config_ignores_unknown_keys(tmp_path: Path) -> None:
    config_file = tmp_path / "globstar.toml"
    config_file.write_text("colour = 'blue'\nmax-depth = 2\n")
    assert load_config(config_file) == GlobstarConfig(max_depth=2)


def test_merge_none_config_is_noop() -> None:
    opts = _default_options()
    assert merge_cli_with_config(opts, None, set()) == _default_options()


def test_merge_config_overrides_defaults() -> None:
    opts = merge_cli_with_config(
        _default_options(),
        GlobstarConfig(max_depth=3, exclude=["build/"], brace=False),
        set(),
    )
    assert opts.max_depth == 3
    assert opts.exclude == ["build/"]
    assert opts.brace is False
    assert opts.tilde is True


def test_merge_explicit_flags_win() -> None:
    opts = merge_cli_with_config(
        _default_options(max_depth=7),
        GlobstarConfig(max_depth=3, include_hidden=True),
        {"max_depth"},
    )
    assert opts.max_depth == 7
    assert opts.include_hidden is True


@pytest.mark.parametrize(
    ("toml", "key"),
    [
        ('max-depth = "2"\n', "max-depth"),
        ("max-depth = -1\n", "max-depth"),
        ("max-depth = true\n", "max-depth"),
        ('include-hidden = "yes"\n', "include-hidden"),
        ('exclude = "build/"\n', "exclude"),
        ("exclude = [1, 2]\n", "exclude"),
    ],
)
def test_load_config_rejects_wrong_types(tmp_path: Path, toml: str, key: str) -> None:
    config_file = tmp_path / "globstar.toml"
    config_file.write_text(toml)
    with pytest.raises(ConfigError, match=key):
        load_config(config_file)


def test_load_config_checks_values_in_sections(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.globstar.matching]\nfollow-symlinks = "on"\n')
    with pytest.raises(ConfigError, match="follow-symlinks"):
        load_config(config_file)
