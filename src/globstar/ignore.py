"""Exclusion patterns and tool-specific ignore files, using pathspec."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import pathspec


@dataclass(frozen=True)
class ExcludeRule:
    """A compiled `PathSpec` whose patterns are relative to `base`."""

    base: Path
    spec: pathspec.PathSpec

    def matches(self, path: str) -> bool:
        """
        Check an absolute path against the rule. Paths outside `base` are matched
        on their full path without the leading separator. A trailing separator marks
        a directory, so patterns like `build/` match it.
        """
        is_dir = path.endswith(os.sep)
        relative = os.path.relpath(path, self.base)
        if relative == os.pardir or relative.startswith(os.pardir + os.sep):
            relative = path.lstrip(os.sep)
        relative = relative.replace(os.sep, "/")
        if is_dir and not relative.endswith("/"):
            relative += "/"
        return self.spec.match_file(relative)


def _read_ignore_file(path: Path) -> list[str] | None:
    """
    Read an ignore file and return its non-blank, non-comment lines, or `None` if
    the file is missing, unreadable or not valid UTF-8.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    return [line for line in text.splitlines() if line.strip() and not line.strip().startswith("#")]


def build_exclude_spec(patterns: list[str]) -> pathspec.PathSpec | None:
    """Compile gitignore-style patterns, or `None` if there are none."""
    if not patterns:
        return None
    return pathspec.PathSpec.from_lines("gitignore", patterns)


def load_tool_ignore(tool_name: str, start_dir: Path) -> ExcludeRule | None:
    """
    Walk up from `start_dir` looking for `.{tool_name}ignore` (e.g., `.globstarignore`).
    Returns a rule relative to the directory of the first file found, or `None`.
    """
    ignore_name = f".{tool_name}ignore"
    current = start_dir.resolve()
    while True:
        candidate = current / ignore_name
        if candidate.is_file():
            lines = _read_ignore_file(candidate)
            if lines:
                return ExcludeRule(current, pathspec.PathSpec.from_lines("gitignore", lines))
            return None
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None
