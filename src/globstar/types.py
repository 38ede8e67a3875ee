"""Configuration types for glob resolution."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ResolverConfig:
    """
    Configuration for glob resolution.

    `brace` and `tilde` enable `{a,b}` and `~` expansion in the native glob.
    `include_hidden` lets wildcards match names starting with `.` and lets `**`
    descend into hidden directories.
    `max_depth=0` puts no limit on how many segments a `**` can span.
    `exclude` holds gitignore-style patterns removed from the results, and
    `tool_name` determines the ignore file name (e.g., `.globstarignore`).
    """

    brace: bool = True
    tilde: bool = True
    include_hidden: bool = False
    follow_symlinks: bool = False
    max_depth: int = 0
    exclude: list[str] = field(default_factory=list)
    respect_ignore_file: bool = True
    tool_name: str = "globstar"
