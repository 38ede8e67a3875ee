"""
GlobResolver: main entry point for resolving glob patterns against the filesystem.

Expands `**` globstars into plain sub-patterns, matches each with the native glob,
and returns a deduplicated, sorted list of absolute paths with exclusions applied.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from wcmatch import glob as wcglob

from globstar.expander import GlobstarExpander
from globstar.ignore import ExcludeRule, build_exclude_spec, load_tool_ignore
from globstar.types import ResolverConfig

logger = logging.getLogger(__name__)

# Characters that indicate a pattern needs resolution rather than being a literal path.
_GLOB_CHARS = frozenset("*?[]")


def has_glob_chars(pattern: str) -> bool:
    return any(c in _GLOB_CHARS for c in pattern)


class GlobResolver:
    """
    Resolves glob patterns, including `{a,b}` braces and `**` globstars, into
    concrete paths.

    Exclusions come from `config.exclude` (relative to the current directory) and,
    unless disabled, the nearest `.{tool_name}ignore` file above the current
    directory. Both are read once, when the resolver is created.
    """

    def __init__(self, config: ResolverConfig | None = None) -> None:
        self._config: ResolverConfig = config if config is not None else ResolverConfig()
        self._expander: GlobstarExpander = GlobstarExpander(
            follow_symlinks=self._config.follow_symlinks,
            max_depth=self._config.max_depth,
            expand_tilde=self._config.tilde,
            include_hidden=self._config.include_hidden,
        )
        self._glob_flags: int = self._make_glob_flags()
        self._exclude_rules: list[ExcludeRule] = self._load_exclude_rules()

    def _make_glob_flags(self) -> int:
        flags = wcglob.MARK
        if self._config.brace:
            flags |= wcglob.BRACE
        if self._config.tilde:
            flags |= wcglob.GLOBTILDE
        if self._config.include_hidden:
            flags |= wcglob.DOTGLOB
        return flags

    def _load_exclude_rules(self) -> list[ExcludeRule]:
        rules: list[ExcludeRule] = []
        cwd = Path.cwd()
        spec = build_exclude_spec(self._config.exclude)
        if spec is not None:
            rules.append(ExcludeRule(cwd, spec))
        if self._config.respect_ignore_file:
            tool_ignore = load_tool_ignore(self._config.tool_name, cwd)
            if tool_ignore is not None:
                rules.append(tool_ignore)
        return rules

    def resolve(self, pattern: str) -> list[str]:
        """
        Resolve one pattern into a sorted list of absolute paths.

        A pattern without `*`, `?`, `[` or `]` is returned unchanged, without
        checking that it exists. No matches gives an empty list.
        """
        if not has_glob_chars(pattern):
            return [pattern]
        return sorted(self._match(pattern))

    def resolve_all(self, patterns: Iterable[str]) -> list[str]:
        """Resolve several patterns into one sorted, deduplicated list."""
        result: set[str] = set()
        for pattern in patterns:
            if has_glob_chars(pattern):
                result.update(self._match(pattern))
            else:
                result.add(pattern)
        return sorted(result)

    def _match(self, pattern: str) -> set[str]:
        sub_patterns = self._expander.expand(pattern)
        logger.debug("Matching %d sub-patterns for %r", len(sub_patterns), pattern)

        matches: set[str] = set()
        for sub_pattern in sub_patterns:
            for raw_path in wcglob.glob(sub_pattern, flags=self._glob_flags):
                is_dir = raw_path.endswith(("/", os.sep))
                path = os.path.abspath(raw_path)
                if self._is_excluded(path + os.sep if is_dir else path):
                    continue
                matches.add(path)
        return matches

    def _is_excluded(self, path: str) -> bool:
        return any(rule.matches(path) for rule in self._exclude_rules)


def resolve_glob(pattern: str, config: ResolverConfig | None = None) -> list[str]:
    """Resolve `pattern` with a one-off `GlobResolver`."""
    return GlobResolver(config).resolve(pattern)
