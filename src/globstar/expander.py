"""
Globstar expansion: rewrites a pattern containing `**` into plain glob patterns,
one per directory that the `**` can stand for.

The native glob matcher only handles single segments, so `src/**/*.py` becomes
`src/*.py`, `src/a/*.py`, `src/a/b/*.py` and so on for every directory under `src/`.
"""

from __future__ import annotations

import logging
import os
import posixpath
from collections.abc import Iterator

logger = logging.getLogger(__name__)

GLOBSTAR = "**"


def _join_remainder(directory: str, remainder: str) -> str:
    """Join a candidate directory with the rest of the pattern."""
    if not directory:
        return remainder[1:] if remainder.startswith("/") else remainder
    return posixpath.join(directory, remainder.lstrip("/"))


class GlobstarExpander:
    """
    Expands every `**` in a pattern into the concrete directories below the
    literal prefix preceding it.

    `max_depth=0` means no limit on how many segments a `**` may expand to.
    Directories whose names start with `.` are skipped unless `include_hidden`.
    """

    def __init__(
        self,
        follow_symlinks: bool = False,
        max_depth: int = 0,
        expand_tilde: bool = True,
        include_hidden: bool = False,
    ) -> None:
        self._follow_symlinks: bool = follow_symlinks
        self._max_depth: int = max_depth
        self._expand_tilde: bool = expand_tilde
        self._include_hidden: bool = include_hidden

    def expand(self, pattern: str) -> list[str]:
        """
        Return sub-patterns with no `**` whose glob matches, taken together, equal
        the matches of `pattern`. Order is unspecified and duplicates are possible.
        A prefix that does not exist yields no sub-patterns rather than an error.
        """
        if self._expand_tilde and pattern.startswith("~"):
            pattern = os.path.expanduser(pattern)

        results: list[str] = []
        pending = [pattern]
        while pending:
            current = pending.pop()
            if GLOBSTAR not in current:
                results.append(current)
                continue

            prefix, _, remainder = current.partition(GLOBSTAR)
            if prefix and not os.path.exists(prefix):
                logger.debug("Globstar prefix %r does not exist", prefix)
                continue

            directories = [prefix, *self._subdirectories(prefix)]

            # `dir/**` and `dir/**/` also match `dir` itself and the files directly in it.
            if not remainder.strip("/"):
                if prefix:
                    results.append(prefix)
                remainder = "*"

            # Reversed so the stack yields candidates in walk order.
            pending.extend(_join_remainder(d, remainder) for d in reversed(directories))

        logger.debug("Expanded %r into %d sub-patterns", pattern, len(results))
        return results

    def _subdirectories(self, prefix: str) -> Iterator[str]:
        """Yield every directory below `prefix`, as `prefix` joined with its subpath."""
        root = prefix or os.curdir
        seen: set[str] = {os.path.realpath(root)} if self._follow_symlinks else set()

        for dirpath, dirnames, _ in os.walk(
            root, onerror=self._report_error, followlinks=self._follow_symlinks
        ):
            relative = os.path.relpath(dirpath, root)
            depth = 0 if relative == os.curdir else relative.count(os.sep) + 1
            if self._max_depth and depth >= self._max_depth:
                dirnames[:] = []
                continue

            if not self._include_hidden:
                dirnames[:] = [name for name in dirnames if not name.startswith(".")]
            dirnames.sort()
            if self._follow_symlinks:
                # Prune symlink cycles.
                unique: list[str] = []
                for name in dirnames:
                    real = os.path.realpath(os.path.join(dirpath, name))
                    if real not in seen:
                        seen.add(real)
                        unique.append(name)
                dirnames[:] = unique

            for name in dirnames:
                subpath = name if depth == 0 else posixpath.join(*relative.split(os.sep), name)
                yield posixpath.join(prefix, subpath) if prefix else subpath

    @staticmethod
    def _report_error(error: OSError) -> None:
        logger.warning("Error reading directory %s: %s", error.filename, error)


def expand_globstar(pattern: str) -> list[str]:
    """Expand `**` in `pattern` with default settings. See `GlobstarExpander.expand()`."""
    return GlobstarExpander().expand(pattern)
