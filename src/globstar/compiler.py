"""
Glob to regular expression translation, for matching strings against a glob
without touching the filesystem.

Supports `?`, `[...]` classes, `{a,b}` brace groups, single-segment `*` and
segment-spanning `**` globstars. The resulting regex is anchored at the start
only, so a match may be followed by more text.
"""

from __future__ import annotations

import re
from enum import Enum

# Characters that are regex metacharacters but plain literals in a glob.
_ESCAPED_CHARS = frozenset("/$^+.()=!|")

_GLOBSTAR_REGEX = "((?:[^/]*(?:/|$))*)"
_STAR_REGEX = "([^/]*)"


class GroupState(Enum):
    """Parser state while scanning a glob. Nested groups are not tracked."""

    NORMAL = "normal"
    IN_GROUP = "in_group"


class InvalidRegexError(ValueError):
    """The regex built from a glob was rejected by `re`, usually from unbalanced braces."""

    def __init__(self, pattern: str, regex: str, error: re.error) -> None:
        super().__init__(f"Invalid glob pattern {pattern!r} (regex {regex!r}): {error}")
        self.pattern: str = pattern
        self.regex: str = regex


def _is_globstar(pattern: str, start: int, end: int) -> bool:
    """Check whether the `*` run at `pattern[start:end]` spans whole segments."""
    prev_char = pattern[start - 1] if start > 0 else None
    next_char = pattern[end] if end < len(pattern) else None
    return (
        end - start > 1
        and (prev_char is None or prev_char == "/")
        and (next_char is None or next_char == "/")
    )


def glob_to_regex(pattern: str) -> str:
    """
    Translate a glob pattern into a regex string.

    Braces are not validated: `{a` or `a}` yield a regex that `re` will reject,
    which `compile_glob()` reports as `InvalidRegexError`.
    """
    parts: list[str] = []
    state = GroupState.NORMAL
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c in _ESCAPED_CHARS:
            parts.append("\\" + c)
        elif c == "?":
            parts.append(".")
        elif c in "[]":
            parts.append(c)
        elif c == "{":
            state = GroupState.IN_GROUP
            parts.append("(")
        elif c == "}":
            state = GroupState.NORMAL
            parts.append(")")
        elif c == ",":
            parts.append("|" if state is GroupState.IN_GROUP else "\\,")
        elif c == "*":
            end = i
            while end < n and pattern[end] == "*":
                end += 1
            if _is_globstar(pattern, i, end):
                parts.append(_GLOBSTAR_REGEX)
                # The separator after a globstar is part of the token.
                if end < n:
                    end += 1
            else:
                parts.append(_STAR_REGEX)
            i = end
            continue
        else:
            parts.append(c)
        i += 1

    return "^" + "".join(parts)


def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a glob pattern into a regex, raising `InvalidRegexError` on failure."""
    regex = glob_to_regex(pattern)
    try:
        return re.compile(regex)
    except re.error as e:
        raise InvalidRegexError(pattern, regex, e) from e


def matches_glob(pattern: str, string: str) -> bool:
    """Check `string` against `pattern`, anchored at the start only, so trailing text is allowed."""
    return compile_glob(pattern).search(string) is not None
