"""
Glob resolution with `{a,b}` brace groups and recursive `**` globstars, plus
glob-to-regex translation for matching strings without touching the filesystem.

Usage::

    from globstar import GlobResolver, ResolverConfig, matches_glob

    resolver = GlobResolver(ResolverConfig(exclude=["build/"]))
    paths = resolver.resolve("src/**/*.{py,pyi}")

    matches_glob("**/*.txt", "dir/sub/file.txt")  # True
"""

from globstar.compiler import (
    GroupState,
    InvalidRegexError,
    compile_glob,
    glob_to_regex,
    matches_glob,
)
from globstar.expander import GlobstarExpander, expand_globstar
from globstar.resolver import GlobResolver, has_glob_chars, resolve_glob
from globstar.types import ResolverConfig

__all__ = [
    "GlobResolver",
    "GlobstarExpander",
    "GroupState",
    "InvalidRegexError",
    "ResolverConfig",
    "compile_glob",
    "expand_globstar",
    "glob_to_regex",
    "has_glob_chars",
    "matches_glob",
    "resolve_glob",
]
