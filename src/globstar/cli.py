#!/usr/bin/env python3
"""
globstar: Resolve glob patterns with braces and ** globstars

Common usage:
  globstar 'src/**/*.py'
  globstar 'docs/**/*.{md,rst}'
  globstar --regex '**/*.txt'
  globstar --match dir/sub/file.txt '**/*.txt'

Patterns should be quoted so the shell does not expand them first.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from globstar.compiler import InvalidRegexError, compile_glob, matches_glob
from globstar.config import (
    ConfigError,
    find_config_file,
    load_config,
    merge_cli_with_config,
    tomllib,
)
from globstar.resolver import GlobResolver
from globstar.types import ResolverConfig


@dataclass
class Options:
    """Command-line options for the globstar tool."""

    patterns: list[str]
    regex: bool
    match: str | None
    verbose: bool
    version: bool
    # Resolution options
    brace: bool
    tilde: bool
    include_hidden: bool
    follow_symlinks: bool
    max_depth: int
    exclude: list[str]
    respect_ignore_file: bool


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    """
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="globstar",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        type=str,
        default=[],
        help="Glob patterns to resolve",
    )
    parser.add_argument(
        "--regex",
        action="store_true",
        help="Print the regular expression for each pattern instead of resolving it",
    )
    parser.add_argument(
        "--match",
        type=str,
        default=None,
        metavar="STRING",
        help="Match STRING against the patterns without touching the filesystem. "
        "Prints STRING and exits 0 if any pattern matches, otherwise exits 1",
    )
    parser.add_argument(
        "--no-brace",
        action="store_true",
        dest="no_brace",
        help="Disable {a,b} brace expansion when resolving",
    )
    parser.add_argument(
        "--no-tilde",
        action="store_true",
        dest="no_tilde",
        help="Disable ~ home directory expansion when resolving",
    )
    parser.add_argument(
        "--include-hidden",
        action="store_true",
        dest="include_hidden",
        help="Let wildcards match names starting with '.'",
    )
    parser.add_argument(
        "--follow-symlinks",
        action="store_true",
        dest="follow_symlinks",
        help="Descend into symlinked directories when expanding **",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=0,
        dest="max_depth",
        metavar="N",
        help="Maximum number of directory levels a ** may span (0 = no limit, default: %(default)s)",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Gitignore-style pattern to drop from the results (e.g., 'build/'). Can be repeated",
    )
    parser.add_argument(
        "--no-ignore-file",
        action="store_true",
        dest="no_ignore_file",
        help="Do not read .globstarignore files",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    # Re-parse with sentinel defaults to detect which flags were actually supplied.
    _SENTINEL = object()
    _tracked_flags: dict[str, str] = {
        # argparse dest name -> Options field name
        "no_brace": "brace",
        "no_tilde": "tilde",
        "include_hidden": "include_hidden",
        "follow_symlinks": "follow_symlinks",
        "max_depth": "max_depth",
        "exclude": "exclude",
        "no_ignore_file": "respect_ignore_file",
    }
    sentinel_parser = argparse.ArgumentParser(add_help=False)
    sentinel_parser.add_argument("--no-brace", dest="no_brace", action="store_true", default=_SENTINEL)
    sentinel_parser.add_argument("--no-tilde", dest="no_tilde", action="store_true", default=_SENTINEL)
    sentinel_parser.add_argument(
        "--include-hidden", dest="include_hidden", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument(
        "--follow-symlinks", dest="follow_symlinks", action="store_true", default=_SENTINEL
    )
    sentinel_parser.add_argument("--max-depth", type=int, dest="max_depth", default=_SENTINEL)
    # append actions use None as sentinel (argparse creates a list when the flag is used).
    sentinel_parser.add_argument("--exclude", action="append", default=None)
    sentinel_parser.add_argument(
        "--no-ignore-file", dest="no_ignore_file", action="store_true", default=_SENTINEL
    )
    sentinel_opts, _ = sentinel_parser.parse_known_args(args if args is not None else sys.argv[1:])

    explicit_flags: set[str] = set()
    for dest_name, field_name in _tracked_flags.items():
        val = getattr(sentinel_opts, dest_name, _SENTINEL)
        if dest_name == "exclude":
            if val is not None:
                explicit_flags.add(field_name)
        elif val is not _SENTINEL:
            explicit_flags.add(field_name)

    return (
        Options(
            patterns=opts.patterns,
            regex=opts.regex,
            match=opts.match,
            verbose=opts.verbose,
            version=opts.version,
            brace=not opts.no_brace,
            tilde=not opts.no_tilde,
            include_hidden=opts.include_hidden,
            follow_symlinks=opts.follow_symlinks,
            max_depth=opts.max_depth,
            exclude=opts.exclude,
            respect_ignore_file=not opts.no_ignore_file,
        ),
        explicit_flags,
    )


def _print_regexes(patterns: list[str]) -> int:
    for pattern in patterns:
        print(compile_glob(pattern).pattern)
    return 0


def _match_string(string: str, patterns: list[str]) -> int:
    if any(matches_glob(pattern, string) for pattern in patterns):
        print(string)
        return 0
    return 1


def _resolve_patterns(options: Options) -> int:
    config = ResolverConfig(
        brace=options.brace,
        tilde=options.tilde,
        include_hidden=options.include_hidden,
        follow_symlinks=options.follow_symlinks,
        max_depth=options.max_depth,
        exclude=options.exclude,
        respect_ignore_file=options.respect_ignore_file,
    )
    resolver = GlobResolver(config)
    for path in resolver.resolve_all(options.patterns):
        print(path)
    return 0


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the globstar CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for errors or no match with --match)
    """
    options, explicit_flags = _parse_args(args)

    if options.version:
        try:
            version = importlib.metadata.version("globstar")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    logging.basicConfig(
        level=logging.DEBUG if options.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not options.patterns:
        print(
            "Error: No patterns specified. Provide one or more glob patterns"
            " (quote them to avoid shell expansion). Use --help for more options.",
            file=sys.stderr,
        )
        return 1

    if options.regex and options.match is not None:
        print("Error: --regex and --match cannot be used together", file=sys.stderr)
        return 1

    try:
        if options.regex:
            return _print_regexes(options.patterns)
        if options.match is not None:
            return _match_string(options.match, options.patterns)
    except InvalidRegexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    config_path = find_config_file(Path.cwd())
    if config_path:
        try:
            config = load_config(config_path)
        except (ConfigError, tomllib.TOMLDecodeError) as e:
            print(f"Error: Invalid config file {config_path}: {e}", file=sys.stderr)
            return 1
        merge_cli_with_config(options, config, explicit_flags)

    return _resolve_patterns(options)


if __name__ == "__main__":
    sys.exit(main())
