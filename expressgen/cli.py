"""Command-line front end for expressgen.

Usage::

    express-gen [options] [dir]
    python -m expressgen.cli --no-view ./api
"""

from __future__ import annotations

import argparse
import sys

from expressgen.config import (
    SUPPORTED_CSS_ENGINES,
    SUPPORTED_VIEW_ENGINES,
    VERSION,
    GenerateOptions,
)
from expressgen.scaffolder import create_application
from expressgen.utils import (
    confirm,
    console,
    is_windows_command_shell,
    print_error,
    print_warning,
)

PROG = "express-gen"

USAGE = f"""
  Usage: {PROG} [options] [dir]

  Options:

    -e, --ejs            add ejs engine support
    -v, --view <engine>  add view <engine> support (ejs) (defaults to ejs)
        --no-view        use static html instead of view engine
    -c, --css <engine>   add stylesheet <engine> support (css) (defaults to plain css)
        --git            add .gitignore
    -f, --force          force on non-empty directory
    --version            output the version number
    -h, --help           output usage information
"""


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UsageError(Exception):
    """Raised when the command line cannot be turned into options."""


class _ArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that reports problems instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=PROG, add_help=False, allow_abbrev=False)
    parser.add_argument("destination", nargs="?", default=None)
    parser.add_argument("-e", "--ejs", action="store_true")
    parser.add_argument("-v", "--view", nargs="?", const="", default=True)
    parser.add_argument("--no-view", dest="view", action="store_false")
    parser.add_argument("-c", "--css", nargs="?", const="", default=True)
    parser.add_argument("--git", action="store_true")
    parser.add_argument("-f", "--force", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("--version", action="store_true")
    return parser


def parse_args(argv: list[str] | None = None) -> GenerateOptions:
    """Parse *argv* into ``GenerateOptions``.

    Unrecognised flags do not fail parsing; they are collected in
    ``GenerateOptions.unknown`` so the caller can report the first one.

    Raises:
        UsageError: The command line is malformed in a way argparse itself
            rejects.
    """
    args = sys.argv[1:] if argv is None else list(argv)
    namespace, extras = build_parser().parse_known_args(args)
    unknown = [arg for arg in extras if arg.startswith("-") and arg != "-"]
    return GenerateOptions.from_namespace(namespace, unknown)


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def print_usage() -> None:
    console.print(USAGE, markup=False)


def _usage_error(message: str) -> int:
    print_usage()
    print_error(message)
    return 1


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``express-gen``; returns the process exit code."""
    try:
        options = parse_args(argv)
    except UsageError as exc:
        return _usage_error(str(exc))

    if options.unknown:
        return _usage_error(f"unknown option '{options.unknown[0]}'")
    if options.help:
        print_usage()
        return 0
    if options.version:
        console.print(VERSION, markup=False)
        return 0
    if options.css == "":
        return _usage_error("option '-c, --css <engine>' argument missing")
    if options.view == "":
        return _usage_error("option '-v, --view <engine>' argument missing")

    engine = options.view_engine()
    if engine is not None and engine not in SUPPORTED_VIEW_ENGINES:
        return _usage_error(f"view engine '{engine}' is not supported")

    css_engine = options.css_engine()
    if css_engine not in SUPPORTED_CSS_ENGINES:
        print_warning(f"css engine '{css_engine}' is not supported, using plain css")

    return create_application(
        options,
        confirm=confirm,
        windows_shell=is_windows_command_shell(),
    )


if __name__ == "__main__":
    sys.exit(main())
