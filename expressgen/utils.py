"""Shared utility functions for expressgen.

Provides app-name derivation, Rich-based console reporting (creation lines,
diagnostics, next-step instructions), the interactive confirmation prompt,
and shell detection for the post-generation hints.
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path, PurePath

from rich.console import Console
from rich.markup import escape

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9.-]+")
_EDGE_CHARS = re.compile(r"^[-_.]+|-+$")


def create_app_name(path: str) -> str:
    """Derive an npm-compatible package name from a directory path.

    * Takes the final path segment.
    * Replaces every run of characters outside ``[A-Za-z0-9.-]`` with a
      single hyphen.
    * Strips leading ``-``, ``_`` and ``.`` and trailing hyphens.
    * Lowercases the result.

    The result may be empty; callers substitute a default name.

    Examples::

        create_app_name("/tmp/foo bar (BAZ!)") -> "foo-bar-baz"
        create_app_name("_") -> ""
    """
    name = _INVALID_NAME_CHARS.sub("-", PurePath(path).name)
    name = _EDGE_CHARS.sub("", name)
    return name.lower()


# ---------------------------------------------------------------------------
# Shell detection
# ---------------------------------------------------------------------------


def is_windows_command_shell() -> bool:
    """Return ``True`` when running under ``cmd.exe`` on Windows.

    POSIX-style shells on Windows (Git Bash, MSYS) export ``_``; ``cmd.exe``
    does not.
    """
    return sys.platform == "win32" and "_" not in os.environ


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def log_create(path: str | Path, is_dir: bool = False) -> None:
    """Print a ``create : <path>`` line for a written file or directory.

    Directories are shown with a trailing path separator.
    """
    shown = str(path) + (os.sep if is_dir else "")
    console.print(f"   [cyan]create[/cyan] : {escape(shown)}")


def print_error(message: str) -> None:
    """Print an ``error:`` diagnostic to standard error."""
    _print_diagnostic("error", message)


def print_warning(message: str) -> None:
    """Print a ``warning:`` diagnostic to standard error."""
    _print_diagnostic("warning", message)


def _print_diagnostic(prefix: str, message: str) -> None:
    err_console.print()
    for line in message.split("\n"):
        err_console.print(f"  {prefix}: {line}", markup=False)
    err_console.print()


def print_next_steps(app_name: str, destination: str, windows_shell: bool) -> None:
    """Print the change-directory, install and run instructions.

    Args:
        app_name: Generated package name, used for the ``DEBUG`` namespace.
        destination: Directory the project was generated into.
        windows_shell: Format commands for ``cmd.exe`` instead of a POSIX
            shell.
    """
    prompt = ">" if windows_shell else "$"

    if destination != ".":
        console.print()
        console.print("   change directory:")
        console.print(f"     {prompt} cd {destination}", markup=False)

    console.print()
    console.print("   install dependencies:")
    console.print(f"     {prompt} npm install", markup=False)
    console.print()
    console.print("   run the app:")

    if windows_shell:
        console.print(f"     {prompt} SET DEBUG={app_name}:* & npm start", markup=False)
    else:
        console.print(f"     {prompt} DEBUG={app_name}:* npm start", markup=False)

    console.print()


# ---------------------------------------------------------------------------
# Interactive confirmation
# ---------------------------------------------------------------------------

_AFFIRMATIVE = re.compile(r"^y|yes|ok|true$", re.IGNORECASE)


def confirm(message: str) -> bool:
    """Ask a yes/no question on the terminal.

    Blocks for a single line of input.  Anything starting with ``y``,
    containing ``yes`` or ``ok``, or ending with ``true`` counts as
    agreement; an empty answer or end of input declines.
    """
    try:
        answer = console.input(escape(message))
    except EOFError:
        console.print()
        return False
    return bool(_AFFIRMATIVE.search(answer))
