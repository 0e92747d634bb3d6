"""Destination guard: decides whether generation may write into a directory."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Callable

CONFIRM_MESSAGE = "destination is not empty, continue? [y/N] "


class GuardOutcome(str, Enum):
    """Result of checking the destination directory."""
    PROCEED = "proceed"
    ABORTED = "aborted"


def is_empty_directory(path: str | Path) -> bool:
    """Return ``True`` if *path* has no entries or does not exist.

    Raises:
        OSError: Any listing failure other than the directory being missing
            (permission denied, not a directory, ...).
    """
    try:
        entries = os.listdir(path)
    except FileNotFoundError:
        return True
    return not entries


def check_destination(
    path: str | Path,
    force: bool,
    confirm: Callable[[str], bool],
) -> GuardOutcome:
    """Gate generation into *path*.

    An empty (or missing) destination, or ``force``, proceeds immediately.
    Otherwise *confirm* is asked once and its answer decides.
    """
    if is_empty_directory(path) or force:
        return GuardOutcome.PROCEED
    if confirm(CONFIRM_MESSAGE):
        return GuardOutcome.PROCEED
    return GuardOutcome.ABORTED
