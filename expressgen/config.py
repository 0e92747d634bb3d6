"""expressgen configuration.

Typed options record for a single generation run plus the fixed tables the
generator draws on (supported engines, pinned dependency versions).  The
options model is frozen: it is built once from the parsed command line and
then passed read-only through the rest of the system.
"""

from __future__ import annotations

import argparse
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from expressgen import __version__

VERSION = __version__

DEFAULT_APP_NAME = "hello-world"
DEFAULT_VIEW_ENGINE = "ejs"
SUPPORTED_VIEW_ENGINES: tuple[str, ...] = ("ejs",)
DEFAULT_CSS_ENGINE = "css"
SUPPORTED_CSS_ENGINES: tuple[str, ...] = ("css",)

# Semver ranges written into the generated package.json.
DEPENDENCY_VERSIONS: dict[str, str] = {
    "cookie-parser": "~1.4.6",
    "debug": "~4.3.4",
    "ejs": "~3.1.9",
    "express": "~4.18.2",
    "http-errors": "~2.0.0",
    "morgan": "~1.10.0",
}

# Packages every generated application depends on.
BASE_DEPENDENCIES: tuple[str, ...] = ("debug", "express")


class GenerateOptions(BaseModel):
    """Options for one generation run.

    ``view`` and ``css`` follow the command-line convention: ``True`` means
    "use the default engine", ``False`` means "none", and a string names an
    engine explicitly.
    """

    model_config = ConfigDict(frozen=True)

    destination: str = Field(default=".", description="Directory to generate into")
    view: Union[bool, str] = Field(default=True, description="View engine selector")
    css: Union[bool, str] = Field(default=True, description="Stylesheet engine selector")
    force: bool = Field(default=False, description="Skip the non-empty confirmation")
    git: bool = Field(default=False, description="Write a .gitignore file")
    help: bool = Field(default=False)
    version: bool = Field(default=False)
    unknown: tuple[str, ...] = Field(
        default=(), description="Unrecognised flags, in order of appearance"
    )

    def view_engine(self) -> str | None:
        """Resolve ``view`` to an engine name, or ``None`` for no engine."""
        if self.view is True:
            return DEFAULT_VIEW_ENGINE
        if self.view is False or self.view == "":
            return None
        return self.view

    def css_engine(self) -> str:
        """Resolve ``css`` to a stylesheet engine name."""
        if isinstance(self.css, str) and self.css:
            return self.css
        return DEFAULT_CSS_ENGINE

    @classmethod
    def from_namespace(
        cls, namespace: argparse.Namespace, unknown: list[str] | None = None
    ) -> "GenerateOptions":
        """Build options from an ``argparse`` namespace.

        ``--ejs`` is folded into ``view`` here so the rest of the system only
        ever looks at one field.
        """
        view = namespace.view
        if namespace.ejs and view is True:
            view = "ejs"
        return cls(
            destination=namespace.destination or ".",
            view=view,
            css=namespace.css,
            force=namespace.force,
            git=namespace.git,
            help=namespace.help,
            version=namespace.version,
            unknown=tuple(unknown or ()),
        )
