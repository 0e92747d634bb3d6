"""Jinja2 template rendering and the built-in fragment catalogue.

Provides the TemplateRenderer class which serves the fragments stored under
``expressgen/scaffolder/templates/``.  Static fragments are returned verbatim;
composite fragments (``*.j2``) are rendered with Jinja2 against the
generation context.  Fragment directories can be listed with a glob-style
name filter so callers copy exactly the files they ask for.
"""

from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for generator errors."""


class TemplateCatalogueError(ScaffoldError):
    """Raised when the built-in fragment catalogue is inconsistent.

    Covers missing fragments and colliding binding names, mount paths or
    dependencies.  These are defects in the shipped templates, never the
    result of user input.
    """


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Read-only access to the fragment catalogue.

    Fragments are addressed by their path relative to the template directory,
    using forward slashes (e.g. ``"js/routes/index.js"``).
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["js_string"] = _js_string_filter

    # -- Composite fragments -----------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a composite fragment with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"js/app.js.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as exc:
            raise TemplateCatalogueError(
                f"missing template fragment: {template_path}"
            ) from exc
        return template.render(**context)

    # -- Static fragments --------------------------------------------------

    def read(self, template_path: str) -> str:
        """Return the verbatim content of a static fragment."""
        path = self.template_dir / template_path
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise TemplateCatalogueError(
                f"missing template fragment: {template_path}"
            ) from exc

    def list_templates(self, prefix: str, pattern: str = "*") -> list[str]:
        """Return the sorted file names directly under *prefix* matching *pattern*.

        Only the immediate directory is scanned; subdirectories are skipped.
        Names are returned without the prefix.
        """
        search_dir = self.template_dir / prefix
        if not search_dir.is_dir():
            raise TemplateCatalogueError(f"missing template directory: {prefix}")
        return sorted(
            p.name
            for p in search_dir.iterdir()
            if p.is_file() and fnmatch.fnmatchcase(p.name, pattern)
        )


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _js_string_filter(value: Any) -> str:
    """Render *value* as a single-quoted JavaScript string literal."""
    escaped = (
        str(value)
        .replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"
