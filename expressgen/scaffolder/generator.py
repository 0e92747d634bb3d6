"""Main scaffolding orchestrator.

Takes ``GenerateOptions`` and writes a complete Express application skeleton:
directory tree, static assets, routes, views (or a static landing page), the
rendered ``app.js`` and ``bin/www``, and ``package.json``.
"""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path
from typing import Callable

from expressgen.config import DEFAULT_APP_NAME, GenerateOptions
from expressgen.utils import (
    console,
    create_app_name,
    err_console,
    log_create,
    print_next_steps,
)

from .context import GenerationContext, build_context
from .guard import GuardOutcome, check_destination
from .templates import TemplateRenderer

DIR_MODE = 0o755


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Writes the application tree for a prepared ``GenerationContext``.

    Every directory and file is reported with a ``create :`` line as it is
    written.  Filesystem errors propagate immediately; whatever was already
    written stays on disk.
    """

    def __init__(
        self,
        options: GenerateOptions,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.options = options
        self.destination = options.destination
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def generate(self, context: GenerationContext) -> int:
        """Generate the project tree and return the exit code."""
        has_views = context.view_engine is not None

        # 1. Directory skeleton
        if self.destination != ".":
            self._mkdir(".")
        self._mkdir("public")
        self._mkdir("public/javascript")
        self._mkdir("public/images")
        self._mkdir("public/stylesheets")
        self._mkdir("routes")
        if has_views:
            self._mkdir("views")

        # 2. Stylesheets and route modules
        self._copy_multi("css", "public/stylesheets", "*.css")
        self._copy_multi("js/routes", "routes", "*.js")

        # 3. Views, or a static landing page
        if has_views:
            self._copy_multi("views", "views", f"*.{context.view_engine}")
        else:
            self._copy("js/index.html", "public/index.html")

        # 4. Composite templates
        template_locals = context.template_locals()
        self._write("app.js", self.renderer.render("js/app.js.j2", template_locals))
        self._mkdir("bin")
        www = self._write("bin/www", self.renderer.render("js/www.j2", template_locals))
        _make_executable(www)

        # 5. Package manifest
        manifest = json.dumps(context.package_manifest(), indent=2) + "\n"
        self._write("package.json", manifest)

        # 6. Git ignore rules
        if self.options.git:
            self._copy("js/gitignore", ".gitignore")

        return 0

    # -- Filesystem helpers ------------------------------------------------

    def _target(self, relative: str) -> str:
        return os.path.normpath(os.path.join(self.destination, relative))

    def _mkdir(self, relative: str) -> Path:
        target = self._target(relative)
        log_create(target, is_dir=True)
        path = Path(target)
        path.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        return path

    def _write(self, relative: str, content: str) -> Path:
        target = self._target(relative)
        path = Path(target)
        path.write_text(content, encoding="utf-8")
        log_create(target)
        return path

    def _copy(self, template_path: str, relative: str) -> Path:
        return self._write(relative, self.renderer.read(template_path))

    def _copy_multi(self, template_dir: str, relative_dir: str, name_glob: str) -> None:
        """Copy every fragment in *template_dir* whose name matches *name_glob*."""
        for name in self.renderer.list_templates(template_dir, name_glob):
            self._copy(f"{template_dir}/{name}", f"{relative_dir}/{name}")


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def create_application(
    options: GenerateOptions,
    *,
    confirm: Callable[[str], bool],
    windows_shell: bool = False,
    renderer: TemplateRenderer | None = None,
) -> int:
    """Run one generation: guard, name, context, materialize, report.

    Args:
        options: Parsed and validated options.
        confirm: Yes/no prompt used when the destination is not empty.
        windows_shell: Format the closing instructions for ``cmd.exe``.
        renderer: Fragment store override, mainly for tests.

    Returns:
        Process exit code: 0 on success, 1 when the operator declines.
    """
    destination = options.destination

    if check_destination(destination, options.force, confirm) is GuardOutcome.ABORTED:
        err_console.print("aborting", markup=False)
        return 1

    app_name = create_app_name(str(Path(destination).resolve())) or DEFAULT_APP_NAME
    context = build_context(app_name, options)

    generator = ProjectGenerator(options, renderer)
    console.print()
    code = generator.generate(context)

    print_next_steps(app_name, destination, windows_shell)
    return code


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_executable(path: Path) -> None:
    """Set the executable bit on a file."""
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
