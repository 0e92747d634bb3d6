"""Generation context: the per-run accumulator behind ``app.js`` and ``bin/www``.

``build_context`` turns the parsed options into module bindings, ordered
``app.use`` statements, route mounts and the dependency table.  The
resulting ``GenerationContext`` is handed to the materializer, which only
reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple

from expressgen.config import BASE_DEPENDENCIES, DEPENDENCY_VERSIONS, GenerateOptions

from .templates import TemplateCatalogueError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Middleware(str, Enum):
    """Known ``app.use(...)`` snippets, in their rendered form."""
    LOGGER = "logger('dev')"
    JSON = "express.json()"
    URLENCODED = "express.urlencoded({ extended: true })"
    COOKIE_PARSER = "cookieParser()"
    STATIC = "express.static(path.join(__dirname, 'public'))"


class Mount(NamedTuple):
    """A router mounted on a URL path."""
    path: str
    binding: str


# ---------------------------------------------------------------------------
# GenerationContext
# ---------------------------------------------------------------------------


@dataclass
class GenerationContext:
    """Naming, module and dependency decisions for one generation run.

    Every keyed collection is write-once: registering the same binding name,
    mount path or dependency twice raises ``TemplateCatalogueError``.
    """

    app_name: str
    modules: dict[str, str] = field(default_factory=dict)
    local_modules: dict[str, str] = field(default_factory=dict)
    uses: list[Middleware] = field(default_factory=list)
    mounts: list[Mount] = field(default_factory=list)
    view_engine: str | None = None
    dependencies: dict[str, str] = field(default_factory=dict)

    # -- Registration ------------------------------------------------------

    def add_dependency(self, package: str) -> None:
        if package in self.dependencies:
            raise TemplateCatalogueError(f"dependency already declared: {package}")
        try:
            self.dependencies[package] = DEPENDENCY_VERSIONS[package]
        except KeyError as exc:
            raise TemplateCatalogueError(f"no pinned version for {package}") from exc

    def add_module(self, binding: str, package: str) -> None:
        """Bind a third-party package and declare it as a dependency."""
        self._claim_binding(binding)
        self.add_dependency(package)
        self.modules[binding] = package

    def add_local_module(self, binding: str, module_path: str) -> None:
        self._claim_binding(binding)
        self.local_modules[binding] = module_path

    def use(self, middleware: Middleware) -> None:
        self.uses.append(Middleware(middleware))

    def mount(self, path: str, binding: str) -> None:
        """Mount a previously bound router on *path*."""
        if binding not in self.local_modules and binding not in self.modules:
            raise TemplateCatalogueError(f"mount of unbound module: {binding}")
        if any(m.path == path for m in self.mounts):
            raise TemplateCatalogueError(f"path already mounted: {path}")
        self.mounts.append(Mount(path, binding))

    def _claim_binding(self, binding: str) -> None:
        if binding in self.modules or binding in self.local_modules:
            raise TemplateCatalogueError(f"binding name already used: {binding}")

    # -- Views for rendering -----------------------------------------------

    def sorted_dependencies(self) -> dict[str, str]:
        """Return the dependency table with keys in lexicographic order."""
        return {name: self.dependencies[name] for name in sorted(self.dependencies)}

    def package_manifest(self) -> dict[str, Any]:
        """Return the ``package.json`` document for the generated app."""
        return {
            "name": self.app_name,
            "version": "0.0.0",
            "private": True,
            "scripts": {"start": "node ./bin/www"},
            "dependencies": self.sorted_dependencies(),
        }

    def template_locals(self) -> dict[str, Any]:
        """Build the Jinja2 context for the composite templates."""
        return {
            "app_name": self.app_name,
            "modules": dict(self.modules),
            "local_modules": dict(self.local_modules),
            "uses": [m.value for m in self.uses],
            "mounts": list(self.mounts),
            "view_engine": self.view_engine,
        }


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def build_context(app_name: str, options: GenerateOptions) -> GenerationContext:
    """Build the generation context for *app_name* from *options*.

    Pure: touches no files.  ``uses`` are registered in the order the
    statements must run in the generated ``app.js``.
    """
    ctx = GenerationContext(app_name=app_name)
    view_engine = options.view_engine()

    for package in BASE_DEPENDENCIES:
        ctx.add_dependency(package)

    # Request logger
    ctx.add_module("logger", "morgan")
    ctx.use(Middleware.LOGGER)

    # Body parsers
    if view_engine:
        ctx.use(Middleware.URLENCODED)
    else:
        ctx.use(Middleware.JSON)

    # Cookie parser
    ctx.add_module("cookieParser", "cookie-parser")
    ctx.use(Middleware.COOKIE_PARSER)

    # Static files
    ctx.use(Middleware.STATIC)

    # Routers
    ctx.add_local_module("indexRouter", "./routes/index")
    ctx.mount("/", "indexRouter")
    ctx.add_local_module("usersRouter", "./routes/users")
    ctx.mount("/users", "usersRouter")

    # Template support
    if view_engine:
        ctx.view_engine = view_engine
        ctx.add_dependency(view_engine)
        ctx.add_dependency("http-errors")

    return ctx
