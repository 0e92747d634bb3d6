"""Tests for the generation context builder (expressgen.scaffolder.context).

Covers:
- Always-registered modules, middleware and mounts
- View-engine and no-view variants
- Dependency sorting and manifest layout
- Write-once collisions
"""

from __future__ import annotations

import pytest

from expressgen.config import GenerateOptions
from expressgen.scaffolder.context import (
    GenerationContext,
    Middleware,
    Mount,
    build_context,
)
from expressgen.scaffolder.templates import TemplateCatalogueError

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# build_context
# ---------------------------------------------------------------------------


class TestBuildContext:
    def test_common_modules(self, view_options):
        ctx = build_context("my-app", view_options)
        assert ctx.app_name == "my-app"
        assert ctx.modules == {"logger": "morgan", "cookieParser": "cookie-parser"}
        assert ctx.local_modules == {
            "indexRouter": "./routes/index",
            "usersRouter": "./routes/users",
        }

    def test_mount_order(self, view_options):
        ctx = build_context("my-app", view_options)
        assert ctx.mounts == [Mount("/", "indexRouter"), Mount("/users", "usersRouter")]

    def test_view_engine_uses(self, view_options):
        ctx = build_context("my-app", view_options)
        assert ctx.uses == [
            Middleware.LOGGER,
            Middleware.URLENCODED,
            Middleware.COOKIE_PARSER,
            Middleware.STATIC,
        ]
        assert ctx.uses[1].value == "express.urlencoded({ extended: true })"

    def test_no_view_uses_json_body_parser(self, no_view_options):
        ctx = build_context("my-app", no_view_options)
        assert ctx.uses == [
            Middleware.LOGGER,
            Middleware.JSON,
            Middleware.COOKIE_PARSER,
            Middleware.STATIC,
        ]

    def test_view_engine_dependencies(self, view_options):
        ctx = build_context("my-app", view_options)
        assert ctx.view_engine == "ejs"
        assert list(ctx.sorted_dependencies()) == [
            "cookie-parser",
            "debug",
            "ejs",
            "express",
            "http-errors",
            "morgan",
        ]

    def test_no_view_dependencies(self, no_view_options):
        ctx = build_context("my-app", no_view_options)
        assert ctx.view_engine is None
        assert list(ctx.sorted_dependencies()) == [
            "cookie-parser",
            "debug",
            "express",
            "morgan",
        ]

    def test_explicit_engine_matches_default(self):
        explicit = build_context("a", GenerateOptions(view="ejs"))
        default = build_context("a", GenerateOptions())
        assert explicit == default

    def test_does_not_touch_filesystem(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        build_context("my-app", GenerateOptions(destination="out"))
        assert list(tmp_path.iterdir()) == []


# ---------------------------------------------------------------------------
# Manifest & template locals
# ---------------------------------------------------------------------------


class TestRenderingViews:
    def test_manifest_key_order(self, view_options):
        manifest = build_context("my-app", view_options).package_manifest()
        assert list(manifest) == ["name", "version", "private", "scripts", "dependencies"]
        assert manifest["version"] == "0.0.0"
        assert manifest["private"] is True
        assert manifest["scripts"] == {"start": "node ./bin/www"}

    def test_sorted_dependencies_ignores_insertion_order(self):
        ctx = GenerationContext(app_name="x")
        for package in ("morgan", "express", "debug", "cookie-parser"):
            ctx.add_dependency(package)
        assert list(ctx.sorted_dependencies()) == sorted(ctx.dependencies)

    def test_template_locals_use_rendered_snippets(self, no_view_options):
        locals_ = build_context("my-app", no_view_options).template_locals()
        assert locals_["uses"][1] == "express.json()"
        assert locals_["view_engine"] is None
        assert locals_["app_name"] == "my-app"


# ---------------------------------------------------------------------------
# Write-once invariant
# ---------------------------------------------------------------------------


class TestCollisions:
    def test_duplicate_module_binding(self):
        ctx = GenerationContext(app_name="x")
        ctx.add_module("logger", "morgan")
        with pytest.raises(TemplateCatalogueError, match="logger"):
            ctx.add_module("logger", "debug")

    def test_local_binding_cannot_shadow_module(self):
        ctx = GenerationContext(app_name="x")
        ctx.add_module("logger", "morgan")
        with pytest.raises(TemplateCatalogueError):
            ctx.add_local_module("logger", "./routes/logger")

    def test_duplicate_mount_path(self):
        ctx = GenerationContext(app_name="x")
        ctx.add_local_module("indexRouter", "./routes/index")
        ctx.add_local_module("otherRouter", "./routes/other")
        ctx.mount("/", "indexRouter")
        with pytest.raises(TemplateCatalogueError, match="already mounted"):
            ctx.mount("/", "otherRouter")

    def test_mount_requires_binding(self):
        ctx = GenerationContext(app_name="x")
        with pytest.raises(TemplateCatalogueError, match="unbound"):
            ctx.mount("/", "indexRouter")

    def test_duplicate_dependency(self):
        ctx = GenerationContext(app_name="x")
        ctx.add_dependency("express")
        with pytest.raises(TemplateCatalogueError):
            ctx.add_dependency("express")

    def test_unpinned_dependency(self):
        ctx = GenerationContext(app_name="x")
        with pytest.raises(TemplateCatalogueError, match="no pinned version"):
            ctx.add_dependency("left-pad")
