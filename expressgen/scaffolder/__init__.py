"""expressgen scaffolder -- generates Express application skeletons.

This module turns ``GenerateOptions`` into a project directory: it checks the
destination, derives the package name, builds the generation context and
writes every file from the built-in template catalogue.

Quick usage::

    from expressgen.config import GenerateOptions
    from expressgen.scaffolder import create_application
    from expressgen.utils import confirm

    options = GenerateOptions(destination="my-app", view="ejs")
    exit_code = create_application(options, confirm=confirm)
"""

from expressgen.scaffolder.context import GenerationContext, Middleware, build_context
from expressgen.scaffolder.generator import ProjectGenerator, create_application
from expressgen.scaffolder.guard import GuardOutcome, check_destination, is_empty_directory
from expressgen.scaffolder.templates import (
    ScaffoldError,
    TemplateCatalogueError,
    TemplateRenderer,
)

__all__ = [
    "GenerationContext",
    "GuardOutcome",
    "Middleware",
    "ProjectGenerator",
    "ScaffoldError",
    "TemplateCatalogueError",
    "TemplateRenderer",
    "build_context",
    "check_destination",
    "create_application",
    "is_empty_directory",
]
