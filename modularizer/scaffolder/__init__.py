"""modularizer scaffolder -- generates the files of one Angular module.

Given a validated project root and a module name, this package creates the
``src/app/<module>/{services,layouts,components,models}`` tree, renders the
service, model and index files from Jinja2 templates, and delegates guard and
layout creation to the Angular CLI.

Quick usage::

    from modularizer.scaffolder import ModuleGenerator, ModuleIdentifier, ModuleLayout

    identifier = ModuleIdentifier.from_input("userProfile")
    layout = ModuleLayout(project_root=Path("."), identifier=identifier)
    await create_directory_structure(layout)
    result = await ModuleGenerator(config, layout).generate(ArtifactKind.MODELS)
"""

from modularizer.scaffolder.generator import (
    ModuleGenerator,
    render_index,
    render_model,
    render_service,
)
from modularizer.scaffolder.models import (
    ArtifactKind,
    ArtifactResult,
    GenerationOptions,
    ModuleIdentifier,
    ModuleLayout,
    ToolResult,
)
from modularizer.scaffolder.ng_tool import NgToolRunner, ToolRunner
from modularizer.scaffolder.structure import create_directory_structure
from modularizer.scaffolder.templates import TemplateRenderer

__all__ = [
    "ArtifactKind",
    "ArtifactResult",
    "GenerationOptions",
    "ModuleGenerator",
    "ModuleIdentifier",
    "ModuleLayout",
    "NgToolRunner",
    "TemplateRenderer",
    "ToolResult",
    "ToolRunner",
    "create_directory_structure",
    "render_index",
    "render_model",
    "render_service",
]
