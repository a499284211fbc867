"""Artifact generation for a single Angular module.

The ``render_*`` functions are pure: a ``ModuleIdentifier`` goes in, file
content comes out.  ``ModuleGenerator`` writes that content to disk and
delegates guard/layout creation to the Angular CLI, reporting each artifact
on the console.  A failure in one artifact is reported and recorded, and
never stops the others.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import TemplateError

from modularizer.config import ModularizerConfig
from modularizer.errors import ArtifactError
from modularizer.utils import (
    console,
    print_detail,
    print_error,
    print_success,
    write_text,
)

from .models import ArtifactKind, ArtifactResult, ModuleIdentifier, ModuleLayout
from .ng_tool import (
    NgToolRunner,
    ToolRunner,
    build_guard_command,
    build_layout_command,
    build_service_command,
)
from .templates import TemplateRenderer

SERVICE_TEMPLATE = "service.ts.j2"
MODEL_TEMPLATE = "model.ts.j2"
INDEX_TEMPLATE = "index.ts.j2"

_STATUS_MESSAGES: dict[ArtifactKind, str] = {
    ArtifactKind.SERVICE: "Generating service...",
    ArtifactKind.GUARD: "Generating guard...",
    ArtifactKind.LAYOUT: "Generating layout...",
    ArtifactKind.MODELS: "Generating models...",
}


# ---------------------------------------------------------------------------
# Pure template rendering
# ---------------------------------------------------------------------------


def build_context(identifier: ModuleIdentifier) -> dict[str, Any]:
    """Build the Jinja2 template context for a module."""
    return {
        "module_name": identifier.name,
        "camel_name": identifier.camel_name,
        "pascal_name": identifier.pascal_name,
    }


def render_service(
    identifier: ModuleIdentifier, renderer: TemplateRenderer | None = None
) -> str:
    """Angular service with list/get/create/update/delete calls on ``/api/<name>``."""
    renderer = renderer or TemplateRenderer()
    return renderer.render(SERVICE_TEMPLATE, build_context(identifier))


def render_model(
    identifier: ModuleIdentifier, renderer: TemplateRenderer | None = None
) -> str:
    """Entity, request/response interfaces and the status enum."""
    renderer = renderer or TemplateRenderer()
    return renderer.render(MODEL_TEMPLATE, build_context(identifier))


def render_index(
    identifier: ModuleIdentifier, renderer: TemplateRenderer | None = None
) -> str:
    """Barrel file re-exporting the model."""
    renderer = renderer or TemplateRenderer()
    return renderer.render(INDEX_TEMPLATE, build_context(identifier))


# ---------------------------------------------------------------------------
# File generation
# ---------------------------------------------------------------------------


class ModuleGenerator:
    """Produces the optional artifacts of one module.

    Every file written here overwrites whatever was at that path before; no
    merge or backup is attempted.
    """

    def __init__(
        self,
        config: ModularizerConfig,
        layout: ModuleLayout,
        runner: ToolRunner | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.layout = layout
        self.runner = runner or NgToolRunner(timeout_seconds=config.tool_timeout)
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def generate(self, kind: ArtifactKind) -> ArtifactResult:
        """Generate one artifact kind, reporting the outcome.

        Errors are caught, printed and returned as a failed result.
        """
        steps = {
            ArtifactKind.SERVICE: self.generate_service,
            ArtifactKind.GUARD: self.generate_guard,
            ArtifactKind.LAYOUT: self.generate_layout,
            ArtifactKind.MODELS: self.generate_models,
        }
        try:
            with console.status(_STATUS_MESSAGES[kind]):
                paths = await steps[kind]()
        except (ArtifactError, OSError, TemplateError) as exc:
            print_error(f"Error generating {kind.value}")
            print_detail(str(exc))
            return ArtifactResult(kind=kind, success=False, error=str(exc))

        print_success(self._success_message(kind))
        return ArtifactResult(kind=kind, success=True, paths=paths)

    async def generate_service(self) -> list[Path]:
        """Create the service and fill it with the CRUD template."""
        identifier = self.layout.identifier
        if self.config.service_via_cli:
            await self._run_tool(
                ArtifactKind.SERVICE, build_service_command(identifier, self.config)
            )
        content = render_service(identifier, self.renderer)
        return [await self._write(self.layout.service_file, content)]

    async def generate_guard(self) -> list[Path]:
        identifier = self.layout.identifier
        await self._run_tool(
            ArtifactKind.GUARD, build_guard_command(identifier, self.config)
        )
        return [self.layout.services_dir / f"{identifier.name}.guard.ts"]

    async def generate_layout(self) -> list[Path]:
        identifier = self.layout.identifier
        await self._run_tool(
            ArtifactKind.LAYOUT, build_layout_command(identifier, self.config)
        )
        return [self.layout.layouts_dir / f"{identifier.name}.layout.ts"]

    async def generate_models(self) -> list[Path]:
        """Write ``<name>.model.ts`` and the ``index.ts`` that re-exports it."""
        identifier = self.layout.identifier
        model = render_model(identifier, self.renderer)
        index = render_index(identifier, self.renderer)
        return [
            await self._write(self.layout.model_file, model),
            await self._write(self.layout.models_index_file, index),
        ]

    # -- Helpers -----------------------------------------------------------

    async def _write(self, path: Path, content: str) -> Path:
        return await asyncio.to_thread(write_text, path, content)

    async def _run_tool(self, kind: ArtifactKind, command: list[str]) -> None:
        result = await self.runner.run(command, cwd=self.layout.project_root)
        if not result.success:
            raise ArtifactError(kind, result.error_message())

    def _success_message(self, kind: ArtifactKind) -> str:
        name = self.layout.identifier.name
        if kind is ArtifactKind.MODELS:
            return "Models created successfully"
        return f"{kind.label} {name}.{kind.value}.ts created"
