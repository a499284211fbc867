"""Value types passed between scaffolding steps.

Everything here is immutable: the module identifier, its on-disk layout and
the user's generation options are derived once and then handed to each step
as parameters.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from modularizer.naming import (
    MODULE_NAME_PATTERN,
    NAME_PATTERN_MESSAGE,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
)

MODULE_SUBDIRECTORIES: tuple[str, ...] = ("services", "layouts", "components", "models")


class ArtifactKind(str, Enum):
    """Optional generation targets, in the order they are produced."""

    SERVICE = "service"
    GUARD = "guard"
    LAYOUT = "layout"
    MODELS = "models"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ModuleIdentifier(BaseModel):
    """A validated module name and its derived casings."""

    model_config = ConfigDict(frozen=True)

    raw: str = Field(..., description="Name exactly as the user typed it")

    @field_validator("raw")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        if not MODULE_NAME_PATTERN.fullmatch(value):
            raise ValueError(NAME_PATTERN_MESSAGE)
        return value

    @computed_field  # type: ignore[misc]
    @property
    def name(self) -> str:
        """Kebab-case form, used for directories and file names."""
        return to_kebab_case(self.raw)

    @computed_field  # type: ignore[misc]
    @property
    def camel_name(self) -> str:
        return to_camel_case(self.name)

    @computed_field  # type: ignore[misc]
    @property
    def pascal_name(self) -> str:
        """PascalCase form, used as the prefix of generated type names."""
        return to_pascal_case(self.name)

    @classmethod
    def from_input(cls, raw: str) -> "ModuleIdentifier":
        return cls(raw=raw)


class ModuleLayout(BaseModel):
    """Where a module lives on disk: ``<project_root>/<source_dir>/<name>``."""

    model_config = ConfigDict(frozen=True)

    project_root: Path
    source_dir: str = "src/app"
    identifier: ModuleIdentifier

    @property
    def source_path(self) -> Path:
        return self.project_root / self.source_dir

    @property
    def module_path(self) -> Path:
        return self.source_path / self.identifier.name

    @property
    def subdirectories(self) -> list[Path]:
        """The fixed subdirectories, in creation order."""
        return [self.module_path / sub for sub in MODULE_SUBDIRECTORIES]

    @property
    def services_dir(self) -> Path:
        return self.module_path / "services"

    @property
    def layouts_dir(self) -> Path:
        return self.module_path / "layouts"

    @property
    def models_dir(self) -> Path:
        return self.module_path / "models"

    @property
    def service_file(self) -> Path:
        return self.services_dir / f"{self.identifier.name}.service.ts"

    @property
    def model_file(self) -> Path:
        return self.models_dir / f"{self.identifier.name}.model.ts"

    @property
    def models_index_file(self) -> Path:
        return self.models_dir / "index.ts"


class GenerationOptions(BaseModel):
    """Independent per-artifact switches collected from the user."""

    model_config = ConfigDict(frozen=True)

    generate_service: bool = True
    generate_guard: bool = True
    generate_layout: bool = True
    generate_models: bool = True

    def is_enabled(self, kind: ArtifactKind) -> bool:
        return {
            ArtifactKind.SERVICE: self.generate_service,
            ArtifactKind.GUARD: self.generate_guard,
            ArtifactKind.LAYOUT: self.generate_layout,
            ArtifactKind.MODELS: self.generate_models,
        }[kind]

    def enabled_kinds(self) -> list[ArtifactKind]:
        """Enabled artifact kinds in generation order."""
        return [kind for kind in ArtifactKind if self.is_enabled(kind)]


class ArtifactResult(BaseModel):
    """Outcome of generating one artifact kind."""

    kind: ArtifactKind
    success: bool
    paths: list[Path] = Field(default_factory=list)
    error: str | None = None


@dataclass
class ToolResult:
    """Structured result from one external tool invocation."""

    command: list[str]
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @property
    def command_line(self) -> str:
        return shlex.join(self.command)

    def error_message(self) -> str:
        """Short description of a failed invocation."""
        detail = self.stderr.strip().splitlines()[-1] if self.stderr.strip() else ""
        message = f"Command failed with exit code {self.exit_code}: {self.command_line}"
        return f"{message}\n{detail}" if detail else message
