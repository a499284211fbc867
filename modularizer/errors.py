"""Exception hierarchy for modularizer.

Two failure policies coexist: setup errors (project validation, directory
creation) abort the whole run, while ``ArtifactError`` is caught per artifact
and the run continues with the next one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modularizer.scaffolder.models import ArtifactKind


class ModularizerError(Exception):
    """Base class for every error raised by modularizer."""


class ProjectValidationError(ModularizerError):
    """Raised when the working directory is not an Angular workspace root."""


class StructureError(ModularizerError):
    """Raised when the module directory tree cannot be created."""


class ArtifactError(ModularizerError):
    """Raised when generating a single artifact fails."""

    def __init__(self, kind: "ArtifactKind", message: str) -> None:
        self.kind = kind
        super().__init__(f"{kind.label}: {message}")


class RunStateError(ModularizerError):
    """Raised on an illegal orchestrator state transition."""
