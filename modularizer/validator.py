"""Angular workspace detection."""

from __future__ import annotations

from pathlib import Path

from modularizer.config import ModularizerConfig
from modularizer.errors import ProjectValidationError


def validate_project(project_root: Path, config: ModularizerConfig) -> Path:
    """Check that *project_root* is the root of an Angular workspace.

    The project marker file (``angular.json``) must exist and the source
    directory (``src/app``) must be a directory.

    Returns:
        The resolved project root.

    Raises:
        ProjectValidationError: If either check fails.
    """
    root = Path(project_root)
    if not config.marker_path(root).exists():
        raise ProjectValidationError(
            f"This command must be run from the root of an Angular project "
            f"({config.project_marker} not found in {root.resolve()})"
        )
    if not config.source_path(root).is_dir():
        raise ProjectValidationError(f"Directory {config.source_dir} not found")
    return root.resolve()
