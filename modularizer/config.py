"""modularizer configuration.

Typed run configuration.  Settings use a Pydantic v2 model so they are
validated at construction time and can be serialised to/from JSON or read
from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ModularizerConfig(BaseModel):
    """Global modularizer configuration.

    Created once by the CLI entry point and passed, unchanged, to every
    scaffolding step.
    """

    model_config = ConfigDict(frozen=True)

    project_marker: str = Field(
        default="angular.json",
        description="File that must exist at the project root",
    )
    source_dir: str = Field(
        default="src/app",
        description="Application source directory, relative to the project root",
    )
    ng_binary: str = Field(default="ng", description="Angular CLI executable")
    skip_tests: bool = Field(
        default=True, description="Pass --skip-tests=true to ng generate"
    )
    service_via_cli: bool = Field(
        default=True,
        description="Create the service with ng generate before writing the template",
    )
    tool_timeout: int | None = Field(
        default=None,
        ge=1,
        description="Per-invocation timeout for ng in seconds (None waits forever)",
    )
    show_banner: bool = Field(default=True)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def marker_path(self, project_root: Path) -> Path:
        """Path of the project marker file under *project_root*."""
        return project_root / self.project_marker

    def source_path(self, project_root: Path) -> Path:
        """Path of the application source directory under *project_root*."""
        return project_root / self.source_dir

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ModularizerConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ModularizerConfig":
        """Build a ``ModularizerConfig`` from environment variables.

        Recognised variables (all optional):
            MODULARIZER_PROJECT_MARKER, MODULARIZER_SOURCE_DIR,
            MODULARIZER_NG_BINARY, MODULARIZER_SKIP_TESTS,
            MODULARIZER_SERVICE_VIA_CLI, MODULARIZER_TOOL_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("MODULARIZER_PROJECT_MARKER"):
            kwargs["project_marker"] = os.environ["MODULARIZER_PROJECT_MARKER"]
        if os.environ.get("MODULARIZER_SOURCE_DIR"):
            kwargs["source_dir"] = os.environ["MODULARIZER_SOURCE_DIR"]
        if os.environ.get("MODULARIZER_NG_BINARY"):
            kwargs["ng_binary"] = os.environ["MODULARIZER_NG_BINARY"]
        if os.environ.get("MODULARIZER_SKIP_TESTS"):
            kwargs["skip_tests"] = _parse_bool(os.environ["MODULARIZER_SKIP_TESTS"])
        if os.environ.get("MODULARIZER_SERVICE_VIA_CLI"):
            kwargs["service_via_cli"] = _parse_bool(
                os.environ["MODULARIZER_SERVICE_VIA_CLI"]
            )
        if os.environ.get("MODULARIZER_TOOL_TIMEOUT"):
            kwargs["tool_timeout"] = int(os.environ["MODULARIZER_TOOL_TIMEOUT"])
        return cls(**kwargs)


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {raw!r}")
