"""Angular CLI delegation for guard, layout and service generation.

Builds ``ng generate`` command lines for a module and runs them through an
injectable ``ToolRunner``.  The runner never raises for a non-zero exit; it
returns a ``ToolResult`` and the caller decides what a failure means.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from modularizer.config import ModularizerConfig
from modularizer.utils import run_command

from .models import ModuleIdentifier, ToolResult


# ---------------------------------------------------------------------------
# Command construction
# ---------------------------------------------------------------------------


def _skip_tests_flag(config: ModularizerConfig) -> str:
    return f"--skip-tests={'true' if config.skip_tests else 'false'}"


def build_service_command(
    identifier: ModuleIdentifier, config: ModularizerConfig
) -> list[str]:
    """``ng generate service <name>/services/<name> --skip-tests=true``"""
    target = f"{identifier.name}/services/{identifier.name}"
    return [config.ng_binary, "generate", "service", target, _skip_tests_flag(config)]


def build_guard_command(
    identifier: ModuleIdentifier, config: ModularizerConfig
) -> list[str]:
    """``ng generate guard <name>/services/<name> --skip-tests=true``

    The guard is placed next to the service, in the ``services`` folder.
    """
    target = f"{identifier.name}/services/{identifier.name}"
    return [config.ng_binary, "generate", "guard", target, _skip_tests_flag(config)]


def build_layout_command(
    identifier: ModuleIdentifier, config: ModularizerConfig
) -> list[str]:
    """``ng generate component <name>/layouts/<name> --type=layout ... --flat=true``"""
    target = f"{identifier.name}/layouts/{identifier.name}"
    return [
        config.ng_binary,
        "generate",
        "component",
        target,
        "--type=layout",
        _skip_tests_flag(config),
        "--flat=true",
    ]


# ---------------------------------------------------------------------------
# Runners
# ---------------------------------------------------------------------------


class ToolRunner(Protocol):
    """Anything that can run an external command and report how it went."""

    async def run(self, command: list[str], cwd: Path) -> ToolResult: ...


class NgToolRunner:
    """Runs Angular CLI commands as child processes.

    Output is captured and kept on the result rather than shown on the
    console.  Each command is attempted exactly once.
    """

    def __init__(self, timeout_seconds: int | None = None) -> None:
        self.timeout_seconds = timeout_seconds

    async def run(self, command: list[str], cwd: Path) -> ToolResult:
        returncode, stdout, stderr = await run_command(
            command, cwd=cwd, timeout=self.timeout_seconds
        )
        return ToolResult(
            command=list(command),
            exit_code=returncode,
            stdout=stdout,
            stderr=stderr,
        )
