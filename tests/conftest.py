"""Shared pytest fixtures for the modularizer test suite.

Provides reusable fixtures for:
- Temporary Angular workspaces
- A configuration with the banner switched off
- A scripted prompter standing in for the terminal
- A fake Angular CLI runner that records every command
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from modularizer.config import ModularizerConfig
from modularizer.scaffolder.models import ModuleIdentifier, ModuleLayout, ToolResult


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeToolRunner:
    """Records commands and returns a canned exit code per ``ng generate`` kind.

    ``failures`` maps the schematic name (``"guard"``, ``"component"``,
    ``"service"``) to the exit code to report for it.
    """

    def __init__(self, failures: dict[str, int] | None = None) -> None:
        self.failures = failures or {}
        self.calls: list[tuple[list[str], Path]] = []

    async def run(self, command: list[str], cwd: Path) -> ToolResult:
        self.calls.append((list(command), cwd))
        schematic = command[2] if len(command) > 2 else ""
        exit_code = self.failures.get(schematic, 0)
        stderr = f"An unhandled exception occurred: {schematic} failed" if exit_code else ""
        return ToolResult(command=list(command), exit_code=exit_code, stderr=stderr)

    @property
    def schematics(self) -> list[str]:
        return [command[2] for command, _ in self.calls]


class ScriptedPrompter:
    """Answers prompts from pre-recorded lists, in order."""

    def __init__(self, names: list[str], confirms: list[bool] | None = None) -> None:
        self.names = list(names)
        self.confirms = list(confirms or [])
        self.questions: list[str] = []

    def ask_text(self, message: str) -> str:
        self.questions.append(message)
        return self.names.pop(0)

    def confirm(self, message: str, default: bool = True) -> bool:
        self.questions.append(message)
        return self.confirms.pop(0) if self.confirms else default


# ---------------------------------------------------------------------------
# Workspaces & configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def angular_project(tmp_path: Path) -> Path:
    """Minimal Angular workspace: ``angular.json`` plus ``src/app``."""
    root = tmp_path / "my-app"
    (root / "src" / "app").mkdir(parents=True)
    (root / "angular.json").write_text(
        json.dumps({"version": 1, "projects": {"my-app": {}}}), encoding="utf-8"
    )
    yield root


@pytest.fixture
def config() -> ModularizerConfig:
    return ModularizerConfig(show_banner=False)


@pytest.fixture
def fake_runner() -> FakeToolRunner:
    return FakeToolRunner()


@pytest.fixture
def order_identifier() -> ModuleIdentifier:
    return ModuleIdentifier.from_input("order")


@pytest.fixture
def user_profile_identifier() -> ModuleIdentifier:
    return ModuleIdentifier.from_input("userProfile")


@pytest.fixture
def order_layout(angular_project: Path, order_identifier: ModuleIdentifier) -> ModuleLayout:
    return ModuleLayout(project_root=angular_project, identifier=order_identifier)


@pytest.fixture
def runner_factory() -> type[FakeToolRunner]:
    """``runner_factory(failures={"guard": 1})`` builds a failing fake runner."""
    return FakeToolRunner


@pytest.fixture
def prompter_factory() -> type[ScriptedPrompter]:
    return ScriptedPrompter
