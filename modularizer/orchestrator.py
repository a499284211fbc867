"""modularizer run orchestrator.

Drives one scaffolding run through a fixed sequence of states:

IDLE -> VALIDATED -> OPTIONS_COLLECTED -> STRUCTURE_CREATED
     -> [SERVICE_DONE] -> [GUARD_DONE] -> [LAYOUT_DONE] -> [MODELS_DONE]
     -> SUMMARIZED -> TERMINAL

Artifact states are skipped when the user declined that artifact.  Project
validation and directory creation failures end the run with exit status 1;
artifact failures are reported and the run carries on.

Usage::

    modularizer
    modularizer --name user-profile --yes
    python -m modularizer --project-root ./my-app --no-guard
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field
from rich import box
from rich.panel import Panel
from rich.rule import Rule

from modularizer import __version__
from modularizer.config import ModularizerConfig
from modularizer.errors import ProjectValidationError, RunStateError, StructureError
from modularizer.naming import validate_module_name
from modularizer.prompts import Prompter, RichPrompter, collect_module_name, collect_options
from modularizer.scaffolder.generator import ModuleGenerator
from modularizer.scaffolder.models import (
    ArtifactKind,
    ArtifactResult,
    GenerationOptions,
    ModuleIdentifier,
    ModuleLayout,
)
from modularizer.scaffolder.ng_tool import ToolRunner
from modularizer.scaffolder.structure import build_directory_tree, create_directory_structure
from modularizer.utils import (
    console,
    format_duration,
    print_detail,
    print_error,
    print_success,
    print_warning,
)
from modularizer.validator import validate_project

# ---------------------------------------------------------------------------
# Run state
# ---------------------------------------------------------------------------


class RunState(str, Enum):
    IDLE = "idle"
    VALIDATED = "validated"
    OPTIONS_COLLECTED = "options_collected"
    STRUCTURE_CREATED = "structure_created"
    SERVICE_DONE = "service_done"
    GUARD_DONE = "guard_done"
    LAYOUT_DONE = "layout_done"
    MODELS_DONE = "models_done"
    SUMMARIZED = "summarized"
    TERMINAL = "terminal"


_STATE_ORDER: list[RunState] = list(RunState)

_DONE_STATES: dict[ArtifactKind, RunState] = {
    ArtifactKind.SERVICE: RunState.SERVICE_DONE,
    ArtifactKind.GUARD: RunState.GUARD_DONE,
    ArtifactKind.LAYOUT: RunState.LAYOUT_DONE,
    ArtifactKind.MODELS: RunState.MODELS_DONE,
}


class RunReport(BaseModel):
    """Everything that happened during one run."""

    states: list[RunState] = Field(default_factory=lambda: [RunState.IDLE])
    identifier: ModuleIdentifier | None = None
    options: GenerationOptions | None = None
    artifacts: list[ArtifactResult] = Field(default_factory=list)
    exit_code: int = 0
    elapsed_seconds: float = 0.0

    @property
    def state(self) -> RunState:
        return self.states[-1]

    def advance(self, new_state: RunState) -> None:
        """Move forward to *new_state*; going back or standing still is an error."""
        if _STATE_ORDER.index(new_state) <= _STATE_ORDER.index(self.state):
            raise RunStateError(
                f"Illegal transition {self.state.value} -> {new_state.value}"
            )
        self.states.append(new_state)

    def result_for(self, kind: ArtifactKind) -> ArtifactResult | None:
        return next((r for r in self.artifacts if r.kind is kind), None)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class ModuleScaffolder:
    """Runs one interactive scaffolding session.

    Attributes:
        config: Immutable run configuration.
        project_root: Directory expected to hold ``angular.json``.
        prompter: Source of the user's answers.
        runner: External tool runner; ``None`` uses the real Angular CLI.
    """

    def __init__(
        self,
        config: ModularizerConfig,
        project_root: Path | str = ".",
        prompter: Prompter | None = None,
        runner: ToolRunner | None = None,
        *,
        module_name: str | None = None,
        assume_yes: bool = False,
        disabled: frozenset[ArtifactKind] = frozenset(),
    ) -> None:
        self.config = config
        self.project_root = Path(project_root)
        self.prompter = prompter or RichPrompter()
        self.runner = runner
        self.module_name = module_name
        self.assume_yes = assume_yes
        self.disabled = disabled

    async def run(self) -> RunReport:
        """Execute the run and return its report.

        Never raises; the outcome is carried by ``RunReport.exit_code``.
        """
        start = time.monotonic()
        report = RunReport()

        try:
            if self.config.show_banner:
                print_banner()

            if self.module_name is not None:
                name_error = validate_module_name(self.module_name)
                if name_error:
                    print_error(name_error)
                    report.exit_code = 1
                    return report

            # 1. Environment
            try:
                with console.status("Validating Angular project..."):
                    project_root = await asyncio.to_thread(
                        validate_project, self.project_root, self.config
                    )
            except ProjectValidationError as exc:
                print_error(f"Error: {exc}")
                report.exit_code = 1
                return report
            print_success("Valid Angular project found")
            report.advance(RunState.VALIDATED)

            # 2. Questions
            raw_name = (
                self.module_name
                if self.module_name is not None
                else collect_module_name(self.prompter)
            )
            identifier = ModuleIdentifier.from_input(raw_name)
            options = collect_options(
                self.prompter, assume_yes=self.assume_yes, disabled=self.disabled
            )
            report.identifier = identifier
            report.options = options
            report.advance(RunState.OPTIONS_COLLECTED)

            # 3. Directory tree
            layout = ModuleLayout(
                project_root=project_root,
                source_dir=self.config.source_dir,
                identifier=identifier,
            )
            console.print()
            try:
                with console.status("📁 Creating directory structure..."):
                    await create_directory_structure(layout)
            except StructureError as exc:
                print_error("Error creating directory structure")
                print_detail(str(exc))
                report.exit_code = 1
                return report
            print_success("Directory structure created successfully")
            console.print(
                Panel(
                    build_directory_tree(layout),
                    title="Structure Created",
                    border_style="grey50",
                    padding=(1, 1),
                    expand=False,
                )
            )
            report.advance(RunState.STRUCTURE_CREATED)

            # 4. Artifacts
            console.print()
            generator = ModuleGenerator(self.config, layout, runner=self.runner)
            for kind in options.enabled_kinds():
                report.artifacts.append(await generator.generate(kind))
                report.advance(_DONE_STATES[kind])

            # 5. Summary
            report.elapsed_seconds = time.monotonic() - start
            console.print()
            print_summary(report)
            report.advance(RunState.SUMMARIZED)

        except Exception as exc:
            print_error(f"Unexpected error: {exc}")
            report.exit_code = 1

        finally:
            report.elapsed_seconds = time.monotonic() - start
            if report.state is not RunState.TERMINAL:
                report.states.append(RunState.TERMINAL)

        return report


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------


def print_banner() -> None:
    """Print the start-up banner."""
    console.clear()
    console.print(
        Panel(
            "[bold bright_cyan]modularizer[/bold bright_cyan]\n"
            f"[grey62]Angular Module Generator - version {__version__}[/grey62]",
            border_style="bright_cyan",
            expand=False,
        )
    )
    console.print(Rule(style="grey50"))
    console.print()


def print_summary(report: RunReport) -> None:
    """Print the closing summary panel for a finished run."""
    identifier = report.identifier
    if identifier is None:
        return

    failed = [r for r in report.artifacts if not r.success]
    if failed:
        border_style = "yellow"
        status_text = (
            f"[bold yellow]⚠ Module[/bold yellow] [bold cyan]{identifier.name}"
            f"[/bold cyan] [bold yellow]generated with errors[/bold yellow]"
        )
    else:
        border_style = "green"
        status_text = (
            f"[bold green]🎉 Module[/bold green] [bold cyan]{identifier.name}"
            f"[/bold cyan] [bold green]generated successfully![/bold green]"
        )

    artifact_lines = [
        f"{'✅' if r.success else '❌'} {r.kind.label}" for r in report.artifacts
    ] or ["[grey62]No files requested[/grey62]"]

    detail_lines = [
        status_text,
        "",
        "[bold yellow]Generated files:[/bold yellow]",
        *artifact_lines,
        "",
        "[bold blue]💡 Next steps:[/bold blue]",
        "[grey62]1.[/grey62] Configure the routes in your routing module",
        "[grey62]2.[/grey62] Import the services you need into your components",
        "[grey62]3.[/grey62] Adjust the layout to fit your architecture",
        f"[grey62]4.[/grey62] Customise the models in {identifier.name}/models/",
        f"[grey62]5.[/grey62] Use: [cyan]import {{ {identifier.pascal_name} }} "
        f"from './{identifier.name}/models'[/cyan]",
        "",
        "[grey62]Generated files replace any previous file at the same path.[/grey62]",
        f"[grey62]Duration: {format_duration(report.elapsed_seconds)}[/grey62]",
    ]

    console.print(
        Panel(
            "\n".join(detail_lines),
            border_style=border_style,
            box=box.DOUBLE,
            padding=(1, 1),
        )
    )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modularizer",
        description="modularizer -- Angular module generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  modularizer\n"
            "  modularizer --name user-profile --yes\n"
            "  modularizer --name orders --no-guard --no-layout\n"
        ),
    )
    parser.add_argument(
        "--project-root",
        default=".",
        help="Angular workspace root (default: current directory)",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Module name (skips the name prompt)",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Generate every artifact without asking",
    )
    for kind in ArtifactKind:
        parser.add_argument(
            f"--no-{kind.value}",
            dest=f"no_{kind.value}",
            action="store_true",
            help=f"Do not generate the {kind.value}",
        )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON configuration file (default: read MODULARIZER_* env vars)",
    )
    parser.add_argument(
        "--no-banner",
        action="store_true",
        help="Do not print the start-up banner",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``modularizer`` and ``python -m modularizer``."""
    args = _build_parser().parse_args(argv)

    if args.name is not None:
        error = validate_module_name(args.name)
        if error:
            console.print(f"[bold red]Error:[/bold red] {error}")
            sys.exit(2)

    try:
        config = (
            ModularizerConfig.load(Path(args.config))
            if args.config
            else ModularizerConfig.from_env()
        )
    except (OSError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {exc}")
        sys.exit(1)
    if args.no_banner:
        config = config.model_copy(update={"show_banner": False})

    disabled = frozenset(
        kind for kind in ArtifactKind if getattr(args, f"no_{kind.value}")
    )

    scaffolder = ModuleScaffolder(
        config,
        project_root=args.project_root,
        module_name=args.name,
        assume_yes=args.yes,
        disabled=disabled,
    )
    try:
        report = asyncio.run(scaffolder.run())
    except KeyboardInterrupt:
        print_warning("Aborted.")
        sys.exit(130)

    if report.exit_code:
        sys.exit(report.exit_code)


if __name__ == "__main__":
    main()
