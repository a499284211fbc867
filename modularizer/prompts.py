"""Interactive questions asked before scaffolding.

The questions go through a small ``Prompter`` interface so tests can script
the answers; ``RichPrompter`` is the terminal implementation.
"""

from __future__ import annotations

from typing import Protocol

from rich.prompt import Confirm, Prompt

from modularizer.naming import validate_module_name
from modularizer.scaffolder.models import ArtifactKind, GenerationOptions
from modularizer.utils import console, print_error

MODULE_NAME_QUESTION = "📦 Module name"

ARTIFACT_QUESTIONS: dict[ArtifactKind, str] = {
    ArtifactKind.SERVICE: "🔧 Generate service?",
    ArtifactKind.GUARD: "🛡️  Generate guard?",
    ArtifactKind.LAYOUT: "🎨 Generate layout?",
    ArtifactKind.MODELS: "📋 Generate models?",
}


class Prompter(Protocol):
    def ask_text(self, message: str) -> str: ...

    def confirm(self, message: str, default: bool = True) -> bool: ...


class RichPrompter:
    """Asks questions on the shared Rich console."""

    def ask_text(self, message: str) -> str:
        return Prompt.ask(
            f"[cyan]{message}[/cyan]", console=console, default="", show_default=False
        )

    def confirm(self, message: str, default: bool = True) -> bool:
        return Confirm.ask(f"[cyan]{message}[/cyan]", console=console, default=default)


def collect_module_name(prompter: Prompter) -> str:
    """Ask for the module name until a valid one is given."""
    while True:
        raw = prompter.ask_text(MODULE_NAME_QUESTION)
        error = validate_module_name(raw)
        if error is None:
            return raw
        print_error(error)


def collect_options(
    prompter: Prompter,
    *,
    assume_yes: bool = False,
    disabled: frozenset[ArtifactKind] = frozenset(),
) -> GenerationOptions:
    """Ask one yes/no question per artifact kind.

    Kinds in *disabled* are switched off without asking; with *assume_yes*
    every other kind is switched on without asking.
    """
    answers: dict[ArtifactKind, bool] = {}
    for kind in ArtifactKind:
        if kind in disabled:
            answers[kind] = False
        elif assume_yes:
            answers[kind] = True
        else:
            answers[kind] = prompter.confirm(ARTIFACT_QUESTIONS[kind], default=True)

    return GenerationOptions(
        generate_service=answers[ArtifactKind.SERVICE],
        generate_guard=answers[ArtifactKind.GUARD],
        generate_layout=answers[ArtifactKind.LAYOUT],
        generate_models=answers[ArtifactKind.MODELS],
    )
