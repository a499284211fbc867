"""Module directory tree creation."""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.tree import Tree

from modularizer.errors import StructureError
from modularizer.utils import ensure_dir

from .models import ModuleLayout


async def create_directory_structure(layout: ModuleLayout) -> list[Path]:
    """Create the module directory and its fixed subdirectories.

    Directories that already exist are left untouched, so calling this twice
    for the same module is harmless.  Nothing is rolled back on failure.

    Returns:
        The module directory followed by the four subdirectories.

    Raises:
        StructureError: If any directory cannot be created.
    """
    directories = [layout.module_path, *layout.subdirectories]
    for directory in directories:
        try:
            await asyncio.to_thread(ensure_dir, directory)
        except OSError as exc:
            raise StructureError(
                f"Could not create directory {directory}: {exc.strerror or exc}"
            ) from exc
    return directories


def build_directory_tree(layout: ModuleLayout) -> Tree:
    """Rich tree describing the created module layout."""
    tree = Tree(
        f"[grey62]{layout.source_dir.rstrip('/')}/[/grey62]"
        f"[cyan]{layout.identifier.name}[/cyan]"
    )
    for directory in layout.subdirectories:
        tree.add(f"[yellow]{directory.name}/[/yellow]")
    return tree
