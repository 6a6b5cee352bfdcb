"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
import typer

from oci_publish.cli.shared.console import CLIConsole, console
from oci_publish.constants import PublishConstants


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    project_root: Path
    constants: PublishConstants


def build_cli_context(project_root: Path | None = None) -> CLIContext:
    """Build a fresh CLIContext rooted at ``project_root`` (default: cwd)."""
    return CLIContext(
        console=console,
        project_root=project_root or Path.cwd(),
        constants=PublishConstants(),
    )


def get_cli_context(ctx: typer.Context | None = None) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context()
