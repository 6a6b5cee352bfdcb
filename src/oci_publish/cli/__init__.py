"""Main CLI application module.

This module provides the main entry point for the oci-publish CLI.

Commands:
- publish: Build/push the image and package/push its Helm charts
- tags: Preview the tags and chart versions for a version string
- charts: List the charts discovered under a directory
"""

from typing import Annotated

import typer

from .commands import charts, run, tags
from .context import build_cli_context
from .shared.logging import configure_logging

# Create the main CLI application
app = typer.Typer(
    help="📦 OCI Publish - container image and Helm chart publishing",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    configure_logging(verbose)
    ctx.obj = build_cli_context()


app.command("publish")(run)
app.command("tags")(tags)
app.command("charts")(charts)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
