"""Container image publishing.

Builds the image once for every requested platform and pushes it under
every resolved tag in a single buildx invocation.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from oci_publish.constants import PublishConstants
from oci_publish.shell_commands import CacheConfig

if TYPE_CHECKING:
    from oci_publish.shell_commands import CommandResult, ShellCommands
    from oci_publish.utils.console_like import ConsoleLike


class ImagePublisher:
    """Builds and pushes the container image.

    Attributes:
        commands: Shell command executor
        console: Console for output
        constants: Publish constants
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: ConsoleLike,
        constants: PublishConstants | None = None,
    ) -> None:
        """Initialize the image publisher.

        Args:
            commands: Shell command executor
            console: Console for output
            constants: Optional publish constants (uses defaults if not provided)
        """
        self.commands = commands
        self.console = console
        self.constants = constants or PublishConstants()

    def cache_config(self, enabled: bool) -> CacheConfig:
        """Cache configuration for the layer cache toggle."""
        if not enabled:
            return CacheConfig.disabled()
        return CacheConfig(
            enabled=True,
            cache_from=self.constants.CACHE_FROM,
            cache_to=self.constants.CACHE_TO,
        )

    def publish(
        self,
        dockerfile: Path,
        context: Path,
        *,
        image_path: str,
        tags: Sequence[str],
        platforms: Sequence[str],
        build_args: Mapping[str, str],
        cache: bool,
    ) -> CommandResult:
        """Build the image and push it under every tag.

        Args:
            dockerfile: Path to the Dockerfile
            context: Build context directory
            image_path: Image reference without tag (e.g. "ghcr.io/acme/api")
            tags: Bare tags (e.g. ["v1.2.3", "v1.2", "v1"])
            platforms: Target platforms
            build_args: Build arguments; only the keys are ever printed
            cache: Whether the layer cache is enabled

        Returns:
            CommandResult of the build
        """
        references = [f"{image_path}:{tag}" for tag in tags]

        self.console.print(f"[bold cyan]🔨 Building {image_path}...[/bold cyan]")
        self.console.print(f"[dim]Platforms: {', '.join(platforms) or 'default'}[/dim]")
        if build_args:
            self.console.print(
                f"[dim]Build args: {', '.join(sorted(build_args))}[/dim]"
            )
        logger.info(
            f"Building {image_path} with {len(references)} tags "
            f"(cache {'enabled' if cache else 'disabled'})"
        )

        result = self.commands.docker.buildx_build(
            dockerfile,
            context,
            tags=references,
            platforms=platforms,
            build_args=build_args,
            cache=self.cache_config(cache),
            push=True,
        )

        if result.success:
            self.console.print(
                f"[green]✓ Pushed {image_path} as {', '.join(tags)}[/green]"
            )
        return result
