"""Docker command abstractions.

This module provides the multi-platform ``docker buildx build`` used to
build and push an image under every resolved tag in one call.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from oci_publish.core.build_args import is_reserved_key

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner


@dataclass(frozen=True)
class CacheConfig:
    """Layer cache configuration handed to buildx.

    Attributes:
        enabled: Whether to import/export the layer cache
        cache_from: ``--cache-from`` value when enabled
        cache_to: ``--cache-to`` value when enabled
    """

    enabled: bool
    cache_from: str = "type=gha"
    cache_to: str = "type=gha,mode=max"

    @classmethod
    def disabled(cls) -> CacheConfig:
        return cls(enabled=False)

    def as_args(self) -> list[str]:
        if not self.enabled:
            return ["--no-cache"]
        return ["--cache-from", self.cache_from, "--cache-to", self.cache_to]


class DockerCommands:
    """Docker-related shell commands."""

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Docker commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    def buildx_build(
        self,
        dockerfile: Path,
        context: Path,
        *,
        tags: Sequence[str],
        platforms: Sequence[str] = (),
        build_args: Mapping[str, str] | None = None,
        cache: CacheConfig | None = None,
        push: bool = True,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Build an image with buildx and optionally push every tag.

        Build-arg values are passed through the environment, so the command
        line only names the keys (``--build-arg KEY``).

        Args:
            dockerfile: Path to the Dockerfile
            context: Build context directory
            tags: Fully qualified image references (e.g. "ghcr.io/acme/api:v1")
            platforms: Target platforms (e.g. ["linux/amd64", "linux/arm64"])
            build_args: Build arguments; values may be secret
            cache: Layer cache configuration (defaults to disabled)
            push: Whether to push the result to the registry
            on_output: Optional callback for real-time output streaming

        Returns:
            CommandResult with build status

        Raises:
            ValueError: If a build-arg key would reconfigure the docker CLI

        Example:
            >>> docker.buildx_build(
            ...     Path("Dockerfile"),
            ...     Path("."),
            ...     tags=["ghcr.io/acme/api:v1.2.3"],
            ...     platforms=["linux/amd64"],
            ... )
        """
        reserved = sorted(key for key in build_args or {} if is_reserved_key(key))
        if reserved:
            raise ValueError(f"Reserved build-arg keys: {', '.join(reserved)}")

        cmd = ["docker", "buildx", "build", "--file", str(dockerfile)]

        if platforms:
            cmd.extend(["--platform", ",".join(platforms)])
        for key in build_args or {}:
            cmd.extend(["--build-arg", key])
        for tag in tags:
            cmd.extend(["--tag", tag])
        cmd.extend((cache or CacheConfig.disabled()).as_args())
        if push:
            cmd.append("--push")
        cmd.append(str(context))

        env = dict(build_args or {})
        if on_output:
            return self._runner.run_streaming(cmd, on_output=on_output, env=env)
        return self._runner.run(cmd, capture_output=True, env=env)
