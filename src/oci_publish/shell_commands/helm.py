"""Helm command abstractions.

This module provides the chart packaging commands used to publish charts
to an OCI registry: dependency build, package and push.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner

# helm package prints "Successfully packaged chart and saved it to: <path>"
_PACKAGE_PATH_PATTERN = re.compile(r"saved it to:\s*(?P<path>\S+\.tgz)")


class HelmCommands:
    """Helm-related shell commands.

    Provides operations for:
    - Dependency resolution (dependency build)
    - Packaging with version overrides
    - Pushing packaged charts to OCI registries
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize Helm commands.

        Args:
            runner: Command runner for executing shell commands
        """
        self._runner = runner

    def dependency_build(self, chart_dir: Path) -> CommandResult:
        """Rebuild the chart's ``charts/`` directory from Chart.lock.

        Args:
            chart_dir: Chart root directory

        Returns:
            CommandResult with dependency build status
        """
        return self._runner.run(["helm", "dependency", "build", str(chart_dir)])

    def package(
        self,
        chart_dir: Path,
        destination: Path,
        *,
        version: str,
        app_version: str,
    ) -> CommandResult:
        """Package a chart, overriding its version and appVersion.

        Args:
            chart_dir: Chart root directory
            destination: Directory to write the .tgz into
            version: Chart version (no ``v`` prefix)
            app_version: Chart appVersion

        Returns:
            CommandResult with packaging status

        Example:
            >>> helm.package(Path("charts/api"), Path("/tmp/out"), version="1.2.3", app_version="1.2.3-dev")
        """
        return self._runner.run(
            [
                "helm",
                "package",
                str(chart_dir),
                "--destination",
                str(destination),
                "--version",
                version,
                "--app-version",
                app_version,
            ]
        )

    def push(self, package_path: Path, repository: str) -> CommandResult:
        """Push a packaged chart to an OCI repository.

        Pushing the same version again overwrites the existing artifact,
        so repeated runs are safe.

        Args:
            package_path: Path to the packaged .tgz
            repository: OCI repository without the chart name
                        (e.g. "oci://ghcr.io/acme/charts")

        Returns:
            CommandResult with push status
        """
        return self._runner.run(["helm", "push", str(package_path), repository])

    @staticmethod
    def packaged_path(result: CommandResult, destination: Path) -> Path | None:
        """Locate the archive written by :meth:`package`.

        Reads the path from helm's output, falling back to the newest
        .tgz in ``destination``.
        """
        match = _PACKAGE_PATH_PATTERN.search(result.stdout)
        if match:
            return Path(match.group("path"))

        archives = sorted(destination.glob("*.tgz"), key=lambda p: p.stat().st_mtime)
        return archives[-1] if archives else None
