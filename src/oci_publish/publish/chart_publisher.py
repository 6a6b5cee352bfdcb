"""Helm chart packaging and publishing.

Each chart is packaged with the run's chart version and appVersion and
pushed to its own OCI target. Pushing an existing version overwrites it,
so a re-run republishes the same content.
"""

from __future__ import annotations

import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from loguru import logger

from oci_publish.constants import PublishConstants
from oci_publish.shell_commands import CommandResult

if TYPE_CHECKING:
    from oci_publish.core.registry import RegistryTarget
    from oci_publish.shell_commands import ShellCommands
    from oci_publish.utils.console_like import ConsoleLike


@dataclass(frozen=True)
class ChartPublishResult:
    """Outcome of publishing one chart."""

    name: str
    target: RegistryTarget
    version: str
    success: bool


class ChartPublisher:
    """Packages and pushes Helm charts.

    Handles:
    - Dependency build for charts that declare dependencies
    - Packaging with version/appVersion overrides
    - Pushing to the chart's OCI repository
    """

    def __init__(
        self,
        commands: ShellCommands,
        console: ConsoleLike,
        constants: PublishConstants | None = None,
    ) -> None:
        """Initialize the chart publisher.

        Args:
            commands: Shell command executor
            console: Console for output
            constants: Optional publish constants
        """
        self.commands = commands
        self.console = console
        self.constants = constants or PublishConstants()

    def read_manifest(self, chart_dir: Path) -> dict[str, Any]:
        """Load the chart's Chart.yaml; empty dict if unreadable."""
        manifest_path = chart_dir / self.constants.CHART_MANIFEST
        try:
            with open(manifest_path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read {manifest_path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def named_source(
        self,
        chart_dir: Path,
        manifest: dict[str, Any],
        chart_name: str,
        workdir: Path,
    ) -> Path:
        """Directory to package so the archive is named ``chart_name``.

        helm names the pushed artifact after ``name`` in Chart.yaml. When
        that differs from ``chart_name`` the chart is copied into
        ``workdir`` and the copy's manifest is renamed.
        """
        declared_name = manifest.get("name")
        if not manifest or declared_name == chart_name:
            return chart_dir

        logger.info(
            f"Chart.yaml in {chart_dir} is named '{declared_name}', "
            f"packaging it as '{chart_name}'"
        )
        source = workdir / "src" / chart_name
        shutil.copytree(chart_dir, source, symlinks=True)
        with open(source / self.constants.CHART_MANIFEST, "w") as f:
            yaml.safe_dump({**manifest, "name": chart_name}, f, sort_keys=False)
        return source

    def package_and_push(
        self,
        chart_dir: Path,
        chart_name: str,
        chart_version: str,
        app_version: str,
        target: RegistryTarget,
    ) -> CommandResult:
        """Package a chart and push it to ``target``.

        Args:
            chart_dir: Chart root directory
            chart_name: Name the chart is published under
            chart_version: Chart version to stamp
            app_version: appVersion to stamp
            target: Registry target for the chart

        Returns:
            CommandResult of the first failing step, or of the push
        """
        self.console.print(
            f"[bold cyan]📦 Publishing chart {chart_name} {chart_version}...[/bold cyan]"
        )
        manifest = self.read_manifest(chart_dir)

        with tempfile.TemporaryDirectory(prefix="oci-publish-") as tmp:
            workdir = Path(tmp)
            source = self.named_source(chart_dir, manifest, chart_name, workdir)

            if manifest.get("dependencies"):
                logger.info(f"Building dependencies for {chart_name}")
                result = self.commands.helm.dependency_build(source)
                if not result.success:
                    return result

            destination = workdir / "dist"
            destination.mkdir()
            result = self.commands.helm.package(
                source,
                destination,
                version=chart_version,
                app_version=app_version,
            )
            if not result.success:
                return result

            package_path = self.commands.helm.packaged_path(result, destination)
            if package_path is None:
                return CommandResult(
                    success=False,
                    stderr=f"helm package produced no archive for {chart_name}",
                    returncode=1,
                )

            result = self.commands.helm.push(package_path, target.repository)

        if result.success:
            self.console.print(
                f"[green]✓ Pushed {target.oci_path}:{chart_version}[/green]"
            )
        return result
