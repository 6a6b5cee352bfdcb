"""Publish commands.

This module provides the command that runs a full image-and-chart publish,
plus two read-only commands for checking what a version resolves to and
which charts a directory holds.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from oci_publish.cli.context import get_cli_context
from oci_publish.cli.shared.console import with_error_handling
from oci_publish.config.settings import PublishSettings
from oci_publish.core.charts import discover_charts
from oci_publish.core.registry import resolve_chart_path
from oci_publish.core.tags import docker_tags, helm_version_spec
from oci_publish.core.version import parse_version
from oci_publish.publish.orchestrator import PublishOrchestrator, PublishResult

# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render_result(result: PublishResult) -> Table:
    table = Table(title="Publish summary", show_header=True, header_style="bold")
    table.add_column("Artifact")
    table.add_column("Reference")
    table.add_column("Status")

    image_status = (
        "[green]pushed[/green]" if result.image_published else "[dim]skipped[/dim]"
    )
    for tag in result.tags:
        table.add_row("image", f"{result.image_path}:{tag}", image_status)

    published = {chart.name: chart for chart in result.charts}
    for name, target in result.chart_targets.items():
        chart = published.get(name)
        if chart is None:
            status = "[dim]skipped[/dim]"
        elif chart.success:
            status = "[green]pushed[/green]"
        else:
            status = "[red]failed[/red]"
        table.add_row("chart", f"{target.oci_path}:{result.helm_version}", status)
    return table


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@with_error_handling
def run(
    ctx: typer.Context,
    image_name: Annotated[
        str,
        typer.Option("--image-name", envvar="INPUT_IMAGE_NAME", help="Image name"),
    ],
    version: Annotated[
        str | None,
        typer.Option(
            "--version",
            envvar="INPUT_VERSION",
            help="Version to publish (defaults to the CI ref name)",
        ),
    ] = None,
    registry: Annotated[
        str | None,
        typer.Option("--registry", envvar="INPUT_REGISTRY", help="Registry host"),
    ] = None,
    username: Annotated[
        str | None,
        typer.Option(
            "--username",
            envvar="INPUT_USERNAME",
            help="Registry owner (defaults to the repository owner)",
        ),
    ] = None,
    additional_tags: Annotated[
        str,
        typer.Option(
            "--additional-tags",
            envvar="INPUT_ADDITIONAL_TAGS",
            help="Extra image tags, comma-separated",
        ),
    ] = "",
    version_breakdown: Annotated[
        bool,
        typer.Option(
            "--breakdown/--no-breakdown",
            envvar="INPUT_VERSION_BREAKDOWN",
            help="Also tag MAJOR.MINOR and MAJOR",
        ),
    ] = True,
    dockerfile: Annotated[
        Path,
        typer.Option("--dockerfile", envvar="INPUT_DOCKERFILE", help="Dockerfile path"),
    ] = Path("Dockerfile"),
    context: Annotated[
        Path,
        typer.Option("--context", envvar="INPUT_CONTEXT", help="Build context"),
    ] = Path("."),
    platforms: Annotated[
        str | None,
        typer.Option(
            "--platforms",
            envvar="INPUT_PLATFORMS",
            help="Target platforms, comma-separated (e.g. linux/amd64,linux/arm64)",
        ),
    ] = None,
    build_args: Annotated[
        str,
        typer.Option(
            "--build-args",
            envvar="INPUT_BUILD_ARGS",
            help='JSON array of KEY=VALUE strings, e.g. ["A=1"]',
        ),
    ] = "[]",
    cache: Annotated[
        bool,
        typer.Option("--cache/--no-cache", envvar="INPUT_CACHE", help="Layer cache"),
    ] = True,
    chart_path: Annotated[
        Path,
        typer.Option(
            "--chart-path",
            envvar="INPUT_CHART_PATH",
            help="Chart directory, or a directory of charts",
        ),
    ] = Path("helm"),
    push_helm: Annotated[
        bool,
        typer.Option(
            "--push-helm/--no-push-helm",
            envvar="INPUT_PUSH_HELM",
            help="Package and push Helm charts",
        ),
    ] = True,
    helm_strip_suffix: Annotated[
        bool,
        typer.Option(
            "--helm-strip-suffix",
            envvar="INPUT_HELM_STRIP_SUFFIX",
            help="Drop the pre-release suffix from the chart version",
        ),
    ] = False,
    app_version_strip_suffix: Annotated[
        bool,
        typer.Option(
            "--app-version-strip-suffix",
            envvar="INPUT_APP_VERSION_STRIP_SUFFIX",
            help="Drop the pre-release suffix from the chart appVersion",
        ),
    ] = False,
    helm_namespace: Annotated[
        str,
        typer.Option(
            "--helm-namespace",
            envvar="INPUT_HELM_NAMESPACE",
            help="Registry path for charts under the owner (may contain '/')",
        ),
    ] = "",
    require_chart: Annotated[
        bool,
        typer.Option(
            "--require-chart",
            envvar="INPUT_REQUIRE_CHART",
            help="Fail when no chart is found",
        ),
    ] = False,
    token: Annotated[
        str | None,
        typer.Option(
            "--token",
            envvar="INPUT_TOKEN",
            help="Token for package visibility and git push (defaults to GITHUB_TOKEN)",
            show_default=False,
        ),
    ] = None,
    make_public: Annotated[
        bool,
        typer.Option(
            "--make-public",
            envvar="INPUT_MAKE_PUBLIC",
            help="Make published packages public",
        ),
    ] = False,
    git_push: Annotated[
        bool,
        typer.Option(
            "--git-push",
            envvar="INPUT_GIT_PUSH",
            help="Commit and push repository changes",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Resolve everything, publish nothing"),
    ] = False,
) -> None:
    """Build and push the image, then package and push its Helm chart(s)."""
    cli = get_cli_context(ctx)
    cli.console.print_header("🚀 OCI Publish")

    settings = PublishSettings.from_environment(
        dotenv_path=cli.project_root / ".env",
        project_root=cli.project_root,
        image_name=image_name,
        version=version,
        registry=registry,
        username=username,
        additional_tags=additional_tags,
        version_breakdown=version_breakdown,
        dockerfile=dockerfile,
        context=context,
        platforms=platforms,
        build_args=build_args,
        cache=cache,
        chart_path=chart_path,
        push_helm=push_helm,
        helm_strip_suffix=helm_strip_suffix,
        app_version_strip_suffix=app_version_strip_suffix,
        helm_namespace=helm_namespace,
        require_chart=require_chart,
        token=token,
        make_public=make_public,
        git_push=git_push,
        dry_run=dry_run,
    )

    result = PublishOrchestrator(settings, console=cli.console).run()
    cli.console.print(_render_result(result))


def tags(
    version: Annotated[str, typer.Argument(help="Version string, e.g. v1.2.3-rc.1")],
    additional_tags: Annotated[
        str,
        typer.Option("--additional-tags", help="Extra tags, comma-separated"),
    ] = "",
    breakdown: Annotated[
        bool,
        typer.Option("--breakdown/--no-breakdown", help="Also tag MAJOR.MINOR and MAJOR"),
    ] = True,
    helm_strip_suffix: Annotated[
        bool,
        typer.Option("--helm-strip-suffix", help="Strip suffix from chart version"),
    ] = False,
    app_version_strip_suffix: Annotated[
        bool,
        typer.Option("--app-version-strip-suffix", help="Strip suffix from appVersion"),
    ] = False,
) -> None:
    """Show the tags and chart versions a version string resolves to."""
    cli = get_cli_context()
    parsed = parse_version(version)
    helm = helm_version_spec(
        parsed,
        strip_helm_suffix=helm_strip_suffix,
        strip_app_suffix=app_version_strip_suffix,
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("Output")
    table.add_column("Value")
    for tag in docker_tags(parsed, additional_tags, breakdown=breakdown):
        table.add_row("image tag", tag)
    table.add_row("chart version", helm.chart_version)
    table.add_row("app version", helm.app_version)
    if not parsed.is_semantic:
        cli.console.warn(f"'{version}' is not a semantic version, used verbatim")
    cli.console.print(table)


def charts(
    chart_path: Annotated[Path, typer.Argument(help="Chart directory to inspect")],
    image_name: Annotated[
        str,
        typer.Option("--image-name", help="Chart name used in single-chart mode"),
    ],
    registry: Annotated[str, typer.Option("--registry", help="Registry host")] = "ghcr.io",
    username: Annotated[str, typer.Option("--username", help="Registry owner")] = "owner",
    namespace: Annotated[
        str, typer.Option("--namespace", help="Chart namespace under the owner")
    ] = "",
) -> None:
    """List the charts found under a directory and where they would be pushed."""
    cli = get_cli_context()
    entries = discover_charts(chart_path, image_name)
    if not entries:
        cli.console.warn(f"No charts found under {chart_path}")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Chart")
    table.add_column("Directory")
    table.add_column("OCI path")
    for entry in entries:
        target = resolve_chart_path(registry, username, namespace, entry.name)
        table.add_row(entry.name, str(entry.directory), target.oci_path)
    cli.console.print(table)
