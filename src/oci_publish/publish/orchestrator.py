"""Publish orchestration.

This module provides the PublishOrchestrator which drives one publish run
through its states, strictly in order:

    init -> version-resolved -> args-resolved -> image-published
         -> charts-discovered -> charts-published -> visibility-applied -> done

Input problems (settings, build arguments) are raised before any external
call. A failing external call aborts the remaining states; artifacts pushed
before the failure stay published, and a re-run simply pushes them again.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from oci_publish.config.settings import PublishSettings
from oci_publish.constants import PublishConstants
from oci_publish.core.build_args import build_args_mapping, parse_build_args
from oci_publish.core.cache_key import compose_cache_key, read_chart_manifests
from oci_publish.core.charts import (
    ChartEntry,
    FileExistsCheck,
    SubdirLister,
    discover_charts,
    path_is_file,
    sorted_subdirectories,
)
from oci_publish.core.errors import (
    ChartNotFoundError,
    CollaboratorError,
    ConfigurationError,
)
from oci_publish.core.registry import (
    RegistryTarget,
    encode_package_path,
    resolve_chart_path,
    resolve_image_path,
)
from oci_publish.core.tags import docker_tags, helm_version_spec
from oci_publish.core.version import ParsedVersion, parse_version
from oci_publish.shell_commands import ShellCommands
from oci_publish.utils.console_like import ConsoleLike, coalesce_console

from .chart_publisher import ChartPublisher, ChartPublishResult
from .image_publisher import ImagePublisher
from .states import PublishState, StateMachine, StateTransition

__all__ = ["PublishOrchestrator", "PublishResult"]


@dataclass
class PublishResult:
    """Everything a publish run resolved and did.

    Attributes:
        version: Parsed input version
        image_path: Image reference without tag
        tags: Container tags in generation order
        helm_version: Chart version
        app_version: Chart appVersion
        chart_targets: Discovered charts mapped to their registry targets
        charts: Per-chart publish outcomes, in publish order
        image_published: Whether the image was built and pushed
        public_packages: Encoded package paths made public
        changes_pushed: Whether repository changes were pushed
        cache_key: Dependency cache key for the discovered charts
        history: State transitions, skipped ones included
    """

    version: ParsedVersion
    image_path: str
    tags: list[str]
    helm_version: str
    app_version: str
    chart_targets: dict[str, RegistryTarget] = field(default_factory=dict)
    charts: list[ChartPublishResult] = field(default_factory=list)
    image_published: bool = False
    public_packages: list[str] = field(default_factory=list)
    changes_pushed: bool = False
    cache_key: str = ""
    history: list[StateTransition] = field(default_factory=list)

    def outputs(self) -> dict[str, str]:
        """Step outputs as written to the CI output file."""
        return {
            "image": self.image_path,
            "tags": ",".join(self.tags),
            "helm-version": self.helm_version,
            "app-version": self.app_version,
            "charts": ",".join(self.chart_targets),
            "cache-key": self.cache_key,
        }


class PublishOrchestrator:
    """Runs one image-and-chart publish.

    Attributes:
        settings: Validated run settings
        commands: Shell command executor
        image_publisher: Image build/push collaborator
        chart_publisher: Chart package/push collaborator
    """

    def __init__(
        self,
        settings: PublishSettings,
        commands: ShellCommands | None = None,
        console: ConsoleLike | None = None,
        *,
        constants: PublishConstants | None = None,
        image_publisher: ImagePublisher | None = None,
        chart_publisher: ChartPublisher | None = None,
        file_exists: FileExistsCheck = path_is_file,
        list_subdirs: SubdirLister = sorted_subdirectories,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Validated run settings
            commands: Shell command executor (built from settings if omitted)
            console: Console for output (stdout fallback if omitted)
            constants: Optional publish constants
            image_publisher: Image collaborator override
            chart_publisher: Chart collaborator override
            file_exists: File existence check for chart discovery
            list_subdirs: Directory listing function for chart discovery
        """
        self.settings = settings
        self.console = coalesce_console(console)
        self.constants = constants or PublishConstants()
        self.commands = commands or ShellCommands(
            settings.project_root,
            github_api_url=settings.github_api_url,
            github_server_url=settings.github_server_url,
        )
        self.image_publisher = image_publisher or ImagePublisher(
            self.commands, self.console, self.constants
        )
        self.chart_publisher = chart_publisher or ChartPublisher(
            self.commands, self.console, self.constants
        )
        self._file_exists = file_exists
        self._list_subdirs = list_subdirs
        self._machine = StateMachine()

    @property
    def state(self) -> PublishState:
        return self._machine.current

    # =========================================================================
    # State handling
    # =========================================================================

    def _enter(self, state: PublishState) -> None:
        self._machine.advance(state)
        logger.info(f"State: {state.value}")

    def _skip(self, state: PublishState, reason: str) -> None:
        self._machine.advance(state, skipped=True, reason=reason)
        logger.info(f"State: {state.value} skipped ({reason})")
        self.console.print(f"[dim]⏭  Skipping {state.value}: {reason}[/dim]")

    def _check_side_effect_inputs(self) -> None:
        needs_token = []
        if self.settings.make_public:
            needs_token.append("make-public")
        if self.settings.git_push:
            needs_token.append("git-push")
        if needs_token and not self.settings.token_value:
            raise ConfigurationError(
                f"A token is required for {' and '.join(needs_token)}",
                details="Pass --token or set GITHUB_TOKEN.",
            )

    # =========================================================================
    # Public Interface
    # =========================================================================

    def run(self) -> PublishResult:
        """Execute the publish run.

        Returns:
            PublishResult describing what was resolved and published

        Raises:
            ConfigurationError: Settings unusable for the requested options
            MalformedBuildArgsError: build-args input is malformed
            ChartNotFoundError: No chart found while one is required
            CollaboratorError: An external build, push or API call failed
        """
        settings = self.settings
        self._check_side_effect_inputs()

        # Version
        parsed = parse_version(settings.version)
        helm = helm_version_spec(
            parsed,
            strip_helm_suffix=settings.helm_strip_suffix,
            strip_app_suffix=settings.app_version_strip_suffix,
        )
        result = PublishResult(
            version=parsed,
            image_path=resolve_image_path(
                settings.registry, settings.username, settings.image_name
            ),
            tags=docker_tags(
                parsed,
                settings.additional_tags,
                breakdown=settings.version_breakdown,
            ),
            helm_version=helm.chart_version,
            app_version=helm.app_version,
            history=self._machine.history,
        )
        if not parsed.is_semantic:
            logger.info(f"'{settings.version}' is not semantic, using it verbatim")
        self._enter(PublishState.VERSION_RESOLVED)
        self._print_resolution(result)

        # Build arguments
        build_args = build_args_mapping(parse_build_args(settings.build_args))
        logger.info(f"Resolved {len(build_args)} build arguments")
        self._enter(PublishState.ARGS_RESOLVED)

        # Chart discovery has no side effects and runs ahead of the image build
        charts = self._find_charts(result)
        self._publish_image(result, build_args)
        self._enter_discovered(charts)
        self._publish_charts(result, charts)
        self._apply_visibility(result)
        self._push_repository(result)

        self._enter(PublishState.DONE)
        self._write_outputs(result)
        self.console.ok("Publish complete")
        return result

    # =========================================================================
    # Steps
    # =========================================================================

    def _publish_image(self, result: PublishResult, build_args: dict[str, str]) -> None:
        settings = self.settings
        dockerfile = settings.resolve(settings.dockerfile)

        if not dockerfile.is_file():
            self._skip(PublishState.IMAGE_PUBLISHED, f"no Dockerfile at {dockerfile}")
            return
        if settings.dry_run:
            self._skip(PublishState.IMAGE_PUBLISHED, "dry run")
            return

        outcome = self.image_publisher.publish(
            dockerfile,
            settings.resolve(settings.context),
            image_path=result.image_path,
            tags=result.tags,
            platforms=settings.platforms,
            build_args=build_args,
            cache=settings.cache,
        )
        if not outcome.success:
            raise CollaboratorError(
                PublishState.IMAGE_PUBLISHED,
                f"Image build/push failed for {result.image_path}",
                details=outcome.stderr or None,
            )
        result.image_published = True
        self._enter(PublishState.IMAGE_PUBLISHED)

    def _find_charts(self, result: PublishResult) -> list[ChartEntry] | None:
        """Discover charts and resolve their targets; ``None`` when push-helm is off."""
        settings = self.settings

        if not settings.push_helm:
            return None

        chart_root = settings.resolve(settings.chart_path)
        charts = discover_charts(
            chart_root,
            settings.image_name,
            file_exists=self._file_exists,
            list_subdirs=self._list_subdirs,
        )
        if not charts and settings.require_chart:
            raise ChartNotFoundError(
                f"No Helm chart found under {chart_root}",
                details=(
                    f"Expected {self.constants.CHART_MANIFEST} in {chart_root} "
                    "or in one of its immediate subdirectories."
                ),
            )

        for chart in charts:
            result.chart_targets[chart.name] = resolve_chart_path(
                settings.registry,
                settings.username,
                settings.helm_namespace,
                chart.name,
            )
        result.cache_key = compose_cache_key(
            settings.runner_os,
            settings.ref_name or settings.version,
            read_chart_manifests(
                [chart.directory for chart in charts],
                settings.project_root,
                self.constants.cache_manifests,
            ),
        )
        single = len(charts) == 1 and charts[0].directory == chart_root
        logger.info(
            f"Discovered {len(charts)} chart(s) in "
            f"{'single-chart' if single else 'multi-chart'} mode"
        )
        return charts

    def _enter_discovered(self, charts: list[ChartEntry] | None) -> None:
        if charts is None:
            self._skip(PublishState.CHARTS_DISCOVERED, "push-helm disabled")
        else:
            self._enter(PublishState.CHARTS_DISCOVERED)

    def _publish_charts(
        self, result: PublishResult, charts: list[ChartEntry] | None
    ) -> None:
        if charts is None:
            self._skip(PublishState.CHARTS_PUBLISHED, "push-helm disabled")
            return
        if not charts:
            self._skip(PublishState.CHARTS_PUBLISHED, "no charts found")
            return
        if self.settings.dry_run:
            self._skip(PublishState.CHARTS_PUBLISHED, "dry run")
            return

        for chart in charts:
            target = result.chart_targets[chart.name]
            outcome = self.chart_publisher.package_and_push(
                chart.directory,
                chart.name,
                result.helm_version,
                result.app_version,
                target,
            )
            result.charts.append(
                ChartPublishResult(
                    name=chart.name,
                    target=target,
                    version=result.helm_version,
                    success=outcome.success,
                )
            )
            if not outcome.success:
                self.console.error(f"Chart {chart.name} failed to publish")
                raise CollaboratorError(
                    PublishState.CHARTS_PUBLISHED,
                    f"Chart {chart.name} failed to package or push",
                    details=outcome.stderr or None,
                )
        self._enter(PublishState.CHARTS_PUBLISHED)

    def _apply_visibility(self, result: PublishResult) -> None:
        if not self.settings.make_public:
            self._skip(PublishState.VISIBILITY_APPLIED, "make-public disabled")
            return

        packages = []
        if result.image_published:
            packages.append(encode_package_path(self.settings.image_name))
        packages.extend(
            chart.target.url_encoded_path for chart in result.charts if chart.success
        )
        if not packages:
            self._skip(PublishState.VISIBILITY_APPLIED, "nothing was published")
            return

        token = self.settings.token_value
        for package in packages:
            outcome = self.commands.github.make_public(package, token)
            if not outcome.success:
                raise CollaboratorError(
                    PublishState.VISIBILITY_APPLIED,
                    f"Could not make package {package} public",
                    details=outcome.stderr or None,
                )
            result.public_packages.append(package)
            logger.info(f"Package {package} is public")
        self._enter(PublishState.VISIBILITY_APPLIED)

    def _push_repository(self, result: PublishResult) -> None:
        # Independent of image/chart publishing; runs on its own toggle
        if not self.settings.git_push:
            logger.info("Repository push skipped (git-push disabled)")
            self.console.print("[dim]⏭  Skipping repository push: git-push disabled[/dim]")
            return
        if self.settings.dry_run:
            logger.info("Repository push skipped (dry run)")
            return

        outcome = self.commands.git.push_changes(
            self.settings.token_value, ref=self.settings.ref_name or None
        )
        if not outcome.success:
            raise CollaboratorError(
                PublishState.DONE,
                "Repository push failed",
                details=outcome.stderr or None,
            )
        result.changes_pushed = True
        self.console.print("[green]✓ Repository changes pushed[/green]")

    # =========================================================================
    # Output
    # =========================================================================

    def _print_resolution(self, result: PublishResult) -> None:
        self.console.info(f"Image: {result.image_path}")
        self.console.info(f"Tags: {', '.join(result.tags)}")
        self.console.info(
            f"Chart version: {result.helm_version} (appVersion {result.app_version})"
        )

    def _write_outputs(self, result: PublishResult) -> None:
        output_file: Path | None = self.settings.output_file
        if output_file is None:
            return
        with open(output_file, "a", encoding="utf-8") as f:
            for key, value in result.outputs().items():
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")
        logger.debug(f"Wrote step outputs to {output_file}")
