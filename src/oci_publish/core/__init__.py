"""Pure version, tag, path and discovery logic. No side effects."""

from .build_args import BuildArg, build_args_mapping, parse_build_args
from .cache_key import compose_cache_key, read_chart_manifests
from .charts import CHART_MANIFEST, ChartEntry, discover_charts
from .errors import (
    ChartNotFoundError,
    CollaboratorError,
    ConfigurationError,
    InvalidEntryError,
    MalformedBuildArgsError,
    MalformedInputError,
    PublishError,
)
from .registry import RegistryTarget, resolve_chart_path, resolve_image_path
from .tags import (
    HelmVersionSpec,
    docker_tags,
    helm_app_version,
    helm_version,
    helm_version_spec,
)
from .version import OpaqueVersion, ParsedVersion, SemanticVersion, parse_version

__all__ = [
    "BuildArg",
    "CHART_MANIFEST",
    "ChartEntry",
    "ChartNotFoundError",
    "CollaboratorError",
    "ConfigurationError",
    "HelmVersionSpec",
    "InvalidEntryError",
    "MalformedBuildArgsError",
    "MalformedInputError",
    "OpaqueVersion",
    "ParsedVersion",
    "PublishError",
    "RegistryTarget",
    "SemanticVersion",
    "build_args_mapping",
    "compose_cache_key",
    "discover_charts",
    "docker_tags",
    "helm_app_version",
    "helm_version",
    "helm_version_spec",
    "parse_build_args",
    "parse_version",
    "read_chart_manifests",
    "resolve_chart_path",
    "resolve_image_path",
]
