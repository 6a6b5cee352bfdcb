"""Publish settings.

Every input a publish run needs is an explicit field of
:class:`PublishSettings`. Values the CI host injects ambiently (owner,
token, ref name) are read from the environment exactly once, in
:meth:`PublishSettings.from_environment`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError
from pydantic import field_validator, model_validator

from oci_publish.core.errors import ConfigurationError
from oci_publish.constants import PublishConstants

_CONSTANTS = PublishConstants()

# settings field -> CI environment variable supplying its default
AMBIENT_ENVIRONMENT: dict[str, str] = {
    "username": "GITHUB_REPOSITORY_OWNER",
    "token": "GITHUB_TOKEN",
    "ref_name": "GITHUB_REF_NAME",
    "repository": "GITHUB_REPOSITORY",
    "runner_os": "RUNNER_OS",
    "output_file": "GITHUB_OUTPUT",
    "github_api_url": "GITHUB_API_URL",
    "github_server_url": "GITHUB_SERVER_URL",
}


class PublishSettings(BaseModel):
    """Validated inputs of one publish run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Targets
    registry: str = _CONSTANTS.DEFAULT_REGISTRY
    username: str
    image_name: str
    version: str = ""

    # Image
    additional_tags: str = ""
    version_breakdown: bool = True
    dockerfile: Path = Path(_CONSTANTS.DEFAULT_DOCKERFILE)
    context: Path = Path(_CONSTANTS.DEFAULT_CONTEXT)
    platforms: tuple[str, ...] = _CONSTANTS.DEFAULT_PLATFORMS
    build_args: str = "[]"
    cache: bool = True

    # Charts
    chart_path: Path = Path(_CONSTANTS.DEFAULT_CHART_PATH)
    push_helm: bool = True
    helm_strip_suffix: bool = False
    app_version_strip_suffix: bool = False
    helm_namespace: str = ""
    require_chart: bool = False

    # Side effects
    token: SecretStr | None = None
    git_push: bool = False
    make_public: bool = False
    dry_run: bool = False

    # CI context
    ref_name: str = ""
    repository: str = ""
    runner_os: str = "Linux"
    output_file: Path | None = None
    github_api_url: str = _CONSTANTS.GITHUB_API_URL
    github_server_url: str = _CONSTANTS.GITHUB_SERVER_URL

    project_root: Path = Field(default_factory=Path.cwd)

    @field_validator("registry", "username", "image_name")
    @classmethod
    def _required_lowercase(cls, value: str) -> str:
        value = value.strip().strip("/")
        if not value:
            raise ValueError("must not be empty")
        # OCI repository names are lower-case
        return value.lower()

    @field_validator("platforms", mode="before")
    @classmethod
    def _split_platforms(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(p.strip() for p in value.split(",") if p.strip())
        return value

    @field_validator("helm_namespace")
    @classmethod
    def _trim_namespace(cls, value: str) -> str:
        return value.strip().strip("/")

    @model_validator(mode="before")
    @classmethod
    def _default_version_to_ref(cls, data: Any) -> Any:
        if isinstance(data, dict) and not str(data.get("version") or "").strip():
            ref_name = str(data.get("ref_name") or "").strip()
            if not ref_name:
                raise ValueError("version is empty and no ref name is available")
            data = {**data, "version": ref_name}
        return data

    @property
    def token_value(self) -> str:
        return self.token.get_secret_value() if self.token else ""

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the project root."""
        return path if path.is_absolute() else self.project_root / path

    @classmethod
    def from_environment(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        dotenv_path: Path | None = None,
        **overrides: Any,
    ) -> PublishSettings:
        """Build settings from explicit overrides plus CI defaults.

        Explicit values win; ``None`` overrides are ignored so CLI options
        left unset fall back to the environment.

        Args:
            environ: Environment to read (defaults to ``os.environ``)
            dotenv_path: Optional .env file loaded before reading
            **overrides: Field values supplied by the caller

        Returns:
            Validated settings

        Raises:
            ConfigurationError: If validation fails
        """
        if dotenv_path is not None and dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)
            logger.debug(f"Loaded environment from {dotenv_path}")

        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for field_name, variable in AMBIENT_ENVIRONMENT.items():
            if env.get(variable):
                values[field_name] = env[variable]
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid publish settings",
                details=_format_validation_error(e),
            ) from None


def _format_validation_error(error: ValidationError) -> str:
    # input values are left out, they may be secrets
    lines = []
    for item in error.errors(include_input=False, include_url=False):
        location = ".".join(str(part) for part in item["loc"]) or "settings"
        lines.append(f"{location}: {item['msg']}")
    return "\n".join(lines)
