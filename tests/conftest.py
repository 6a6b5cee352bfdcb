"""Shared fixtures for oci-publish tests."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from oci_publish.config.settings import PublishSettings
from oci_publish.shell_commands import CommandResult

# Keep CI-provided values from leaking into settings built by tests
for _variable in (
    "GITHUB_REPOSITORY_OWNER",
    "GITHUB_TOKEN",
    "GITHUB_REF_NAME",
    "GITHUB_REPOSITORY",
    "GITHUB_OUTPUT",
):
    os.environ.pop(_variable, None)


@pytest.fixture
def ok_result() -> CommandResult:
    return CommandResult(success=True, stdout="", stderr="", returncode=0)


@pytest.fixture
def mock_commands(ok_result: CommandResult) -> MagicMock:
    """Shell commands whose every call succeeds."""
    commands = MagicMock()
    commands.docker.buildx_build.return_value = ok_result
    commands.helm.dependency_build.return_value = ok_result
    commands.helm.package.return_value = ok_result
    commands.helm.push.return_value = ok_result
    commands.git.push_changes.return_value = ok_result
    commands.github.make_public.return_value = ok_result
    return commands


@pytest.fixture
def mock_console() -> MagicMock:
    return MagicMock()


@pytest.fixture
def make_settings(tmp_path: Path) -> Callable[..., PublishSettings]:
    """Factory for settings rooted in a temporary project."""

    def _make(**overrides: Any) -> PublishSettings:
        values: dict[str, Any] = {
            "registry": "ghcr.io",
            "username": "acme",
            "image_name": "api",
            "version": "v1.2.3-dev",
            "project_root": tmp_path,
            "ref_name": "main",
        }
        values.update(overrides)
        return PublishSettings(**values)

    return _make


def write_chart(directory: Path, name: str, extra: str = "") -> Path:
    """Create a minimal chart in ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / "Chart.yaml").write_text(
        f"apiVersion: v2\nname: {name}\nversion: 0.0.0\n{extra}"
    )
    return directory


@pytest.fixture
def chart_factory() -> Callable[..., Path]:
    return write_chart
