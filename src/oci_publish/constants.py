"""Publish constants.

This module centralizes the magic strings and defaults used while
publishing images and charts.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PublishConstants:
    """Constants for image and chart publishing.

    All attributes are class-level and immutable.
    """

    # Registry defaults
    DEFAULT_REGISTRY: str = "ghcr.io"
    DEFAULT_PLATFORMS: tuple[str, ...] = ("linux/amd64",)

    # Project layout defaults
    DEFAULT_DOCKERFILE: str = "Dockerfile"
    DEFAULT_CONTEXT: str = "."
    DEFAULT_CHART_PATH: str = "helm"

    # Helm files
    CHART_MANIFEST: str = "Chart.yaml"
    CHART_LOCK: str = "Chart.lock"

    # buildx layer cache backend
    CACHE_FROM: str = "type=gha"
    CACHE_TO: str = "type=gha,mode=max"

    # GitHub endpoints
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_SERVER_URL: str = "https://github.com"

    @property
    def cache_manifests(self) -> tuple[str, ...]:
        """Files whose content feeds the dependency cache key."""
        return (self.CHART_MANIFEST, self.CHART_LOCK)
