"""Publish configuration."""

from .settings import AMBIENT_ENVIRONMENT, PublishSettings

__all__ = ["AMBIENT_ENVIRONMENT", "PublishSettings"]
