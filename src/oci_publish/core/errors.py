"""Error kinds raised while resolving inputs and publishing artifacts.

Input errors (configuration, build arguments) are raised before any
external side effect. Collaborator errors abort the remaining publish
states without rolling back what was already pushed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oci_publish.publish.states import PublishState


class PublishError(Exception):
    """Base class for every fatal publish condition."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(PublishError):
    """Raised when the publish settings fail validation."""


class MalformedBuildArgsError(PublishError):
    """Raised when the build-args input cannot be turned into KEY=VALUE pairs."""


class MalformedInputError(MalformedBuildArgsError):
    """Raised when build-args text is not a JSON array of strings."""


class InvalidEntryError(MalformedBuildArgsError):
    """Raised when a build-args entry has no '=' separator or an unusable key.

    Only the position of the entry is reported. The entry itself may
    carry secret material.
    """

    def __init__(self, index: int, reason: str | None = None):
        self.index = index
        super().__init__(
            f"Build argument #{index} is not in KEY=VALUE form",
            details=reason or "Each entry of build-args must contain '='.",
        )


class ChartNotFoundError(PublishError):
    """Raised when a chart is required but discovery found none."""


class CollaboratorError(PublishError):
    """Raised when an external build, push or API call reports failure."""

    def __init__(
        self,
        stage: PublishState,
        message: str,
        details: str | None = None,
    ):
        self.stage = stage
        super().__init__(f"[{stage.value}] {message}", details=details)
