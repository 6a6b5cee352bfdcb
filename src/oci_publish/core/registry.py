"""OCI path composition for images and charts."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

OCI_SCHEME = "oci://"


@dataclass(frozen=True)
class RegistryTarget:
    """Where a chart is pushed.

    Attributes:
        oci_path: ``oci://host/owner[/namespace]/name``
        url_encoded_path: ``[namespace/]name`` with every ``/`` as ``%2F``,
                          for package API calls only
    """

    oci_path: str
    url_encoded_path: str

    @property
    def repository(self) -> str:
        """The OCI path without the trailing chart name (``helm push`` target)."""
        return self.oci_path.rsplit("/", 1)[0]


def encode_package_path(path: str) -> str:
    """Percent-encode a package path for use as a single URL segment."""
    return quote(path, safe="")


def resolve_image_path(registry: str, username: str, image_name: str) -> str:
    """Image repository reference without tag, e.g. ``ghcr.io/acme/api``."""
    return f"{registry}/{username}/{image_name}"


def resolve_chart_path(
    registry: str,
    username: str,
    namespace: str,
    chart_name: str,
) -> RegistryTarget:
    """Compute the chart's OCI path and its API-encoded package path.

    Args:
        registry: Registry host (e.g. "ghcr.io")
        username: Owner segment
        namespace: Optional path under the owner; may contain ``/``
        chart_name: Chart name

    Returns:
        RegistryTarget for the chart

    Example:
        >>> resolve_chart_path("ghcr.io", "acme", "helm/packages", "api")
        RegistryTarget(oci_path='oci://ghcr.io/acme/helm/packages/api', url_encoded_path='helm%2Fpackages%2Fapi')
    """
    namespace = namespace.strip("/")
    package_path = f"{namespace}/{chart_name}" if namespace else chart_name
    return RegistryTarget(
        oci_path=f"{OCI_SCHEME}{registry}/{username}/{package_path}",
        url_encoded_path=encode_package_path(package_path),
    )
