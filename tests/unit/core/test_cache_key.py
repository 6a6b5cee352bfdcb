"""Unit tests for cache key composition."""

from collections.abc import Callable
from pathlib import Path

from oci_publish.core.cache_key import compose_cache_key, read_chart_manifests


class TestComposeCacheKey:
    """Tests for compose_cache_key."""

    def test_key_shape(self) -> None:
        """Key is os, 'helm', discriminator, digest."""
        key = compose_cache_key("Linux", "main", [("Chart.yaml", b"name: api")])

        runner_os, kind, branch, digest = key.split("-")
        assert (runner_os, kind, branch) == ("Linux", "helm", "main")
        assert len(digest) == 16

    def test_same_input_same_key(self) -> None:
        """Manifest order does not change the key."""
        a = [("a/Chart.yaml", b"1"), ("b/Chart.yaml", b"2")]

        assert compose_cache_key("Linux", "main", a) == compose_cache_key(
            "Linux", "main", list(reversed(a))
        )

    def test_content_changes_key(self) -> None:
        """Editing a manifest yields a new key."""
        before = compose_cache_key("Linux", "main", [("Chart.lock", b"v1")])
        after = compose_cache_key("Linux", "main", [("Chart.lock", b"v2")])

        assert before != after

    def test_discriminator_separates_branches(self) -> None:
        """Two branches never share a key."""
        manifests = [("Chart.yaml", b"name: api")]

        assert compose_cache_key("Linux", "main", manifests) != compose_cache_key(
            "Linux", "feature/x", manifests
        )

    def test_slashes_in_discriminator_are_flattened(self) -> None:
        """Branch names with '/' stay a single key segment."""
        key = compose_cache_key("Linux", "feature/x", [])

        assert key.startswith("Linux-helm-feature-x-")


def test_read_chart_manifests(tmp_path: Path, chart_factory: Callable[..., Path]) -> None:
    """Chart.yaml and Chart.lock are read relative to the root."""
    chart = chart_factory(tmp_path / "helm" / "api", "api")
    (chart / "Chart.lock").write_text("digest: sha256:abc\n")

    manifests = read_chart_manifests([chart], tmp_path)

    assert [name for name, _ in manifests] == [
        "helm/api/Chart.yaml",
        "helm/api/Chart.lock",
    ]
    assert manifests[1][1] == b"digest: sha256:abc\n"
