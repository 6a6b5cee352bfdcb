"""Unit tests for tag fan-out and Helm version derivation."""

import pytest

from oci_publish.core.tags import (
    docker_tags,
    helm_app_version,
    helm_version,
    helm_version_spec,
    split_additional_tags,
)
from oci_publish.core.version import parse_version


class TestDockerTags:
    """Tests for docker_tags."""

    def test_breakdown_keeps_prefix_and_suffix(self) -> None:
        """v1.2.3-dev fans out to full, major.minor and major tags."""
        assert docker_tags(parse_version("v1.2.3-dev")) == [
            "v1.2.3-dev",
            "v1.2-dev",
            "v1-dev",
        ]

    def test_breakdown_without_prefix(self) -> None:
        """The v prefix is never added when the input lacks it."""
        assert docker_tags(parse_version("1.2.3-dev")) == [
            "1.2.3-dev",
            "1.2-dev",
            "1-dev",
        ]

    def test_no_breakdown_yields_full_tag_only(self) -> None:
        """Without breakdown only the full version is tagged."""
        assert docker_tags(parse_version("v1.2.3"), breakdown=False) == ["v1.2.3"]

    def test_additional_tags_follow_breakdown(self) -> None:
        """Extra tags are trimmed, blanks dropped, and appended in order."""
        tags = docker_tags(parse_version("v1.2.3"), " latest, ,stable ,")

        assert tags == ["v1.2.3", "v1.2", "v1", "latest", "stable"]

    def test_additional_tags_are_not_deduplicated(self) -> None:
        """A colliding extra tag passes through unchanged."""
        tags = docker_tags(parse_version("v1.2.3"), "v1")

        assert tags == ["v1.2.3", "v1.2", "v1", "v1"]

    def test_opaque_version_yields_raw_tag(self) -> None:
        """Non-semantic input is a single tag plus additional tags."""
        tags = docker_tags(parse_version("main-abc123"), "edge")

        assert tags == ["main-abc123", "edge"]

    def test_opaque_version_ignores_breakdown(self) -> None:
        """Breakdown has no meaning for opaque input."""
        assert docker_tags(parse_version("v1.2"), breakdown=True) == ["v1.2"]


class TestHelmVersions:
    """Tests for chart version and appVersion derivation."""

    def test_strip_suffix(self) -> None:
        """The chart version loses its suffix when stripping is on."""
        parsed = parse_version("v1.2.3-dev")

        assert helm_version(parsed, strip_helm_suffix=True) == "1.2.3"
        assert helm_version(parsed, strip_helm_suffix=False) == "1.2.3-dev"

    def test_strip_truncates_at_first_hyphen(self) -> None:
        """Multi-hyphen suffixes are removed as a whole."""
        assert helm_version(parse_version("v1.2.3-rc-1"), True) == "1.2.3"

    def test_prefix_always_removed(self) -> None:
        """Chart versions never carry the v prefix."""
        assert helm_version(parse_version("v2.0.0")) == "2.0.0"
        assert helm_app_version(parse_version("v2.0.0")) == "2.0.0"

    def test_app_version_defaults_to_keeping_suffix(self) -> None:
        """appVersion keeps the suffix unless told otherwise."""
        assert helm_app_version(parse_version("v1.2.3-dev")) == "1.2.3-dev"

    @pytest.mark.parametrize("strip_helm", [True, False])
    @pytest.mark.parametrize("strip_app", [True, False])
    def test_flags_are_independent(self, strip_helm: bool, strip_app: bool) -> None:
        """Toggling one flag never changes the other output."""
        parsed = parse_version("v1.2.3-dev")
        spec = helm_version_spec(
            parsed, strip_helm_suffix=strip_helm, strip_app_suffix=strip_app
        )

        assert spec.chart_version == ("1.2.3" if strip_helm else "1.2.3-dev")
        assert spec.app_version == ("1.2.3" if strip_app else "1.2.3-dev")

    def test_opaque_version_strips_leading_v_only(self) -> None:
        """Non-semantic input is used verbatim minus a leading v."""
        assert helm_version(parse_version("main-abc123"), True) == "main-abc123"
        assert helm_version(parse_version("vnext-1")) == "next-1"
        assert helm_app_version(parse_version("vnext-1"), True) == "next-1"


def test_split_additional_tags_handles_empty_input() -> None:
    """None and blank strings yield no tags."""
    assert split_additional_tags(None) == []
    assert split_additional_tags("  ") == []
