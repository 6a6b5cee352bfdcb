"""Unit tests for chart discovery."""

from collections.abc import Callable
from pathlib import Path

from oci_publish.core.charts import ChartEntry, discover_charts, sorted_subdirectories


class TestDiscoverChartsOnDisk:
    """Discovery against a real temporary directory."""

    def test_root_manifest_is_single_chart_mode(
        self, tmp_path: Path, chart_factory: Callable[..., Path]
    ) -> None:
        """A root Chart.yaml wins over charts in subdirectories."""
        root = chart_factory(tmp_path / "helm", "whatever")
        chart_factory(root / "sub", "sub")

        entries = discover_charts(root, "api")

        assert entries == [ChartEntry(name="api", directory=root)]

    def test_subdirectories_are_multi_chart_mode(
        self, tmp_path: Path, chart_factory: Callable[..., Path]
    ) -> None:
        """Each subdirectory with a manifest is one chart named after it."""
        root = tmp_path / "charts"
        chart_factory(root / "app-b", "app-b")
        chart_factory(root / "app-a", "app-a")
        (root / "docs").mkdir()

        entries = discover_charts(root, "api")

        assert [e.name for e in entries] == ["app-a", "app-b"]
        assert entries[0].directory == root / "app-a"

    def test_nested_manifests_are_not_discovered(
        self, tmp_path: Path, chart_factory: Callable[..., Path]
    ) -> None:
        """Only the root of each immediate subdirectory is checked."""
        root = tmp_path / "charts"
        chart_factory(root / "group" / "deep", "deep")

        assert discover_charts(root, "api") == []

    def test_missing_root_yields_nothing(self, tmp_path: Path) -> None:
        """A missing chart path is a skip, not an error."""
        assert discover_charts(tmp_path / "missing", "api") == []

    def test_empty_root_yields_nothing(self, tmp_path: Path) -> None:
        """A directory without charts yields no entries."""
        (tmp_path / "helm").mkdir()

        assert discover_charts(tmp_path / "helm", "api") == []


class TestDiscoverChartsWithInjectedFilesystem:
    """Discovery with injected filesystem callables."""

    def test_enumeration_order_comes_from_listing(self) -> None:
        """Entries follow the order the listing function returns."""
        root = Path("/repo/charts")
        manifests = {root / "zeta" / "Chart.yaml", root / "alpha" / "Chart.yaml"}

        entries = discover_charts(
            root,
            "api",
            file_exists=lambda p: p in manifests,
            list_subdirs=lambda p: [p / "zeta", p / "none", p / "alpha"],
        )

        assert entries == [
            ChartEntry("zeta", root / "zeta"),
            ChartEntry("alpha", root / "alpha"),
        ]

    def test_single_chart_mode_does_not_list_subdirectories(self) -> None:
        """The root manifest short-circuits enumeration."""
        root = Path("/repo/helm")
        listed: list[Path] = []

        def _list(path: Path) -> list[Path]:
            listed.append(path)
            return []

        entries = discover_charts(
            root, "api", file_exists=lambda p: p == root / "Chart.yaml", list_subdirs=_list
        )

        assert entries == [ChartEntry("api", root)]
        assert listed == []


def test_sorted_subdirectories_skips_files(tmp_path: Path) -> None:
    """Only directories are listed, sorted by name."""
    (tmp_path / "b").mkdir()
    (tmp_path / "a").mkdir()
    (tmp_path / "file.txt").write_text("")

    assert sorted_subdirectories(tmp_path) == [tmp_path / "a", tmp_path / "b"]


def test_chart_names_are_lowercased(tmp_path: Path, chart_factory: Callable[..., Path]) -> None:
    """Directory names become valid lower-case OCI names."""
    chart_factory(tmp_path / "charts" / "App-A", "App-A")

    entries = discover_charts(tmp_path / "charts", "api")

    assert entries == [ChartEntry("app-a", tmp_path / "charts" / "App-A")]
