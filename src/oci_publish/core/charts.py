"""Helm chart discovery.

A chart root is either a chart itself (single-chart mode) or a directory
whose immediate subdirectories are charts (multi-chart mode). Manifests
nested deeper than one level are not discovered.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

CHART_MANIFEST = "Chart.yaml"

FileExistsCheck = Callable[[Path], bool]
SubdirLister = Callable[[Path], Sequence[Path]]


@dataclass(frozen=True)
class ChartEntry:
    """A chart to package and push.

    Attributes:
        name: Chart name used in the registry path
        directory: Chart root directory (contains Chart.yaml)
    """

    name: str
    directory: Path


def path_is_file(path: Path) -> bool:
    return path.is_file()


def sorted_subdirectories(path: Path) -> list[Path]:
    """Immediate subdirectories of ``path`` by name; empty if it is missing."""
    if not path.is_dir():
        return []
    return sorted(child for child in path.iterdir() if child.is_dir())


def discover_charts(
    chart_root: Path,
    image_name: str,
    file_exists: FileExistsCheck = path_is_file,
    list_subdirs: SubdirLister = sorted_subdirectories,
) -> list[ChartEntry]:
    """Classify ``chart_root`` and list the charts it holds.

    Args:
        chart_root: Directory to inspect
        image_name: Chart name to use in single-chart mode
        file_exists: Callable telling whether a file exists
        list_subdirs: Callable listing immediate subdirectories, in the
                      order entries should be returned

    Returns:
        One entry named ``image_name`` if ``chart_root`` holds a manifest,
        otherwise one entry per subdirectory holding a manifest. Names are
        lower-cased for use in OCI references. An empty
        list means there is nothing to publish, which is not an error here.
    """
    chart_root = Path(chart_root)
    if file_exists(chart_root / CHART_MANIFEST):
        return [ChartEntry(name=image_name.lower(), directory=chart_root)]

    return [
        ChartEntry(name=subdir.name.lower(), directory=subdir)
        for subdir in list_subdirs(chart_root)
        if file_exists(subdir / CHART_MANIFEST)
    ]
