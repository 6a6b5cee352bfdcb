"""Cache key derivation for chart dependency caches."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from pathlib import Path

CACHE_KEY_DIGEST_LENGTH = 16


def hash_manifests(manifests: Iterable[tuple[str, bytes]]) -> str:
    """Digest ``(relative_path, content)`` pairs in path order."""
    hasher = hashlib.sha256()
    for name, content in sorted(manifests):
        hasher.update(name.encode())
        hasher.update(b"\0")
        hasher.update(content)
        hasher.update(b"\0")
    return hasher.hexdigest()[:CACHE_KEY_DIGEST_LENGTH]


def compose_cache_key(
    runner_os: str,
    discriminator: str,
    manifests: Iterable[tuple[str, bytes]],
) -> str:
    """Build a deterministic cache key.

    Args:
        runner_os: Host OS name (e.g. "Linux")
        discriminator: Branch or ref name; keeps branches apart
        manifests: ``(relative_path, content)`` pairs of chart manifests

    Returns:
        Key of the form ``{runner_os}-helm-{discriminator}-{digest}``
    """
    safe_discriminator = discriminator.replace("/", "-") or "default"
    return f"{runner_os}-helm-{safe_discriminator}-{hash_manifests(manifests)}"


def read_chart_manifests(
    chart_dirs: Iterable[Path],
    root: Path,
    file_names: tuple[str, ...] = ("Chart.yaml", "Chart.lock"),
) -> list[tuple[str, bytes]]:
    """Collect manifest files of the given charts relative to ``root``."""
    manifests: list[tuple[str, bytes]] = []
    for chart_dir in chart_dirs:
        for file_name in file_names:
            path = Path(chart_dir) / file_name
            if path.is_file():
                try:
                    name = path.relative_to(root).as_posix()
                except ValueError:
                    name = path.as_posix()
                manifests.append((name, path.read_bytes()))
    return manifests
