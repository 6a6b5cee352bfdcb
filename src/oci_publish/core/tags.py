"""Container tag fan-out and Helm version derivation."""

from __future__ import annotations

from dataclasses import dataclass

from .version import OpaqueVersion, ParsedVersion, SemanticVersion


@dataclass(frozen=True)
class HelmVersionSpec:
    """Chart ``version`` and ``appVersion`` for one publish run."""

    chart_version: str
    app_version: str


def split_additional_tags(csv: str | None) -> list[str]:
    """Split a comma-separated tag list, dropping blank entries."""
    if not csv:
        return []
    return [tag.strip() for tag in csv.split(",") if tag.strip()]


def docker_tags(
    parsed: ParsedVersion,
    additional_tags_csv: str | None = None,
    *,
    breakdown: bool = True,
) -> list[str]:
    """Expand a parsed version into the ordered list of container tags.

    Semantic versions yield ``full``, ``major.minor`` and ``major`` tags when
    ``breakdown`` is set, each keeping the input's ``v`` prefix (if any) and
    suffix. Opaque versions yield the raw string. Additional tags follow,
    unmodified and without de-duplication.

    Args:
        parsed: Result of :func:`parse_version`
        additional_tags_csv: Extra tags, comma-separated
        breakdown: Whether to emit the truncated tags

    Returns:
        Tags in generation order

    Example:
        >>> docker_tags(parse_version("v1.2.3-dev"), "latest")
        ['v1.2.3-dev', 'v1.2-dev', 'v1-dev', 'latest']
    """
    if isinstance(parsed, OpaqueVersion):
        tags = [parsed.raw]
    else:
        tags = [str(parsed)]
        if breakdown:
            tags.append(f"{parsed.prefix}{parsed.major}.{parsed.minor}{parsed.suffix}")
            tags.append(f"{parsed.prefix}{parsed.major}{parsed.suffix}")

    tags.extend(split_additional_tags(additional_tags_csv))
    return tags


def _unprefixed(parsed: ParsedVersion, strip_suffix: bool) -> str:
    if isinstance(parsed, SemanticVersion):
        version = f"{parsed.core}{parsed.suffix}"
        # Truncate at the first hyphen; "-rc-1" goes away as a whole
        return version.split("-", 1)[0] if strip_suffix else version
    return parsed.raw.removeprefix("v")


def helm_version(parsed: ParsedVersion, strip_helm_suffix: bool = False) -> str:
    """Chart version: never prefixed, suffix kept unless stripped."""
    return _unprefixed(parsed, strip_helm_suffix)


def helm_app_version(parsed: ParsedVersion, strip_app_suffix: bool = False) -> str:
    """Chart appVersion, controlled independently of the chart version."""
    return _unprefixed(parsed, strip_app_suffix)


def helm_version_spec(
    parsed: ParsedVersion,
    *,
    strip_helm_suffix: bool = False,
    strip_app_suffix: bool = False,
) -> HelmVersionSpec:
    return HelmVersionSpec(
        chart_version=helm_version(parsed, strip_helm_suffix),
        app_version=helm_app_version(parsed, strip_app_suffix),
    )
