"""Version string parsing.

A raw version either matches ``[v]MAJOR.MINOR.PATCH[-SUFFIX]`` and becomes a
:class:`SemanticVersion`, or is kept verbatim as an :class:`OpaqueVersion`
(branch names, commit-based refs such as ``main-abc123``). Neither case is
an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

SEMVER_PATTERN: re.Pattern[str] = re.compile(
    r"(?P<prefix>v)?(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)(?P<suffix>-.*)?"
)


@dataclass(frozen=True)
class SemanticVersion:
    """A version with a numeric breakdown.

    Attributes:
        has_prefix: Whether the input started with a literal ``v``
        major: Major component
        minor: Minor component
        patch: Patch component
        suffix: Everything from the first ``-`` onward, or ``""``
    """

    has_prefix: bool
    major: int
    minor: int
    patch: int
    suffix: str = ""

    is_semantic = True

    @property
    def prefix(self) -> str:
        return "v" if self.has_prefix else ""

    @property
    def core(self) -> str:
        """``MAJOR.MINOR.PATCH`` without prefix or suffix."""
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return f"{self.prefix}{self.core}{self.suffix}"


@dataclass(frozen=True)
class OpaqueVersion:
    """A version string with no semantic structure, kept verbatim."""

    raw: str

    is_semantic = False

    def __str__(self) -> str:
        return self.raw


ParsedVersion = SemanticVersion | OpaqueVersion


def parse_version(raw: str) -> ParsedVersion:
    """Parse a raw version string.

    Args:
        raw: Version as supplied by the user or the CI ref (e.g. "v1.2.3-rc-1")

    Returns:
        SemanticVersion when the string matches the semantic pattern,
        OpaqueVersion otherwise

    Example:
        >>> parse_version("v1.2.3-rc-1")
        SemanticVersion(has_prefix=True, major=1, minor=2, patch=3, suffix='-rc-1')
        >>> parse_version("main-abc123")
        OpaqueVersion(raw='main-abc123')
    """
    match = SEMVER_PATTERN.fullmatch(raw)
    if match is None:
        return OpaqueVersion(raw=raw)

    return SemanticVersion(
        has_prefix=match.group("prefix") is not None,
        major=int(match.group("major")),
        minor=int(match.group("minor")),
        patch=int(match.group("patch")),
        suffix=match.group("suffix") or "",
    )
