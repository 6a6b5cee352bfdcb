"""Build-argument marshalling.

Input is a JSON array of ``KEY=VALUE`` strings. Values are opaque: they may
carry secrets, so nothing here logs, validates or echoes them.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field

from .errors import InvalidEntryError, MalformedInputError

_KEY_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_.-]*")

# Values reach docker through its own environment, so these keys would
# reconfigure the docker CLI instead of the build
RESERVED_KEYS = frozenset({"PATH", "HOME", "LD_PRELOAD", "LD_LIBRARY_PATH"})
RESERVED_KEY_PREFIXES = ("DOCKER_", "BUILDX_")


def is_reserved_key(key: str) -> bool:
    upper = key.upper()
    return upper in RESERVED_KEYS or upper.startswith(RESERVED_KEY_PREFIXES)


@dataclass(frozen=True)
class BuildArg:
    key: str
    value: str = field(repr=False)


def parse_build_args(json_array_text: str | None) -> list[BuildArg]:
    """Parse a JSON array of ``KEY=VALUE`` strings.

    The key is everything before the first ``=``; the value is everything
    after it, further ``=`` characters included. ``"[]"`` and empty input
    yield no arguments.

    Args:
        json_array_text: Raw build-args input

    Returns:
        Build arguments in input order

    Raises:
        MalformedInputError: If the text is not a JSON array of strings
        InvalidEntryError: If an entry has no ``=``, an unusable key, or a
                           key reserved for the docker CLI environment
    """
    if json_array_text is None or not json_array_text.strip():
        return []

    try:
        entries = json.loads(json_array_text)
    except json.JSONDecodeError as e:
        # e.doc would echo the input back; keep only the position
        raise MalformedInputError(
            "build-args is not valid JSON",
            details=f"Parse error at line {e.lineno}, column {e.colno}: {e.msg}",
        ) from None

    if not isinstance(entries, list) or not all(isinstance(x, str) for x in entries):
        raise MalformedInputError(
            "build-args must be a JSON array of strings",
            details='Example: ["NODE_ENV=production", "API_URL=https://example.com"]',
        )

    args: list[BuildArg] = []
    for index, entry in enumerate(entries):
        key, sep, value = entry.partition("=")
        if not sep or not _KEY_PATTERN.fullmatch(key):
            raise InvalidEntryError(index)
        if is_reserved_key(key):
            raise InvalidEntryError(
                index,
                reason="PATH, HOME, LD_PRELOAD, LD_LIBRARY_PATH, DOCKER_* and "
                "BUILDX_* are reserved for the docker CLI environment.",
            )
        args.append(BuildArg(key=key, value=value))
    return args


def build_args_mapping(args: list[BuildArg]) -> dict[str, str]:
    """Collapse parsed arguments into a mapping; later keys win."""
    return {arg.key: arg.value for arg in args}
