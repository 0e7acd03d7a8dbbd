"""Version-lag classification between a declared and a latest version."""

import re
from typing import Optional

from dep_inspector.models import VersionDiff

_RANGE_PREFIX = re.compile(r"[\^~]")
_NUMERIC = re.compile(r"\d+")


def strip_range_prefix(declared: str) -> str:
    """Drop the first ``^`` or ``~`` from a declared range.

    Only one character is removed; any other operator (``>=``, ``*``, ...)
    is left in place and will simply parse as an unknown component.
    """
    return _RANGE_PREFIX.sub("", declared, count=1)


def _components(version: str) -> tuple[Optional[int], Optional[int]]:
    """Parse (major, minor); ``None`` marks a missing or non-numeric segment."""
    parts = version.split(".")
    parsed: list[Optional[int]] = []
    for segment in parts[:2]:
        parsed.append(int(segment) if _NUMERIC.fullmatch(segment) else None)
    while len(parsed) < 2:
        parsed.append(None)
    return parsed[0], parsed[1]


def _differs(a: Optional[int], b: Optional[int]) -> bool:
    # Unknown components never compare equal, not even to each other.
    return a is None or b is None or a != b


def classify_version_diff(current: str, latest: str) -> VersionDiff:
    """Classify how far ``current`` lags ``latest``.

    Only major and minor are compared numerically; anything else that
    differs between the two strings counts as a patch difference.
    """
    if current == latest:
        return VersionDiff.up_to_date

    cur_major, cur_minor = _components(current)
    lat_major, lat_minor = _components(latest)
    if _differs(cur_major, lat_major):
        return VersionDiff.major
    if _differs(cur_minor, lat_minor):
        return VersionDiff.minor
    return VersionDiff.patch
