"""Data models for build numbers and compatibility ranges."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .errors import MalformedVersionError, RangeInversionError

WILDCARD = "*"

# A BUILD or FIX segment: an integer, WILDCARD, or None when not declared.
Segment = Optional[Union[int, str]]


def _segment_key(segment: Segment) -> float:
    """Absent segments order as 0, wildcards as +infinity."""
    if segment is None:
        return 0
    if segment == WILDCARD:
        return math.inf
    return segment


@dataclass(frozen=True)
class BuildNumber:
    """IntelliJ Platform build number ``BRANCH[.BUILD[.FIX]]``.

    ``branch`` is always concrete. ``build`` and ``fix`` are None when the
    segment was not declared and WILDCARD when it was declared as ``*``;
    a wildcard is always the last declared segment.
    """
    branch: int
    build: Segment = None
    fix: Segment = None

    def __post_init__(self):
        if not isinstance(self.branch, int) or isinstance(self.branch, bool) or self.branch < 0:
            raise MalformedVersionError(self.branch, "branch must be a non-negative integer")
        if self.build is None and self.fix is not None:
            raise MalformedVersionError(self, "fix segment declared without build segment")
        if self.build == WILDCARD and self.fix is not None:
            raise MalformedVersionError(self, "wildcard must be the last segment")

    @property
    def segments(self) -> Tuple[Union[int, str], ...]:
        """Declared segments, in order."""
        return tuple(s for s in (self.branch, self.build, self.fix) if s is not None)

    @property
    def has_wildcard(self) -> bool:
        return WILDCARD in (self.build, self.fix)

    def sort_key(self) -> Tuple[float, float, float]:
        """Total ordering key, lexicographic by (branch, build, fix)."""
        return (self.branch, _segment_key(self.build), _segment_key(self.fix))

    def __str__(self) -> str:
        return ".".join(str(s) for s in self.segments)


def compare(left: BuildNumber, right: BuildNumber) -> int:
    """Return -1, 0 or 1 as left orders below, equal to, or above right."""
    lk, rk = left.sort_key(), right.sort_key()
    if lk < rk:
        return -1
    if lk > rk:
        return 1
    return 0


@dataclass(frozen=True)
class CompatibilityRange:
    """Inclusive build range a plugin declares support for.

    ``upper`` is None when the range is open-ended.
    """
    lower: BuildNumber
    upper: Optional[BuildNumber] = None

    def __post_init__(self):
        if self.lower.has_wildcard:
            raise MalformedVersionError(str(self.lower), "wildcards are not allowed in sinceBuild")
        if self.upper is not None and compare(self.lower, self.upper) > 0:
            raise RangeInversionError(str(self.lower), str(self.upper))

    @property
    def is_bounded(self) -> bool:
        return self.upper is not None

    @property
    def since_build(self) -> str:
        return str(self.lower)

    @property
    def until_build(self) -> Optional[str]:
        return None if self.upper is None else str(self.upper)

    def contains(self, build_number: BuildNumber) -> bool:
        """True when build_number lies inside the bounds (open upper edge included)."""
        if compare(build_number, self.lower) < 0:
            return False
        return self.upper is None or compare(build_number, self.upper) <= 0

    def to_dict(self):
        return {"sinceBuild": self.since_build, "untilBuild": self.until_build}

    def __str__(self) -> str:
        return f"{self.since_build} .. {self.until_build or '(unbounded)'}"
