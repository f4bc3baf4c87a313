"""Parsing utilities for sinceBuild/untilBuild declarations."""

from typing import List, Optional

from .errors import EmptySinceBuildError, MalformedVersionError
from .models import WILDCARD, BuildNumber, CompatibilityRange

MAX_SEGMENTS = 3


def _parse_segment(raw: str, segment: str, is_last: bool, allow_wildcard: bool):
    """Convert one dot-separated segment to an int or WILDCARD."""
    if segment == WILDCARD:
        if not allow_wildcard:
            raise MalformedVersionError(raw, "wildcards are only allowed in untilBuild")
        if not is_last:
            raise MalformedVersionError(raw, "wildcard must be the last segment")
        return WILDCARD
    if not segment:
        raise MalformedVersionError(raw, "empty segment")
    # isdigit() also accepts non-ASCII digits and superscripts
    if not (segment.isascii() and segment.isdigit()):
        raise MalformedVersionError(raw, f"segment '{segment}' is not a non-negative integer")
    return int(segment)


def parse_build_number(text: str, allow_wildcard: bool = False) -> BuildNumber:
    """Parse ``BRANCH[.BUILD[.FIX]]`` into a BuildNumber.

    Args:
        text: Build number string; surrounding whitespace is ignored.
        allow_wildcard: Accept a trailing ``*`` segment (untilBuild only).

    Returns:
        BuildNumber with leading zeros normalized away.

    Raises:
        MalformedVersionError: On empty input, too many segments, non-integer
            segments, a wildcard branch, or a misplaced wildcard.
    """
    if text is None:
        raise MalformedVersionError(text, "no value")
    raw = str(text).strip()
    if not raw:
        raise MalformedVersionError(text, "empty build number")

    parts = raw.split(".")
    if len(parts) > MAX_SEGMENTS:
        raise MalformedVersionError(raw, f"expected at most {MAX_SEGMENTS} segments")
    if parts[0] == WILDCARD:
        raise MalformedVersionError(raw, "branch must be a concrete integer")

    segments: List = []
    for idx, part in enumerate(parts):
        is_last = idx == len(parts) - 1
        segments.append(_parse_segment(raw, part, is_last, allow_wildcard))

    while len(segments) < MAX_SEGMENTS:
        segments.append(None)
    return BuildNumber(branch=segments[0], build=segments[1], fix=segments[2])


def parse_range(since_build: Optional[str], until_build: Optional[str] = None) -> CompatibilityRange:
    """Parse a sinceBuild/untilBuild pair into a CompatibilityRange.

    A missing or blank untilBuild yields an open-ended range, matching an
    empty ``until-build`` attribute in plugin.xml.

    Raises:
        EmptySinceBuildError: sinceBuild is missing or blank.
        MalformedVersionError: Either bound is malformed.
        RangeInversionError: The bounded upper edge is below the lower edge.
    """
    if since_build is None or not str(since_build).strip():
        raise EmptySinceBuildError(since_build)
    lower = parse_build_number(since_build, allow_wildcard=False)

    upper = None
    if until_build is not None and str(until_build).strip():
        upper = parse_build_number(until_build, allow_wildcard=True)
    return CompatibilityRange(lower=lower, upper=upper)


# Short name used throughout the CLI and tests.
parse = parse_range
