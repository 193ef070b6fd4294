"""Lenient time-string parsing."""

import re
from typing import Optional

# Optional sign followed by digits, after optional leading whitespace.
# Anything after the digits is ignored ("12abc" -> 12, "1.5" -> 1).
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# seconds, minutes, hours (read right to left)
_UNIT_SECONDS = (1, 60, 3600)


def _segment_to_int(segment: str) -> int:
    match = _LEADING_INT.match(segment)
    if not match:
        return 0
    return max(0, int(match.group(1)))


def parse_duration(time: Optional[str]) -> int:
    """Convert a time string into a whole number of seconds.

    Accepts ``"ss"``, ``"mm:ss"`` and ``"hh:mm:ss"``.  Parsing is best
    effort: missing units count as 0, non-numeric segments count as 0,
    negative segments are clamped to 0 and segments beyond hours are
    ignored.  Never raises.

    Examples:
        >>> parse_duration("1:05")
        65
        >>> parse_duration("1:01:05")
        3665
        >>> parse_duration("30")
        30
        >>> parse_duration("")
        0
    """
    if not time:
        return 0

    parts = list(reversed(str(time).split(":")))
    seconds = 0
    for segment, unit in zip(parts, _UNIT_SECONDS):
        seconds += _segment_to_int(segment) * unit
    return seconds
