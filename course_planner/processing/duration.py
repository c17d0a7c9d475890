"""Duration string normalization."""

import math
import re

# One duration segment: digits with an optional fractional part
SEGMENT_PATTERN = re.compile(r'^\d+(?:\.\d+)?$')

# Multipliers for SS, MM:SS and H:MM:SS
_UNIT_SECONDS = {
    1: (1,),
    2: (60, 1),
    3: (3600, 60, 1),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def parse_duration_to_seconds(value) -> int:
    """Convert "H:MM:SS", "MM:SS" or "SS" to whole seconds.

    Malformed input (wrong segment count, non-numeric segments, non-string
    values) gives 0. Never raises.

    Examples:
        >>> parse_duration_to_seconds("1:02:03")
        3723
        >>> parse_duration_to_seconds("5:09")
        309
        >>> parse_duration_to_seconds("bad")
        0
    """
    if not value or not isinstance(value, str):
        return 0

    segments = [segment.strip() for segment in value.split(':')]
    units = _UNIT_SECONDS.get(len(segments))
    if units is None:
        return 0
    if not all(SEGMENT_PATTERN.match(segment) for segment in segments):
        return 0

    total = sum(float(segment) * unit for segment, unit in zip(segments, units))
    return round_half_up(total)


def format_seconds(seconds: int) -> str:
    """Render seconds as "Xm Ys" for reports."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs}s"
