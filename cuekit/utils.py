"""
Shared utility functions for CueKit.

Timestamp conversion used by the subtitle parser and writer.
"""

import re
from typing import Optional

# Non-negative decimal: "12", "12.5", "12.", ".5"
_DECIMAL_PATTERN = re.compile(r'(?:\d+(?:\.\d*)?|\.\d+)')


def parse_timestamp(timestamp: str) -> Optional[float]:
    """
    Convert a subtitle timecode to seconds.

    Accepts ``HH:MM:SS.mmm`` and ``MM:SS.mmm``, with either a dot (WebVTT)
    or a comma (SRT) as the fractional separator.

    Args:
        timestamp: Timecode string

    Returns:
        Time in seconds, or None if the timecode is malformed

    Example:
        >>> parse_timestamp("01:02:03.456")
        3723.456
        >>> parse_timestamp("02:03,456")
        123.456
        >>> parse_timestamp("3:4:5:6") is None
        True
    """
    components = timestamp.strip().replace(',', '.').split(':')
    if len(components) not in (2, 3):
        return None

    values = []
    for component in components:
        if not _DECIMAL_PATTERN.fullmatch(component):
            return None
        values.append(float(component))

    if len(values) == 3:
        hours, minutes, seconds = values
        return hours * 3600 + minutes * 60 + seconds

    minutes, seconds = values
    return minutes * 60 + seconds


def seconds_to_timestamp(seconds: float) -> str:
    """
    Convert seconds to HH:MM:SS.mmm format.

    Example:
        >>> seconds_to_timestamp(90.5)
        '00:01:30.500'
    """
    total_ms = int(round(max(seconds, 0.0) * 1000))
    hours, remainder = divmod(total_ms, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, milliseconds = divmod(remainder, 1000)

    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{milliseconds:03d}"
