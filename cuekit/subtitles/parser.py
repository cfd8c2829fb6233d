"""
WebVTT and SRT cue parsing.

Both dialects go through the same parser: WebVTT uses dot separators
(``00:01:23.456``), SRT uses commas (``00:01:23,456``) and numbers its blocks.
Headers, NOTE blocks and sequence numbers have no timing line and are skipped.
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from ..models import Cue
from ..utils import parse_timestamp, seconds_to_timestamp

logger = logging.getLogger(__name__)

ARROW_SEPARATOR = '-->'

# Pre-compiled regex patterns
_BLOCK_SEPARATOR_PATTERN = re.compile(r'\n[ \t]*\n')
_TAG_PATTERN = re.compile(r'<[^>]+>')


def strip_markup(text: str) -> str:
    """
    Remove ``<b>``, ``<i>``, ``<font ...>`` and similar tags.

    Example:
        >>> strip_markup('<i>Hello</i> <font color="red">there</font>')
        'Hello there'
    """
    return _TAG_PATTERN.sub('', text)


def _parse_cue_block(lines: Sequence[str]) -> Optional[Cue]:
    timing_index = next((i for i, line in enumerate(lines) if ARROW_SEPARATOR in line), None)
    if timing_index is None:
        return None

    parts = lines[timing_index].split(ARROW_SEPARATOR)
    if len(parts) != 2:
        return None

    start_field = parts[0].strip()
    # Drop cue settings such as "align:start position:10%"
    end_tokens = parts[1].split()
    end_field = end_tokens[0] if end_tokens else ''

    start = parse_timestamp(start_field)
    end = parse_timestamp(end_field)
    if start is None or end is None or end <= start:
        return None

    text = strip_markup('\n'.join(lines[timing_index + 1:]))
    if not text.strip():
        return None

    return Cue(start_time=start, end_time=end, text=text)


def parse_subtitles(content: str) -> List[Cue]:
    """
    Parse WebVTT or SRT content into cues sorted by start time.

    Blocks without a timing line, with malformed or inverted timestamps, or
    with no text left after markup removal are dropped.

    Args:
        content: Subtitle document as string

    Returns:
        List of cues, ascending by start time (ties keep document order)

    Example:
        >>> content = "WEBVTT\\n\\n00:00:01.000 --> 00:00:03.000\\n<b>Hello</b> world"
        >>> parse_subtitles(content)
        [Cue(start_time=1.0, end_time=3.0, text='Hello world')]
    """
    cleaned = (
        content.replace('\r\n', '\n')
        .replace('\r', '\n')
        .replace('\ufeff', '')
        .strip()
    )
    if not cleaned:
        return []

    cues = []
    dropped = 0
    for block in _BLOCK_SEPARATOR_PATTERN.split(cleaned):
        lines = [line.strip() for line in block.split('\n')]
        lines = [line for line in lines if line]
        if not lines:
            continue

        cue = _parse_cue_block(lines)
        if cue is None:
            dropped += 1
            continue
        cues.append(cue)

    logger.debug(f"Parsed {len(cues)} cues ({dropped} blocks skipped)")
    return sorted(cues, key=lambda cue: cue.start_time)


def parse_subtitle_file(path: Union[str, Path]) -> List[Cue]:
    """
    Parse a WebVTT or SRT file.

    Args:
        path: Path to the subtitle file (UTF-8, BOM allowed)

    Returns:
        List of cues sorted by start time
    """
    with open(path, 'r', encoding='utf-8-sig') as f:
        content = f.read()
    return parse_subtitles(content)


def format_webvtt(cues: Iterable[Cue]) -> str:
    """
    Format cues as a WebVTT document.

    Useful for handing SRT input to players that only understand WebVTT.

    Example:
        >>> format_webvtt([Cue(1.0, 2.5, "Hello")])
        'WEBVTT\\n\\n1\\n00:00:01.000 --> 00:00:02.500\\nHello\\n'
    """
    blocks = ["WEBVTT"]
    for idx, cue in enumerate(cues, start=1):
        blocks.append(
            f"{idx}\n"
            f"{seconds_to_timestamp(cue.start_time)} {ARROW_SEPARATOR} {seconds_to_timestamp(cue.end_time)}\n"
            f"{cue.text}"
        )
    return "\n\n".join(blocks) + "\n"
