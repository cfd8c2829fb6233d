"""
Subtitles module for CueKit.

Parses WebVTT and SRT documents into cues and tracks the active cue during
playback.
"""

from .parser import (
    parse_subtitles,
    parse_subtitle_file,
    format_webvtt,
    strip_markup,
)

from .state import ExternalSubtitleState

__all__ = [
    'parse_subtitles',
    'parse_subtitle_file',
    'format_webvtt',
    'strip_markup',
    'ExternalSubtitleState',
]
