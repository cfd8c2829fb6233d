"""
CueKit - Playlist, Subtitle and Track-Matching Toolkit for Media Players

Pure text processing that a media player calls around its decoding pipeline.

Features:
- Rewrite HLS master playlists with rich audio track names and absolute URIs
- Collapse duplicated audio groups into one canonical group
- Parse WebVTT and SRT documents into timed cues
- Track the active cue during playback with a binary search
- Match caller track metadata to runtime-discovered options by language

Example usage:
    >>> from cuekit import AudioTrackInfo, rewrite_master_playlist, parse_subtitles
    >>>
    >>> tracks = [AudioTrackInfo(index=1, language_code="eng", display_name="English 5.1")]
    >>> playlist = rewrite_master_playlist(
    ...     playlist_text=master_text,
    ...     master_url="https://cdn.example.com/show/master.m3u8",
    ...     audio_tracks=tracks,
    ... )
    >>>
    >>> cues = parse_subtitles(srt_text)
"""

import logging

__version__ = "0.1.0"
__author__ = "CueKit Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Core utility functions
from .utils import parse_timestamp, seconds_to_timestamp
from .languages import normalize_language, alternate_language_code

# Data models
from .models import (
    AudioTrackInfo,
    PlayerAudioTrack,
    PlayerSubtitleTrack,
    MediaOption,
    MatchedTrack,
    Cue,
    FetchConfig,
    ManifestCache,
)

# HLS playlists
from .hls import (
    parse_attribute_list,
    serialize_attribute_list,
    quote_attribute_value,
    unquote_attribute_value,
    rewrite_master_playlist,
    make_absolute_uri,
    MasterPlaylistLoader,
)

# Subtitles
from .subtitles import (
    parse_subtitles,
    parse_subtitle_file,
    format_webvtt,
    ExternalSubtitleState,
)

# Track matching
from .matcher import (
    match_tracks,
    match_audio_tracks,
    match_subtitle_tracks,
    default_audio_index,
    subtitle_tracks_from_options,
    audio_track_infos,
)

# Fetching
from .downloader import FetchError, fetch_text, download_subtitles, is_hls_playlist, is_m3u8_url

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Utility functions
    "parse_timestamp",
    "seconds_to_timestamp",
    "normalize_language",
    "alternate_language_code",

    # Models
    "AudioTrackInfo",
    "PlayerAudioTrack",
    "PlayerSubtitleTrack",
    "MediaOption",
    "MatchedTrack",
    "Cue",
    "FetchConfig",
    "ManifestCache",

    # HLS
    "parse_attribute_list",
    "serialize_attribute_list",
    "quote_attribute_value",
    "unquote_attribute_value",
    "rewrite_master_playlist",
    "make_absolute_uri",
    "MasterPlaylistLoader",

    # Subtitles
    "parse_subtitles",
    "parse_subtitle_file",
    "format_webvtt",
    "ExternalSubtitleState",

    # Track matching
    "match_tracks",
    "match_audio_tracks",
    "match_subtitle_tracks",
    "default_audio_index",
    "subtitle_tracks_from_options",
    "audio_track_infos",

    # Fetching
    "FetchError",
    "fetch_text",
    "download_subtitles",
    "is_hls_playlist",
    "is_m3u8_url",
]
