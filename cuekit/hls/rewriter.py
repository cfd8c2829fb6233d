"""
HLS master playlist rewriter.

Rewrites a master playlist so that:
- ``#EXT-X-MEDIA:TYPE=AUDIO`` renditions carry the caller's rich display names,
- duplicated audio groups collapse into a single canonical group,
- every URI in the playlist is absolute.

The rewrite is a pure text transform. Fetching the playlist is the caller's
concern (see :mod:`cuekit.hls.loader`).
"""

import logging
import math
import re
from typing import Dict, List, Optional, Sequence, Set, Tuple
from urllib.parse import urljoin, urlparse

from ..languages import (
    UNDETERMINED,
    guess_language_from_name,
    language_keys,
    normalize_language,
)
from ..models import AudioTrackInfo
from .tags import (
    Blank,
    IFrameStreamInf,
    Media,
    PlaylistLine,
    StreamInf,
    UriLine,
    normalize_group_key,
    parse_playlist_line,
)

logger = logging.getLogger(__name__)

ALL_TRACKS_KEY = "*"
MAX_LEADING_INDEX = 255

_LEADING_INDEX_PATTERN = re.compile(r'(\d{1,3})(?:[.):]|$)')
_LINE_BREAK_PATTERN = re.compile(r'\r\n|\r|\n')


def make_absolute_uri(uri: str, master_url: str) -> str:
    """
    Resolve a playlist URI against the master playlist URL.

    Args:
        uri: URI as written in the playlist
        master_url: URL the master playlist was fetched from

    Returns:
        Absolute URI, or the input unchanged if it cannot be resolved

    Example:
        >>> make_absolute_uri("v1/index.m3u8", "https://cdn.example.com/show/master.m3u8")
        'https://cdn.example.com/show/v1/index.m3u8'
    """
    trimmed = uri.strip()
    if not trimmed:
        return uri
    if trimmed.startswith(('http://', 'https://')):
        return trimmed

    try:
        if trimmed.startswith('//'):
            scheme = urlparse(master_url).scheme or 'https'
            return f"{scheme}:{trimmed}"
        return urljoin(master_url, trimmed)
    except ValueError as e:
        logger.debug(f"Leaving unresolvable URI {trimmed!r} as-is: {e}")
        return trimmed


def collect_variant_audio_groups(lines: Sequence[PlaylistLine]) -> Tuple[List[str], Set[str]]:
    """Audio group ids referenced by ``#EXT-X-STREAM-INF`` lines, in order and as a set."""
    ordered = []
    for line in lines:
        if isinstance(line, StreamInf) and line.audio_group is not None:
            ordered.append(normalize_group_key(line.audio_group))
    return ordered, set(ordered)


def select_canonical_audio_group(
    lines: Sequence[PlaylistLine],
    referenced_groups: Sequence[str]
) -> Optional[str]:
    """
    Pick the audio group that survives rewriting.

    Among groups referenced by variants, the one declaring the most
    ``#EXT-X-MEDIA:TYPE=AUDIO`` renditions wins; ties go to the group
    referenced first. None when no variant references an audio group.
    """
    if not referenced_groups:
        return None

    counts: Dict[str, int] = {}
    for line in lines:
        if isinstance(line, Media) and line.is_audio:
            counts[line.group_key] = counts.get(line.group_key, 0) + 1

    unique = list(dict.fromkeys(referenced_groups))
    return max(unique, key=lambda group: counts.get(group, 0))


def build_tracks_by_language(tracks: Sequence[AudioTrackInfo]) -> Dict[str, List[AudioTrackInfo]]:
    """
    Bucket caller tracks by language key.

    Tracks are ordered by their index (tracks without one last), then by
    their position in ``tracks``. The ``"*"`` bucket holds every track.
    """
    ordered = [
        track for _, track in sorted(
            enumerate(tracks),
            key=lambda pair: (
                pair[1].index if pair[1].index is not None else math.inf,
                pair[0],
            ),
        )
    ]

    buckets: Dict[str, List[AudioTrackInfo]] = {}
    for track in ordered:
        for key in language_keys(track.language_code):
            buckets.setdefault(key, []).append(track)

    buckets[ALL_TRACKS_KEY] = ordered
    return buckets


def parse_leading_index(name: str) -> Optional[int]:
    """
    Extract a small leading track number from a rendition name.

    Example:
        >>> parse_leading_index("2. Director's Commentary")
        2
        >>> parse_leading_index("1080p") is None
        True
    """
    match = _LEADING_INDEX_PATTERN.match(name.strip())
    if not match:
        return None
    value = int(match.group(1))
    return value if value <= MAX_LEADING_INDEX else None


def match_track_by_index(name: str, tracks: Sequence[AudioTrackInfo]) -> Optional[AudioTrackInfo]:
    # Names may number tracks from 0 or from 1, so try n and n - 1.
    explicit = parse_leading_index(name)
    if explicit is None:
        return None

    for candidate in (explicit, explicit - 1):
        if candidate < 0:
            continue
        for track in tracks:
            if track.index == candidate:
                return track
    return None


def pick_track(
    tracks_by_language: Dict[str, List[AudioTrackInfo]],
    language_key: str,
    position: int
) -> Optional[AudioTrackInfo]:
    """Caller track at ``position`` within the bucket for ``language_key``."""
    candidates = [language_key, normalize_language(language_key)]
    if language_key == UNDETERMINED:
        candidates.append(ALL_TRACKS_KEY)

    for key in candidates:
        bucket = tracks_by_language.get(key, [])
        if position < len(bucket):
            return bucket[position]
    return None


def infer_language_key(language_attribute: str, original_name: str) -> str:
    language = language_attribute.strip().lower()
    if language:
        return language
    return guess_language_from_name(original_name) or UNDETERMINED


class _MasterPlaylistRewrite:
    """State for a single rewrite pass."""

    def __init__(self, lines: List[PlaylistLine], master_url: str, audio_tracks: Sequence[AudioTrackInfo]):
        self.lines = lines
        self.master_url = master_url
        self.tracks_by_language = build_tracks_by_language(audio_tracks)
        self.positions: Dict[Tuple[str, str], int] = {}

        ordered_groups, self.referenced_groups = collect_variant_audio_groups(lines)
        self.canonical_group = select_canonical_audio_group(lines, ordered_groups)
        if self.canonical_group is not None:
            logger.debug(
                f"Canonical audio group '{self.canonical_group}' "
                f"(variants reference {sorted(self.referenced_groups)})"
            )

    def run(self) -> List[str]:
        output = []
        previous_was_stream_inf = False

        for line in self.lines:
            if isinstance(line, Blank):
                output.append(line.raw)
            elif isinstance(line, UriLine):
                # Variant URIs after STREAM-INF and media playlist references resolve alike
                output.append(make_absolute_uri(line.uri, self.master_url))
                previous_was_stream_inf = False
            elif isinstance(line, StreamInf):
                output.append(self.rewrite_stream_inf(line))
                previous_was_stream_inf = True
            elif isinstance(line, IFrameStreamInf):
                self.resolve_uri(line)
                output.append(line.render())
            elif isinstance(line, Media):
                rewritten = self.rewrite_media(line)
                if rewritten is not None:
                    output.append(rewritten)
            else:
                output.append(line.raw)

        if previous_was_stream_inf:
            logger.debug("Playlist ends with a STREAM-INF tag that has no URI line")
        return output

    def resolve_uri(self, tag) -> None:
        uri = tag.uri
        if uri:
            tag.set_quoted("URI", make_absolute_uri(uri, self.master_url))

    def rewrite_stream_inf(self, tag: StreamInf) -> str:
        audio_group = tag.audio_group
        if self.canonical_group is not None and audio_group is not None and audio_group != self.canonical_group:
            tag.set_quoted("AUDIO", self.canonical_group)
        return tag.render()

    def rewrite_media(self, tag: Media) -> Optional[str]:
        self.resolve_uri(tag)
        if not tag.is_audio:
            return tag.render()

        group_key = tag.group_key
        if (
            self.canonical_group is not None
            and group_key in self.referenced_groups
            and group_key != self.canonical_group
        ):
            logger.debug(f"Dropping audio rendition '{tag.rendition_name}' from group '{group_key}'")
            return None

        original_name = tag.rendition_name
        language_key = infer_language_key(tag.language, original_name)

        counter_key = (group_key, language_key)
        position = self.positions.get(counter_key, 0)
        self.positions[counter_key] = position + 1

        matched = match_track_by_index(original_name, self.tracks_by_language[ALL_TRACKS_KEY])
        if matched is None:
            matched = pick_track(self.tracks_by_language, language_key, position)

        if matched is not None:
            logger.debug(f"Renaming audio rendition '{original_name}' -> '{matched.display_name}'")
            tag.set_quoted("NAME", matched.display_name)
            tag.remove("LANGUAGE", "ASSOC-LANGUAGE")

        return tag.render()


def rewrite_master_playlist(
    playlist_text: str,
    master_url: str,
    audio_tracks: Sequence[AudioTrackInfo]
) -> str:
    """
    Rewrite an HLS master playlist with rich audio names and absolute URIs.

    Args:
        playlist_text: Master playlist content
        master_url: URL the playlist was fetched from, for resolving relative URIs
        audio_tracks: Caller metadata for the audio renditions

    Returns:
        Rewritten playlist text, lines joined with ``\\n``

    Example:
        >>> text = (
        ...     '#EXTM3U\\n'
        ...     '#EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="a1",NAME="1. Eng",LANGUAGE="eng",URI="eng.m3u8"\\n'
        ...     '#EXT-X-STREAM-INF:BANDWIDTH=800000,AUDIO="a1"\\n'
        ...     'video.m3u8'
        ... )
        >>> tracks = [AudioTrackInfo(index=1, language_code="eng", display_name="English 5.1")]
        >>> print(rewrite_master_playlist(text, "https://cdn.example.com/master.m3u8", tracks))
        #EXTM3U
        #EXT-X-MEDIA:TYPE=AUDIO,GROUP-ID="a1",NAME="English 5.1",URI="https://cdn.example.com/eng.m3u8"
        #EXT-X-STREAM-INF:BANDWIDTH=800000,AUDIO="a1"
        https://cdn.example.com/video.m3u8
    """
    lines = [parse_playlist_line(raw) for raw in _LINE_BREAK_PATTERN.split(playlist_text)]
    return "\n".join(_MasterPlaylistRewrite(lines, master_url, audio_tracks).run())
