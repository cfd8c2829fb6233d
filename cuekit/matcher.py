"""
Track matching for CueKit.

Pairs caller-supplied track descriptors with the options the media-loading
layer discovers at runtime. Both sides are grouped by normalized language and
matched by position within each language.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .languages import alternate_language_code, normalize_language
from .models import (
    AudioTrackInfo,
    MatchedTrack,
    MediaOption,
    PlayerAudioTrack,
    PlayerSubtitleTrack,
)

logger = logging.getLogger(__name__)


def match_tracks(tracks: Sequence, options: Sequence[MediaOption]) -> List[MatchedTrack]:
    """
    Match caller tracks to discovered options by language + position.

    The n-th caller track of a language is paired with the n-th discovered
    option of that language, falling back to the ISO-639 alias ("rus" for
    "ru" and so on). Every caller track yields exactly one result.

    Args:
        tracks: Caller tracks; anything with a ``language`` attribute
        options: Options discovered from the loaded media

    Returns:
        List of MatchedTrack in the order of ``tracks``

    Example:
        >>> tracks = [PlayerAudioTrack("0", "ru", "Dub"), PlayerAudioTrack("1", "ru", "Original")]
        >>> [m.is_matched for m in match_tracks(tracks, [MediaOption("rus")])]
        [True, False]
    """
    options_by_language: Dict[str, List[MediaOption]] = {}
    for option in options:
        options_by_language.setdefault(normalize_language(option.language), []).append(option)

    counters: Dict[str, int] = {}
    results = []

    for track in tracks:
        language = normalize_language(track.language)
        position = counters.get(language, 0)
        counters[language] = position + 1

        option: Optional[MediaOption] = None
        for key in (language, alternate_language_code(language)):
            bucket = options_by_language.get(key, [])
            if position < len(bucket):
                option = bucket[position]
                break

        results.append(MatchedTrack(source_track=track, option=option))

    unmatched = sum(1 for result in results if not result.is_matched)
    if unmatched:
        logger.debug(f"{unmatched} of {len(results)} tracks have no matching option")
    return results


def match_audio_tracks(
    tracks: Sequence[PlayerAudioTrack],
    options: Sequence[MediaOption]
) -> List[MatchedTrack]:
    """Match caller audio tracks to discovered audio options."""
    return match_tracks(tracks, options)


def match_subtitle_tracks(
    tracks: Sequence[PlayerSubtitleTrack],
    options: Sequence[MediaOption]
) -> List[MatchedTrack]:
    """Match caller subtitle tracks to discovered subtitle options."""
    return match_tracks(tracks, options)


def default_audio_index(tracks: Sequence[PlayerAudioTrack]) -> Optional[int]:
    """Index of the first default track, 0 if none is flagged, None for no tracks."""
    if not tracks:
        return None
    return next((i for i, track in enumerate(tracks) if track.is_default), 0)


def subtitle_tracks_from_options(options: Sequence[MediaOption]) -> List[PlayerSubtitleTrack]:
    """
    Build subtitle descriptors straight from discovered options.

    Used when the caller supplies no subtitle tracks, so every subtitle the
    media offers is still selectable.
    """
    return [
        PlayerSubtitleTrack(
            id=str(i),
            language=option.language,
            display_name=option.display_name,
            is_forced=option.is_forced,
        )
        for i, option in enumerate(options)
    ]


def audio_track_infos(tracks: Sequence[PlayerAudioTrack]) -> List[AudioTrackInfo]:
    """
    Bridge caller audio tracks to playlist rewriter metadata.

    Tracks are numbered from 1 in the order given, which lines up with
    playlists that prefix rendition names with "1.", "2.", ...
    """
    return [
        AudioTrackInfo(index=i, language_code=track.language, display_name=track.display_name)
        for i, track in enumerate(tracks, start=1)
    ]
