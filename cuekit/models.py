"""
Data models for CueKit.

Defines the value types passed between the caller and the playlist rewriter,
the subtitle parser and the track matcher.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AudioTrackInfo:
    """Caller-known metadata for one audio track, used when rewriting HLS playlists."""
    index: Optional[int]
    language_code: Optional[str]
    display_name: str


@dataclass(frozen=True)
class PlayerAudioTrack:
    """Audio track descriptor supplied by the host application."""
    id: str
    language: Optional[str]  # ISO-639: "rus", "eng", "ru", "en", ...
    display_name: str
    is_default: bool = False


@dataclass(frozen=True)
class PlayerSubtitleTrack:
    """Subtitle track descriptor supplied by the host application."""
    id: str
    language: Optional[str]
    display_name: str
    is_forced: bool = False


@dataclass(frozen=True)
class MediaOption:
    """A track option discovered at runtime by the media-loading layer."""
    language: Optional[str]
    display_name: str = ""
    is_forced: bool = False
    handle: Any = field(default=None, compare=False)  # opaque reference for selection


@dataclass(frozen=True)
class MatchedTrack:
    """A caller track paired with its discovered option, if any."""
    source_track: Any
    option: Optional[MediaOption] = None

    @property
    def is_matched(self) -> bool:
        return self.option is not None


@dataclass(frozen=True)
class Cue:
    """A timed subtitle entry. Times are in seconds."""
    start_time: float
    end_time: float
    text: str

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def contains(self, seconds: float) -> bool:
        """True when the cue is on screen at ``seconds``."""
        return self.start_time <= seconds < self.end_time


@dataclass
class FetchConfig:
    """Configuration for fetching playlists and subtitle documents."""
    timeout: float = 30.0
    verify_ssl: bool = True
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class ManifestCache:
    """Last successful master playlist fetch and its rewritten form."""
    original_text: Optional[str] = None
    rewritten_text: Optional[str] = None

    def clear(self) -> None:
        self.original_text = None
        self.rewritten_text = None
