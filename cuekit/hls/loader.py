"""
Master playlist loading with last-known-good fallback.

Fetches a master playlist, rewrites it with :func:`rewrite_master_playlist`
and keeps the results in a caller-owned :class:`ManifestCache`, so a player
can keep serving a playlist when a later refetch fails.
"""

import logging
from typing import Optional, Sequence

from ..downloader import FetchError, fetch_text, is_hls_playlist
from ..models import AudioTrackInfo, FetchConfig, ManifestCache
from .rewriter import rewrite_master_playlist

logger = logging.getLogger(__name__)


class MasterPlaylistLoader:
    """
    Loader for one media item's master playlist.

    Example:
        >>> loader = MasterPlaylistLoader(
        ...     "https://cdn.example.com/show/master.m3u8",
        ...     [AudioTrackInfo(index=1, language_code="eng", display_name="English 5.1")],
        ... )
        >>> playlist = loader.load()
    """

    def __init__(
        self,
        master_url: str,
        audio_tracks: Sequence[AudioTrackInfo],
        config: Optional[FetchConfig] = None,
        cache: Optional[ManifestCache] = None
    ):
        """
        Initialize loader.

        Args:
            master_url: Master playlist URL (HTTP(S), ``file://`` or a path)
            audio_tracks: Caller audio metadata used for rewriting
            config: Fetch settings
            cache: Cache to read from and update; a fresh one if omitted
        """
        self.master_url = master_url
        self.audio_tracks = list(audio_tracks)
        self.config = config or FetchConfig()
        self.cache = cache if cache is not None else ManifestCache()

    def load(self, refresh: bool = False) -> str:
        """
        Return the rewritten master playlist.

        Serves the cached rewritten text unless ``refresh`` is set. When a
        fetch fails, falls back to the last rewritten text, then to the last
        original text.

        Raises:
            FetchError: If the fetch fails and nothing is cached
        """
        if not refresh and self.cache.rewritten_text is not None:
            return self.cache.rewritten_text

        try:
            original = fetch_text(self.master_url, self.config)
        except FetchError:
            fallback = self.cache.rewritten_text or self.cache.original_text
            if fallback is None:
                raise
            logger.warning(f"Serving cached playlist for {self.master_url} after fetch failure")
            return fallback

        self.cache.original_text = original

        if not is_hls_playlist(original):
            logger.warning(f"{self.master_url} does not look like an HLS playlist, serving it unchanged")
            return original

        rewritten = rewrite_master_playlist(original, self.master_url, self.audio_tracks)
        self.cache.rewritten_text = rewritten

        logger.info(f"Rewrote master playlist {self.master_url} ({len(self.audio_tracks)} audio tracks)")
        return rewritten
