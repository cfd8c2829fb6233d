"""
Text fetching for CueKit.

Retrieves master playlists and subtitle documents from HTTP(S) URLs,
``file://`` URLs or local paths. This is the only part of the package that
performs I/O; the parsers and the rewriter work on already-fetched text.
"""

import logging
from pathlib import Path
from typing import List, Optional
from urllib.parse import unquote, urlparse

import requests

from .models import Cue, FetchConfig
from .subtitles.parser import parse_subtitles

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a playlist or subtitle document cannot be retrieved."""


def is_hls_playlist(content: str) -> bool:
    """
    Check if content is an HLS playlist (M3U8 format).

    Args:
        content: Content to check

    Returns:
        True if content is HLS playlist, False otherwise
    """
    return content.lstrip('\ufeff').strip().startswith('#EXTM3U')


def is_m3u8_url(url: str) -> bool:
    """
    Check if a URL points to an M3U8 playlist.

    Example:
        >>> is_m3u8_url("https://cdn.example.com/master.m3u8?token=abc")
        True
    """
    return urlparse(url).path.lower().endswith('.m3u8')


def _local_path(source: str) -> Optional[Path]:
    parsed = urlparse(source)
    if parsed.scheme == 'file':
        return Path(unquote(parsed.path))
    if parsed.scheme in ('http', 'https'):
        return None
    return Path(source)


def fetch_text(source: str, config: Optional[FetchConfig] = None) -> str:
    """
    Fetch a text document.

    Args:
        source: HTTP(S) URL, ``file://`` URL or local filesystem path
        config: Timeout, SSL and header settings for HTTP requests

    Returns:
        Document content decoded as UTF-8

    Raises:
        FetchError: If the document cannot be read or the server answers
            with a non-2xx status
    """
    config = config or FetchConfig()

    path = _local_path(source)
    if path is not None:
        try:
            return path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {str(e)}")
            raise FetchError(f"Cannot read {path}: {str(e)}") from e

    try:
        logger.debug(f"GET {source}")
        response = requests.get(
            source,
            timeout=config.timeout,
            verify=config.verify_ssl,
            headers=config.headers or None,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.error(f"Failed to fetch {source}: {str(e)}")
        raise FetchError(f"Cannot fetch {source}: {str(e)}") from e

    # Playlists and subtitles are UTF-8 regardless of what the server claims
    response.encoding = 'utf-8'
    return response.text.lstrip('\ufeff')


def download_subtitles(source: str, config: Optional[FetchConfig] = None) -> List[Cue]:
    """
    Fetch a WebVTT or SRT document and parse it into cues.

    Raises:
        FetchError: If the document cannot be retrieved
    """
    content = fetch_text(source, config)
    cues = parse_subtitles(content)
    logger.info(f"Loaded {len(cues)} cues from {source}")
    return cues
