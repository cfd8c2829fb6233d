"""
HLS module for CueKit.

Attribute-list codec, typed playlist lines, the master playlist rewriter and
a loader that caches rewritten playlists.
"""

from .attributes import (
    MEDIA_ATTRIBUTE_ORDER,
    STREAM_INF_ATTRIBUTE_ORDER,
    parse_attribute_list,
    serialize_attribute_list,
    quote_attribute_value,
    unquote_attribute_value,
)

from .tags import (
    PlaylistLine,
    Blank,
    Other,
    UriLine,
    AttributeTag,
    StreamInf,
    IFrameStreamInf,
    Media,
    parse_playlist_line,
)

from .rewriter import (
    rewrite_master_playlist,
    make_absolute_uri,
    select_canonical_audio_group,
)

from .loader import MasterPlaylistLoader

__all__ = [
    'MEDIA_ATTRIBUTE_ORDER',
    'STREAM_INF_ATTRIBUTE_ORDER',
    'parse_attribute_list',
    'serialize_attribute_list',
    'quote_attribute_value',
    'unquote_attribute_value',
    'PlaylistLine',
    'Blank',
    'Other',
    'UriLine',
    'AttributeTag',
    'StreamInf',
    'IFrameStreamInf',
    'Media',
    'parse_playlist_line',
    'rewrite_master_playlist',
    'make_absolute_uri',
    'select_canonical_audio_group',
    'MasterPlaylistLoader',
]
