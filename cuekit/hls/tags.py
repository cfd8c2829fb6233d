"""
Typed representation of master playlist lines.

Each physical line is parsed once into one of the line classes below so the
rewriter works with named accessors instead of re-parsing attribute strings.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional, Sequence

from .attributes import (
    DEFAULT_ATTRIBUTE_ORDER,
    MEDIA_ATTRIBUTE_ORDER,
    STREAM_INF_ATTRIBUTE_ORDER,
    parse_attribute_list,
    quote_attribute_value,
    serialize_attribute_list,
    unquote_attribute_value,
)

STREAM_INF_TAG = "#EXT-X-STREAM-INF"
I_FRAME_STREAM_INF_TAG = "#EXT-X-I-FRAME-STREAM-INF"
MEDIA_TAG = "#EXT-X-MEDIA"


@dataclass
class PlaylistLine:
    """A physical playlist line, rendered back verbatim unless rewritten."""
    raw: str

    def render(self) -> str:
        return self.raw


class Blank(PlaylistLine):
    """Empty or whitespace-only line."""


class Other(PlaylistLine):
    """Comment or tag line the rewriter does not touch."""


@dataclass
class UriLine(PlaylistLine):
    """A non-comment line: a variant or media playlist reference."""

    @property
    def uri(self) -> str:
        return self.raw.strip()


@dataclass
class AttributeTag(PlaylistLine):
    """A tag line of the form ``#NAME:attribute-list``."""
    tag: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)

    attribute_order: ClassVar[Sequence[str]] = DEFAULT_ATTRIBUTE_ORDER

    def get(self, key: str) -> Optional[str]:
        """Unquoted value of ``key``, or None when absent."""
        value = self.attributes.get(key)
        return None if value is None else unquote_attribute_value(value)

    def set_quoted(self, key: str, value: str) -> None:
        self.attributes[key] = quote_attribute_value(value)

    def remove(self, *keys: str) -> None:
        for key in keys:
            self.attributes.pop(key, None)

    @property
    def uri(self) -> Optional[str]:
        value = self.get("URI")
        return value or None

    def render(self) -> str:
        return f"{self.tag}:{serialize_attribute_list(self.attributes, self.attribute_order)}"


@dataclass
class StreamInf(AttributeTag):
    """``#EXT-X-STREAM-INF``: a variant stream, followed by its URI line."""
    attribute_order: ClassVar[Sequence[str]] = STREAM_INF_ATTRIBUTE_ORDER

    @property
    def audio_group(self) -> Optional[str]:
        return self.get("AUDIO")


@dataclass
class IFrameStreamInf(AttributeTag):
    """``#EXT-X-I-FRAME-STREAM-INF``: an I-frame-only variant."""


@dataclass
class Media(AttributeTag):
    """``#EXT-X-MEDIA``: an alternative rendition (audio, subtitles, ...)."""
    attribute_order: ClassVar[Sequence[str]] = MEDIA_ATTRIBUTE_ORDER

    @property
    def media_type(self) -> str:
        return (self.get("TYPE") or "").upper()

    @property
    def is_audio(self) -> bool:
        return self.media_type == "AUDIO"

    @property
    def group_key(self) -> str:
        """GROUP-ID, trimmed; ``"_"`` when missing or empty."""
        return normalize_group_key(self.get("GROUP-ID") or "")

    @property
    def rendition_name(self) -> str:
        return self.get("NAME") or ""

    @property
    def language(self) -> str:
        return self.get("LANGUAGE") or ""


_ATTRIBUTE_TAGS = {
    STREAM_INF_TAG: StreamInf,
    I_FRAME_STREAM_INF_TAG: IFrameStreamInf,
    MEDIA_TAG: Media,
}


def normalize_group_key(value: str) -> str:
    trimmed = value.strip()
    return trimmed if trimmed else "_"


def parse_playlist_line(raw: str) -> PlaylistLine:
    """
    Classify a physical line.

    Tags are matched on their exact name, so ``#EXT-X-MEDIA-SEQUENCE`` is
    not mistaken for ``#EXT-X-MEDIA``.
    """
    line = raw.strip()
    if not line:
        return Blank(raw)
    if not line.startswith('#'):
        return UriLine(raw)

    tag, separator, rest = line.partition(':')
    cls = _ATTRIBUTE_TAGS.get(tag)
    if cls is None or not separator:
        return Other(raw)
    return cls(raw, tag=tag, attributes=parse_attribute_list(rest))
