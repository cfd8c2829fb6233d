"""
Attribute-list codec for HLS tags.

HLS tags such as ``#EXT-X-MEDIA`` carry comma-separated ``KEY=VALUE`` lists
where values may be quoted strings containing commas. Parsing is
best-effort: malformed input yields a partial mapping, never an exception.
"""

from typing import Dict, Optional, Sequence

MEDIA_ATTRIBUTE_ORDER = (
    "TYPE", "GROUP-ID", "NAME", "LANGUAGE", "DEFAULT", "AUTOSELECT",
    "FORCED", "CHARACTERISTICS", "CHANNELS", "URI",
)

STREAM_INF_ATTRIBUTE_ORDER = (
    "BANDWIDTH", "AVERAGE-BANDWIDTH", "RESOLUTION", "FRAME-RATE", "CODECS",
    "VIDEO-RANGE", "HDCP-LEVEL", "AUDIO", "SUBTITLES", "CLOSED-CAPTIONS", "VIDEO",
)

DEFAULT_ATTRIBUTE_ORDER = MEDIA_ATTRIBUTE_ORDER


def parse_attribute_list(text: str) -> Dict[str, str]:
    """
    Parse an attribute list into a mapping of raw values.

    Quoted values keep their quotes. Unquoted values are trimmed. Parsing
    stops at the first pair without ``=``.

    Args:
        text: Attribute list, e.g. ``TYPE=AUDIO,GROUP-ID="aac",NAME="A, B"``

    Returns:
        Dictionary of attribute name to raw value string

    Example:
        >>> parse_attribute_list('TYPE=AUDIO,NAME="A, B"')
        {'TYPE': 'AUDIO', 'NAME': '"A, B"'}
    """
    result: Dict[str, str] = {}
    length = len(text)
    i = 0

    while i < length:
        # Skip separators between pairs
        while i < length and text[i] in ', ':
            i += 1
        if i >= length:
            break

        key_start = i
        while i < length and text[i] not in '=,':
            i += 1
        if i >= length or text[i] != '=':
            break
        key = text[key_start:i].strip()
        i += 1

        if i < length and text[i] == '"':
            value_start = i
            i += 1
            escaped = False
            while i < length:
                c = text[i]
                i += 1
                if escaped:
                    escaped = False
                elif c == '\\':
                    escaped = True
                elif c == '"':
                    break
            result[key] = text[value_start:i]
            # Anything between the closing quote and the next comma is junk
            while i < length and text[i] != ',':
                i += 1
        else:
            value_start = i
            while i < length and text[i] != ',':
                i += 1
            result[key] = text[value_start:i].strip()

        if i < length and text[i] == ',':
            i += 1

    return result


def serialize_attribute_list(
    attrs: Dict[str, Optional[str]],
    preferred_order: Sequence[str] = DEFAULT_ATTRIBUTE_ORDER
) -> str:
    """
    Serialize attributes back into ``KEY=VALUE,...`` form.

    Keys listed in ``preferred_order`` come first, in that order; the rest
    follow sorted by name. Keys whose value is None are dropped.
    """
    rank = {key: position for position, key in enumerate(preferred_order)}
    unranked = len(rank)
    keys = sorted(attrs, key=lambda k: (rank.get(k, unranked), k))

    return ",".join(f"{key}={attrs[key]}" for key in keys if attrs[key] is not None)


def unquote_attribute_value(value: str) -> str:
    """
    Strip one layer of surrounding quotes and undo backslash escaping.

    Example:
        >>> unquote_attribute_value('"Say \\\\"hi\\\\""')
        'Say "hi"'
    """
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    return value.replace('\\"', '"').replace('\\\\', '\\')


def quote_attribute_value(value: str) -> str:
    """Escape and quote ``value``, collapsing line breaks to spaces."""
    escaped = (
        value.replace('\\', '\\\\')
        .replace('"', '\\"')
        .replace('\n', ' ')
        .replace('\r', ' ')
    )
    return f'"{escaped}"'
