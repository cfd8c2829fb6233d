"""
Language code helpers shared by the playlist rewriter and the track matcher.
"""

from typing import List, Optional

UNDETERMINED = "und"

# ISO-639-2 <-> ISO-639-1
_ISO_639_PAIRS = (
    ("rus", "ru"), ("eng", "en"), ("ukr", "uk"), ("deu", "de"), ("fra", "fr"),
    ("spa", "es"), ("ita", "it"), ("jpn", "ja"), ("kor", "ko"), ("zho", "zh"),
    ("por", "pt"), ("pol", "pl"), ("tur", "tr"),
)

ISO_639_ALIASES = {}
for _long, _short in _ISO_639_PAIRS:
    ISO_639_ALIASES[_long] = _short
    ISO_639_ALIASES[_short] = _long

# Substrings of a rendition NAME hinting at its language, checked in order.
_NAME_HINTS = (
    ("ru", ("(rus)", " rus", "russian", "русск")),
    ("en", ("(eng)", " eng", "english", "англ")),
    ("uk", ("(ukr)", " ukr", "ukrain", "україн", "украин")),
)


def normalize_language(code: Optional[str]) -> str:
    """Primary subtag of a language tag, lowercased; ``"und"`` when missing."""
    if not code:
        return UNDETERMINED
    subtags = [part for part in code.split('-') if part]
    primary = subtags[0] if subtags else code
    return primary.lower()


def alternate_language_code(code: str) -> str:
    """Return the ISO-639-1/639-2 counterpart of ``code``, or ``code`` itself."""
    return ISO_639_ALIASES.get(code, code)


def language_keys(code: Optional[str]) -> List[str]:
    """
    Lookup keys under which a caller track is filed.

    Example:
        >>> language_keys("RUS")
        ['rus', 'ru']
        >>> language_keys(None)
        ['und']
    """
    lang = (code or "").lower()
    if not lang:
        return [UNDETERMINED]

    keys = [lang]
    alt = ISO_639_ALIASES.get(lang)
    if alt:
        keys.append(alt)
    return keys


def guess_language_from_name(name: str) -> Optional[str]:
    """
    Guess a two-letter language code from a rendition name such as
    ``"Dub (rus)"`` or ``"English 5.1"``.
    """
    lowered = name.lower()
    for code, hints in _NAME_HINTS:
        if any(hint in lowered for hint in hints):
            return code
    return None
