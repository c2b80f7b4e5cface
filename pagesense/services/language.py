"""Heuristic language tagging.

Script detection compares counts of CJK, Cyrillic and Arabic characters with
the count of ASCII letters. Latin-script text is then scored against a few
marker words per language, matched as substrings of the lower-cased text.
Short or mixed-language text is misclassified fairly often; the result is a
hint, not a verdict.
"""

from typing import Callable, Tuple

DEFAULT_LANGUAGE = "en"

# Languages whose reading speed is measured in characters, not words.
CHARACTER_BASED_LANGUAGES = frozenset({"zh", "ja", "ko"})

# Marker hits needed before a Latin-script language is chosen over English.
_MARKER_THRESHOLD = 3


def _is_cjk(char: str) -> bool:
    return "\u4e00" <= char <= "\u9fff" or "\u3400" <= char <= "\u4dbf"


def _is_cyrillic(char: str) -> bool:
    return "\u0400" <= char <= "\u04ff"


def _is_arabic(char: str) -> bool:
    return "\u0600" <= char <= "\u06ff"


# Checked in order; the first script that outnumbers Latin letters wins.
_SCRIPTS: Tuple[Tuple[str, Callable[[str], bool]], ...] = (
    ("zh", _is_cjk),
    ("ru", _is_cyrillic),
    ("ar", _is_arabic),
)

# Checked in order; the first language reaching the threshold wins.
_MARKER_WORDS: Tuple[Tuple[str, frozenset], ...] = (
    ("de", frozenset({"und", "der", "die", "das"})),
    ("fr", frozenset({"que", "pour", "avec", "dans"})),
    ("es", frozenset({"que", "para", "como", "pero"})),
)


def detect_language(text: str) -> str:
    """Return a two-letter language code for *text* (``"en"`` by default)."""
    latin = 0
    script_counts = {code: 0 for code, _ in _SCRIPTS}
    for char in text:
        if char.isascii():
            if char.isalpha():
                latin += 1
            continue
        for code, matches in _SCRIPTS:
            if matches(char):
                script_counts[code] += 1
                break

    for code, _ in _SCRIPTS:
        if script_counts[code] > latin:
            return code

    if latin == 0:
        return DEFAULT_LANGUAGE

    # Markers match anywhere in the text, so "under" counts for "und"
    lowered = text.lower()
    for code, markers in _MARKER_WORDS:
        if sum(1 for marker in markers if marker in lowered) >= _MARKER_THRESHOLD:
            return code

    return DEFAULT_LANGUAGE
