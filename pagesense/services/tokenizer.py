"""Word tokenization and sentence segmentation shared by every analysis module.

Summarization, keyword extraction, similarity scoring and group naming all
tokenize through :func:`tokenize` so that identical text with identical
thresholds always yields identical tokens.
"""

import re
from typing import List

# Common English function words that carry no topical signal.
STOPWORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for",
        "of", "with", "by", "from", "as", "is", "was", "are", "were", "been",
        "be", "have", "has", "had", "do", "does", "did", "will", "would", "could",
        "should", "may", "might", "must", "shall", "can", "need", "dare", "ought",
        "used", "this", "that", "these", "those", "i", "you", "he", "she", "it",
        "we", "they", "what", "which", "who", "whom", "whose", "where", "when",
        "why", "how", "all", "each", "every", "both", "few", "more", "most",
        "other", "some", "such", "no", "nor", "not", "only", "own", "same",
        "so", "than", "too", "very", "just", "also", "now", "here", "there",
        "about", "into", "their", "them", "then", "your", "our", "its",
    }
)

# Default minimum token length: tokens of one or two characters are noise.
MIN_TOKEN_LENGTH = 3

# Trimmed sentences shorter than this are dropped.
_MIN_SENTENCE_LEN = 10

# A word of at most this many characters before a "." is treated as an
# abbreviation or initial ("Dr.", "U.S.", "e.g.") rather than a sentence end.
_ABBREVIATION_MAX_LEN = 3

# Runs of Unicode letters/digits; "_" is a word character for ``\w`` but a
# boundary here.
_TOKEN_RE = re.compile(r"[^\W_]+")

_TERMINATORS = ".!?"


def tokenize(
    text: str,
    min_length: int = MIN_TOKEN_LENGTH,
    drop_stopwords: bool = True,
) -> List[str]:
    """Return the lowercase alphanumeric tokens of *text*.

    Tokens shorter than *min_length* characters are discarded, and so are
    members of :data:`STOPWORDS` unless *drop_stopwords* is false.
    """
    tokens: List[str] = []
    for token in _TOKEN_RE.findall(text.lower()):
        if len(token) < min_length:
            continue
        if drop_stopwords and token in STOPWORDS:
            continue
        tokens.append(token)
    return tokens


def _append_sentence(sentences: List[str], fragment: str) -> None:
    trimmed = fragment.strip()
    if len(trimmed) >= _MIN_SENTENCE_LEN:
        sentences.append(trimmed)


def split_sentences(text: str) -> List[str]:
    """Split *text* into sentences ending in ``.``, ``!`` or ``?``.

    This is a heuristic: a "." preceded by a word of three characters or
    fewer does not end a sentence, so some real sentence breaks are merged.
    A trailing fragment without terminal punctuation becomes the last
    sentence when it is long enough.  Runs in a single pass over *text*.
    """
    sentences: List[str] = []
    start = 0
    last_space = -1

    for index, char in enumerate(text):
        if char.isspace():
            last_space = index
            continue
        if char not in _TERMINATORS:
            continue
        # The word before a "." starts after the last space or the sentence start
        word_start = max(start, last_space + 1)
        if char == "." and index - word_start <= _ABBREVIATION_MAX_LEN:
            continue
        _append_sentence(sentences, text[start:index + 1])
        start = index + 1

    _append_sentence(sentences, text[start:])
    return sentences
