"""Frequency-based extractive summarization, keywords and reading time.

Sentences are scored by the average normalized corpus frequency of their
tokens, so sentences dense in the text's most repeated terms rank highest.
Nothing is generated: summaries and key points are existing sentences.
"""

from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from pagesense.services.language import CHARACTER_BASED_LANGUAGES, detect_language
from pagesense.services.tokenizer import split_sentences, tokenize

# Fallback summary length when the text has no recognisable sentences
_TRUNCATE_CHARS = 200
_KEY_POINT_MAX_CHARS = 150
_ELLIPSIS = "..."

# Sentences among the first few get a lede bonus
_LEDE_SENTENCES = 3
_LEDE_BONUS = 1.2

_SHORT_SENTENCE_TOKENS = 5
_LONG_SENTENCE_TOKENS = 30

WORDS_PER_MINUTE = 200
CHARACTERS_PER_MINUTE = 300

# Keyword merge policy limits
TEXT_KEYWORDS = 15
TITLE_KEYWORDS = 5
MAX_MERGED_KEYWORDS = 20


def _length_factor(token_count: int) -> float:
    if token_count < _SHORT_SENTENCE_TOKENS:
        return 0.5
    if token_count > _LONG_SENTENCE_TOKENS:
        return 0.7
    return 1.0


def _score_sentence(sentence: str, frequencies: Dict[str, int], max_frequency: int) -> float:
    tokens = tokenize(sentence)
    if not tokens:
        return 0.0
    total = sum(frequencies.get(token, 0) / max_frequency for token in tokens)
    return total / len(tokens) * _length_factor(len(tokens))


def _rank_sentences(text: str, sentences: List[str], lede_bonus: bool) -> List[Tuple[float, int]]:
    """Return ``(score, index)`` pairs ordered best first; ties keep document order."""
    frequencies = Counter(tokenize(text))
    max_frequency = max(frequencies.values(), default=1)

    scored: List[Tuple[float, int]] = []
    for index, sentence in enumerate(sentences):
        score = _score_sentence(sentence, frequencies, max_frequency)
        if lede_bonus and index < _LEDE_SENTENCES:
            score *= _LEDE_BONUS
        scored.append((score, index))

    return sorted(scored, key=lambda pair: pair[0], reverse=True)


def _truncate(text: str, limit: int) -> str:
    """Cut *text* to at most *limit* characters, ending in an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[: limit - len(_ELLIPSIS)] + _ELLIPSIS


def _clip(text: str) -> str:
    """Keep the first 200 characters of *text*, then mark the cut with an ellipsis."""
    if len(text) <= _TRUNCATE_CHARS:
        return text
    return text[:_TRUNCATE_CHARS] + _ELLIPSIS


def generate_summary(text: str, max_sentences: int = 3) -> str:
    """Return up to *max_sentences* top-scored sentences of *text* in reading order."""
    text = text.strip()
    if not text or max_sentences <= 0:
        return ""

    sentences = split_sentences(text)
    if not sentences:
        return _clip(text)
    if len(sentences) <= max_sentences:
        return " ".join(sentences)

    ranked = _rank_sentences(text, sentences, lede_bonus=True)
    selected = sorted(index for _score, index in ranked[:max_sentences])
    return " ".join(sentences[index] for index in selected)


def extract_key_points(text: str, max_points: int = 5) -> List[str]:
    """Return the top-scored sentences of *text*, best first, each at most 150 chars."""
    text = text.strip()
    if not text or max_points <= 0:
        return []

    sentences = split_sentences(text)
    ranked = _rank_sentences(text, sentences, lede_bonus=False)
    return [_truncate(sentences[index], _KEY_POINT_MAX_CHARS) for _score, index in ranked[:max_points]]


def lead_summary(text: str, max_sentences: int = 3) -> str:
    """Return the first *max_sentences* sentences of *text* unchanged."""
    text = text.strip()
    if not text or max_sentences <= 0:
        return ""
    sentences = split_sentences(text)
    if not sentences:
        return _clip(text)
    return " ".join(sentences[:max_sentences])


def lead_key_points(text: str, max_points: int = 5) -> List[str]:
    if max_points <= 0:
        return []
    return [_truncate(s, _KEY_POINT_MAX_CHARS) for s in split_sentences(text)[:max_points]]


def extract_keywords_from_text(text: str, max_keywords: int = 10) -> List[str]:
    """Return up to *max_keywords* tokens of *text* ranked by frequency.

    Only repeated tokens qualify, unless the text has fewer than
    *max_keywords* distinct tokens, in which case singletons are kept so
    short content still yields keywords.
    """
    if not text or max_keywords <= 0:
        return []

    frequencies = Counter(tokenize(text))
    ranked = frequencies.most_common()
    if len(frequencies) >= max_keywords:
        ranked = [(word, count) for word, count in ranked if count > 1]
    return [word for word, _count in ranked[:max_keywords]]


def merge_keywords(
    metadata_keywords: Sequence[str],
    text: str,
    title: str = "",
) -> List[str]:
    """Combine metadata, text and title keywords into one list of at most 20.

    Metadata keywords come first, followed by new text keywords. Up to five
    new title keywords are then placed in front.
    """
    keywords = list(metadata_keywords)
    for keyword in extract_keywords_from_text(text, TEXT_KEYWORDS):
        if keyword not in keywords:
            keywords.append(keyword)

    title_keywords = [
        keyword
        for keyword in extract_keywords_from_text(title, TITLE_KEYWORDS)
        if keyword not in keywords
    ]
    return (title_keywords + keywords)[:MAX_MERGED_KEYWORDS]


def estimate_reading_time(text: str, language: Optional[str] = None) -> int:
    """Return the estimated reading time of *text* in whole minutes, never below 1."""
    language = language or detect_language(text)
    if language in CHARACTER_BASED_LANGUAGES:
        characters = sum(1 for char in text if not char.isspace())
        return max(1, characters // CHARACTERS_PER_MINUTE)
    return max(1, len(text.split()) // WORDS_PER_MINUTE)
