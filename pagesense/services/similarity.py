"""Pairwise similarity metrics over texts, keyword lists and content summaries.

Every metric is symmetric in its two arguments and returns a float clamped
to ``[0, 1]``.  Degenerate inputs (no usable tokens, empty keyword lists)
map to fixed fallback values instead of raising.
"""

import math
from collections import Counter
from typing import Dict, List, Sequence, Set, Tuple

from pagesense.models.summary import ContentSummary
from pagesense.services.tokenizer import tokenize

# combined_similarity weights
COSINE_WEIGHT = 0.5
BIGRAM_WEIGHT = 0.3
TRIGRAM_WEIGHT = 0.2

# summary_similarity weights; downstream grouping thresholds assume these
SUMMARY_TEXT_WEIGHT = 0.55
KEY_POINTS_WEIGHT = 0.25
SAME_TYPE_BONUS = 0.1
SAME_LANGUAGE_BONUS = 0.05
READING_TIME_WEIGHT = 0.05


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def term_frequency(tokens: Sequence[str]) -> Dict[str, float]:
    """Return each token's count divided by the document length."""
    if not tokens:
        return {}
    length = len(tokens)
    return {term: count / length for term, count in Counter(tokens).items()}


def cosine_similarity(text_a: str, text_b: str) -> float:
    """Cosine of the length-normalized term-frequency vectors of two texts."""
    tf_a = term_frequency(tokenize(text_a))
    tf_b = term_frequency(tokenize(text_b))
    if not tf_a or not tf_b:
        return 0.0

    # Sorted shared terms give the same summation order for (a, b) and (b, a)
    dot = sum(tf_a[term] * tf_b[term] for term in sorted(tf_a.keys() & tf_b.keys()))
    magnitude_a = math.sqrt(sum(weight * weight for weight in tf_a.values()))
    magnitude_b = math.sqrt(sum(weight * weight for weight in tf_b.values()))
    if magnitude_a == 0.0 or magnitude_b == 0.0:
        return 0.0
    return _clamp(dot / (magnitude_a * magnitude_b))


def _set_jaccard(set_a: Set[str], set_b: Set[str]) -> float:
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def jaccard_similarity(keywords_a: Sequence[str], keywords_b: Sequence[str]) -> float:
    """Intersection over union of two keyword lists (case-sensitive).

    Two empty lists are identical (1.0); one empty list shares nothing (0.0).
    """
    if not keywords_a and not keywords_b:
        return 1.0
    if not keywords_a or not keywords_b:
        return 0.0
    return _clamp(_set_jaccard(set(keywords_a), set(keywords_b)))


def ngrams(tokens: Sequence[str], n: int) -> List[str]:
    """Return the ordered, space-joined *n*-grams of *tokens*."""
    if n <= 0:
        return []
    return [" ".join(tokens[i:i + n]) for i in range(len(tokens) - n + 1)]


def ngram_similarity(text_a: str, text_b: str, n: int = 2) -> float:
    """Jaccard similarity of the *n*-gram sets of two texts.

    Texts too short to form a single *n*-gram score 0.0.
    """
    grams_a = set(ngrams(tokenize(text_a), n))
    grams_b = set(ngrams(tokenize(text_b), n))
    if not grams_a or not grams_b:
        return 0.0
    return _clamp(_set_jaccard(grams_a, grams_b))


def combined_similarity(text_a: str, text_b: str) -> float:
    """Blend of bag-of-words overlap and local word order."""
    score = (
        COSINE_WEIGHT * cosine_similarity(text_a, text_b)
        + BIGRAM_WEIGHT * ngram_similarity(text_a, text_b, 2)
        + TRIGRAM_WEIGHT * ngram_similarity(text_a, text_b, 3)
    )
    return _clamp(score)


def tf_idf(document: str, corpus: Sequence[str]) -> Dict[str, float]:
    """Return TF-IDF weights of *document*'s terms against *corpus*.

    The document itself counts as one more corpus member, so a term found
    nowhere else gets ``ln(len(corpus) + 1)`` and a term found everywhere
    gets 0.
    """
    tf = term_frequency(tokenize(document))
    if not tf:
        return {}

    corpus_vocabularies = [set(tokenize(doc)) for doc in corpus]
    corpus_size = len(corpus) + 1

    weights: Dict[str, float] = {}
    for term, frequency in tf.items():
        doc_count = 1 + sum(1 for vocabulary in corpus_vocabularies if term in vocabulary)
        weights[term] = frequency * math.log(corpus_size / doc_count)
    return weights


def _reading_time_ratio(minutes_a: int, minutes_b: int) -> float:
    longest = max(minutes_a, minutes_b)
    if longest <= 0:
        return 1.0
    return min(minutes_a, minutes_b) / longest


def summary_similarity(a: ContentSummary, b: ContentSummary) -> float:
    """Weighted similarity of two page summaries.

    ``0.55`` summary-text cosine, ``0.25`` key-point Jaccard, ``0.1`` for the
    same content type, ``0.05`` for the same language and ``0.05`` times the
    ratio of the shorter to the longer reading time.
    """
    score = (
        SUMMARY_TEXT_WEIGHT * cosine_similarity(a.summary_text, b.summary_text)
        + KEY_POINTS_WEIGHT * jaccard_similarity(a.key_points, b.key_points)
        + (SAME_TYPE_BONUS if a.content_type == b.content_type else 0.0)
        + (SAME_LANGUAGE_BONUS if a.language == b.language else 0.0)
        + READING_TIME_WEIGHT * _reading_time_ratio(a.reading_time_minutes, b.reading_time_minutes)
    )
    return _clamp(score)


def find_similar_documents(
    query: str,
    corpus: Sequence[str],
    threshold: float = 0.5,
) -> List[Tuple[int, float]]:
    """Return ``(index, score)`` for corpus entries at or above *threshold*.

    Results are sorted by score, highest first; equal scores keep corpus order.
    """
    results = []
    for index, document in enumerate(corpus):
        score = cosine_similarity(query, document)
        if score >= threshold:
            results.append((index, score))
    return sorted(results, key=lambda pair: pair[1], reverse=True)
