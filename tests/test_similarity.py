"""Tests for pagesense.services.similarity."""

import math

import pytest

from pagesense.models.summary import ContentSummary, ContentType
from pagesense.services.similarity import (
    combined_similarity,
    cosine_similarity,
    find_similar_documents,
    jaccard_similarity,
    ngram_similarity,
    ngrams,
    summary_similarity,
    term_frequency,
    tf_idf,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _summary(**overrides) -> ContentSummary:
    fields = {
        "summary_text": "python data pipelines scale nicely",
        "key_points": ["python data pipelines"],
        "content_type": ContentType.ARTICLE,
        "language": "en",
        "reading_time_minutes": 2,
        "confidence_score": 0.8,
    }
    fields.update(overrides)
    return ContentSummary(**fields)


# ---------------------------------------------------------------------------
# Text metrics
# ---------------------------------------------------------------------------

class TestCosine:
    def test_identical(self):
        assert cosine_similarity("solar panels convert light", "solar panels convert light") == pytest.approx(1.0)

    def test_disjoint(self):
        assert cosine_similarity("solar panels", "chocolate cake") == 0.0

    def test_symmetric(self):
        a = "rivers carry water across regions water"
        b = "water flows into basins and rivers"
        assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_empty_input(self):
        assert cosine_similarity("", "solar panels") == 0.0

    def test_stopwords_only(self):
        assert cosine_similarity("the and of", "the and of") == 0.0

    def test_term_frequency(self):
        assert term_frequency(["a", "b", "a", "a"]) == {"a": 0.75, "b": 0.25}


class TestJaccard:
    def test_partial_overlap(self):
        assert jaccard_similarity(["rust", "wasm"], ["rust", "go"]) == pytest.approx(1 / 3)

    def test_both_empty(self):
        assert jaccard_similarity([], []) == 1.0

    def test_one_empty(self):
        assert jaccard_similarity(["rust"], []) == 0.0

    def test_case_sensitive(self):
        assert jaccard_similarity(["Rust"], ["rust"]) == 0.0


class TestNgrams:
    def test_bigrams(self):
        assert ngrams(["a", "b", "c"], 2) == ["a b", "b c"]

    def test_too_short(self):
        assert ngrams(["a"], 2) == []

    def test_non_positive_n(self):
        assert ngrams(["a", "b"], 0) == []

    def test_similarity_identical(self):
        text = "python data pipelines scale"
        assert ngram_similarity(text, text, 2) == 1.0

    def test_similarity_of_single_token_texts(self):
        assert ngram_similarity("hello", "hello", 2) == 0.0

    def test_combined_identical(self):
        text = "python data pipelines scale nicely"
        assert combined_similarity(text, text) == pytest.approx(1.0)

    def test_combined_in_range(self):
        score = combined_similarity("python data pipelines", "python snakes slither")
        assert 0.0 <= score <= 1.0


class TestTfIdf:
    def test_weights(self):
        weights = tf_idf("apple banana", ["apple cherry"])
        assert weights["apple"] == pytest.approx(0.0)
        assert weights["banana"] == pytest.approx(0.5 * math.log(2))

    def test_empty_document(self):
        assert tf_idf("", ["apple"]) == {}

    def test_empty_corpus(self):
        assert tf_idf("apple", []) == {"apple": 0.0}


# ---------------------------------------------------------------------------
# Summaries and search
# ---------------------------------------------------------------------------

class TestSummarySimilarity:
    def test_identical(self):
        assert summary_similarity(_summary(), _summary()) == pytest.approx(1.0)

    def test_only_type_and_reading_time_shared(self):
        a = _summary(reading_time_minutes=1)
        b = _summary(
            summary_text="chocolate cake recipe",
            key_points=["chocolate cake"],
            language="fr",
            reading_time_minutes=2,
        )
        assert summary_similarity(a, b) == pytest.approx(0.1 + 0.05 * 0.5)

    def test_symmetric(self):
        a = _summary()
        b = _summary(summary_text="python snakes", content_type=ContentType.NEWS)
        assert summary_similarity(a, b) == summary_similarity(b, a)


class TestFindSimilarDocuments:
    def test_sorted_and_filtered(self):
        results = find_similar_documents("python data", ["python data", "cooking recipes", "python snakes"], 0.4)
        assert [index for index, _score in results] == [0, 2]
        assert results[0][1] == pytest.approx(1.0)
        assert results[1][1] == pytest.approx(0.5)

    def test_empty_corpus(self):
        assert find_similar_documents("python", []) == []


# ---------------------------------------------------------------------------
# Range and symmetry over assorted inputs
# ---------------------------------------------------------------------------

_TEXTS = [
    "",
    "the and of",
    "solar panels convert sunlight",
    "Solar panels, solar cells and solar farms!",
    "chocolate cake recipe with butter",
    "这是一个中文句子",
]


class TestMetricProperties:
    @pytest.mark.parametrize("a", _TEXTS)
    @pytest.mark.parametrize("b", _TEXTS)
    def test_text_metrics_in_range_and_symmetric(self, a, b):
        for metric in (cosine_similarity, ngram_similarity, combined_similarity):
            score = metric(a, b)
            assert 0.0 <= score <= 1.0
            assert score == metric(b, a)

    def test_jaccard_of_list_with_itself(self):
        keywords = ["rust", "wasm", "go"]
        assert jaccard_similarity(keywords, keywords) == 1.0
