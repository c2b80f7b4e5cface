"""Tests for pagesense.services.processor.ContentProcessor."""

import pytest

from pagesense.models.page import PageContent
from pagesense.models.processing import ProcessingMode
from pagesense.models.summary import ContentType
from pagesense.services.processor import (
    AUTO_ENHANCED_MAX_CHARS,
    MAX_CONTENT_LENGTH,
    ContentProcessor,
    validate_content_size,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_S1 = "Bananas are yellow fruit grown in warm places."
_S2 = "Rivers carry fresh water across many regions."
_S3 = "Mountains stand tall above quiet green valleys."
_S4 = "Water water water flows into water basins."
_TEXT = " ".join([_S1, _S2, _S3, _S4])

_HTML = (
    "<html><head><title>Solar Review</title></head><body>"
    "<nav><a href='/'>Home</a></nav><h1>Solar panels</h1>"
    "<p>These solar panels are great. Ada Lovelace would recommend them.</p>"
    "</body></html>"
)


@pytest.fixture
def processor():
    return ContentProcessor()


# ---------------------------------------------------------------------------
# Mode and capabilities
# ---------------------------------------------------------------------------

class TestMode:
    def test_default_is_auto(self, processor):
        assert processor.get_processing_mode() is ProcessingMode.AUTO

    def test_set_mode(self, processor):
        processor.set_processing_mode(ProcessingMode.BASIC)
        assert processor.get_processing_mode() is ProcessingMode.BASIC

    def test_enhanced_capabilities(self, processor):
        capabilities = processor.get_current_capabilities()
        assert capabilities.mode is ProcessingMode.AUTO
        assert capabilities.supports_enhanced_mode is True
        assert capabilities.supports_sentiment_analysis is True
        assert capabilities.supports_media_analysis is False
        assert capabilities.max_content_length == MAX_CONTENT_LENGTH
        assert "en" in capabilities.supported_languages

    def test_basic_capabilities(self):
        capabilities = ContentProcessor(ProcessingMode.BASIC).get_current_capabilities()
        assert capabilities.supports_enhanced_mode is False
        assert capabilities.supports_sentiment_analysis is False


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------

class TestGenerateSummary:
    def test_enhanced_summary(self, processor):
        summary = processor.generate_summary(PageContent(title="Nature notes", text=_TEXT))
        assert _S2 in summary.summary_text
        assert _S4 in summary.summary_text
        assert summary.key_points[0] == _S4
        assert summary.language == "en"
        assert summary.reading_time_minutes == 1
        assert summary.content_type == ContentType.ARTICLE

    def test_confidence_components(self, processor):
        summary = processor.generate_summary(PageContent(title="Nature notes", text=_TEXT))
        assert summary.confidence_score == pytest.approx(0.85)

    def test_confidence_capped(self, processor):
        page = PageContent(title="Nature notes", description="About nature.", text=" ".join([_TEXT] * 3))
        assert processor.generate_summary(page).confidence_score == pytest.approx(0.95)

    def test_empty_page(self, processor):
        summary = processor.generate_summary(PageContent())
        assert summary.summary_text == ""
        assert summary.key_points == []
        assert summary.reading_time_minutes == 1
        assert summary.confidence_score == pytest.approx(0.5)

    def test_basic_mode_uses_lead_sentences(self):
        processor = ContentProcessor(ProcessingMode.BASIC)
        summary = processor.generate_summary(PageContent(text=_TEXT))
        assert summary.summary_text == f"{_S1} {_S2} {_S3}"
        assert summary.key_points == [_S1, _S2, _S3, _S4]

    def test_text_extracted_from_html(self, processor):
        summary = processor.generate_summary(PageContent(html=_HTML))
        assert "solar panels" in summary.summary_text


# ---------------------------------------------------------------------------
# Keywords, classification, topics, metadata
# ---------------------------------------------------------------------------

class TestPageAnalysis:
    def test_keywords(self, processor):
        page = PageContent(title="Delta Title", text="alpha beta gamma", keywords=["meta"])
        assert processor.extract_keywords(page) == ["delta", "title", "meta", "alpha", "beta", "gamma"]

    def test_classify(self, processor):
        category = processor.classify_content(PageContent(title="Breaking News: Market Crashes"))
        assert category.primary_category == "News"

    def test_topics_from_keywords(self, processor):
        topics = processor.identify_main_topics(PageContent(keywords=["solar", "energy", "solar", "power"]))
        assert topics.main_topic == "solar"
        assert topics.sub_topics == ["energy", "power"]
        assert topics.confidence == 0.7

    def test_topics_from_text(self, processor):
        topics = processor.identify_main_topics(PageContent(text="learning learned learning models models"))
        assert topics.main_topic == "learning"
        assert topics.sub_topics == ["models"]
        assert topics.confidence == 0.5

    def test_general_topic(self, processor):
        topics = processor.identify_main_topics(PageContent())
        assert topics.main_topic == "General"
        assert topics.confidence == 0.3

    def test_page_metadata(self, processor):
        page = PageContent(title="T", description="D", keywords=["k"], images=["i.png"])
        assert processor.extract_page_metadata(page) == [
            "title:T",
            "description:D",
            "keyword:k",
            "image_count:1",
            "link_count:0",
        ]


class TestAnalyzePage:
    def test_enhanced_includes_insights(self):
        analysis = ContentProcessor(ProcessingMode.ENHANCED).analyze_page(PageContent(html=_HTML))
        assert analysis.sentiment is not None
        assert analysis.sentiment.label == "positive"
        assert analysis.structure is not None
        assert analysis.structure.has_navigation is True
        assert any(entity.text == "Ada Lovelace" for entity in analysis.entities)

    def test_structure_requires_html(self):
        analysis = ContentProcessor(ProcessingMode.ENHANCED).analyze_page(PageContent(text=_TEXT))
        assert analysis.structure is None
        assert analysis.sentiment is not None

    def test_basic_skips_insights(self):
        analysis = ContentProcessor(ProcessingMode.BASIC).analyze_page(PageContent(html=_HTML))
        assert analysis.entities == []
        assert analysis.sentiment is None
        assert analysis.structure is None
        assert analysis.keywords

    def test_auto_falls_back_to_basic_for_large_text(self, processor):
        text = _S1 + " " + "river " * (AUTO_ENHANCED_MAX_CHARS // 6 + 10)
        analysis = processor.analyze_page(PageContent(text=text))
        assert analysis.sentiment is None


# ---------------------------------------------------------------------------
# Cross-page
# ---------------------------------------------------------------------------

class TestCrossPage:
    def test_identical_summaries(self, processor):
        summary = processor.generate_summary(PageContent(text=_TEXT))
        assert processor.calculate_similarity(summary, summary) == pytest.approx(1.0)

    def test_content_relevance(self, processor):
        page = PageContent(text=_TEXT, keywords=["water", "rivers"])
        relevance = processor.calculate_content_relevance(page, page)
        assert relevance.score == pytest.approx(1.0)
        assert relevance.common_keywords == ["water", "rivers"]

    def test_unrelated_relevance(self, processor):
        relevance = processor.calculate_content_relevance(
            PageContent(text="solar panels", keywords=["solar"]),
            PageContent(text="chocolate cake", keywords=["cake"]),
        )
        assert relevance.score == 0.0
        assert relevance.common_keywords == []

    def test_suggest_groups(self, processor):
        pages = [PageContent(text=_TEXT), PageContent(text=_TEXT), PageContent(text="chocolate cake recipe")]
        groups = processor.suggest_groups(pages)
        assert [group.page_ids for group in groups] == [["0", "1"]]


class TestValidateContentSize:
    def test_within_limit(self):
        validate_content_size(PageContent(text="a" * MAX_CONTENT_LENGTH))

    def test_over_limit(self):
        with pytest.raises(ValueError):
            validate_content_size(PageContent(text="a" * (MAX_CONTENT_LENGTH + 1)))

    def test_html_and_text_counted_together(self):
        half = MAX_CONTENT_LENGTH // 2 + 1
        with pytest.raises(ValueError):
            validate_content_size(PageContent(html="a" * half, text="b" * half))
