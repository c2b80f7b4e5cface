"""Processing facade: composes the analysis modules under a processing mode.

:class:`ContentProcessor` is the only stateful object in the engine, and its
only state is the current :class:`ProcessingMode`.  The mode picks one of
two strategies through :data:`_STRATEGIES`:

``BASIC``
    Lead sentences as summary and key points; no entities, sentiment or
    structure analysis.
``ENHANCED``
    Frequency-ranked extractive summary and key points plus all insights.
``AUTO``
    ENHANCED for texts up to :data:`AUTO_ENHANCED_MAX_CHARS`, BASIC beyond.
"""

import logging
from typing import Callable, Dict, List, NamedTuple, Sequence

from pagesense.models.analysis import ContentAnalysis, TopicInfo
from pagesense.models.group import GroupSuggestion, RelevanceScore
from pagesense.models.page import PageContent
from pagesense.models.processing import ProcessingCapabilities, ProcessingMode
from pagesense.models.summary import CategoryInfo, ContentSummary
from pagesense.services.classifier import classify_content, classify_content_type
from pagesense.services.extractor import resolve_text
from pagesense.services.grouping import suggest_by_content
from pagesense.services.insights import analyze_page_structure, analyze_sentiment, extract_entities, extract_topics
from pagesense.services.language import detect_language
from pagesense.services.similarity import cosine_similarity, jaccard_similarity, summary_similarity
from pagesense.services.summarizer import (
    estimate_reading_time,
    extract_key_points,
    generate_summary,
    lead_key_points,
    lead_summary,
    merge_keywords,
)

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 1024 * 1024  # 1 MiB
SUPPORTED_LANGUAGES = ("en", "zh", "ja", "ko", "es", "fr", "de", "ru", "ar")
AUTO_ENHANCED_MAX_CHARS = 200_000

SUMMARY_SENTENCES = 3
KEY_POINTS = 5
MAX_SUB_TOPICS = 4

# Relevance weights for calculate_content_relevance
_TEXT_RELEVANCE_WEIGHT = 0.7
_KEYWORD_RELEVANCE_WEIGHT = 0.3

_BASE_CONFIDENCE = 0.5
_MAX_CONFIDENCE = 0.95
_LONG_TEXT_CHARS = 500


class _Strategy(NamedTuple):
    summarize: Callable[[str, int], str]
    key_points: Callable[[str, int], List[str]]
    insights: bool


_STRATEGIES: Dict[ProcessingMode, _Strategy] = {
    ProcessingMode.BASIC: _Strategy(lead_summary, lead_key_points, insights=False),
    ProcessingMode.ENHANCED: _Strategy(generate_summary, extract_key_points, insights=True),
}


def _confidence(summary_text: str, key_points: List[str], content: PageContent, text: str) -> float:
    confidence = _BASE_CONFIDENCE
    if summary_text:
        confidence += 0.15
    if key_points:
        confidence += 0.1
    if content.title:
        confidence += 0.1
    if content.description is not None:
        confidence += 0.1
    if len(text) > _LONG_TEXT_CHARS:
        confidence += 0.05
    return min(confidence, _MAX_CONFIDENCE)


class ContentProcessor:
    """Analyze pages under a configurable :class:`ProcessingMode`."""

    def __init__(self, mode: ProcessingMode = ProcessingMode.AUTO) -> None:
        self._mode = mode

    def set_processing_mode(self, mode: ProcessingMode) -> None:
        logger.debug("Processing mode %s -> %s", self._mode.value, mode.value)
        self._mode = mode

    def get_processing_mode(self) -> ProcessingMode:
        return self._mode

    def get_current_capabilities(self) -> ProcessingCapabilities:
        enhanced = self._mode is not ProcessingMode.BASIC
        return ProcessingCapabilities(
            mode=self._mode,
            supports_enhanced_mode=enhanced,
            supports_media_analysis=False,
            supports_sentiment_analysis=enhanced,
            max_content_length=MAX_CONTENT_LENGTH,
            supported_languages=list(SUPPORTED_LANGUAGES),
        )

    def _strategy_for(self, text: str) -> _Strategy:
        mode = self._mode
        if mode is ProcessingMode.AUTO:
            mode = ProcessingMode.ENHANCED if len(text) <= AUTO_ENHANCED_MAX_CHARS else ProcessingMode.BASIC
        return _STRATEGIES[mode]

    # ── per-page analysis ────────────────────────────────────────────────────

    def generate_summary(self, content: PageContent) -> ContentSummary:
        text = resolve_text(content)
        strategy = self._strategy_for(text)
        summary_text = strategy.summarize(text, SUMMARY_SENTENCES)
        key_points = strategy.key_points(text, KEY_POINTS)
        language = detect_language(text)
        return ContentSummary(
            summary_text=summary_text,
            key_points=key_points,
            content_type=classify_content_type(content),
            language=language,
            reading_time_minutes=estimate_reading_time(text, language),
            confidence_score=_confidence(summary_text, key_points, content, text),
        )

    def extract_keywords(self, content: PageContent) -> List[str]:
        return merge_keywords(content.keywords, resolve_text(content), content.title)

    def classify_content(self, content: PageContent) -> CategoryInfo:
        return classify_content(content)

    def identify_main_topics(self, content: PageContent) -> TopicInfo:
        """Main topic from metadata keywords, else from the text, else ``"General"``."""
        if content.keywords:
            topics, confidence = list(dict.fromkeys(content.keywords)), 0.7
        else:
            topics, confidence = extract_topics(resolve_text(content), MAX_SUB_TOPICS + 1), 0.5
        if not topics:
            return TopicInfo(main_topic="General", sub_topics=[], confidence=0.3)
        return TopicInfo(
            main_topic=topics[0],
            sub_topics=topics[1:MAX_SUB_TOPICS + 1],
            confidence=confidence,
        )

    def extract_page_metadata(self, content: PageContent) -> List[str]:
        """Flatten the page's metadata into ``"key:value"`` strings."""
        metadata = [f"title:{content.title}"]
        if content.description is not None:
            metadata.append(f"description:{content.description}")
        metadata.extend(f"keyword:{keyword}" for keyword in content.keywords)
        metadata.append(f"image_count:{len(content.images)}")
        metadata.append(f"link_count:{len(content.links)}")
        return metadata

    def analyze_page(self, content: PageContent) -> ContentAnalysis:
        """Run every analysis the current mode allows on one page."""
        text = resolve_text(content)
        strategy = self._strategy_for(text)
        return ContentAnalysis(
            summary=self.generate_summary(content),
            category=self.classify_content(content),
            keywords=self.extract_keywords(content),
            entities=extract_entities(text) if strategy.insights else [],
            topics=self.identify_main_topics(content),
            sentiment=analyze_sentiment(text) if strategy.insights else None,
            structure=analyze_page_structure(content.html) if strategy.insights and content.html else None,
        )

    # ── cross-page analysis ──────────────────────────────────────────────────

    def calculate_similarity(self, a: ContentSummary, b: ContentSummary) -> float:
        return summary_similarity(a, b)

    def calculate_content_relevance(self, a: PageContent, b: PageContent) -> RelevanceScore:
        """Relevance of two pages: ``0.7`` text cosine plus ``0.3`` keyword Jaccard."""
        score = (
            _TEXT_RELEVANCE_WEIGHT * cosine_similarity(resolve_text(a), resolve_text(b))
            + _KEYWORD_RELEVANCE_WEIGHT * jaccard_similarity(a.keywords, b.keywords)
        )
        shared = set(b.keywords)
        return RelevanceScore(
            score=min(1.0, score),
            common_keywords=[keyword for keyword in dict.fromkeys(a.keywords) if keyword in shared],
        )

    def suggest_groups(self, pages: Sequence[PageContent]) -> List[GroupSuggestion]:
        return suggest_by_content(pages)


def validate_content_size(content: PageContent) -> None:
    """Raise ValueError if *content* exceeds :data:`MAX_CONTENT_LENGTH` characters."""
    size = len(content.html) + len(content.text)
    if size > MAX_CONTENT_LENGTH:
        raise ValueError(
            f"Content is {size} characters; the maximum is {MAX_CONTENT_LENGTH}."
        )
