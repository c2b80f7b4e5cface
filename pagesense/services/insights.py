"""Secondary page insights: structure, named entities, sentiment and topics.

These are lexical heuristics, not trained models.  They are cheap and
deterministic, and are only run by the enhanced processing strategy.
"""

import re
from collections import Counter
from typing import Dict, List, Tuple

from bs4 import BeautifulSoup

from pagesense.models.analysis import EntityInfo, PageStructure, SentimentInfo
from pagesense.services.sanitizer import collapse_whitespace, is_navigation, sanitize
from pagesense.services.summarizer import extract_keywords_from_text
from pagesense.services.tokenizer import STOPWORDS, tokenize

_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]

# ---------------------------------------------------------------------------
# Entity patterns
# ---------------------------------------------------------------------------
_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
_URL_RE = re.compile(r"https?://[^\s<>\"']+")
# Runs of capitalized words such as "Ada Lovelace" or "Acme Widgets Inc"
_CAPITALIZED_RUN_RE = re.compile(r"\b[A-Z][\w'&-]*(?:\s+[A-Z][\w'&-]*)*")

_ORGANIZATION_SUFFIXES = frozenset(
    {
        "inc", "corp", "corporation", "ltd", "llc", "plc", "gmbh", "company",
        "university", "institute", "foundation", "group", "bank", "agency",
    }
)
_LOCATION_PREPOSITIONS = frozenset({"in", "at", "from", "near", "to"})
_PERSON_TITLES = frozenset({"mr", "mrs", "ms", "dr", "prof", "sir"})

_ENTITY_CONFIDENCE: Dict[str, float] = {
    "email": 0.95,
    "url": 0.95,
    "organization": 0.7,
    "person": 0.6,
    "location": 0.55,
    "other": 0.4,
}

MAX_ENTITIES = 20

# A single capitalized word after one of these opens a sentence
_SENTENCE_END_CHARS = ".!?:\"'"

# ---------------------------------------------------------------------------
# Sentiment lexicon
# ---------------------------------------------------------------------------
_POSITIVE_WORDS = frozenset(
    {
        "good", "great", "excellent", "amazing", "awesome", "best", "better",
        "love", "loved", "happy", "success", "successful", "win", "wins",
        "improve", "improved", "benefit", "positive", "fast", "easy", "helpful",
        "wonderful", "fantastic", "reliable", "recommend", "growth", "gain",
    }
)
_NEGATIVE_WORDS = frozenset(
    {
        "bad", "poor", "terrible", "awful", "worst", "worse", "hate", "hated",
        "sad", "fail", "failed", "failure", "lose", "loss", "problem", "bug",
        "broken", "slow", "difficult", "negative", "crash", "crashes", "risk",
        "decline", "error", "angry", "disappointing",
    }
)
_SENTIMENT_NEUTRAL_BAND = 0.2

# Keywords sharing this many leading characters are treated as one topic
_TOPIC_STEM_LENGTH = 5


def _headings(soup: BeautifulSoup) -> List[str]:
    headings = []
    for tag in soup.find_all(_HEADING_TAGS):
        text = collapse_whitespace(tag.get_text(separator=" "))
        if text:
            headings.append(text)
    return headings


def extract_headings(html: str) -> List[str]:
    """Return the text of every ``<h1>``..``<h6>`` in document order."""
    return _headings(sanitize(html))


def analyze_page_structure(html: str) -> PageStructure:
    soup = sanitize(html)
    headings = _headings(soup)
    body_text = collapse_whitespace(soup.get_text(separator=" "))
    return PageStructure(
        headings=headings,
        heading_count=len(headings),
        paragraph_count=len(soup.find_all("p")),
        link_count=len(soup.find_all("a", href=True)),
        image_count=len(soup.find_all("img")),
        list_count=len(soup.find_all(["ul", "ol"])),
        table_count=len(soup.find_all("table")),
        form_count=len(soup.find_all("form")),
        has_navigation=any(is_navigation(tag) for tag in soup.find_all(True)),
        word_count=len(body_text.split()),
    )


def _preceding(text: str, position: int) -> Tuple[str, str]:
    """Return the last non-space character and the last word before *position*.

    Scans backwards from *position* only as far as the previous word.
    """
    end = position
    while end > 0 and text[end - 1].isspace():
        end -= 1
    begin = end
    while begin > 0 and not text[begin - 1].isspace():
        begin -= 1
    last_char = text[end - 1] if end else ""
    return last_char, text[begin:end]


def _classify_run(words: List[str], preceding_word: str) -> str:
    if words[-1].lower().rstrip(".") in _ORGANIZATION_SUFFIXES:
        return "organization"
    if words[0].lower().rstrip(".") in _PERSON_TITLES:
        return "person"
    if preceding_word in _LOCATION_PREPOSITIONS:
        return "location"
    if 2 <= len(words) <= 3:
        return "person"
    return "other"


def extract_entities(text: str) -> List[EntityInfo]:
    """Find e-mail addresses, URLs and capitalized names in *text*.

    A single capitalized word opening a sentence is ignored.  Results are
    ordered by frequency, then by first appearance, and capped at
    :data:`MAX_ENTITIES`.
    """
    counts: Counter = Counter()
    types: Dict[str, str] = {}

    for pattern, entity_type in ((_EMAIL_RE, "email"), (_URL_RE, "url")):
        for match in pattern.finditer(text):
            value = match.group(0).rstrip(".,;:)")
            counts[value] += 1
            types.setdefault(value, entity_type)

    # Blank out e-mails and URLs so their parts are not read as names
    remainder = _URL_RE.sub(" ", _EMAIL_RE.sub(" ", text))

    for match in _CAPITALIZED_RUN_RE.finditer(remainder):
        words = match.group(0).split()
        while words and words[0].lower() in STOPWORDS:
            words.pop(0)
        if not words:
            continue
        last_char, preceding_word = _preceding(remainder, match.start())
        if len(words) == 1 and (not last_char or last_char in _SENTENCE_END_CHARS):
            continue
        name = " ".join(words)
        counts[name] += 1
        types.setdefault(name, _classify_run(words, preceding_word.lower()))

    entities = []
    for name, frequency in counts.most_common(MAX_ENTITIES):
        entity_type = types[name]
        entities.append(
            EntityInfo(
                text=name,
                entity_type=entity_type,
                frequency=frequency,
                confidence=_ENTITY_CONFIDENCE[entity_type],
            )
        )
    return entities


def analyze_sentiment(text: str) -> SentimentInfo:
    """Score *text* from -1 (negative) to 1 (positive) by lexicon hits."""
    words = tokenize(text, min_length=1, drop_stopwords=False)
    positive = sum(1 for word in words if word in _POSITIVE_WORDS)
    negative = sum(1 for word in words if word in _NEGATIVE_WORDS)
    if positive + negative == 0:
        return SentimentInfo(label="neutral", score=0.0)

    score = (positive - negative) / (positive + negative)
    if score > _SENTIMENT_NEUTRAL_BAND:
        label = "positive"
    elif score < -_SENTIMENT_NEUTRAL_BAND:
        label = "negative"
    else:
        label = "neutral"
    return SentimentInfo(label=label, score=score)


def extract_topics(text: str, max_topics: int = 5) -> List[str]:
    """Return up to *max_topics* topic words from *text*.

    Frequent keywords are clustered by a shared prefix ("learn", "learning",
    "learned") and each cluster is named after its most frequent member.
    """
    if max_topics <= 0:
        return []
    keywords = extract_keywords_from_text(text, max_topics * 3)
    clusters: Dict[str, Tuple[str, ...]] = {}
    for keyword in keywords:
        stem = keyword[:_TOPIC_STEM_LENGTH]
        clusters[stem] = clusters.get(stem, ()) + (keyword,)
    # Keywords arrive most frequent first, so each cluster's head names it
    return [members[0] for members in clusters.values()][:max_topics]
