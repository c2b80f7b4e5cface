"""Group suggestions for a batch of pages.

Pages are identified in the output by caller-supplied ``page_ids`` (their
positions in the input, as strings, when none are given).  All strategies
are pure functions of their input; pairwise strategies are O(n^2) in the
number of pages and never drop pages to save work, so callers with large
batches should pre-partition them (for example by domain) first.
"""

import logging
import re
from collections import Counter
from typing import Dict, List, Optional, Sequence

from pagesense.models.group import CrossRecommendation, GroupSuggestion
from pagesense.models.page import PageContent
from pagesense.services.extractor import resolve_text
from pagesense.services.similarity import combined_similarity, cosine_similarity, jaccard_similarity
from pagesense.services.tokenizer import tokenize

logger = logging.getLogger(__name__)

_DOMAIN_RE = re.compile(r"https?://([^/]+)")

# Words must be longer than three characters to name a group
_COMMON_WORD_MIN_LENGTH = 4

UNKNOWN_DOMAIN = "unknown"
GENERAL_TOPIC = "general"
DOMAIN_GROUP_SCORE = 1.0
TOPIC_GROUP_SCORE = 0.8

COMBINED_MERGE_THRESHOLD = 0.5

# Cross-recommendation relevance weights
TEXT_RELEVANCE_WEIGHT = 0.6
KEYWORD_RELEVANCE_WEIGHT = 0.4
_HIGHLY_SIMILAR = 0.7

_MAX_AUTO_CLUSTERS = 10


def _resolve_ids(pages: Sequence[PageContent], page_ids: Optional[Sequence[str]]) -> List[str]:
    if page_ids is None:
        return [str(index) for index in range(len(pages))]
    if len(page_ids) != len(pages):
        raise ValueError(
            f"Expected {len(pages)} page ids, got {len(page_ids)}."
        )
    return [str(page_id) for page_id in page_ids]


def find_common_words(texts: Sequence[str], max_words: int = 5) -> List[str]:
    """Return up to *max_words* words ranked by how many of *texts* contain them."""
    document_frequency: Counter = Counter()
    for text in texts:
        # Count each word once per document
        words = tokenize(text, min_length=_COMMON_WORD_MIN_LENGTH, drop_stopwords=False)
        for word in dict.fromkeys(words):
            document_frequency[word] += 1
    return [word for word, _count in document_frequency.most_common(max_words)]


def extract_domain(url: str) -> str:
    match = _DOMAIN_RE.search(url)
    return match.group(1) if match else ""


def suggest_by_content(
    pages: Sequence[PageContent],
    threshold: float = 0.6,
    page_ids: Optional[Sequence[str]] = None,
) -> List[GroupSuggestion]:
    """Cluster pages whose text is similar to a seed page.

    Pages are visited in input order.  Each unassigned page seeds a group
    and absorbs every later unassigned page whose cosine similarity with the
    seed reaches *threshold*.  Members are compared with the seed only, never
    with each other, so the result depends on input order.  Every group is
    scored with *threshold* itself.  Pages left alone produce no suggestion.
    """
    ids = _resolve_ids(pages, page_ids)
    texts = [resolve_text(page) for page in pages]
    assigned = [False] * len(pages)
    suggestions: List[GroupSuggestion] = []

    for seed in range(len(pages)):
        if assigned[seed]:
            continue
        assigned[seed] = True
        members = [seed]

        for candidate in range(seed + 1, len(pages)):
            if assigned[candidate]:
                continue
            if cosine_similarity(texts[seed], texts[candidate]) >= threshold:
                members.append(candidate)
                assigned[candidate] = True

        if len(members) < 2:
            continue

        common = find_common_words([texts[m] for m in members], 3)
        name = " & ".join(common) if common else f"Group {len(suggestions) + 1}"
        suggestions.append(
            GroupSuggestion(
                group_name=name,
                description="Pages with similar content",
                page_ids=[ids[m] for m in members],
                similarity_score=threshold,
            )
        )

    logger.debug("Content grouping: %d pages -> %d groups", len(pages), len(suggestions))
    return suggestions


def _bucket_suggestions(
    buckets: Dict[str, List[str]],
    description_prefix: str,
    score: float,
) -> List[GroupSuggestion]:
    return [
        GroupSuggestion(
            group_name=key,
            description=f"{description_prefix} {key}",
            page_ids=members,
            similarity_score=score,
        )
        for key, members in buckets.items()
        if len(members) > 1
    ]


def suggest_by_domain(
    pages: Sequence[PageContent],
    page_ids: Optional[Sequence[str]] = None,
) -> List[GroupSuggestion]:
    """Group pages by the host of their first link; ``"unknown"`` when absent."""
    ids = _resolve_ids(pages, page_ids)
    buckets: Dict[str, List[str]] = {}
    for page, page_id in zip(pages, ids):
        domain = extract_domain(page.links[0]) if page.links else ""
        buckets.setdefault(domain or UNKNOWN_DOMAIN, []).append(page_id)
    return _bucket_suggestions(buckets, "Pages from", DOMAIN_GROUP_SCORE)


def suggest_by_topic(
    pages: Sequence[PageContent],
    page_ids: Optional[Sequence[str]] = None,
) -> List[GroupSuggestion]:
    """Group pages by their first keyword; ``"general"`` when they have none."""
    ids = _resolve_ids(pages, page_ids)
    buckets: Dict[str, List[str]] = {}
    for page, page_id in zip(pages, ids):
        topic = page.keywords[0] if page.keywords else GENERAL_TOPIC
        buckets.setdefault(topic, []).append(page_id)
    return _bucket_suggestions(buckets, "Pages about", TOPIC_GROUP_SCORE)


def merge_groups(
    groups: Sequence[GroupSuggestion],
    threshold: float = 0.8,
) -> List[GroupSuggestion]:
    """Merge groups whose page-id sets overlap by at least *threshold* (Jaccard).

    A single pass: each unprocessed group absorbs later unprocessed groups,
    keeping the union of page ids and the lower of the two scores.  Merged
    groups are new instances; the inputs are left untouched.
    """
    if len(groups) <= 1:
        return list(groups)

    merged: List[GroupSuggestion] = []
    processed = [False] * len(groups)

    for i, group in enumerate(groups):
        if processed[i]:
            continue
        processed[i] = True
        page_ids = list(group.page_ids)
        score = group.similarity_score
        absorbed = False

        for j in range(i + 1, len(groups)):
            if processed[j]:
                continue
            current = set(page_ids)
            other = set(groups[j].page_ids)
            union = current | other
            overlap = len(current & other) / len(union) if union else 0.0
            if overlap >= threshold:
                page_ids.extend(pid for pid in groups[j].page_ids if pid not in current)
                score = min(score, groups[j].similarity_score)
                processed[j] = True
                absorbed = True

        if absorbed:
            group = group.model_copy(update={"page_ids": page_ids, "similarity_score": score})
        merged.append(group)

    logger.debug("Merged %d groups into %d", len(groups), len(merged))
    return merged


def generate_group_name(pages: Sequence[PageContent]) -> str:
    if not pages:
        return "Empty Group"
    words = find_common_words([f"{page.title} {resolve_text(page)}" for page in pages], 2)
    if not words:
        return "Unnamed Group"
    name = " ".join(words)
    return name[0].upper() + name[1:]


def generate_group_description(pages: Sequence[PageContent]) -> str:
    if not pages:
        return "No pages in this group"
    description = f"A collection of {len(pages)} related pages"
    keywords = [keyword for page in pages for keyword in page.keywords]
    common = find_common_words(keywords, 3)
    if common:
        description += " about " + ", ".join(common)
    return description


def rank_suggestions(suggestions: Sequence[GroupSuggestion]) -> List[GroupSuggestion]:
    """Order suggestions by a quality score, best first.

    Quality favours groups of two to five pages, high similarity, and
    descriptive multi-word names.  Equal quality keeps the input order.
    """

    def quality(suggestion: GroupSuggestion) -> float:
        size = len(suggestion.page_ids)
        score = 0.0
        if 2 <= size <= 5:
            score += 0.3
        elif 5 < size <= 10:
            score += 0.2
        elif size > 10:
            score += 0.1
        score += suggestion.similarity_score * 0.4
        if len(suggestion.group_name) > 5:
            score += 0.15
        if " " in suggestion.group_name:
            score += 0.1
        if suggestion.description:
            score += 0.05
        return score

    return sorted(suggestions, key=quality, reverse=True)


def suggest_groups_combined(
    pages: Sequence[PageContent],
    threshold: float = 0.5,
    page_ids: Optional[Sequence[str]] = None,
) -> List[GroupSuggestion]:
    """Content, domain and topic suggestions, merged and ranked."""
    if not pages:
        return []
    ids = _resolve_ids(pages, page_ids)
    suggestions = (
        suggest_by_content(pages, threshold, ids)
        + suggest_by_domain(pages, ids)
        + suggest_by_topic(pages, ids)
    )
    return rank_suggestions(merge_groups(suggestions, COMBINED_MERGE_THRESHOLD))


def _recommendation_reason(common_topics: List[str], relevance: float) -> str:
    if common_topics:
        reason = f"Both pages discuss: {common_topics[0]}"
        if len(common_topics) > 1:
            reason += f" and {len(common_topics) - 1} more topics"
        return reason
    if relevance > _HIGHLY_SIMILAR:
        return "Highly similar content"
    return "Related content"


def generate_cross_recommendations(
    pages: Sequence[PageContent],
    min_relevance: float = 0.5,
    page_ids: Optional[Sequence[str]] = None,
) -> List[CrossRecommendation]:
    """Recommend page pairs whose text and keywords are related.

    Relevance is ``0.6`` combined text similarity plus ``0.4`` keyword
    Jaccard.  Each unordered pair appears at most once, best first.
    """
    ids = _resolve_ids(pages, page_ids)
    if len(pages) < 2:
        return []

    texts = [resolve_text(page) for page in pages]
    recommendations: List[CrossRecommendation] = []

    for i in range(len(pages)):
        for j in range(i + 1, len(pages)):
            relevance = min(
                1.0,
                TEXT_RELEVANCE_WEIGHT * combined_similarity(texts[i], texts[j])
                + KEYWORD_RELEVANCE_WEIGHT * jaccard_similarity(pages[i].keywords, pages[j].keywords),
            )
            if relevance < min_relevance:
                continue
            shared = set(pages[j].keywords)
            common_topics = [kw for kw in dict.fromkeys(pages[i].keywords) if kw in shared]
            recommendations.append(
                CrossRecommendation(
                    source_id=ids[i],
                    target_id=ids[j],
                    relevance_score=relevance,
                    common_topics=common_topics,
                    reason=_recommendation_reason(common_topics, relevance),
                )
            )

    recommendations.sort(key=lambda rec: rec.relevance_score, reverse=True)
    return recommendations


def _auto_cluster_count(page_count: int) -> int:
    return min(_MAX_AUTO_CLUSTERS, max(2, page_count // 3))


def detect_clusters(
    pages: Sequence[PageContent],
    num_clusters: int = 0,
    page_ids: Optional[Sequence[str]] = None,
) -> List[GroupSuggestion]:
    """Average-linkage agglomerative clustering on combined text similarity.

    Clusters merge pairwise, most similar first, until *num_clusters*
    remain (``0`` picks a count from the batch size).  Single-page clusters
    are not reported.
    """
    ids = _resolve_ids(pages, page_ids)
    if not pages:
        return []
    if num_clusters <= 0:
        num_clusters = _auto_cluster_count(len(pages))

    texts = [resolve_text(page) for page in pages]
    size = len(pages)
    matrix = [[1.0 if i == j else 0.0 for j in range(size)] for i in range(size)]
    for i in range(size):
        for j in range(i + 1, size):
            matrix[i][j] = matrix[j][i] = combined_similarity(texts[i], texts[j])

    clusters: List[List[int]] = [[i] for i in range(size)]
    while len(clusters) > max(num_clusters, 1):
        best = -1.0
        merge_a, merge_b = 0, 1
        for a in range(len(clusters)):
            for b in range(a + 1, len(clusters)):
                links = [matrix[p][q] for p in clusters[a] for q in clusters[b]]
                linkage = sum(links) / len(links)
                if linkage > best:
                    best = linkage
                    merge_a, merge_b = a, b
        clusters[merge_a].extend(clusters.pop(merge_b))
        logger.debug("Merged clusters at linkage %.3f, %d remain", best, len(clusters))

    suggestions: List[GroupSuggestion] = []
    for members in clusters:
        if len(members) < 2:
            continue
        pairs = [matrix[p][q] for p in members for q in members if p < q]
        member_pages = [pages[m] for m in members]
        suggestions.append(
            GroupSuggestion(
                group_name=generate_group_name(member_pages),
                description=generate_group_description(member_pages),
                page_ids=[ids[m] for m in members],
                similarity_score=sum(pairs) / len(pairs),
            )
        )

    return rank_suggestions(suggestions)
