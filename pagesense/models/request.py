from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from pagesense.models.page import PageContent
from pagesense.models.processing import ProcessingMode

# Pairwise strategies are quadratic in the page count
MAX_PAGES_PER_REQUEST = 200

GroupStrategy = Literal["content", "domain", "topic", "combined", "clusters"]


class AnalyzeRequest(BaseModel):
    content: PageContent


class HtmlRequest(BaseModel):
    html: str


class SimilarityRequest(BaseModel):
    a: PageContent
    b: PageContent


class GroupRequest(BaseModel):
    pages: List[PageContent] = Field(max_length=MAX_PAGES_PER_REQUEST)
    page_ids: Optional[List[str]] = Field(
        default=None,
        description="Identifiers echoed back in suggestions; defaults to page positions.",
    )
    strategy: GroupStrategy = "combined"
    """Grouping strategy.

    ``"content"``
        Seed-based clustering on text cosine similarity.
    ``"domain"`` / ``"topic"``
        Bucket by first link host / first keyword.
    ``"combined"`` (default)
        All three above, merged and ranked.
    ``"clusters"``
        Average-linkage agglomerative clustering.
    """
    threshold: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Similarity threshold for content-based strategies (strategy default when omitted).",
    )
    merge_threshold: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="When set, overlapping suggestions are merged at this page-id overlap.",
    )
    num_clusters: int = Field(
        default=0,
        ge=0,
        le=50,
        description="Target cluster count for the 'clusters' strategy (0 = automatic).",
    )


class RecommendationRequest(BaseModel):
    pages: List[PageContent] = Field(max_length=MAX_PAGES_PER_REQUEST)
    page_ids: Optional[List[str]] = None
    min_relevance: float = Field(default=0.5, ge=0.0, le=1.0)


class ModeRequest(BaseModel):
    mode: ProcessingMode
