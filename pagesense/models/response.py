from typing import List

from pydantic import BaseModel

from pagesense.models.group import CrossRecommendation, GroupSuggestion, RelevanceScore
from pagesense.models.processing import ProcessingMode


class KeywordsResponse(BaseModel):
    keywords: List[str]


class SimilarityResponse(BaseModel):
    summary_similarity: float
    """Weighted similarity of the two pages' generated summaries."""
    text_similarity: float
    """Combined cosine / bigram / trigram similarity of the full texts."""
    relevance: RelevanceScore


class GroupResponse(BaseModel):
    strategy: str
    pages_analyzed: int
    suggestions: List[GroupSuggestion]


class RecommendationResponse(BaseModel):
    pages_analyzed: int
    recommendations: List[CrossRecommendation]


class ModeResponse(BaseModel):
    mode: ProcessingMode
