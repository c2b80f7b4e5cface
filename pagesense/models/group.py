from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RelevanceScore(BaseModel):
    """Relevance between exactly two pages."""

    model_config = ConfigDict(frozen=True)

    score: float = Field(ge=0.0, le=1.0)
    common_keywords: List[str]


class GroupSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    group_name: str
    description: str
    page_ids: List[str]
    similarity_score: float = Field(ge=0.0, le=1.0)


class CrossRecommendation(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_id: str
    target_id: str
    relevance_score: float = Field(ge=0.0, le=1.0)
    common_topics: List[str]
    reason: str
