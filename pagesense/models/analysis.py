from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from pagesense.models.summary import CategoryInfo, ContentSummary

EntityType = Literal["person", "organization", "location", "email", "url", "other"]
SentimentLabel = Literal["positive", "negative", "neutral"]


class EntityInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    entity_type: EntityType
    frequency: int = Field(ge=1)
    confidence: float = Field(ge=0.0, le=1.0)


class TopicInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    main_topic: str
    sub_topics: List[str]
    confidence: float = Field(ge=0.0, le=1.0)


class SentimentInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: SentimentLabel
    score: float = Field(ge=-1.0, le=1.0)


class PageStructure(BaseModel):
    """Structural counts derived from a page's markup."""

    model_config = ConfigDict(frozen=True)

    headings: List[str]
    heading_count: int
    paragraph_count: int
    link_count: int
    image_count: int
    list_count: int
    table_count: int
    form_count: int
    has_navigation: bool
    word_count: int


class ContentAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: ContentSummary
    category: CategoryInfo
    keywords: List[str]
    entities: List[EntityInfo]
    topics: TopicInfo
    sentiment: Optional[SentimentInfo] = None
    structure: Optional[PageStructure] = None
