from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentType(str, Enum):
    ARTICLE = "article"
    VIDEO = "video"
    DOCUMENTATION = "documentation"
    SOCIAL_MEDIA = "social_media"
    SHOPPING = "shopping"
    NEWS = "news"
    REFERENCE = "reference"
    OTHER = "other"


class ContentSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary_text: str
    key_points: List[str]
    content_type: ContentType
    content_type_detail: Optional[str] = None
    """Free-form label accompanying :attr:`ContentType.OTHER`."""
    language: str
    reading_time_minutes: int = Field(ge=1)
    confidence_score: float = Field(ge=0.0, le=1.0)


class CategoryInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary_category: str
    secondary_categories: List[str]
    confidence: float = Field(ge=0.0, le=1.0)
