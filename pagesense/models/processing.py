from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict


class ProcessingMode(str, Enum):
    BASIC = "basic"
    ENHANCED = "enhanced"
    AUTO = "auto"
    """Pick ENHANCED or BASIC per call, depending on the text length."""


class ProcessingCapabilities(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: ProcessingMode
    supports_enhanced_mode: bool
    supports_media_analysis: bool
    supports_sentiment_analysis: bool
    max_content_length: int
    supported_languages: List[str]
