from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class PageContent(BaseModel):
    """Already-fetched content of one web page, the input to every analysis call."""

    model_config = ConfigDict(frozen=True)

    html: str = ""
    text: str = ""  # plain text; derived from ``html`` when empty
    title: str = ""
    description: Optional[str] = None
    keywords: List[str] = []
    images: List[str] = []
    links: List[str] = []
