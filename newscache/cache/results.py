"""Fetch outcome models."""

from datetime import datetime
from typing import List, Optional

import pendulum
from pydantic import BaseModel, Field

from ..models import Article


class FetchResult(BaseModel):
    """Articles from a fetch, tagged with whether they came from the network."""

    articles: List[Article] = Field(default_factory=list, description="Articles to show")
    is_fresh: bool = Field(..., description="True if fetched live, False if served from cache")
    reason: Optional[str] = Field(None, description="Why the cache was used")
    total_results: Optional[int] = Field(None, description="Total results reported by the API")
    fetched_at: datetime = Field(default_factory=lambda: pendulum.now("UTC"))

    @classmethod
    def fresh(cls, articles: List[Article], total_results: Optional[int] = None) -> "FetchResult":
        return cls(articles=articles, is_fresh=True, total_results=total_results)

    @classmethod
    def stale(cls, articles: List[Article], reason: str) -> "FetchResult":
        return cls(articles=articles, is_fresh=False, reason=reason)
