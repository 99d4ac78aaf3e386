"""Article model as delivered by the news API and shown to readers."""

from typing import List, Optional

import pendulum
from pydantic import BaseModel, Field

UNKNOWN_AUTHOR = "Unknown Author"
NO_DESCRIPTION = "No description available"


class ArticleSource(BaseModel):
    """Publisher an article came from."""

    id: Optional[str] = Field(None, description="Source identifier")
    name: str = Field(..., description="Source display name")

    class Config:
        """Pydantic config."""

        frozen = True


class Article(BaseModel):
    """Article model.

    Immutable once constructed. Identity is the URL: two articles with the
    same URL compare equal regardless of their other fields.
    """

    url: str = Field(..., description="Article URL, unique across the cache")
    title: str = Field(..., description="Article title")
    author: Optional[str] = Field(None, description="Byline")
    description: Optional[str] = Field(None, description="Short summary")
    image_url: Optional[str] = Field(None, alias="urlToImage", description="Thumbnail URL")
    published_at: str = Field("", alias="publishedAt", description="ISO-8601 publication time")
    content: Optional[str] = Field(None, description="Body excerpt")
    source: Optional[ArticleSource] = Field(None, description="Publishing source")

    class Config:
        """Pydantic config."""

        frozen = True
        populate_by_name = True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Article):
            return NotImplemented
        return self.url == other.url

    def __hash__(self) -> int:
        return hash(self.url)

    @property
    def display_author(self) -> str:
        return self.author or UNKNOWN_AUTHOR

    @property
    def display_description(self) -> str:
        return self.description or NO_DESCRIPTION

    @property
    def formatted_date(self) -> str:
        """Publication time for display, or the raw value if it does not parse."""
        try:
            published = pendulum.parse(self.published_at)
        except (ValueError, TypeError):
            return self.published_at
        if not isinstance(published, pendulum.DateTime):
            return self.published_at
        return published.format("MMM D, YYYY h:mm A")


class NewsResponse(BaseModel):
    """Top-headlines response payload."""

    status: str = Field(..., description="'ok' or 'error'")
    total_results: int = Field(0, alias="totalResults", description="Total matching articles")
    articles: List[Article] = Field(default_factory=list, description="Articles on this page")

    class Config:
        """Pydantic config."""

        populate_by_name = True
