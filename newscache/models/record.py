"""Cached article record persisted in the local store."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .article import Article, ArticleSource


class CachedArticleRecord(BaseModel):
    """Flattened, durable form of an article plus its bookmark flag."""

    url: str = Field(..., description="Primary key")
    title: str = Field("", description="Article title")
    author: Optional[str] = Field(None, description="Byline")
    description: Optional[str] = Field(None, description="Short summary")
    image_url: Optional[str] = Field(None, description="Thumbnail URL")
    published_at: str = Field("", description="ISO-8601 publication time as received")
    content: Optional[str] = Field(None, description="Body excerpt")
    source_id: Optional[str] = Field(None, description="Source identifier")
    source_name: Optional[str] = Field(None, description="Source display name")
    bookmarked: bool = Field(False, description="Whether the reader bookmarked it")
    cached_at: datetime = Field(..., description="Time of the last write to this record")

    class Config:
        """Pydantic config."""

        from_attributes = True

    @classmethod
    def from_article(
        cls,
        article: Article,
        cached_at: datetime,
        bookmarked: bool = False,
    ) -> "CachedArticleRecord":
        """Build a record from a network/display article."""
        return cls(
            url=article.url,
            title=article.title,
            author=article.author,
            description=article.description,
            image_url=article.image_url,
            published_at=article.published_at,
            content=article.content,
            source_id=article.source.id if article.source else None,
            source_name=article.source.name if article.source else None,
            bookmarked=bookmarked,
            cached_at=cached_at,
        )

    def to_article(self) -> Article:
        """Convert back to an article. A record without a source name has no source."""
        source = None
        if self.source_name is not None:
            source = ArticleSource(id=self.source_id, name=self.source_name)

        return Article(
            url=self.url,
            title=self.title,
            author=self.author,
            description=self.description,
            image_url=self.image_url,
            published_at=self.published_at,
            content=self.content,
            source=source,
        )
