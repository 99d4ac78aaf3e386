"""Data models for the news cache."""

from .article import NO_DESCRIPTION, UNKNOWN_AUTHOR, Article, ArticleSource, NewsResponse
from .record import CachedArticleRecord

__all__ = [
    "Article",
    "ArticleSource",
    "CachedArticleRecord",
    "NewsResponse",
    "NO_DESCRIPTION",
    "UNKNOWN_AUTHOR",
]
