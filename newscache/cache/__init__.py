"""Offline-first article cache."""

from .coordinator import ArticleCacheCoordinator
from .results import FetchResult
from .search import search_articles

__all__ = ["ArticleCacheCoordinator", "FetchResult", "search_articles"]
