"""Article cache coordinator: fetch, fall back, persist, search, bookmark."""

import asyncio
from typing import Iterable, List

from ..db.articles import LocalStore
from ..models import Article
from ..remote.errors import Unavailable
from ..remote.newsapi import RemoteSource
from ..utils.logging import get_logger
from .results import FetchResult
from .search import search_articles

logger = get_logger(__name__)


class ArticleCacheCoordinator:
    """The single entry point front ends use to read and bookmark articles.

    Holds no state of its own between calls; everything durable lives in the
    local store.
    """

    def __init__(self, remote: RemoteSource, store: LocalStore) -> None:
        """Initialize coordinator."""
        self.remote = remote
        self.store = store

    async def fetch_articles(self, page: int = 1, page_size: int = 20) -> List[Article]:
        """
        Fetch a page of articles, or the cached articles if that fails.

        Never raises on network failure. Callers that need to know whether
        the data is live should use ``fetch_articles_with_status``.
        """
        result = await self.fetch_articles_with_status(page, page_size)
        return result.articles

    async def fetch_articles_with_status(self, page: int = 1, page_size: int = 20) -> FetchResult:
        """
        Fetch a page of articles and report where they came from.

        On success the batch is written to the store and the fetched articles
        are returned as received. On any failure the whole cache is returned,
        newest first.
        """
        try:
            if not await asyncio.to_thread(self.remote.is_available):
                raise Unavailable()
            response = await self.remote.fetch(page, page_size)
        except Exception as e:
            logger.warning("Fetch failed, returning cached articles: %s", e)
            cached = await asyncio.to_thread(self.store.all_cached)
            return FetchResult.stale(cached, reason=str(e))

        articles = list(response.articles)
        await self._persist(articles)
        return FetchResult.fresh(articles, total_results=response.total_results)

    async def _persist(self, articles: List[Article]) -> None:
        """Write a fetched batch to the store; failures never reach the caller."""
        if not articles:
            return
        try:
            await asyncio.to_thread(self.store.upsert_all, articles)
        except Exception:
            logger.exception("Failed to cache %d fetched articles", len(articles))

    def get_cached_articles(self) -> List[Article]:
        """Cached articles without attempting the network."""
        return self.store.all_cached()

    def search_articles(self, query: str, articles: Iterable[Article]) -> List[Article]:
        return search_articles(query, articles)

    def bookmark_article(self, article: Article) -> None:
        self.store.set_bookmark(article.url, True, article)

    def remove_bookmark(self, article: Article) -> None:
        self.store.set_bookmark(article.url, False, article)

    def toggle_bookmark(self, article: Article) -> bool:
        """Flip the bookmark flag and return the new state."""
        if self.is_article_bookmarked(article):
            self.remove_bookmark(article)
            return False
        self.bookmark_article(article)
        return True

    def get_bookmarked_articles(self) -> List[Article]:
        return self.store.bookmarked()

    def is_article_bookmarked(self, article: Article) -> bool:
        return self.store.is_bookmarked(article.url)
