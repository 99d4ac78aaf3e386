"""Shared fixtures: sample articles, an in-memory store and a canned remote source."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from newscache.db.articles import LocalStore
from newscache.models import Article, ArticleSource, CachedArticleRecord, NewsResponse
from newscache.remote import RemoteSource


class InMemoryStore(LocalStore):
    """Dict-backed store with the same merge rules as ArticleStore."""

    def __init__(self) -> None:
        self.records: Dict[str, CachedArticleRecord] = {}
        self.upsert_calls: List[List[Article]] = []
        self.fail_upsert = False
        self._tick = 0

    def _now(self) -> datetime:
        self._tick += 1
        return datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=self._tick)

    def _ordered(self) -> List[CachedArticleRecord]:
        return sorted(self.records.values(), key=lambda r: r.cached_at, reverse=True)

    def upsert_all(self, articles: Sequence[Article]) -> Dict[str, int]:
        self.upsert_calls.append(list(articles))
        if self.fail_upsert:
            raise RuntimeError("disk full")

        stats = {"total": len(articles), "new": 0, "updated": 0, "failed": 0}
        for article in articles:
            existing = self.records.get(article.url)
            if existing:
                self.records[article.url] = existing.model_copy(
                    update={
                        "title": article.title,
                        "author": article.author,
                        "description": article.description,
                        "cached_at": self._now(),
                    }
                )
                stats["updated"] += 1
            else:
                self.records[article.url] = CachedArticleRecord.from_article(article, self._now())
                stats["new"] += 1
        return stats

    def all_cached(self) -> List[Article]:
        return [r.to_article() for r in self._ordered()]

    def set_bookmark(self, url: str, value: bool, article: Optional[Article] = None) -> bool:
        existing = self.records.get(url)
        if existing:
            self.records[url] = existing.model_copy(update={"bookmarked": value})
        elif value:
            article = article or Article(url=url, title="")
            self.records[url] = CachedArticleRecord.from_article(
                article, self._now(), bookmarked=True
            )
        return True

    def bookmarked(self) -> List[Article]:
        return [r.to_article() for r in self._ordered() if r.bookmarked]

    def is_bookmarked(self, url: str) -> bool:
        record = self.records.get(url)
        return bool(record and record.bookmarked)

    def get_record(self, url: str) -> Optional[CachedArticleRecord]:
        return self.records.get(url)

    def count(self) -> Dict[str, int]:
        return {
            "cached": len(self.records),
            "bookmarked": sum(1 for r in self.records.values() if r.bookmarked),
        }


def sample_articles() -> List[Article]:
    return [
        Article(
            source=ArticleSource(id="test", name="Test Source"),
            author="Test Author",
            title="Test Article 1",
            description="This is a test article",
            url="https://test.com/1",
            image_url="https://test.com/image1.jpg",
            published_at="2024-01-01T00:00:00Z",
            content="Test content 1",
        ),
        Article(
            source=ArticleSource(id="test2", name="Test Source 2"),
            author="Test Author 2",
            title="Test Article 2",
            description="This is another test article",
            url="https://test.com/2",
            image_url="https://test.com/image2.jpg",
            published_at="2024-01-02T00:00:00Z",
            content="Test content 2",
        ),
    ]


class MockRemoteSource(RemoteSource):
    """Canned remote source: two sample articles, a configured response, or a configured error."""

    def __init__(
        self,
        response: Optional[NewsResponse] = None,
        error: Optional[Exception] = None,
        available: bool = True,
    ) -> None:
        self.response = response
        self.error = error
        self.available = available
        self.calls: List[Tuple[int, int]] = []

    def is_available(self) -> bool:
        return self.available

    async def fetch(self, page: int = 1, page_size: int = 20) -> NewsResponse:
        self.calls.append((page, page_size))

        if self.error is not None:
            raise self.error

        if self.response is not None:
            return self.response

        articles = sample_articles()
        return NewsResponse(status="ok", total_results=len(articles), articles=articles)


def make_article(url: str, title: str = "Headline", **kwargs) -> Article:
    """Build an article with sensible defaults."""
    defaults = {
        "author": "Staff Writer",
        "description": "A story",
        "published_at": "2024-03-01T09:30:00Z",
        "source": ArticleSource(id="wire", name="Wire Service"),
    }
    defaults.update(kwargs)
    return Article(url=url, title=title, **defaults)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def apollo() -> Article:
    return Article(
        url="https://example.com/apollo",
        title="Apollo Landing",
        author="J. Doe",
        description="history",
        published_at="1969-07-20T20:17:40Z",
    )


@pytest.fixture
def articles() -> List[Article]:
    return [
        make_article("https://example.com/1", "Markets rally on rate cut", author="A. Smith"),
        make_article("https://example.com/2", "Storm hits coast", author=None, description=None),
        make_article("https://example.com/3", "New telescope images", description="Deep field of MARS"),
    ]
