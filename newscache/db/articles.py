"""Article storage: the durable cache behind the coordinator."""

import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

import pendulum
import psycopg

from ..models import Article, CachedArticleRecord
from ..utils.logging import get_logger
from .connection import get_connection

logger = get_logger(__name__)

# Every ArticleStore in the process shares one writer.
_store_lock = threading.RLock()


UPSERT_SQL = """
INSERT INTO cached_articles (
    url, title, author, description, image_url, published_at,
    content, source_id, source_name, bookmarked, cached_at
) VALUES (
    %(url)s, %(title)s, %(author)s, %(description)s, %(image_url)s, %(published_at)s,
    %(content)s, %(source_id)s, %(source_name)s, FALSE, %(cached_at)s
)
ON CONFLICT (url) DO UPDATE SET
    title = EXCLUDED.title,
    author = EXCLUDED.author,
    description = EXCLUDED.description,
    cached_at = EXCLUDED.cached_at
RETURNING (xmax = 0) AS inserted
"""

BOOKMARK_SQL = """
INSERT INTO cached_articles (
    url, title, author, description, image_url, published_at,
    content, source_id, source_name, bookmarked, cached_at
) VALUES (
    %(url)s, %(title)s, %(author)s, %(description)s, %(image_url)s, %(published_at)s,
    %(content)s, %(source_id)s, %(source_name)s, TRUE, %(cached_at)s
)
ON CONFLICT (url) DO UPDATE SET bookmarked = TRUE
"""

UNBOOKMARK_SQL = "UPDATE cached_articles SET bookmarked = FALSE WHERE url = %s"

RECORD_COLUMNS = """
    url, title, author, description, image_url, published_at,
    content, source_id, source_name, bookmarked, cached_at
"""


class LocalStore(ABC):
    """Durable keyed storage for cached articles and their bookmark flag."""

    @abstractmethod
    def upsert_all(self, articles: Sequence[Article]) -> Dict[str, int]:
        """Insert or refresh a batch of articles in one transaction."""
        pass

    @abstractmethod
    def all_cached(self) -> List[Article]:
        """All cached articles, most recently written first."""
        pass

    @abstractmethod
    def set_bookmark(self, url: str, value: bool, article: Optional[Article] = None) -> bool:
        """Set or clear the bookmark flag for ``url``."""
        pass

    @abstractmethod
    def bookmarked(self) -> List[Article]:
        """Bookmarked articles, most recently written first."""
        pass

    @abstractmethod
    def is_bookmarked(self, url: str) -> bool:
        """Whether ``url`` is bookmarked."""
        pass

    @abstractmethod
    def get_record(self, url: str) -> Optional[CachedArticleRecord]:
        """The stored record for ``url``, or None when it is not cached."""
        pass


class ArticleStore(LocalStore):
    """PostgreSQL-backed article cache.

    All operations, reads included, are serialized through a process-wide
    lock. Reads never raise: a database fault is logged and reported as an
    empty result.
    """

    def __init__(
        self,
        db_config: Dict[str, Any],
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize article store.

        Args:
            db_config: Database configuration dict (see ``Config.get_db_config``)
            clock: Source of ``cached_at`` timestamps, defaults to current UTC time
        """
        self.db_config = db_config
        self._clock = clock or (lambda: pendulum.now("UTC"))

    def _params(self, article: Article) -> Dict[str, Any]:
        record = CachedArticleRecord.from_article(article, cached_at=self._clock())
        return record.model_dump(exclude={"bookmarked"})

    def upsert_all(self, articles: Sequence[Article]) -> Dict[str, int]:
        """
        Upsert a batch of articles.

        Existing rows get their title, author, description and cached_at
        refreshed; the bookmark flag is left alone. New rows start
        unbookmarked. A row that fails is rolled back to its savepoint and
        skipped, and the rest of the batch commits as one transaction.

        Returns:
            Statistics dictionary
        """
        stats = {
            "total": len(articles),
            "new": 0,
            "updated": 0,
            "failed": 0,
        }

        if not articles:
            return stats

        with _store_lock:
            with get_connection(self.db_config) as conn:
                with conn.transaction():
                    with conn.cursor() as cur:
                        for article in articles:
                            try:
                                with conn.transaction():
                                    cur.execute(UPSERT_SQL, self._params(article))
                                    row = cur.fetchone()
                            except psycopg.Error as e:
                                logger.warning("Failed to cache article %s: %s", article.url, e)
                                stats["failed"] += 1
                                continue

                            if row and row["inserted"]:
                                stats["new"] += 1
                            else:
                                stats["updated"] += 1

        logger.debug(
            "Cached %d articles (%d new, %d updated, %d failed)",
            stats["total"],
            stats["new"],
            stats["updated"],
            stats["failed"],
        )
        return stats

    def _fetch_records(self, query: str, params: Sequence[Any] = ()) -> List[CachedArticleRecord]:
        with _store_lock:
            try:
                with get_connection(self.db_config) as conn:
                    with conn.cursor() as cur:
                        cur.execute(query, params)
                        rows = cur.fetchall()
            except psycopg.Error as e:
                logger.error("Error reading cached articles: %s", e)
                return []

        return [CachedArticleRecord(**row) for row in rows]

    def all_cached(self) -> List[Article]:
        """Get all cached articles, newest first."""
        records = self._fetch_records(
            f"SELECT {RECORD_COLUMNS} FROM cached_articles ORDER BY cached_at DESC"
        )
        return [record.to_article() for record in records]

    def bookmarked(self) -> List[Article]:
        """Get bookmarked articles, newest first."""
        records = self._fetch_records(
            f"""
            SELECT {RECORD_COLUMNS} FROM cached_articles
            WHERE bookmarked
            ORDER BY cached_at DESC
            """
        )
        return [record.to_article() for record in records]

    def get_record(self, url: str) -> Optional[CachedArticleRecord]:
        """Get the stored record for ``url``, if any."""
        records = self._fetch_records(
            f"SELECT {RECORD_COLUMNS} FROM cached_articles WHERE url = %s",
            (url,),
        )
        return records[0] if records else None

    def is_bookmarked(self, url: str) -> bool:
        """Check bookmark status for ``url``."""
        with _store_lock:
            try:
                with get_connection(self.db_config) as conn:
                    with conn.cursor() as cur:
                        cur.execute(
                            """
                            SELECT EXISTS (
                                SELECT 1 FROM cached_articles
                                WHERE url = %s AND bookmarked
                            ) AS bookmarked
                            """,
                            (url,),
                        )
                        row = cur.fetchone()
            except psycopg.Error as e:
                logger.error("Error checking bookmark status for %s: %s", url, e)
                return False

        return bool(row and row["bookmarked"])

    def count(self) -> Dict[str, int]:
        """Count cached and bookmarked rows."""
        with _store_lock:
            try:
                with get_connection(self.db_config) as conn:
                    with conn.cursor() as cur:
                        cur.execute(
                            """
                            SELECT
                                COUNT(*) AS cached,
                                COUNT(*) FILTER (WHERE bookmarked) AS bookmarked
                            FROM cached_articles
                            """
                        )
                        row = cur.fetchone()
            except psycopg.Error as e:
                logger.error("Error counting cached articles: %s", e)
                return {"cached": 0, "bookmarked": 0}

        return {"cached": row["cached"], "bookmarked": row["bookmarked"]}

    def set_bookmark(self, url: str, value: bool, article: Optional[Article] = None) -> bool:
        """
        Set or clear the bookmark flag.

        Bookmarking an unknown URL creates its record from ``article`` (or a
        bare record holding only the URL). Clearing an unknown URL does
        nothing. Records are never deleted here.

        Returns:
            False if the database rejected the write, True otherwise
        """
        if value:
            if article is None:
                article = Article(url=url, title="")
            elif article.url != url:
                raise ValueError(f"Article URL {article.url!r} does not match {url!r}")
            query, params = BOOKMARK_SQL, self._params(article)
        else:
            query, params = UNBOOKMARK_SQL, (url,)

        with _store_lock:
            try:
                with get_connection(self.db_config) as conn:
                    with conn.transaction():
                        with conn.cursor() as cur:
                            cur.execute(query, params)
            except psycopg.Error as e:
                action = "bookmarking" if value else "removing bookmark for"
                logger.error("Error %s %s: %s", action, url, e)
                return False

        return True
