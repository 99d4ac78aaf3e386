"""Database initialization and schema management."""

from typing import Any, Dict

from psycopg.errors import DatabaseError

from ..utils.logging import get_logger
from .connection import get_connection

logger = get_logger(__name__)


SCHEMA_SQL = """
-- Cached articles, one row per article URL
CREATE TABLE IF NOT EXISTS cached_articles (
    url TEXT PRIMARY KEY,
    title TEXT NOT NULL DEFAULT '',
    author TEXT,
    description TEXT,
    image_url TEXT,
    published_at TEXT NOT NULL DEFAULT '',
    content TEXT,
    source_id TEXT,
    source_name TEXT,
    bookmarked BOOLEAN NOT NULL DEFAULT FALSE,
    cached_at TIMESTAMPTZ NOT NULL,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Create indexes
CREATE INDEX IF NOT EXISTS idx_cached_articles_cached_at ON cached_articles(cached_at DESC);
CREATE INDEX IF NOT EXISTS idx_cached_articles_bookmarked
    ON cached_articles(cached_at DESC) WHERE bookmarked;

-- Update trigger function
CREATE OR REPLACE FUNCTION update_updated_at_column()
RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = CURRENT_TIMESTAMP;
    RETURN NEW;
END;
$$ language 'plpgsql';

-- Create update trigger
CREATE OR REPLACE TRIGGER update_cached_articles_updated_at BEFORE UPDATE ON cached_articles
    FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
"""


def validate_connection(config: Dict[str, Any]) -> bool:
    """Validate database connection."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1 AS ok")
                result = cur.fetchone()
                return result is not None and result["ok"] == 1
    except Exception as e:
        logger.error("Database connection failed: %s", e)
        return False


def init_database(config: Dict[str, Any]) -> None:
    """Initialize database schema."""
    try:
        with get_connection(config) as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
                conn.commit()
                logger.info("Database schema initialized successfully")
    except DatabaseError as e:
        logger.error("Failed to initialize database schema: %s", e)
        raise
