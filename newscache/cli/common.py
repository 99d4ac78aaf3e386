"""Shared CLI helpers."""

from typing import List, Optional

from rich.console import Console
from rich.table import Table

from ..cache import ArticleCacheCoordinator
from ..config import Config
from ..db import ArticleStore
from ..models import Article
from ..remote import create_remote_source

console = Console()


def build_coordinator(config: Config) -> ArticleCacheCoordinator:
    """Wire the configured remote source and store into a coordinator."""
    remote = create_remote_source(
        config.get_news_api_config(),
        config.config.network.model_dump(),
    )
    store = ArticleStore(config.get_db_config())
    return ArticleCacheCoordinator(remote, store)


def print_articles(
    articles: List[Article],
    title: str,
    bookmarked: Optional[set] = None,
) -> None:
    """Print articles as a table."""
    if not articles:
        console.print("[yellow]No articles.[/yellow]")
        return

    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Author", style="magenta")
    table.add_column("Published", style="green")
    table.add_column("URL", style="blue")
    if bookmarked is not None:
        table.add_column("★", style="yellow")

    for index, article in enumerate(articles, start=1):
        row = [
            str(index),
            article.title,
            article.display_author,
            article.formatted_date,
            article.url,
        ]
        if bookmarked is not None:
            row.append("★" if article.url in bookmarked else "")
        table.add_row(*row)

    console.print(table)


def find_article(articles: List[Article], url: str) -> Optional[Article]:
    """Find an article by URL."""
    for article in articles:
        if article.url == url:
            return article
    return None
