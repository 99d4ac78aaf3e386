"""Article commands: fetch, cached, search, status."""

import asyncio
from typing import Optional

import typer

from ..config import Config
from .common import build_coordinator, console, print_articles


def fetch_command(
    page: Optional[int] = typer.Option(None, "--page", "-p", help="Page to fetch", min=1),
    page_size: Optional[int] = typer.Option(
        None,
        "--page-size",
        "-n",
        help="Articles per page (max 100)",
        min=1,
        max=100,
    ),
) -> None:
    """Fetch top headlines, falling back to the cache when offline."""
    config = Config()

    if page is None:
        page = config.config.fetch_defaults.page
    if page_size is None:
        page_size = config.config.fetch_defaults.page_size

    coordinator = build_coordinator(config)
    result = asyncio.run(coordinator.fetch_articles_with_status(page, page_size))

    if not result.is_fresh:
        console.print(f"[yellow]⚠️  Showing cached articles: {result.reason}[/yellow]")

    bookmarked = {a.url for a in coordinator.get_bookmarked_articles()}
    title = "Top Headlines" if result.is_fresh else "Cached Headlines"
    print_articles(result.articles, title, bookmarked=bookmarked)

    if result.is_fresh and result.total_results is not None:
        console.print(f"[dim]Page {page} • {len(result.articles)} of {result.total_results} results[/dim]")


def cached_command() -> None:
    """List cached articles, newest first, without touching the network."""
    coordinator = build_coordinator(Config())
    bookmarked = {a.url for a in coordinator.get_bookmarked_articles()}
    print_articles(coordinator.get_cached_articles(), "Cached Articles", bookmarked=bookmarked)


def search_command(
    query: str = typer.Argument(..., help="Text to look for in title, author or description"),
    bookmarks: bool = typer.Option(
        False,
        "--bookmarks",
        "-b",
        help="Search bookmarked articles instead of the whole cache",
    ),
) -> None:
    """Search cached or bookmarked articles."""
    coordinator = build_coordinator(Config())

    if bookmarks:
        articles = coordinator.get_bookmarked_articles()
    else:
        articles = coordinator.get_cached_articles()

    matches = coordinator.search_articles(query, articles)
    print_articles(matches, f"Results for '{query}'")


def status_command() -> None:
    """Show connectivity and cache size."""
    config = Config()
    coordinator = build_coordinator(config)

    if coordinator.remote.is_available():
        console.print("[green]✅ Network: online[/green]")
    else:
        console.print("[yellow]⚠️  Network: offline[/yellow]")

    counts = coordinator.store.count()
    console.print(f"Cached articles: {counts['cached']}")
    console.print(f"Bookmarked: {counts['bookmarked']}")
