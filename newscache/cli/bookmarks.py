"""Bookmark management commands."""

from typing import Optional

import pendulum
import typer

from ..cache import ArticleCacheCoordinator
from ..config import Config
from ..models import Article
from .common import build_coordinator, console, find_article, print_articles

bookmarks_app = typer.Typer(help="Manage bookmarked articles")


def _resolve_article(coordinator: ArticleCacheCoordinator, url: str, title: Optional[str]) -> Article:
    """Look the URL up in the cache, or build an article from --title."""
    article = find_article(coordinator.get_cached_articles(), url)
    if article is not None:
        return article
    if title:
        return Article(url=url, title=title)

    console.print(f"[red]Article not cached: {url}. Pass --title to bookmark it anyway.[/red]")
    raise typer.Exit(1)


@bookmarks_app.command("list")
def bookmarks_list() -> None:
    """List bookmarked articles."""
    coordinator = build_coordinator(Config())
    articles = coordinator.get_bookmarked_articles()

    if not articles:
        console.print("[yellow]No bookmarks yet.[/yellow]")
        return

    print_articles(articles, "Bookmarks")


@bookmarks_app.command("show")
def bookmarks_show(
    url: str = typer.Argument(..., help="Article URL"),
) -> None:
    """Show the cached record for an article, bookmark state included."""
    coordinator = build_coordinator(Config())
    record = coordinator.store.get_record(url)

    if record is None:
        console.print(f"[red]Article not cached: {url}[/red]")
        raise typer.Exit(1)

    article = record.to_article()
    console.print(f"[bold cyan]{article.title or article.url}[/bold cyan]")
    console.print(f"URL: {record.url}")
    console.print(f"Author: {article.display_author}")
    if record.source_name:
        console.print(f"Source: {record.source_name}")
    console.print(f"Published: {article.formatted_date}")
    console.print(f"Cached: {pendulum.instance(record.cached_at).format('YYYY-MM-DD HH:mm:ss')}")
    console.print(f"Bookmarked: {'yes' if record.bookmarked else 'no'}")


@bookmarks_app.command("add")
def bookmarks_add(
    url: str = typer.Argument(..., help="Article URL"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Title for an uncached article"),
) -> None:
    """Bookmark an article."""
    coordinator = build_coordinator(Config())
    article = _resolve_article(coordinator, url, title)

    coordinator.bookmark_article(article)
    console.print(f"[green]✅ Bookmarked: {article.title or article.url}[/green]")


@bookmarks_app.command("remove")
def bookmarks_remove(
    url: str = typer.Argument(..., help="Article URL"),
) -> None:
    """Remove a bookmark. The article stays in the cache."""
    coordinator = build_coordinator(Config())
    article = Article(url=url, title="")

    if not coordinator.is_article_bookmarked(article):
        console.print(f"[red]Not bookmarked: {url}[/red]")
        raise typer.Exit(1)

    coordinator.remove_bookmark(article)
    console.print(f"[green]✅ Removed bookmark: {url}[/green]")


@bookmarks_app.command("toggle")
def bookmarks_toggle(
    url: str = typer.Argument(..., help="Article URL"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Title for an uncached article"),
) -> None:
    """Bookmark an article, or remove its bookmark if it has one."""
    coordinator = build_coordinator(Config())
    article = _resolve_article(coordinator, url, title)

    if coordinator.toggle_bookmark(article):
        console.print(f"[green]✅ Bookmarked: {article.title or article.url}[/green]")
    else:
        console.print(f"[green]✅ Removed bookmark: {url}[/green]")
