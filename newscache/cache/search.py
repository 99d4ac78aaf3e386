"""In-memory article search."""

from typing import Iterable, List

from ..models import Article


def search_articles(query: str, articles: Iterable[Article]) -> List[Article]:
    """
    Filter articles by a case-insensitive substring.

    A blank query returns every article. Otherwise an article matches when
    the query appears in its title, author or description (using the display
    fallbacks for missing values). Input order is preserved.
    """
    articles = list(articles)
    if not query or not query.strip():
        return articles

    needle = query.lower()
    return [
        article
        for article in articles
        if needle in article.title.lower()
        or needle in article.display_author.lower()
        or needle in article.display_description.lower()
    ]
