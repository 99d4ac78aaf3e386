"""News Cache: offline-first headline cache with bookmarks."""

__version__ = "0.1.0"
