"""
EPUB News - turn RSS feeds from online media into an ebook.

This package fetches the articles listed in one or more RSS feeds, trims
each page down to its body with source-specific scraping rules and packages
everything into a single EPUB file. A better way to read news on e-ink
tablets.

Main entry point is the CLI via `epub-news run` command.

Example:
    $ RSS_FEEDS=https://www.lemonde.fr/rss/une.xml epub-news run -p ~/Books
"""

__all__ = ["__version__", "run_feeds", "resolve_source"]
__version__ = "0.1.0"

from .runner import run_feeds
from .sources.registry import resolve_source
