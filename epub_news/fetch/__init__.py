"""
Article fetching.

This package handles the HTTP side of a run: one shared client
and a single-attempt page download per article.
"""

from .fetcher import build_client, fetch_article

__all__ = [
    "build_client",
    "fetch_article",
]
