"""
Input parsing.

This package turns RSS feeds into FeedItem lists.
"""

from .feed_parser import fetch_feed, parse_feed

__all__ = ["fetch_feed", "parse_feed"]
