"""
RSS feed ingestion.

Downloads a feed with the run's HTTP client and parses it with feedparser
into Feed / FeedItem objects. Entries missing a title or link are kept:
the runner decides to skip them so the skip is visible to the user.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import feedparser
import httpx

from ..core.types import Feed, FeedItem


logger = logging.getLogger(__name__)


async def fetch_feed(client: httpx.AsyncClient, url: str) -> Feed:
    """Download and parse a feed.

    Args:
        client: Shared HTTP client
        url: The feed URL

    Returns:
        Parsed Feed with items in feed order

    Raises:
        httpx.HTTPError: If the feed cannot be downloaded
    """
    resp = await client.get(url)
    resp.raise_for_status()
    return parse_feed(resp.text, url)


def parse_feed(text: str, url: str) -> Feed:
    """Parse feed XML into a Feed.

    Args:
        text: Raw feed document
        url: URL the feed was downloaded from

    Returns:
        Parsed Feed, possibly with no items if the document is not a feed
    """
    parsed = feedparser.parse(text)
    if getattr(parsed, "bozo", 0):
        logger.warning("rss parse bozo=%s error=%s", parsed.bozo, getattr(parsed, "bozo_exception", None))

    title = parsed.feed.get("title") or None
    return Feed(url=url, title=title, items=[_parse_entry(entry) for entry in parsed.entries])


def _parse_entry(entry: dict[str, Any]) -> FeedItem:
    guid = entry.get("id") or entry.get("guid")
    return FeedItem(
        title=_clean(entry.get("title")),
        link=_clean(entry.get("link")),
        guid=str(guid) if guid else None,
        author=_clean(entry.get("author")),
        published=_to_dt(entry),
        media_url=_media_url(entry),
    )


def _media_url(entry: dict[str, Any]) -> str | None:
    """Return the url attribute of the first media:content element."""
    for media in entry.get("media_content") or []:
        url = media.get("url")
        if url:
            return str(url)
    return None


def _to_dt(entry: dict[str, Any]) -> datetime | None:
    # feedparser provides time_struct as entry.published_parsed / updated_parsed
    ts = entry.get("published_parsed") or entry.get("updated_parsed")
    if not ts:
        return None
    return datetime(*ts[:6], tzinfo=timezone.utc)


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = " ".join(str(value).split())
    return text or None
