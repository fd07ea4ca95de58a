"""
Run-scoped deduplication of feed items by guid.

Several feeds of the same media often list the same article. Items are
matched on the feed-supplied guid only; items without a guid always pass
through and are never remembered.
"""

from __future__ import annotations

from .types import FeedItem


def dedup_items(items: list[FeedItem], seen: set[str]) -> list[FeedItem]:
    """Drop items whose guid is already in seen, then remember the survivors.

    The first feed to list an item keeps it. seen is updated in place with
    the guids of every surviving item, before any later filtering, so an
    item the user deselects is still not offered again by a later feed.

    Args:
        items: Feed items in feed order
        seen: Guids already processed in this run (mutated)

    Returns:
        Surviving items, preserving order
    """
    kept = [item for item in items if not item.guid or item.guid not in seen]
    seen.update(item.guid for item in kept if item.guid)
    return kept
