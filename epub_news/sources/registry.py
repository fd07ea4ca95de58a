"""Source registry mapping feed URLs to extraction strategies."""

from __future__ import annotations

import logging
from typing import Callable

from ..errors import NoStrategyError
from .base import ExtractionStrategy, SourceOptions
from .gamekult import GamekultSource
from .le_monde import LeMondeSource


logger = logging.getLogger(__name__)

FeedPredicate = Callable[[str], bool]
StrategyBuilder = Callable[[str, SourceOptions], ExtractionStrategy]

# Evaluated in order, first match wins
_SOURCE_REGISTRY: list[tuple[FeedPredicate, StrategyBuilder]] = [
    (LeMondeSource.matches, LeMondeSource),
    (GamekultSource.matches, GamekultSource),
]


def register_source(predicate: FeedPredicate, builder: StrategyBuilder) -> None:
    """Register a new source after the built-in ones."""
    _SOURCE_REGISTRY.append((predicate, builder))


def resolve_source(feed_url: str, options: SourceOptions | None = None) -> ExtractionStrategy | None:
    """Build the strategy handling a feed URL.

    Args:
        feed_url: The feed URL to resolve
        options: Options passed to the strategy constructor

    Returns:
        The first matching strategy, or None if no source handles the URL
    """
    options = options or SourceOptions()
    for predicate, builder in _SOURCE_REGISTRY:
        if predicate(feed_url):
            return builder(feed_url, options)
    logger.error(
        "No media source matches %s. Is the source implemented, or is the url malformed?",
        feed_url,
    )
    return None


def resolve_or_raise(feed_url: str, options: SourceOptions | None = None) -> ExtractionStrategy:
    """Like resolve_source, but raise NoStrategyError when nothing matches."""
    strategy = resolve_source(feed_url, options)
    if strategy is None:
        raise NoStrategyError(feed_url)
    return strategy
