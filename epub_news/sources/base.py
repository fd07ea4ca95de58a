"""
Extraction strategy interface for media sources.

Every supported media implements ExtractionStrategy and is registered in
sources.registry with a predicate over the feed URL. A strategy knows how
to request article pages from its media, how to trim a raw page down to
the article body, where to find a cover picture and which extra CSS its
markup needs in the ebook.

The helpers at the bottom of this module cover the steps most sources
share: removing noise nodes and picking the first known content container.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable

from bs4 import BeautifulSoup, Tag

from ..core.types import FeedItem, TrimResult


@dataclass
class SourceOptions:
    """Options shared by every strategy of a run.

    Attributes:
        debug: Print feed contents while ingesting
        details: Log each trimming step
        cookies: Session cookies keyed by source name (e.g. "le_monde")
    """
    debug: bool = False
    details: bool = False
    cookies: dict[str, str] = field(default_factory=dict)


class ExtractionStrategy(ABC):
    """Abstract base class for media source strategies.

    Concrete strategies are constructed with the feed URL they matched and
    the run's SourceOptions. They hold no per-run state: the cover and
    style bookkeeping belongs to the runner.
    """

    name: str = "source"

    def __init__(self, feed_url: str, options: SourceOptions):
        self.feed_url = feed_url
        self.options = options

    @staticmethod
    @abstractmethod
    def matches(feed_url: str) -> bool:
        """Tell whether this strategy handles the given feed URL."""
        raise NotImplementedError

    def fetch_options(self) -> dict[str, str] | None:
        """Request headers to send with every article request of this source."""
        return None

    @abstractmethod
    def trim(self, item: FeedItem, raw_html: str) -> TrimResult:
        """Reduce a raw article page to the HTML fragment kept in the ebook.

        Args:
            item: The feed entry the page was fetched for
            raw_html: The whole page as downloaded

        Returns:
            TrimResult with the body, or the failure kind (LiveStream, Empty, Other)
        """
        raise NotImplementedError

    @abstractmethod
    def extract_cover(self, item: FeedItem, raw_html: str) -> str | None:
        """Return a cover picture URL derived from this article, if any."""
        raise NotImplementedError

    def custom_css(self) -> str | None:
        """Extra CSS injected in the ebook when this source contributed articles."""
        return None


def parse_html(raw_html: str) -> BeautifulSoup:
    return BeautifulSoup(raw_html, "html.parser")


def remove_nodes(root: BeautifulSoup | Tag, selectors: Iterable[str]) -> int:
    """Remove every node matching one of the CSS selectors.

    Returns:
        Number of removed nodes
    """
    removed = 0
    for selector in selectors:
        for node in root.select(selector):
            # already gone with a removed ancestor
            if node.decomposed:
                continue
            node.decompose()
            removed += 1
    return removed


def first_container(root: BeautifulSoup | Tag, selectors: Iterable[str]) -> Tag | None:
    """Return the first node matching the selectors, tried in order."""
    for selector in selectors:
        node = root.select_one(selector)
        if node is not None:
            return node
    return None
