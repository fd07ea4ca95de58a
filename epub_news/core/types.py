"""
Core data types for EPUB News.

This module defines the data structures that flow through a run:
- FeedItem: One RSS entry as returned by feed ingestion
- Feed: A parsed feed (title + ordered items)
- TrimResult: Tagged result of trimming one article page
- Outcome: The recorded success/failure for one attempted article
- ExtractedArticle: An article body ready to be packaged
- RunAggregate: Everything a run produced, handed to the ebook assembler
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class FailureKind(str, Enum):
    """Category of a per-article failure."""

    TRANSPORT = "Transport"
    LIVE_STREAM = "LiveStream"
    EMPTY = "Empty"
    OTHER = "Other"


@dataclass
class FeedItem:
    """One syndication entry.

    Attributes:
        title: The article headline, may be missing in malformed feeds
        link: URL of the full article page
        guid: Feed-supplied unique identifier, used for cross-feed dedup
        author: Optional author name
        published: Optional publish timestamp
        media_url: URL of the item's media:content picture, used for the cover
    """
    title: str | None = None
    link: str | None = None
    guid: str | None = None
    author: str | None = None
    published: datetime | None = None
    media_url: str | None = None


@dataclass
class Feed:
    """A feed after ingestion.

    Attributes:
        url: The feed URL that was parsed
        title: The channel title, if the feed declares one
        items: Entries in the order the feed lists them
    """
    url: str
    title: str | None = None
    items: list[FeedItem] = field(default_factory=list)


@dataclass(frozen=True)
class TrimResult:
    """Result of trimming a raw article page.

    Either body will be populated (success) or failure will be populated,
    but never both. detail carries the cause for FailureKind.OTHER.
    """
    body: str | None = None
    failure: FailureKind | None = None
    detail: str | None = None

    @classmethod
    def ok(cls, body: str) -> TrimResult:
        return cls(body=body)

    @classmethod
    def fail(cls, failure: FailureKind, detail: str | None = None) -> TrimResult:
        return cls(failure=failure, detail=detail)

    @property
    def reason(self) -> str | None:
        if self.failure is None:
            return None
        if self.failure is FailureKind.OTHER and self.detail:
            return self.detail
        return self.failure.value


@dataclass(frozen=True)
class Outcome:
    """Recorded result for one attempted article.

    Attributes:
        title: Article title from the feed
        link: Article URL from the feed
        success: Whether the article made it into the ebook
        reason: Stringified failure cause, None on success
        kind: Failure category, None on success
    """
    title: str
    link: str
    success: bool
    reason: str | None = None
    kind: FailureKind | None = None


@dataclass(frozen=True)
class ExtractedArticle:
    """Article body ready for packaging.

    Attributes:
        title: Chapter title
        body: Sanitized HTML fragment of the article
        author: Optional author shown under the title
    """
    title: str
    body: str
    author: str | None = None


@dataclass
class RunAggregate:
    """Everything produced by a run.

    Owned by the runner for the run's duration. The cover is set at most
    once (first feed that provides one wins) and every distinct custom style
    fragment is appended to style at most once.
    """
    articles: list[ExtractedArticle] = field(default_factory=list)
    outcomes: list[Outcome] = field(default_factory=list)
    cover: str | None = None
    style: str = ""

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.success)

    @property
    def failures(self) -> list[Outcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    def merge_cover(self, cover: str | None) -> bool:
        """Set the cover unless one is already set. Returns True when it was set."""
        if self.cover or not cover:
            return False
        self.cover = cover
        return True

    def merge_style(self, css: str | None) -> bool:
        """Append css unless that exact text is already present. Returns True when appended."""
        if not css or css in self.style:
            return False
        self.style += css
        return True
