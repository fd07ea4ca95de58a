"""
Core domain models and business logic.

This package contains data types and logic that are
independent of any specific pipeline stage.
"""

from .types import (
    ExtractedArticle,
    FailureKind,
    Feed,
    FeedItem,
    Outcome,
    RunAggregate,
    TrimResult,
)
from .dedup import dedup_items

__all__ = [
    "ExtractedArticle",
    "FailureKind",
    "Feed",
    "FeedItem",
    "Outcome",
    "RunAggregate",
    "TrimResult",
    "dedup_items",
]
