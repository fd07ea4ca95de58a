"""
Exceptions for the failures that stop a run.

Per-article and per-feed problems never surface as exceptions past the
runner: they are recorded as Outcome entries instead (see core.types).
Only the errors below reach the CLI.
"""

from __future__ import annotations


class EpubNewsError(Exception):
    """Base class for all epub_news errors."""


class ConfigurationError(EpubNewsError):
    """Raised before any network access when the run cannot start (e.g. no feeds)."""


class NoStrategyError(EpubNewsError):
    """Raised when no registered source can handle a feed URL."""

    def __init__(self, feed_url: str):
        super().__init__(
            f"No media source implemented for {feed_url}. "
            "Are you sure it matches one of the registered sources?"
        )
        self.feed_url = feed_url


class AssemblyError(EpubNewsError):
    """Raised when the ebook cannot be written. Nothing is left on disk."""
