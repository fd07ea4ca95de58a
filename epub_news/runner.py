"""
Main pipeline orchestration for EPUB News.

This module coordinates the entire workflow:
1. Resolve the media source of each feed
2. Ingest the feed
3. Deduplicate items already seen in earlier feeds
4. Let the caller select the items to keep (interactive mode)
5. Fetch and trim every article, one at a time
6. Merge each source's cover and CSS into the run aggregate
7. Assemble the ebook and print the run report

Articles are processed strictly sequentially, in feed order.
A failing article or feed is recorded and the run goes on; only a missing
feed list or a failing ebook assembly stop the run.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable

import httpx
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .config import AppConfig, get_source_cookies
from .core.dedup import dedup_items
from .core.types import (
    ExtractedArticle,
    FailureKind,
    Feed,
    FeedItem,
    Outcome,
    RunAggregate,
    TrimResult,
)
from .errors import ConfigurationError
from .fetch.fetcher import build_client, fetch_article
from .input.feed_parser import fetch_feed
from .logging_utils import LOGGER_NAME, log_event, setup_logging
from .output.epub import DocumentMetadata, assemble_epub
from .output.report import render_run_report
from .sources.base import ExtractionStrategy, SourceOptions
from .sources.registry import resolve_source


UNKNOWN_FEED_TITLE = "No feed title"

Selector = Callable[[str, list[FeedItem]], list[FeedItem]]
FeedIngestor = Callable[[httpx.AsyncClient, str], Awaitable[Feed]]
PageFetcher = Callable[[httpx.AsyncClient, str, "dict[str, str] | None"], Awaitable[str]]
SourceResolver = Callable[[str, SourceOptions], "ExtractionStrategy | None"]


class RunState(str, Enum):
    """Where the runner is within a run."""

    READY_FOR_FEED = "ready_for_feed"
    INGESTING_FEED = "ingesting_feed"
    DEDUPING_ITEMS = "deduping_items"
    EXTRACTING_ITEM = "extracting_item"
    MERGING_SOURCE_OUTPUTS = "merging_source_outputs"
    DONE = "done"


@dataclass
class _FeedResult:
    """Outputs of one feed, merged into the aggregate once the feed is done."""

    cover: str | None = None
    css: str | None = None


def _keep_all(feed_title: str, items: list[FeedItem]) -> list[FeedItem]:
    return items


class RunController:
    """Sequences feeds and articles for one run.

    The controller owns the run's SeenSet and RunAggregate; collaborators
    (feed ingestion, page fetching, source resolution, item selection) are
    injected.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None,
        options: SourceOptions | None = None,
        selector: Selector | None = None,
        ingest: FeedIngestor = fetch_feed,
        fetch: PageFetcher = fetch_article,
        resolve: SourceResolver = resolve_source,
        logger: logging.Logger | None = None,
        progress: Progress | None = None,
    ):
        self._client = client
        self._options = options or SourceOptions()
        self._selector = selector or _keep_all
        self._ingest = ingest
        self._fetch = fetch
        self._resolve = resolve
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._progress = progress
        self._seen: set[str] = set()
        self.aggregate = RunAggregate()
        self.state = RunState.READY_FOR_FEED

    def _set_state(self, state: RunState) -> None:
        self.state = state
        self._logger.debug("state -> %s", state.value)

    async def run(self, feed_urls: list[str]) -> RunAggregate:
        """Process every feed in order and return the run aggregate.

        Args:
            feed_urls: Feed URLs, processed in the given order

        Returns:
            The RunAggregate with articles, outcomes, cover and merged style

        Raises:
            ConfigurationError: If feed_urls is empty
        """
        if not feed_urls:
            raise ConfigurationError("No RSS feed configured.")

        log_event(self._logger, "Run start", event="run_start", feeds=len(feed_urls))
        for feed_url in feed_urls:
            await self._process_feed(feed_url)
            self._set_state(RunState.READY_FOR_FEED)

        self._set_state(RunState.DONE)
        log_event(
            self._logger,
            f"Run complete: {self.aggregate.succeeded} succeeded, {self.aggregate.failed} failed",
            event="run_complete",
            succeeded=self.aggregate.succeeded,
            failed=self.aggregate.failed,
        )
        return self.aggregate

    async def _process_feed(self, feed_url: str) -> None:
        strategy = self._resolve(feed_url, self._options)
        if strategy is None:
            log_event(
                self._logger,
                f"No media source for {feed_url}, skipping feed",
                level=logging.WARNING,
                event="feed_unmatched",
                feed=feed_url,
            )
            return

        self._set_state(RunState.INGESTING_FEED)
        try:
            feed = await self._ingest(self._client, feed_url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            log_event(
                self._logger,
                f"Cannot read feed {feed_url}: {exc}",
                level=logging.ERROR,
                event="feed_ingest_failed",
                feed=feed_url,
                error=f"{type(exc).__name__}: {exc}",
            )
            return

        feed_title = feed.title or UNKNOWN_FEED_TITLE
        log_event(
            self._logger,
            feed_title,
            event="feed_ingested",
            feed=feed_url,
            feed_title=feed_title,
            items=len(feed.items),
        )
        if self._options.debug:
            for item in feed.items:
                self._logger.info("  - %s (%s)", item.title, item.published)

        self._set_state(RunState.DEDUPING_ITEMS)
        items = dedup_items(feed.items, self._seen)
        log_event(
            self._logger,
            f"{len(feed.items) - len(items)} duplicate item(s) dropped",
            level=logging.DEBUG,
            event="items_deduped",
            feed=feed_url,
            kept=len(items),
            dropped=len(feed.items) - len(items),
        )
        items = self._selector(feed_title, items)

        result = await self._extract_items(strategy, items)

        self._set_state(RunState.MERGING_SOURCE_OUTPUTS)
        if self.aggregate.merge_cover(result.cover):
            log_event(self._logger, "Cover set", level=logging.DEBUG, event="cover_set", cover=result.cover)
        if self.aggregate.merge_style(result.css):
            log_event(self._logger, "Style merged", level=logging.DEBUG, event="style_merged", source=strategy.name)

    async def _extract_items(self, strategy: ExtractionStrategy, items: list[FeedItem]) -> _FeedResult:
        result = _FeedResult(css=strategy.custom_css())
        headers = strategy.fetch_options()

        task = None
        if self._progress is not None:
            task = self._progress.add_task(strategy.name, total=len(items))

        for item in items:
            self._set_state(RunState.EXTRACTING_ITEM)
            if not item.title or not item.link:
                log_event(
                    self._logger,
                    "No title or link for this news, skip",
                    level=logging.WARNING,
                    event="article_skipped",
                    link=item.link,
                    title=item.title,
                )
            else:
                if task is not None:
                    self._progress.update(task, description=item.title)
                cover = await self._extract_item(strategy, item, headers, need_cover=result.cover is None)
                if result.cover is None:
                    result.cover = cover
            if task is not None:
                self._progress.advance(task, 1)

        return result

    async def _extract_item(
        self,
        strategy: ExtractionStrategy,
        item: FeedItem,
        headers: dict[str, str] | None,
        need_cover: bool,
    ) -> str | None:
        """Fetch and trim one article, recording exactly one Outcome.

        Returns:
            A cover URL derived from this article when need_cover is set
            and the page was fetched and is not live coverage, otherwise None
        """
        title, link = item.title, item.link
        try:
            raw_html = await self._fetch(self._client, link, headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            reason = f"{type(exc).__name__}: {exc}"
            self._record_failure(item, FailureKind.TRANSPORT, reason)
            log_event(
                self._logger,
                f"{title} ({link}): {reason}",
                level=logging.WARNING,
                event="article_fetch_failed",
                title=title,
                link=link,
                error=reason,
            )
            return None

        try:
            trimmed = strategy.trim(item, raw_html)
        except Exception as exc:  # noqa: BLE001
            trimmed = TrimResult.fail(FailureKind.OTHER, f"{type(exc).__name__}: {exc}")

        if trimmed.body is None:
            kind = trimmed.failure or FailureKind.OTHER
            reason = trimmed.reason or kind.value
            self._record_failure(item, kind, reason)
            log_event(
                self._logger,
                f"{title} ({link}): {reason}",
                level=logging.WARNING,
                event="article_trim_failed",
                title=title,
                link=link,
                kind=kind.value,
                error=reason,
            )
        else:
            self.aggregate.articles.append(ExtractedArticle(title=title, body=trimmed.body, author=item.author))
            self.aggregate.outcomes.append(Outcome(title=title, link=link, success=True))
            log_event(self._logger, f"{title}: ok", event="article_extracted", title=title, link=link)

        # Live coverage pages never provide the cover
        if not need_cover or trimmed.failure is FailureKind.LIVE_STREAM:
            return None
        return strategy.extract_cover(item, raw_html)

    def _record_failure(self, item: FeedItem, kind: FailureKind, reason: str) -> None:
        self.aggregate.outcomes.append(
            Outcome(title=item.title, link=item.link, success=False, reason=reason, kind=kind)
        )


async def run_feeds(
    feed_urls: list[str],
    cfg: AppConfig,
    selector: Selector | None = None,
    progress: Progress | None = None,
    logger: logging.Logger | None = None,
) -> RunAggregate:
    """Run the controller over feed_urls with a fresh HTTP client.

    Raises:
        ConfigurationError: If feed_urls is empty
    """
    options = SourceOptions(debug=cfg.debug, details=cfg.details, cookies=get_source_cookies())
    async with build_client(cfg.fetch) as client:
        controller = RunController(
            client,
            options=options,
            selector=selector,
            logger=logger,
            progress=progress,
        )
        return await controller.run(feed_urls)


def run_pipeline(
    feed_urls: list[str],
    cfg: AppConfig,
    selector: Selector | None = None,
    show_progress: bool = True,
    console: Console | None = None,
) -> Path:
    """Run the complete pipeline and write the ebook.

    Args:
        feed_urls: Feed URLs to process, in order
        cfg: Application configuration
        selector: Optional item selection applied to each feed after dedup
        show_progress: Whether to display progress bars
        console: Rich console for output (creates default if None)

    Returns:
        Path to the generated EPUB file

    Raises:
        ConfigurationError: If no feed is configured
        AssemblyError: If the ebook cannot be written
    """
    if not feed_urls:
        raise ConfigurationError("No RSS feed configured.")

    console = console or Console()
    output_dir = Path(cfg.output.path).expanduser()
    logger = setup_logging(cfg.logging, output_dir)

    if show_progress:
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True,
        )
        with progress:
            aggregate = asyncio.run(run_feeds(feed_urls, cfg, selector, progress, logger))
    else:
        aggregate = asyncio.run(run_feeds(feed_urls, cfg, selector, None, logger))

    render_run_report(aggregate, console)

    metadata = DocumentMetadata.from_config(cfg.output)
    epub_path = asyncio.run(assemble_epub(aggregate, metadata, output_dir, cfg.fetch))
    log_event(logger, "Ebook written", event="epub_written", output=str(epub_path), articles=len(aggregate.articles))
    return epub_path
