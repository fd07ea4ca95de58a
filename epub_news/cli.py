"""
Command-line interface for EPUB News.

Uses Typer to provide a CLI with options for the main configuration
settings. Supports loading .env files for the feed list and source cookies.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .config import get_feed_urls, get_source_cookies, load_config
from .errors import AssemblyError, ConfigurationError, NoStrategyError
from .fetch.fetcher import build_client
from .input.feed_parser import fetch_feed
from .runner import UNKNOWN_FEED_TITLE, run_pipeline
from .selection import interactive_selector
from .sources.base import SourceOptions
from .sources.registry import resolve_or_raise

app = typer.Typer(add_completion=False, help="Fetch RSS feeds from online media and create an ebook.")
console = Console()


@app.command()
def run(
    interactive: bool = typer.Option(
        False, "--interactive", "-i", help="Select which articles to keep in the news feeds."
    ),
    path: Path | None = typer.Option(
        None, "--path", "-p", help="Directory to export the ebook to (or set DEFAULT_EXPORT_PATH)."
    ),
    title: str | None = typer.Option(None, "--title", "-t", help="Ebook title, defaults to today's date."),
    debug: bool = typer.Option(False, "--debug", "-d", help="Print feed contents while fetching."),
    details: bool = typer.Option(False, "--details", help="Log each trimming step."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Fetch every feed of RSS_FEEDS and package the articles into an ebook.

    Args:
        interactive: Ask which articles to keep for every feed
        path: Directory for the generated ebook
        title: Ebook title
        debug: Print feed contents while ingesting
        details: Log each trimming step
        config: Optional path to YAML config file
        progress: Whether to show progress bars
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Enable/disable file logging
    """
    # Load environment variables from .env if available
    load_dotenv()

    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if path is not None:
        cfg.output.path = str(path)
    if title:
        cfg.output.title = title
    if debug:
        cfg.debug = True
        cfg.logging.level = "DEBUG"
    if details:
        cfg.details = True
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file

    try:
        feed_urls = get_feed_urls()
        selector = interactive_selector(console) if interactive else None
        # Prompts and live progress bars cannot share the terminal
        output_path = run_pipeline(
            feed_urls,
            cfg,
            selector=selector,
            show_progress=progress and not interactive,
            console=console,
        )
    except (ConfigurationError, AssemblyError) as exc:
        console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(code=1) from exc

    console.print(f"\n[green]Ebook generated successfully![/green] [cyan]{output_path}[/cyan]")


@app.command("list")
def list_articles(
    feed_url: str = typer.Argument(..., help="Feed URL to list."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
):
    """List the articles currently published in a feed."""
    load_dotenv()

    cfg = load_config(str(config) if config else None)
    try:
        resolve_or_raise(feed_url, SourceOptions(cookies=get_source_cookies()))
    except NoStrategyError as exc:
        console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(code=1) from exc

    try:
        feed = asyncio.run(_read_feed(feed_url, cfg.fetch))
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        console.print(f"[bold red]Cannot read feed {escape(feed_url)}: {escape(str(exc))}[/bold red]")
        raise typer.Exit(code=1) from exc

    console.print(f"[bold magenta]{escape(feed.title or UNKNOWN_FEED_TITLE)}[/bold magenta]")
    for item in feed.items:
        published = item.published.strftime("%Y-%m-%d %H:%M") if item.published else "-"
        console.print(f"  - {escape(item.title or '')} [dim]({published})[/dim]")


async def _read_feed(feed_url: str, fetch_cfg):
    async with build_client(fetch_cfg) as client:
        return await fetch_feed(client, feed_url)


if __name__ == "__main__":
    app()
