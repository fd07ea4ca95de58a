"""Interactive selection of the articles to keep in the ebook."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from .core.types import FeedItem


def interactive_selector(console: Console | None = None):
    """Build a selector asking, for each item, whether to keep it.

    The feed title is printed before its prompts. Every article is kept by
    default: pressing Return accepts it.

    Args:
        console: Rich console used for the prompts

    Returns:
        A callable taking the feed title and its deduplicated items and
        returning the chosen subset, in feed order
    """
    console = console or Console()

    def select(feed_title: str, items: list[FeedItem]) -> list[FeedItem]:
        if not items:
            return items
        console.print(f"[bold magenta]{escape(feed_title)}[/bold magenta]")
        console.print("Select the articles you want to read")
        return [
            item
            for item in items
            if Confirm.ask(f"  {escape(item.title or item.link or 'untitled')}", default=True, console=console)
        ]

    return select
