"""Console report of a run: success/failure counts and the failed articles."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.types import RunAggregate


def render_run_report(aggregate: RunAggregate, console: Console) -> None:
    """Print the run summary and, if any, the table of failed articles.

    Failed articles are listed with their link so they can be read online.
    """
    console.print(
        "[bold]Run summary[/bold]: "
        f"total={len(aggregate.outcomes)}, success={aggregate.succeeded}, failed={aggregate.failed}"
    )
    failures = aggregate.failures
    if not failures:
        return

    table = Table(title="Failed articles", show_lines=False)
    table.add_column("Title", style="italic")
    table.add_column("Link", style="cyan", overflow="fold")
    table.add_column("Reason", style="yellow")
    for outcome in failures:
        table.add_row(escape(outcome.title), f"[link={outcome.link}]{outcome.link}[/link]", escape(outcome.reason or ""))
    console.print(table)
