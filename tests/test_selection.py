from __future__ import annotations

from rich.console import Console

from epub_news import selection
from epub_news.core.types import FeedItem


def test_interactive_selector_prints_feed_title_and_keeps_accepted_items(monkeypatch):
    answers = iter([True, False, True])
    asked: list[str] = []

    def fake_ask(prompt, default=True, console=None):
        asked.append(prompt)
        return next(answers)

    monkeypatch.setattr(selection.Confirm, "ask", fake_ask)
    console = Console(record=True, width=120, color_system=None)
    items = [
        FeedItem(title="Premier", link="https://example.com/1"),
        FeedItem(title="Second [direct]", link="https://example.com/2"),
        FeedItem(title=None, link="https://example.com/3"),
    ]

    kept = selection.interactive_selector(console)("Le Monde - A la une", items)

    assert [item.link for item in kept] == ["https://example.com/1", "https://example.com/3"]
    assert "Le Monde - A la une" in console.export_text()
    assert asked[1] == "  Second \\[direct]"
    assert asked[2] == "  https://example.com/3"


def test_interactive_selector_skips_empty_feeds(monkeypatch):
    def fail_ask(*args, **kwargs):
        raise AssertionError("no prompt expected")

    monkeypatch.setattr(selection.Confirm, "ask", fail_ask)
    console = Console(record=True, width=120, color_system=None)

    assert selection.interactive_selector(console)("Vide", []) == []
    assert console.export_text() == ""
