"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from epub_news import cli


runner = CliRunner()


def test_run_without_feeds_exits_with_error(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.delenv("RSS_FEEDS", raising=False)

    result = runner.invoke(cli.app, ["run"])

    assert result.exit_code == 1
    assert "RSS_FEEDS" in result.output


def test_run_passes_options_to_pipeline(monkeypatch, tmp_path):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)
    monkeypatch.setenv("RSS_FEEDS", "https://www.gamekult.com/feed.xml")
    captured = {}

    def fake_run_pipeline(feed_urls, cfg, selector=None, show_progress=True, console=None):
        captured.update(feeds=feed_urls, cfg=cfg, selector=selector, show_progress=show_progress)
        return Path(cfg.output.path) / f"{cfg.output.title}.epub"

    monkeypatch.setattr(cli, "run_pipeline", fake_run_pipeline)

    result = runner.invoke(cli.app, ["run", "-p", str(tmp_path), "-t", "Revue", "--no-progress"])

    assert result.exit_code == 0, result.output
    assert captured["feeds"] == ["https://www.gamekult.com/feed.xml"]
    assert captured["cfg"].output.title == "Revue"
    assert captured["cfg"].output.path == str(tmp_path)
    assert captured["selector"] is None
    assert captured["show_progress"] is False
    assert "Ebook generated successfully" in result.output


def test_list_unknown_feed_exits_with_error(monkeypatch):
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)

    result = runner.invoke(cli.app, ["list", "https://example.com/feed.xml"])

    assert result.exit_code == 1
    assert "No media source" in result.output
